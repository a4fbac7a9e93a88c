"""Pillow-backed image decoding, resampling and icon container encoding."""

from __future__ import annotations

import struct
import zipfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from io import BytesIO
from os import PathLike
from pathlib import Path
from typing import BinaryIO, Union

from PIL import Image, UnidentifiedImageError

from iconiic.config import ICNS_TYPES, ICO_MAX_SIZE, ZIP_DATE_TIME

StrPath = Union[str, PathLike]


class ContainerKind(str, Enum):
    ICO = "ico"
    ICNS = "icns"
    PNG_SEQUENCE = "png"


@dataclass(frozen=True)
class EntryOptions:
    width: int
    height: int
    interpolate: bool = False
    proportional: bool = False

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height


class EngineError(Exception):
    """Base class for size constraint failures raised by a container."""


class InvalidSizeError(EngineError):
    def __init__(self, kind: ContainerKind, width: int, height: int) -> None:
        super().__init__(f"{width}x{height} is not a valid {kind.value} size")
        self.kind = kind
        self.width = width
        self.height = height


class SizeAlreadyIncludedError(EngineError):
    def __init__(self, kind: ContainerKind, width: int, height: int) -> None:
        super().__init__(f"{width}x{height} is already included in the {kind.value} container")
        self.kind = kind
        self.width = width
        self.height = height


class DecodeError(OSError):
    """A source file exists but Pillow could not decode it."""

    def __init__(self, path: StrPath) -> None:
        super().__init__(f"cannot decode image {path}")
        self.path = Path(path)


class SourceImage:
    """A decoded RGBA image, never mutated after construction."""

    def __init__(self, path: Path, image: Image.Image) -> None:
        self.path = path
        self.image = image

    @classmethod
    def from_file(cls, path: StrPath) -> "SourceImage":
        try:
            with Image.open(path) as image:
                return cls(Path(path), image.convert("RGBA"))
        except UnidentifiedImageError as err:
            raise DecodeError(path) from err
        except OSError as err:
            # Pillow reports truncated or corrupt data without an errno.
            if err.errno is None:
                raise DecodeError(path) from err
            raise

    def render(self, options: EntryOptions) -> Image.Image:
        resample = Image.Resampling.BILINEAR if options.interpolate else Image.Resampling.NEAREST
        if not options.proportional:
            return self.image.resize(options.size, resample)

        scale = min(options.width / self.image.width, options.height / self.image.height)
        fitted = self.image.resize(
            (max(1, round(self.image.width * scale)), max(1, round(self.image.height * scale))),
            resample,
        )
        canvas = Image.new("RGBA", options.size, (0, 0, 0, 0))
        canvas.paste(
            fitted,
            ((options.width - fitted.width) // 2, (options.height - fitted.height) // 2),
            fitted,
        )
        return canvas


def _png_bytes(image: Image.Image) -> bytes:
    buf = BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


class Icon(ABC):
    """An in-memory icon container holding PNG encoded entries."""

    kind: ContainerKind

    def __init__(self, capacity: int = 0) -> None:
        # Advisory only: the number of distinct sources, recorded for logging.
        self.capacity = capacity
        self._entries: list[tuple[EntryOptions, bytes]] = []

    @staticmethod
    def ico(capacity: int = 0) -> "Icon":
        return IcoIcon(capacity)

    @staticmethod
    def icns(capacity: int = 0) -> "Icon":
        return IcnsIcon(capacity)

    @staticmethod
    def png_sequence(capacity: int = 0) -> "Icon":
        return PngSequenceIcon(capacity)

    @classmethod
    def for_kind(cls, kind: ContainerKind, capacity: int = 0) -> "Icon":
        if kind is ContainerKind.ICO:
            return cls.ico(capacity)
        if kind is ContainerKind.ICNS:
            return cls.icns(capacity)
        return cls.png_sequence(capacity)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def sizes(self) -> list[tuple[int, int]]:
        return [options.size for options, _ in self._entries]

    def accepts(self, width: int, height: int) -> bool:
        return width > 0 and height > 0

    def add_entry(self, options: EntryOptions, source: SourceImage) -> None:
        if not self.accepts(options.width, options.height):
            raise InvalidSizeError(self.kind, options.width, options.height)
        if options.size in self.sizes:
            raise SizeAlreadyIncludedError(self.kind, options.width, options.height)
        self._entries.append((options, _png_bytes(source.render(options))))

    def write(self, sink: BinaryIO) -> None:
        sink.write(self.to_bytes())

    @abstractmethod
    def to_bytes(self) -> bytes:
        """Serialize every committed entry in this container's format."""


class IcoIcon(Icon):
    kind = ContainerKind.ICO

    def accepts(self, width: int, height: int) -> bool:
        return 0 < width <= ICO_MAX_SIZE and 0 < height <= ICO_MAX_SIZE

    def to_bytes(self) -> bytes:
        header = struct.pack("<HHH", 0, 1, len(self._entries))
        offset = len(header) + 16 * len(self._entries)
        directory = b""
        payload = b""
        for options, data in self._entries:
            # A stored dimension of 0 means 256.
            directory += struct.pack(
                "<BBBBHHII",
                options.width % ICO_MAX_SIZE,
                options.height % ICO_MAX_SIZE,
                0,
                0,
                1,
                32,
                len(data),
                offset + len(payload),
            )
            payload += data
        return header + directory + payload


class IcnsIcon(Icon):
    kind = ContainerKind.ICNS

    def accepts(self, width: int, height: int) -> bool:
        return width == height and width in ICNS_TYPES

    def to_bytes(self) -> bytes:
        body = b"".join(
            ICNS_TYPES[options.width] + struct.pack(">I", 8 + len(data)) + data
            for options, data in self._entries
        )
        return b"icns" + struct.pack(">I", 8 + len(body)) + body


class PngSequenceIcon(Icon):
    kind = ContainerKind.PNG_SEQUENCE

    def to_bytes(self) -> bytes:
        buf = BytesIO()
        with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as archive:
            for options, data in self._entries:
                info = zipfile.ZipInfo(f"{options.width}x{options.height}.png", date_time=ZIP_DATE_TIME)
                info.compress_type = zipfile.ZIP_DEFLATED
                info.external_attr = 0o644 << 16
                archive.writestr(info, data)
        return buf.getvalue()
