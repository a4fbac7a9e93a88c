"""Diagnostics: the closed set of failures iconiic reports, and their messages."""

from __future__ import annotations

import errno
from enum import Enum
from os import PathLike
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.text import Text

from iconiic.config import HELP_HINT, ICO_MAX_SIZE, VALID_ICNS_SIZES
from iconiic.engine import (
    ContainerKind,
    EngineError,
    InvalidSizeError,
    SizeAlreadyIncludedError,
)

console: Console = Console(stderr=True, soft_wrap=True)

_ERROR_LABELS = {
    ContainerKind.ICO: "[Ico Error]",
    ContainerKind.ICNS: "[Icns Error]",
    ContainerKind.PNG_SEQUENCE: "[Png Error]",
}


class SyntaxKind(Enum):
    MISSING_OUTPUT_FLAG = "missing-output-flag"
    MISSING_OUTPUT_PATH = "missing-output-path"
    UNEXPECTED_TOKEN = "unexpected-token"
    UNSUPPORTED_OUTPUT_TYPE = "unsupported-output-type"
    UNSUPPORTED_PNG_OUTPUT = "unsupported-png-output"


class FormatKind(Enum):
    INVALID_SIZE = "invalid-size"
    DUPLICATE_SIZE = "duplicate-size"


class IoKind(Enum):
    NOT_FOUND = "not-found"
    PERMISSION_DENIED = "permission-denied"
    BUSY = "busy"
    INVALID_DATA = "invalid-data"
    INVALID_INPUT = "invalid-input"


_ERRNO_KINDS = {
    errno.ENOENT: IoKind.NOT_FOUND,
    errno.EACCES: IoKind.PERMISSION_DENIED,
    errno.EPERM: IoKind.PERMISSION_DENIED,
    errno.EBUSY: IoKind.BUSY,
    errno.ETXTBSY: IoKind.BUSY,
    errno.EADDRINUSE: IoKind.BUSY,
    errno.EADDRNOTAVAIL: IoKind.BUSY,
    errno.EINVAL: IoKind.INVALID_INPUT,
    errno.EISDIR: IoKind.INVALID_INPUT,
}


class IconiicError(Exception):
    """Base class for every diagnostic the command line reports.

    Subclasses override :meth:`render` to produce their one-line message.
    """

    def render(self) -> Text:
        raise NotImplementedError(f"{type(self).__name__} does not render a message")


class CommandSyntaxError(IconiicError):
    def __init__(self, kind: SyntaxKind, value: Optional[str] = None) -> None:
        super().__init__(kind.value if value is None else f"{kind.value}: {value}")
        self.kind = kind
        self.value = value

    def render(self) -> Text:
        label = ("[Syntax Error]", "red")
        if self.kind is SyntaxKind.MISSING_OUTPUT_FLAG:
            return Text.assemble(
                label,
                " Missing output details. Type ",
                (HELP_HINT, "blue"),
                " for more details on Iconiic's usage.",
            )
        if self.kind is SyntaxKind.MISSING_OUTPUT_PATH:
            return Text.assemble(
                label,
                " Missing output path: No path for the output file was specified. Type ",
                (HELP_HINT, "blue"),
                " for more details on Iconiic's usage.",
            )
        if self.kind is SyntaxKind.UNEXPECTED_TOKEN:
            return Text.assemble(label, " Unexpected token: ", (str(self.value), "red"), ".")
        ext = f".{(self.value or '').lower()}"
        if self.kind is SyntaxKind.UNSUPPORTED_OUTPUT_TYPE:
            return Text.assemble(
                ("[IO Error]", "red"),
                " Files with the ",
                (ext, "blue"),
                " file extension are not supported.",
            )
        if self.kind is SyntaxKind.UNSUPPORTED_PNG_OUTPUT:
            return Text.assemble(
                ("[IO Error]", "red"),
                " The ",
                ("-png", "blue"),
                " option only supports the ",
                (".zip", "blue"),
                " file format. The ",
                (ext, "blue"),
                " file extension is not supported.",
            )
        raise AssertionError(f"unmapped syntax error: {self.kind!r}")


class IconFormatError(IconiicError):
    def __init__(self, kind: FormatKind, container: ContainerKind, width: int, height: int) -> None:
        super().__init__(f"{kind.value}: {width}x{height} ({container.value})")
        self.kind = kind
        self.container = container
        self.width = width
        self.height = height

    @classmethod
    def from_engine(cls, err: EngineError) -> "IconFormatError":
        if isinstance(err, InvalidSizeError):
            return cls(FormatKind.INVALID_SIZE, err.kind, err.width, err.height)
        if isinstance(err, SizeAlreadyIncludedError):
            return cls(FormatKind.DUPLICATE_SIZE, err.kind, err.width, err.height)
        raise err

    def render(self) -> Text:
        label = (_ERROR_LABELS[self.container], "red")
        size = f"{self.width}x{self.height}"
        if self.kind is FormatKind.DUPLICATE_SIZE:
            return Text.assemble(
                label,
                f" The {size} size was requested more than once: each size can only be included once per icon.",
            )
        if self.container is ContainerKind.ICNS:
            if self.width == self.height:
                return Text.assemble(
                    label,
                    " The ",
                    (".icns", "blue"),
                    f" file format only supports {VALID_ICNS_SIZES} icons: {size} icons aren't supported.",
                )
            return Text.assemble(
                label,
                " The ",
                (".icns", "blue"),
                f" file format only supports square icons: {size} icons aren't supported.",
            )
        if self.container is ContainerKind.ICO:
            return Text.assemble(
                label,
                " The ",
                (".ico", "blue"),
                f" file format only supports icons of dimensions up to {ICO_MAX_SIZE}x{ICO_MAX_SIZE}:"
                f" {size} icons aren't supported.",
            )
        return Text.assemble(label, f" Png sequence entries must have positive dimensions: {size} isn't supported.")


class IconIoError(IconiicError):
    def __init__(self, kind: IoKind, path: Union[str, PathLike]) -> None:
        super().__init__(f"{kind.value}: {path}")
        self.kind = kind
        self.path = Path(path)

    @classmethod
    def from_os_error(cls, err: OSError, path: Union[str, PathLike]) -> "IconIoError":
        """Tag ``err`` with ``path``; errors outside the handled kinds are re-raised."""
        kind = _ERRNO_KINDS.get(err.errno)
        if kind is None:
            raise err
        return cls(kind, path)

    def render(self) -> Text:
        label = ("[IO Error]", "red")
        path = (str(self.path), "blue")
        if self.kind is IoKind.NOT_FOUND:
            return Text.assemble(label, " File ", path, " could not be found on disk.")
        if self.kind is IoKind.PERMISSION_DENIED:
            return Text.assemble(label, " Permission denied: File ", path, " is inaccessible.")
        if self.kind is IoKind.BUSY:
            return Text.assemble(
                label, " File ", path, " is unavailable. Try closing any application that may be using it."
            )
        if self.kind in (IoKind.INVALID_DATA, IoKind.INVALID_INPUT):
            return Text.assemble(label, " File ", path, " couldn't be parsed. This file may be corrupted.")
        raise AssertionError(f"unmapped io error: {self.kind!r}")


def show(error: IconiicError, out: Optional[Console] = None) -> None:
    (out or console).print(error.render())
