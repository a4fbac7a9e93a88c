"""Turns command line tokens into a :class:`Help` request or a :class:`BuildIcon` job."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from iconiic.config import MAX_DIMENSION
from iconiic.engine import ContainerKind, EntryOptions
from iconiic.errors import CommandSyntaxError, SyntaxKind

logger = logging.getLogger(__name__)

HELP_FLAGS = ("-h", "--help")
ENTRY_FLAG = "-e"
INTERPOLATE_FLAGS = ("-i", "--interpolate")
PROPORTIONAL_FLAGS = ("-p", "--proportional")
OUTPUT_FLAG = "-o"
PNG_FLAG = "-png"

OUTPUT_KINDS = {"ico": ContainerKind.ICO, "icns": ContainerKind.ICNS}

_SIZE = re.compile(r"([0-9]+)(?:[xX]([0-9]+))?")

Entries = Dict[EntryOptions, Path]


@dataclass(frozen=True)
class Help:
    pass


@dataclass
class BuildIcon:
    entries: Entries
    kind: ContainerKind
    output_path: Path


Command = Union[Help, BuildIcon]


@dataclass
class _Group:
    path: Path
    sizes: List[Tuple[str, int, int]] = field(default_factory=list)
    interpolate: bool = False
    proportional: bool = False

    @property
    def flagged(self) -> bool:
        return self.interpolate or self.proportional


def _unexpected(token: str) -> CommandSyntaxError:
    return CommandSyntaxError(SyntaxKind.UNEXPECTED_TOKEN, token)


def parse_size(token: str) -> Optional[Tuple[int, int]]:
    """Parse ``N`` or ``WxH``; ``None`` when the token is not a positive size."""
    match = _SIZE.fullmatch(token)
    if match is None:
        return None
    width = int(match.group(1))
    height = int(match.group(2) or match.group(1))
    if not (0 < width <= MAX_DIMENSION and 0 < height <= MAX_DIMENSION):
        return None
    return width, height


def _commit(group: Optional[_Group], entries: Entries, token: str) -> None:
    if group is None:
        return
    if not group.sizes:
        raise _unexpected(token)
    for size_token, width, height in group.sizes:
        options = EntryOptions(width, height, group.interpolate, group.proportional)
        if options in entries:
            raise _unexpected(size_token)
        entries[options] = group.path


def _output_kind(flag: str, output: str) -> ContainerKind:
    ext = Path(output).suffix[1:]
    if flag == PNG_FLAG:
        if ext.lower() != "zip":
            raise CommandSyntaxError(SyntaxKind.UNSUPPORTED_PNG_OUTPUT, ext)
        return ContainerKind.PNG_SEQUENCE
    if ext.lower() not in OUTPUT_KINDS:
        raise CommandSyntaxError(SyntaxKind.UNSUPPORTED_OUTPUT_TYPE, ext)
    return OUTPUT_KINDS[ext.lower()]


def args(tokens: Sequence[str]) -> Command:
    """Parse ``tokens`` (without the program name) in a single left to right pass."""
    entries: Entries = {}
    group: Optional[_Group] = None
    index = 0

    while index < len(tokens):
        token = tokens[index]

        if token in HELP_FLAGS:
            return Help()

        if token == ENTRY_FLAG:
            _commit(group, entries, token)
            if index + 1 >= len(tokens):
                raise _unexpected(token)
            group = _Group(Path(tokens[index + 1]))
            index += 2
            continue

        if token in (OUTPUT_FLAG, PNG_FLAG):
            _commit(group, entries, token)
            if index + 1 >= len(tokens):
                raise CommandSyntaxError(SyntaxKind.MISSING_OUTPUT_PATH)
            output = tokens[index + 1]
            kind = _output_kind(token, output)
            if index + 2 < len(tokens):
                raise _unexpected(tokens[index + 2])
            logger.debug("parsed %d entries for %s output %s", len(entries), kind.value, output)
            return BuildIcon(entries, kind, Path(output))

        if group is None:
            raise _unexpected(token)

        if token in INTERPOLATE_FLAGS:
            if not group.sizes or group.interpolate:
                raise _unexpected(token)
            group.interpolate = True
        elif token in PROPORTIONAL_FLAGS:
            if not group.sizes or group.proportional:
                raise _unexpected(token)
            group.proportional = True
        else:
            size = parse_size(token)
            if size is None or group.flagged:
                raise _unexpected(token)
            group.sizes.append((token, *size))
        index += 1

    raise CommandSyntaxError(SyntaxKind.MISSING_OUTPUT_FLAG)
