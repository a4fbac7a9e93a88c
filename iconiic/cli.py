"""Command line entry point: parse, load, assemble and write one icon file."""

from __future__ import annotations

import contextlib
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.text import Text

from iconiic import parse
from iconiic.assembler import assemble
from iconiic.config import COMMANDS, DEBUG_ENV, EXAMPLES, LOG_DATE_FORMAT, LOG_FORMAT, OPTIONS, TITLE, USAGE
from iconiic.engine import ContainerKind, SourceImage
from iconiic.errors import IconiicError, IconIoError, show
from iconiic.loader import Loader, load_sources

logger = logging.getLogger(__name__)

console: Console = Console(soft_wrap=True)


def print_help(out: Optional[Console] = None) -> None:
    out = out or console
    out.print(Text(TITLE, style="green"), highlight=False)
    out.print()
    out.print(Text("Usage:", style="blue"))
    out.print(Text(f"   {USAGE}", style="green"), highlight=False)
    out.print()
    for flag, description in COMMANDS:
        out.print(Text.assemble((f"   {flag:<20}", "green"), description), highlight=False)
    out.print()
    out.print(Text("Options:", style="blue"))
    for flag, description in OPTIONS:
        out.print(Text.assemble((f"   {flag:<20}", "green"), description), highlight=False)
    out.print()
    out.print(Text("Examples:", style="blue"))
    for example in EXAMPLES:
        out.print(Text(f"   {example}", style="green"), highlight=False)


def create_icon(
    entries: parse.Entries,
    kind: ContainerKind,
    output_path: Path,
    load: Loader = SourceImage.from_file,
) -> None:
    """Build the icon described by ``entries`` and write it to ``output_path``.

    Nothing touches ``output_path`` until every entry has been committed, and
    a failed write removes whatever was written.
    """
    sources = load_sources(entries.values(), load)
    icon = assemble(
        kind,
        ((options, sources[path]) for options, path in entries.items()),
        capacity=len(sources),
    )

    opened = False
    try:
        with open(output_path, "wb") as handle:
            opened = True
            icon.write(handle)
    except OSError as err:
        if opened:
            with contextlib.suppress(OSError):
                output_path.unlink()
        raise IconIoError.from_os_error(err, output_path) from err
    logger.debug("wrote %d entries to %s", len(icon), output_path)


def _configure_logging() -> None:
    debug = os.environ.get(DEBUG_ENV, "0").strip().lower() in {"1", "true", "yes", "on"}
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )


def main(argv: Optional[List[str]] = None) -> int:
    _configure_logging()
    tokens = sys.argv[1:] if argv is None else argv

    try:
        command = parse.args(tokens)
        if isinstance(command, parse.Help):
            print_help()
            return 0
        create_icon(command.entries, command.kind, command.output_path)
    except IconiicError as err:
        show(err)
        return 1

    path = command.output_path
    console.print(
        Text.assemble(
            ("[Iconiic]", "green"),
            " File ",
            (path.name, "blue"),
            " saved at ",
            (str((Path.cwd() / path).resolve()), "blue"),
        )
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
