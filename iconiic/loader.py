from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, Iterable

from iconiic.engine import SourceImage
from iconiic.errors import IconIoError, IoKind

logger = logging.getLogger(__name__)

Loader = Callable[[Path], SourceImage]


def load_sources(paths: Iterable[Path], load: Loader = SourceImage.from_file) -> Dict[Path, SourceImage]:
    """Decode every distinct path once; the first failure aborts the run."""
    sources: Dict[Path, SourceImage] = {}
    for path in paths:
        if path in sources:
            continue
        try:
            sources[path] = load(path)
        except OSError as err:
            # Unreadable and undecodable sources are reported as missing.
            raise IconIoError(IoKind.NOT_FOUND, path) from err
        logger.debug("loaded %s", path)
    return sources
