from __future__ import annotations

import logging
from typing import Iterable, Tuple

from iconiic.engine import ContainerKind, EngineError, EntryOptions, Icon, SourceImage
from iconiic.errors import IconFormatError, IconIoError

logger = logging.getLogger(__name__)


def assemble(kind: ContainerKind, pairs: Iterable[Tuple[EntryOptions, SourceImage]], capacity: int = 0) -> Icon:
    """Build a container of ``kind`` and commit every pair, stopping at the first rejected entry.

    ``capacity`` is the number of distinct sources feeding the container.
    """
    icon = Icon.for_kind(kind, capacity)
    logger.debug("building %s container from %d sources", kind.value, icon.capacity)
    for options, source in pairs:
        try:
            icon.add_entry(options, source)
        except EngineError as err:
            raise IconFormatError.from_engine(err) from err
        except OSError as err:
            raise IconIoError.from_os_error(err, source.path) from err
        logger.debug("committed %dx%d from %s", options.width, options.height, source.path)
    return icon
