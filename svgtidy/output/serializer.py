"""Serialize a forest through the token writer."""
import io
from typing import IO, List, Optional

from ..document.node import Node, iter_events
from ..utils.logger import get_logger
from .svg_writer import EmitterConfig, SVGWriter

logger = get_logger(__name__)


def write(nodes: List[Node], target: IO[str], config: Optional[EmitterConfig] = None) -> None:
    """
    Stream the forest to `target` in document order.

    Events are produced lazily and written one by one; a failing write
    aborts immediately with WriteError.
    """
    writer = SVGWriter(target, config)
    count = 0
    for event in iter_events(nodes):
        writer.write(event)
        count += 1
    logger.debug(f"Wrote {count} markup events")


def to_string(nodes: List[Node], config: Optional[EmitterConfig] = None) -> str:
    buffer = io.StringIO()
    write(nodes, buffer, config)
    return buffer.getvalue()
