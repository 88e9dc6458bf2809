"""Shared helpers for the test suite."""
from lxml import etree

from svgtidy.output.serializer import to_string
from svgtidy.parsing.svg_parser import parse_svg


def optimize_string(text: str, pass_class, config: dict = None) -> str:
    """Parse `text`, run a single pass over it and serialize the result."""
    nodes = parse_svg(text)
    return to_string(pass_class(config or {}).apply(nodes))


def assert_well_formed(text: str) -> None:
    """Read the markup back with an independent XML parser."""
    etree.fromstring(text.encode("utf-8"))
