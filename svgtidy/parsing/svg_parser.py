"""Build the document tree from a markup event stream."""
from typing import Iterable, Iterator, List, Optional, Tuple

from ..document.names import Tag
from ..document.node import Comment, Element, Node, ProcessingInstruction, Text
from ..errors import (
    MismatchedEndTag,
    MissingDocumentRoot,
    MissingEndTag,
    TokenizerError,
    UnderlyingStreamError,
)
from ..utils.logger import get_logger
from . import events
from .tokenizer import Source, tokenize

logger = get_logger(__name__)


def _leaf_for(event: events.Event) -> Optional[Node]:
    """Leaf node for a non-tag event; None for events that build nothing."""
    if isinstance(event, events.Characters):
        return Text(event.text)
    if isinstance(event, events.CData):
        return Text(event.text, is_cdata=True)
    if isinstance(event, events.Comment):
        return Comment(event.text)
    if isinstance(event, events.ProcessingInstruction):
        return ProcessingInstruction(event.name, event.data)
    if isinstance(event, events.StartDocument):
        return None
    raise TypeError(f"Unsupported markup event: {event!r}")


class SVGParser:
    """
    Assemble a forest from a pull-based event stream.

    The parser looks at one event at a time (`current`). A start tag opens a
    container that collects child nodes until the end tag at the same depth
    arrives; any other event becomes a leaf. Open containers live on an
    explicit stack, so nesting depth is not bounded by the interpreter's
    recursion limit. No recovery is attempted: the first structural problem
    raises a ParseError.
    """

    def __init__(self, source: Iterable[events.Event]):
        self._events: Iterator[events.Event] = iter(source)
        self.current: Optional[events.Event] = None

    def _advance(self) -> None:
        try:
            self.current = next(self._events, None)
        except (TokenizerError, OSError, UnicodeError) as exc:
            raise UnderlyingStreamError(exc) from exc

    def parse_document(self) -> List[Node]:
        self._advance()
        nodes: List[Node] = []
        while self.current is not None:
            node = self._parse_node()
            if node is not None:
                nodes.append(node)

        if not any(isinstance(node, Element) for node in nodes):
            raise MissingDocumentRoot()

        logger.debug(f"Parsed {len(nodes)} top-level nodes")
        return nodes

    def _parse_node(self) -> Optional[Node]:
        event = self.current
        if isinstance(event, events.StartElement):
            return self._parse_element()
        if isinstance(event, events.EndElement):
            raise MismatchedEndTag(None, str(event.name))
        self._advance()
        return _leaf_for(event)

    def _parse_element(self) -> Element:
        open_elements: List[Tuple[events.StartElement, List[Node]]] = []

        while True:
            event = self.current
            if event is None:
                raise MissingEndTag(str(open_elements[-1][0].name))

            if isinstance(event, events.StartElement):
                open_elements.append((event, []))
            elif isinstance(event, events.EndElement):
                start, children = open_elements.pop()
                if str(event.name) != str(start.name):
                    raise MismatchedEndTag(str(start.name), str(event.name))
                element = Element(
                    Tag.from_name(start.name.local_name),
                    start.namespace,
                    list(start.attributes),
                    children,
                )
                if not open_elements:
                    self._advance()
                    return element
                open_elements[-1][1].append(element)
            else:
                leaf = _leaf_for(event)
                if leaf is not None:
                    open_elements[-1][1].append(leaf)

            self._advance()


def parse(event_stream: Iterable[events.Event]) -> List[Node]:
    """Build a forest from markup events."""
    return SVGParser(event_stream).parse_document()


def parse_svg(source: Source) -> List[Node]:
    """Tokenize raw markup (str, bytes or a readable file) and build its forest."""
    return parse(tokenize(source))
