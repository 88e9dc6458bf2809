"""
Pull-based markup event stream over the expat push parser.

expat calls handlers while it is fed; the handlers queue events and
`tokenize` hands them out one at a time, feeding the next chunk only when
the queue runs dry.
"""
import re
from collections import deque
from typing import IO, Deque, Dict, Iterator, List, Optional, Union
from xml.parsers import expat

from ..document.attributes import Attribute, Namespace, QName, declaration_prefix
from ..document.names import XML_NS, XMLNS_NAME, XMLNS_NS
from ..errors import MismatchedEndTag, TokenizerError
from ..utils.logger import get_logger
from . import events

logger = get_logger(__name__)

CHUNK_SIZE = 64 * 1024

# Bytes of already parsed input kept to name the end tag of a tag mismatch.
HISTORY_SIZE = 4096

END_TAG = re.compile(rb"</\s*([^\s>]+)")

Source = Union[str, bytes, IO]


def _split_name(raw: str):
    prefix, sep, local = raw.partition(":")
    if not sep:
        return None, raw
    return prefix, local


class _EventCollector:
    """expat handler set that turns callbacks into queued events."""

    def __init__(self):
        self.queue: Deque[events.Event] = deque()
        self.scopes: List[Namespace] = []
        self.open_names: List[str] = []
        self._text: List[str] = []
        self._started = False

    def attach(self, parser) -> None:
        parser.ordered_attributes = True
        parser.specified_attributes = True
        parser.buffer_text = True
        parser.XmlDeclHandler = self.xml_decl
        parser.StartElementHandler = self.start_element
        parser.EndElementHandler = self.end_element
        parser.CharacterDataHandler = self.character_data
        parser.StartCdataSectionHandler = self.start_cdata
        parser.EndCdataSectionHandler = self.end_cdata
        parser.CommentHandler = self.comment
        parser.ProcessingInstructionHandler = self.processing_instruction

    # -- helpers ----------------------------------------------------------

    def _push(self, event: events.Event) -> None:
        if not self._started:
            self._started = True
            if not isinstance(event, events.StartDocument):
                self.queue.append(events.StartDocument())
        self.queue.append(event)

    def flush_text(self) -> None:
        if self._text:
            text = "".join(self._text)
            self._text = []
            self._push(events.Characters(text))

    def _scope_for(self, raw_attributes: List[str]) -> Dict[Optional[str], str]:
        parent = self.scopes[-1].bindings if self.scopes else {}
        declared = {}
        for index in range(0, len(raw_attributes), 2):
            raw_name = raw_attributes[index]
            if raw_name == XMLNS_NAME or raw_name.startswith(XMLNS_NAME + ":"):
                prefix, local = _split_name(raw_name)
                name = QName(local, XMLNS_NS, prefix)
                declared[declaration_prefix(name)] = raw_attributes[index + 1]
        if not declared:
            return parent
        bindings = dict(parent)
        for prefix, uri in declared.items():
            if uri:
                bindings[prefix] = uri
            else:
                bindings.pop(prefix, None)
        return bindings

    @staticmethod
    def _resolve(prefix: Optional[str], bindings: Dict[Optional[str], str]) -> Optional[str]:
        if prefix == "xml":
            return XML_NS
        return bindings.get(prefix)

    # -- expat handlers ---------------------------------------------------

    def xml_decl(self, version, encoding, standalone) -> None:
        self._push(
            events.StartDocument(
                version or "1.0",
                encoding,
                None if standalone == -1 else bool(standalone),
            )
        )

    def start_element(self, raw_name: str, raw_attributes: List[str]) -> None:
        self.flush_text()
        bindings = self._scope_for(raw_attributes)
        prefix, local = _split_name(raw_name)
        namespace = Namespace(bindings, prefix, self._resolve(prefix, bindings))
        self.scopes.append(namespace)
        self.open_names.append(raw_name)

        attributes = []
        for index in range(0, len(raw_attributes), 2):
            attr_prefix, attr_local = _split_name(raw_attributes[index])
            if attr_prefix == XMLNS_NAME or (attr_prefix is None and attr_local == XMLNS_NAME):
                uri = XMLNS_NS
            elif attr_prefix is None:
                uri = None
            else:
                uri = self._resolve(attr_prefix, bindings)
            attributes.append(Attribute(QName(attr_local, uri, attr_prefix), raw_attributes[index + 1]))

        self._push(events.StartElement(QName(local, namespace.uri, prefix), attributes, namespace))

    def end_element(self, raw_name: str) -> None:
        self.flush_text()
        namespace = self.scopes.pop()
        self.open_names.pop()
        prefix, local = _split_name(raw_name)
        self._push(events.EndElement(QName(local, namespace.uri, prefix)))

    def character_data(self, data: str) -> None:
        self._text.append(data)

    def start_cdata(self) -> None:
        self.flush_text()

    def end_cdata(self) -> None:
        text = "".join(self._text)
        self._text = []
        self._push(events.CData(text))

    def comment(self, data: str) -> None:
        self.flush_text()
        self._push(events.Comment(data))

    def processing_instruction(self, target: str, data: str) -> None:
        self.flush_text()
        self._push(events.ProcessingInstruction(target, data or None))


def _chunks(source: Source, chunk_size: int) -> Iterator[Union[str, bytes]]:
    if isinstance(source, (str, bytes)):
        for start in range(0, len(source), chunk_size):
            yield source[start:start + chunk_size]
        return
    while True:
        chunk = source.read(chunk_size)
        if not chunk:
            return
        yield chunk


def _end_tag_at(history: bytes, index: int) -> Optional[str]:
    """Name of the end tag around `index` in `history`, if one is there."""
    if index < 0:
        return None
    start = history.rfind(b"</", 0, index + 2)
    if start < 0:
        return None
    match = END_TAG.match(history, start)
    if match is None:
        return None
    return match.group(1).decode("utf-8", errors="replace")


def tokenize(source: Source, chunk_size: int = CHUNK_SIZE) -> Iterator[events.Event]:
    """
    Yield markup events for `source` (str, bytes, or a readable file object).

    An input that ends with elements still open, or without any element at
    all, ends the stream quietly; deciding that this is an error belongs to
    the parser. An end tag that does not close the innermost open element
    raises MismatchedEndTag. Any other malformation raises TokenizerError.
    """
    parser = expat.ParserCreate()
    collector = _EventCollector()
    collector.attach(parser)
    history = bytearray()
    history_start = 0

    def drain():
        while collector.queue:
            yield collector.queue.popleft()

    def remember(data) -> None:
        nonlocal history_start
        # expat parses str input as UTF-8, so byte offsets refer to that encoding.
        raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        history.extend(raw)
        excess = len(history) - len(raw) - HISTORY_SIZE
        if excess > 0:
            del history[:excess]
            history_start += excess

    def mismatch(exc: expat.ExpatError) -> Optional[MismatchedEndTag]:
        if exc.code != expat.errors.codes[expat.errors.XML_ERROR_TAG_MISMATCH] or not collector.open_names:
            return None
        found = _end_tag_at(bytes(history), parser.ErrorByteIndex - history_start)
        if found is None:
            return None
        return MismatchedEndTag(collector.open_names[-1], found)

    def feed(data, final: bool) -> None:
        remember(data)
        try:
            parser.Parse(data, final)
        except expat.ExpatError as exc:
            truncated = exc.code == expat.errors.codes[expat.errors.XML_ERROR_NO_ELEMENTS]
            if final and truncated:
                logger.debug(f"Input ended early at line {exc.lineno}, column {exc.offset}")
                collector.flush_text()
                return
            error = mismatch(exc)
            if error is not None:
                raise error from exc
            raise TokenizerError(expat.errors.messages[exc.code], exc.lineno, exc.offset) from exc

    tail = b""
    for chunk in _chunks(source, chunk_size):
        tail = chunk[:0]
        feed(chunk, False)
        yield from drain()

    feed(tail, True)
    yield from drain()
