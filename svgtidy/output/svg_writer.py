"""Token writer: turns markup events into text on an output stream."""
from dataclasses import dataclass
from typing import IO, Optional

from ..errors import WriteError
from ..parsing import events


@dataclass
class EmitterConfig:
    """Writer knobs; the defaults reproduce the input as closely as possible."""

    write_document_declaration: bool = False
    pad_self_closing: bool = False
    perform_escaping: bool = True

    @classmethod
    def from_dict(cls, config: Optional[dict]) -> "EmitterConfig":
        config = config or {}
        return cls(
            write_document_declaration=bool(config.get("write_document_declaration", False)),
            pad_self_closing=bool(config.get("pad_self_closing", False)),
            perform_escaping=bool(config.get("perform_escaping", True)),
        )


def escape_text(text: str) -> str:
    # `>` is only special as the end of `]]>`.
    return text.replace("&", "&amp;").replace("<", "&lt;").replace("]]>", "]]&gt;")


def escape_attribute(value: str) -> str:
    value = value.replace("&", "&amp;").replace("<", "&lt;").replace('"', "&quot;")
    # expat normalizes literal whitespace in attribute values, so these can
    # only have come from character references.
    return value.replace("\t", "&#9;").replace("\n", "&#10;").replace("\r", "&#13;")


class SVGWriter:
    """
    Push-based writer for the event vocabulary.

    A start tag is held open until the next event shows whether the element
    has content; an immediately following end tag turns it into a
    self-closing tag. Output goes straight to `target`; nothing is buffered
    beyond that one start tag.
    """

    def __init__(self, target: IO[str], config: Optional[EmitterConfig] = None):
        self.target = target
        self.config = config or EmitterConfig()
        self._pending_start: Optional[str] = None
        self._started = False

    def _emit(self, text: str) -> None:
        try:
            self.target.write(text)
        except (OSError, ValueError, UnicodeError) as exc:
            raise WriteError(exc) from exc

    def _text(self, text: str) -> str:
        return escape_text(text) if self.config.perform_escaping else text

    def _attribute(self, value: str) -> str:
        return escape_attribute(value) if self.config.perform_escaping else value

    def _close_pending(self) -> None:
        if self._pending_start is not None:
            pending, self._pending_start = self._pending_start, None
            self._emit(pending + ">")

    def _declaration(self, event: Optional[events.StartDocument]) -> None:
        event = event or events.StartDocument(encoding="utf-8")
        parts = [f'<?xml version="{event.version}"']
        if event.encoding:
            parts.append(f' encoding="{event.encoding}"')
        if event.standalone is not None:
            parts.append(f' standalone="{"yes" if event.standalone else "no"}"')
        parts.append("?>")
        self._emit("".join(parts))

    def write(self, event: events.Event) -> None:
        if not self._started:
            self._started = True
            if self.config.write_document_declaration:
                self._declaration(event if isinstance(event, events.StartDocument) else None)

        if isinstance(event, events.StartDocument):
            return

        if isinstance(event, events.EndElement):
            if self._pending_start is not None:
                pending, self._pending_start = self._pending_start, None
                self._emit(pending + (" />" if self.config.pad_self_closing else "/>"))
            else:
                self._emit(f"</{event.name}>")
            return

        self._close_pending()

        if isinstance(event, events.StartElement):
            parts = ["<", str(event.name)]
            for attribute in event.attributes:
                parts.extend([" ", str(attribute.name), '="', self._attribute(attribute.value), '"'])
            self._pending_start = "".join(parts)
        elif isinstance(event, events.Characters):
            self._emit(self._text(event.text))
        elif isinstance(event, events.CData):
            self._emit(f"<![CDATA[{event.text}]]>")
        elif isinstance(event, events.Comment):
            self._emit(f"<!--{event.text}-->")
        elif isinstance(event, events.ProcessingInstruction):
            if event.data:
                self._emit(f"<?{event.name} {event.data}?>")
            else:
                self._emit(f"<?{event.name}?>")
        else:
            raise TypeError(f"Unsupported markup event: {event!r}")
