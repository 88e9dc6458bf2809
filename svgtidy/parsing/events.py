"""
Markup events exchanged with the tokenizer and the token writer.

The same vocabulary flows both ways: the tokenizer produces it, the parser
consumes it, the document model expands back into it, and the writer
consumes it again.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..document.attributes import Attribute, Namespace, QName


@dataclass(frozen=True)
class StartDocument:
    version: str = "1.0"
    encoding: Optional[str] = None
    standalone: Optional[bool] = None


@dataclass
class StartElement:
    name: QName
    attributes: List[Attribute] = field(default_factory=list)
    namespace: Namespace = field(default_factory=Namespace.empty)


@dataclass(frozen=True)
class EndElement:
    name: QName


@dataclass(frozen=True)
class Characters:
    text: str


@dataclass(frozen=True)
class CData:
    text: str


@dataclass(frozen=True)
class Comment:
    text: str


@dataclass(frozen=True)
class ProcessingInstruction:
    name: str
    data: Optional[str] = None


Event = Union[
    StartDocument,
    StartElement,
    EndElement,
    Characters,
    CData,
    Comment,
    ProcessingInstruction,
]
