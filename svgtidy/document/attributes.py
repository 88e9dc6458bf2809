"""Qualified names, attributes and per-element namespace records."""
from dataclasses import dataclass, field
from typing import Dict, Optional

from .names import XMLNS_NAME, XMLNS_NS


@dataclass(frozen=True)
class QName:
    """A qualified name. Lookups go through `local_name`; `str()` is the written form."""

    local_name: str
    namespace: Optional[str] = None
    prefix: Optional[str] = None

    @classmethod
    def local(cls, local_name: str) -> "QName":
        return cls(local_name)

    @property
    def is_namespace_declaration(self) -> bool:
        if self.prefix is None:
            return self.local_name == XMLNS_NAME
        return self.prefix == XMLNS_NAME

    def __str__(self) -> str:
        if self.prefix:
            return f"{self.prefix}:{self.local_name}"
        return self.local_name


@dataclass(frozen=True)
class Attribute:
    name: QName
    value: str

    @classmethod
    def local(cls, local_name: str, value: str) -> "Attribute":
        return cls(QName.local(local_name), value)

    def with_value(self, value: str) -> "Attribute":
        return Attribute(self.name, value)


@dataclass
class Namespace:
    """
    Namespace snapshot of one element.

    `bindings` maps prefix (None for the default namespace) to URI for every
    declaration in scope at the element. Treat it as read-only: elements that
    declare nothing share their parent's mapping.
    """

    bindings: Dict[Optional[str], str] = field(default_factory=dict)
    prefix: Optional[str] = None
    uri: Optional[str] = None

    @classmethod
    def empty(cls) -> "Namespace":
        return cls()

    def resolve(self, prefix: Optional[str]) -> Optional[str]:
        return self.bindings.get(prefix)


def declaration_prefix(name: QName) -> Optional[str]:
    """Prefix bound by an xmlns-family attribute (None for the default namespace)."""
    return name.local_name if name.prefix == XMLNS_NAME else None
