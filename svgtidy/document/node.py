"""Document tree: containers with ordered attributes and children, plus leaves."""
from dataclasses import dataclass, field, replace
from typing import Callable, Iterable, Iterator, List, Optional, Union

from ..parsing import events
from .attributes import Attribute, Namespace, QName
from .names import ElementType, Tag


@dataclass
class Element:
    """
    Container node.

    Owns its children exclusively. Rewrites never mutate an element in place;
    they build a new one with `replace()` or the `with_*` helpers.
    """

    tag: Tag
    namespace: Namespace = field(default_factory=Namespace.empty)
    attributes: List[Attribute] = field(default_factory=list)
    children: List["Node"] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        name: str,
        attributes: Optional[Iterable[Attribute]] = None,
        children: Optional[Iterable["Node"]] = None,
        namespace: Optional[Namespace] = None,
    ) -> "Element":
        return cls(
            Tag.from_name(name),
            namespace if namespace is not None else Namespace.empty(),
            list(attributes or []),
            list(children or []),
        )

    @property
    def element_type(self) -> ElementType:
        return self.tag.kind

    @property
    def qualified_name(self) -> QName:
        return QName(self.tag.name, self.namespace.uri, self.namespace.prefix)

    def get(self, local_name: str) -> Optional[str]:
        """Value of the first attribute with this local name, ignoring namespaces."""
        for attribute in self.attributes:
            if attribute.name.local_name == local_name:
                return attribute.value
        return None

    def with_attributes(self, attributes: List[Attribute]) -> "Element":
        return replace(self, attributes=attributes)

    def with_children(self, children: List["Node"]) -> "Element":
        return replace(self, children=children)

    def events(self) -> Iterator[events.Event]:
        return iter_events([self])


@dataclass(frozen=True)
class ProcessingInstruction:
    name: str
    data: Optional[str] = None


@dataclass(frozen=True)
class Comment:
    text: str


@dataclass(frozen=True)
class Text:
    content: str
    is_cdata: bool = False


Leaf = Union[ProcessingInstruction, Comment, Text]
Node = Union[Element, ProcessingInstruction, Comment, Text]


def _leaf_event(node: Leaf) -> events.Event:
    if isinstance(node, Text):
        return events.CData(node.content) if node.is_cdata else events.Characters(node.content)
    if isinstance(node, Comment):
        return events.Comment(node.text)
    return events.ProcessingInstruction(node.name, node.data)


def iter_events(nodes: Iterable[Node]) -> Iterator[events.Event]:
    """
    Lazily expand nodes into markup events, depth first.

    Start tags are produced in pre-order and end tags in post-order. The walk
    keeps a stack of child cursors instead of recursing, so arbitrarily deep
    trees only cost one cursor per open element. Every call starts a fresh
    expansion.
    """
    stack = [(None, iter(nodes))]
    while stack:
        owner, cursor = stack[-1]
        node = next(cursor, None)
        if node is None:
            stack.pop()
            if owner is not None:
                yield events.EndElement(owner.qualified_name)
            continue
        if isinstance(node, Element):
            yield events.StartElement(node.qualified_name, list(node.attributes), node.namespace)
            stack.append((node, iter(node.children)))
        else:
            yield _leaf_event(node)


class EventStream:
    """Restartable view of a forest as events; each iteration walks it again."""

    def __init__(self, nodes: List[Node]):
        self.nodes = nodes

    def __iter__(self) -> Iterator[events.Event]:
        return iter_events(self.nodes)


def find_elements(nodes: Iterable[Node]) -> Iterator[Element]:
    """All containers of a forest in document (pre-)order."""
    stack = [iter(nodes)]
    while stack:
        node = next(stack[-1], None)
        if node is None:
            stack.pop()
            continue
        if isinstance(node, Element):
            yield node
            stack.append(iter(node.children))


ElementRule = Callable[[Element, List[Node]], Optional[Node]]
LeafRule = Callable[[Leaf], Optional[Node]]


def rebuild(
    nodes: Iterable[Node],
    on_element: Optional[ElementRule] = None,
    on_leaf: Optional[LeafRule] = None,
) -> List[Node]:
    """
    Rebuild a forest bottom-up.

    `on_element(element, children)` receives the original element and its
    already rebuilt children and returns the replacement node, or None to
    drop it. `on_leaf` does the same for leaves. Without a rule an element
    gets its new children and a leaf is kept. Open elements live on an
    explicit stack, so depth is not limited by the recursion limit.
    """
    result: List[Node] = []
    stack = [(None, iter(nodes), result)]
    while stack:
        owner, cursor, children = stack[-1]
        node = next(cursor, None)
        if node is None:
            stack.pop()
            if owner is None:
                continue
            if on_element is None:
                replacement = owner.with_children(children)
            else:
                replacement = on_element(owner, children)
            if replacement is not None:
                stack[-1][2].append(replacement)
            continue

        if isinstance(node, Element):
            stack.append((node, iter(node.children), []))
        else:
            replacement = node if on_leaf is None else on_leaf(node)
            if replacement is not None:
                children.append(replacement)
    return result
