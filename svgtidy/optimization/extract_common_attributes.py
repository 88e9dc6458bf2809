"""Hoist attributes shared by every element of a group onto the group."""
from collections import Counter
from typing import List, Optional

from ..document.attributes import Attribute
from ..document.names import ID_NAME, ElementType
from ..document.node import Element, Node, rebuild
from ..utils.logger import get_logger
from .base import OptimizationPass

logger = get_logger(__name__)


def _key(attribute: Attribute):
    return attribute.name.local_name, attribute.name.namespace


def _can_move(attribute: Attribute) -> bool:
    return attribute.name.local_name != ID_NAME and not attribute.name.is_namespace_declaration


def find_common_attributes(children: List[Node]) -> List[Attribute]:
    """Attributes of the first element child that every other element child repeats exactly."""
    elements = [child for child in children if isinstance(child, Element)]
    if len(elements) < 2:
        return []
    common = [attribute for attribute in elements[0].attributes if _can_move(attribute)]
    for element in elements[1:]:
        common = [attribute for attribute in common if attribute in element.attributes]
    return common


def extract_from_group(element: Element, children: List[Node], stats: Counter) -> Optional[Node]:
    if element.element_type is not ElementType.GROUP:
        return element.with_children(children)

    own = {_key(attribute): attribute.value for attribute in element.attributes}
    common = [
        attribute
        for attribute in find_common_attributes(children)
        if own.get(_key(attribute), attribute.value) == attribute.value
    ]
    if not common:
        return element.with_children(children)

    stats["moved"] += len(common)
    children = [
        child.with_attributes([attribute for attribute in child.attributes if attribute not in common])
        if isinstance(child, Element)
        else child
        for child in children
    ]
    attributes = list(element.attributes) + [attribute for attribute in common if _key(attribute) not in own]
    return Element(element.tag, element.namespace, attributes, children)


class ExtractCommonAttributes(OptimizationPass):
    """
    Move attributes that all element children of a <g> share onto the <g>.

    Groups are handled bottom-up and need at least two element children.
    An attribute moves only when every element child carries it with the
    same value. Ids and namespace declarations never move, and an attribute
    the group already sets to a different value stays on the children.
    """

    name = "extract_common_attributes"
    description = "Move attributes shared by all children of a group onto the group"

    def apply(self, nodes: List[Node]) -> List[Node]:
        stats: Counter = Counter()
        result = rebuild(nodes, lambda element, children: extract_from_group(element, children, stats))
        logger.info(f"Moved {stats['moved']} shared attributes onto groups")
        return result
