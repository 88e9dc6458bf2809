"""Collapse groups that wrap nothing or a single element."""
from collections import Counter
from typing import Dict, List, Optional

from ..document.attributes import Attribute
from ..document.names import ID_NAME, ElementType
from ..document.node import Element, Node, rebuild
from ..identifiers.usage import find_attribute, make_id_usage_map
from ..utils.logger import get_logger
from .base import OptimizationPass

logger = get_logger(__name__)


def merge_attributes(group_attributes: List[Attribute], child_attributes: List[Attribute]) -> List[Attribute]:
    """Child attributes first; group attributes fill in names the child lacks."""
    taken = {(attribute.name.local_name, attribute.name.namespace) for attribute in child_attributes}
    merged = list(child_attributes)
    for attribute in group_attributes:
        key = (attribute.name.local_name, attribute.name.namespace)
        if key not in taken:
            taken.add(key)
            merged.append(attribute)
    return merged


def _is_referenced(element: Element, usage: Dict[str, bool]) -> bool:
    identifier = find_attribute(element.attributes, ID_NAME)
    return identifier is not None and usage.get(identifier, False)


def collapse_group(element: Element, children: List[Node], usage: Dict[str, bool], stats: Counter) -> Optional[Node]:
    """Rebuild one element from its already processed children."""
    if element.element_type is not ElementType.GROUP:
        return element.with_children(children)

    if not children:
        stats["dropped"] += 1
        return None

    if len(children) == 1 and isinstance(children[0], Element):
        only_child = children[0]
        if not _is_referenced(only_child, usage) and not _is_referenced(element, usage):
            stats["collapsed"] += 1
            return only_child.with_attributes(merge_attributes(element.attributes, only_child.attributes))

    return element.with_children(children)


class RemoveUselessGroups(OptimizationPass):
    """
    Remove <g> elements that add nothing.

    Groups are processed bottom-up. A group left without children disappears.
    A group left with exactly one element child is replaced by that child,
    which takes over the group's attributes unless it sets them itself. A
    group whose only child is text or a comment stays. Nothing is collapsed
    when the child's id, or the group's own id, is referenced elsewhere.
    """

    name = "remove_useless_groups"
    description = "Remove empty groups and groups wrapping a single element"

    def apply(self, nodes: List[Node]) -> List[Node]:
        usage = make_id_usage_map(nodes)
        stats: Counter = Counter()
        result = rebuild(nodes, lambda element, children: collapse_group(element, children, usage, stats))
        logger.info(f"Collapsed {stats['collapsed']} groups, dropped {stats['dropped']} empty groups")
        return result
