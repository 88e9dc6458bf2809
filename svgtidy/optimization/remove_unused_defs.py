"""Drop definitions nothing refers to."""
from collections import Counter
from typing import Dict, List, Optional

from ..document.names import ID_NAME, ElementType
from ..document.node import Element, Node, rebuild
from ..identifiers.usage import find_attribute, make_id_usage_map
from ..utils.logger import get_logger
from .base import OptimizationPass

logger = get_logger(__name__)


def _is_used(node: Node, usage: Dict[str, bool]) -> bool:
    if not isinstance(node, Element):
        return True
    identifier = find_attribute(node.attributes, ID_NAME)
    return identifier is not None and usage.get(identifier, False)


def prune_defs(element: Element, children: List[Node], usage: Dict[str, bool], stats: Counter) -> Optional[Node]:
    if element.element_type is not ElementType.DEFS:
        return element.with_children(children)

    kept = [child for child in children if _is_used(child, usage)]
    stats["removed"] += len(children) - len(kept)
    if not kept:
        return None
    return element.with_children(kept)


class RemoveUnusedDefs(OptimizationPass):
    """
    Inside <defs>, keep only element children whose id is referenced.

    Text and comments inside <defs> are kept; a <defs> left empty is removed.
    """

    name = "remove_unused_defs"
    description = "Remove unreferenced elements from <defs>"

    def apply(self, nodes: List[Node]) -> List[Node]:
        usage = make_id_usage_map(nodes)
        stats: Counter = Counter()
        result = rebuild(nodes, lambda element, children: prune_defs(element, children, usage, stats))
        logger.info(f"Removed {stats['removed']} unused definitions")
        return result
