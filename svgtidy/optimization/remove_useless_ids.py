"""Drop id attributes nothing refers to."""
from typing import Dict, List

from ..document.names import ID_NAME
from ..document.node import Element, Node, rebuild
from ..identifiers.usage import make_id_usage_map
from ..utils.logger import get_logger
from .base import OptimizationPass

logger = get_logger(__name__)


def strip_unused_id(element: Element, children: List[Node], usage: Dict[str, bool]) -> Node:
    attributes = [
        attribute
        for attribute in element.attributes
        if not (attribute.name.local_name == ID_NAME and not usage.get(attribute.value, False))
    ]
    return Element(element.tag, element.namespace, attributes, children)


class RemoveUselessIds(OptimizationPass):
    name = "remove_useless_ids"
    description = "Remove ids that are never referenced"

    def apply(self, nodes: List[Node]) -> List[Node]:
        usage = make_id_usage_map(nodes)
        unused = sum(1 for used in usage.values() if not used)
        logger.info(f"Removing {unused} unreferenced ids")
        return rebuild(nodes, lambda element, children: strip_unused_id(element, children, usage))
