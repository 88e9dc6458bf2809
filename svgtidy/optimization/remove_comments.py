"""Drop comments."""
from typing import List, Optional

from ..document.node import Comment, Leaf, Node, rebuild
from ..utils.logger import get_logger
from .base import OptimizationPass

logger = get_logger(__name__)


class RemoveComments(OptimizationPass):
    name = "remove_comments"
    description = "Remove all comments"

    def apply(self, nodes: List[Node]) -> List[Node]:
        removed = 0

        def remove(node: Leaf) -> Optional[Node]:
            nonlocal removed
            if isinstance(node, Comment):
                removed += 1
                return None
            return node

        result = rebuild(nodes, on_leaf=remove)
        logger.debug(f"Removed {removed} comments")
        return result
