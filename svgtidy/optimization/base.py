"""Common shape of a rewrite pass."""
from typing import List

from ..document.node import Node


class OptimizationPass:
    """
    A named forest-to-forest rewrite.

    Subclasses set `name` (the key used in configuration) and implement
    `apply`, which must return a new forest and never fail on a well-formed
    one.
    """

    name = ""
    description = ""

    def __init__(self, config: dict):
        self.config = config

    def apply(self, nodes: List[Node]) -> List[Node]:
        raise NotImplementedError
