"""Join runs of adjacent, identically styled paths into one path."""
import re
from collections import Counter
from typing import List, Optional

from ..document.attributes import Attribute
from ..document.names import PATH_DATA_NAME, PATH_LENGTH_NAME, ElementType
from ..document.node import Element, Node, rebuild
from ..identifiers.usage import find_attribute
from ..utils.logger import get_logger
from .base import OptimizationPass

logger = get_logger(__name__)

# Only units that convert to a shorter value.
UNIT_MULTIPLIERS = {"": 1.0, "px": 1.0, "pt": 1.25, "pc": 15.0}

VALUE_AND_UNIT = re.compile(r"(.*?)([^\d.]*)$")
NUMBER = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

MERGED_NAMES = (PATH_DATA_NAME, PATH_LENGTH_NAME)


def to_px(value: str) -> Optional[float]:
    """`3`, `3px`, `2pt` or `1pc` in user units; None for anything else."""
    match = VALUE_AND_UNIT.match(value)
    multiplier = UNIT_MULTIPLIERS.get(match.group(2))
    if multiplier is None or NUMBER.fullmatch(match.group(1)) is None:
        return None
    return float(match.group(1)) * multiplier


def format_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _has_same_attribute(attribute: Attribute, others: List[Attribute]) -> bool:
    return any(
        attribute == other or (attribute.name == other.name and attribute.name.local_name in MERGED_NAMES)
        for other in others
    )


def path_attributes_equal(first: List[Attribute], second: List[Attribute]) -> bool:
    """Equal up to the values of `d` and `pathLength`."""
    return len(first) == len(second) and all(_has_same_attribute(attribute, second) for attribute in first)


def can_merge(first: Node, second: Node) -> bool:
    if not (isinstance(first, Element) and isinstance(second, Element)):
        return False
    if first.element_type is not ElementType.PATH or second.element_type is not ElementType.PATH:
        return False
    # A leading relative moveto would become relative to the end of the first path.
    data = second.get(PATH_DATA_NAME)
    if data is not None and not data.lstrip().startswith("M"):
        return False
    return (
        first.namespace == second.namespace
        and path_attributes_equal(first.attributes, second.attributes)
        and first.children == second.children
    )


def merge_paths(first: Element, second: Element) -> Element:
    """The second path with the first one's data prepended and path lengths summed."""
    first_data = find_attribute(first.attributes, PATH_DATA_NAME)
    first_length = find_attribute(first.attributes, PATH_LENGTH_NAME)
    first_length = to_px(first_length) if first_length is not None else None

    attributes = []
    for attribute in second.attributes:
        name = attribute.name.local_name
        if name == PATH_DATA_NAME and first_data is not None:
            attribute = attribute.with_value(f"{first_data.rstrip()} {attribute.value.lstrip()}")
        elif name == PATH_LENGTH_NAME and first_length is not None:
            second_length = to_px(attribute.value)
            if second_length is not None:
                attribute = attribute.with_value(format_number(first_length + second_length))
        attributes.append(attribute)
    return second.with_attributes(attributes)


def merge_runs(nodes: List[Node], stats: Counter) -> List[Node]:
    result: List[Node] = []
    for node in nodes:
        if result and can_merge(result[-1], node):
            result[-1] = merge_paths(result[-1], node)
            stats["merged"] += 1
        else:
            result.append(node)
    return result


class MergeConsecutivePaths(OptimizationPass):
    """
    Merge sibling <path> elements that follow each other directly.

    Two paths merge when they differ at most in `d` and `pathLength`. The
    merged path keeps the attribute order of the second one, its `d` is the
    two path data strings joined by a space and its `pathLength` is the sum
    in user units. Any other node between two paths, whitespace included,
    ends the run. A path whose data starts with a relative moveto is never
    appended to its predecessor.
    """

    name = "merge_consecutive_paths"
    description = "Join adjacent paths that share all other attributes"

    def apply(self, nodes: List[Node]) -> List[Node]:
        stats: Counter = Counter()
        result = rebuild(nodes, lambda element, children: element.with_children(merge_runs(children, stats)))
        result = merge_runs(result, stats)
        logger.info(f"Merged {stats['merged']} paths into their predecessors")
        return result
