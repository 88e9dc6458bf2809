"""Rename identifiers to the shortest free names."""
import re
from typing import Dict, List, Set

from ..document.names import HREF_NAME, ID_NAME, ElementType
from ..document.node import Node, Text, find_elements
from ..identifiers.generator import IdGenerator
from ..identifiers.replace import replace_ids
from ..identifiers.usage import find_ids, find_references
from ..utils.logger import get_logger
from .base import OptimizationPass

logger = get_logger(__name__)

HEX_COLOR_LIKE = re.compile(r"[0-9a-fA-F]{1,6}")
HEX_TOKEN = re.compile(r"#([0-9a-fA-F]{1,6})(?![\w-])")
URL_REFERENCE = re.compile(r"url\(#[^)]*\)")


def looks_like_hex_color(identifier: str) -> bool:
    """True for ids such as `abc` or `00ff00` that could be read as a color literal."""
    return HEX_COLOR_LIKE.fullmatch(identifier) is not None


def find_hex_tokens(nodes: List[Node]) -> Set[str]:
    """`#xxx` tokens that may be color literals: style text and non-reference attribute values."""
    tokens = set()
    for element in find_elements(nodes):
        for attribute in element.attributes:
            if attribute.name.local_name in (ID_NAME, HREF_NAME) or "#" not in attribute.value:
                continue
            tokens.update(HEX_TOKEN.findall(URL_REFERENCE.sub("", attribute.value)))
        if element.element_type is ElementType.STYLE:
            for child in element.children:
                if isinstance(child, Text):
                    tokens.update(HEX_TOKEN.findall(child.content))
    return tokens


def make_id_map(nodes: List[Node]) -> Dict[str, str]:
    """
    Map each renamable id, in document order, to the next free short id.

    A hex-color-like id keeps its name when it has the classic #rgb/#rrggbb
    length or when the same `#token` appears where it could be a color. Names
    that are referenced but never declared are never handed out, so a
    dangling reference cannot start pointing at a renamed element. Ids that
    already carry the name they would get are left out of the map, so a
    second run finds nothing to do.
    """
    declared = list(dict.fromkeys(identifier for identifier in find_ids(nodes) if identifier))
    tokens = find_hex_tokens(nodes)
    kept = {
        identifier
        for identifier in declared
        if looks_like_hex_color(identifier) and (len(identifier) in (3, 6) or identifier in tokens)
    }
    renamed = [identifier for identifier in declared if identifier not in kept]
    dangling = find_references(nodes).difference(declared)

    id_map = {}
    for old_id, new_id in zip(renamed, IdGenerator(used_ids=kept | dangling, excluded_ids=tokens)):
        if old_id != new_id:
            id_map[old_id] = new_id
    return id_map


class ShortenIds(OptimizationPass):
    name = "shorten_ids"
    description = "Shorten ids to letters that cannot be mistaken for hex colors"

    def apply(self, nodes: List[Node]) -> List[Node]:
        id_map = make_id_map(nodes)
        logger.info(f"Shortening {len(id_map)} ids")
        return replace_ids(nodes, id_map)
