"""Replace repeated identical paths with <use> references to the first one."""
from typing import Dict, List

from ..document.attributes import Attribute
from ..document.names import HREF_NAME, ID_NAME, ElementType, Tag
from ..document.node import Element, Node, find_elements, rebuild
from ..identifiers.generator import IdGenerator
from ..identifiers.replace import replace_ids
from ..identifiers.usage import find_ids, find_references
from ..utils.logger import get_logger
from .base import OptimizationPass

logger = get_logger(__name__)


def _without_id(attributes: List[Attribute]) -> List[Attribute]:
    return [attribute for attribute in attributes if attribute.name.local_name != ID_NAME]


def are_equal_paths(first: Element, second: Element) -> bool:
    """Paths are interchangeable when everything but their id matches."""
    return (
        first.namespace == second.namespace
        and _without_id(first.attributes) == _without_id(second.attributes)
        and first.children == second.children
    )


class _PathEntry:
    __slots__ = ("path", "count", "new_id", "emitted")

    def __init__(self, path: Element):
        self.path = path
        self.count = 1
        self.new_id = None
        self.emitted = False


def find_path_usages(nodes: List[Node]) -> List[_PathEntry]:
    """Distinct paths in document order with how often each occurs."""
    entries: List[_PathEntry] = []
    for element in find_elements(nodes):
        if element.element_type is not ElementType.PATH:
            continue
        for entry in entries:
            if are_equal_paths(entry.path, element):
                entry.count += 1
                break
        else:
            entries.append(_PathEntry(element))
    return entries


def _with_id(path: Element, new_id: str, id_map: Dict[str, str]) -> Element:
    attributes = []
    found = False
    for attribute in path.attributes:
        if attribute.name.local_name == ID_NAME and not found:
            found = True
            id_map[attribute.value] = new_id
            attribute = attribute.with_value(new_id)
        attributes.append(attribute)
    if not found:
        attributes.append(Attribute.local(ID_NAME, new_id))
    return path.with_attributes(attributes)


class ConvertPathsToUses(OptimizationPass):
    """
    Deduplicate paths that occur more than once.

    The first occurrence gets a fresh short id; every later occurrence
    becomes `<use href="#id"/>`. Old ids of all merged paths are remapped so
    existing references keep pointing at the shape.
    """

    name = "convert_paths_to_uses"
    description = "Replace duplicated paths with <use> elements"

    def apply(self, nodes: List[Node]) -> List[Node]:
        duplicated = [entry for entry in find_path_usages(nodes) if entry.count > 1]
        if not duplicated:
            return list(nodes)

        for entry, new_id in zip(duplicated, IdGenerator(used_ids=set(find_ids(nodes)) | find_references(nodes))):
            entry.new_id = new_id

        id_map: Dict[str, str] = {}
        replaced = 0

        def merge(element: Element, children: List[Node]) -> Node:
            nonlocal replaced
            node = element.with_children(children)
            if element.element_type is ElementType.PATH:
                for entry in duplicated:
                    if are_equal_paths(entry.path, element):
                        renamed = _with_id(node, entry.new_id, id_map)
                        if not entry.emitted:
                            entry.emitted = True
                            return renamed
                        replaced += 1
                        return Element(
                            Tag(ElementType.USE),
                            node.namespace,
                            [Attribute.local(HREF_NAME, f"#{entry.new_id}")],
                        )
            return node

        merged = rebuild(nodes, merge)
        logger.info(f"Replaced {replaced} duplicated paths with <use> ({len(duplicated)} shapes kept)")
        return replace_ids(merged, id_map)
