"""Find declared identifiers and whether anything references them."""
import re
from typing import Dict, Iterable, List, Optional, Set

from ..document.attributes import Attribute
from ..document.names import HREF_NAME, ID_NAME, ElementType
from ..document.node import Element, Node, Text, find_elements

URL_TARGET = re.compile(r"url\(#([^)]+)\)")
STYLE_TARGET = re.compile(r"#([\w-]+)")


def find_attribute(attributes: Iterable[Attribute], local_name: str) -> Optional[str]:
    for attribute in attributes:
        if attribute.name.local_name == local_name:
            return attribute.value
    return None


def find_ids(nodes: Iterable[Node]) -> List[str]:
    """Every declared identifier in document order, duplicates included."""
    ids = []
    for element in find_elements(nodes):
        value = find_attribute(element.attributes, ID_NAME)
        if value is not None:
            ids.append(value)
    return ids


def fragment_target(value: str) -> Optional[str]:
    """Identifier of a fragment-only reference (`#id`), else None."""
    if value.startswith("#") and len(value) > 1:
        return value[1:]
    return None


def _mark_attribute(attribute: Attribute, usage: Dict[str, bool]) -> None:
    if attribute.name.local_name == HREF_NAME:
        target = fragment_target(attribute.value)
        if target in usage:
            usage[target] = True
        return

    if "url(#" not in attribute.value:
        return
    for identifier in usage:
        if f"url(#{identifier})" in attribute.value:
            usage[identifier] = True


def _mark_style_text(element: Element, usage: Dict[str, bool]) -> None:
    for child in element.children:
        if not isinstance(child, Text):
            continue
        for identifier in usage:
            if f"#{identifier}" in child.content:
                usage[identifier] = True


def make_id_usage_map(nodes: List[Node]) -> Dict[str, bool]:
    """
    Map every declared identifier to whether it is referenced.

    A reference is a fragment-only `href` (`#id`), a `url(#id)` anywhere in
    another attribute value, or `#id` anywhere in the text of a <style>
    element. Matching inside style text is by substring, so an identifier
    that is a prefix of a selector counts as used.
    """
    usage = {identifier: False for identifier in find_ids(nodes)}
    if not usage:
        return usage

    for element in find_elements(nodes):
        for attribute in element.attributes:
            _mark_attribute(attribute, usage)
        if element.element_type is ElementType.STYLE:
            _mark_style_text(element, usage)

    return usage


def find_references(nodes: Iterable[Node]) -> Set[str]:
    """
    Every identifier the forest points at, declared or not.

    Collects fragment-only `href` targets, `url(#id)` targets in other
    attributes and `#name` tokens in <style> text.
    """
    references = set()
    for element in find_elements(nodes):
        for attribute in element.attributes:
            if attribute.name.local_name == HREF_NAME:
                target = fragment_target(attribute.value)
                if target is not None:
                    references.add(target)
            elif "url(#" in attribute.value:
                references.update(URL_TARGET.findall(attribute.value))
        if element.element_type is ElementType.STYLE:
            for child in element.children:
                if isinstance(child, Text):
                    references.update(STYLE_TARGET.findall(child.content))
    return references
