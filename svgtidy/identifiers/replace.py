"""Rename identifiers together with every reference to them."""
import re
from typing import List, Mapping, Pattern

from ..document.attributes import Attribute
from ..document.names import HREF_NAME, ID_NAME, ElementType
from ..document.node import Element, Node, Text, rebuild
from .usage import fragment_target


def _alternation(ids: Mapping[str, str]) -> str:
    # Longest first so that an id never matches as the prefix of a longer one.
    return "|".join(re.escape(identifier) for identifier in sorted(ids, key=len, reverse=True))


class _IdReplacer:
    """Applies one id mapping; all substitutions in a value happen in a single pass."""

    def __init__(self, id_map: Mapping[str, str]):
        self.id_map = id_map
        alternation = _alternation(self.id_map)
        self.url_pattern: Pattern = re.compile(rf"url\(#({alternation})\)")
        # In CSS, `#id` must not run on into a longer name such as `#idx`.
        self.style_pattern: Pattern = re.compile(rf"#({alternation})(?![\w-])")

    def attribute(self, attribute: Attribute) -> Attribute:
        name = attribute.name.local_name
        value = attribute.value

        if name == ID_NAME:
            if value in self.id_map:
                return attribute.with_value(self.id_map[value])
            return attribute

        if name == HREF_NAME:
            target = fragment_target(value)
            if target in self.id_map:
                return attribute.with_value(f"#{self.id_map[target]}")
            return attribute

        if "url(#" not in value:
            return attribute
        new_value = self.url_pattern.sub(lambda match: f"url(#{self.id_map[match.group(1)]})", value)
        if new_value == value:
            return attribute
        return attribute.with_value(new_value)

    def style_child(self, node: Node) -> Node:
        if not isinstance(node, Text):
            return node
        content = self.style_pattern.sub(lambda match: f"#{self.id_map[match.group(1)]}", node.content)
        if content == node.content:
            return node
        return Text(content, node.is_cdata)

    def element(self, element: Element, children: List[Node]) -> Node:
        if element.element_type is ElementType.STYLE:
            children = [self.style_child(child) for child in children]
        return Element(
            element.tag,
            element.namespace,
            [self.attribute(attribute) for attribute in element.attributes],
            children,
        )


def replace_ids(nodes: List[Node], id_map: Mapping[str, str]) -> List[Node]:
    """
    Return a new forest where every identifier in `id_map` is renamed.

    Declarations (`id`), fragment-only `href`s, `url(#id)` in any other
    attribute and `#id` in <style> text all follow the mapping. The input
    forest is left untouched.
    """
    id_map = {old: new for old, new in id_map.items() if old}
    if not id_map:
        return list(nodes)
    replacer = _IdReplacer(id_map)
    return rebuild(nodes, replacer.element)
