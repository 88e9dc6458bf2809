"""Tests for id generation, usage tracking and renaming."""
from itertools import islice

import pytest

from svgtidy.identifiers.generator import ID_ALPHABET, IdGenerator, nth_id
from svgtidy.identifiers.replace import replace_ids
from svgtidy.identifiers.usage import find_ids, find_references, fragment_target, make_id_usage_map
from svgtidy.output.serializer import to_string
from svgtidy.parsing.svg_parser import parse_svg


class TestGenerator:
    def test_alphabet_has_no_hex_letters(self):
        assert len(ID_ALPHABET) == 40
        assert not set("abcdefABCDEF0123456789") & set(ID_ALPHABET)

    def test_single_letters_first(self):
        assert nth_id(0) == "g"
        assert nth_id(5) == "l"
        assert nth_id(39) == "Z"

    def test_least_significant_letter_first(self):
        assert nth_id(40) == "gg"
        assert nth_id(41) == "hg"
        assert nth_id(80) == "gh"

    def test_skips_used_ids(self):
        generator = IdGenerator(used_ids={"g", "m"})
        assert list(islice(generator, 8)) == ["h", "i", "j", "k", "l", "n", "o", "p"]

    def test_skips_excluded_ids(self):
        generator = IdGenerator(used_ids=["g"], excluded_ids=["h"])
        assert list(islice(generator, 2)) == ["i", "j"]

    def test_restartable(self):
        generator = IdGenerator()
        assert list(islice(generator, 3)) == list(islice(generator, 3)) == ["g", "h", "i"]

    def test_continues_past_one_letter(self):
        generator = IdGenerator()
        ids = list(islice(generator, 42))
        assert ids[39:] == ["Z", "gg", "hg"]
        assert len(set(ids)) == 42

    def test_custom_alphabet(self):
        assert list(islice(IdGenerator(alphabet="xy"), 6)) == ["x", "y", "xx", "yx", "xy", "yy"]

    def test_empty_alphabet(self):
        with pytest.raises(ValueError):
            IdGenerator(alphabet="")


class TestUsage:
    def test_find_ids_in_document_order(self):
        nodes = parse_svg('<svg id="root"><g id="a"><rect id="b"/></g><rect id="a"/></svg>')
        assert find_ids(nodes) == ["root", "a", "b", "a"]

    def test_fragment_target(self):
        assert fragment_target("#abc") == "abc"
        assert fragment_target("#") is None
        assert fragment_target("file.svg#abc") is None
        assert fragment_target("abc") is None

    def test_reference_kinds(self):
        nodes = parse_svg(
            "<svg>"
            "<style>#styled { fill: red }</style>"
            '<rect id="styled"/>'
            '<rect id="unused"/>'
            '<rect id="linked"/><use href="#linked"/>'
            '<linearGradient id="paint"/><rect fill="url(#paint)"/>'
            '<rect id="plain"/><a href="plain"/>'
            "</svg>"
        )
        assert make_id_usage_map(nodes) == {
            "styled": True,
            "unused": False,
            "linked": True,
            "paint": True,
            "plain": False,
        }

    def test_namespaced_href(self):
        nodes = parse_svg(
            '<svg xmlns:xlink="http://www.w3.org/1999/xlink">'
            '<rect id="r"/><use xlink:href="#r"/></svg>'
        )
        assert make_id_usage_map(nodes) == {"r": True}

    def test_style_match_is_by_substring(self):
        nodes = parse_svg('<svg><style>#abc1 {}</style><rect id="abc"/></svg>')
        assert make_id_usage_map(nodes) == {"abc": True}

    def test_no_ids(self):
        assert make_id_usage_map(parse_svg("<svg><rect/></svg>")) == {}

    def test_find_references_includes_undeclared_targets(self):
        nodes = parse_svg(
            "<svg>"
            "<style>#styled, .cls #nested-name { fill: #fff }</style>"
            '<rect id="styled"/><use href="#missing"/><use href="other.svg#ext"/>'
            '<rect fill="url(#paint)" stroke="url(#edge)"/><a href="plain"/>'
            "</svg>"
        )
        assert find_references(nodes) == {"styled", "nested-name", "fff", "missing", "paint", "edge"}


class TestReplaceIds:
    def test_all_reference_kinds_follow(self):
        text = (
            "<svg>"
            "<style>#old { fill: url(#paint) }</style>"
            '<linearGradient id="paint"/>'
            '<rect id="old" fill="url(#paint)" clip-path="url(#paint) "/>'
            '<use href="#old"/>'
            "</svg>"
        )
        result = to_string(replace_ids(parse_svg(text), {"old": "g", "paint": "h"}))
        assert result == (
            "<svg>"
            "<style>#g { fill: url(#h) }</style>"
            '<linearGradient id="h"/>'
            '<rect id="g" fill="url(#h)" clip-path="url(#h) "/>'
            '<use href="#g"/>'
            "</svg>"
        )

    def test_input_is_not_modified(self):
        text = '<svg><rect id="old"/><use href="#old"/></svg>'
        nodes = parse_svg(text)
        replace_ids(nodes, {"old": "g"})
        assert to_string(nodes) == text

    def test_swapped_names(self):
        text = '<svg><rect id="g"/><rect id="h"/><use href="#g"/><use href="#h"/></svg>'
        result = to_string(replace_ids(parse_svg(text), {"g": "h", "h": "g"}))
        assert result == '<svg><rect id="h"/><rect id="g"/><use href="#h"/><use href="#g"/></svg>'

    def test_prefix_ids_are_not_confused(self):
        text = '<svg><style>#a,#ab{}</style><rect id="a"/><rect id="ab" fill="url(#ab)"/></svg>'
        result = to_string(replace_ids(parse_svg(text), {"a": "x", "ab": "y"}))
        assert result == '<svg><style>#x,#y{}</style><rect id="x"/><rect id="y" fill="url(#y)"/></svg>'

    def test_external_references_are_untouched(self):
        text = '<svg><rect id="a"/><use href="other.svg#a"/></svg>'
        result = to_string(replace_ids(parse_svg(text), {"a": "g"}))
        assert result == '<svg><rect id="g"/><use href="other.svg#a"/></svg>'

    def test_empty_map(self):
        nodes = parse_svg('<svg><rect id="a"/></svg>')
        assert replace_ids(nodes, {}) == nodes
