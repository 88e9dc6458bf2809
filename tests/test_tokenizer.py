"""Tests for the pull-based markup tokenizer."""
import io
from xml.parsers import expat

import pytest

from svgtidy.document.names import SVG_NS, XLINK_NS, XMLNS_NS
from svgtidy.errors import MismatchedEndTag, TokenizerError
from svgtidy.parsing import events
from svgtidy.parsing.tokenizer import tokenize


def kinds(stream):
    return [type(event).__name__ for event in stream]


class TestEventOrder:
    def test_minimal_document(self):
        assert kinds(tokenize("<svg/>")) == ["StartDocument", "StartElement", "EndElement"]

    def test_declaration_is_reported(self):
        first = next(tokenize('<?xml version="1.0" encoding="UTF-8"?><svg/>'))
        assert first == events.StartDocument("1.0", "UTF-8", None)

    def test_synthesized_start_document(self):
        first = next(tokenize("<svg/>"))
        assert first == events.StartDocument()

    def test_nested_elements_and_leaves(self):
        stream = list(tokenize("<svg><!--c--><g>text<![CDATA[a<b]]></g><?pi data?></svg>"))
        assert kinds(stream) == [
            "StartDocument",
            "StartElement",
            "Comment",
            "StartElement",
            "Characters",
            "CData",
            "EndElement",
            "ProcessingInstruction",
            "EndElement",
        ]
        assert stream[2] == events.Comment("c")
        assert stream[4] == events.Characters("text")
        assert stream[5] == events.CData("a<b")
        assert stream[7] == events.ProcessingInstruction("pi", "data")

    def test_entities_are_decoded(self):
        stream = list(tokenize('<svg title="a &quot;b&quot;">x &amp; y</svg>'))
        assert stream[1].attributes[0].value == 'a "b"'
        assert stream[2] == events.Characters("x & y")


class TestChunking:
    def test_small_chunks_give_the_same_events(self):
        text = '<svg width="10"><g id="layer">some longer text content</g></svg>'
        assert list(tokenize(text, chunk_size=3)) == list(tokenize(text))

    def test_text_split_across_chunks_is_merged(self):
        stream = list(tokenize("<svg>abcdefghij</svg>", chunk_size=2))
        assert [e for e in stream if isinstance(e, events.Characters)] == [events.Characters("abcdefghij")]

    def test_bytes_and_file_sources(self):
        text = '<svg id="a">é</svg>'
        expected = list(tokenize(text))
        assert list(tokenize(text.encode("utf-8"))) == expected
        assert list(tokenize(io.BytesIO(text.encode("utf-8")), chunk_size=4)) == expected
        assert list(tokenize(io.StringIO(text))) == expected


class TestNamespaces:
    def test_default_namespace(self):
        stream = list(tokenize(f'<svg xmlns="{SVG_NS}"><rect/></svg>'))
        svg, rect = stream[1], stream[2]
        assert svg.name.namespace == SVG_NS
        assert rect.name.namespace == SVG_NS
        assert rect.namespace.bindings == {None: SVG_NS}

    def test_declarations_stay_in_place(self):
        stream = list(tokenize(f'<svg width="1" xmlns="{SVG_NS}" xmlns:xlink="{XLINK_NS}"/>'))
        names = [str(attribute.name) for attribute in stream[1].attributes]
        assert names == ["width", "xmlns", "xmlns:xlink"]
        assert stream[1].attributes[1].name.namespace == XMLNS_NS
        assert stream[1].attributes[2].name.is_namespace_declaration

    def test_prefixed_attribute(self):
        stream = list(tokenize(f'<svg xmlns:xlink="{XLINK_NS}"><use xlink:href="#a"/></svg>'))
        href = stream[2].attributes[0]
        assert href.name.local_name == "href"
        assert href.name.prefix == "xlink"
        assert href.name.namespace == XLINK_NS

    def test_prefixed_element(self):
        stream = list(tokenize(f'<svg:svg xmlns:svg="{SVG_NS}"/>'))
        assert str(stream[1].name) == "svg:svg"
        assert stream[1].namespace.uri == SVG_NS
        assert str(stream[2].name) == "svg:svg"


class TestErrors:
    def test_unclosed_root_ends_quietly(self):
        assert kinds(tokenize("<svg><g>")) == ["StartDocument", "StartElement", "StartElement"]

    def test_empty_input_ends_quietly(self):
        assert list(tokenize("")) == []

    def test_mismatched_tag_names_both_tags(self):
        with pytest.raises(MismatchedEndTag) as info:
            list(tokenize("<svg><g></svg>"))
        assert info.value.expected == "g"
        assert info.value.found == "svg"
        assert isinstance(info.value.__cause__, expat.ExpatError)

    def test_mismatched_tag_across_chunks(self):
        with pytest.raises(MismatchedEndTag) as info:
            list(tokenize(b"<svg><s:g xmlns:s=\"urn:x\"></s:path ></svg>", chunk_size=1))
        assert info.value.expected == "s:g"
        assert info.value.found == "s:path"

    def test_mismatch_after_long_prefix(self):
        source = "<svg>" + "<rect/>" * 2000 + "<g></svg>"
        with pytest.raises(MismatchedEndTag) as info:
            list(tokenize(source, chunk_size=7))
        assert (info.value.expected, info.value.found) == ("g", "svg")

    def test_garbage_raises(self):
        with pytest.raises(TokenizerError):
            list(tokenize("<svg><<</svg>"))
