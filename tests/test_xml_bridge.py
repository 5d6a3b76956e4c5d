"""
Tests for hardened POM parsing and serialization helpers.
"""

import dataclasses
import io

import pytest
from lxml import etree

from pom_modules.converters.xml_bridge import (
    DEFAULT_SETTINGS,
    XMLSettings,
    child_elements,
    first_child,
    local_name,
    parse_pom,
    serialize_pom,
    text_content,
)
from pom_modules.core.exceptions import MalformedPomError, PomSerializationError


def parse(text):
    return parse_pom(io.StringIO(text))


def test_settings_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_SETTINGS.resolve_entities = True


def test_default_settings_are_hardened():
    assert DEFAULT_SETTINGS.forbid_dtd is True
    assert DEFAULT_SETTINGS.resolve_entities is False
    assert DEFAULT_SETTINGS.load_dtd is False
    assert DEFAULT_SETTINGS.no_network is True
    assert DEFAULT_SETTINGS.indent == "  "


def test_parser_is_fresh_per_call():
    assert DEFAULT_SETTINGS.parser() is not DEFAULT_SETTINGS.parser()


def test_parse_reads_whole_stream():
    tree = parse("<project><packaging>pom</packaging></project>")

    assert tree.getroot().tag == "project"


def test_parse_error_wraps_syntax_error():
    with pytest.raises(MalformedPomError) as exc_info:
        parse("<project>")

    assert isinstance(exc_info.value.__cause__, etree.XMLSyntaxError)


def test_doctype_allowed_only_when_not_forbidden():
    text = "<!DOCTYPE project><project/>"

    with pytest.raises(MalformedPomError):
        parse(text)

    relaxed = XMLSettings(forbid_dtd=False)
    tree = parse_pom(io.StringIO(text), relaxed)
    assert tree.getroot().tag == "project"


def test_local_name_strips_namespace():
    root = parse('<project xmlns="urn:x"><!-- c --><packaging>pom</packaging></project>').getroot()

    assert local_name(root) == "project"
    assert local_name(root[0]) is None
    assert local_name(root[1]) == "packaging"


def test_child_elements_are_direct_and_ordered():
    root = parse("<p><m>1</m><x><m>nested</m></x><!-- m --><m>2</m></p>").getroot()

    assert [e.text for e in child_elements(root, "m")] == ["1", "2"]
    assert first_child(root, "m").text == "1"
    assert first_child(root, "missing") is None


def test_text_content_ignores_comments():
    root = parse("<m>a<!-- hidden -->b<i>c</i></m>").getroot()

    assert text_content(root) == "abc"


def test_serialize_writes_declaration_and_indents():
    tree = parse("<a><b><c>x</c></b></a>")
    out = io.StringIO()

    serialize_pom(tree, out)

    assert out.getvalue() == (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        "<a>\n"
        "  <b>\n"
        "    <c>x</c>\n"
        "  </b>\n"
        "</a>\n"
    )


def test_serialize_is_stable_on_its_own_output():
    first = io.StringIO()
    serialize_pom(parse("<a>\n\t\t<b/>  <c>y</c></a>"), first)

    second = io.StringIO()
    serialize_pom(parse(first.getvalue()), second)

    assert first.getvalue() == second.getvalue()


def test_serialize_rejects_other_encodings():
    with pytest.raises(PomSerializationError, match="encoding"):
        serialize_pom(parse("<a/>"), io.StringIO(), XMLSettings(encoding="ISO-8859-1"))


def test_parse_drops_declaration_and_bom():
    tree = parse('\ufeff<?xml version="1.0" encoding="ISO-8859-1" standalone="yes"?>\n<project><name>Café</name></project>')

    assert tree.getroot()[0].text == "Café"


def test_child_elements_stay_in_parent_namespace():
    root = parse(
        '<project xmlns="urn:a" xmlns:b="urn:b"><b:m>foreign</b:m><m>own</m></project>'
    ).getroot()

    assert [e.text for e in child_elements(root, "m")] == ["own"]
