# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for dispatch tables, rules and hooks."""

import xml.etree.ElementTree as ET

import pytest

from genro_xsdgen import (
    DEFAULT_DISPATCH,
    EXTENDED_DISPATCH,
    DispatchRule,
    DispatchTable,
    MissingIdentifierError,
    ObjectContext,
    Placement,
    SchemaConfig,
    keyed,
)
from genro_xsdgen.dispatch import (
    NO_RULE,
    append_enumeration,
    base_into_properties,
    documentation_comment,
    facet_value,
    identifier,
    isolate,
)

XS = "{http://www.w3.org/2001/XMLSchema}"


def node(kind, text=None, **attrs):
    element = ET.Element(f"{XS}{kind}", attrs)
    element.text = text
    return element


class TestTables:
    def test_default_kinds(self):
        assert set(DEFAULT_DISPATCH) == {
            "element",
            "complexType",
            "simpleType",
            "attribute",
            "extension",
            "documentation",
        }

    def test_ignored_attributes(self):
        for kind in ("element", "complexType", "simpleType", "attribute"):
            assert DEFAULT_DISPATCH[kind].ignored_attrs == frozenset({"name", "ref"})
        assert DEFAULT_DISPATCH["extension"].ignored_attrs == frozenset({"base"})
        assert DEFAULT_DISPATCH["documentation"].ignored_attrs == frozenset()

    def test_unknown_kind(self):
        assert DEFAULT_DISPATCH.rule_for("sequence") is None
        assert NO_RULE.pre is None and NO_RULE.post is None

    def test_extended_is_superset(self):
        assert set(DEFAULT_DISPATCH) < set(EXTENDED_DISPATCH)
        for kind in ("restriction", "enumeration", "pattern", "maxLength", "group", "attributeGroup"):
            assert kind in EXTENDED_DISPATCH

    def test_tables_are_immutable(self):
        with pytest.raises(TypeError):
            DEFAULT_DISPATCH["sequence"] = NO_RULE
        with pytest.raises(TypeError):
            DEFAULT_DISPATCH._rules["sequence"] = NO_RULE

    def test_with_rules_returns_new_table(self):
        rule = DispatchRule(pre=keyed("name"))
        table = DEFAULT_DISPATCH.with_rules(group=rule)
        assert table["group"] is rule
        assert "group" not in DEFAULT_DISPATCH
        assert len(table) == len(DEFAULT_DISPATCH) + 1

    def test_without(self):
        table = DEFAULT_DISPATCH.without("documentation", "extension")
        assert set(table) == {"element", "complexType", "simpleType", "attribute"}

    def test_repr(self):
        assert repr(DispatchTable({"b": NO_RULE, "a": NO_RULE})) == "DispatchTable(['a', 'b'])"


class TestHooks:
    options = SchemaConfig()

    def test_identifier_precedence(self):
        element = node("attribute", name="lang", ref="xml:lang")
        assert identifier(element, ("name", "ref")) == "lang"
        assert identifier(element, ("ref", "name")) == "xml:lang"
        assert identifier(node("element"), ("name", "ref")) is None

    def test_keyed_placement(self):
        assert keyed("name", "ref")(self.options, ObjectContext(), node("element", name="Foo")) == Placement("Foo")

    def test_keyed_anonymous(self):
        pre = keyed("name", "ref", anonymous=True)
        assert pre(self.options, ObjectContext(), node("complexType")) == Placement()

    def test_keyed_missing(self):
        with pytest.raises(MissingIdentifierError, match="'element' has neither 'name' nor 'ref' in 'Foo'"):
            keyed("name", "ref")(self.options, ObjectContext(path="Foo"), node("element"))

    def test_keyed_missing_skip(self, caplog):
        options = SchemaConfig(on_missing_identifier="skip")
        assert keyed("name", "ref")(options, ObjectContext(), node("element")) is None
        assert "Skipping 'element'" in caplog.text

    def test_base_into_properties(self):
        placement = base_into_properties(self.options, ObjectContext(), node("extension", base="Address"))
        assert placement == Placement("properties", {"base": "Address"})

    def test_extension_without_base(self):
        assert base_into_properties(self.options, ObjectContext(), node("extension")) == Placement("properties")

    def test_documentation_comment(self):
        placement = documentation_comment(self.options, ObjectContext(), node("documentation", "  Text \n"))
        assert placement == Placement(None, {"comment": "Text"})
        assert documentation_comment(self.options, ObjectContext(), node("documentation")) == Placement()

    def test_append_enumeration(self):
        context = ObjectContext()
        append_enumeration(self.options, context, node("enumeration", value="a"))
        append_enumeration(self.options, context, node("enumeration", value="b"))
        append_enumeration(self.options, context, node("enumeration"))
        assert context["enumeration"] == ["a", "b"]

    def test_isolate(self):
        assert isolate(self.options, ObjectContext(), node("enumeration", value="a")) == Placement(isolated=True)

    def test_facet_value_is_isolated(self):
        placement = facet_value(self.options, ObjectContext(), node("maxLength", value="5"))
        assert placement == Placement(None, {"maxLength": "5"}, isolated=True)
        assert facet_value(self.options, ObjectContext(), node("pattern")) == Placement(isolated=True)

    def test_enumeration_rule_walks_isolated(self):
        rule = EXTENDED_DISPATCH["enumeration"]
        assert rule.pre is isolate
        assert rule.post is append_enumeration
