# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for emitters and the scaffold template."""

import ast
import logging

import pytest

from genro_xsdgen import LoggingEmitter, ObjectContext, SchemaConfig, ScaffoldEmitter, build_model


@pytest.fixture
def sample_model(sample_xsd):
    return build_model(SchemaConfig(schema_file=sample_xsd))


@pytest.fixture
def extended_model(sample_xsd):
    return build_model(SchemaConfig(schema_file=sample_xsd, extended=True))


def render(model, name, tmp_path):
    emitter = ScaffoldEmitter(tmp_path)
    return emitter.render(name, model["elements"][name], model)


class TestScaffoldEmitter:
    def test_rendered_source_compiles(self, sample_model, tmp_path):
        for name, _ in sample_model["elements"].contexts():
            source = render(sample_model, name, tmp_path)
            compile(source, f"{name}.py", "exec")

    @pytest.mark.parametrize(
        "comment",
        ['Say "hi"', 'a """ b', 'ends with "', r"C:\temp\new", "trailing \\"],
    )
    def test_docstring_text_is_escaped(self, tmp_path, comment):
        """Quotes and backslashes in documentation keep the module valid."""
        context = ObjectContext.from_dict({"comment": comment, "a": {"comment": comment}})
        source = ScaffoldEmitter(tmp_path).render("T", context)
        tree = ast.parse(source)
        klass = next(n for n in tree.body if isinstance(n, ast.ClassDef))
        assert ast.get_docstring(klass, clean=False) == comment

    def test_dataclass_fields(self, sample_model, tmp_path):
        source = render(sample_model, "PurchaseOrderType", tmp_path)
        assert "@dataclass\nclass PurchaseOrderType:" in source
        assert "    ship_to: USAddress\n" in source
        assert "    items: Items\n" in source
        assert "    order_date: date\n" in source
        assert "    note: str | None = None\n" in source
        assert "from datetime import date" in source

    def test_fields_without_default_first(self, sample_model, tmp_path):
        source = render(sample_model, "PurchaseOrderType", tmp_path)
        assert source.index("order_date: date") < source.index("note: str | None")

    def test_extension_fields_and_base(self, sample_model, tmp_path):
        source = render(sample_model, "USAddress", tmp_path)
        assert "class USAddress:" in source
        assert "# extends Address" in source
        assert "    state: USState\n" in source
        assert "    zip: int\n" in source
        assert "    country: str\n" in source

    def test_repeated_element_is_list(self, sample_model, tmp_path):
        source = render(sample_model, "Items", tmp_path)
        assert "item: list[dict[str, Any]] = field(default_factory=list)" in source
        assert "from dataclasses import dataclass, field" in source
        assert "from typing import Any" in source

    def test_docstring_and_pass(self, sample_model, tmp_path):
        source = render(sample_model, "purchaseOrder", tmp_path)
        assert "class PurchaseOrder:" in source
        assert '    """Root of an order."""' in source
        assert "    pass\n" in source
        assert "from dataclasses import dataclass\n" in source

    def test_enumeration_renders_enum(self, extended_model, tmp_path):
        source = render(extended_model, "USState", tmp_path)
        assert "class USState(str, Enum):" in source
        assert "    AK = 'AK'\n" in source
        assert "    CA = 'CA'\n" in source
        assert "from enum import Enum" in source
        assert "dataclass" not in source
        compile(source, "us_state.py", "exec")

    def test_keyword_and_duplicate_field_names(self, tmp_path):
        model = ObjectContext.from_dict(
            {"elements": {"T": {"class": {"type": "xs:int"}, "Value": {}, "value": {"default": "x"}}}}
        )
        source = ScaffoldEmitter(tmp_path).render("T", model["elements"]["T"], model)
        assert "    class_: int\n" in source
        assert "    value: str\n" in source
        assert "    value_1: str = 'x'\n" in source
        compile(source, "t.py", "exec")

    def test_field_comment(self, tmp_path):
        context = ObjectContext.from_dict({"a": {"comment": "First\r\nline\rend"}})
        source = ScaffoldEmitter(tmp_path).render("T", context)
        assert "    # First line end\n" in source
        compile(source, "t.py", "exec")

    def test_call_writes_file(self, sample_model, tmp_path):
        out = tmp_path / "out"
        emitter = ScaffoldEmitter(out)
        path = emitter("USAddress", sample_model["elements"]["USAddress"], sample_model)
        assert path == out / "us_address.py"
        assert path.read_text(encoding="utf-8").startswith("# Generated by genro-xsdgen")

    def test_custom_template(self, tmp_path):
        (tmp_path / "names.j2").write_text("{{ class_name }}:{% for f in fields %} {{ f.source }}{% endfor %}")
        emitter = ScaffoldEmitter(tmp_path / "out", template_name="names.j2", template_dir=tmp_path)
        context = ObjectContext.from_dict({"shipTo": {}, "billTo": {}})
        assert emitter.render("order", context) == "Order: shipTo billTo"


class TestLoggingEmitter:
    def test_logs_construct(self, caplog):
        with caplog.at_level(logging.INFO, logger="genro_xsdgen.emitter"):
            LoggingEmitter()("Foo", ObjectContext({"type": "xs:string"}), ObjectContext())
        assert "Construct 'Foo' (1 keys)" in caplog.text
