# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for SchemaConfig and schema sources."""

from pathlib import Path

import pytest

from genro_xsdgen import ConfigError, SchemaConfig, SchemaIOError, UnsupportedSourceError
from genro_xsdgen.sources import FileSchemaSource, UrlSchemaSource, source_for


class TestSchemaConfig:
    def test_defaults(self):
        config = SchemaConfig(schema_file="a.xsd")
        assert config.on_duplicate == "error"
        assert config.on_missing_identifier == "error"
        assert config.namespaces == {}
        assert config.extended is False
        assert config.encoding is None
        assert config.validate() is config

    def test_from_dict_aliases(self):
        """camelCase option names map to fields."""
        config = SchemaConfig.from_dict(
            {"schemaFile": "a.xsd", "onDuplicate": "last_wins", "outputDir": "out", "namespaces": {"t": "urn:t"}}
        )
        assert config.schema_file == "a.xsd"
        assert config.on_duplicate == "last_wins"
        assert config.output_dir == "out"
        assert config.namespaces == {"t": "urn:t"}

    def test_from_dict_schema_url(self):
        assert SchemaConfig.from_dict({"schemaURL": "http://x/a.xsd"}).schema_url == "http://x/a.xsd"

    def test_from_dict_unknown_option(self):
        with pytest.raises(ConfigError, match="schemaFiel"):
            SchemaConfig.from_dict({"schemaFiel": "a.xsd"})

    def test_both_sources(self):
        with pytest.raises(ConfigError, match="both"):
            SchemaConfig(schema_file="a.xsd", schema_url="http://x/a.xsd").validate()

    def test_neither_source(self):
        with pytest.raises(ConfigError, match="either"):
            SchemaConfig().validate()

    def test_blank_source_counts_as_missing(self):
        with pytest.raises(ConfigError):
            SchemaConfig(schema_file="  ").validate()

    def test_path_source(self):
        config = SchemaConfig(schema_file=Path("a.xsd"))
        assert config.has_file
        assert not config.has_url

    @pytest.mark.parametrize("option", ["on_duplicate", "on_missing_identifier"])
    def test_invalid_policy(self, option):
        with pytest.raises(ConfigError, match=option):
            SchemaConfig(schema_file="a.xsd", **{option: "ignore"}).validate()

    def test_invalid_namespaces(self):
        with pytest.raises(ConfigError):
            SchemaConfig(schema_file="a.xsd", namespaces=["xs"]).validate()

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            SchemaConfig().validate()


class TestSources:
    def test_file_source_loads(self, write_xsd):
        path = write_xsd('<xs:element name="Foo"/>')
        data = FileSchemaSource(path).load()
        assert isinstance(data, bytes)
        assert b'name="Foo"' in data

    def test_file_source_explicit_encoding(self, tmp_path):
        """An explicit encoding decodes the file before parsing."""
        path = tmp_path / "latin.xsd"
        path.write_bytes('<xs:element name="Caf\xe9"/>'.encode("latin-1"))
        assert FileSchemaSource(path, encoding="latin-1").load() == '<xs:element name="Caf\xe9"/>'

    def test_file_source_kwargs(self):
        source = FileSchemaSource("a.xsd", encoding="latin-1")
        assert source._kw == {"path": "a.xsd", "encoding": "latin-1"}
        assert repr(source) == "FileSchemaSource(encoding='latin-1', path='a.xsd')"

    def test_too_many_positional(self):
        with pytest.raises(TypeError):
            FileSchemaSource("a.xsd", "utf-8")

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemaIOError) as exc_info:
            FileSchemaSource(tmp_path / "missing.xsd").load()
        assert isinstance(exc_info.value, OSError)

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "bad.xsd"
        path.write_bytes(b"<a>\xff\xfe</a>")
        with pytest.raises(SchemaIOError):
            FileSchemaSource(path, encoding="utf-8").load()

    def test_unknown_encoding(self, write_xsd):
        path = write_xsd('<xs:element name="Foo"/>')
        with pytest.raises(SchemaIOError, match="no-such-codec"):
            FileSchemaSource(path, encoding="no-such-codec").load()

    def test_url_source_unsupported(self):
        with pytest.raises(UnsupportedSourceError):
            UrlSchemaSource("http://example.com/a.xsd").load()

    def test_url_source_kwargs(self):
        source = UrlSchemaSource("http://example.com/a.xsd")
        assert source._kw == {"url": "http://example.com/a.xsd"}
        assert repr(source) == "UrlSchemaSource(url='http://example.com/a.xsd')"

    def test_source_for(self):
        assert isinstance(source_for(SchemaConfig(schema_file="a.xsd")), FileSchemaSource)
        assert isinstance(source_for(SchemaConfig(schema_url="http://x/a.xsd")), UrlSchemaSource)
