# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""SchemaConfig - options for one process_schema call.

Exactly one schema source must be given: schema_file (a local path) or
schema_url. The remaining options tune the transform and emission.

Example:
    >>> config = SchemaConfig(schema_file='order.xsd', on_duplicate='last_wins')
    >>> config = SchemaConfig.from_dict({'schemaFile': 'order.xsd'})
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from .const import ON_DUPLICATE_ERROR, ON_DUPLICATE_POLICIES, ON_MISSING_ERROR, ON_MISSING_POLICIES
from .exceptions import ConfigError
from .utils import is_empty_string

# Option names accepted by from_dict besides the field names
_ALIASES = {
    "schemaURL": "schema_url",
    "schemaUrl": "schema_url",
    "schemaFile": "schema_file",
    "onDuplicate": "on_duplicate",
    "onMissingIdentifier": "on_missing_identifier",
    "outputDir": "output_dir",
}


@dataclass
class SchemaConfig:
    """Configuration of a schema processing run.

    Attributes:
        schema_url: URL of the XSD (not supported, see UrlSchemaSource).
        schema_file: Path of a local XSD file.
        namespaces: Extra prefix -> URI bindings for queries. 'xs' is
            always bound to the XML Schema namespace.
        on_duplicate: 'error' (default) or 'last_wins' when two siblings
            resolve to the same key.
        on_missing_identifier: 'error' (default) or 'skip' when a keyed
            construct has neither name nor ref.
        extended: Use the extended dispatch table (restrictions, facets,
            groups) instead of the default one.
        output_dir: Directory for the scaffold emitter. None disables
            file emission.
        encoding: Explicit encoding of the schema file. None (default) lets
            the XML declaration decide, UTF-8 when it declares none.
    """

    schema_url: str | None = None
    schema_file: str | Path | None = None
    namespaces: dict[str, str] = field(default_factory=dict)
    on_duplicate: str = ON_DUPLICATE_ERROR
    on_missing_identifier: str = ON_MISSING_ERROR
    extended: bool = False
    output_dir: str | Path | None = None
    encoding: str | None = None

    @classmethod
    def from_dict(cls, options: Mapping[str, Any]) -> SchemaConfig:
        """Build a config from an options mapping.

        Accepts field names and camelCase aliases (schemaURL, schemaFile...).

        Raises:
            ConfigError: On unknown option names.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in options.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise ConfigError(f"Unknown option '{key}'")
            kwargs[name] = value
        return cls(**kwargs)

    @property
    def has_url(self) -> bool:
        return not is_empty_string(self.schema_url)

    @property
    def has_file(self) -> bool:
        if isinstance(self.schema_file, Path):
            return True
        return not is_empty_string(self.schema_file)

    def validate(self) -> SchemaConfig:
        """Check the config before any I/O.

        Returns:
            Self for method chaining.

        Raises:
            ConfigError: If both or neither source is set, or a policy is unknown.
        """
        if self.has_url and self.has_file:
            raise ConfigError("Cannot specify both schemaURL and schemaFile")
        if not self.has_url and not self.has_file:
            raise ConfigError("Must specify either schemaURL or schemaFile")
        if self.on_duplicate not in ON_DUPLICATE_POLICIES:
            raise ConfigError(
                f"Invalid on_duplicate '{self.on_duplicate}', expected one of {ON_DUPLICATE_POLICIES}"
            )
        if self.on_missing_identifier not in ON_MISSING_POLICIES:
            raise ConfigError(
                f"Invalid on_missing_identifier '{self.on_missing_identifier}', "
                f"expected one of {ON_MISSING_POLICIES}"
            )
        if self.namespaces is not None and not isinstance(self.namespaces, Mapping):
            raise ConfigError("namespaces must be a mapping of prefix -> URI")
        return self
