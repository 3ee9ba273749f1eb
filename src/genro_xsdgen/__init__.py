# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""genro-xsdgen - class scaffolding from XML Schema documents.

The core is a recursive transformer folding an XSD tree into a nested
ObjectContext model, driven by an explicit DispatchTable of per element
kind rules. The model is then handed to an emitter, once per top-level
construct.

Example:
    >>> from genro_xsdgen import SchemaConfig, build_model, process_schema
    >>>
    >>> model = build_model(SchemaConfig(schema_file='order.xsd'))
    >>> print(model.to_json())
    >>>
    >>> process_schema({'schemaFile': 'order.xsd', 'output_dir': 'generated'})
    True
"""

from .config import SchemaConfig
from .context import ObjectContext
from .dispatch import DEFAULT_DISPATCH, EXTENDED_DISPATCH, DispatchRule, DispatchTable, Placement, keyed
from .driver import SchemaDriver, build_model, process_schema
from .emitter import LoggingEmitter, ScaffoldEmitter
from .exceptions import (
    ConfigError,
    DuplicateKeyError,
    MissingIdentifierError,
    SchemaIOError,
    SchemaParseError,
    UnsupportedSourceError,
    XsdGenError,
)
from .query import NamespaceBindings, SchemaDocument, query
from .transformer import SchemaTransformer, transform

__all__ = [
    "SchemaConfig",
    "ObjectContext",
    "DEFAULT_DISPATCH",
    "EXTENDED_DISPATCH",
    "DispatchRule",
    "DispatchTable",
    "Placement",
    "keyed",
    "SchemaDriver",
    "build_model",
    "process_schema",
    "LoggingEmitter",
    "ScaffoldEmitter",
    "XsdGenError",
    "ConfigError",
    "SchemaIOError",
    "SchemaParseError",
    "UnsupportedSourceError",
    "DuplicateKeyError",
    "MissingIdentifierError",
    "NamespaceBindings",
    "SchemaDocument",
    "query",
    "SchemaTransformer",
    "transform",
]
