# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Schema driver - one top-level pass from config to emitted scaffolding.

Steps of process_schema():

1. validate the config (before any I/O);
2. load the schema document from the configured source;
3. parse it and locate the xs:schema element;
4. transform it into the model {'elements': {...}};
5. hand each top-level construct to the emitter, once per name.

process_schema and build_model work from sync code and can be awaited
from async code (@smartasync); the transform itself is synchronous over a
fully loaded document.

Example:
    >>> process_schema({'schemaFile': 'order.xsd', 'output_dir': 'generated'})
    True
    >>> model = build_model(SchemaConfig(schema_file='order.xsd'))
    >>> model['elements']['Order']['type']
    'OrderType'
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from genro_toolbox import smartasync, smartawait

from .config import SchemaConfig
from .const import ELEMENTS_KEY
from .context import ObjectContext
from .dispatch import DEFAULT_DISPATCH, EXTENDED_DISPATCH, DispatchTable
from .emitter import Emitter, LoggingEmitter, ScaffoldEmitter
from .exceptions import SchemaParseError
from .query import SchemaDocument
from .sources import source_for
from .transformer import SchemaTransformer

logger = logging.getLogger(__name__)


class SchemaDriver:
    """Runs the load / parse / transform / emit pipeline for one config.

    Attributes:
        config: The SchemaConfig of this run.
        dispatch: DispatchTable for the transformer. Defaults to
            EXTENDED_DISPATCH when config.extended, else DEFAULT_DISPATCH.
    """

    def __init__(self, config: SchemaConfig | Mapping[str, Any], dispatch: DispatchTable | None = None):
        self.config = config if isinstance(config, SchemaConfig) else SchemaConfig.from_dict(config)
        if dispatch is None:
            dispatch = EXTENDED_DISPATCH if self.config.extended else DEFAULT_DISPATCH
        self.dispatch = dispatch

    async def _load_document(self) -> SchemaDocument:
        self.config.validate()
        source = source_for(self.config)
        data = await smartawait(source.load())
        return SchemaDocument.from_string(data, self.config.namespaces)

    def transform_document(self, document: SchemaDocument) -> ObjectContext:
        """Transform every xs:schema root of document into a fresh model.

        Raises:
            SchemaParseError: If the document has no xs:schema root.
        """
        model = ObjectContext()
        elements = model.insert_context(ELEMENTS_KEY)
        transformer = SchemaTransformer(self.config, self.dispatch)

        roots = 0
        for schema in document.schema_roots():
            transformer.transform(elements, schema)
            roots += 1
        if not roots:
            raise SchemaParseError(f"No xs:schema element found, document element is '{document.root.tag}'")

        logger.info("Built model with %d top-level constructs", sum(1 for _ in elements.contexts()))
        return model

    async def _build_model(self) -> ObjectContext:
        document = await self._load_document()
        return self.transform_document(document)

    @smartasync
    async def build_model(self) -> ObjectContext:
        """Load, parse and transform the schema; no emission."""
        return await self._build_model()

    def default_emitter(self) -> Emitter:
        if self.config.output_dir is not None:
            return ScaffoldEmitter(self.config.output_dir)
        return LoggingEmitter()

    def emit(self, model: ObjectContext, emitter: Emitter | None = None) -> list[Any]:
        """Call emitter once per top-level construct. Returns the results."""
        emitter = emitter or self.default_emitter()
        return [emitter(name, context, model) for name, context in model[ELEMENTS_KEY].contexts()]

    @smartasync
    async def process(self, emitter: Emitter | None = None) -> bool:
        """Run the whole pipeline.

        Returns:
            True on success.

        Raises:
            ConfigError: Neither or both sources, or invalid policy.
            SchemaIOError: Schema file unreadable.
            UnsupportedSourceError: URL source requested.
            SchemaParseError: Malformed XML or no xs:schema root.
            DuplicateKeyError: Sibling key collision (on_duplicate='error').
            MissingIdentifierError: Construct without name/ref
                (on_missing_identifier='error').
        """
        model = await self._build_model()
        self.emit(model, emitter)
        return True


def process_schema(
    config: SchemaConfig | Mapping[str, Any],
    emitter: Emitter | None = None,
    dispatch: DispatchTable | None = None,
) -> Any:
    """Process one schema. True on success; awaitable in async code.

    Args:
        config: SchemaConfig or options mapping (schemaFile, schemaURL,
            namespaces, ...).
        emitter: Callable invoked once per top-level construct. Defaults
            to ScaffoldEmitter when config.output_dir is set, else to
            LoggingEmitter.
        dispatch: Alternate DispatchTable.
    """
    return SchemaDriver(config, dispatch).process(emitter)


def build_model(
    config: SchemaConfig | Mapping[str, Any],
    dispatch: DispatchTable | None = None,
) -> Any:
    """Model of one schema, without emission; awaitable in async code."""
    return SchemaDriver(config, dispatch).build_model()
