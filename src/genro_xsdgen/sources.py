# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Schema sources - where the XSD text comes from.

A SchemaSource is configured like a resolver: positional parameters are
named by class_args, keyword parameters with defaults by class_kwargs, and
all of them end up in self._kw. load() returns the schema document.

- FileSchemaSource: reads a local file as bytes, so the parser honours the
  encoding declared by the XML declaration. An explicit encoding overrides it.
- UrlSchemaSource: declared for symmetry with the schemaURL option;
  loading always fails with UnsupportedSourceError.

Example:
    >>> FileSchemaSource("order.xsd").load()[:5]
    b'<?xml'
    >>> FileSchemaSource("order.xsd", encoding="latin-1").load()[:5]
    '<?xml'
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .config import SchemaConfig
from .exceptions import SchemaIOError, UnsupportedSourceError

logger = logging.getLogger(__name__)


class SchemaSource:
    """Base class for schema sources.

    Class Attributes:
        class_kwargs: {param_name: default_value} for keyword parameters.
        class_args: positional parameter names, in order.
    """

    class_kwargs: dict[str, Any] = {}
    class_args: list[str] = []

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        if len(args) > len(self.class_args):
            raise TypeError(
                f"{type(self).__name__} takes {len(self.class_args)} positional arguments, got {len(args)}"
            )
        self._kw: dict[str, Any] = dict(self.class_kwargs)
        for parname, arg in zip(self.class_args, args):
            self._kw[parname] = arg
        self._kw.update(kwargs)
        self.init()

    def init(self) -> None:
        """Hook called at the end of __init__."""
        pass

    def load(self) -> str | bytes:
        """Return the schema document. MUST be overridden in subclasses."""
        raise NotImplementedError("Subclasses must implement load()")

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in self._kw.items())
        return f"{type(self).__name__}({params})"


class FileSchemaSource(SchemaSource):
    """Local file source.

    Without an encoding load() returns the raw bytes and the XML
    declaration decides the encoding. With an encoding it returns the
    decoded text.
    """

    class_kwargs = {"encoding": None}
    class_args = ["path"]

    def load(self) -> str | bytes:
        path = Path(self._kw["path"])
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise SchemaIOError(f"Cannot read schema file {path}: {exc}") from exc
        logger.info("Loaded schema from %s (%d bytes)", path, len(data))

        encoding = self._kw["encoding"]
        if encoding is None:
            return data
        try:
            return data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as exc:
            raise SchemaIOError(f"Cannot decode schema file {path} as {encoding}: {exc}") from exc


class UrlSchemaSource(SchemaSource):
    """URL source. Fetching schemas over the network is not supported."""

    class_args = ["url"]

    def load(self) -> str:
        raise UnsupportedSourceError(f"Loading schemas from URL is not supported: {self._kw['url']}")


def source_for(config: SchemaConfig) -> SchemaSource:
    """Source matching a validated config."""
    if config.has_url:
        return UrlSchemaSource(config.schema_url)
    return FileSchemaSource(config.schema_file, encoding=config.encoding)
