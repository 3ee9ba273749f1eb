# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Exceptions raised while loading and transforming a schema.

All errors derive from XsdGenError and are fatal to the current
process_schema call. Each one also derives from the builtin exception
that best matches it, so callers can catch OSError or ValueError too.
"""

from __future__ import annotations


class XsdGenError(Exception):
    """Base class for genro-xsdgen errors."""
    pass


class ConfigError(XsdGenError, ValueError):
    """Invalid configuration: no schema source, both sources, unknown policy."""
    pass


class SchemaIOError(XsdGenError, OSError):
    """Schema file missing or unreadable."""
    pass


class SchemaParseError(XsdGenError, ValueError):
    """Schema text is not well-formed XML.

    Attributes:
        position: (line, column) reported by the parser, or None.
    """

    def __init__(self, message: str, position: tuple[int, int] | None = None):
        super().__init__(message)
        self.position = position


class UnsupportedSourceError(XsdGenError, NotImplementedError):
    """Schema source kind that cannot be loaded (URLs)."""
    pass


class DuplicateKeyError(XsdGenError, ValueError):
    """Two siblings resolved to the same key in one context.

    Attributes:
        key: The colliding key.
        path: Dotted path of the context holding the key.
    """

    def __init__(self, key: str, path: str = ""):
        where = f" in '{path}'" if path else ""
        super().__init__(f"Duplicate key '{key}'{where}")
        self.key = key
        self.path = path


class MissingIdentifierError(XsdGenError, ValueError):
    """A keyed construct carries neither 'name' nor 'ref'.

    Attributes:
        kind: Local name of the construct (element, attribute, ...).
        path: Dotted path of the context that would have held it.
    """

    def __init__(self, kind: str, path: str = ""):
        where = f" in '{path}'" if path else ""
        super().__init__(f"'{kind}' has neither 'name' nor 'ref'{where}")
        self.kind = kind
        self.path = path
