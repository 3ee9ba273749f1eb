# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""String helpers used throughout the project."""

from __future__ import annotations

import re
from typing import Any

_NON_IDENTIFIER_CHARS = re.compile(r"[^0-9a-zA-Z_]")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def is_empty_string(value: Any) -> bool:
    """Return True unless value is a string with at least one non-blank char.

    Example:
        >>> is_empty_string('  ')
        True
        >>> is_empty_string(None)
        True
        >>> is_empty_string('a.xsd')
        False
    """
    return not isinstance(value, str) or not value.strip()


def strip_namespace(name: str) -> str:
    """Strip a namespace prefix: 'xs:string' -> 'string'."""
    return name[name.rfind(":") + 1:]


def local_name(qname: str) -> str:
    """Local part of an ElementTree qualified name.

    Handles both Clark notation and prefixed names:
    '{http://www.w3.org/2001/XMLSchema}element' -> 'element',
    'xs:element' -> 'element'.
    """
    if qname.startswith("{"):
        return qname.split("}", 1)[1]
    return strip_namespace(qname)


def namespace_uri(qname: str) -> str | None:
    """Namespace URI of a Clark-notation name, None when unqualified."""
    if qname.startswith("{"):
        return qname[1:].split("}", 1)[0]
    return None


def to_class_name(name: str) -> str:
    """Convert a schema name to a Python class name: 'purchase-order' -> 'PurchaseOrder'."""
    parts = [p for p in _NON_IDENTIFIER_CHARS.split(strip_namespace(name)) if p]
    result = "".join(p[0].upper() + p[1:] for p in parts)
    if not result or result[0].isdigit():
        result = "_" + result
    return result


def to_snake_case(name: str) -> str:
    """Convert a schema name to a snake_case identifier: 'shipTo' -> 'ship_to'.

    Acronyms stay together: 'USAddress' -> 'us_address'.
    """
    name = _CAMEL_BOUNDARY.sub("_", strip_namespace(name))
    name = _NON_IDENTIFIER_CHARS.sub("_", name).lower()
    name = re.sub(r"_+", "_", name).strip("_")
    if not name or name[0].isdigit():
        name = "_" + name
    return name
