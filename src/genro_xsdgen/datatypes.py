# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Built-in XML Schema datatypes.

Static catalog of the datatypes defined in XML Schema Part 2
(https://www.w3.org/TR/xmlschema-2/#built-in-datatypes): primitive types
and the derived types built into the language.

For each type the catalog records:
- facets: constraining facets applicable to the type
- parent: base type for derived types (facets are inherited from it)
- legal_literals: closed lexical space, when the type has one
- python_type: the Python type name used when emitting scaffolding

Example:
    >>> from genro_xsdgen.datatypes import facets_for, python_type_for
    >>> python_type_for('xs:int')
    'int'
    >>> 'maxLength' in facets_for('xs:token')
    True
"""

from __future__ import annotations

from dataclasses import dataclass

from .utils import strip_namespace

STRING_FACETS = ("length", "minLength", "maxLength", "pattern", "enumeration", "whiteSpace")
ORDERED_FACETS = (
    "pattern",
    "enumeration",
    "whiteSpace",
    "maxInclusive",
    "maxExclusive",
    "minInclusive",
    "minExclusive",
)
DECIMAL_FACETS = ("totalDigits", "fractionDigits") + ORDERED_FACETS

FACET_NAMES = frozenset(STRING_FACETS + DECIMAL_FACETS)


@dataclass(frozen=True)
class Datatype:
    """A built-in datatype entry."""

    name: str
    facets: tuple[str, ...] = ()
    parent: str | None = None
    legal_literals: tuple[str, ...] | None = None
    python_type: str = "str"


def _catalog(*entries: Datatype) -> dict[str, Datatype]:
    return {entry.name: entry for entry in entries}


BUILTIN_DATATYPES: dict[str, Datatype] = _catalog(
    # Primitive datatypes
    Datatype("string", STRING_FACETS),
    Datatype(
        "boolean",
        ("pattern", "whiteSpace"),
        legal_literals=("0", "1", "true", "false"),
        python_type="bool",
    ),
    Datatype("decimal", DECIMAL_FACETS, python_type="Decimal"),
    Datatype("float", ORDERED_FACETS, python_type="float"),
    Datatype("double", ORDERED_FACETS, python_type="float"),
    Datatype("duration", ORDERED_FACETS),
    Datatype("dateTime", ORDERED_FACETS, python_type="datetime"),
    Datatype("time", ORDERED_FACETS, python_type="time"),
    Datatype("date", ORDERED_FACETS, python_type="date"),
    Datatype("gYearMonth", ORDERED_FACETS),
    Datatype("gYear", ORDERED_FACETS),
    Datatype("gMonthDay", ORDERED_FACETS),
    Datatype("gDay", ORDERED_FACETS),
    Datatype("gMonth", ORDERED_FACETS),
    Datatype("hexBinary", STRING_FACETS, python_type="bytes"),
    Datatype("base64Binary", STRING_FACETS, python_type="bytes"),
    Datatype("anyURI", STRING_FACETS),
    Datatype("QName", STRING_FACETS),
    Datatype("NOTATION", STRING_FACETS),
    # Derived datatypes
    Datatype("normalizedString", parent="string"),
    Datatype("token", parent="normalizedString"),
    Datatype("language", parent="token"),
    Datatype("NMTOKEN", parent="token"),
    Datatype("NMTOKENS", STRING_FACETS, parent="NMTOKEN", python_type="list[str]"),
    Datatype("Name", parent="token"),
    Datatype("NCName", parent="Name"),
    Datatype("ID", parent="NCName"),
    Datatype("IDREF", parent="NCName"),
    Datatype("IDREFS", STRING_FACETS, parent="IDREF", python_type="list[str]"),
    Datatype("ENTITY", parent="NCName"),
    Datatype("ENTITIES", STRING_FACETS, parent="ENTITY", python_type="list[str]"),
    Datatype("integer", parent="decimal", python_type="int"),
    Datatype("nonPositiveInteger", parent="integer", python_type="int"),
    Datatype("negativeInteger", parent="nonPositiveInteger", python_type="int"),
    Datatype("long", parent="integer", python_type="int"),
    Datatype("int", parent="long", python_type="int"),
    Datatype("short", parent="int", python_type="int"),
    Datatype("byte", parent="short", python_type="int"),
    Datatype("nonNegativeInteger", parent="integer", python_type="int"),
    Datatype("unsignedLong", parent="nonNegativeInteger", python_type="int"),
    Datatype("unsignedInt", parent="unsignedLong", python_type="int"),
    Datatype("unsignedShort", parent="unsignedInt", python_type="int"),
    Datatype("unsignedByte", parent="unsignedShort", python_type="int"),
    Datatype("positiveInteger", parent="nonNegativeInteger", python_type="int"),
)


def get_datatype(qname: str | None) -> Datatype | None:
    """Catalog entry for a (possibly prefixed) type name, None if not built-in."""
    if not qname:
        return None
    return BUILTIN_DATATYPES.get(strip_namespace(qname))


def facets_for(qname: str) -> tuple[str, ...]:
    """Facets applicable to a built-in type, inherited along the parent chain."""
    datatype = get_datatype(qname)
    while datatype is not None:
        if datatype.facets:
            return datatype.facets
        datatype = BUILTIN_DATATYPES.get(datatype.parent) if datatype.parent else None
    return ()


def python_type_for(qname: str | None, default: str = "str") -> str:
    """Python type name for a built-in type, default for anything else."""
    datatype = get_datatype(qname)
    return datatype.python_type if datatype is not None else default
