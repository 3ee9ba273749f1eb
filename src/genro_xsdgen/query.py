# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Namespace-aware path queries over a parsed schema.

ElementTree's own find() raises on unbound prefixes and offers no parent
links, so this module evaluates a small path language itself:

    /xs:schema          root-relative: the document element, if it matches
    xs:complexType      element children in the XML Schema namespace
    *                   all element children
    //xs:element        descendants at any depth
    xs:sequence/*       chained child steps
    @*                  all attributes, as (local_name, value) pairs
    @xml:lang           one attribute
    .                   the context node itself

The prefix 'xs' is always bound to the XML Schema namespace and 'xml' to
the XML namespace. An unbound prefix resolves to "no namespace", so
'foo:bar' matches an un-namespaced <bar> instead of raising.

Results are QueryResult objects: lazy, restartable (every iteration
evaluates the query again) and in document order.

Example:
    >>> doc = SchemaDocument.from_string(xsd_text)
    >>> schema = doc.schema_roots().first()
    >>> [e.get('name') for e in query(schema, 'xs:element')]
    ['Foo', 'Bar']
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from genro_toolbox import smartsplit

from .const import XML_NS, XML_SCHEMA_NS, XSD_PREFIX
from .exceptions import SchemaParseError
from .utils import local_name, namespace_uri

logger = logging.getLogger(__name__)

# Marker for the virtual document node above the root element
_DOCUMENT = object()

_DESCENDANT_STEP = "**"


class NamespaceBindings(Mapping):
    """Prefix -> namespace URI bindings with 'xs' (and 'xml') always bound.

    User bindings are merged in but never override the reserved prefixes.
    """

    def __init__(self, bindings: Mapping[str, str] | None = None):
        merged = dict(bindings or {})
        if merged.get(XSD_PREFIX, XML_SCHEMA_NS) != XML_SCHEMA_NS:
            logger.debug("Ignoring user binding for reserved prefix '%s'", XSD_PREFIX)
        merged[XSD_PREFIX] = XML_SCHEMA_NS
        merged["xml"] = XML_NS
        self._bindings = merged

    def __getitem__(self, prefix: str) -> str:
        return self._bindings[prefix]

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def resolve(self, prefix: str | None) -> str | None:
        """URI bound to prefix; None (no namespace) when unbound."""
        if not prefix:
            return None
        return self._bindings.get(prefix)

    def __repr__(self) -> str:
        return f"NamespaceBindings({self._bindings!r})"


@dataclass(frozen=True)
class _Step:
    """One compiled location step."""

    axis: str  # self | child | descendant | attribute
    local: str = "*"
    uri: str | None = None
    any_namespace: bool = True

    def matches(self, qname: str) -> bool:
        if self.local != "*" and local_name(qname) != self.local:
            return False
        if self.any_namespace:
            return True
        return namespace_uri(qname) == self.uri


class QueryResult:
    """Lazy, restartable sequence of query matches."""

    def __init__(self, evaluate: Callable[[], Iterator[Any]]):
        self._evaluate = evaluate

    def __iter__(self) -> Iterator[Any]:
        return self._evaluate()

    def first(self) -> Any:
        """First match, or None."""
        return next(iter(self), None)

    def to_list(self) -> list[Any]:
        return list(self)


def compile_path(path: str, bindings: NamespaceBindings) -> tuple[bool, list[_Step]]:
    """Compile a path expression into (absolute, steps)."""
    path = path.strip()
    absolute = path.startswith("/")
    raw_steps = [s.strip() for s in smartsplit(path.replace("//", f"/{_DESCENDANT_STEP}/"), "/")]
    steps: list[_Step] = []
    for raw in raw_steps:
        if not raw:
            continue
        if raw == _DESCENDANT_STEP:
            steps.append(_Step("descendant"))
        elif raw == ".":
            steps.append(_Step("self"))
        elif raw.startswith("@"):
            steps.append(_name_step("attribute", raw[1:], bindings))
        else:
            steps.append(_name_step("child", raw, bindings))
    for step in steps[:-1]:
        if step.axis == "attribute":
            raise ValueError(f"Attribute step must be the last one in '{path}'")
    return absolute, steps


def _name_step(axis: str, name_test: str, bindings: NamespaceBindings) -> _Step:
    if name_test == "*":
        return _Step(axis)
    if ":" in name_test:
        prefix, local = name_test.split(":", 1)
        return _Step(axis, local=local, uri=bindings.resolve(prefix), any_namespace=False)
    # Unprefixed name test: no namespace
    return _Step(axis, local=name_test, uri=None, any_namespace=False)


def _element_children(node: Any) -> Iterator[ET.Element]:
    # Comments and processing instructions have a non-string tag
    return (child for child in node if isinstance(child.tag, str))


def _apply_step(step: _Step, nodes: Iterable[Any], root: ET.Element) -> Iterator[Any]:
    for node in nodes:
        if step.axis == "self":
            yield node
        elif step.axis == "attribute":
            if node is _DOCUMENT:
                continue
            for qname, value in node.attrib.items():
                if step.matches(qname):
                    yield local_name(qname), value
        elif step.axis == "descendant":
            if node is _DOCUMENT:
                yield node
                yield from (e for e in root.iter() if isinstance(e.tag, str))
            else:
                yield from (e for e in node.iter() if isinstance(e.tag, str))
        else:
            children = [root] if node is _DOCUMENT else _element_children(node)
            for child in children:
                if step.matches(child.tag):
                    yield child


def _document_order(nodes: Iterable[Any], root: ET.Element) -> Iterator[Any]:
    """Deduplicate nodes and yield them in document order."""
    unique = {id(n): n for n in nodes}
    position = {id(e): index for index, e in enumerate(root.iter())}
    yield from sorted(unique.values(), key=lambda n: -1 if n is _DOCUMENT else position[id(n)])


def _evaluate(node: ET.Element, absolute: bool, steps: list[_Step]) -> Iterator[Any]:
    current: Iterable[Any] = [_DOCUMENT] if absolute else [node]
    after_descendant = False
    for step in steps:
        current = _apply_step(step, current, node)
        if step.axis == "descendant":
            after_descendant = True
        elif after_descendant and step.axis != "attribute":
            # child steps over a descendant set interleave subtrees
            current = _document_order(current, node)
    seen: set[int] = set()
    for match in current:
        if match is _DOCUMENT:
            continue
        if isinstance(match, ET.Element):
            if id(match) in seen:
                continue
            seen.add(id(match))
        yield match


def query(
    node: ET.Element,
    path: str,
    namespaces: Mapping[str, str] | NamespaceBindings | None = None,
) -> QueryResult:
    """Evaluate path against node.

    For root-relative paths node is taken as the document element.

    Args:
        node: Context element.
        path: Path expression (see module docstring).
        namespaces: Extra prefix bindings; 'xs' is always bound.

    Returns:
        QueryResult yielding elements, or (local_name, value) pairs for
        attribute steps.
    """
    bindings = namespaces if isinstance(namespaces, NamespaceBindings) else NamespaceBindings(namespaces)
    absolute, steps = compile_path(path, bindings)
    return QueryResult(lambda: _evaluate(node, absolute, steps))


def element_children(node: ET.Element) -> QueryResult:
    """Element children of node in document order (child axis, '*')."""
    return QueryResult(lambda: _element_children(node))


def attributes(node: ET.Element) -> QueryResult:
    """Attributes of node as (local_name, value) pairs (attribute axis, '@*')."""
    return QueryResult(lambda: ((local_name(k), v) for k, v in node.attrib.items()))


class SchemaDocument:
    """A parsed schema document with namespace bindings and parent links.

    Attributes:
        root: Document element.
        namespaces: NamespaceBindings used by query().
    """

    def __init__(self, root: ET.Element, namespaces: Mapping[str, str] | None = None):
        self.root = root
        self.namespaces = NamespaceBindings(namespaces)
        self._parents: dict[int, ET.Element] | None = None

    @classmethod
    def from_string(cls, text: str | bytes, namespaces: Mapping[str, str] | None = None) -> SchemaDocument:
        """Parse schema text. Bytes are decoded as the XML declaration says.

        Raises:
            SchemaParseError: If text is not well-formed XML.
        """
        try:
            root = ET.fromstring(text)
        except ET.ParseError as exc:
            raise SchemaParseError(f"Malformed schema: {exc}", position=getattr(exc, "position", None)) from exc
        return cls(root, namespaces)

    def parent(self, node: ET.Element) -> ET.Element | None:
        """Parent element of node, None for the document element."""
        if self._parents is None:
            self._parents = {id(child): parent for parent in self.root.iter() for child in parent}
        return self._parents.get(id(node))

    def query(self, path: str, node: ET.Element | None = None) -> QueryResult:
        """Evaluate path from node (default: document element)."""
        return query(self.root if node is None else node, path, self.namespaces)

    def schema_roots(self) -> QueryResult:
        """The top-level xs:schema element (normally exactly one)."""
        return self.query(f"/{XSD_PREFIX}:schema")
