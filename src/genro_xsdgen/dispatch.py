# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Type-dispatch table: per element-kind rules for the transformer.

A DispatchRule bundles three optional parts:

- pre: called before descending into a node. It returns a Placement that
  tells the transformer where the node's content goes: a new nested
  context at Placement.key, or the current context when key is None.
  Placement.parent_values are scalar values the transformer writes on the
  current context first. With isolated=True the node is walked into a
  detached context that is then discarded, so its subtree (annotations of
  an enumeration value, say) cannot write onto the current context.
  Returning None drops the node. Pre hooks never mutate contexts
  themselves; the transformer is the only inserter.
- post: called after descending, with the outer context.
- ignored_attrs: attribute local names not copied into the node's context.

Hook signatures:

    pre(options, context, node) -> Placement | None
    post(options, context, node) -> None

Tables are immutable and passed explicitly to the transformer. Two are
provided: DEFAULT_DISPATCH with the core XSD constructs, and
EXTENDED_DISPATCH that also records restrictions, facets and groups.

Example:
    >>> table = DEFAULT_DISPATCH.with_rules(group=DispatchRule(pre=keyed('name', 'ref')))
    >>> table.rule_for('group').ignored_attrs
    frozenset()
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Optional

from .const import (
    BASE_KEY,
    COMMENT_KEY,
    ENUMERATION_KEY,
    ON_MISSING_SKIP,
    PROPERTIES_KEY,
)
from .datatypes import FACET_NAMES
from .exceptions import MissingIdentifierError
from .utils import is_empty_string, local_name

if TYPE_CHECKING:
    from .config import SchemaConfig
    from .context import ObjectContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    """Where a node's content goes, as decided by a pre hook."""

    key: str | None = None
    parent_values: Mapping[str, Any] = field(default_factory=dict)
    isolated: bool = False


PreHook = Callable[["SchemaConfig", "ObjectContext", ET.Element], Optional[Placement]]
PostHook = Callable[["SchemaConfig", "ObjectContext", ET.Element], None]


@dataclass(frozen=True)
class DispatchRule:
    """Processing rule for one element kind."""

    pre: PreHook | None = None
    post: PostHook | None = None
    ignored_attrs: frozenset[str] = frozenset()


# Rule applied to element kinds missing from the table: fold into the parent
NO_RULE = DispatchRule()


class DispatchTable(Mapping):
    """Immutable mapping from element local name to DispatchRule."""

    def __init__(self, rules: Mapping[str, DispatchRule] | None = None):
        self._rules = MappingProxyType(dict(rules or {}))

    def __getitem__(self, kind: str) -> DispatchRule:
        return self._rules[kind]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"DispatchTable({sorted(self._rules)!r})"

    def rule_for(self, kind: str) -> DispatchRule | None:
        """Rule for kind, None if the kind has no rule."""
        return self._rules.get(kind)

    def with_rules(self, rules: Mapping[str, DispatchRule] | None = None, **kwargs: DispatchRule) -> DispatchTable:
        """New table with rules added or replaced."""
        merged = dict(self._rules)
        merged.update(rules or {})
        merged.update(kwargs)
        return DispatchTable(merged)

    def without(self, *kinds: str) -> DispatchTable:
        """New table without the given kinds."""
        return DispatchTable({k: v for k, v in self._rules.items() if k not in kinds})


# =============================================================================
# Hooks
# =============================================================================


def identifier(node: ET.Element, precedence: tuple[str, ...]) -> str | None:
    """First non-empty attribute of node among precedence, or None."""
    for attr_name in precedence:
        value = node.get(attr_name)
        if not is_empty_string(value):
            return value
    return None


def keyed(*precedence: str, anonymous: bool = False) -> PreHook:
    """Pre hook nesting a node under its identifier.

    Args:
        precedence: Attribute names tried in order ('name', 'ref').
        anonymous: If True, a node with no identifier is legal and folds
            into the current context. Otherwise the missing identifier
            raises MissingIdentifierError, or drops the node when
            options.on_missing_identifier is 'skip'.
    """

    def pre(options: SchemaConfig, context: ObjectContext, node: ET.Element) -> Placement | None:
        key = identifier(node, precedence)
        if key is not None:
            return Placement(key)
        if anonymous:
            return Placement()
        kind = local_name(node.tag)
        if options.on_missing_identifier == ON_MISSING_SKIP:
            logger.warning("Skipping '%s' without %s in '%s'", kind, "/".join(precedence), context.path)
            return None
        raise MissingIdentifierError(kind, context.path)

    return pre


def base_into_properties(options: SchemaConfig, context: ObjectContext, node: ET.Element) -> Placement:
    """extension: record base on the current context, descend into 'properties'."""
    base = node.get(BASE_KEY)
    return Placement(PROPERTIES_KEY, {BASE_KEY: base} if base is not None else {})


def base_inline(options: SchemaConfig, context: ObjectContext, node: ET.Element) -> Placement:
    """restriction: record base on the current context, no nesting."""
    base = node.get(BASE_KEY)
    return Placement(None, {BASE_KEY: base} if base is not None else {})


def documentation_comment(options: SchemaConfig, context: ObjectContext, node: ET.Element) -> Placement:
    """documentation: copy the text into the current context as 'comment'."""
    text = (node.text or "").strip()
    return Placement(None, {COMMENT_KEY: text} if text else {})


def isolate(options: SchemaConfig, context: ObjectContext, node: ET.Element) -> Placement:
    """Walk the node apart from the current context."""
    return Placement(isolated=True)


def facet_value(options: SchemaConfig, context: ObjectContext, node: ET.Element) -> Placement:
    """Facet: store the facet value on the current context under the facet name."""
    value = node.get("value")
    return Placement(None, {local_name(node.tag): value} if value is not None else {}, isolated=True)


def append_enumeration(options: SchemaConfig, context: ObjectContext, node: ET.Element) -> None:
    value = node.get("value")
    if value is not None:
        context.append_value(ENUMERATION_KEY, value)


# =============================================================================
# Tables
# =============================================================================

_NAME_REF = frozenset({"name", "ref"})

DEFAULT_DISPATCH = DispatchTable(
    {
        "element": DispatchRule(pre=keyed("name", "ref"), ignored_attrs=_NAME_REF),
        "complexType": DispatchRule(pre=keyed("name", "ref", anonymous=True), ignored_attrs=_NAME_REF),
        "simpleType": DispatchRule(pre=keyed("name", "ref", anonymous=True), ignored_attrs=_NAME_REF),
        # ref wins over name for attributes
        "attribute": DispatchRule(pre=keyed("ref", "name"), ignored_attrs=_NAME_REF),
        "extension": DispatchRule(pre=base_into_properties, ignored_attrs=frozenset({BASE_KEY})),
        "documentation": DispatchRule(pre=documentation_comment),
    }
)

EXTENDED_DISPATCH = DEFAULT_DISPATCH.with_rules(
    {
        facet: DispatchRule(pre=facet_value, ignored_attrs=frozenset({"value"}))
        for facet in sorted(FACET_NAMES - {ENUMERATION_KEY})
    },
    group=DispatchRule(pre=keyed("name", "ref"), ignored_attrs=_NAME_REF),
    attributeGroup=DispatchRule(pre=keyed("name", "ref"), ignored_attrs=_NAME_REF),
    restriction=DispatchRule(pre=base_inline, ignored_attrs=frozenset({BASE_KEY})),
    enumeration=DispatchRule(pre=isolate, post=append_enumeration, ignored_attrs=frozenset({"value"})),
)
