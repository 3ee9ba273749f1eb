# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""SchemaTransformer - folds an XSD tree into an ObjectContext.

The walk is a single top-down pass. For each node:

1. the node's attributes (minus the rule's ignored ones) are copied into
   the current context;
2. each element child is dispatched by local name through the
   DispatchTable: the pre hook decides where the child's content goes
   (new nested context, current context or a discarded detached one),
   the transformer recurses, then the post hook runs with the outer
   context.

Children without a rule (sequence, choice, annotation, complexContent...)
are folded flatly into the current context.

Example:
    >>> doc = SchemaDocument.from_string(xsd_text)
    >>> model = SchemaTransformer().transform(ObjectContext(), doc.root)
    >>> model.as_dict()
    {'Foo': {'type': 'xs:string'}}
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Collection

from .config import SchemaConfig
from .context import ObjectContext
from .dispatch import DEFAULT_DISPATCH, NO_RULE, DispatchTable, Placement
from .query import attributes, element_children
from .utils import local_name

logger = logging.getLogger(__name__)


class SchemaTransformer:
    """Recursive XSD-tree to ObjectContext transformer.

    Attributes:
        options: SchemaConfig handed to every hook; its on_duplicate and
            on_missing_identifier policies drive collision handling.
        dispatch: DispatchTable used to look up rules.
    """

    def __init__(self, options: SchemaConfig | None = None, dispatch: DispatchTable | None = None):
        self.options = options if options is not None else SchemaConfig()
        self.dispatch = dispatch if dispatch is not None else DEFAULT_DISPATCH

    def transform(
        self,
        context: ObjectContext,
        node: ET.Element,
        ignored_attrs: Collection[str] = frozenset(),
    ) -> ObjectContext:
        """Fold node into context and return context.

        Args:
            context: Context receiving the node's attributes and children.
            node: Schema element to walk.
            ignored_attrs: Attribute local names not copied into context.

        Returns:
            The same context, populated.

        Raises:
            DuplicateKeyError: Two siblings resolved to the same key and
                on_duplicate is 'error'.
            MissingIdentifierError: A keyed construct has neither name nor
                ref and on_missing_identifier is 'error'.
        """
        self.copy_attributes(context, node, ignored_attrs)

        for child in element_children(node):
            rule = self.dispatch.rule_for(local_name(child.tag)) or NO_RULE

            child_context = context
            if rule.pre is not None:
                placement = rule.pre(self.options, context, child)
                if placement is None:
                    continue
                child_context = self.place(context, placement)

            self.transform(child_context, child, rule.ignored_attrs)

            if rule.post is not None:
                rule.post(self.options, context, child)

        return context

    def copy_attributes(
        self,
        context: ObjectContext,
        node: ET.Element,
        ignored_attrs: Collection[str] = frozenset(),
    ) -> ObjectContext:
        """Copy node attributes into context by local name. Idempotent."""
        for name, value in attributes(node):
            if name not in ignored_attrs:
                context.set_value(name, value, on_duplicate=self.options.on_duplicate)
        return context

    def place(self, context: ObjectContext, placement: Placement) -> ObjectContext:
        """Apply a Placement to context and return the child context."""
        for key, value in placement.parent_values.items():
            context.set_value(key, value, on_duplicate=self.options.on_duplicate)
        if placement.isolated:
            return ObjectContext(path=context.path)
        if placement.key is None:
            return context
        logger.debug("Dispatching '%s'", context.child_path(placement.key))
        return context.insert_context(placement.key, on_duplicate=self.options.on_duplicate)


def transform(
    context: ObjectContext,
    node: ET.Element,
    ignored_attrs: Collection[str] = frozenset(),
    options: SchemaConfig | None = None,
    dispatch: DispatchTable | None = None,
) -> ObjectContext:
    """Functional form of SchemaTransformer.transform()."""
    return SchemaTransformer(options, dispatch).transform(context, node, ignored_attrs)
