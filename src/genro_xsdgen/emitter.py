# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Emitters - turn top-level schema constructs into source files.

process_schema hands every top-level construct of the model to an
emitter, once per name. An emitter is any callable

    emitter(name, context, model) -> Any

where context is the construct's ObjectContext and model the whole root
model (useful to resolve type references).

- LoggingEmitter: only logs the construct names.
- ScaffoldEmitter: renders a Jinja2 template into <snake_name>.py, by
  default a dataclass (or a str Enum for enumerated simple types).

Example:
    >>> emitter = ScaffoldEmitter('generated/')
    >>> process_schema(SchemaConfig(schema_file='order.xsd'), emitter=emitter)
"""

from __future__ import annotations

import keyword
import logging
from pathlib import Path
from typing import Any, Protocol

from jinja2 import Environment, FileSystemLoader

from .const import BASE_KEY, COMMENT_KEY, ELEMENTS_KEY, ENUMERATION_KEY, PROPERTIES_KEY
from .context import ObjectContext
from .datatypes import get_datatype, python_type_for
from .utils import to_class_name, to_snake_case

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

_TYPE_IMPORTS = {
    "Decimal": "from decimal import Decimal",
    "date": "from datetime import date",
    "datetime": "from datetime import datetime",
    "time": "from datetime import time",
}


class Emitter(Protocol):
    def __call__(self, name: str, context: ObjectContext, model: ObjectContext) -> Any: ...


class LoggingEmitter:
    """Emitter that only reports each construct."""

    def __call__(self, name: str, context: ObjectContext, model: ObjectContext) -> None:
        logger.info("Construct '%s' (%d keys)", name, len(context))


class ScaffoldEmitter:
    """Template-driven emitter writing one Python module per construct.

    Attributes:
        output_dir: Directory receiving the generated files.
        template_name: Template file rendered for each construct.
    """

    def __init__(
        self,
        output_dir: str | Path,
        template_name: str = "class.py.j2",
        template_dir: str | Path | None = None,
    ):
        self.output_dir = Path(output_dir)
        self.template_name = template_name
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir or TEMPLATE_DIR)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def __call__(self, name: str, context: ObjectContext, model: ObjectContext) -> Path:
        """Render the construct and write it. Returns the written path."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        target = self.output_dir / f"{to_snake_case(name)}.py"
        target.write_text(self.render(name, context, model), encoding="utf-8")
        logger.info("Emitted '%s' to %s", name, target)
        return target

    def render(self, name: str, context: ObjectContext, model: ObjectContext | None = None) -> str:
        template = self.env.get_template(self.template_name)
        return template.render(**self.describe(name, context, model))

    def describe(self, name: str, context: ObjectContext, model: ObjectContext | None = None) -> dict[str, Any]:
        """Template variables for one construct."""
        top_level = model.get(ELEMENTS_KEY, model) if model is not None else None
        known_types = {key for key, _ in top_level.contexts()} if top_level is not None else set()
        imports: set[str] = set()

        enumeration = context.get(ENUMERATION_KEY)
        members = []
        if isinstance(enumeration, list):
            imports.add("from enum import Enum")
            used: set[str] = set()
            for value in enumeration:
                member = _unique(to_snake_case(value).upper(), used)
                members.append({"name": member, "value": repr(value)})

        fields: list[dict[str, Any]] = []
        used_names: set[str] = set()
        for key, child in self._field_contexts(context):
            hint, default = self._field_type(child, known_types, imports)
            fields.append(
                {
                    "name": _unique(_identifier(key), used_names),
                    "source": key,
                    "hint": hint,
                    "default": default,
                    "comment": _line_comment(child.get(COMMENT_KEY)),
                }
            )
        # dataclass fields without default first
        fields.sort(key=lambda f: f["default"] is not None)
        if not members:
            if any(f["default"] and f["default"].startswith("field(") for f in fields):
                imports.add("from dataclasses import dataclass, field")
            else:
                imports.add("from dataclasses import dataclass")

        return {
            "name": name,
            "class_name": to_class_name(name),
            "comment": _docstring(context.get(COMMENT_KEY)),
            "base": context.get(BASE_KEY),
            "members": members,
            "fields": fields,
            "imports": sorted(imports),
        }

    def _field_contexts(self, context: ObjectContext):
        for key, child in context.contexts():
            if key == PROPERTIES_KEY:
                yield from self._field_contexts(child)
            else:
                yield key, child

    def _field_type(self, child: ObjectContext, known_types: set[str], imports: set[str]) -> tuple[str, str | None]:
        type_ref = child.get("type")
        if get_datatype(type_ref) is not None:
            hint = python_type_for(type_ref)
            if hint in _TYPE_IMPORTS:
                imports.add(_TYPE_IMPORTS[hint])
        elif type_ref and type_ref.split(":")[-1] in known_types:
            hint = to_class_name(type_ref)
        elif any(True for _ in child.contexts()):
            imports.add("from typing import Any")
            hint = "dict[str, Any]"
        else:
            hint = "str"

        max_occurs = child.get("maxOccurs", "1")
        if max_occurs == "unbounded" or (max_occurs.isdigit() and int(max_occurs) > 1):
            return f"list[{hint}]", "field(default_factory=list)"
        if child.get("minOccurs") == "0" or child.get("use") == "optional":
            return f"{hint} | None", "None"
        if child.get("default") is not None:
            return hint, repr(child["default"])
        return hint, None


def _docstring(text: str | None) -> str | None:
    """Text safe inside a triple-quoted docstring."""
    if not text:
        return None
    text = text.replace("\\", "\\\\").replace('"""', r'\"\"\"')
    if text.endswith('"'):
        text = text[:-1] + r'\"'
    return text


def _line_comment(text: str | None) -> str | None:
    """Text collapsed to a single comment line."""
    if not text:
        return None
    return " ".join(text.split()) or None


def _identifier(name: str) -> str:
    result = to_snake_case(name)
    return f"{result}_" if keyword.iskeyword(result) else result


def _unique(name: str, used: set[str]) -> str:
    candidate = name
    counter = 1
    while candidate in used:
        candidate = f"{name}_{counter}"
        counter += 1
    used.add(candidate)
    return candidate
