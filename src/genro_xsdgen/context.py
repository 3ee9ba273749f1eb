# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""ObjectContext - the nested model built from a schema.

An ObjectContext is an ordered mapping from string keys to either scalar
values (attribute values, text, facet values, enumeration lists) or nested
ObjectContext instances. The transformer creates one context per keyed
schema construct and never merges contexts after creation.

Writes go through three methods with different collision rules:

- set_value(): scalar write, plain overwrite. Overwriting a nested
  context with a scalar is a collision: DuplicateKeyError, or replacement
  with on_duplicate='last_wins'.
- insert_context(): creates a fresh nested context. An existing key is a
  collision: DuplicateKeyError, or replacement with on_duplicate='last_wins'.
- append_value(): appends to a list-valued key.

Example:
    >>> ctx = ObjectContext()
    >>> foo = ctx.insert_context('Foo')
    >>> foo.set_value('type', 'xs:string')
    >>> ctx.as_dict()
    {'Foo': {'type': 'xs:string'}}
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from typing import Any, Literal

from .const import ON_DUPLICATE_ERROR, ON_DUPLICATE_LAST_WINS
from .exceptions import DuplicateKeyError

logger = logging.getLogger(__name__)


class ObjectContext(Mapping):
    """Ordered, nested key/value model of one schema construct.

    Attributes:
        path: Dotted path of this context from the model root ('' for root).
    """

    def __init__(self, source: Mapping[str, Any] | None = None, path: str = ""):
        self._data: dict[str, Any] = {}
        self.path = path
        if source:
            self.fill_from(source)

    def fill_from(self, source: Mapping[str, Any]) -> None:
        """Populate from a mapping; nested mappings become nested contexts."""
        for key, value in source.items():
            if isinstance(value, Mapping):
                self.insert_context(key, on_duplicate=ON_DUPLICATE_LAST_WINS).fill_from(value)
            else:
                self.set_value(key, value)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ObjectContext:
        """Build a context tree from nested dicts."""
        return cls(data)

    # -------------------- mapping protocol --------------------------------

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ObjectContext):
            return self.as_dict() == other.as_dict()
        if isinstance(other, Mapping):
            return self.as_dict() == _plain(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ObjectContext({self.as_dict()!r})"

    # -------------------- writes --------------------------------

    def child_path(self, key: str) -> str:
        return f"{self.path}.{key}" if self.path else key

    def set_value(
        self,
        key: str,
        value: Any,
        on_duplicate: Literal["error", "last_wins"] = ON_DUPLICATE_ERROR,
    ) -> None:
        """Set a scalar value, overwriting a previous scalar.

        Args:
            key: Key to write.
            value: Scalar value.
            on_duplicate: Policy when key holds a nested context: 'error'
                raises, 'last_wins' replaces the context with the value.

        Raises:
            DuplicateKeyError: If key holds a nested context and
                on_duplicate is 'error'.
        """
        if isinstance(self._data.get(key), ObjectContext):
            if on_duplicate != ON_DUPLICATE_LAST_WINS:
                raise DuplicateKeyError(key, self.path)
            logger.debug("Replacing '%s' with a value (last wins)", self.child_path(key))
            del self._data[key]
        self._data[key] = value

    def insert_context(
        self,
        key: str,
        on_duplicate: Literal["error", "last_wins"] = ON_DUPLICATE_ERROR,
    ) -> ObjectContext:
        """Create a fresh nested context at key and return it.

        Args:
            key: Key of the new context.
            on_duplicate: 'error' raises on an existing key, 'last_wins'
                replaces the previous entry.

        Raises:
            DuplicateKeyError: If key exists and on_duplicate is 'error'.
        """
        if key in self._data:
            if on_duplicate != ON_DUPLICATE_LAST_WINS:
                raise DuplicateKeyError(key, self.path)
            logger.debug("Replacing '%s' (last wins)", self.child_path(key))
            del self._data[key]
        child = ObjectContext(path=self.child_path(key))
        self._data[key] = child
        return child

    def append_value(self, key: str, value: Any) -> None:
        """Append value to the list stored at key, creating it if needed.

        Raises:
            DuplicateKeyError: If key holds something other than a list.
        """
        current = self._data.setdefault(key, [])
        if not isinstance(current, list):
            raise DuplicateKeyError(key, self.path)
        current.append(value)

    # -------------------- reads --------------------------------

    def contexts(self) -> Iterator[tuple[str, ObjectContext]]:
        """Nested (key, context) pairs in insertion order."""
        for key, value in self._data.items():
            if isinstance(value, ObjectContext):
                yield key, value

    def scalars(self) -> Iterator[tuple[str, Any]]:
        """Non-context (key, value) pairs in insertion order."""
        for key, value in self._data.items():
            if not isinstance(value, ObjectContext):
                yield key, value

    def walk(self) -> Iterator[tuple[str, str, Any]]:
        """Depth-first (path, key, value) over the whole tree."""
        for key, value in self._data.items():
            path = self.child_path(key)
            yield path, key, value
            if isinstance(value, ObjectContext):
                yield from value.walk()

    # -------------------- serialization --------------------------------

    def as_dict(self) -> dict[str, Any]:
        """Deep copy as plain dicts and lists."""
        return _plain(self._data)

    def to_json(self, indent: int | None = 2) -> str:
        """JSON text of the model, used for diagnostic printing."""
        return json.dumps(self.as_dict(), indent=indent)

    def to_tytx(
        self,
        transport: Literal["json", "msgpack"] = "json",
        filename: str | None = None,
    ) -> str | bytes | None:
        """Serialize the model with genro-tytx.

        Args:
            transport: 'json' (text) or 'msgpack' (binary).
            filename: If given, write there and return None.

        Returns:
            Serialized data, or None when written to filename.
        """
        from genro_tytx import to_tytx as tytx_encode

        # genro_tytx uses transport=None for JSON
        result = tytx_encode(self.as_dict(), transport=None if transport == "json" else transport)
        if not filename:
            return result

        # Remove ::JS suffix for file (extension identifies format)
        if isinstance(result, str) and result.endswith("::JS"):
            result = result[:-4]
        mode = "wb" if transport == "msgpack" else "w"
        with open(filename, mode) as f:
            f.write(result)
        return None

    @classmethod
    def from_tytx(
        cls,
        data: str | bytes,
        transport: Literal["json", "msgpack"] = "json",
    ) -> ObjectContext:
        """Rebuild a model serialized by to_tytx()."""
        from genro_tytx import from_tytx as tytx_decode

        return cls.from_dict(tytx_decode(data, transport=None if transport == "json" else transport))


def _plain(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value
