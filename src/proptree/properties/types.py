"""Immutable, interned property value types.

A property type describes what values a definition accepts and what its
default is.  Types are flyweights: equal-valued descriptors are shared
through a weakly-held table, so every definition declared as
``StringPropertyType.intern(0, 64, "")`` points at the same object.  Once
no definition holds a type any more, its table entry disappears with it.
"""

from __future__ import annotations

import sys
import threading
import weakref
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar

from proptree.core.errors import InvalidArgumentError


class PropertyType(ABC):
    """Base class for property value types."""

    @property
    @abstractmethod
    def default(self) -> Any: ...

    @abstractmethod
    def validate(self, value: Any) -> None:
        """Raise ``InvalidArgumentError`` if *value* does not fit the type."""

    def is_valid(self, value: Any) -> bool:
        try:
            self.validate(value)
        except InvalidArgumentError:
            return False
        return True


class _InternTable:
    """Weak-valued canonical instance table.

    The lock makes lookup-then-insert atomic, so two threads interning
    equal values always get the same object back.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: weakref.WeakValueDictionary[tuple, PropertyType] = (
            weakref.WeakValueDictionary()
        )

    def get_or_insert(self, key: tuple, candidate: PropertyType) -> PropertyType:
        with self._lock:
            existing = self._entries.get(key)
            if existing is not None:
                return existing
            self._entries[key] = candidate
            return candidate

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


@dataclass(frozen=True, eq=True)
class StringPropertyType(PropertyType):
    """String values bounded by length, with a default.

    Do not construct directly; use :meth:`intern` or :meth:`create`.
    """

    min_length: int
    max_length: int
    default_value: str

    _table: ClassVar[_InternTable] = _InternTable()

    @classmethod
    def intern(
        cls, min_length: int, max_length: int, default: str,
    ) -> StringPropertyType:
        """Return the canonical instance for these bounds and default.

        Raises ``InvalidArgumentError`` if *default* is ``None``, if its
        length falls outside ``[min_length, max_length]``, or if
        *min_length* is negative.
        """
        if default is None:
            raise InvalidArgumentError("Default value cannot be None")
        if not isinstance(default, str):
            raise InvalidArgumentError(
                f"Default value must be a string, got {type(default).__name__}"
            )
        if len(default) < min_length or len(default) > max_length:
            raise InvalidArgumentError(
                f"Default value length {len(default)} is outside "
                f"[{min_length}, {max_length}]"
            )
        if min_length < 0:
            raise InvalidArgumentError(
                f"Minimum length cannot be negative: {min_length}"
            )

        candidate = cls(min_length, max_length, default)
        key = (cls.__name__, min_length, max_length, default)
        return cls._table.get_or_insert(key, candidate)

    @classmethod
    def create(cls) -> StringPropertyType:
        """Unbounded string type with an empty default."""
        return cls.intern(0, sys.maxsize, "")

    @classmethod
    def cache_size(cls) -> int:
        """Number of live interned string types."""
        return len(cls._table)

    @property
    def default(self) -> str:
        return self.default_value

    def validate(self, value: Any) -> None:
        if not isinstance(value, str):
            raise InvalidArgumentError(
                f"Expected a string, got {type(value).__name__}"
            )
        if not self.min_length <= len(value) <= self.max_length:
            raise InvalidArgumentError(
                f"String length {len(value)} is outside "
                f"[{self.min_length}, {self.max_length}]"
            )

    def __str__(self) -> str:
        return f"string[{self.min_length}..{self.max_length}]"
