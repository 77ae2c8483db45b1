"""Property definitions owned by a registry node."""

from __future__ import annotations

from typing import TYPE_CHECKING

from proptree.core.enums import DefinitionFlag
from proptree.properties.types import PropertyType

if TYPE_CHECKING:
    from proptree.properties.registry import RegistryNode


class PropertyDefinition:
    """A named, typed property.

    Instances are created by :meth:`RegistryNode.add_definition` and never
    change afterwards; replacing a definition registers a new object under
    the same name.
    """

    __slots__ = ("_owner", "_name", "_description", "_type", "_flags")

    def __init__(
        self,
        owner: RegistryNode,
        name: str,
        description: str | None,
        property_type: PropertyType,
        flags: int = 0,
    ) -> None:
        self._owner = owner
        self._name = name
        self._description = description
        self._type = property_type
        self._flags = flags

    @property
    def owner(self) -> RegistryNode:
        return self._owner

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description or ""

    @property
    def type(self) -> PropertyType:
        return self._type

    @property
    def flags(self) -> int:
        return self._flags

    @property
    def is_internal(self) -> bool:
        return bool(self._flags & DefinitionFlag.INTERNAL)

    @property
    def qualified_name(self) -> str:
        """Fully-qualified name, e.g. ``.app.ui.Title``."""
        return f"{self._owner.namespace}.{self._name}"

    def __str__(self) -> str:
        return f"{self._name}({self._type})"

    def __repr__(self) -> str:
        return (
            f"PropertyDefinition(name={self._name!r}, "
            f"type={self._type!r}, flags={self._flags})"
        )
