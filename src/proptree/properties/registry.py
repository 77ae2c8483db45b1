"""Hierarchical property-definition registry.

A :class:`RegistryNode` owns a set of property definitions and a set of
child nodes.  Each non-root node is identified under its parent by a
*region*; the dotted chain of regions from the root gives the node's
namespace::

    root (region "")            namespace ""
    └── app                     namespace ".app"
        └── ui                  namespace ".app.ui"
            └── Title           qualified name ".app.ui.Title"

Definitions are also sorted into named groups.  The default group (named
``""``) always exists; removing any other group moves its definitions back
into the default group.

Nodes are not locked.  Build or mutate a tree from one thread at a time.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from proptree.core.enums import DefinitionFlag
from proptree.core.errors import (
    InvalidArgumentError,
    InvalidStateError,
    RegistrationConflictError,
)
from proptree.properties.definition import PropertyDefinition
from proptree.properties.types import PropertyType

logger = logging.getLogger(__name__)

DEFAULT_GROUP = ""


def is_valid_region_name(region: str) -> bool:
    """Regions are non-empty identifiers (``app``, ``ui_panel``, ``_x1``)."""
    return bool(region) and region.isidentifier()


def is_valid_property_name(name: str) -> bool:
    """Property names are identifiers that start with an uppercase letter."""
    return bool(name) and name[0].isupper() and name.isidentifier()


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


# ---------------------------------------------------------------------------
# Groups
# ---------------------------------------------------------------------------

class DefinitionGroup:
    """Named, ordered bucket of a node's definitions.

    The group only references definitions; the owning node's definition
    map is the source of truth.
    """

    def __init__(self, node: RegistryNode, name: str = DEFAULT_GROUP) -> None:
        if name != DEFAULT_GROUP and _is_blank(name):
            raise InvalidArgumentError(f"Illegal group name: {name!r}")
        self._node = node
        self._name = name
        self._defs: list[PropertyDefinition] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_default(self) -> bool:
        return self._name == DEFAULT_GROUP

    @property
    def definitions(self) -> list[PropertyDefinition]:
        """Snapshot of the group's definitions, in insertion order."""
        return list(self._defs)

    def add_definition(
        self,
        name: str,
        property_type: PropertyType,
        description: str | None = None,
        flags: int = 0,
    ) -> PropertyDefinition:
        """Register a definition on the owning node, filed under this group.

        Raises ``InvalidStateError`` once the group has been removed from
        its node.
        """
        if self._node._groups.get(self._name) is not self:
            raise InvalidStateError(f"Group {self._name!r} was removed")
        return self._node.add_definition(
            name, property_type, description, flags, group=self._name,
        )

    def _append(self, definition: PropertyDefinition) -> None:
        self._defs.append(definition)

    def _extend(self, definitions: list[PropertyDefinition]) -> None:
        self._defs.extend(definitions)

    def _discard(self, name: str) -> None:
        self._defs = [d for d in self._defs if d.name != name]

    def __len__(self) -> int:
        return len(self._defs)

    def __iter__(self) -> Iterator[PropertyDefinition]:
        return iter(list(self._defs))

    def __repr__(self) -> str:
        return f"DefinitionGroup(name={self._name!r}, size={len(self._defs)})"


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------

class RegistryNode:
    """Tree node owning child nodes, property definitions and groups.

    Parameters
    ----------
    region:
        Local name under the parent.  ``None`` or ``""`` makes a root.
    parent:
        Optional parent; when given the node is attached immediately.
    description:
        Free-form text.
    flags:
        Application-defined bitmask.
    """

    def __init__(
        self,
        region: str | None = None,
        parent: RegistryNode | None = None,
        description: str | None = None,
        flags: int = 0,
    ) -> None:
        if region is None:
            region = ""
        if region and not is_valid_region_name(region):
            raise InvalidArgumentError(
                f"{region!r} is an invalid region name: it must be a valid "
                "identifier"
            )

        self._region = region
        self._description = description
        self._flags = flags
        self._parent: RegistryNode | None = None

        self._children: dict[str, RegistryNode] = {}
        self._definitions: dict[str, PropertyDefinition] = {}
        self._groups: dict[str, DefinitionGroup] = {
            DEFAULT_GROUP: DefinitionGroup(self),
        }

        if parent is not None:
            self.attach(parent)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def region(self) -> str:
        return self._region

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def flags(self) -> int:
        return self._flags

    @property
    def parent(self) -> RegistryNode | None:
        return self._parent

    @property
    def is_root(self) -> bool:
        return not self._region

    @property
    def namespace(self) -> str:
        """Dotted path from the root, e.g. ``.app.ui``; ``""`` for a bare root."""
        if self._parent is None:
            return f".{self._region}" if self._region else ""
        return f"{self._parent.namespace}.{self._region}"

    # ------------------------------------------------------------------
    # Tree structure
    # ------------------------------------------------------------------

    def attach(self, parent: RegistryNode) -> None:
        """Attach this node under *parent*.

        A node can be attached once.  Roots can never be attached.
        """
        if parent is None or parent is self:
            raise InvalidArgumentError("Invalid parent")
        if self._parent is not None:
            raise InvalidStateError(f"{self} already has a parent")
        if self.is_root:
            raise InvalidStateError("A root node cannot have a parent")

        ancestor: RegistryNode | None = parent
        while ancestor is not None:
            if ancestor is self:
                raise InvalidArgumentError(
                    f"Cannot attach {self} under its own descendant {parent}"
                )
            ancestor = ancestor._parent

        if self._region in parent._children:
            raise RegistrationConflictError(
                "Region", self._region, owner=parent.namespace or "<root>",
            )

        parent._children[self._region] = self
        self._parent = parent
        logger.debug("Attached region %r under %r", self._region, parent.namespace)

    @property
    def has_children(self) -> bool:
        return bool(self._children)

    @property
    def children(self) -> list[RegistryNode]:
        return list(self._children.values())

    def get_child(self, region: str) -> RegistryNode | None:
        return self._children.get(region)

    def resolve(self, path: str) -> RegistryNode | None:
        """Find a descendant by dotted region path relative to this node.

        ``node.resolve("ui.panel")`` is ``node.get_child("ui").get_child("panel")``.
        An empty path resolves to this node.
        """
        node: RegistryNode | None = self
        for region in filter(None, path.split(".")):
            if node is None:
                return None
            node = node._children.get(region)
        return node

    def iter_tree(self) -> Iterator[RegistryNode]:
        """Pre-order walk over this node and all its descendants."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(list(node._children.values())))

    # ------------------------------------------------------------------
    # Definitions
    # ------------------------------------------------------------------

    @property
    def has_definitions(self) -> bool:
        return bool(self._definitions)

    @property
    def definitions(self) -> list[PropertyDefinition]:
        return list(self._definitions.values())

    def get_definition(self, name: str) -> PropertyDefinition | None:
        return self._definitions.get(name)

    def add_definition(
        self,
        name: str,
        property_type: PropertyType,
        description: str | None = None,
        flags: int = 0,
        allow_replace: bool = True,
        group: str | None = None,
    ) -> PropertyDefinition:
        """Register a property definition on this node.

        *name* may be qualified (``.app.ui.Title``); only the last segment
        is kept.  A qualifier that does not match this node's namespace is
        logged and otherwise ignored.

        When a definition with the same name exists it is replaced unless
        *allow_replace* is false.  A replacement without a description
        inherits the previous description.  The replaced object stays in
        the group it was filed under.
        """
        name = self._simplify_name(name)

        previous = self._definitions.get(name)
        if previous is not None and not allow_replace:
            raise RegistrationConflictError(
                "Property definition", name, owner=self.namespace or "<root>",
            )
        if not is_valid_property_name(name):
            raise InvalidArgumentError(f"Invalid property name: {name!r}")

        if group is None:
            group = DEFAULT_GROUP
        target = self._groups.get(group)
        if target is None:
            raise InvalidArgumentError(f"Unknown group: {group!r}")

        if description is None and previous is not None:
            description = previous.description

        definition = PropertyDefinition(self, name, description, property_type, flags)
        self._definitions[name] = definition
        target._append(definition)
        logger.debug(
            "Registered definition %s%s (group=%r, replaced=%s)",
            self.namespace, "." + name, group, previous is not None,
        )
        return definition

    def add_internal_definition(
        self,
        name: str,
        property_type: PropertyType,
        description: str | None = None,
    ) -> PropertyDefinition:
        """Shortcut for ``add_definition(..., flags=DefinitionFlag.INTERNAL)``."""
        return self.add_definition(
            name, property_type, description, flags=DefinitionFlag.INTERNAL,
        )

    def remove_definition(self, name: str) -> None:
        """Remove a definition from this node and from every group."""
        name = self._simplify_name(name)
        self._definitions.pop(name, None)
        for grp in self._groups.values():
            grp._discard(name)

    def _simplify_name(self, name: str) -> str:
        if name is None:
            raise InvalidArgumentError("Property name cannot be None")

        _, dot, simple = name.rpartition(".")
        if not dot:
            return name

        expected = f"{self.namespace}.{simple}"
        if name != expected:
            logger.warning(
                "Inconsistent fully-qualified name for property definition: "
                "%s (expected: %s)",
                name, expected,
            )
        return simple

    # ------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------

    @property
    def groups(self) -> list[DefinitionGroup]:
        return list(self._groups.values())

    def get_group(self, name: str) -> DefinitionGroup | None:
        return self._groups.get(name)

    @property
    def default_group(self) -> DefinitionGroup:
        return self._groups[DEFAULT_GROUP]

    def add_group(self, name: str) -> DefinitionGroup:
        """Create a new, empty group."""
        if name in self._groups:
            raise RegistrationConflictError(
                "Group", name, owner=self.namespace or "<root>",
            )
        grp = DefinitionGroup(self, name)
        self._groups[name] = grp
        return grp

    def remove_group(self, name: str) -> bool:
        """Delete a group, moving its definitions into the default group.

        Returns ``False`` for a blank or unknown name.  The default group
        can never be removed.
        """
        if _is_blank(name):
            return False
        removed = self._groups.pop(name, None)
        if removed is None:
            return False
        self._groups[DEFAULT_GROUP]._extend(removed.definitions)
        logger.debug(
            "Removed group %r from %r (%d definitions moved to default)",
            name, self.namespace, len(removed),
        )
        return True

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def summary(self) -> list[dict[str, Any]]:
        """Describe this node's definitions for logging/UI."""
        filed: dict[int, str] = {}
        for grp in self._groups.values():
            for d in grp._defs:
                filed[id(d)] = grp.name
        return [
            {
                "name": d.name,
                "qualified_name": d.qualified_name,
                "type": str(d.type),
                "group": filed.get(id(d), DEFAULT_GROUP),
                "flags": int(d.flags),
                "internal": d.is_internal,
            }
            for d in self._definitions.values()
        ]

    def __str__(self) -> str:
        return f"RegistryNode:{self._region or '<root>'}:{len(self._children)}"

    def __repr__(self) -> str:
        return (
            f"RegistryNode(region={self._region!r}, "
            f"namespace={self.namespace!r}, "
            f"definitions={len(self._definitions)}, "
            f"children={len(self._children)})"
        )
