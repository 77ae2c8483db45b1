"""proptree: hierarchical property-definition registry and event tree."""

from proptree.core.enums import DefinitionFlag
from proptree.core.errors import (
    InvalidArgumentError,
    InvalidStateError,
    PropTreeError,
    RegistrationConflictError,
)
from proptree.events.event import Event
from proptree.events.source import EventSource, relay
from proptree.properties.definition import PropertyDefinition
from proptree.properties.registry import DefinitionGroup, RegistryNode
from proptree.properties.types import PropertyType, StringPropertyType

__all__ = [
    "DefinitionFlag",
    "DefinitionGroup",
    "Event",
    "EventSource",
    "InvalidArgumentError",
    "InvalidStateError",
    "PropTreeError",
    "PropertyDefinition",
    "PropertyType",
    "RegistrationConflictError",
    "RegistryNode",
    "StringPropertyType",
    "relay",
]
