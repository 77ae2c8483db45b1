"""Property types, definitions and the registry tree."""

from proptree.properties.definition import PropertyDefinition
from proptree.properties.registry import DEFAULT_GROUP, DefinitionGroup, RegistryNode
from proptree.properties.types import PropertyType, StringPropertyType

__all__ = [
    "DEFAULT_GROUP",
    "DefinitionGroup",
    "PropertyDefinition",
    "PropertyType",
    "RegistryNode",
    "StringPropertyType",
]
