"""Enumerations used across the registry and event tree."""

from enum import Enum, IntFlag


class DefinitionFlag(IntFlag):
    NONE = 0
    INTERNAL = 1  # Not meant to be edited by end users


class LogFormat(str, Enum):
    JSON = "json"
    CONSOLE = "console"
