"""Custom exception hierarchy for the property registry and event tree."""


class PropTreeError(Exception):
    """Base exception for all proptree errors."""


# --- Arguments ---
class InvalidArgumentError(PropTreeError, ValueError):
    """Malformed identifier, missing required value, or out-of-range bound."""


# --- Lifecycle ---
class InvalidStateError(PropTreeError, RuntimeError):
    """Illegal lifecycle transition (double attach, root with a parent)."""


# --- Registration ---
class RegistrationConflictError(PropTreeError):
    """A region, group or definition name is already taken."""

    def __init__(self, kind: str, name: str, owner: str = ""):
        self.kind = kind
        self.name = name
        self.owner = owner
        where = f" in {owner}" if owner else ""
        super().__init__(f"{kind} already registered{where}: {name!r}")


# --- Configuration ---
class ConfigError(PropTreeError):
    """Invalid or missing configuration."""
