"""Unified exception hierarchy for chanlog.

Exception categories:
- Configuration errors (unknown channels, unresolved references, config files)
- Instantiation errors (missing class id, unknown implementation, constructor failure)
"""

from typing import Any


class ChanlogError(Exception):
    """Base exception for all chanlog errors."""

    def __init__(self, message: str, channel: str | None = None, details: dict | None = None):
        self.channel = channel
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        msg = super().__str__()
        if self.channel:
            msg = f"[{self.channel}] {msg}"
        return msg


# ============================================================
# CONFIGURATION ERRORS
# ============================================================


class ConfigurationError(ChanlogError):
    """Base class for configuration-related errors."""
    pass


class UnknownChannelError(ConfigurationError):
    """Raised when a channel is not declared in the loggers section."""

    def __init__(self, channel: str | None, available: list[str] | None = None):
        self.available = available or []
        if channel:
            msg = f"Call to undefined logger channel '{channel}'"
        else:
            msg = "No logger channels declared"
        if self.available:
            msg += f". Available: {', '.join(self.available[:5])}"
        super().__init__(msg, details={"available": self.available})


class UnresolvedReferenceError(ConfigurationError):
    """Raised in strict mode when a definition references an unknown name."""

    def __init__(self, kind: str, name: str, owner: str):
        self.kind = kind
        self.name = name
        self.owner = owner
        super().__init__(
            f"Unknown {kind} '{name}' referenced by '{owner}'",
            details={"kind": kind, "name": name, "owner": owner},
        )


class ConfigFileNotFoundError(ConfigurationError):
    """Raised when a configuration file does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Config file not found: {path}", details={"path": path})


class UnsupportedConfigFormatError(ConfigurationError):
    """Raised when a configuration file has an unknown extension."""

    def __init__(self, path: str, supported: list[str] | None = None):
        self.path = path
        msg = f"Unsupported config format: {path}"
        if supported:
            msg += f" (supported: {', '.join(supported)})"
        super().__init__(msg, details={"path": path})


class ConfigParseError(ConfigurationError):
    """Raised when a configuration file cannot be parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Cannot parse {path}: {reason}", details={"path": path})


# ============================================================
# INSTANTIATION ERRORS
# ============================================================


class InstantiationError(ChanlogError):
    """Base class for component instantiation errors."""
    pass


class MissingImplementationIdError(InstantiationError):
    """Raised when a definition has no 'class' entry."""

    def __init__(self, definition: Any = None):
        super().__init__("Missing the 'class' parameter", details={"definition": definition})


class ImplementationNotFoundError(InstantiationError):
    """Raised when a class id does not resolve to a registered component."""

    def __init__(self, class_id: str, reason: str | None = None):
        self.class_id = class_id
        self.reason = reason
        msg = f"Class '{class_id}' not found"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg, details={"class": class_id, "reason": reason})


class ConstructionError(InstantiationError):
    """Raised when building a component from its parameters fails."""

    def __init__(self, class_id: str, reason: str):
        self.class_id = class_id
        self.reason = reason
        super().__init__(
            f"Cannot construct '{class_id}': {reason}",
            details={"class": class_id, "reason": reason},
        )
