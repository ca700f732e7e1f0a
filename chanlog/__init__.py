"""Declarative logging-pipeline assembler.

Builds per-channel loggers from formatter, processor and handler
definitions, caches them and lets callers override any channel.
"""

from chanlog.components import Param, register_component
from chanlog.core.exceptions import (
    ChanlogError,
    ConfigurationError,
    ConstructionError,
    ImplementationNotFoundError,
    InstantiationError,
    MissingImplementationIdError,
    UnknownChannelError,
    UnresolvedReferenceError,
)
from chanlog.core.factory import LoggerFactory, UnresolvedReference
from chanlog.core.instantiator import new_instance
from chanlog.core.logger import Logger

__version__ = "0.1.0"

__all__ = [
    # Factory
    "LoggerFactory",
    "UnresolvedReference",
    "Logger",
    "new_instance",
    # Components
    "Param",
    "register_component",
    # Exceptions
    "ChanlogError",
    "ConfigurationError",
    "ConstructionError",
    "ImplementationNotFoundError",
    "InstantiationError",
    "MissingImplementationIdError",
    "UnknownChannelError",
    "UnresolvedReferenceError",
]
