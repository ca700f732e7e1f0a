"""Configuration: settings, definition models and file loading."""

from chanlog.config.definitions import Definition, FactoryConfig, HandlerDefinition
from chanlog.config.loader import SUPPORTED_SUFFIXES, load_config_file, resolve_path
from chanlog.config.settings import Settings, get_settings

__all__ = [
    "Definition",
    "FactoryConfig",
    "HandlerDefinition",
    "SUPPORTED_SUFFIXES",
    "load_config_file",
    "resolve_path",
    "Settings",
    "get_settings",
]
