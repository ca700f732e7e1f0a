"""Pytest configuration and shared fixtures."""

import sys

import pytest

from chanlog.components import Param, register_component
from chanlog.config.settings import get_settings
from chanlog.logging import reset_logging

# Fix encoding for Windows
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")


@register_component("tests.sample", params=[Param("level", "info"), Param("path", "/tmp")])
class SampleComponent:
    """Component whose defaults live only in its registered schema."""

    def __init__(self, level, path):
        self.level = level
        self.path = path


@register_component("tests.needs_name", params=[Param("name"), Param("size", 1)])
class NeedsNameComponent:
    """Component with a schema entry that has no default."""

    def __init__(self, name, size):
        if name is None:
            raise ValueError("name is required")
        self.name = name
        self.size = size


@pytest.fixture(autouse=True)
def reset_settings():
    """Clear cached settings around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_diagnostics():
    """Remove the stderr handler a test may install (e.g. through the CLI)."""
    yield
    reset_logging()


@pytest.fixture
def config() -> dict:
    """Configuration with two memory handlers, a null handler and a few dangling references."""
    return {
        "formatters": {
            "json": {"class": "json", "params": {"sort_keys": True}},
            "line": {"class": "line"},
        },
        "processors": {
            "service": {"class": "static_fields", "params": {"fields": {"service": "api"}}},
            "upper": {"class": "uppercase_level"},
        },
        "handlers": {
            "mem": {
                "class": "memory",
                "processors": ["service", "ghost_processor", "upper"],
                "formatter": "json",
            },
            "mem_info": {
                "class": "memory",
                "params": {"level": "INFO"},
                "formatter": "ghost_formatter",
            },
            "silent": {"class": "null"},
        },
        "loggers": {
            "app": ["mem", "mem_info"],
            "audit": ["mem", "ghost"],
            "quiet": [],
            "unset": None,
        },
    }
