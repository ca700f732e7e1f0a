"""Pydantic models for the factory configuration structure.

The loader is lenient: missing sections, sections of the wrong type and
entries that are not mappings are treated as absent. References between
definitions are not checked here.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

SECTIONS = ("formatters", "processors", "handlers", "loggers")


class Definition(BaseModel):
    """A buildable component: class id plus keyword parameters."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    class_: str | None = Field(default=None, alias="class")
    params: dict[str, Any] = Field(default_factory=dict)

    @field_validator("class_", mode="before")
    @classmethod
    def _coerce_class(cls, value: Any) -> str | None:
        return value if isinstance(value, str) and value else None

    @field_validator("params", mode="before")
    @classmethod
    def _coerce_params(cls, value: Any) -> dict[str, Any]:
        if not isinstance(value, Mapping):
            return {}
        return {str(k): v for k, v in value.items()}


class HandlerDefinition(Definition):
    """A handler definition with its processor names and formatter name."""

    processors: list[str] = Field(default_factory=list)
    formatter: str | None = None

    @field_validator("processors", mode="before")
    @classmethod
    def _coerce_processors(cls, value: Any) -> list[str]:
        return _name_list(value)

    @field_validator("formatter", mode="before")
    @classmethod
    def _coerce_formatter(cls, value: Any) -> str | None:
        return value if isinstance(value, str) and value else None


def _name_list(value: Any) -> list[str]:
    """Normalize a reference list: a string becomes a one-item list, non-strings are dropped."""
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, (list, tuple)):
        return [item for item in value if isinstance(item, str) and item]
    return []


def _definitions(value: Any) -> dict[str, Any]:
    if not isinstance(value, Mapping):
        return {}
    return {str(name): dict(option) for name, option in value.items() if isinstance(option, Mapping)}


class FactoryConfig(BaseModel):
    """The four configuration sections, in declaration order."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    formatters: dict[str, Definition] = Field(default_factory=dict)
    processors: dict[str, Definition] = Field(default_factory=dict)
    handlers: dict[str, HandlerDefinition] = Field(default_factory=dict)
    loggers: dict[str, list[str]] = Field(default_factory=dict)

    @field_validator("formatters", "processors", "handlers", mode="before")
    @classmethod
    def _coerce_definitions(cls, value: Any) -> dict[str, Any]:
        return _definitions(value)

    @field_validator("loggers", mode="before")
    @classmethod
    def _coerce_loggers(cls, value: Any) -> dict[str, list[str]]:
        if not isinstance(value, Mapping):
            return {}
        return {str(channel): _name_list(handlers) for channel, handlers in value.items()}

    @classmethod
    def from_mapping(cls, raw: Any) -> "FactoryConfig":
        """Build from any object; non-mappings yield an empty configuration."""
        if isinstance(raw, FactoryConfig):
            return raw
        if not isinstance(raw, Mapping):
            return cls()
        return cls.model_validate({key: raw[key] for key in SECTIONS if key in raw})

    def channel_names(self) -> list[str]:
        return list(self.loggers.keys())
