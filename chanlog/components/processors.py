"""Processors enriching an event dict before it is formatted.

All processors follow the structlog processor protocol:
``processor(logger, method_name, event_dict) -> event_dict``.
"""

from typing import Any

import structlog
from structlog.processors import CallsiteParameter

from chanlog.components import Param, register_component


@register_component(
    "timestamp",
    params=[Param("fmt", "iso"), Param("utc", True), Param("key", "timestamp")],
    kind="processor",
)
class TimestampProcessor:
    """Adds a timestamp under ``key``."""

    def __init__(self, fmt: str | None = "iso", utc: bool = True, key: str = "timestamp") -> None:
        self.key = key
        self._stamper = structlog.processors.TimeStamper(fmt=fmt, utc=utc, key=key)

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        return self._stamper(logger, method_name, event_dict)


@register_component("static_fields", params=[Param("fields")], kind="processor")
class StaticFieldsProcessor:
    """Adds fixed fields (e.g. ``service`` or ``env``) without overwriting existing ones."""

    def __init__(self, fields: dict[str, Any] | None = None) -> None:
        self.fields = dict(fields or {})

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        for key, value in self.fields.items():
            event_dict.setdefault(key, value)
        return event_dict


@register_component("uppercase_level", kind="processor")
class UppercaseLevelProcessor:
    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        if "level" in event_dict:
            event_dict["level"] = str(event_dict["level"]).upper()
        return event_dict


@register_component("contextvars", kind="processor")
class ContextVarsProcessor:
    """Merges values bound with ``structlog.contextvars.bind_contextvars``."""

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        return structlog.contextvars.merge_contextvars(logger, method_name, event_dict)


@register_component("callsite", kind="processor")
class CallsiteProcessor:
    """Adds filename, function name and line number of the logging call."""

    def __init__(self) -> None:
        self._adder = structlog.processors.CallsiteParameterAdder(
            parameters={
                CallsiteParameter.FILENAME,
                CallsiteParameter.FUNC_NAME,
                CallsiteParameter.LINENO,
            },
            additional_ignores=["chanlog"],
        )

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        return self._adder(logger, method_name, event_dict)
