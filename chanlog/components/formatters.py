"""Formatters turning an event dict into its final line.

Each formatter wraps a structlog renderer, so it can also be dropped into a
structlog processor chain as-is.
"""

from collections import defaultdict
from typing import Any

import structlog

from chanlog.components import Param, register_component


class Formatter:
    """Base formatter: renders an event dict to a string.

    ``exc_info`` in the event dict is turned into an ``exception`` traceback
    string before rendering.
    """

    def format(self, event_dict: dict[str, Any]) -> str:
        return self.render(structlog.processors.format_exc_info(None, "", dict(event_dict)))

    def render(self, event_dict: dict[str, Any]) -> str:
        raise NotImplementedError

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> str:
        return self.format(event_dict)


@register_component(
    "key_value",
    params=[Param("sort_keys", False), Param("key_order"), Param("drop_missing", False)],
    kind="formatter",
)
class KeyValueFormatter(Formatter):
    """``key=value`` pairs; the default formatter for every handler."""

    def __init__(
        self,
        sort_keys: bool = False,
        key_order: list[str] | None = None,
        drop_missing: bool = False,
    ) -> None:
        self.key_order = key_order or ["timestamp", "level", "logger", "event"]
        self._renderer = structlog.processors.KeyValueRenderer(
            sort_keys=sort_keys,
            key_order=self.key_order,
            drop_missing=True if key_order is None else drop_missing,
        )

    def render(self, event_dict: dict[str, Any]) -> str:
        return self._renderer(None, "", event_dict)


@register_component("json", params=[Param("sort_keys", False)], kind="formatter")
class JsonFormatter(Formatter):
    """One JSON object per line."""

    def __init__(self, sort_keys: bool = False) -> None:
        self.sort_keys = sort_keys
        self._renderer = structlog.processors.JSONRenderer(sort_keys=sort_keys, default=str)

    def render(self, event_dict: dict[str, Any]) -> str:
        return self._renderer(None, "", event_dict)


@register_component("console", params=[Param("colors", False)], kind="formatter")
class ConsoleFormatter(Formatter):
    """Human-friendly development output."""

    def __init__(self, colors: bool = False) -> None:
        self.colors = colors
        self._renderer = structlog.dev.ConsoleRenderer(
            colors=colors,
            exception_formatter=structlog.dev.plain_traceback,
        )

    def render(self, event_dict: dict[str, Any]) -> str:
        return self._renderer(None, "", event_dict)


DEFAULT_LINE_FORMAT = "[{timestamp}] {logger}.{level}: {event} {extra}"


@register_component("line", params=[Param("fmt", DEFAULT_LINE_FORMAT)], kind="formatter")
class LineFormatter(Formatter):
    """Single line built from a ``str.format`` template.

    Missing keys render as empty strings. ``{extra}`` expands to the
    ``key=value`` pairs not named in the template.
    """

    def __init__(self, fmt: str = DEFAULT_LINE_FORMAT) -> None:
        self.fmt = fmt or DEFAULT_LINE_FORMAT
        self._extra = structlog.processors.KeyValueRenderer(sort_keys=True)

    def render(self, event_dict: dict[str, Any]) -> str:
        values: dict[str, Any] = defaultdict(str)
        values.update(event_dict)
        if "level" in values:
            values["level"] = str(values["level"]).upper()

        extra = {
            key: value
            for key, value in event_dict.items()
            if "{" + key + "}" not in self.fmt and key != "extra"
        }
        values["extra"] = self._extra(None, "", extra) if extra else ""
        return self.fmt.format_map(values).rstrip()
