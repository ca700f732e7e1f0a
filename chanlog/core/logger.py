"""Channel logger: a named, ordered list of handlers."""

from typing import Any

from chanlog.components.handlers import Handler, level_name


class Logger:
    """Logger bound to a channel name.

    Each call builds an event dict ``{"event", "level", "logger", **kw}`` and
    passes it to every handler, in the order they were pushed.
    """

    def __init__(self, name: str, handlers: list[Handler] | None = None) -> None:
        self.name = name
        self._handlers: list[Handler] = list(handlers or [])

    def push_handler(self, handler: Handler) -> "Logger":
        self._handlers.append(handler)
        return self

    @property
    def handlers(self) -> list[Handler]:
        return list(self._handlers)

    def log(self, level: str | int, event: str, **kw: Any) -> None:
        """Dispatch one record. ``level`` is a level name or its number (e.g. 20)."""
        event_dict = {"event": event, "level": level_name(level), "logger": self.name, **kw}
        for handler in self._handlers:
            handler.handle(event_dict)

    def debug(self, event: str, **kw: Any) -> None:
        self.log("debug", event, **kw)

    def info(self, event: str, **kw: Any) -> None:
        self.log("info", event, **kw)

    def warning(self, event: str, **kw: Any) -> None:
        self.log("warning", event, **kw)

    def error(self, event: str, **kw: Any) -> None:
        self.log("error", event, **kw)

    def critical(self, event: str, **kw: Any) -> None:
        self.log("critical", event, **kw)

    def exception(self, event: str, **kw: Any) -> None:
        """Log at error level with the exception being handled attached as ``exc_info``."""
        kw.setdefault("exc_info", True)
        self.log("error", event, **kw)

    def close(self) -> None:
        for handler in self._handlers:
            handler.close()

    def __repr__(self) -> str:
        return f"<Logger {self.name!r} handlers={len(self._handlers)}>"
