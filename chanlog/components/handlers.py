"""Handlers: sinks receiving event dicts from a channel logger."""

import sys
from pathlib import Path
from typing import IO, Any, Callable

from chanlog.components import Param, register_component
from chanlog.components.formatters import Formatter, KeyValueFormatter

LEVELS: dict[str, int] = {
    "debug": 10,
    "info": 20,
    "warning": 30,
    "warn": 30,
    "error": 40,
    "critical": 50,
}

Processor = Callable[[Any, str, dict[str, Any]], dict[str, Any]]


def level_number(level: str | int) -> int:
    """Convert a level name (case-insensitive) or number to its numeric value."""
    if isinstance(level, int):
        return level
    try:
        return LEVELS[str(level).lower()]
    except KeyError:
        raise ValueError(f"Unknown log level: {level}") from None


def level_name(level: str | int) -> str:
    """Canonical lower-case name of a level given by name or number."""
    number = level_number(level)
    for name, value in LEVELS.items():
        if value == number:
            return name
    raise ValueError(f"Unknown log level: {level}")


class Handler:
    """Base class for all handlers.

    A handler keeps an ordered list of processors and an optional formatter.
    ``handle()`` copies the incoming event dict, runs the processors in
    order, renders the result and passes the line to ``emit()``.
    """

    def __init__(self, level: str | int = "DEBUG") -> None:
        self.level = level_number(level)
        self._processors: list[Processor] = []
        self._formatter: Formatter | None = None

    # ==========================================
    # Pipeline wiring
    # ==========================================

    def push_processor(self, processor: Processor) -> "Handler":
        self._processors.append(processor)
        return self

    @property
    def processors(self) -> list[Processor]:
        return list(self._processors)

    def set_formatter(self, formatter: Formatter) -> "Handler":
        self._formatter = formatter
        return self

    @property
    def formatter(self) -> Formatter:
        if self._formatter is None:
            self._formatter = self.get_default_formatter()
        return self._formatter

    def get_default_formatter(self) -> Formatter:
        return KeyValueFormatter()

    # ==========================================
    # Record handling
    # ==========================================

    def is_handling(self, level: str | int) -> bool:
        return level_number(level) >= self.level

    def handle(self, event_dict: dict[str, Any]) -> bool:
        """Process, format and emit one record. Returns False if filtered by level."""
        level = event_dict.get("level", "info")
        if not self.is_handling(level):
            return False

        record = dict(event_dict)
        for processor in self._processors:
            record = processor(None, str(level), record)

        self.emit(self.formatter.format(record), record)
        return True

    def emit(self, line: str, record: dict[str, Any]) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} level={self.level}>"


@register_component("null", kind="handler")
class NullHandler(Handler):
    """Discards every record it receives."""

    def __init__(self) -> None:
        super().__init__(level="DEBUG")

    def handle(self, event_dict: dict[str, Any]) -> bool:
        return True

    def emit(self, line: str, record: dict[str, Any]) -> None:
        pass


_NAMED_STREAMS = ("stdout", "stderr")


@register_component("stream", params=[Param("stream"), Param("level", "DEBUG")], kind="handler")
class StreamHandler(Handler):
    """Writes lines to a text stream.

    ``stream`` may be a file-like object or the name ``"stdout"`` / ``"stderr"``
    (the form usable from configuration files). Defaults to stderr.
    """

    def __init__(self, stream: IO[str] | str | None = None, level: str | int = "DEBUG") -> None:
        super().__init__(level=level)
        if stream is None:
            stream = "stderr"
        if isinstance(stream, str):
            if stream.lower() not in _NAMED_STREAMS:
                raise ValueError(f"Unknown stream name: {stream}")
            stream = getattr(sys, stream.lower())
        self.stream = stream

    def emit(self, line: str, record: dict[str, Any]) -> None:
        self.stream.write(line + "\n")
        self.stream.flush()


@register_component(
    "file",
    params=[
        Param("path"),
        Param("level", "DEBUG"),
        Param("encoding", "utf-8"),
        Param("root_path"),
    ],
    kind="handler",
)
class FileHandler(Handler):
    """Appends lines to a file, created (with parent directories) on first write.

    Relative paths resolve against ``root_path`` when given, else the
    current working directory.
    """

    def __init__(
        self,
        path: str | Path,
        level: str | int = "DEBUG",
        encoding: str = "utf-8",
        root_path: str | Path | None = None,
    ) -> None:
        super().__init__(level=level)
        if not path:
            raise ValueError("FileHandler requires a path")
        file_path = Path(path)
        if not file_path.is_absolute() and root_path:
            file_path = Path(root_path) / file_path
        self.path = file_path
        self.encoding = encoding
        self._file: IO[str] | None = None

    def emit(self, line: str, record: dict[str, Any]) -> None:
        if self._file is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._file = self.path.open("a", encoding=self.encoding)
        self._file.write(line + "\n")
        self._file.flush()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None


@register_component("memory", params=[Param("level", "DEBUG")], kind="handler")
class MemoryHandler(Handler):
    """Keeps rendered lines and processed records in memory."""

    def __init__(self, level: str | int = "DEBUG") -> None:
        super().__init__(level=level)
        self.lines: list[str] = []
        self.records: list[dict[str, Any]] = []

    def emit(self, line: str, record: dict[str, Any]) -> None:
        self.lines.append(line)
        self.records.append(record)

    def clear(self) -> None:
        self.lines.clear()
        self.records.clear()
