"""Logger factory: builds and caches channel loggers from a declarative config.

Usage:
    from chanlog import LoggerFactory

    factory = LoggerFactory.build({
        "formatters": {"json": {"class": "json"}},
        "processors": {"ts": {"class": "timestamp"}},
        "handlers": {
            "console": {
                "class": "stream",
                "params": {"stream": "stdout", "level": "INFO"},
                "processors": ["ts"],
                "formatter": "json",
            },
        },
        "loggers": {"app": ["console"], "audit": []},
    })
    factory.get("app").info("user_login", user_id=42)

Unknown handler, processor and formatter names are skipped when a logger is
assembled, unless the factory is strict.
"""

import threading
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from chanlog.components.handlers import NullHandler
from chanlog.config.definitions import FactoryConfig
from chanlog.config.loader import load_config_file
from chanlog.config.settings import Settings, get_settings
from chanlog.core.exceptions import UnknownChannelError, UnresolvedReferenceError
from chanlog.core.instantiator import new_instance
from chanlog.core.logger import Logger
from chanlog.logging import LogContext, get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class UnresolvedReference:
    """A name referenced from a definition that is not defined."""

    kind: str  # "handler", "processor" or "formatter"
    owner: str  # channel or handler name holding the reference
    name: str


class LoggerFactory:
    """Manages the channel loggers of a project from configuration.

    Keeps three maps: declared channels (handler-name lists), lazily built
    loggers, and explicit overrides. Overrides win over built loggers and
    survive ``release()``.
    """

    def __init__(self, config: Mapping[str, Any] | FactoryConfig | None = None, strict: bool = False):
        self._config = FactoryConfig.from_mapping(config)
        self.strict = strict
        self._default: str | None = None
        self._built: dict[str, Logger] = {}
        self._overrides: dict[str, Logger] = {}
        self._lock = threading.RLock()

    # ==========================================
    # Constructors
    # ==========================================

    @classmethod
    def build(cls, config: Mapping[str, Any] | FactoryConfig | None, strict: bool = False) -> "LoggerFactory":
        """Create a factory from a configuration mapping."""
        return cls(config, strict=strict)

    @classmethod
    def build_from_file(
        cls,
        path: str | Path,
        root_path: str | Path | None = None,
        strict: bool = False,
    ) -> "LoggerFactory":
        """Create a factory from a JSON, YAML or TOML config file."""
        return cls.build(load_config_file(path, root_path=root_path), strict=strict)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "LoggerFactory":
        """Create a factory from ``CHANLOG_*`` settings."""
        settings = settings or get_settings()
        if settings.config_file:
            factory = cls.build_from_file(
                settings.config_file,
                root_path=settings.root_path,
                strict=settings.strict,
            )
        else:
            factory = cls.build({}, strict=settings.strict)

        if settings.default_channel:
            factory.set_default(settings.default_channel)
        return factory

    @property
    def config(self) -> FactoryConfig:
        return self._config

    # ==========================================
    # Channels
    # ==========================================

    def channels(self) -> list[str]:
        """Declared channel names, in declaration order."""
        return self._config.channel_names()

    def set_default(self, channel: str) -> "LoggerFactory":
        """Set the default channel.

        Raises:
            UnknownChannelError: The channel is not declared
        """
        if not self.exists(channel):
            raise UnknownChannelError(channel, self.channels())
        with self._lock:
            self._default = channel
        return self

    def get_default(self) -> str:
        """Return the default channel, falling back to the first declared one.

        Raises:
            UnknownChannelError: No default set and no channels declared
        """
        if self._default:
            return self._default
        channels = self.channels()
        if not channels:
            raise UnknownChannelError(None)
        return channels[0]

    def exists(self, channel: str) -> bool:
        """Whether ``channel`` is declared in the configuration.

        Channels known only through ``add_logger()`` are not reported.
        """
        return channel in self._config.loggers

    # ==========================================
    # Loggers
    # ==========================================

    def add_logger(self, channel: str, instance: Logger) -> "LoggerFactory":
        """Register a pre-built logger for ``channel``; it wins over configuration."""
        with self._lock:
            self._overrides[channel] = instance
        logger.debug("logger_override_registered", channel=channel)
        return self

    add_override = add_logger

    def get(self, channel: str | None = None) -> Logger:
        """Return the logger for ``channel``.

        Undeclared or empty channel names fall back to the default channel.
        The default channel's logger is always built as a side effect.
        """
        with self._lock:
            default = self.get_default()
            if not channel or not self.exists(channel):
                channel = default

            if default not in self._built:
                self._built[default] = self.make(default, self._config.loggers.get(default))

            if channel in self._overrides:
                return self._overrides[channel]

            if channel not in self._built:
                self._built[channel] = self.make(channel, self._config.loggers.get(channel))
            return self._built[channel]

    def make(self, channel: str, handlers: list[str] | str | None = None) -> Logger:
        """Assemble a new logger for ``channel`` from handler names.

        An empty handler list gives a logger with a single NullHandler.
        Unknown handler, processor and formatter names are skipped (or raise
        UnresolvedReferenceError when the factory is strict).
        """
        channel_logger = Logger(channel)

        if isinstance(handlers, str):
            handlers = [handlers]
        if not handlers:
            return channel_logger.push_handler(NullHandler())

        with LogContext(channel=channel):
            for handler_name in handlers:
                definition = self._config.handlers.get(handler_name)
                if definition is None:
                    self._skip("handler", handler_name, channel)
                    continue

                handler = new_instance(definition)

                for processor_name in definition.processors:
                    processor = self._config.processors.get(processor_name)
                    if processor is None:
                        self._skip("processor", processor_name, handler_name)
                        continue
                    handler.push_processor(new_instance(processor))

                if definition.formatter:
                    formatter = self._config.formatters.get(definition.formatter)
                    if formatter is None:
                        self._skip("formatter", definition.formatter, handler_name)
                    else:
                        handler.set_formatter(new_instance(formatter))

                channel_logger.push_handler(handler)

        logger.debug("logger_built", channel=channel, handlers=len(channel_logger.handlers))
        return channel_logger

    def release(self) -> "LoggerFactory":
        """Drop all built loggers so they are rebuilt on next access. Overrides are kept.

        Handlers of the dropped loggers are closed, except for loggers that
        were also registered as overrides.
        """
        with self._lock:
            dropped, self._built = self._built, {}
            overrides = list(self._overrides.values())
            for built in dropped.values():
                if not any(built is instance for instance in overrides):
                    built.close()
            count = len(dropped)
        logger.debug("loggers_released", count=count)
        return self

    reset = release

    # ==========================================
    # Validation
    # ==========================================

    def check_references(self) -> list[UnresolvedReference]:
        """List every reference that ``make()`` would skip."""
        unresolved: list[UnresolvedReference] = []
        for channel, handler_names in self._config.loggers.items():
            for name in handler_names:
                if name not in self._config.handlers:
                    unresolved.append(UnresolvedReference("handler", channel, name))

        for handler_name, definition in self._config.handlers.items():
            for name in definition.processors:
                if name not in self._config.processors:
                    unresolved.append(UnresolvedReference("processor", handler_name, name))
            if definition.formatter and definition.formatter not in self._config.formatters:
                unresolved.append(UnresolvedReference("formatter", handler_name, definition.formatter))
        return unresolved

    def _skip(self, kind: str, name: str, owner: str) -> None:
        if self.strict:
            raise UnresolvedReferenceError(kind, name, owner)
        logger.debug(f"{kind}_skipped", ref=name, owner=owner)

    # ==========================================
    # Indexed access
    # ==========================================

    def __getitem__(self, channel: str) -> Logger:
        return self.get(channel)

    def __setitem__(self, channel: str, instance: Logger) -> None:
        self.add_logger(channel, instance)

    def __contains__(self, channel: object) -> bool:
        return isinstance(channel, str) and self.exists(channel)

    def __delitem__(self, channel: str) -> bool:
        # Loggers cannot be removed; only release() clears built entries.
        return False

    def __repr__(self) -> str:
        return f"<LoggerFactory channels={self.channels()} built={list(self._built)}>"
