"""Tests for configuration models, file loading and settings."""

import json

import pytest

from chanlog import LoggerFactory, UnknownChannelError
from chanlog.config import (
    FactoryConfig,
    HandlerDefinition,
    Settings,
    get_settings,
    load_config_file,
    resolve_path,
)
from chanlog.core.exceptions import (
    ConfigFileNotFoundError,
    ConfigParseError,
    UnsupportedConfigFormatError,
)

YAML_CONFIG = """
formatters:
  json:
    class: json
handlers:
  mem:
    class: memory
    params:
      level: INFO
    formatter: json
loggers:
  app: [mem]
  audit: []
"""

TOML_CONFIG = """
[handlers.mem]
class = "memory"
processors = ["ts"]

[processors.ts]
class = "timestamp"

[loggers]
app = ["mem"]
"""


class TestFactoryConfig:
    """Tests for shape-tolerant configuration parsing."""

    def test_definitions_parsed(self):
        """Test a well-formed handler definition."""
        config = FactoryConfig.from_mapping({
            "handlers": {
                "mem": {"class": "memory", "params": {"level": "INFO"}, "processors": ["ts"], "formatter": "json"},
            },
        })

        handler = config.handlers["mem"]
        assert isinstance(handler, HandlerDefinition)
        assert handler.class_ == "memory"
        assert handler.params == {"level": "INFO"}
        assert handler.processors == ["ts"]
        assert handler.formatter == "json"

    def test_non_mapping_entries_dropped(self):
        """Test entries that are not mappings are ignored."""
        config = FactoryConfig.from_mapping({
            "handlers": {"mem": {"class": "memory"}, "bad": "memory", "worse": 3},
        })

        assert list(config.handlers) == ["mem"]

    def test_misshaped_fields_coerced(self):
        """Test bad params, processors and formatter values are normalized."""
        handler = HandlerDefinition.model_validate({
            "class": "memory",
            "params": ["level", "INFO"],
            "processors": "ts",
            "formatter": 12,
        })

        assert handler.params == {}
        assert handler.processors == ["ts"]
        assert handler.formatter is None

    def test_channel_values_normalized(self):
        """Test channel handler lists of various shapes."""
        config = FactoryConfig.from_mapping({
            "loggers": {"a": None, "b": "mem", "c": ["mem", 3, ""], "d": {"x": 1}},
        })

        assert config.loggers == {"a": [], "b": ["mem"], "c": ["mem"], "d": []}

    def test_unknown_sections_ignored(self):
        """Test keys outside the four sections are ignored."""
        config = FactoryConfig.from_mapping({"version": 1, "loggers": {"app": []}})

        assert config.channel_names() == ["app"]

    def test_from_mapping_none(self):
        """Test None yields an empty configuration."""
        assert FactoryConfig.from_mapping(None) == FactoryConfig()


class TestLoader:
    """Tests for load_config_file()."""

    def test_load_json(self, tmp_path):
        """Test JSON files."""
        path = tmp_path / "logging.json"
        path.write_text(json.dumps({"loggers": {"app": ["mem"]}}), encoding="utf-8")

        assert load_config_file(path) == {"loggers": {"app": ["mem"]}}

    def test_load_yaml(self, tmp_path):
        """Test YAML files (both suffixes)."""
        for name in ("logging.yaml", "logging.yml"):
            path = tmp_path / name
            path.write_text(YAML_CONFIG, encoding="utf-8")

            data = load_config_file(path)
            assert data["loggers"] == {"app": ["mem"], "audit": []}

    def test_load_toml(self, tmp_path):
        """Test TOML files."""
        path = tmp_path / "logging.toml"
        path.write_text(TOML_CONFIG, encoding="utf-8")

        data = load_config_file(path)
        assert data["handlers"]["mem"]["processors"] == ["ts"]

    def test_relative_path_uses_root(self, tmp_path):
        """Test relative paths resolve against root_path."""
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "logging.yaml").write_text(YAML_CONFIG, encoding="utf-8")

        data = load_config_file("config/logging.yaml", root_path=tmp_path)

        assert "mem" in data["handlers"]
        assert resolve_path("config/logging.yaml", tmp_path) == tmp_path / "config" / "logging.yaml"

    def test_absolute_path_ignores_root(self, tmp_path):
        """Test absolute paths are used as-is."""
        path = tmp_path / "logging.json"

        assert resolve_path(path, "/elsewhere") == path

    def test_missing_file(self, tmp_path):
        """Test a missing file."""
        with pytest.raises(ConfigFileNotFoundError):
            load_config_file(tmp_path / "missing.yaml")

    def test_unsupported_format(self, tmp_path):
        """Test an unknown suffix."""
        path = tmp_path / "logging.xml"
        path.write_text("<config/>", encoding="utf-8")

        with pytest.raises(UnsupportedConfigFormatError):
            load_config_file(path)

    def test_parse_error(self, tmp_path):
        """Test malformed content."""
        path = tmp_path / "logging.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigParseError):
            load_config_file(path)

    def test_non_mapping_document(self, tmp_path):
        """Test a document that is not a mapping loads as empty."""
        path = tmp_path / "logging.yaml"
        path.write_text("- app\n- audit\n", encoding="utf-8")

        assert load_config_file(path) == {}

    def test_build_from_file(self, tmp_path):
        """Test building a factory straight from a file."""
        path = tmp_path / "logging.yaml"
        path.write_text(YAML_CONFIG, encoding="utf-8")

        factory = LoggerFactory.build_from_file("logging.yaml", root_path=tmp_path)
        logger = factory.get("app")
        logger.info("started")

        handler = logger.handlers[0]
        assert json.loads(handler.lines[0])["event"] == "started"


class TestSettings:
    """Tests for environment settings."""

    def test_defaults(self, monkeypatch):
        """Test default values."""
        for var in ("CHANLOG_CONFIG_FILE", "CHANLOG_DEFAULT_CHANNEL", "CHANLOG_STRICT", "LOG_LEVEL"):
            monkeypatch.delenv(var, raising=False)
        settings = Settings(_env_file=None)

        assert settings.config_file is None
        assert settings.strict is False
        assert settings.log_level == "WARNING"

    def test_from_environment(self, monkeypatch, tmp_path):
        """Test settings are read from CHANLOG_* variables."""
        monkeypatch.setenv("CHANLOG_CONFIG_FILE", "logging.yaml")
        monkeypatch.setenv("CHANLOG_ROOT_PATH", str(tmp_path))
        monkeypatch.setenv("CHANLOG_DEFAULT_CHANNEL", "audit")
        monkeypatch.setenv("CHANLOG_STRICT", "true")

        settings = get_settings()

        assert settings.config_file == "logging.yaml"
        assert settings.root_path == str(tmp_path)
        assert settings.default_channel == "audit"
        assert settings.strict is True

    def test_factory_from_settings(self, tmp_path):
        """Test building a factory from settings."""
        (tmp_path / "logging.yaml").write_text(YAML_CONFIG, encoding="utf-8")
        settings = Settings(
            config_file="logging.yaml",
            root_path=str(tmp_path),
            default_channel="audit",
            _env_file=None,
        )

        factory = LoggerFactory.from_settings(settings)

        assert factory.get_default() == "audit"
        assert factory.channels() == ["app", "audit"]

    def test_factory_from_settings_unknown_default(self, tmp_path):
        """Test an undeclared default channel fails fast."""
        (tmp_path / "logging.yaml").write_text(YAML_CONFIG, encoding="utf-8")
        settings = Settings(
            config_file="logging.yaml",
            root_path=str(tmp_path),
            default_channel="nonexistent",
            _env_file=None,
        )

        with pytest.raises(UnknownChannelError):
            LoggerFactory.from_settings(settings)

    def test_factory_from_settings_without_file(self):
        """Test settings without a config file give an empty factory."""
        factory = LoggerFactory.from_settings(Settings(_env_file=None))

        assert factory.channels() == []
