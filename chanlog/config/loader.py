"""Configuration file loading (JSON, YAML, TOML).

Relative paths are resolved against an explicit ``root_path`` instead of a
process-wide project root.
"""

import json
import tomllib
from pathlib import Path
from typing import Any

import yaml

from chanlog.core.exceptions import (
    ConfigFileNotFoundError,
    ConfigParseError,
    UnsupportedConfigFormatError,
)
from chanlog.logging import get_logger

logger = get_logger(__name__)

SUPPORTED_SUFFIXES = [".json", ".yaml", ".yml", ".toml"]


def resolve_path(path: str | Path, root_path: str | Path | None = None) -> Path:
    """Resolve ``path`` against ``root_path`` when it is relative."""
    config_path = Path(path).expanduser()
    if not config_path.is_absolute() and root_path:
        config_path = Path(root_path).expanduser() / config_path
    return config_path


def load_config_file(path: str | Path, root_path: str | Path | None = None) -> dict[str, Any]:
    """Load a configuration file into a nested dict.

    Args:
        path: File path; the suffix selects the parser
        root_path: Base directory for relative paths

    Returns:
        The parsed top-level mapping (empty if the document is not a mapping)

    Raises:
        ConfigFileNotFoundError: The file does not exist
        UnsupportedConfigFormatError: The suffix is not supported
        ConfigParseError: The file cannot be parsed
    """
    config_path = resolve_path(path, root_path)
    suffix = config_path.suffix.lower()

    if suffix not in SUPPORTED_SUFFIXES:
        raise UnsupportedConfigFormatError(str(config_path), SUPPORTED_SUFFIXES)
    if not config_path.is_file():
        raise ConfigFileNotFoundError(str(config_path))

    try:
        if suffix == ".json":
            with config_path.open(encoding="utf-8") as f:
                data = json.load(f)
        elif suffix == ".toml":
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        else:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        raise ConfigParseError(str(config_path), str(e)) from e

    if not isinstance(data, dict):
        logger.warning("config_not_a_mapping", path=str(config_path), type=type(data).__name__)
        return {}

    logger.debug("config_loaded", path=str(config_path), sections=list(data.keys()))
    return data
