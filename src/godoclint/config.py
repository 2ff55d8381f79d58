"""
godoclint Configuration

Loads configuration from a YAML file or environment variables.
Everything has a default, so no config file is needed.
"""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)


CONFIG_FILE_NAME = ".godoclint.yaml"

# Environment variable -> config key
ENV_OVERRIDES = {
    "GODOCLINT_DOC_FILE": "doc_file_name",
    "GODOCLINT_MAX_DOC_LINES": "max_package_doc_lines",
    "GODOCLINT_ENTRY_PACKAGE": "entry_package",
}


class ConfigError(Exception):
    """Invalid or unreadable configuration."""


@dataclass
class LintConfig:
    """Runtime configuration for the linter."""

    # File that long package doc-comments belong in
    doc_file_name: str = "doc.go"

    # Package docs longer than this must live in doc_file_name
    max_package_doc_lines: int = 100

    # Package exempt from the long doc-comment rule
    entry_package: str = "main"

    # Lint _test.go files too
    include_tests: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LintConfig":
        """Build a config from a mapping, rejecting unknown keys and bad types."""
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

        values: Dict[str, Any] = {}
        for key, value in data.items():
            expected = type(getattr(cls, key))
            # bool is an int subclass; do not accept it where an int is wanted
            if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
                raise ConfigError(
                    f"Config key '{key}' must be {expected.__name__}, got {type(value).__name__}"
                )
            values[key] = value
        return cls(**values)


def config_search_paths(package_path: Optional[str] = None) -> List[Path]:
    """Default configuration file locations (checked in order)."""
    paths = []
    if package_path:
        paths.append(Path(package_path) / CONFIG_FILE_NAME)
    paths.append(Path.home() / CONFIG_FILE_NAME)
    return paths


def _read_yaml(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config from {config_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")
    return data


def _env_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for env_var, config_key in ENV_OVERRIDES.items():
        if env_var not in os.environ:
            continue
        value = os.environ[env_var]
        if config_key == "max_package_doc_lines":
            try:
                overrides[config_key] = int(value)
            except ValueError:
                raise ConfigError(f"{env_var} must be an integer, got {value!r}") from None
        else:
            overrides[config_key] = value
    return overrides


def load_config(
    config_path: Optional[Path] = None,
    package_path: Optional[str] = None,
) -> LintConfig:
    """
    Load configuration.

    An explicit config_path must exist. Otherwise the first existing file
    from config_search_paths() is used, if any. Environment variables
    override file values.
    """
    data: Dict[str, Any] = {}

    if config_path is not None:
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        data = _read_yaml(config_path)
        logger.debug(f"Loaded config from {config_path}")
    else:
        for candidate in config_search_paths(package_path):
            if candidate.exists():
                data = _read_yaml(candidate)
                logger.debug(f"Loaded config from {candidate}")
                break

    data.update(_env_overrides())
    return LintConfig.from_dict(data)
