"""
Settings loading for cmakebridge.

Settings are read from the first YAML file found in:
1. Command-line provided config file
2. ``cmakebridge.yaml`` in the current directory
3. ``$XDG_CONFIG_HOME/cmakebridge/config.yaml`` (``~/.config`` by default)

Environment variables prefixed with ``CMAKEBRIDGE_`` override file values.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from cmakebridge.config.models import BridgeSettings
from cmakebridge.core.errors import ConfigError


logger = logging.getLogger(__name__)

ENV_PREFIX = "CMAKEBRIDGE_"


def config_search_paths(cli_config_path: str | Path | None = None) -> list[Path]:
    """Config paths to search, in order of precedence."""
    paths: list[Path] = []
    if cli_config_path:
        paths.append(Path(cli_config_path).expanduser().resolve())

    paths.append(Path.cwd() / "cmakebridge.yaml")

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    config_root = Path(xdg_config_home) if xdg_config_home else Path.home() / ".config"
    paths.append(config_root / "cmakebridge" / "config.yaml")
    return paths


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}", {"path": str(path)}) from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}", {"path": str(path)}) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Config file {path} must contain a mapping", {"path": str(path)}
        )
    return data


def load_settings(cli_config_path: str | Path | None = None) -> BridgeSettings:
    """Load settings from the first config file found plus the environment.

    Raises:
        ConfigError: If an explicitly given config file is missing, or any
            config file is unreadable or invalid
    """
    if cli_config_path and not Path(cli_config_path).expanduser().exists():
        raise ConfigError(
            f"Config file not found: {cli_config_path}",
            {"path": str(cli_config_path)},
        )

    config_data: dict[str, Any] = {}
    for path in config_search_paths(cli_config_path):
        if path.is_file():
            config_data = _read_yaml(path)
            logger.debug("Loaded configuration from %s", path)
            break
    else:
        logger.debug("No configuration file found, using defaults")

    if logger.isEnabledFor(logging.DEBUG):
        env_vars = sorted(k for k in os.environ if k.startswith(ENV_PREFIX))
        if env_vars:
            logger.debug("Environment overrides: %s", ", ".join(env_vars))

    try:
        return BridgeSettings(**config_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
