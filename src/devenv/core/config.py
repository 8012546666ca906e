"""
Configuration management
Loads settings from devenv.yml with DEVENV_* environment overrides
"""

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError

logger = logging.getLogger("devenv.config")

# Paths
PACKAGE_DIR = Path(__file__).parent
DEFAULT_TEMPLATES_DIR = PACKAGE_DIR / "templates"
CONFIG_FILE_NAME = "devenv.yml"

# Marker the existence check looks for in `docker images` output
DEFAULT_IMAGE_MARKER = "dev-env-lib-test-docker"

ENV_OVERRIDES = {
    "docker_binary": "DEVENV_DOCKER_BINARY",
    "templates_dir": "DEVENV_TEMPLATES_DIR",
    "image_marker": "DEVENV_IMAGE_MARKER",
    "log_level": "DEVENV_LOG_LEVEL",
}


@dataclass(frozen=True)
class Settings:
    """Runtime settings shared by every docker call"""
    docker_binary: str = "docker"
    templates_dir: Path = DEFAULT_TEMPLATES_DIR
    image_marker: str = DEFAULT_IMAGE_MARKER
    log_level: str = "INFO"

    def with_overrides(self, values: Dict[str, Any]) -> "Settings":
        """Return a copy with known keys replaced, ignoring unknown ones"""
        known = {}
        for key, value in values.items():
            if key not in ENV_OVERRIDES:
                logger.warning("Ignoring unknown config key: %s", key)
                continue
            if value is None:
                continue
            known[key] = Path(value) if key == "templates_dir" else str(value)
        return replace(self, **known)


def find_config_file(start: Optional[Path] = None) -> Optional[Path]:
    """Locate the config file: $DEVENV_CONFIG first, then ./devenv.yml"""
    explicit = os.getenv("DEVENV_CONFIG")
    if explicit:
        return Path(explicit)

    candidate = (start or Path.cwd()) / CONFIG_FILE_NAME
    if candidate.exists():
        return candidate
    return None


def load_config_file(config_file: Path) -> Dict[str, Any]:
    """Parse a YAML config file into a dict"""
    if not config_file.exists():
        logger.debug("Config file not found, using defaults: %s", config_file)
        return {}

    try:
        with config_file.open("r") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse {config_file.name}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping, got {type(config).__name__}")
    return config


def load_settings(config_file: Optional[Path] = None) -> Settings:
    """
    Build Settings from all sources

    Order of precedence (highest last):
    1. Built-in defaults
    2. YAML config file
    3. DEVENV_* environment variables
    """
    settings = Settings()

    if config_file is None:
        config_file = find_config_file()
    if config_file is not None:
        settings = settings.with_overrides(load_config_file(config_file))
        logger.debug("Loaded configuration from %s", config_file)

    env_values = {
        key: os.environ[env_name]
        for key, env_name in ENV_OVERRIDES.items()
        if os.environ.get(env_name)
    }
    if env_values:
        logger.debug("Environment overrides: %s", ", ".join(sorted(env_values)))
        settings = settings.with_overrides(env_values)

    return settings
