"""
Settings loader — resolves where dev-env keeps its files and which
base domain projects are served under.

Resolution order (later wins):
    built-in defaults  <  <config_dir>/settings.yml  <  DEVENV_* env vars
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from devenv.core.errors import ConfigError

logger = logging.getLogger(__name__)

APP_DIR_NAME = "dev-env"
SETTINGS_FILE = "settings.yml"
DEFAULT_BASE_DOMAIN = "local.test"

ENV_CONFIG_DIR = "DEVENV_CONFIG_DIR"
ENV_HOME = "DEVENV_HOME"
ENV_BASE_DOMAIN = "DEVENV_BASE_DOMAIN"


def default_config_dir() -> Path:
    """``$XDG_CONFIG_HOME/dev-env``, falling back to ``~/.config/dev-env``."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / APP_DIR_NAME


def default_env_dir() -> Path:
    return Path.home() / ".local" / "share" / APP_DIR_NAME / "docker"


def resolve_config_dir(config_dir: Path | None = None) -> Path:
    """Explicit directory, else DEVENV_CONFIG_DIR, else the default."""
    if config_dir:
        return Path(config_dir)
    env_config_dir = os.environ.get(ENV_CONFIG_DIR)
    return Path(env_config_dir) if env_config_dir else default_config_dir()


class Settings(BaseModel):
    """Resolved runtime settings."""

    base_domain: str = DEFAULT_BASE_DOMAIN
    config_dir: Path = Field(default_factory=default_config_dir)
    env_dir: Path = Field(default_factory=default_env_dir)
    compose_timeout: int = 300
    teardown_timeout: int = 30


def load_settings(config_dir: Path | None = None) -> Settings:
    """Build Settings from defaults, the optional YAML file and env vars.

    Args:
        config_dir: Explicit config directory. Overrides DEVENV_CONFIG_DIR.

    Returns:
        Validated Settings.

    Raises:
        ConfigError: If settings.yml is unreadable or invalid.
    """
    resolved_dir = resolve_config_dir(config_dir)

    data: dict = {"config_dir": resolved_dir}
    data.update(_read_settings_file(resolved_dir / SETTINGS_FILE))
    data["config_dir"] = resolved_dir

    if os.environ.get(ENV_HOME):
        data["env_dir"] = os.environ[ENV_HOME]
    if os.environ.get(ENV_BASE_DOMAIN):
        data["base_domain"] = os.environ[ENV_BASE_DOMAIN]

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e

    settings.base_domain = settings.base_domain.strip().strip(".").lower()
    if not settings.base_domain:
        raise ConfigError("base_domain must not be empty")

    logger.debug(
        "Settings resolved: config_dir=%s env_dir=%s base_domain=%s",
        settings.config_dir, settings.env_dir, settings.base_domain,
    )
    return settings


def _read_settings_file(path: Path) -> dict:
    """Read settings.yml; a missing file yields no overrides."""
    if not path.is_file():
        return {}

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "settings" key or be flat
    if isinstance(data.get("settings"), dict):
        data = data["settings"]

    logger.info("Loaded settings overrides from %s", path)
    return dict(data)
