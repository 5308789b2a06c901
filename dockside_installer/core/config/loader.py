"""
Configuration loader — reads the optional installer YAML into a typed model.

Precedence (highest first):
    CLI flags  >  environment variables  >  config file  >  model defaults

The config file is optional. It is looked up in this order:
    1. explicit path (``--config``)
    2. ``$DOCKSIDE_CONFIG``
    3. ``./dockside-installer.yml``
    4. ``~/.config/dockside/installer.yml``
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from dockside_installer.core.errors import ConfigError
from dockside_installer.core.models.config import InstallerConfig

logger = logging.getLogger(__name__)

CONFIG_FILE = "dockside-installer.yml"
USER_CONFIG_FILE = "~/.config/dockside/installer.yml"

ENV_CONFIG = "DOCKSIDE_CONFIG"
ENV_VERSION = "DOCKSIDE_VERSION"
ENV_INSTALL_DIR = "DOCKSIDE_INSTALL_DIR"


def find_config_file(
    explicit: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
    cwd: Path | None = None,
) -> Path | None:
    """Return the config file to load, or None to use defaults.

    An explicit path (flag or env var) that does not exist is an error;
    the implicit locations are simply skipped when absent.
    """
    env = os.environ if env is None else env

    if explicit is None and env.get(ENV_CONFIG):
        explicit = Path(env[ENV_CONFIG])

    if explicit is not None:
        explicit = explicit.expanduser()
        if not explicit.is_file():
            raise ConfigError(
                f"Config file not found: {explicit}",
                hint="Check the --config path or unset DOCKSIDE_CONFIG.",
            )
        return explicit

    for candidate in ((cwd or Path.cwd()) / CONFIG_FILE, Path(USER_CONFIG_FILE).expanduser()):
        if candidate.is_file():
            return candidate
    return None


def load_config(
    path: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
    cwd: Path | None = None,
) -> InstallerConfig:
    """Load, validate, and apply environment overrides.

    Raises:
        ConfigError: If the file is unreadable, not YAML, or fails validation.
    """
    env = os.environ if env is None else env
    config_file = find_config_file(path, env=env, cwd=cwd)

    data: dict[str, Any] = {}
    if config_file is not None:
        logger.debug("Loading installer config from %s", config_file)
        data = _read_yaml(config_file)

    overrides = _env_overrides(env)
    if overrides:
        logger.debug("Environment overrides: %s", sorted(overrides))
        data.update(overrides)

    try:
        config = InstallerConfig.model_validate(data)
    except ValidationError as e:
        source = config_file or "environment"
        raise ConfigError(
            f"Invalid installer configuration ({source}): {e}",
            hint="Fix the listed fields or remove the config file to use defaults.",
        ) from e

    logger.info(
        "Config: repo=%s kind=%s version=%s",
        config.repo, config.artifact_kind.value, config.version,
    )
    return config


def _read_yaml(path: Path) -> dict[str, Any]:
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

    # Allow the settings to sit under a top-level "installer" key
    if isinstance(data.get("installer"), dict):
        data = data["installer"]
    return dict(data)


def _env_overrides(env: Mapping[str, str]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    if env.get(ENV_VERSION):
        overrides["version"] = env[ENV_VERSION]
    if env.get(ENV_INSTALL_DIR):
        overrides["install_dir"] = env[ENV_INSTALL_DIR]
    return overrides
