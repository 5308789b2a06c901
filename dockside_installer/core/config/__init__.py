"""Configuration loading."""

from dockside_installer.core.config.loader import find_config_file, load_config

__all__ = ["find_config_file", "load_config"]
