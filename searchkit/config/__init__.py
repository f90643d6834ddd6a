"""Configuration module for searchkit."""

from searchkit.config.loader import get_config_path, load_config
from searchkit.config.schema import Config

__all__ = ["Config", "load_config", "get_config_path"]
