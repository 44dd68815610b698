"""Configuration loading for the wall-space geometry engine."""

from wallspace.config.config_manager import ConfigManager
from wallspace.config.loader import load_config_file

__all__ = ["ConfigManager", "load_config_file"]
