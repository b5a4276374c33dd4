"""
Storage Layer.

Handles persistence of the application's INI configuration file.
"""

from .config_manager import ConfigManager

__all__ = ["ConfigManager"]
