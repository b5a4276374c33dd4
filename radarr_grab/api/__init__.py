"""
Radarr API Layer.

This package handles all communication with a Radarr instance.
"""

from .client import RadarrAPIClient

__all__ = ["RadarrAPIClient"]
