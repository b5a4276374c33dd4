"""
Data Models Layer.

This package contains Pydantic models that define the core data structures
used throughout the application, such as configuration and releases.
"""

from .config import GrabConfig
from .release import Release, ReleaseList

__all__ = ["GrabConfig", "Release", "ReleaseList"]
