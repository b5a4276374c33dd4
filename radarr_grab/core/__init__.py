"""
Core grab workflow.

`grab_best_release` runs the three stages in order: `fetch_releases` with a
bounded `RetryPolicy`, `find_best_release`, then `download_release`.
"""

from .grab_manager import GrabManager, grab_best_release
from .retry import RetryPolicy
from .selector import find_best_release

__all__ = ["GrabManager", "RetryPolicy", "find_best_release", "grab_best_release"]
