"""
radarr-grab: pick the best release Radarr can find for a movie and grab it.
"""

__version__ = "1.0.0"
