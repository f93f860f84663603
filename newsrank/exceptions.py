"""
Exception types for NewsRank.

The scoring engine itself never raises for empty or partial input; these
errors belong to the boundary (row mapping, store access, configuration).
"""


class NewsRankError(Exception):
    """Base class for all NewsRank errors."""


class RecordError(NewsRankError, ValueError):
    """A storage row could not be mapped onto an Article or ViewRecord."""


class StoreError(NewsRankError):
    """The article store could not be read."""

    def __init__(self, message: str, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class ConfigError(NewsRankError):
    """The configuration file could not be used."""
