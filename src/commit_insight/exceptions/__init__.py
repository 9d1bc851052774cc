"""Exception hierarchy for Commit Insight."""

from .analytics import (
    AnalyticsError,
    InvalidCommitError,
    InvalidLimitError,
    InvalidThresholdError,
)
from .base import CommitInsightError
from .config import ConfigurationError, IngestionError, InvalidConfigError

__all__ = [
    "CommitInsightError",
    "AnalyticsError",
    "InvalidCommitError",
    "InvalidThresholdError",
    "InvalidLimitError",
    "ConfigurationError",
    "InvalidConfigError",
    "IngestionError",
]
