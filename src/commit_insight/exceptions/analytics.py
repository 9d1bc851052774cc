"""Analytics-related exceptions: malformed commits, bad query arguments."""

from typing import Any

from .base import CommitInsightError


class AnalyticsError(CommitInsightError):
    """Base class for errors raised by the analytics core."""

    pass


class InvalidCommitError(AnalyticsError, ValueError):
    """Raised when a commit is rejected at ingestion.

    Nothing is recorded when this is raised.
    """

    def __init__(self, field: str, reason: str, value: Any = None):
        super().__init__(
            f"Invalid commit {field}: {reason}",
            details={"field": field, "value": repr(value)},
        )
        self.field = field
        self.reason = reason
        self.value = value


class InvalidThresholdError(AnalyticsError, ValueError):
    """Raised when a query threshold is below 1."""

    def __init__(self, operation: str, threshold: Any):
        super().__init__(
            f"Threshold must be at least 1 for {operation}",
            details={"operation": operation, "threshold": str(threshold)},
        )
        self.operation = operation
        self.threshold = threshold


class InvalidLimitError(AnalyticsError, ValueError):
    """Raised when a result limit is below 1."""

    def __init__(self, limit: Any):
        super().__init__("Limit must be at least 1", details={"limit": str(limit)})
        self.limit = limit
