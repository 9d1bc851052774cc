"""Analytics engine: the public query surface."""

from .engine import DEFAULT_COMPONENT_THRESHOLD, AnalyticsEngine
from .models import EngineSummary

__all__ = ["AnalyticsEngine", "DEFAULT_COMPONENT_THRESHOLD", "EngineSummary"]
