"""Configuration loading and management for Commit Insight.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalyticsConfig)
    2. Global config (~/.commit-insight.toml)
    3. Project config (./commit-insight.toml)
    4. Explicit config file
    5. Environment variables (COMMIT_INSIGHT_* prefix)
    6. Keyword overrides (typically CLI flags)

Example:
    >>> config = load_config(verbose=True, busiest_limit=5)
    >>> config.verbosity
    'verbose'
    >>> config.busiest_limit
    5
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "COMMIT_INSIGHT_"
CONFIG_FILENAME = "commit-insight.toml"


@dataclass(frozen=True)
class AnalyticsConfig:
    """Default query parameters and output settings.

    Attributes:
        Query defaults:
            component_threshold: Minimum co-change count for two files to share a component
            expert_threshold: Components a developer must touch to count as an expert
            broad_feature_threshold: Components a feature task must touch to count as broad
            repeated_bug_threshold: Times one file must recur within a bug task
            busiest_limit: Number of files returned by the busiest-files query

        Output control:
            verbosity: Logging verbosity level
            log_file: Optional file receiving a copy of the log
    """

    component_threshold: int = 1
    expert_threshold: int = 2
    broad_feature_threshold: int = 2
    repeated_bug_threshold: int = 2
    busiest_limit: int = 10

    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        for name in (
            "component_threshold",
            "expert_threshold",
            "broad_feature_threshold",
            "repeated_bug_threshold",
            "busiest_limit",
        ):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise InvalidConfigError(name, value, "must be an integer of at least 1")

        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "expected quiet, normal or verbose"
            )


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalyticsConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``verbose`` and
            ``quiet`` booleans are translated to ``verbosity``; ``None`` values
            are ignored so unset CLI options fall through.

    Returns:
        Validated AnalyticsConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / f".{CONFIG_FILENAME}"
    if global_config.exists():
        merged.update(_load_section(global_config, "global config"))

    project_config = Path.cwd() / CONFIG_FILENAME
    if project_config.exists():
        merged.update(_load_section(project_config, "project config"))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_section(config_file, "config file"))

    merged.update(_load_env_vars())

    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return AnalyticsConfig(**merged)
    except TypeError as e:
        # Unknown field
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_section(path: Path, label: str) -> dict[str, Any]:
    """Read a TOML file, accepting either top-level keys or a [commit_insight] table."""
    try:
        data = _load_toml_file(path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid {label} '{path}': {e}")

    section = data.get("commit_insight", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"Invalid {label} '{path}': [commit_insight] must be a table")
    return dict(section)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from COMMIT_INSIGHT_* environment variables.

    Supported environment variables:
        COMMIT_INSIGHT_COMPONENT_THRESHOLD: int
        COMMIT_INSIGHT_EXPERT_THRESHOLD: int
        COMMIT_INSIGHT_BROAD_FEATURE_THRESHOLD: int
        COMMIT_INSIGHT_REPEATED_BUG_THRESHOLD: int
        COMMIT_INSIGHT_BUSIEST_LIMIT: int
        COMMIT_INSIGHT_VERBOSITY: quiet/normal/verbose
        COMMIT_INSIGHT_LOG_FILE: str
    """
    type_hints = get_type_hints(AnalyticsConfig)

    result: dict[str, Any] = {}

    for f in fields(AnalyticsConfig):
        env_key = f"{ENV_PREFIX}{f.name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hints[f.name])
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[f.name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type."""
    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]

    origin = getattr(type_hint, "__origin__", None)

    if type_hint is int:
        return int(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
