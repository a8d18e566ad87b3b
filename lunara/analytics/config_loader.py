"""Load, validate, and hot-reload the Lunara analytics configuration.

The config lives in ``analytics_config.yaml`` alongside this module.  At
startup it is loaded once and cached.  Call ``reload_analytics_config()`` to
re-read from disk without a restart.

Usage::

    from lunara.analytics.config_loader import get_analytics_config

    config = get_analytics_config()
    config.fertile_window.window_days   # 6
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger("lunara.analytics.config")

_CONFIG_PATH = Path(__file__).parent / "analytics_config.yaml"


# ---------------------------------------------------------------------------
# Typed config sections
# ---------------------------------------------------------------------------


@dataclass
class CycleStatsConfig:
    min_period_records: int = 2


@dataclass
class FertileWindowConfig:
    """Fixed-offset fertile window heuristic.

    The window spans ``window_days`` days ending on the ovulation day, which
    is ``avg_cycle_length // ovulation_divisor``.
    """

    window_days: int = 6
    ovulation_divisor: int = 2


@dataclass
class StatusMessages:
    period: str = "You are on your period."
    fertile: str = "Higher chance to get pregnant"
    regular: str = "Low chance to get pregnant"


@dataclass
class AnalyticsConfig:
    """Complete, validated analytics configuration.

    Attributes:
        version:         Config schema version string.
        cycle_stats:     Minimum-data settings for cycle statistics.
        fertile_window:  Fertile window heuristic parameters.
        status_messages: Human-readable text per cycle status.
    """

    version: str
    cycle_stats: CycleStatsConfig = field(default_factory=CycleStatsConfig)
    fertile_window: FertileWindowConfig = field(default_factory=FertileWindowConfig)
    status_messages: StatusMessages = field(default_factory=StatusMessages)
    _raw: dict = field(default_factory=dict, repr=False)


# ---------------------------------------------------------------------------
# Loader / validation
# ---------------------------------------------------------------------------


class ConfigValidationError(ValueError):
    """Raised when analytics_config.yaml fails validation."""


def _load_yaml(path: Path) -> dict:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the YAML is malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Analytics config not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            return yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"YAML parse error in {path}: {exc}") from exc


def _validate_and_build(raw: dict) -> AnalyticsConfig:
    """Validate the raw YAML dict and construct an AnalyticsConfig.

    Missing sections fall back to defaults; present values must be sane.
    All problems are collected and reported together.
    """
    errors: list[str] = []

    def _int_at_least(
        section: dict, key: str, default: int, name: str, minimum: int = 1
    ) -> int:
        value: Any = section.get(key, default)
        # bool is an int subclass; YAML `true` is not a count
        if isinstance(value, bool) or not isinstance(value, int):
            errors.append(f"{name}.{key} must be an integer, got {value!r}")
            return default
        if value < minimum:
            errors.append(f"{name}.{key} = {value} must be >= {minimum}")
        return value

    version = str(raw.get("version", "1.0"))

    # ── Cycle stats ──
    cs_raw = raw.get("cycle_stats") or {}
    cycle_stats = CycleStatsConfig(
        min_period_records=_int_at_least(
            cs_raw, "min_period_records", 2, "cycle_stats", minimum=2
        ),
    )

    # ── Fertile window ──
    fw_raw = raw.get("fertile_window") or {}
    fertile_window = FertileWindowConfig(
        window_days=_int_at_least(fw_raw, "window_days", 6, "fertile_window"),
        ovulation_divisor=_int_at_least(fw_raw, "ovulation_divisor", 2, "fertile_window"),
    )

    # ── Messages ──
    sm_raw = raw.get("status_messages") or {}
    defaults = StatusMessages()
    status_messages = StatusMessages(
        period=str(sm_raw.get("period", defaults.period)),
        fertile=str(sm_raw.get("fertile", defaults.fertile)),
        regular=str(sm_raw.get("regular", defaults.regular)),
    )

    if errors:
        raise ConfigValidationError(
            f"analytics_config.yaml has {len(errors)} validation error(s):\n"
            + "\n".join(f"  • {e}" for e in errors)
        )

    return AnalyticsConfig(
        version=version,
        cycle_stats=cycle_stats,
        fertile_window=fertile_window,
        status_messages=status_messages,
        _raw=raw,
    )


def load_analytics_config(path: Path | None = None) -> AnalyticsConfig:
    """Load and validate the analytics config from disk.

    Args:
        path: Override path to YAML. Uses the bundled analytics_config.yaml by default.
    """
    target = path or _CONFIG_PATH
    raw = _load_yaml(target)
    config = _validate_and_build(raw)
    logger.info("Loaded analytics config v%s from %s", config.version, target)
    return config


# ---------------------------------------------------------------------------
# Global singleton with hot-reload support
# ---------------------------------------------------------------------------

_config: AnalyticsConfig | None = None
_config_lock = threading.Lock()


def get_analytics_config() -> AnalyticsConfig:
    """Return the global AnalyticsConfig singleton, loading it on first call."""
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:  # double-checked locking
                _config = load_analytics_config()
    return _config


def reload_analytics_config(path: Path | None = None) -> AnalyticsConfig:
    """Reload the config from disk and replace the global singleton.

    If validation fails, the old config is retained and the error is re-raised.
    """
    global _config
    new_config = load_analytics_config(path)  # validate before acquiring lock
    with _config_lock:
        old_version = _config.version if _config else "none"
        _config = new_config
    logger.info("Reloaded analytics config: %s → %s", old_version, new_config.version)
    return new_config
