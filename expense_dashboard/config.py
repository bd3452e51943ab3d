"""Configuration management for the expense dashboard.

This module centralizes all configuration values including limits,
defaults, and environment variable overrides.
"""

from __future__ import annotations

import logging
import math
import os

logger = logging.getLogger(__name__)

FALLBACK_MONTHLY_CAP = 2000.0


def monthly_cap_from_env(raw: str | None) -> float:
    """Parse a monthly cap override; unusable values fall back to the built-in cap."""
    if raw is None or not raw.strip():
        return FALLBACK_MONTHLY_CAP
    try:
        cap = float(raw)
    except ValueError:
        cap = math.nan
    if not math.isfinite(cap) or cap <= 0:
        logger.warning(
            "Ignoring EXPENSE_DASHBOARD_MONTHLY_CAP=%r, expected a positive number; using %.2f",
            raw,
            FALLBACK_MONTHLY_CAP,
        )
        return FALLBACK_MONTHLY_CAP
    return cap


# Budget cap shown on the dashboard until the user changes it
DEFAULT_MONTHLY_CAP = monthly_cap_from_env(os.getenv("EXPENSE_DASHBOARD_MONTHLY_CAP"))

# Theme the page starts in
DEFAULT_DARK_MODE = os.getenv("EXPENSE_DASHBOARD_DARK_MODE", "true").strip().lower() in {"1", "true", "yes", "on"}

LOG_LEVEL = os.getenv("EXPENSE_DASHBOARD_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Validation and aggregation limits
TITLE_MAX_LENGTH = 50
TRAILING_WEEK_DAYS = 7

# Category filter sentinel meaning "no category constraint"
ALL_CATEGORIES = "All"

_PACKAGE_LOGGER = "expense_dashboard"


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Safe to call on every Streamlit rerun; the handler is only added once.
    """
    logger = logging.getLogger(_PACKAGE_LOGGER)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level or LOG_LEVEL)
    return logger
