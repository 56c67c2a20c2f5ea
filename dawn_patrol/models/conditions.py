"""Resolved current wind conditions."""
from datetime import datetime
from enum import Enum
from typing import Optional

from attrs import frozen


class DataSource(str, Enum):
    """Which input supplied the current values."""

    LIVE = "live"
    HISTORICAL = "historical"
    NONE = "none"


@frozen
class CurrentConditions:
    """Current wind values with their freshness."""

    wind_speed: Optional[float]
    wind_direction: Optional[float]
    gust: Optional[float]
    source: DataSource
    is_stale: bool
    freshness_message: str
    last_updated: Optional[datetime]
    cardinal_direction: str
