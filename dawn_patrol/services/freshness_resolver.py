"""Service for arbitrating between live and historical wind data."""
import logging
from datetime import datetime, timedelta
from typing import Optional

from dawn_patrol.config import Settings, settings as default_settings
from dawn_patrol.exceptions import InsufficientData
from dawn_patrol.models.conditions import CurrentConditions, DataSource
from dawn_patrol.models.sample import LiveReading, SampleSeries
from dawn_patrol.utils.angle_utils import cardinal_direction

logger = logging.getLogger(__name__)

FIELDS = ("wind_speed", "wind_direction", "gust")


class FreshnessResolver:
    """
    Resolves current wind values from a live reading and a historical series.

    Live data wins while it is younger than the live age limit; after that
    the latest series sample is used. Staleness and the freshness message
    use their own, longer tiers so a brief live gap does not flag the
    station as stale.
    """

    def __init__(
        self,
        live: Optional[LiveReading],
        series: Optional[SampleSeries],
        now: datetime,
        config: Settings = default_settings,
    ):
        self.live = live
        self.series = series if series is not None else SampleSeries.empty()
        self.now = now
        self.config = config

    def _minutes_since(self, instant: datetime) -> float:
        return (self.now - instant) / timedelta(minutes=1)

    def _live_age(self) -> Optional[float]:
        if self.live is None:
            return None
        return self._minutes_since(self.live.observed_at)

    def _series_age(self) -> Optional[float]:
        latest = self.series.latest
        if latest is None:
            return None
        return self._minutes_since(latest.timestamp)

    def source(self) -> DataSource:
        """Which input current values come from."""
        live_age = self._live_age()
        if live_age is not None and live_age < self.config.live_max_age_minutes:
            return DataSource.LIVE
        if not self.series.is_empty:
            return DataSource.HISTORICAL
        return DataSource.NONE

    def current_value(self, field: str) -> Optional[float]:
        """
        Get the current value of a sample field.

        Args:
            field: One of "wind_speed", "wind_direction" or "gust"

        Returns:
            The live value when fresh, else the latest series value, else None
        """
        if field not in FIELDS:
            raise ValueError(f"Unknown field {field!r}, expected one of {FIELDS}")

        source = self.source()
        if source is DataSource.LIVE:
            return getattr(self.live.sample, field)
        if source is DataSource.HISTORICAL:
            return getattr(self.series.latest, field)

        logger.debug("%s", InsufficientData("current_value", f"no {field} available"))
        return None

    def is_stale(self) -> bool:
        """True when neither source is younger than the stale limit."""
        limit = self.config.stale_after_minutes

        live_age = self._live_age()
        if live_age is not None and live_age < limit:
            return False

        series_age = self._series_age()
        if series_age is None:
            return True
        return series_age > limit

    def freshness_message(self) -> str:
        """Human-readable age of the data currently shown."""
        live_age = self._live_age()
        if live_age is not None:
            minutes = int(live_age // 1)
            if live_age < self.config.live_current_minutes:
                return "Real-time data current"
            if live_age < self.config.stale_after_minutes:
                return f"Real-time data from {minutes} minutes ago"

        series_age = self._series_age()
        if series_age is None:
            return "No data available"

        minutes = int(series_age // 1)
        if series_age < self.config.stale_after_minutes:
            return "Historical data is current"
        if series_age < self.config.offline_after_minutes:
            return f"Last historical reading {minutes} minutes ago"

        hours = minutes // 60
        return f"⚠️ Station may be offline - last reading {hours} hours ago"

    def last_updated(self) -> Optional[datetime]:
        """Capture time of the live reading, else the latest sample time."""
        if self.live is not None:
            return self.live.observed_at
        latest = self.series.latest
        return latest.timestamp if latest is not None else None

    def resolve(self) -> CurrentConditions:
        """Resolve everything the display layer needs in one value."""
        direction = self.current_value("wind_direction")
        return CurrentConditions(
            wind_speed=self.current_value("wind_speed"),
            wind_direction=direction,
            gust=self.current_value("gust"),
            source=self.source(),
            is_stale=self.is_stale(),
            freshness_message=self.freshness_message(),
            last_updated=self.last_updated(),
            cardinal_direction=cardinal_direction(direction),
        )
