"""Service for deriving and applying the wind chart time window."""
import logging
from datetime import datetime, timedelta
from typing import Optional

from dawn_patrol.config import SameDayPolicy, Settings, settings as default_settings
from dawn_patrol.models.sample import SampleSeries
from dawn_patrol.models.time_window import TimeWindow

logger = logging.getLogger(__name__)


class TimeWindowCalculator:
    """
    Computes which hours of station data a chart should show.

    The local frame is the timezone of the ``now`` passed in: calendar dates
    and hours of samples are taken after converting them to that zone.
    ``now`` and sample timestamps must both be timezone-aware or both naive.
    """

    def __init__(
        self,
        same_day_policy: Optional[SameDayPolicy] = None,
        config: Settings = default_settings,
    ):
        self.config = config
        self.same_day_policy = same_day_policy or config.same_day_policy

    def compute(self, now: datetime) -> TimeWindow:
        """
        Compute the window for the current wall-clock time.

        - Before the start hour: the previous day's start..cutoff window
        - Start hour through cutoff: today from the start hour, ending at 23
          or at the current hour depending on the same-day policy
        - After the cutoff: today's full start..cutoff window
        """
        start = self.config.window_start_hour
        cutoff = self.config.window_cutoff_hour
        hour = now.hour

        if hour < start:
            window = TimeWindow(start_hour=start, end_hour=cutoff, is_multi_day=True)
        elif hour <= cutoff:
            if self.same_day_policy is SameDayPolicy.UP_TO_NOW:
                end = hour
            else:
                end = 23
            window = TimeWindow(start_hour=start, end_hour=end)
        else:
            window = TimeWindow(start_hour=start, end_hour=cutoff)

        logger.debug("Time window at %s: %s", now.isoformat(), window)
        return window

    @staticmethod
    def _to_local(timestamp: datetime, now: datetime) -> datetime:
        if now.tzinfo is not None and timestamp.tzinfo is not None:
            return timestamp.astimezone(now.tzinfo)
        return timestamp

    def filter(
        self,
        series: SampleSeries,
        window: TimeWindow,
        now: datetime,
    ) -> SampleSeries:
        """
        Keep the samples of a series that fall within a window.

        Multi-day windows keep yesterday's samples within the window hours.
        Same-day windows keep today's samples within the window hours that
        are not later than ``now``.
        """
        if series.is_empty:
            return series

        if window.is_multi_day:
            target_date = (now - timedelta(days=1)).date()
        else:
            target_date = now.date()

        kept = []
        for sample in series:
            local = self._to_local(sample.timestamp, now)
            if local.date() != target_date or not window.contains_hour(local.hour):
                continue
            if not window.is_multi_day and sample.timestamp > now:
                continue
            kept.append(sample)

        logger.debug("Filtered %d of %d samples into %s", len(kept), len(series), window)
        return SampleSeries(tuple(kept))

    def filter_hours(
        self,
        series: SampleSeries,
        start_hour: int,
        end_hour: int,
    ) -> SampleSeries:
        """Keep samples whose hour of day is within start..end, wrapping past midnight."""
        if start_hour <= end_hour:
            kept = [s for s in series if start_hour <= s.timestamp.hour <= end_hour]
        else:
            kept = [s for s in series if s.timestamp.hour >= start_hour or s.timestamp.hour <= end_hour]
        return SampleSeries(tuple(kept))
