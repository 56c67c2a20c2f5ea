"""Service for checking early-morning station data against alarm criteria."""
import logging
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from dawn_patrol.config import ALARM_WINDOW, VERIFY_WINDOW
from dawn_patrol.models.alarm import WindAnalysis
from dawn_patrol.models.sample import SampleSeries
from dawn_patrol.schemas.thresholds import AlarmCriteria
from dawn_patrol.services.time_window_service import TimeWindowCalculator
from dawn_patrol.utils.angle_utils import (
    cardinal_direction,
    circular_mean,
    direction_consistency,
    in_range,
)

logger = logging.getLogger(__name__)


class WindAlarmAnalyzer:
    """
    Decides whether the dawn wind window is worth waking up for.

    The alarm window (3am-5am) is checked before dawn; the verification
    window (6am-8am) is checked afterwards to score the prediction.
    """

    def __init__(
        self,
        criteria: Optional[AlarmCriteria] = None,
        window_calculator: Optional[TimeWindowCalculator] = None,
    ):
        self.criteria = criteria or AlarmCriteria()
        self.window_calculator = window_calculator or TimeWindowCalculator()

    @staticmethod
    def _max_consecutive(good: pd.Series) -> int:
        """Length of the longest run of True values."""
        if good.empty:
            return 0
        # Each False starts a new group; cumulative sum of True within a group is the run length
        groups = (~good).cumsum()
        runs = good.astype(int).groupby(groups).cumsum()
        return int(runs.max())

    def _is_preferred_direction(self, direction: float) -> bool:
        if not self.criteria.use_wind_direction:
            return True
        preferred = self.criteria.preferred_direction
        spread = self.criteria.preferred_direction_range
        return in_range(direction, preferred - spread, preferred + spread)

    def analyze_series(self, series: SampleSeries) -> WindAnalysis:
        """Analyze every sample of a series against the criteria."""
        if series.is_empty:
            return WindAnalysis.no_data("No wind data available")

        df = series.to_dataframe()
        speeds = df["wind_speed"].dropna()
        directions = df["wind_direction"].dropna().to_numpy()

        average_speed = float(speeds.mean()) if not speeds.empty else 0.0
        consistency = direction_consistency(directions)
        average_direction = circular_mean(directions)
        good = df["wind_speed"].fillna(-np.inf) >= self.criteria.min_average_speed
        consecutive = self._max_consecutive(good)
        preferred = self._is_preferred_direction(average_direction)

        is_alarm_worthy = (
            average_speed >= self.criteria.min_average_speed
            and consistency >= self.criteria.direction_consistency_threshold
            and consecutive >= self.criteria.min_consecutive_points
            and preferred
        )

        analysis = (
            f"Avg Speed: {average_speed:.1f}mph, "
            f"Direction: {average_direction:.0f}° ({cardinal_direction(average_direction)}), "
            f"Direction Consistency: {consistency:.1f}%, "
            f"Consecutive Good Points: {consecutive}"
        )
        logger.debug("Wind alarm analysis: %s (alarm=%s)", analysis, is_alarm_worthy)

        return WindAnalysis(
            is_alarm_worthy=is_alarm_worthy,
            average_speed=average_speed,
            average_direction=average_direction,
            direction_consistency=consistency,
            consecutive_good_points=consecutive,
            analysis=analysis,
        )

    def _analyze_window(self, series: SampleSeries, window: Tuple[int, int], label: str) -> WindAnalysis:
        if series.is_empty:
            return WindAnalysis.no_data("No wind data available")

        windowed = self.window_calculator.filter_hours(series, *window)
        if windowed.is_empty:
            return WindAnalysis.no_data(f"No data available for {label}")
        return self.analyze_series(windowed)

    def analyze(self, series: SampleSeries) -> WindAnalysis:
        """Analyze the pre-dawn alarm window."""
        return self._analyze_window(series, ALARM_WINDOW, "alarm window (3am-5am)")

    def verify(self, series: SampleSeries) -> WindAnalysis:
        """Analyze the post-dawn verification window."""
        return self._analyze_window(series, VERIFY_WINDOW, "verification window (6am-8am)")
