"""Service for reducing hourly forecasts to dawn patrol factor inputs."""
import logging
from datetime import timedelta
from typing import Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from dawn_patrol.config import (
    CLEAR_SKY_WINDOW,
    DOWNSLOPE_SECTOR,
    PREDICTION_WINDOW,
    PRESSURE_TREND_HOURS,
)
from dawn_patrol.schemas.forecast import ForecastBundle, HourlyForecastPoint
from dawn_patrol.services.mountain_wave_analyzer import MountainWaveAnalyzer
from dawn_patrol.utils.forecast_frames import forecast_dataframe, optional_float, rows_in_window

logger = logging.getLogger(__name__)


class ForecastAggregator:
    """
    Builds a ForecastBundle from hourly forecasts for a valley site and a
    mountain reference point.

    Windows are matched on the hour of each point's own timestamp. Any
    quantity without qualifying rows is left as None so the engine reports
    the factor as missing.
    """

    def __init__(
        self,
        clear_sky_window: Tuple[int, int] = CLEAR_SKY_WINDOW,
        prediction_window: Tuple[int, int] = PREDICTION_WINDOW,
        pressure_trend_hours: int = PRESSURE_TREND_HOURS,
        wave_analyzer: Optional[MountainWaveAnalyzer] = None,
    ):
        self.clear_sky_window = clear_sky_window
        self.prediction_window = prediction_window
        self.pressure_trend_hours = pressure_trend_hours
        self.wave_analyzer = wave_analyzer

    def precipitation_probability(self, valley: pd.DataFrame) -> Optional[float]:
        """Highest precipitation chance across the cooling and prediction windows."""
        rows = pd.concat([
            rows_in_window(valley, self.clear_sky_window),
            rows_in_window(valley, self.prediction_window),
        ])
        return optional_float(rows["precipitation_probability"].max())

    def clear_sky_percentage(self, valley: pd.DataFrame, mountain: pd.DataFrame) -> Optional[float]:
        """100 minus mean cloud cover over the cooling window at both locations."""
        rows = pd.concat([
            rows_in_window(valley, self.clear_sky_window),
            rows_in_window(mountain, self.clear_sky_window),
        ])
        mean_cover = optional_float(rows["cloud_cover"].mean())
        if mean_cover is None:
            return None
        return max(0.0, 100.0 - mean_cover)

    def pressure_change(self, valley: pd.DataFrame) -> Optional[float]:
        """Signed valley pressure change over the leading trend hours."""
        rows = valley.dropna(subset=["pressure"])
        if len(rows) < 2:
            return None
        cutoff = rows["timestamp"].iloc[0] + timedelta(hours=self.pressure_trend_hours)
        rows = rows[rows["timestamp"] <= cutoff]
        if len(rows) < 2:
            return None
        return float(rows["pressure"].iloc[-1] - rows["pressure"].iloc[0])

    def temperature_differential(
        self, valley: pd.DataFrame, mountain: pd.DataFrame,
    ) -> Optional[float]:
        """Mean valley minus mean mountain temperature over the prediction window."""
        valley_temp = optional_float(rows_in_window(valley, self.prediction_window)["temperature"].mean())
        mountain_temp = optional_float(rows_in_window(mountain, self.prediction_window)["temperature"].mean())
        if valley_temp is None or mountain_temp is None:
            return None
        return valley_temp - mountain_temp

    def wave_enhancement_score(
        self, valley: pd.DataFrame, mountain: pd.DataFrame,
    ) -> Optional[float]:
        """
        Score 0-100 for downslope wave enhancement in the prediction window.

        With a wave analyzer this is its Froude-based propagation potential.
        Otherwise it starts from the share of valley winds in the downslope
        sector and loses 10 points per mph of valley wind above 5 mph and per
        mph of valley/mountain shear above 3 mph.
        """
        if self.wave_analyzer is not None:
            analysis = self.wave_analyzer.analyze_frames(valley, mountain)
            return None if analysis is None else analysis.propagation_potential

        valley_rows = rows_in_window(valley, self.prediction_window).dropna(
            subset=["wind_speed", "wind_direction"]
        )
        mountain_rows = rows_in_window(mountain, self.prediction_window).dropna(
            subset=["wind_speed"]
        )
        if valley_rows.empty or mountain_rows.empty:
            return None

        directions = np.mod(valley_rows["wind_direction"].to_numpy(), 360.0)
        sector_start, sector_end = DOWNSLOPE_SECTOR
        downslope = (directions >= sector_start) | (directions <= sector_end)
        consistency = float(downslope.mean())

        valley_speed = float(valley_rows["wind_speed"].mean())
        shear = abs(valley_speed - float(mountain_rows["wind_speed"].mean()))

        score = consistency * 100
        score -= max(0.0, valley_speed - 5) * 10
        score -= max(0.0, shear - 3) * 10
        return float(np.clip(score, 0, 100))

    def build_bundle(
        self,
        valley_points: Sequence[HourlyForecastPoint],
        mountain_points: Sequence[HourlyForecastPoint],
    ) -> ForecastBundle:
        """
        Reduce hourly forecasts to factor inputs.

        Args:
            valley_points: Hourly forecast at the riding site
            mountain_points: Hourly forecast at the upslope reference point

        Returns:
            ForecastBundle with None for anything that could not be derived
        """
        valley = forecast_dataframe(valley_points)
        mountain = forecast_dataframe(mountain_points)

        bundle = ForecastBundle(
            precipitation_probability=self.precipitation_probability(valley),
            clear_sky_percentage=self.clear_sky_percentage(valley, mountain),
            pressure_change=self.pressure_change(valley),
            temperature_differential=self.temperature_differential(valley, mountain),
            wave_enhancement_score=self.wave_enhancement_score(valley, mountain),
        )
        logger.debug("Forecast bundle from %d valley / %d mountain points: %s",
                     len(valley), len(mountain), bundle)
        return bundle
