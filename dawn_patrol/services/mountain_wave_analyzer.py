"""Service for estimating mountain wave conditions from valley and mountain forecasts."""
import logging
import math
from typing import Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from dawn_patrol.config import (
    DRY_ADIABATIC_LAPSE,
    GRAVITY,
    MPH_TO_MS,
    OPTIMAL_FROUDE,
    PREDICTION_WINDOW,
    REFERENCE_TEMPERATURE_K,
    STATION_ELEVATION_DIFF_M,
    TERRAIN_HEIGHT_M,
    UPSTREAM_WIND_FACTOR,
)
from dawn_patrol.exceptions import InsufficientData
from dawn_patrol.models.mountain_wave import (
    MountainWaveAnalysis,
    SurfaceCoupling,
    WaveAmplitude,
    WaveEnhancement,
    WaveOrganization,
)
from dawn_patrol.schemas.forecast import HourlyForecastPoint
from dawn_patrol.utils.angle_utils import direction_consistency
from dawn_patrol.utils.forecast_frames import forecast_dataframe, optional_float, rows_in_window

logger = logging.getLogger(__name__)

AMPLITUDE_POINTS = {WaveAmplitude.HIGH: 25, WaveAmplitude.MODERATE: 15, WaveAmplitude.LOW: 5}
ORGANIZATION_POINTS = {
    WaveOrganization.ORGANIZED: 20,
    WaveOrganization.MIXED: 10,
    WaveOrganization.CHAOTIC: 0,
}
COUPLING_POINTS = {SurfaceCoupling.STRONG: 15, SurfaceCoupling.MODERATE: 10, SurfaceCoupling.WEAK: 5}


class MountainWaveAnalyzer:
    """
    Estimates whether mountain waves will reinforce katabatic flow.

    The Froude number Fr = U / (N * H) compares the wind aloft U with the
    buoyancy frequency N of the layer between the two stations and the
    barrier height H. Waves are organised and reach the surface for Fr
    roughly between 0.4 and 0.6.
    """

    def __init__(
        self,
        window: Tuple[int, int] = PREDICTION_WINDOW,
        terrain_height: float = TERRAIN_HEIGHT_M,
        elevation_difference: float = STATION_ELEVATION_DIFF_M,
        upstream_factor: float = UPSTREAM_WIND_FACTOR,
        optimal_froude: Tuple[float, float] = OPTIMAL_FROUDE,
    ):
        self.window = window
        self.terrain_height = terrain_height
        self.elevation_difference = elevation_difference
        self.upstream_factor = upstream_factor
        self.optimal_froude = optimal_froude

    def stability(self, valley_temp: float, mountain_temp: float) -> float:
        """
        Brunt-Vaisala frequency (1/s) from the valley/mountain temperature gap.

        Temperatures are degrees F. Returns 0.0 for a neutral or unstable layer.
        """
        lapse = (mountain_temp - valley_temp) * 5.0 / 9.0 / self.elevation_difference
        n_squared = GRAVITY / REFERENCE_TEMPERATURE_K * (lapse + DRY_ADIABATIC_LAPSE)
        return math.sqrt(max(0.0, n_squared))

    def froude_number(self, upstream_wind: float, stability: float) -> float:
        """Froude number for an upstream wind in mph; infinite without stability."""
        if stability <= 0:
            return math.inf
        return upstream_wind * MPH_TO_MS / (stability * self.terrain_height)

    def _in_optimal_band(self, froude: float, widen: float = 0.0) -> bool:
        low, high = self.optimal_froude
        return low - widen <= froude <= high + widen

    def amplitude(self, froude: float, upstream_wind: float) -> WaveAmplitude:
        if self._in_optimal_band(froude) and upstream_wind >= 10:
            return WaveAmplitude.HIGH
        if self._in_optimal_band(froude, 0.1) and upstream_wind >= 6:
            return WaveAmplitude.MODERATE
        return WaveAmplitude.LOW

    @staticmethod
    def wind_consistency(speeds: pd.Series, directions: pd.Series) -> float:
        """0-1 blend of speed steadiness and direction consistency."""
        if speeds.empty:
            return 0.0
        speed_part = max(0.0, 1.0 - float(np.std(speeds.to_numpy())) / 25.0)
        direction_part = direction_consistency(directions.to_numpy()) / 100.0
        return (speed_part + direction_part) / 2.0

    def organization(self, froude: float, consistency: float) -> WaveOrganization:
        if self._in_optimal_band(froude):
            return WaveOrganization.ORGANIZED if consistency > 0.7 else WaveOrganization.MIXED
        if self._in_optimal_band(froude, 0.2):
            return WaveOrganization.MIXED
        return WaveOrganization.CHAOTIC

    @staticmethod
    def coupling(stability: float) -> SurfaceCoupling:
        if stability > 0.01:
            return SurfaceCoupling.STRONG
        if stability > 0.005:
            return SurfaceCoupling.MODERATE
        return SurfaceCoupling.WEAK

    def propagation_potential(
        self,
        froude: float,
        amplitude: WaveAmplitude,
        organization: WaveOrganization,
        coupling: SurfaceCoupling,
    ) -> float:
        """0-100 score; 40 points come from the Froude number alone."""
        score = 0.0
        if self._in_optimal_band(froude):
            score += 40
        elif self._in_optimal_band(froude, 0.1):
            score += 30
        elif self._in_optimal_band(froude, 0.2):
            score += 20
        score += AMPLITUDE_POINTS[amplitude]
        score += ORGANIZATION_POINTS[organization]
        score += COUPLING_POINTS[coupling]
        return min(100.0, score)

    def enhancement(
        self, froude: float, potential: float, coupling: SurfaceCoupling,
    ) -> WaveEnhancement:
        if self._in_optimal_band(froude) and potential >= 60 and coupling is not SurfaceCoupling.WEAK:
            return WaveEnhancement.POSITIVE
        if froude < 0.2 or froude > 1.0 or potential < 30:
            return WaveEnhancement.NEGATIVE
        return WaveEnhancement.NEUTRAL

    @staticmethod
    def describe(
        froude: float,
        amplitude: WaveAmplitude,
        organization: WaveOrganization,
        enhancement: WaveEnhancement,
    ) -> str:
        fr = f"Fr={froude:.2f}" if math.isfinite(froude) else "no stable layer"
        if enhancement is WaveEnhancement.POSITIVE:
            return (
                f"Excellent mountain wave conditions ({fr}) with {amplitude.value} amplitude "
                f"{organization.value} waves enhancing katabatic potential."
            )
        if enhancement is WaveEnhancement.NEUTRAL:
            return (
                f"Moderate mountain wave activity ({fr}) with {amplitude.value} amplitude "
                f"waves having neutral impact on katabatic flow."
            )
        return (
            f"Poor mountain wave conditions ({fr}) likely disrupting katabatic "
            f"development with {organization.value} wave patterns."
        )

    def analyze_frames(
        self, valley: pd.DataFrame, mountain: pd.DataFrame,
    ) -> Optional[MountainWaveAnalysis]:
        """Analyze forecast DataFrames as built by ``forecast_dataframe``."""
        valley_rows = rows_in_window(valley, self.window)
        mountain_rows = rows_in_window(mountain, self.window)

        valley_temp = optional_float(valley_rows["temperature"].mean())
        mountain_temp = optional_float(mountain_rows["temperature"].mean())
        valley_wind = optional_float(valley_rows["wind_speed"].mean())
        mountain_wind = optional_float(mountain_rows["wind_speed"].mean())
        if valley_temp is None or mountain_temp is None or (valley_wind is None and mountain_wind is None):
            logger.debug("%s", InsufficientData(
                "mountain_wave", "needs temperature at both sites and wind at either"
            ))
            return None

        upstream_wind = max(valley_wind or 0.0, mountain_wind or 0.0) * self.upstream_factor
        stability = self.stability(valley_temp, mountain_temp)
        froude = self.froude_number(upstream_wind, stability)

        winds = valley_rows.dropna(subset=["wind_speed", "wind_direction"])
        consistency = self.wind_consistency(winds["wind_speed"], winds["wind_direction"])

        amplitude = self.amplitude(froude, upstream_wind)
        organization = self.organization(froude, consistency)
        coupling = self.coupling(stability)
        potential = self.propagation_potential(froude, amplitude, organization, coupling)
        enhancement = self.enhancement(froude, potential, coupling)

        logger.debug(
            "Mountain waves: U=%.1f mph N=%.4f Fr=%.2f potential=%.0f -> %s",
            upstream_wind, stability, froude, potential, enhancement.value,
        )
        return MountainWaveAnalysis(
            froude_number=froude,
            upstream_wind=upstream_wind,
            stability=stability,
            amplitude=amplitude,
            organization=organization,
            coupling=coupling,
            propagation_potential=potential,
            enhancement=enhancement,
            analysis=self.describe(froude, amplitude, organization, enhancement),
        )

    def analyze(
        self,
        valley_points: Sequence[HourlyForecastPoint],
        mountain_points: Sequence[HourlyForecastPoint],
    ) -> Optional[MountainWaveAnalysis]:
        """
        Analyze mountain waves over the prediction window.

        Args:
            valley_points: Hourly forecast at the riding site
            mountain_points: Hourly forecast at the upslope reference point

        Returns:
            MountainWaveAnalysis, or None without temperature and wind data
        """
        return self.analyze_frames(
            forecast_dataframe(valley_points), forecast_dataframe(mountain_points)
        )
