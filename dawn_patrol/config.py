"""Engine configuration."""
from enum import Enum
from typing import Dict

from pydantic_settings import BaseSettings


class SameDayPolicy(str, Enum):
    """How far a same-day chart window reaches."""

    ALL_AVAILABLE = "all_available"  # 4am through 11pm, future samples dropped by the filter
    UP_TO_NOW = "up_to_now"  # 4am through the current hour


# 16-point compass, clockwise from north in 22.5 degree steps
CARDINAL_DIRECTIONS = [
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
]

# Downslope sector for the wave pattern score: W through N to E
DOWNSLOPE_SECTOR = (270.0, 90.0)

# Forecast windows as (start_hour, end_hour), inclusive local hours
CLEAR_SKY_WINDOW = (2, 5)
PREDICTION_WINDOW = (6, 8)
ALARM_WINDOW = (3, 5)
VERIFY_WINDOW = (6, 8)

# Hours of forecast used for the pressure trend
PRESSURE_TREND_HOURS = 12

# Mountain wave estimate: barrier height and valley/mountain station spacing (m)
TERRAIN_HEIGHT_M = 2000.0
STATION_ELEVATION_DIFF_M = 500.0
# Winds aloft relative to surface winds along the foothills
UPSTREAM_WIND_FACTOR = 1.7
# Froude number band for organised, surface-coupled waves
OPTIMAL_FROUDE = (0.4, 0.6)
GRAVITY = 9.81  # m/s^2
REFERENCE_TEMPERATURE_K = 288.15
DRY_ADIABATIC_LAPSE = 0.0098  # K/m
MPH_TO_MS = 0.44704


class Settings(BaseSettings):
    """Decision engine settings."""

    # Freshness tiers (minutes)
    live_max_age_minutes: float = 10.0
    stale_after_minutes: float = 30.0
    live_current_minutes: float = 5.0
    offline_after_minutes: float = 120.0

    # Chart time window (local hours)
    window_start_hour: int = 4
    window_cutoff_hour: int = 21
    same_day_policy: SameDayPolicy = SameDayPolicy.ALL_AVAILABLE

    # Direction
    default_perfect_tolerance: float = 10.0

    # Factor thresholds
    max_precipitation_probability: float = 25.0  # percent
    min_clear_sky_percentage: float = 70.0  # percent
    max_pressure_change: float = 2.0  # hPa over the analysis window
    min_temperature_differential: float = 8.0  # degrees F, valley minus mountain
    min_wave_enhancement_score: float = 60.0  # 0-100

    # Equal weighting by default
    factor_weights: Dict[str, float] = {
        "precipitation": 1.0,
        "sky_clarity": 1.0,
        "pressure_stability": 1.0,
        "temperature_differential": 1.0,
        "wave_enhancement": 1.0,
    }

    # Recommendation bands
    go_min_probability: float = 70.0
    go_min_confidence: float = 60.0
    skip_below_probability: float = 40.0

    # Wind alarm defaults
    alarm_min_average_speed: float = 10.0  # mph
    alarm_direction_consistency: float = 70.0  # percent
    alarm_min_consecutive_points: int = 4
    alarm_preferred_direction: float = 315.0
    alarm_preferred_direction_range: float = 45.0

    class Config:
        env_prefix = "DAWN_PATROL_"


settings = Settings()
