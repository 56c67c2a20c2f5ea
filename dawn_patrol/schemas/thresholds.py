"""Pydantic schemas for factor thresholds and alarm criteria."""
from pydantic import BaseModel, Field

from dawn_patrol.config import settings


class FactorThresholds(BaseModel):
    """Pass/fail thresholds for the five dawn patrol factors."""

    max_precipitation_probability: float = Field(
        default=settings.max_precipitation_probability, gt=0, lt=100
    )
    min_clear_sky_percentage: float = Field(
        default=settings.min_clear_sky_percentage, gt=0, lt=100
    )
    max_pressure_change: float = Field(default=settings.max_pressure_change, gt=0)
    min_temperature_differential: float = Field(
        default=settings.min_temperature_differential, gt=0
    )
    min_wave_enhancement_score: float = Field(
        default=settings.min_wave_enhancement_score, gt=0, lt=100
    )


class AlarmCriteria(BaseModel):
    """Criteria for an alarm-worthy dawn wind window."""

    min_average_speed: float = Field(default=settings.alarm_min_average_speed, ge=0)
    direction_consistency_threshold: float = Field(
        default=settings.alarm_direction_consistency, ge=0, le=100
    )
    min_consecutive_points: int = Field(default=settings.alarm_min_consecutive_points, ge=1)
    preferred_direction: float = Field(default=settings.alarm_preferred_direction, ge=0, le=360)
    preferred_direction_range: float = Field(
        default=settings.alarm_preferred_direction_range, ge=0, le=180
    )
    use_wind_direction: bool = True
