"""Pydantic schemas for forecast collaborator input."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ForecastBundle(BaseModel):
    """Numeric factor inputs for the dawn patrol window. Any field may be absent."""

    precipitation_probability: Optional[float] = Field(default=None, ge=0, le=100)
    clear_sky_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    pressure_change: Optional[float] = Field(default=None, description="hPa, signed")
    temperature_differential: Optional[float] = Field(
        default=None, description="Valley minus mountain temperature, degrees F"
    )
    wave_enhancement_score: Optional[float] = Field(default=None, ge=0, le=100)


class HourlyForecastPoint(BaseModel):
    """One forecast hour at one location."""

    timestamp: datetime
    temperature: Optional[float] = None  # degrees F
    cloud_cover: Optional[float] = Field(default=None, ge=0, le=100)
    precipitation_probability: Optional[float] = Field(default=None, ge=0, le=100)
    pressure: Optional[float] = None  # hPa
    wind_speed: Optional[float] = Field(default=None, ge=0)  # mph
    wind_direction: Optional[float] = None  # degrees
