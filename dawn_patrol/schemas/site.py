"""Pydantic schemas for per-site configuration."""
from pydantic import BaseModel, Field

from dawn_patrol.config import settings
from dawn_patrol.models.direction import DirectionConfig, DirectionRange


class SiteConfig(BaseModel):
    """Static configuration for one wind site."""

    name: str
    ideal_range_min: float = Field(ge=0, le=360, description="Degrees, may exceed max to wrap north")
    ideal_range_max: float = Field(ge=0, le=360)
    perfect_heading: float = Field(ge=0, le=360)
    perfect_tolerance: float = Field(default=settings.default_perfect_tolerance, ge=0, le=180)

    def to_direction_config(self) -> DirectionConfig:
        """Build the engine's direction config."""
        return DirectionConfig(
            ideal_range=DirectionRange(min=self.ideal_range_min, max=self.ideal_range_max),
            perfect_heading=self.perfect_heading,
            perfect_tolerance=self.perfect_tolerance,
        )
