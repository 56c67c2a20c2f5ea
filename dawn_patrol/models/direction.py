"""Wind direction configuration and assessment models."""
from enum import Enum
from typing import Optional

from attrs import frozen


class DirectionStatus(str, Enum):
    """Classification of a measured direction against a site's ideal."""

    PERFECT = "perfect"
    GOOD = "good"
    SUBOPTIMAL = "suboptimal"


DIRECTION_INDICATORS = {
    DirectionStatus.PERFECT: "🎯",
    DirectionStatus.GOOD: "✅",
    DirectionStatus.SUBOPTIMAL: "",
}


@frozen
class DirectionRange:
    """Ideal direction range in degrees. ``min > max`` wraps through north."""

    min: float
    max: float

    @property
    def wraps(self) -> bool:
        return self.min > self.max


@frozen
class DirectionConfig:
    """Per-site ideal wind direction."""

    ideal_range: DirectionRange
    perfect_heading: float
    perfect_tolerance: float = 10.0


@frozen
class DirectionAssessment:
    """Result of assessing one direction against a DirectionConfig."""

    status: DirectionStatus
    direction: float
    distance_to_perfect: float
    # Only set for SUBOPTIMAL: distance to the nearest range edge
    distance_to_range: Optional[float] = None

    @property
    def indicator(self) -> str:
        return DIRECTION_INDICATORS[self.status]

    @property
    def description(self) -> str:
        if self.status is DirectionStatus.PERFECT:
            return "Perfect direction!"
        if self.status is DirectionStatus.GOOD:
            return "Good direction"
        return f"Outside ideal range by {self.distance_to_range:.0f}°"
