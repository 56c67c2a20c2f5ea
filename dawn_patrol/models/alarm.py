"""Wind alarm analysis result."""
from attrs import frozen


@frozen
class WindAnalysis:
    """Summary of a wind window against alarm criteria."""

    is_alarm_worthy: bool
    average_speed: float
    average_direction: float
    direction_consistency: float  # percent
    consecutive_good_points: int
    analysis: str

    @classmethod
    def no_data(cls, message: str) -> "WindAnalysis":
        return cls(
            is_alarm_worthy=False,
            average_speed=0.0,
            average_direction=0.0,
            direction_consistency=0.0,
            consecutive_good_points=0,
            analysis=message,
        )
