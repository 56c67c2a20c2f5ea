"""Circular arithmetic on compass directions."""
import math
from typing import Optional, Sequence

import numpy as np

from dawn_patrol.config import CARDINAL_DIRECTIONS
from dawn_patrol.exceptions import InvalidAngle


def normalize(angle: float) -> float:
    """
    Reduce an angle to the range [0, 360).

    Raises:
        InvalidAngle: if the angle is NaN or infinite
    """
    if angle is None or not math.isfinite(angle):
        raise InvalidAngle(angle)
    result = math.fmod(angle, 360.0)
    if result < 0:
        result += 360.0
    # fmod of a tiny negative plus 360 can round up to exactly 360
    if result >= 360.0:
        result = 0.0
    return result


def angular_distance(a: float, b: float) -> float:
    """Shortest distance between two directions, in [0, 180]."""
    diff = abs(normalize(a) - normalize(b))
    return min(diff, 360.0 - diff)


def in_range(angle: float, range_min: float, range_max: float) -> bool:
    """
    Check whether an angle lies within an inclusive range.

    When ``range_min > range_max`` the range wraps through north, so
    350..30 covers 350-360 and 0-30. A range spanning 360 degrees or more,
    such as 0..360, contains every angle.
    """
    angle = normalize(angle)
    low = normalize(range_min)
    high = normalize(range_max)
    if range_max - range_min >= 360.0:
        return True

    if low <= high:
        return low <= angle <= high
    return angle >= low or angle <= high


def cardinal_direction(degrees: Optional[float]) -> str:
    """Convert degrees to a 16-point compass name."""
    if degrees is None:
        return "N/A"
    index = round(normalize(degrees) / 22.5) % len(CARDINAL_DIRECTIONS)
    return CARDINAL_DIRECTIONS[index]


def _unit_vectors(directions: Sequence[float]):
    radians = np.radians(np.asarray(directions, dtype=np.float64))
    return np.sin(radians), np.cos(radians)


def circular_mean(directions: Sequence[float]) -> float:
    """Mean direction in [0, 360), or 0.0 for no directions."""
    if len(directions) == 0:
        return 0.0
    sin, cos = _unit_vectors(directions)
    mean = np.degrees(np.arctan2(sin.sum(), cos.sum()))
    return normalize(float(mean))


def direction_consistency(directions: Sequence[float]) -> float:
    """
    Mean resultant length of the directions as a percentage.

    100 means every direction is identical; values near 0 mean the
    directions cancel out. Fewer than two directions scores 0.
    """
    if len(directions) < 2:
        return 0.0
    sin, cos = _unit_vectors(directions)
    resultant = np.hypot(sin.mean(), cos.mean())
    return float(resultant * 100)
