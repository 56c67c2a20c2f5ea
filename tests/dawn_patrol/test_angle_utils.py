"""Tests for circular angle utilities."""
import math

import pytest

from dawn_patrol.exceptions import InvalidAngle
from dawn_patrol.utils.angle_utils import (
    angular_distance,
    cardinal_direction,
    circular_mean,
    direction_consistency,
    in_range,
    normalize,
)

ANGLES = [0, 45.5, 359.9, 360, 361, 720, -1, -90, -360, -721.25, 1e6, -1e-12]


class TestNormalize:
    """Tests for normalize."""

    @pytest.mark.parametrize("angle", ANGLES)
    def test_result_in_canonical_range(self, angle):
        """Test normalized angles are in [0, 360)."""
        result = normalize(angle)
        assert 0 <= result < 360

    @pytest.mark.parametrize("angle", ANGLES)
    def test_idempotent(self, angle):
        """Test normalizing twice equals normalizing once."""
        assert normalize(normalize(angle)) == normalize(angle)

    def test_known_values(self):
        """Test wrap-around of negative and large angles."""
        assert normalize(360) == 0
        assert normalize(370) == pytest.approx(10)
        assert normalize(-10) == pytest.approx(350)
        assert normalize(-370) == pytest.approx(350)

    @pytest.mark.parametrize("angle", [math.nan, math.inf, -math.inf])
    def test_non_finite_rejected(self, angle):
        """Test NaN and infinities raise InvalidAngle."""
        with pytest.raises(InvalidAngle):
            normalize(angle)

    def test_invalid_angle_is_value_error(self):
        """Test InvalidAngle can be caught as ValueError."""
        with pytest.raises(ValueError):
            normalize(math.nan)


class TestAngularDistance:
    """Tests for angular_distance."""

    @pytest.mark.parametrize("a,b", [(0, 90), (350, 10), (10, 350), (-45, 45), (180, 0), (123.4, 321.0)])
    def test_symmetric(self, a, b):
        """Test distance is the same in both directions."""
        assert angular_distance(a, b) == pytest.approx(angular_distance(b, a))

    @pytest.mark.parametrize("a", ANGLES)
    def test_zero_to_self(self, a):
        """Test the distance from an angle to itself is zero."""
        assert angular_distance(a, a) == 0

    def test_shortest_path_across_north(self):
        """Test the short way round is used across 0°."""
        assert angular_distance(350, 10) == pytest.approx(20)
        assert angular_distance(0, 180) == pytest.approx(180)
        assert angular_distance(90, 271) == pytest.approx(179)

    def test_result_bounds(self):
        """Test distance stays within [0, 180]."""
        for a in range(0, 360, 17):
            for b in range(0, 360, 23):
                assert 0 <= angular_distance(a, b) <= 180


class TestInRange:
    """Tests for in_range."""

    def test_ordinary_range(self):
        """Test containment in a non-wrapping range."""
        assert in_range(300, 270, 330) is True
        assert in_range(269, 270, 330) is False
        assert in_range(331, 270, 330) is False

    def test_wrapping_range(self):
        """Test containment in a range crossing north."""
        assert in_range(0, 350, 30) is True
        assert in_range(355, 350, 30) is True
        assert in_range(180, 350, 30) is False

    def test_boundaries_included(self):
        """Test both edges are part of the range."""
        assert in_range(350, 350, 30) is True
        assert in_range(30, 350, 30) is True
        assert in_range(270, 270, 330) is True
        assert in_range(330, 270, 330) is True

    def test_angle_normalized_first(self):
        """Test an unnormalized angle is checked by its canonical value."""
        assert in_range(365, 350, 30) is True
        assert in_range(-5, 350, 30) is True

    def test_full_circle(self):
        """Test a 0-360 range contains every direction."""
        assert in_range(180, 0, 360) is True
        assert in_range(0, 0, 360) is True
        assert in_range(359.9, 0, 360) is True
        assert in_range(90, 180, 540) is True

    def test_range_ending_at_360(self):
        """Test a range up to 360 behaves like one up to north."""
        assert in_range(200, 10, 360) is True
        assert in_range(0, 10, 360) is True
        assert in_range(5, 10, 360) is False

    def test_negative_lower_bound(self):
        """Test a range given with a negative start wraps through north."""
        assert in_range(350, -30, 30) is True
        assert in_range(90, -30, 30) is False

    def test_non_finite_bound_rejected(self):
        """Test non-finite range bounds raise InvalidAngle."""
        with pytest.raises(InvalidAngle):
            in_range(10, float("nan"), 30)


class TestCardinalDirection:
    """Tests for cardinal_direction."""

    def test_compass_points(self):
        """Test common compass points."""
        assert cardinal_direction(0) == "N"
        assert cardinal_direction(22.5) == "NNE"
        assert cardinal_direction(90) == "E"
        assert cardinal_direction(315) == "NW"
        assert cardinal_direction(355) == "N"

    def test_none(self):
        """Test a missing direction."""
        assert cardinal_direction(None) == "N/A"


class TestCircularStatistics:
    """Tests for circular_mean and direction_consistency."""

    def test_mean_across_north(self):
        """Test the mean of 350° and 10° is north, not south."""
        assert angular_distance(circular_mean([350, 10]), 0) < 1e-9

    def test_mean_empty(self):
        """Test the mean of no directions."""
        assert circular_mean([]) == 0.0

    def test_consistency_identical(self):
        """Test identical directions are fully consistent."""
        assert direction_consistency([300, 300, 300]) == pytest.approx(100)

    def test_consistency_opposed(self):
        """Test opposing directions cancel out."""
        assert direction_consistency([0, 180]) == pytest.approx(0, abs=1e-9)

    def test_consistency_needs_two(self):
        """Test fewer than two directions scores zero."""
        assert direction_consistency([90]) == 0.0
        assert direction_consistency([]) == 0.0
