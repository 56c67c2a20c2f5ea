"""Tests for the forecast aggregator."""
from datetime import datetime, timedelta, timezone

import pytest

from dawn_patrol.models.decision import Recommendation
from dawn_patrol.schemas.forecast import HourlyForecastPoint
from dawn_patrol.services.forecast_aggregator import ForecastAggregator
from dawn_patrol.services.mountain_wave_analyzer import MountainWaveAnalyzer
from dawn_patrol.services.probability_engine import ProbabilityEngine

LOCAL = timezone(timedelta(hours=-7))
START = datetime(2024, 6, 22, 0, 0, tzinfo=LOCAL)


def make_points(hours=12, **overrides):
    """Hourly points from midnight; overrides are callables of the hour or constants."""
    points = []
    for h in range(hours):
        values = {
            "temperature": 50.0,
            "cloud_cover": 10.0,
            "precipitation_probability": 5.0,
            "pressure": 1015.0,
            "wind_speed": 3.0,
            "wind_direction": 315.0,
        }
        for key, value in overrides.items():
            values[key] = value(h) if callable(value) else value
        points.append(HourlyForecastPoint(timestamp=START + timedelta(hours=h), **values))
    return points


@pytest.fixture
def aggregator():
    return ForecastAggregator()


class TestForecastAggregator:
    """Tests for ForecastAggregator."""

    def test_precipitation_is_window_maximum(self, aggregator):
        """Test the highest chance within the cooling and prediction windows is used."""
        valley = make_points(precipitation_probability=lambda h: {4: 30.0, 11: 90.0}.get(h, 5.0))
        bundle = aggregator.build_bundle(valley, make_points())
        # 11am is outside both windows
        assert bundle.precipitation_probability == 30.0

    def test_clear_sky_from_mean_cloud_cover(self, aggregator):
        """Test clear sky is 100 minus mean cloud cover over 2am-5am at both sites."""
        valley = make_points(cloud_cover=20.0)
        mountain = make_points(cloud_cover=40.0)
        bundle = aggregator.build_bundle(valley, mountain)
        assert bundle.clear_sky_percentage == pytest.approx(70.0)

    def test_pressure_change_signed(self, aggregator):
        """Test pressure change is last minus first over the trend hours."""
        valley = make_points(hours=24, pressure=lambda h: 1015.0 - 0.25 * h)
        bundle = aggregator.build_bundle(valley, make_points())
        # First 12 hours inclusive: hour 0 to hour 12
        assert bundle.pressure_change == pytest.approx(-3.0)

    def test_temperature_differential(self, aggregator):
        """Test valley minus mountain temperature over the prediction window."""
        valley = make_points(temperature=lambda h: 52.0 if 6 <= h <= 8 else 40.0)
        mountain = make_points(temperature=42.0)
        bundle = aggregator.build_bundle(valley, mountain)
        assert bundle.temperature_differential == pytest.approx(10.0)

    def test_wave_score_downslope_calm(self, aggregator):
        """Test calm, consistent downslope flow scores high."""
        bundle = aggregator.build_bundle(make_points(), make_points(wind_speed=4.0))
        assert bundle.wave_enhancement_score == pytest.approx(100.0)

    def test_wave_score_penalties(self, aggregator):
        """Test upslope directions and strong winds reduce the score."""
        valley = make_points(wind_direction=lambda h: 180.0 if h == 7 else 300.0, wind_speed=7.0)
        mountain = make_points(wind_speed=7.0)
        bundle = aggregator.build_bundle(valley, mountain)
        # 2/3 downslope, 2 mph over the calm limit
        assert bundle.wave_enhancement_score == pytest.approx(200 / 3 - 20)

    def test_missing_data_left_none(self, aggregator):
        """Test quantities without data stay None."""
        valley = make_points(hours=3, pressure=None)
        bundle = aggregator.build_bundle(valley, [])
        assert bundle.pressure_change is None
        assert bundle.temperature_differential is None
        assert bundle.wave_enhancement_score is None
        assert bundle.precipitation_probability == 5.0

    def test_no_points(self, aggregator):
        """Test empty forecasts give an empty bundle."""
        bundle = aggregator.build_bundle([], [])
        assert bundle.model_dump() == {
            "precipitation_probability": None,
            "clear_sky_percentage": None,
            "pressure_change": None,
            "temperature_differential": None,
            "wave_enhancement_score": None,
        }

    def test_feeds_engine(self, aggregator):
        """Test a classic katabatic night produces a GO."""
        valley = make_points(temperature=lambda h: 55.0 if 6 <= h <= 8 else 45.0)
        mountain = make_points(temperature=40.0, cloud_cover=0.0)
        decision = ProbabilityEngine().evaluate(aggregator.build_bundle(valley, mountain))
        assert decision.factors_passed == 5
        assert decision.recommendation is Recommendation.GO

    def test_froude_wave_score(self):
        """Test the wave score comes from the mountain wave analyzer when one is given."""
        aggregator = ForecastAggregator(wave_analyzer=MountainWaveAnalyzer())
        valley = make_points(temperature=45.0, wind_speed=12.0, wind_direction=300.0)
        mountain = make_points(temperature=40.0, wind_speed=16.0)
        assert aggregator.build_bundle(valley, mountain).wave_enhancement_score == 100

    def test_froude_wave_score_missing(self):
        """Test the analyzer's missing result leaves the wave score unset."""
        aggregator = ForecastAggregator(wave_analyzer=MountainWaveAnalyzer())
        bundle = aggregator.build_bundle(make_points(), make_points(temperature=None))
        assert bundle.wave_enhancement_score is None
