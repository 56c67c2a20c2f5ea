"""Tests for the mountain wave analyzer."""
import math
from datetime import datetime, timedelta, timezone

import pytest

from dawn_patrol.models.mountain_wave import (
    SurfaceCoupling,
    WaveAmplitude,
    WaveEnhancement,
    WaveOrganization,
)
from dawn_patrol.schemas.forecast import HourlyForecastPoint
from dawn_patrol.services.mountain_wave_analyzer import MountainWaveAnalyzer

LOCAL = timezone(timedelta(hours=-7))
START = datetime(2024, 6, 22, 0, 0, tzinfo=LOCAL)


def site(temperature, wind_speed, wind_direction=300.0, hours=12):
    return [
        HourlyForecastPoint(
            timestamp=START + timedelta(hours=h),
            temperature=temperature,
            wind_speed=wind_speed,
            wind_direction=wind_direction,
        )
        for h in range(hours)
    ]


@pytest.fixture
def analyzer():
    return MountainWaveAnalyzer()


class TestPhysics:
    """Tests for the stability and Froude number estimates."""

    def test_isothermal_layer_stability(self, analyzer):
        """Test equal temperatures give the dry adiabatic buoyancy frequency."""
        assert analyzer.stability(45.0, 45.0) == pytest.approx(math.sqrt(9.81 / 288.15 * 0.0098))

    def test_unstable_layer_has_no_stability(self, analyzer):
        """Test a lapse steeper than dry adiabatic gives zero."""
        assert analyzer.stability(45.0, 20.0) == 0.0

    def test_froude_number(self, analyzer):
        """Test Fr = U / (N * H) with U converted from mph."""
        assert analyzer.froude_number(27.2, 0.012) == pytest.approx(27.2 * 0.44704 / 24.0)

    def test_froude_without_stability(self, analyzer):
        """Test zero stability gives an infinite Froude number."""
        assert math.isinf(analyzer.froude_number(10.0, 0.0))


class TestMountainWaveAnalyzer:
    """Tests for MountainWaveAnalyzer.analyze."""

    def test_optimal_waves(self, analyzer):
        """Test a stable layer with moderate winds aloft is a positive enhancement."""
        result = analyzer.analyze(site(45.0, 12.0), site(40.0, 16.0))
        assert result.froude_number == pytest.approx(0.506, abs=0.005)
        assert result.upstream_wind == pytest.approx(27.2)
        assert result.amplitude is WaveAmplitude.HIGH
        assert result.organization is WaveOrganization.ORGANIZED
        assert result.coupling is SurfaceCoupling.STRONG
        assert result.propagation_potential == 100
        assert result.enhancement is WaveEnhancement.POSITIVE
        assert result.analysis.startswith("Excellent mountain wave conditions (Fr=0.51)")

    def test_slightly_weak_winds_are_neutral(self, analyzer):
        """Test a Froude number just below the optimal band is neutral."""
        result = analyzer.analyze(site(45.0, 8.0), site(40.0, 10.0))
        assert result.froude_number == pytest.approx(0.316, abs=0.005)
        assert result.amplitude is WaveAmplitude.MODERATE
        assert result.organization is WaveOrganization.MIXED
        assert result.propagation_potential == 70
        assert result.enhancement is WaveEnhancement.NEUTRAL

    def test_calm_blocked_flow_is_negative(self, analyzer):
        """Test light winds in a stable layer give a blocked, negative regime."""
        result = analyzer.analyze(site(45.0, 2.0), site(45.0, 2.0))
        assert result.froude_number == pytest.approx(0.042, abs=0.002)
        assert result.organization is WaveOrganization.CHAOTIC
        assert result.propagation_potential == 20
        assert result.enhancement is WaveEnhancement.NEGATIVE

    def test_unstable_layer_is_negative(self, analyzer):
        """Test an unstable layer gives no wave support."""
        result = analyzer.analyze(site(45.0, 12.0), site(20.0, 16.0))
        assert math.isinf(result.froude_number)
        assert result.coupling is SurfaceCoupling.WEAK
        assert result.propagation_potential == 10
        assert result.enhancement is WaveEnhancement.NEGATIVE
        assert "no stable layer" in result.analysis
        assert result.to_dict()["froude_number"] is None

    def test_swirling_winds_not_organized(self, analyzer):
        """Test inconsistent valley directions downgrade organisation."""
        valley = site(45.0, 12.0)
        valley = [
            p.model_copy(update={"wind_direction": (p.timestamp.hour * 90.0) % 360})
            for p in valley
        ]
        result = analyzer.analyze(valley, site(40.0, 16.0))
        assert result.organization is WaveOrganization.MIXED
        assert result.propagation_potential == 90

    def test_missing_temperature(self, analyzer):
        """Test no mountain temperature gives no analysis."""
        assert analyzer.analyze(site(45.0, 12.0), site(None, 16.0)) is None

    def test_outside_window(self, analyzer):
        """Test forecasts that end before the prediction window give no analysis."""
        assert analyzer.analyze(site(45.0, 12.0, hours=4), site(40.0, 16.0, hours=4)) is None

    def test_no_points(self, analyzer):
        """Test empty forecasts give no analysis."""
        assert analyzer.analyze([], []) is None
