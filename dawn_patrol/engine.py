"""Public entry points of the decision engine.

Services hold no per-call state, so one cached instance of each is shared
by all callers.
"""
from datetime import datetime
from functools import lru_cache
from typing import Optional, Sequence

from dawn_patrol.models.alarm import WindAnalysis
from dawn_patrol.models.conditions import CurrentConditions
from dawn_patrol.models.decision import Decision
from dawn_patrol.models.direction import DirectionAssessment, DirectionConfig
from dawn_patrol.models.mountain_wave import MountainWaveAnalysis
from dawn_patrol.models.sample import LiveReading, SampleSeries
from dawn_patrol.models.time_window import TimeWindow
from dawn_patrol.schemas.forecast import ForecastBundle, HourlyForecastPoint
from dawn_patrol.schemas.thresholds import AlarmCriteria
from dawn_patrol.services.direction_assessor import DirectionAssessor
from dawn_patrol.services.forecast_aggregator import ForecastAggregator
from dawn_patrol.services.freshness_resolver import FreshnessResolver
from dawn_patrol.services.mountain_wave_analyzer import MountainWaveAnalyzer
from dawn_patrol.services.probability_engine import ProbabilityEngine
from dawn_patrol.services.time_window_service import TimeWindowCalculator
from dawn_patrol.services.wind_alarm_analyzer import WindAlarmAnalyzer


@lru_cache()
def get_direction_assessor() -> DirectionAssessor:
    """Get cached direction assessor instance."""
    return DirectionAssessor()


@lru_cache()
def get_time_window_calculator() -> TimeWindowCalculator:
    """Get cached time window calculator instance."""
    return TimeWindowCalculator()


@lru_cache()
def get_probability_engine() -> ProbabilityEngine:
    """Get cached probability engine instance."""
    return ProbabilityEngine()


@lru_cache()
def get_forecast_aggregator() -> ForecastAggregator:
    """Get cached forecast aggregator instance."""
    return ForecastAggregator()


@lru_cache()
def get_mountain_wave_analyzer() -> MountainWaveAnalyzer:
    """Get cached mountain wave analyzer instance."""
    return MountainWaveAnalyzer()


def assess_direction(
    direction: Optional[float],
    config: Optional[DirectionConfig],
) -> Optional[DirectionAssessment]:
    return get_direction_assessor().assess(direction, config)


def resolve_current_conditions(
    live: Optional[LiveReading],
    series: Optional[SampleSeries],
    now: datetime,
) -> CurrentConditions:
    return FreshnessResolver(live, series, now).resolve()


def compute_time_window(now: datetime) -> TimeWindow:
    return get_time_window_calculator().compute(now)


def filter_by_window(series: SampleSeries, window: TimeWindow, now: datetime) -> SampleSeries:
    return get_time_window_calculator().filter(series, window, now)


def evaluate_dawn_patrol(bundle: ForecastBundle) -> Decision:
    return get_probability_engine().evaluate(bundle)


def build_forecast_bundle(
    valley_points: Sequence[HourlyForecastPoint],
    mountain_points: Sequence[HourlyForecastPoint],
) -> ForecastBundle:
    return get_forecast_aggregator().build_bundle(valley_points, mountain_points)


def analyze_wind_alarm(
    series: SampleSeries,
    criteria: Optional[AlarmCriteria] = None,
) -> WindAnalysis:
    """Analyze the 3am-5am alarm window of a series."""
    analyzer = WindAlarmAnalyzer(criteria, get_time_window_calculator())
    return analyzer.analyze(series)


def analyze_mountain_waves(
    valley_points: Sequence[HourlyForecastPoint],
    mountain_points: Sequence[HourlyForecastPoint],
) -> Optional[MountainWaveAnalysis]:
    return get_mountain_wave_analyzer().analyze(valley_points, mountain_points)
