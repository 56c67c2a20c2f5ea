"""Five-factor dawn patrol probability engine."""
import logging
from typing import Dict, Optional

from dawn_patrol.config import Settings, settings as default_settings
from dawn_patrol.exceptions import MissingFactorInput
from dawn_patrol.models.decision import (
    FACTOR_ORDER,
    Decision,
    FactorName,
    FactorResult,
    Recommendation,
)
from dawn_patrol.schemas.forecast import ForecastBundle
from dawn_patrol.schemas.thresholds import FactorThresholds

logger = logging.getLogger(__name__)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def scaled_confidence(margin: float, passed: bool, pass_scale: float, fail_scale: float) -> float:
    """
    Map a threshold margin to how sure the factor's verdict is.

    ``margin`` is the distance from the threshold on the favourable side
    (negative when unfavourable). A value on the threshold scores 50 and
    confidence rises linearly with the size of the margin, reaching 100 at
    ``pass_scale`` beyond it for a pass or ``fail_scale`` for a fail. Zero
    is left for factors with no input at all.
    """
    scale = pass_scale if passed else fail_scale
    if scale <= 0:
        return 50.0 if margin == 0 else 100.0
    return 50.0 + 50.0 * _clamp(abs(margin) / scale, 0.0, 1.0)


class ProbabilityEngine:
    """
    Evaluates the five katabatic factors and aggregates them into a Decision.

    Factors are independent: a missing input fails only its own factor,
    with zero confidence, and never raises.
    """

    def __init__(
        self,
        thresholds: Optional[FactorThresholds] = None,
        weights: Optional[Dict[str, float]] = None,
        config: Settings = default_settings,
    ):
        self.thresholds = thresholds or FactorThresholds()
        self.weights = dict(config.factor_weights) if weights is None else dict(weights)
        self.config = config

        unknown = set(self.weights) - {name.value for name in FACTOR_ORDER}
        if unknown:
            raise ValueError(f"Unknown factor weights: {sorted(unknown)}")
        negative = sorted(name for name, weight in self.weights.items() if weight < 0)
        if negative:
            raise ValueError(f"Factor weights must be non-negative: {negative}")
        if sum(self.weights.values()) <= 0:
            raise ValueError("At least one factor weight must be positive")

    def _missing(self, name: FactorName, field: str, threshold_description: str) -> FactorResult:
        logger.warning("%s", MissingFactorInput(name.value, field))
        return FactorResult(
            name=name,
            passed=False,
            confidence=0.0,
            value=None,
            threshold_description=threshold_description,
            reason=f"missing {field}",
        )

    def evaluate_precipitation(self, bundle: ForecastBundle) -> FactorResult:
        limit = self.thresholds.max_precipitation_probability
        description = f"<= {limit:g}% precipitation probability"
        value = bundle.precipitation_probability
        if value is None:
            return self._missing(FactorName.PRECIPITATION, "precipitation_probability", description)

        passed = value <= limit
        confidence = scaled_confidence(
            limit - value, passed, pass_scale=limit, fail_scale=100 - limit
        )
        return FactorResult(
            name=FactorName.PRECIPITATION,
            passed=passed,
            confidence=confidence,
            value=value,
            threshold_description=description,
            reason=f"{value:.0f}% chance of precipitation",
        )

    def evaluate_sky_clarity(self, bundle: ForecastBundle) -> FactorResult:
        minimum = self.thresholds.min_clear_sky_percentage
        description = f">= {minimum:g}% clear sky"
        value = bundle.clear_sky_percentage
        if value is None:
            return self._missing(FactorName.SKY_CLARITY, "clear_sky_percentage", description)

        passed = value >= minimum
        confidence = scaled_confidence(
            value - minimum, passed, pass_scale=100 - minimum, fail_scale=minimum
        )
        return FactorResult(
            name=FactorName.SKY_CLARITY,
            passed=passed,
            confidence=confidence,
            value=value,
            threshold_description=description,
            reason=f"{value:.0f}% clear during the cooling window",
        )

    def evaluate_pressure_stability(self, bundle: ForecastBundle) -> FactorResult:
        limit = self.thresholds.max_pressure_change
        description = f"< {limit:g} hPa pressure change"
        value = bundle.pressure_change
        if value is None:
            return self._missing(FactorName.PRESSURE_STABILITY, "pressure_change", description)

        change = abs(value)
        passed = change < limit
        confidence = scaled_confidence(limit - change, passed, pass_scale=limit, fail_scale=limit)
        return FactorResult(
            name=FactorName.PRESSURE_STABILITY,
            passed=passed,
            confidence=confidence,
            value=value,
            threshold_description=description,
            reason=f"{value:+.1f} hPa change",
        )

    def evaluate_temperature_differential(self, bundle: ForecastBundle) -> FactorResult:
        minimum = self.thresholds.min_temperature_differential
        description = f">= {minimum:g}° valley/mountain differential"
        value = bundle.temperature_differential
        if value is None:
            return self._missing(
                FactorName.TEMPERATURE_DIFFERENTIAL, "temperature_differential", description
            )

        passed = value >= minimum
        confidence = scaled_confidence(value - minimum, passed, pass_scale=minimum, fail_scale=minimum)
        return FactorResult(
            name=FactorName.TEMPERATURE_DIFFERENTIAL,
            passed=passed,
            confidence=confidence,
            value=value,
            threshold_description=description,
            reason=f"{value:.1f}° differential",
        )

    def evaluate_wave_enhancement(self, bundle: ForecastBundle) -> FactorResult:
        minimum = self.thresholds.min_wave_enhancement_score
        description = f"> {minimum:g}/100 wave enhancement score"
        value = bundle.wave_enhancement_score
        if value is None:
            return self._missing(FactorName.WAVE_ENHANCEMENT, "wave_enhancement_score", description)

        passed = value > minimum
        confidence = scaled_confidence(
            value - minimum, passed, pass_scale=100 - minimum, fail_scale=minimum
        )
        return FactorResult(
            name=FactorName.WAVE_ENHANCEMENT,
            passed=passed,
            confidence=confidence,
            value=value,
            threshold_description=description,
            reason=f"{value:.0f}/100 wave enhancement",
        )

    def aggregate_confidence(self, factors) -> float:
        """Weighted mean of factor confidences."""
        total_weight = sum(self.weights.get(f.name.value, 0.0) for f in factors)
        if total_weight <= 0:
            return 0.0
        weighted = sum(f.confidence * self.weights.get(f.name.value, 0.0) for f in factors)
        return weighted / total_weight

    def recommend(self, probability: float, confidence: float) -> Recommendation:
        """Map probability and confidence to a recommendation band."""
        if probability < self.config.skip_below_probability:
            return Recommendation.SKIP
        if (
            probability >= self.config.go_min_probability
            and confidence >= self.config.go_min_confidence
        ):
            return Recommendation.GO
        return Recommendation.MARGINAL

    @staticmethod
    def explain(passed: int, probability: float, recommendation: Recommendation) -> str:
        text = f"{passed}/{len(FACTOR_ORDER)} factors favorable ({probability:.0f}% probability). "
        if recommendation is Recommendation.GO:
            return text + "Excellent conditions expected for katabatic winds."
        if recommendation is Recommendation.MARGINAL:
            return text + "Mixed conditions - proceed with caution and monitor updates."
        return text + "Unfavorable conditions - recommend skipping this window."

    def evaluate(self, bundle: ForecastBundle) -> Decision:
        """
        Evaluate a forecast bundle.

        Args:
            bundle: Factor inputs from the forecast collaborator

        Returns:
            Decision with the five factor results in fixed order
        """
        factors = (
            self.evaluate_precipitation(bundle),
            self.evaluate_sky_clarity(bundle),
            self.evaluate_pressure_stability(bundle),
            self.evaluate_temperature_differential(bundle),
            self.evaluate_wave_enhancement(bundle),
        )

        passed = sum(1 for f in factors if f.passed)
        probability = 100.0 * passed / len(factors)
        confidence = self.aggregate_confidence(factors)
        recommendation = self.recommend(probability, confidence)

        logger.info(
            "Dawn patrol: %d/5 factors, probability %.0f, confidence %.0f -> %s",
            passed, probability, confidence, recommendation.value,
        )
        return Decision(
            probability=probability,
            confidence=confidence,
            recommendation=recommendation,
            factors=factors,
            explanation=self.explain(passed, probability, recommendation),
        )
