"""Factor and decision models for the dawn patrol probability engine."""
from enum import Enum
from typing import Optional, Tuple

from attrs import field, frozen


class FactorName(str, Enum):
    """The five factors, in evaluation order."""

    PRECIPITATION = "precipitation"
    SKY_CLARITY = "sky_clarity"
    PRESSURE_STABILITY = "pressure_stability"
    TEMPERATURE_DIFFERENTIAL = "temperature_differential"
    WAVE_ENHANCEMENT = "wave_enhancement"


FACTOR_ORDER = tuple(FactorName)


class Recommendation(str, Enum):
    """Go/no-go outcome, ordered worst to best by ``rank``."""

    SKIP = "SKIP"
    MARGINAL = "MARGINAL"
    GO = "GO"

    @property
    def rank(self) -> int:
        return {"SKIP": 0, "MARGINAL": 1, "GO": 2}[self.value]


@frozen
class FactorResult:
    """Outcome of one factor against its threshold."""

    name: FactorName
    passed: bool
    confidence: float  # 0-100
    value: Optional[float]  # None when the input was missing
    threshold_description: str
    reason: str = ""

    def to_dict(self) -> dict:
        """Convert to serializable dictionary."""
        return {
            "name": self.name.value,
            "passed": self.passed,
            "confidence": self.confidence,
            "value": self.value,
            "threshold_description": self.threshold_description,
            "reason": self.reason,
        }


def _check_factor_order(instance, attribute, factors: Tuple[FactorResult, ...]) -> None:
    names = tuple(f.name for f in factors)
    if names != FACTOR_ORDER:
        raise ValueError(f"Decision factors must be {FACTOR_ORDER}, got {names}")


@frozen
class Decision:
    """A single dawn patrol evaluation."""

    probability: float  # 0-100, share of factors passed
    confidence: float  # 0-100, weighted mean of factor confidences
    recommendation: Recommendation
    factors: Tuple[FactorResult, ...] = field(converter=tuple, validator=_check_factor_order)
    explanation: str = ""

    @property
    def factors_passed(self) -> int:
        return sum(1 for f in self.factors if f.passed)

    def factor(self, name: FactorName) -> FactorResult:
        return self.factors[FACTOR_ORDER.index(name)]

    def to_dict(self) -> dict:
        """Convert to serializable dictionary."""
        return {
            "probability": self.probability,
            "confidence": self.confidence,
            "recommendation": self.recommendation.value,
            "factors": [f.to_dict() for f in self.factors],
            "explanation": self.explanation,
        }
