"""Mountain wave analysis result."""
import math
from enum import Enum

from attrs import frozen


class WaveAmplitude(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class WaveOrganization(str, Enum):
    ORGANIZED = "organized"
    MIXED = "mixed"
    CHAOTIC = "chaotic"


class SurfaceCoupling(str, Enum):
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"


class WaveEnhancement(str, Enum):
    """Effect of the wave field on katabatic flow."""

    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


@frozen
class MountainWaveAnalysis:
    """
    Froude-number estimate of mountain wave conditions over the prediction window.

    ``froude_number`` is infinite when the layer between the stations is
    neutral or unstable, since no buoyancy restores a displaced parcel.
    """

    froude_number: float
    upstream_wind: float  # mph
    stability: float  # Brunt-Vaisala frequency, 1/s
    amplitude: WaveAmplitude
    organization: WaveOrganization
    coupling: SurfaceCoupling
    propagation_potential: float  # 0-100
    enhancement: WaveEnhancement
    analysis: str

    def to_dict(self) -> dict:
        return {
            "froude_number": self.froude_number if math.isfinite(self.froude_number) else None,
            "upstream_wind": self.upstream_wind,
            "stability": self.stability,
            "amplitude": self.amplitude.value,
            "organization": self.organization.value,
            "coupling": self.coupling.value,
            "propagation_potential": self.propagation_potential,
            "enhancement": self.enhancement.value,
            "analysis": self.analysis,
        }
