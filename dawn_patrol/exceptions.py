"""Error taxonomy for the decision engine.

Only ``InvalidAngle`` is ever raised. ``InsufficientData`` and
``MissingFactorInput`` describe degraded results and are logged; callers
receive ``None``, empty series or a failed factor instead.
"""
from typing import Optional


class DawnPatrolError(Exception):
    """Base class for engine errors."""


class InvalidAngle(DawnPatrolError, ValueError):
    """A direction was NaN or infinite."""

    def __init__(self, angle: float):
        self.angle = angle
        super().__init__(f"Angle must be finite, got {angle!r}")


class InsufficientData(DawnPatrolError):
    """Not enough samples to produce a result."""

    def __init__(self, operation: str, detail: Optional[str] = None):
        self.operation = operation
        self.detail = detail
        message = f"Insufficient data for {operation}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class MissingFactorInput(DawnPatrolError):
    """A factor's forecast field was absent."""

    def __init__(self, factor: str, field: str):
        self.factor = factor
        self.field = field
        super().__init__(f"Factor {factor} is missing {field}")
