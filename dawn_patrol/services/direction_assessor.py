"""Service for classifying wind direction against a site's ideal."""
import logging
from typing import Optional

from dawn_patrol.models.direction import (
    DirectionAssessment,
    DirectionConfig,
    DirectionStatus,
)
from dawn_patrol.utils.angle_utils import angular_distance, in_range, normalize

logger = logging.getLogger(__name__)


class DirectionAssessor:
    """
    Classifies a measured direction as perfect, good or suboptimal.

    Perfect is checked first, so a perfect heading outside the configured
    ideal range still classifies as perfect.
    """

    def assess(
        self,
        direction: Optional[float],
        config: Optional[DirectionConfig],
    ) -> Optional[DirectionAssessment]:
        """
        Assess a direction.

        Args:
            direction: Measured wind direction in degrees
            config: Site direction config

        Returns:
            DirectionAssessment, or None when the direction or config is absent
        """
        if direction is None or config is None:
            return None

        direction = normalize(direction)
        distance_to_perfect = angular_distance(direction, config.perfect_heading)

        if distance_to_perfect <= config.perfect_tolerance:
            return DirectionAssessment(
                status=DirectionStatus.PERFECT,
                direction=direction,
                distance_to_perfect=distance_to_perfect,
            )

        ideal = config.ideal_range
        if in_range(direction, ideal.min, ideal.max):
            return DirectionAssessment(
                status=DirectionStatus.GOOD,
                direction=direction,
                distance_to_perfect=distance_to_perfect,
            )

        distance_to_range = min(
            angular_distance(direction, ideal.min),
            angular_distance(direction, ideal.max),
        )
        logger.debug(
            "Direction %.0f° is %.0f° outside %.0f-%.0f",
            direction, distance_to_range, ideal.min, ideal.max,
        )
        return DirectionAssessment(
            status=DirectionStatus.SUBOPTIMAL,
            direction=direction,
            distance_to_perfect=distance_to_perfect,
            distance_to_range=distance_to_range,
        )
