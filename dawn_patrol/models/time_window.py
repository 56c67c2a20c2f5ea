"""Chart time window model."""
from attrs import field, frozen
from attrs.validators import and_, ge, instance_of, le


def _hour_field():
    return field(validator=and_(instance_of(int), ge(0), le(23)))


@frozen
class TimeWindow:
    """Inclusive local-hour window.

    ``is_multi_day`` means the window refers to the previous calendar day.
    """

    start_hour: int = _hour_field()
    end_hour: int = _hour_field()
    is_multi_day: bool = False

    def contains_hour(self, hour: int) -> bool:
        return self.start_hour <= hour <= self.end_hour
