"""Wind station sample models."""
from datetime import datetime
from typing import Iterator, Optional, Sequence, Tuple

from attrs import field, frozen
import pandas as pd


@frozen
class Sample:
    """One wind observation. Speeds are in mph, direction in degrees."""

    timestamp: datetime
    wind_speed: float
    wind_direction: float
    gust: Optional[float] = None


def _check_chronological(instance, attribute, samples: Tuple[Sample, ...]) -> None:
    for previous, current in zip(samples, samples[1:]):
        if current.timestamp <= previous.timestamp:
            raise ValueError(
                f"Samples must be strictly time-ascending: {current.timestamp} "
                f"follows {previous.timestamp}"
            )


@frozen
class SampleSeries:
    """Time-ascending sequence of samples with unique timestamps."""

    samples: Tuple[Sample, ...] = field(
        default=(), converter=tuple, validator=_check_chronological
    )

    @classmethod
    def empty(cls) -> "SampleSeries":
        return cls(())

    @classmethod
    def from_unsorted(cls, samples: Sequence[Sample]) -> "SampleSeries":
        """Sort by timestamp, keeping the last sample for duplicate instants."""
        by_time = {sample.timestamp: sample for sample in samples}
        return cls(tuple(by_time[ts] for ts in sorted(by_time)))

    @property
    def is_empty(self) -> bool:
        return len(self.samples) == 0

    @property
    def latest(self) -> Optional[Sample]:
        """Most recent sample, or None for an empty series."""
        return self.samples[-1] if self.samples else None

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self.samples)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a DataFrame with one row per sample."""
        return pd.DataFrame(
            {
                "timestamp": [s.timestamp for s in self.samples],
                "wind_speed": [s.wind_speed for s in self.samples],
                "wind_direction": [s.wind_direction for s in self.samples],
                "gust": [s.gust for s in self.samples],
            }
        )


@frozen
class LiveReading:
    """The most recent real-time measurement and when it was captured."""

    sample: Sample
    observed_at: datetime
