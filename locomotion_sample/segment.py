"""An append-only, time-ordered run of samples."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from locomotion_sample import stats
from locomotion_sample.config import DEFAULT_STATS_PARAMS, StatsParams
from locomotion_sample.geo import AccuracyRange, Coordinate, Radius
from locomotion_sample.models import LocomotionSample


class SampleSegment(Sequence[LocomotionSample]):
    """Owns its samples; each sample only holds a weak reference back.

    Single writer: `append` is expected to be called from one thread during
    capture. Readers see whatever prefix has been appended so far.
    """

    def __init__(self, params: StatsParams = DEFAULT_STATS_PARAMS) -> None:
        self._samples: list[LocomotionSample] = []
        self.params = params

    def append(self, sample: LocomotionSample) -> None:
        """Append a sample and record this segment as its parent.

        Raises:
            AlreadyAssignedError: If the sample already belongs to a segment.
            ValueError: If the sample is older than the current last sample.
        """

        if self._samples and sample.timestamp < self._samples[-1].timestamp:
            raise ValueError("samples must be appended in time order")
        sample.attach_to_segment(self)
        self._samples.append(sample)

    def __getitem__(self, index):  # type: ignore[override]
        return self._samples[index]

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[LocomotionSample]:
        return iter(self._samples)

    @property
    def samples(self) -> tuple[LocomotionSample, ...]:
        return tuple(self._samples)

    @property
    def center(self) -> Coordinate | None:
        return stats.center(self._samples)

    @property
    def weighted_center(self) -> Coordinate | None:
        return stats.weighted_center(self._samples, self.params)

    def radius_from(self, center_coord: Coordinate) -> Radius:
        return stats.radius_from(self._samples, center_coord)

    @property
    def radius(self) -> Radius | None:
        """Spread around the weighted center, or None if there is no center."""

        c = self.weighted_center
        return self.radius_from(c) if c is not None else None

    @property
    def duration(self) -> float:
        return stats.duration(self._samples)

    @property
    def distance(self) -> float:
        return stats.distance(self._samples)

    @property
    def weighted_mean_altitude(self) -> float | None:
        return stats.weighted_mean_altitude(self._samples, self.params)

    @property
    def horizontal_accuracy_range(self) -> AccuracyRange | None:
        return stats.horizontal_accuracy_range(self._samples)

    @property
    def vertical_accuracy_range(self) -> AccuracyRange | None:
        return stats.vertical_accuracy_range(self._samples)
