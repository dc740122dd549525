"""Reducers over ordered sequences of locomotion samples.

All functions are pure. Samples without a representative location are
skipped; when nothing is left, reducers return None rather than zero.
"""

from __future__ import annotations

from typing import Sequence

from locomotion_sample import geo
from locomotion_sample.config import DEFAULT_STATS_PARAMS, StatsParams
from locomotion_sample.geo import AccuracyRange, Coordinate, Radius
from locomotion_sample.models import Location, LocomotionSample


def present_locations(samples: Sequence[LocomotionSample]) -> list[Location]:
    """Representative locations of the samples that have one, in order."""

    return [s.location for s in samples if s.location is not None]


def center(samples: Sequence[LocomotionSample]) -> Coordinate | None:
    return geo.center(present_locations(samples))


def weighted_center(
    samples: Sequence[LocomotionSample],
    params: StatsParams = DEFAULT_STATS_PARAMS,
) -> Coordinate | None:
    """Centroid weighted by inverse horizontal accuracy; preferred for display."""

    return geo.weighted_center(present_locations(samples), params)


def radius_from(samples: Sequence[LocomotionSample], center_coord: Coordinate) -> Radius:
    return geo.radius_from(present_locations(samples), center_coord)


def duration(samples: Sequence[LocomotionSample]) -> float:
    """Seconds between the first and last sample. Assumes time order; does not sort."""

    if len(samples) < 2:
        return 0.0
    return (samples[-1].timestamp - samples[0].timestamp).total_seconds()


def distance(samples: Sequence[LocomotionSample]) -> float:
    """Path length in meters over consecutive present locations.

    Samples without a location are skipped, not interpolated.
    """

    return geo.path_distance_m(present_locations(samples))


def weighted_mean_altitude(
    samples: Sequence[LocomotionSample],
    params: StatsParams = DEFAULT_STATS_PARAMS,
) -> float | None:
    return geo.weighted_mean_altitude(present_locations(samples), params)


def horizontal_accuracy_range(samples: Sequence[LocomotionSample]) -> AccuracyRange | None:
    return geo.horizontal_accuracy_range(present_locations(samples))


def vertical_accuracy_range(samples: Sequence[LocomotionSample]) -> AccuracyRange | None:
    return geo.vertical_accuracy_range(present_locations(samples))
