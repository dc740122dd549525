"""Geospatial utilities and location-level reducers (no external dependencies).

Every reducer here takes a sequence of locations that are already present
(absent entries filtered out by the caller) and returns None instead of a
made-up zero when there is nothing to reduce.
"""

from __future__ import annotations

import math
import statistics
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from locomotion_sample.config import DEFAULT_STATS_PARAMS, StatsParams

if TYPE_CHECKING:
    from locomotion_sample.models import Location

EARTH_RADIUS_M = 6_371_000.0  # mean Earth radius in meters
# Below this length the mean unit vector has no meaningful direction.
MIN_MEAN_VECTOR_NORM = 1e-12


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A bare latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class Radius:
    """Spread of locations around a center (meters)."""

    mean_m: float
    sd_m: float


@dataclass(frozen=True, slots=True)
class AccuracyRange:
    """Best (smallest) and worst (largest) accuracy values (meters)."""

    min_m: float
    max_m: float


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute Haversine distance in meters between two lat/lon points.

    Args:
        lat1: Latitude 1 in degrees.
        lon1: Longitude 1 in degrees.
        lat2: Latitude 2 in degrees.
        lon2: Longitude 2 in degrees.

    Returns:
        Distance in meters.
    """

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2.0) ** 2
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return EARTH_RADIUS_M * c


def initial_bearing_deg(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Initial great-circle bearing from point 1 to point 2, in [0, 360) degrees."""

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_lambda = math.radians(lon2 - lon1)
    y = math.sin(d_lambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(d_lambda)
    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0


def _spherical_mean(coords: Sequence[tuple[float, float]], weights: Sequence[float]) -> Coordinate | None:
    # Average on the unit sphere so clusters straddling the antimeridian stay put.
    sx = sy = sz = 0.0
    for (lat, lon), w in zip(coords, weights):
        phi = math.radians(lat)
        lam = math.radians(lon)
        sx += math.cos(phi) * math.cos(lam) * w
        sy += math.cos(phi) * math.sin(lam) * w
        sz += math.sin(phi) * w
    total = math.fsum(weights)
    sx /= total
    sy /= total
    sz /= total
    if math.hypot(sx, sy, sz) < MIN_MEAN_VECTOR_NORM:
        return None
    lon = math.atan2(sy, sx)
    lat = math.atan2(sz, math.hypot(sx, sy))
    return Coordinate(latitude=math.degrees(lat), longitude=math.degrees(lon))


def centroid(locations: Sequence[Location], weights: Sequence[float] | None = None) -> Coordinate | None:
    """Geometric (optionally weighted) centroid of locations.

    A single location yields its own coordinate exactly. Returns None when the
    locations cancel out on the sphere (e.g. two antipodal points), since no
    direction is then preferred.
    """

    if not locations:
        return None
    if len(locations) == 1:
        only = locations[0]
        return Coordinate(latitude=only.latitude, longitude=only.longitude)
    if weights is None:
        weights = [1.0] * len(locations)
    coords = [(loc.latitude, loc.longitude) for loc in locations]
    return _spherical_mean(coords, weights)


def center(locations: Sequence[Location]) -> Coordinate | None:
    """Unweighted centroid of locations."""

    return centroid(locations)


def inverse_accuracy_weight(accuracy_m: float, floor_m: float) -> float:
    return 1.0 / max(accuracy_m, floor_m)


def weighted_center(
    locations: Sequence[Location],
    params: StatsParams = DEFAULT_STATS_PARAMS,
) -> Coordinate | None:
    """Centroid weighted by inverse horizontal accuracy.

    Only locations with a usable coordinate take part. A location with
    accuracy `a` gets weight `1 / max(a, floor)`.
    """

    usable = [loc for loc in locations if loc.has_usable_coordinate]
    weights = [inverse_accuracy_weight(loc.horizontal_accuracy_m, params.horizontal_accuracy_floor_m) for loc in usable]
    return centroid(usable, weights)


def radius_from(locations: Sequence[Location], center_coord: Coordinate) -> Radius:
    """Mean and population standard deviation of distances from a center.

    Returns Radius(0, 0) for zero or one location.
    """

    if len(locations) < 2:
        return Radius(mean_m=0.0, sd_m=0.0)
    distances = [
        haversine_m(loc.latitude, loc.longitude, center_coord.latitude, center_coord.longitude) for loc in locations
    ]
    return Radius(mean_m=statistics.fmean(distances), sd_m=statistics.pstdev(distances))


def path_distance_m(locations: Sequence[Location]) -> float:
    """Sum of great-circle distances between consecutive locations."""

    total = 0.0
    for prev, cur in zip(locations, locations[1:]):
        total += haversine_m(prev.latitude, prev.longitude, cur.latitude, cur.longitude)
    return total


def weighted_mean_altitude(
    locations: Sequence[Location],
    params: StatsParams = DEFAULT_STATS_PARAMS,
) -> float | None:
    """Altitude averaged with inverse vertical accuracy weights.

    Returns None if no location carries an altitude.
    """

    with_alt = [loc for loc in locations if loc.has_altitude]
    if not with_alt:
        return None
    if len(with_alt) == 1:
        return with_alt[0].altitude_m
    weights = [inverse_accuracy_weight(loc.vertical_accuracy_m, params.vertical_accuracy_floor_m) for loc in with_alt]
    total = math.fsum(weights)
    return math.fsum(loc.altitude_m * w for loc, w in zip(with_alt, weights)) / total


def _accuracy_range(values: Sequence[float | None]) -> AccuracyRange | None:
    present = [v for v in values if v is not None and v >= 0]
    if not present:
        return None
    return AccuracyRange(min_m=min(present), max_m=max(present))


def horizontal_accuracy_range(locations: Sequence[Location]) -> AccuracyRange | None:
    return _accuracy_range([loc.horizontal_accuracy_m for loc in locations])


def vertical_accuracy_range(locations: Sequence[Location]) -> AccuracyRange | None:
    return _accuracy_range([loc.vertical_accuracy_m for loc in locations])
