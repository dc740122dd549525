from __future__ import annotations

import math

import pytest

from locomotion_sample import geo
from locomotion_sample.config import StatsParams


def test_haversine_one_degree_on_equator() -> None:
    expected = 2 * math.pi * geo.EARTH_RADIUS_M / 360.0
    assert geo.haversine_m(0.0, 0.0, 0.0, 1.0) == pytest.approx(expected)
    assert geo.haversine_m(31.2, 121.4, 31.2, 121.4) == 0.0


def test_initial_bearing_cardinal_directions() -> None:
    assert geo.initial_bearing_deg(0.0, 0.0, 1.0, 0.0) == pytest.approx(0.0, abs=1e-9)
    assert geo.initial_bearing_deg(0.0, 0.0, 0.0, 1.0) == pytest.approx(90.0)
    assert geo.initial_bearing_deg(0.0, 0.0, -1.0, 0.0) == pytest.approx(180.0)
    assert geo.initial_bearing_deg(0.0, 0.0, 0.0, -1.0) == pytest.approx(270.0)


def test_centroid_across_antimeridian(make_location) -> None:
    c = geo.center([make_location(0.0, 179.0), make_location(0.0, -179.0)])
    assert c is not None
    assert abs(c.longitude) == pytest.approx(180.0)


def test_centroid_is_none_when_locations_cancel_out(make_location) -> None:
    assert geo.center([make_location(0.0, 0.0), make_location(0.0, 180.0)]) is None
    assert geo.center([make_location(90.0, 0.0), make_location(-90.0, 0.0)]) is None
    c = geo.center([make_location(0.0, 0.0), make_location(0.0, 180.0), make_location(0.0, 90.0)])
    assert c is not None
    assert c.longitude == pytest.approx(90.0)


def test_weighted_center_uses_configured_floor(make_location) -> None:
    locs = [make_location(0.0, 0.0, hacc=2.0), make_location(0.0, 1.0, hacc=10.0)]

    default = geo.weighted_center(locs)
    coarse = geo.weighted_center(locs, StatsParams(horizontal_accuracy_floor_m=10.0))
    assert default is not None and coarse is not None
    assert default.longitude < 0.5
    assert coarse.longitude == pytest.approx(0.5, abs=1e-6)


def test_path_distance_and_ranges_on_empty() -> None:
    assert geo.path_distance_m([]) == 0.0
    assert geo.horizontal_accuracy_range([]) is None
    assert geo.vertical_accuracy_range([]) is None
    assert geo.weighted_mean_altitude([]) is None
