from __future__ import annotations

import pytest

from locomotion_sample import stats
from locomotion_sample.config import StatsParams
from locomotion_sample.geo import AccuracyRange, Coordinate, Radius, haversine_m


def test_single_location_centers_are_exact(make_location, make_sample) -> None:
    samples = [make_sample(make_location(31.2304123, 121.4737456, hacc=17.0))]

    expected = Coordinate(latitude=31.2304123, longitude=121.4737456)
    assert stats.center(samples) == expected
    assert stats.weighted_center(samples) == expected


def test_center_and_weighted_center_agree_for_equal_accuracy(make_location, make_sample) -> None:
    samples = [
        make_sample(make_location(0.0, 0.0, hacc=1.0)),
        make_sample(make_location(0.0, 0.0, hacc=1.0)),
        make_sample(make_location(0.0, 2.0, hacc=1.0)),
    ]

    c = stats.center(samples)
    assert c is not None
    assert c.latitude == pytest.approx(0.0, abs=1e-9)
    assert c.longitude == pytest.approx(2.0 / 3.0, abs=1e-3)
    assert stats.weighted_center(samples) == c


def test_weighted_center_favours_precise_fixes(make_location, make_sample) -> None:
    samples = [
        make_sample(make_location(0.0, 0.0, hacc=1.0)),
        make_sample(make_location(0.0, 1.0, hacc=100.0)),
    ]

    c = stats.center(samples)
    wc = stats.weighted_center(samples)
    assert c is not None and wc is not None
    assert c.longitude == pytest.approx(0.5, abs=1e-6)
    assert wc.longitude == pytest.approx(1.0 / 101.0, abs=1e-4)


def test_weighted_center_floor_avoids_division_by_zero(make_location, make_sample) -> None:
    samples = [
        make_sample(make_location(0.0, 0.0, hacc=0.0)),
        make_sample(make_location(0.0, 1.0, hacc=1.0)),
    ]

    wc = stats.weighted_center(samples)
    assert wc is not None
    # both weights are floored to 1.0
    assert wc.longitude == pytest.approx(0.5, abs=1e-6)


def test_reducers_return_none_without_locations(make_sample) -> None:
    samples = [make_sample(None), make_sample(None)]

    assert stats.center(samples) is None
    assert stats.weighted_center(samples) is None
    assert stats.weighted_mean_altitude(samples) is None
    assert stats.horizontal_accuracy_range(samples) is None
    assert stats.vertical_accuracy_range(samples) is None
    assert stats.center([]) is None


def test_weighted_center_requires_usable_coordinate(make_location, make_sample) -> None:
    samples = [make_sample(make_location(10.0, 10.0, hacc=None))]

    assert stats.center(samples) == Coordinate(10.0, 10.0)
    assert stats.weighted_center(samples) is None


def test_radius_is_zero_for_zero_or_one_location(make_location, make_sample) -> None:
    origin = Coordinate(0.0, 0.0)

    assert stats.radius_from([], origin) == Radius(0.0, 0.0)
    assert stats.radius_from([make_sample(None)], origin) == Radius(0.0, 0.0)
    assert stats.radius_from([make_sample(make_location(0.0, 1.0))], origin) == Radius(0.0, 0.0)


def test_radius_mean_and_sd(make_location, make_sample) -> None:
    samples = [
        make_sample(make_location(0.0, -1.0)),
        make_sample(make_location(0.0, 1.0)),
        make_sample(None),
    ]
    one_degree = haversine_m(0.0, 0.0, 0.0, 1.0)

    r = stats.radius_from(samples, Coordinate(0.0, 0.0))
    assert r.mean_m == pytest.approx(one_degree)
    assert r.sd_m == pytest.approx(0.0, abs=1e-6)

    r2 = stats.radius_from(samples, Coordinate(0.0, -1.0))
    assert r2.mean_m == pytest.approx(one_degree)
    assert r2.sd_m == pytest.approx(one_degree)


def test_duration(make_location, make_sample) -> None:
    assert stats.duration([]) == 0.0
    assert stats.duration([make_sample(make_location(0.0, 0.0, t=10.0))]) == 0.0

    samples = [make_sample(make_location(0.0, 0.0, t=t)) for t in (0.0, 25.0, 60.0)]
    assert stats.duration(samples) == pytest.approx(60.0)


def test_distance_with_no_or_one_location(make_location, make_sample) -> None:
    assert stats.distance([]) == 0.0
    assert stats.distance([make_sample(None), make_sample(None)]) == 0.0
    assert stats.distance([make_sample(None), make_sample(make_location(1.0, 1.0)), make_sample(None)]) == 0.0


def test_distance_skips_samples_without_location(make_location, make_sample) -> None:
    l1 = make_location(0.0, 0.0, t=0)
    l3 = make_location(0.0, 0.01, t=20)
    l5 = make_location(0.01, 0.01, t=40)
    samples = [make_sample(l1), make_sample(None), make_sample(l3), make_sample(None), make_sample(l5)]

    expected = haversine_m(0.0, 0.0, 0.0, 0.01) + haversine_m(0.0, 0.01, 0.01, 0.01)
    assert stats.distance(samples) == pytest.approx(expected)


def test_weighted_mean_altitude(make_location, make_sample) -> None:
    samples = [
        make_sample(make_location(0.0, 0.0, alt=10.0, vacc=1.0)),
        make_sample(make_location(0.0, 0.0, alt=20.0, vacc=3.0)),
        # no vertical accuracy: altitude is not trusted
        make_sample(make_location(0.0, 0.0, alt=500.0, vacc=None)),
    ]

    assert stats.weighted_mean_altitude(samples) == pytest.approx(12.5)
    assert stats.weighted_mean_altitude(samples[:1]) == 10.0
    assert stats.weighted_mean_altitude(samples[2:]) is None


def test_weighted_mean_altitude_floors_vertical_accuracy(make_location, make_sample) -> None:
    exact = [
        make_sample(make_location(0.0, 0.0, alt=10.0, vacc=0.0)),
        make_sample(make_location(0.0, 0.0, alt=20.0, vacc=1.0)),
    ]
    assert stats.weighted_mean_altitude(exact) == pytest.approx(15.0)

    samples = [
        make_sample(make_location(0.0, 0.0, alt=10.0, vacc=1.0)),
        make_sample(make_location(0.0, 0.0, alt=20.0, vacc=4.0)),
    ]
    assert stats.weighted_mean_altitude(samples) == pytest.approx(12.0)
    coarse = StatsParams(vertical_accuracy_floor_m=4.0)
    assert stats.weighted_mean_altitude(samples, coarse) == pytest.approx(15.0)


def test_centers_are_none_for_antipodal_locations(make_location, make_sample) -> None:
    samples = [make_sample(make_location(0.0, 0.0)), make_sample(make_location(0.0, 180.0))]

    assert stats.center(samples) is None
    assert stats.weighted_center(samples) is None


def test_accuracy_ranges(make_location, make_sample) -> None:
    samples = [
        make_sample(make_location(0.0, 0.0, hacc=5.0, alt=1.0, vacc=8.0)),
        make_sample(make_location(0.0, 0.0, hacc=30.0)),
        make_sample(None),
        make_sample(make_location(0.0, 0.0, hacc=12.0, alt=1.0, vacc=3.0)),
    ]

    assert stats.horizontal_accuracy_range(samples) == AccuracyRange(min_m=5.0, max_m=30.0)
    assert stats.vertical_accuracy_range(samples) == AccuracyRange(min_m=3.0, max_m=8.0)


def test_reducers_are_pure(make_location, make_sample) -> None:
    samples = [
        make_sample(make_location(31.0 + i * 0.001, 121.0, t=i * 30.0, hacc=3.0 + i, alt=5.0 * i, vacc=2.0))
        for i in range(6)
    ]
    samples.insert(2, make_sample(None))
    c = stats.weighted_center(samples)
    assert c is not None

    for fn in (
        stats.center,
        stats.weighted_center,
        stats.duration,
        stats.distance,
        stats.weighted_mean_altitude,
        stats.horizontal_accuracy_range,
        stats.vertical_accuracy_range,
    ):
        assert fn(samples) == fn(samples)
    assert stats.radius_from(samples, c) == stats.radius_from(samples, c)
