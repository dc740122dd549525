"""Shared factories for building locations and samples in tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Callable

import pytest

from locomotion_sample.builder import SampleBuilder
from locomotion_sample.models import FusionBatch, Location, LocomotionSample, MovingState

T0 = datetime(2025, 1, 1, 8, 0, 0, tzinfo=UTC)


@pytest.fixture
def t0() -> datetime:
    return T0


@pytest.fixture
def make_location() -> Callable[..., Location]:
    def _make(
        lat: float,
        lon: float,
        *,
        t: float = 0.0,
        hacc: float | None = 5.0,
        alt: float | None = None,
        vacc: float | None = None,
    ) -> Location:
        return Location(
            timestamp=T0 + timedelta(seconds=t),
            latitude=lat,
            longitude=lon,
            altitude_m=alt,
            horizontal_accuracy_m=hacc,
            vertical_accuracy_m=vacc,
        )

    return _make


@pytest.fixture
def builder() -> SampleBuilder:
    return SampleBuilder(clock=lambda: T0 - timedelta(days=1))


@pytest.fixture
def make_sample(builder: SampleBuilder) -> Callable[[Location | None], LocomotionSample]:
    def _make(location: Location | None) -> LocomotionSample:
        fixes = (location,) if location is not None else ()
        return builder.build(
            FusionBatch(
                location=location,
                raw_locations=fixes,
                filtered_locations=fixes,
                moving_state=MovingState.STATIONARY,
            )
        )

    return _make
