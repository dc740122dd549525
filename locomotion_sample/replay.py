"""Replay a track export file into locomotion samples.

This is a simple stand-in for a real fusion engine: it cuts the
track into fixed-length windows, drops inaccurate fixes from the filtered list
and summarises each window with the same reducers used on samples.
"""

from __future__ import annotations

import logging
import math
from typing import Iterator, Sequence

from locomotion_sample import geo
from locomotion_sample.builder import SampleBuilder
from locomotion_sample.config import ReplayParams
from locomotion_sample.csv_io import location_from_track_point
from locomotion_sample.models import FusionBatch, Location, MovingState, TrackPoint
from locomotion_sample.segment import SampleSegment

logger = logging.getLogger(__name__)


def iter_windows(points: Sequence[TrackPoint], window_seconds: float) -> Iterator[list[TrackPoint]]:
    """Group points (can be unsorted) into consecutive windows of at most window_seconds.

    A window starts at its first point; empty stretches produce no window.
    """

    if not points:
        return
    pts = sorted(points, key=lambda p: p.geo_time_ms)
    window_ms = window_seconds * 1000.0
    current: list[TrackPoint] = [pts[0]]
    for pt in pts[1:]:
        if pt.geo_time_ms - current[0].geo_time_ms >= window_ms:
            yield current
            current = []
        current.append(pt)
    yield current


def course_variance(locations: Sequence[Location]) -> float | None:
    """Circular variance of leg bearings: 0.0 straight, 1.0 no consistent direction.

    Needs at least two non-zero legs.
    """

    bearings = [
        geo.initial_bearing_deg(a.latitude, a.longitude, b.latitude, b.longitude)
        for a, b in zip(locations, locations[1:])
        if a.distance_to(b) > 0
    ]
    if len(bearings) < 2:
        return None
    sx = sum(math.cos(math.radians(b)) for b in bearings) / len(bearings)
    sy = sum(math.sin(math.radians(b)) for b in bearings) / len(bearings)
    return max(0.0, min(1.0, 1.0 - math.hypot(sx, sy)))


def batch_from_window(locations: Sequence[Location], params: ReplayParams) -> FusionBatch:
    """Summarise one window of fixes (time ordered) into a FusionBatch."""

    raw = tuple(locations)
    filtered = tuple(
        loc
        for loc in raw
        if loc.has_usable_coordinate and loc.horizontal_accuracy_m <= params.max_filtered_accuracy_m
    )
    if not filtered:
        return FusionBatch(raw_locations=raw, moving_state=MovingState.UNKNOWN)

    coord = geo.weighted_center(filtered, params.stats)
    if coord is None:
        return FusionBatch(raw_locations=raw, moving_state=MovingState.UNKNOWN)

    # Anchor the sample at the middle fix of the window.
    anchor = filtered[len(filtered) // 2]
    hrange = geo.horizontal_accuracy_range(filtered)
    vrange = geo.vertical_accuracy_range([loc for loc in filtered if loc.has_altitude])
    spread = geo.radius_from(filtered, coord)
    altitude = geo.weighted_mean_altitude(filtered, params.stats)
    location = Location(
        timestamp=anchor.timestamp,
        latitude=coord.latitude,
        longitude=coord.longitude,
        altitude_m=altitude,
        horizontal_accuracy_m=max(hrange.min_m, spread.mean_m) if hrange is not None else None,
        vertical_accuracy_m=vrange.min_m if (vrange is not None and altitude is not None) else None,
    )

    if len(filtered) >= 2:
        first, last = filtered[0], filtered[-1]
        span_s = (last.timestamp - first.timestamp).total_seconds()
        dist = geo.path_distance_m(filtered)
        speed = dist / span_s if span_s > 0 else None
        course = (
            geo.initial_bearing_deg(first.latitude, first.longitude, last.latitude, last.longitude)
            if first.distance_to(last) > 0
            else None
        )
    else:
        speed = filtered[0].speed_mps
        course = filtered[0].course_deg

    if speed is None:
        moving_state = MovingState.UNKNOWN
    elif speed >= params.moving_speed_mps:
        moving_state = MovingState.MOVING
    else:
        moving_state = MovingState.STATIONARY

    return FusionBatch(
        location=location,
        raw_locations=raw,
        filtered_locations=filtered,
        moving_state=moving_state,
        course_deg=course,
        speed_mps=speed,
        course_variance=course_variance(filtered),
    )


def replay_track(
    points: Sequence[TrackPoint],
    params: ReplayParams,
    builder: SampleBuilder | None = None,
) -> SampleSegment:
    """Replay track points into a segment of samples, one per window."""

    builder = builder or SampleBuilder()
    segment = SampleSegment(params.stats)
    without_location = 0
    for window in iter_windows(points, params.window_seconds):
        locations = [location_from_track_point(pt, params.tz_name) for pt in window]
        batch = batch_from_window(locations, params)
        if batch.location is None:
            # No timestamp to anchor on; a wall-clock sample would break time order.
            without_location += 1
            continue
        segment.append(builder.build(batch))
    if without_location:
        logger.info("跳过 %s 个没有可用定位的时间窗", without_location)
    logger.debug("replayed %s points into %s samples", len(points), len(segment))
    return segment
