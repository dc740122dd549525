"""Readable exports and summaries of replayed samples."""

from __future__ import annotations

import csv
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from locomotion_sample import stats
from locomotion_sample.config import DEFAULT_STATS_PARAMS, StatsParams
from locomotion_sample.geo import AccuracyRange, Coordinate, Radius
from locomotion_sample.models import LocomotionSample
from locomotion_sample.timeutils import format_hhmmss


def _opt(value: float | None, fmt: str = ".3f") -> str:
    return "" if value is None else format(value, fmt)


def write_samples_csv(samples: Sequence[LocomotionSample], out_path: str | Path) -> None:
    """Write one row per sample for manual inspection."""

    p = Path(out_path)
    with p.open("w", encoding="utf-8", newline="") as f:
        w = csv.DictWriter(
            f,
            fieldnames=[
                "sample_id",
                "time",
                "latitude",
                "longitude",
                "altitude_m",
                "horizontal_accuracy_m",
                "vertical_accuracy_m",
                "course_deg",
                "speed_mps",
                "moving_state",
                "recording_state",
                "course_variance",
                "raw_locations",
                "filtered_locations",
                "description",
            ],
        )
        w.writeheader()
        for s in samples:
            loc = s.location
            w.writerow(
                {
                    "sample_id": str(s.sample_id),
                    "time": s.timestamp.isoformat(sep=" "),
                    "latitude": _opt(loc.latitude if loc else None, ".7f"),
                    "longitude": _opt(loc.longitude if loc else None, ".7f"),
                    "altitude_m": _opt(loc.altitude_m if loc else None, ".1f"),
                    "horizontal_accuracy_m": _opt(loc.horizontal_accuracy_m if loc else None, ".1f"),
                    "vertical_accuracy_m": _opt(loc.vertical_accuracy_m if loc else None, ".1f"),
                    "course_deg": _opt(loc.course_deg if loc else None, ".1f"),
                    "speed_mps": _opt(loc.speed_mps if loc else None),
                    "moving_state": s.moving_state.value,
                    "recording_state": s.recording_state.value,
                    "course_variance": _opt(s.course_variance),
                    "raw_locations": len(s.raw_locations),
                    "filtered_locations": len(s.filtered_locations),
                    "description": str(s),
                }
            )


@dataclass(frozen=True, slots=True)
class SegmentSummary:
    """Collection statistics for a run of samples."""

    samples: int
    samples_with_location: int
    duration_seconds: float
    distance_m: float
    center: Coordinate | None
    weighted_center: Coordinate | None
    radius: Radius | None
    weighted_mean_altitude_m: float | None
    horizontal_accuracy: AccuracyRange | None
    vertical_accuracy: AccuracyRange | None
    moving_states: dict[str, int]

    @property
    def duration_hhmmss(self) -> str:
        return format_hhmmss(self.duration_seconds)


def summarize_samples(
    samples: Sequence[LocomotionSample],
    params: StatsParams = DEFAULT_STATS_PARAMS,
) -> SegmentSummary:
    wc = stats.weighted_center(samples, params)
    return SegmentSummary(
        samples=len(samples),
        samples_with_location=len(stats.present_locations(samples)),
        duration_seconds=stats.duration(samples),
        distance_m=stats.distance(samples),
        center=stats.center(samples),
        weighted_center=wc,
        radius=stats.radius_from(samples, wc) if wc is not None else None,
        weighted_mean_altitude_m=stats.weighted_mean_altitude(samples, params),
        horizontal_accuracy=stats.horizontal_accuracy_range(samples),
        vertical_accuracy=stats.vertical_accuracy_range(samples),
        moving_states=dict(Counter(s.moving_state.value for s in samples)),
    )
