"""CSV input utilities for the exported track file."""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence

from locomotion_sample.models import Location, TrackPoint
from locomotion_sample.timeutils import dt_from_epoch_ms

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CsvSummary:
    """Quick summary of CSV parsing."""

    rows_total: int
    rows_parsed: int
    rows_skipped: int
    fieldnames: Sequence[str]


def _parse_int(value: str) -> int:
    return int(value.strip())


def _parse_float(value: str) -> float:
    return float(value.strip())


def _point_from_row(row: Mapping[str, str]) -> TrackPoint:
    return TrackPoint(
        geo_time_ms=_parse_int(row["geoTime"]),
        latitude=_parse_float(row["latitude"]),
        longitude=_parse_float(row["longitude"]),
        altitude_m=_parse_float(row.get("altitude", "0") or "0"),
        course_deg=_parse_float(row.get("course", "-1") or "-1"),
        speed_mps=_parse_float(row.get("speed", "-1") or "-1"),
        horizontal_accuracy_m=_parse_float(row.get("horizontalAccuracy", "-1") or "-1"),
        vertical_accuracy_m=_parse_float(row.get("verticalAccuracy", "-1") or "-1"),
        location_type=_parse_int(row.get("locationType", "0") or "0"),
    )


def load_track_points(csv_path: str | Path) -> tuple[list[TrackPoint], CsvSummary]:
    """Load all points into memory.

    The export uses these columns (observed):
      - geoTime: epoch milliseconds
      - latitude/longitude: decimal degrees
      - altitude/course/speed/horizontalAccuracy/verticalAccuracy/locationType, etc.

    Returns:
        (points, summary)

    Raises:
        KeyError: If a required column (geoTime/latitude/longitude) is missing.
    """

    p = Path(csv_path)
    rows_total = 0
    parsed: list[TrackPoint] = []
    fieldnames: Sequence[str] = ()

    with p.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        fieldnames = reader.fieldnames or ()
        missing = [k for k in ("geoTime", "latitude", "longitude") if k not in fieldnames]
        if missing:
            raise KeyError(f"CSV缺少必要字段：{missing}. 实际字段：{list(fieldnames)}")
        for row in reader:
            rows_total += 1
            try:
                parsed.append(_point_from_row(row))
            except (ValueError, TypeError, AttributeError):
                # 某些行可能损坏/空行，直接跳过
                continue

    summary = CsvSummary(
        rows_total=rows_total,
        rows_parsed=len(parsed),
        rows_skipped=rows_total - len(parsed),
        fieldnames=fieldnames,
    )
    if summary.rows_skipped > 0:
        logger.warning("CSV中有 %s 行解析失败已跳过", summary.rows_skipped)
    return parsed, summary


def _non_negative(value: float) -> float | None:
    return value if value >= 0 else None


def location_from_track_point(pt: TrackPoint, tz_name: str) -> Location:
    """Convert a file row to a Location, mapping -1 sentinels to None."""

    vacc = _non_negative(pt.vertical_accuracy_m)
    return Location(
        timestamp=dt_from_epoch_ms(pt.geo_time_ms, tz_name),
        latitude=pt.latitude,
        longitude=pt.longitude,
        # Altitude without a vertical accuracy is not trustworthy in these exports.
        altitude_m=pt.altitude_m if vacc is not None else None,
        horizontal_accuracy_m=_non_negative(pt.horizontal_accuracy_m),
        vertical_accuracy_m=vacc,
        course_deg=_non_negative(pt.course_deg),
        speed_mps=_non_negative(pt.speed_mps),
    )
