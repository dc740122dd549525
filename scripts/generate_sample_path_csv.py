from __future__ import annotations

import argparse
import csv
import math
import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Final

from zoneinfo import ZoneInfo


TZ: Final[str] = "Asia/Shanghai"
METERS_PER_DEG_LAT: Final[float] = 111_320.0


@dataclass(frozen=True, slots=True)
class Leg:
    """One stretch of the fake track: stay in place or travel at a speed."""

    kind: str
    seconds: float
    speed_mps: float


def _epoch_ms(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


def generate_points(
    *,
    rows: int,
    seed: int,
    start_local: datetime,
    start_lat: float,
    start_lon: float,
) -> list[dict[str, str]]:
    """Generate fake Path.csv rows at 1-5s intervals, alternating stays and walks/drives."""

    rng = random.Random(seed)
    tz = ZoneInfo(TZ)
    cur = start_local.replace(tzinfo=tz)
    lat, lon = start_lat, start_lon
    heading = rng.uniform(0, 360)

    out: list[dict[str, str]] = []
    leg = Leg("stay", rng.uniform(120, 600), 0.0)
    leg_left = leg.seconds

    while len(out) < rows:
        step_s = rng.uniform(1.0, 5.0)
        cur = cur + timedelta(seconds=step_s)
        leg_left -= step_s
        if leg_left <= 0:
            kind = rng.choice(["stay", "walk", "walk", "drive"])
            speed = {"stay": 0.0, "walk": rng.uniform(1.0, 1.8), "drive": rng.uniform(6.0, 15.0)}[kind]
            leg = Leg(kind, rng.uniform(60, 600), speed)
            leg_left = leg.seconds
            heading = rng.uniform(0, 360)

        if leg.kind != "stay":
            heading = (heading + rng.gauss(0, 8)) % 360
            d = leg.speed_mps * step_s
            lat += d * math.cos(math.radians(heading)) / METERS_PER_DEG_LAT
            lon += d * math.sin(math.radians(heading)) / (METERS_PER_DEG_LAT * math.cos(math.radians(lat)))

        hacc = rng.choice([3.0, 5.0, 8.0, 12.0, 20.0, 65.0, -1.0])
        vacc = rng.choice([3.0, 5.0, 8.0, 12.0, 20.0, -1.0])
        # Jitter scaled with the reported accuracy; invalid rows get a rough guess.
        jitter_m = (hacc if hacc > 0 else 30.0) * 0.3
        jlat = lat + rng.gauss(0, jitter_m) / METERS_PER_DEG_LAT
        jlon = lon + rng.gauss(0, jitter_m) / (METERS_PER_DEG_LAT * math.cos(math.radians(lat)))
        speed = max(0.0, leg.speed_mps + rng.gauss(0, 0.2)) if rng.random() > 0.1 else -1.0

        out.append(
            {
                "geoTime": str(_epoch_ms(cur)),
                "latitude": f"{jlat:.7f}",
                "longitude": f"{jlon:.7f}",
                "altitude": f"{12.0 + rng.gauss(0, 2):.1f}",
                "course": f"{heading:.1f}" if leg.kind != "stay" else "-1.0",
                "horizontalAccuracy": f"{hacc:.1f}",
                "verticalAccuracy": f"{vacc:.1f}",
                "speed": f"{speed:.1f}",
                "locationType": str(rng.choice([0, 1])),
            }
        )

    return out


def main() -> int:
    p = argparse.ArgumentParser(description="Generate a fake Path.csv for demo/testing (privacy-safe).")
    p.add_argument("--out", type=str, default="sample_data/Path.csv", help="Output CSV path")
    p.add_argument("--rows", type=int, default=2000, help="Number of rows")
    p.add_argument("--seed", type=int, default=42, help="Random seed (reproducible)")
    p.add_argument(
        "--start",
        type=str,
        default="2025-01-01 08:00:00",
        help="Start local time in Asia/Shanghai, e.g. '2025-01-01 08:00:00'",
    )
    p.add_argument("--lat", type=float, default=31.2304000, help="Start latitude")
    p.add_argument("--lon", type=float, default=121.4737000, help="Start longitude")
    args = p.parse_args()

    rows = generate_points(
        rows=args.rows,
        seed=args.seed,
        start_local=datetime.fromisoformat(args.start),
        start_lat=args.lat,
        start_lon=args.lon,
    )
    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = [
        "geoTime",
        "latitude",
        "longitude",
        "altitude",
        "course",
        "horizontalAccuracy",
        "verticalAccuracy",
        "speed",
        "locationType",
    ]
    with out_path.open("w", encoding="utf-8", newline="") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        w.writerows(rows)

    print(f"Generated: {out_path} (rows={len(rows)}, seed={args.seed})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
