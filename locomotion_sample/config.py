"""Tunable constants and parameter objects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

DEFAULT_TZ: Final[str] = "Asia/Shanghai"

# Weighting floors (meters). An accuracy of 0 would otherwise give an infinite weight.
HORIZONTAL_ACCURACY_FLOOR_M: Final[float] = 1.0
VERTICAL_ACCURACY_FLOOR_M: Final[float] = 1.0

MIN_WINDOW_SECONDS: Final[float] = 10.0
MAX_WINDOW_SECONDS: Final[float] = 60.0


@dataclass(frozen=True, slots=True)
class StatsParams:
    """Parameters for the weighted reducers."""

    horizontal_accuracy_floor_m: float = HORIZONTAL_ACCURACY_FLOOR_M
    vertical_accuracy_floor_m: float = VERTICAL_ACCURACY_FLOOR_M

    def __post_init__(self) -> None:
        if self.horizontal_accuracy_floor_m <= 0 or self.vertical_accuracy_floor_m <= 0:
            raise ValueError("accuracy floors must be positive")


DEFAULT_STATS_PARAMS: Final[StatsParams] = StatsParams()


@dataclass(frozen=True, slots=True)
class ReplayParams:
    """Parameters controlling how a track file is replayed into samples."""

    tz_name: str = DEFAULT_TZ
    window_seconds: float = 30.0
    # Fixes worse than this are kept as raw but dropped from the filtered list.
    max_filtered_accuracy_m: float = 50.0
    # Window speed at or above this is considered moving.
    moving_speed_mps: float = 0.8
    stats: StatsParams = DEFAULT_STATS_PARAMS

    def __post_init__(self) -> None:
        if not MIN_WINDOW_SECONDS <= self.window_seconds <= MAX_WINDOW_SECONDS:
            raise ValueError(
                f"window_seconds must be within [{MIN_WINDOW_SECONDS}, {MAX_WINDOW_SECONDS}], "
                f"got {self.window_seconds}"
            )
        if self.max_filtered_accuracy_m <= 0:
            raise ValueError("max_filtered_accuracy_m must be positive")
        if self.moving_speed_mps < 0:
            raise ValueError("moving_speed_mps must be non-negative")
