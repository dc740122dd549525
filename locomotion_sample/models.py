"""Data models for fixes, fusion batches and locomotion samples."""

from __future__ import annotations

import dataclasses
import threading
import uuid
import weakref
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from functools import cached_property
from typing import TYPE_CHECKING, Generic, Iterable, TypeVar

from locomotion_sample.errors import AlreadyAssignedError
from locomotion_sample.geo import haversine_m
from locomotion_sample.timeutils import format_hhmmss, seconds_since_start_of_day

if TYPE_CHECKING:
    from locomotion_sample.segment import SampleSegment

T = TypeVar("T")


class MovingState(str, Enum):
    """Moving/stationary verdict for a sample window, as reported by the fusion engine."""

    MOVING = "moving"
    STATIONARY = "stationary"
    UNKNOWN = "unknown"


class RecordingState(str, Enum):
    """Mode of the capture subsystem when a sample was built."""

    RECORDING = "recording"
    SLEEPING = "sleeping"
    DEEP_SLEEPING = "deep_sleeping"
    WAKEUP = "wakeup"
    STANDBY = "standby"
    OFF = "off"


@dataclass(frozen=True, slots=True)
class TrackPoint:
    """A single row of the track export file.

    Attributes:
        geo_time_ms: Unix epoch milliseconds.
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
        altitude_m: Altitude in meters. May be 0.0 depending on device/app.
        course_deg: Course in degrees. Some rows use -1.0 as sentinel.
        speed_mps: Speed in meters/second. Some rows may use -1.0 as sentinel.
        horizontal_accuracy_m: Horizontal accuracy in meters. Some rows use -1.0.
        vertical_accuracy_m: Vertical accuracy in meters. Some rows use -1.0.
        location_type: App-specific integer describing the positioning source.
    """

    geo_time_ms: int
    latitude: float
    longitude: float
    altitude_m: float
    course_deg: float
    speed_mps: float
    horizontal_accuracy_m: float
    vertical_accuracy_m: float
    location_type: int


@dataclass(frozen=True, slots=True)
class Location:
    """A positional fix.

    Used both for raw/filtered fixes and for a sample's representative location.
    Optional fields are None when the source did not provide them; negative
    values are never used to mean "missing".
    """

    timestamp: datetime
    latitude: float
    longitude: float
    altitude_m: float | None = None
    horizontal_accuracy_m: float | None = None
    vertical_accuracy_m: float | None = None
    course_deg: float | None = None
    speed_mps: float | None = None

    @property
    def has_usable_coordinate(self) -> bool:
        """True if the coordinate is in range and has a valid horizontal accuracy."""

        if self.horizontal_accuracy_m is None or self.horizontal_accuracy_m < 0:
            return False
        return -90.0 <= self.latitude <= 90.0 and -180.0 <= self.longitude <= 180.0

    @property
    def has_altitude(self) -> bool:
        return (
            self.altitude_m is not None
            and self.vertical_accuracy_m is not None
            and self.vertical_accuracy_m >= 0
        )

    def distance_to(self, other: Location) -> float:
        """Great-circle distance to another location, in meters."""

        return haversine_m(self.latitude, self.longitude, other.latitude, other.longitude)


@dataclass(frozen=True, slots=True)
class ClassifierResult:
    """One scored activity label."""

    name: str
    score: float


@dataclass(frozen=True, slots=True)
class FusionBatch:
    """One sample window's worth of fusion engine output.

    Course and speed are supplied separately from the representative location
    because the fusion engine may derive them independently of the anchoring fix.
    """

    location: Location | None = None
    raw_locations: tuple[Location, ...] = ()
    filtered_locations: tuple[Location, ...] = ()
    moving_state: MovingState = MovingState.UNKNOWN
    course_deg: float | None = None
    speed_mps: float | None = None
    step_hz: float | None = None
    course_variance: float | None = None
    xy_acceleration: float | None = None
    z_acceleration: float | None = None
    motion_activity_type: str | None = None


class WriteOnce(Generic[T]):
    """A cell that may be assigned exactly once.

    Readers never block. The assignment happens under a lock so two writers
    cannot both succeed. The lock cannot be pickled, so neither `pickle` nor
    `copy.deepcopy` work on a cell or on a sample holding one; samples are not
    serialised by this package.
    """

    __slots__ = ("_lock", "_value", "_assigned")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value: T | None = None
        self._assigned = False

    def get(self) -> T | None:
        return self._value

    def set(self, value: T, *, name: str = "value") -> None:
        with self._lock:
            if self._assigned:
                raise AlreadyAssignedError(f"{name} has already been assigned")
            self._value = value
            self._assigned = True


@dataclass(frozen=True, eq=False)
class LocomotionSample:
    """A composite record of location, motion and activity over a short window.

    Samples are immutable except for two write-once hooks: classifier results
    (attached by the activity classifier) and the parent segment (attached when
    the sample is appended to a segment). Equality and hashing use `sample_id`
    only.

    Attributes:
        sample_id: Process-unique identifier.
        timestamp: Representative location's timestamp, or build time if none.
        location: Smoothed representative location, if any fix was usable.
        raw_locations: Raw fixes over the window (empty when location is None).
        filtered_locations: Filtered fixes over the window (empty when location is None).
        moving_state: Fusion engine's moving/stationary verdict.
        recording_state: Capture subsystem mode at build time.
        step_hz: Steps per second, if a pedometer stream was available.
        course_variance: 0.0 (straight) to 1.0 (erratic), if available.
        xy_acceleration: Mean + 3SD of unsigned horizontal acceleration, if available.
        z_acceleration: Mean + 3SD of unsigned vertical acceleration, if available.
        motion_activity_type: Platform motion-activity label, if available.
    """

    sample_id: uuid.UUID
    timestamp: datetime
    location: Location | None
    raw_locations: tuple[Location, ...]
    filtered_locations: tuple[Location, ...]
    moving_state: MovingState
    recording_state: RecordingState
    step_hz: float | None = None
    course_variance: float | None = None
    xy_acceleration: float | None = None
    z_acceleration: float | None = None
    motion_activity_type: str | None = None
    # Not init fields: replace() and copy() get fresh, unassigned cells.
    _classifier_results: WriteOnce[tuple[ClassifierResult, ...]] = field(
        default_factory=WriteOnce, init=False, repr=False, compare=False
    )
    _segment_ref: WriteOnce[weakref.ReferenceType[SampleSegment]] = field(
        default_factory=WriteOnce, init=False, repr=False, compare=False
    )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LocomotionSample):
            return NotImplemented
        return self.sample_id == other.sample_id

    def __hash__(self) -> int:
        return hash(self.sample_id)

    def __copy__(self) -> LocomotionSample:
        return dataclasses.replace(self)

    def __str__(self) -> str:
        seconds = 0.0
        if self.filtered_locations:
            times = [loc.timestamp for loc in self.filtered_locations]
            seconds = (max(times) - min(times)).total_seconds()
        n = len(self.filtered_locations)
        hz = n / seconds if n > 0 and seconds > 0 else 0.0
        return f"{n} locations ({hz:.1f} Hz), {format_hhmmss(seconds)}"

    # --- classifier hook ---

    @property
    def classifier_results(self) -> tuple[ClassifierResult, ...] | None:
        return self._classifier_results.get()

    def attach_classifier_results(self, results: Iterable[ClassifierResult]) -> None:
        """Attach classifier scores. Stored highest score first; may only be called once.

        Raises:
            AlreadyAssignedError: If results were already attached.
        """

        ordered = tuple(sorted(results, key=lambda r: r.score, reverse=True))
        self._classifier_results.set(ordered, name="classifier_results")

    @property
    def activity_type(self) -> str | None:
        """Name of the highest scoring classifier result."""

        results = self._classifier_results.get()
        if not results:
            return None
        return results[0].name

    # --- parent segment ---

    @property
    def segment(self) -> SampleSegment | None:
        """Enclosing segment, if attached and still alive. Never keeps it alive."""

        ref = self._segment_ref.get()
        return ref() if ref is not None else None

    def attach_to_segment(self, segment: SampleSegment) -> None:
        """Record the enclosing segment. May only be called once.

        Raises:
            AlreadyAssignedError: If the sample already belongs to a segment.
        """

        self._segment_ref.set(weakref.ref(segment), name="segment")

    # --- convenience ---

    @cached_property
    def time_of_day(self) -> float:
        """Seconds since the start of the timestamp's local day."""

        return seconds_since_start_of_day(self.timestamp)

    @property
    def has_usable_coordinate(self) -> bool:
        return self.location is not None and self.location.has_usable_coordinate

    def distance_from(self, other: LocomotionSample) -> float | None:
        """Distance between two samples' locations in meters, or None if either lacks one."""

        if self.location is None or other.location is None:
            return None
        return self.location.distance_to(other.location)
