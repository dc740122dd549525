"""Build locomotion samples from fusion engine batches."""

from __future__ import annotations

import dataclasses
import logging
import uuid
from datetime import UTC, datetime
from typing import Callable

from locomotion_sample.models import FusionBatch, LocomotionSample, RecordingState

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class SampleBuilder:
    """Turns one FusionBatch into one LocomotionSample.

    Args:
        recording_state: Called at build time to snapshot the capture subsystem's mode.
        clock: Fallback timestamp source for batches without a location.
    """

    def __init__(
        self,
        recording_state: Callable[[], RecordingState] = lambda: RecordingState.RECORDING,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._recording_state = recording_state
        self._clock = clock

    def build(self, batch: FusionBatch) -> LocomotionSample:
        """Build a sample. Never raises; missing inputs become None fields."""

        if batch.location is not None:
            # Course and speed come from the fusion engine, not the anchoring fix.
            location = dataclasses.replace(batch.location, course_deg=batch.course_deg, speed_mps=batch.speed_mps)
            timestamp = location.timestamp
            raw_locations = tuple(batch.raw_locations)
            filtered_locations = tuple(batch.filtered_locations)
        else:
            location = None
            timestamp = self._clock()
            raw_locations = ()
            filtered_locations = ()
            logger.debug("batch has no location; sample timestamped with wall clock %s", timestamp.isoformat())

        return LocomotionSample(
            sample_id=uuid.uuid4(),
            timestamp=timestamp,
            location=location,
            raw_locations=raw_locations,
            filtered_locations=filtered_locations,
            moving_state=batch.moving_state,
            recording_state=self._recording_state(),
            step_hz=batch.step_hz,
            course_variance=batch.course_variance,
            xy_acceleration=batch.xy_acceleration,
            z_acceleration=batch.z_acceleration,
            motion_activity_type=batch.motion_activity_type,
        )
