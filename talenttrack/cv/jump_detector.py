"""
Vertical jump detection from hip height.

Pixel y grows downward, so "higher" means a smaller value. The first
smoothed hip height is the standing baseline; a jump starts when the hips
rise more than 20 px above it and ends when they come back within 5 px.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from talenttrack.cv.base import ActivityDetector
from talenttrack.cv.events import JumpEvent
from talenttrack.cv.geometry import midpoint, skip_reason
from talenttrack.cv.landmarks import Frame, HIPS
from talenttrack.cv.summarizer import (
    JUMP_CM_PER_PX,
    VerticalJumpSummary,
    summarize_vertical_jump,
)

logger = logging.getLogger(__name__)


class JumpPhase(Enum):
    GROUNDED = "grounded"
    AIRBORNE = "airborne"


@dataclass
class InFlightJump:
    """A jump that has taken off but not landed. Not part of the ledger."""
    takeoff_time: float
    apex_y: float


class VerticalJumpDetector(ActivityDetector):
    """Jump detector on the mean hip pixel height."""

    activity_key = "verticaljump"
    SMOOTHING_WINDOW = 5

    TAKEOFF_RISE_PX = 20.0
    LANDING_TOLERANCE_PX = 5.0

    def __init__(
        self,
        fps: float = 30.0,
        smoothing_window: Optional[int] = None,
        cm_per_px: float = JUMP_CM_PER_PX,
    ):
        super().__init__(fps, smoothing_window)
        self.cm_per_px = cm_per_px
        self.phase = JumpPhase.GROUNDED
        self.baseline_y: Optional[float] = None
        self.in_flight: Optional[InFlightJump] = None
        self.jumps: List[JumpEvent] = []

        logger.info(f"VerticalJumpDetector initialized: {fps} fps, window={self.smoother.capacity}")

    @property
    def ledger(self) -> Sequence[JumpEvent]:
        return tuple(self.jumps)

    def _analyze(self, frame: Frame) -> Optional[JumpEvent]:
        left_hip, right_hip = (frame.get(i) for i in HIPS)
        if left_hip is None or right_hip is None:
            return self._skip(skip_reason(frame, HIPS), frame)
        _, hip_y = midpoint(left_hip, right_hip, frame.width, frame.height)
        return self.update(hip_y, frame.timestamp)

    def update(self, hip_y: float, timestamp: float) -> Optional[JumpEvent]:
        """Push one raw hip height (pixels) and advance the state machine."""
        self._admit(timestamp)
        smoothed = self.smoother.push(hip_y)

        if self.baseline_y is None:
            self.baseline_y = smoothed
            logger.info(f"Jump baseline captured at {timestamp:.2f}s: y={smoothed:.1f}px")

        if self.phase == JumpPhase.GROUNDED:
            if smoothed < self.baseline_y - self.TAKEOFF_RISE_PX:
                self.phase = JumpPhase.AIRBORNE
                self.in_flight = InFlightJump(takeoff_time=timestamp, apex_y=smoothed)
                logger.debug(f"Takeoff at {timestamp:.2f}s (y={smoothed:.1f}px)")
            return None

        if smoothed < self.in_flight.apex_y:
            self.in_flight.apex_y = smoothed
        if smoothed >= self.baseline_y - self.LANDING_TOLERANCE_PX:
            return self._land(timestamp)
        return None

    def _land(self, timestamp: float) -> JumpEvent:
        jump = JumpEvent(
            sequence_number=len(self.jumps) + 1,
            takeoff_time=self.in_flight.takeoff_time,
            landing_time=timestamp,
            height_px=self.baseline_y - self.in_flight.apex_y,
            air_time_sec=timestamp - self.in_flight.takeoff_time,
        )
        self.jumps.append(jump)
        logger.info(f"Jump #{jump.sequence_number}: height={jump.height_px:.1f}px, "
                    f"air={jump.air_time_sec:.2f}s")

        self.phase = JumpPhase.GROUNDED
        self.in_flight = None
        return jump

    def summarize(self) -> VerticalJumpSummary:
        return summarize_vertical_jump(self.jumps, self.cm_per_px)
