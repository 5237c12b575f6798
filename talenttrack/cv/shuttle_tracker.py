"""
Shuttle run tracking from lower-body horizontal position.

Each frame the smoothed x position is compared with the previous one.
Moves larger than 5 px are recorded as "forward" or "backward" in a
3-entry history; a direction is confirmed only when all three entries
agree. A leg is counted when the confirmed direction flips to backward
(out and back).

The output is a continuously updated status rather than a ledger of legs.
"""

import logging
from collections import deque
from enum import Enum
from typing import Deque, List, Optional

from talenttrack.cv.base import ActivityDetector
from talenttrack.cv.events import ShuttleState, ShuttleStatus
from talenttrack.cv.geometry import mean_coordinate, skip_reason
from talenttrack.cv.landmarks import Frame, LOWER_BODY
from talenttrack.cv.summarizer import SHUTTLE_M_PER_PX, ShuttleSummary, summarize_shuttle

logger = logging.getLogger(__name__)


class Direction(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


class ShuttleRunTracker(ActivityDetector):
    """Shuttle run tracker on the mean ankle/foot x position."""

    activity_key = "shuttlerun"
    SMOOTHING_WINDOW = 5

    MOVE_THRESHOLD_PX = 5.0
    CONFIRM_SAMPLES = 3

    def __init__(
        self,
        fps: float = 30.0,
        smoothing_window: Optional[int] = None,
        m_per_px: float = SHUTTLE_M_PER_PX,
    ):
        super().__init__(fps, smoothing_window)
        self.m_per_px = m_per_px
        self.run_count = 0
        self.status = ShuttleState.WAITING
        self.direction: Optional[Direction] = None
        self.start_x: Optional[float] = None
        self.positions: List[float] = []

        self._direction_history: Deque[Direction] = deque(maxlen=self.CONFIRM_SAMPLES)
        self._last_x: Optional[float] = None

        logger.info(f"ShuttleRunTracker initialized: {fps} fps, window={self.smoother.capacity}")

    @property
    def current_status(self) -> ShuttleStatus:
        return ShuttleStatus(run_count=self.run_count, status=self.status)

    def _analyze(self, frame: Frame) -> Optional[ShuttleStatus]:
        x = mean_coordinate(frame, LOWER_BODY, "x")
        if x is None:
            return self._skip(skip_reason(frame, LOWER_BODY), frame)
        return self.update(x, frame.timestamp)

    def update(self, x: float, timestamp: float) -> ShuttleStatus:
        """Push one raw x position (pixels) and return the updated status."""
        self._admit(timestamp)
        smoothed = self.smoother.push(x)

        if self._last_x is not None:
            delta = smoothed - self._last_x
            if delta > self.MOVE_THRESHOLD_PX:
                self._direction_history.append(Direction.FORWARD)
            elif delta < -self.MOVE_THRESHOLD_PX:
                self._direction_history.append(Direction.BACKWARD)

            confirmed = self._confirmed_direction()
            if confirmed is not None:
                self._apply_direction(confirmed, smoothed, timestamp)

        self._last_x = smoothed
        self.positions.append(smoothed)
        return self.current_status

    def _confirmed_direction(self) -> Optional[Direction]:
        """Direction shared by every entry of a full history, else None."""
        if len(self._direction_history) < self.CONFIRM_SAMPLES:
            return None
        first = self._direction_history[0]
        if all(d == first for d in self._direction_history):
            return first
        return None

    def _apply_direction(self, confirmed: Direction, x: float, timestamp: float):
        if self.start_x is None:
            self.start_x = x
            self.direction = confirmed
            self.status = (
                ShuttleState.RUNNING_TOWARDS if confirmed == Direction.FORWARD
                else ShuttleState.RETURNING
            )
            logger.info(f"Shuttle heading set at {timestamp:.2f}s: {confirmed.value}")
            return

        if confirmed == self.direction:
            return

        self.direction = confirmed
        if confirmed == Direction.BACKWARD:
            self.run_count += 1
            self.status = ShuttleState.RETURNING
            logger.info(f"Shuttle run #{self.run_count} turned at {timestamp:.2f}s")
        else:
            self.status = ShuttleState.RUNNING_TOWARDS

    def summarize(self) -> ShuttleSummary:
        return summarize_shuttle(self.run_count, self.positions, self.m_per_px)
