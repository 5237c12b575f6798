"""Common frame-admission and skip bookkeeping for activity detectors."""

import logging
from typing import Any, Dict, Optional, Sequence

from talenttrack.cv.errors import FrameOrderError, SkipReason
from talenttrack.cv.landmarks import Frame
from talenttrack.cv.smoothing import MovingAverage
from talenttrack.cv.summarizer import SummaryRecord

logger = logging.getLogger(__name__)


class ActivityDetector:
    """
    Base class for the per-activity state machines.

    A detector is the whole state of one session: smoothing buffer, phase,
    in-progress extrema and the ledger of completed events. It consumes one
    frame per call and returns at most one output.

    Subclasses implement _analyze() (frame -> channel values -> update())
    and summarize().
    """

    activity_key = ""
    SMOOTHING_WINDOW = 5

    def __init__(self, fps: float = 30.0, smoothing_window: Optional[int] = None):
        """
        Args:
            fps: Sampling rate of the incoming frames
            smoothing_window: Override the activity's moving-average window
        """
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.fps = fps
        if smoothing_window is None:
            smoothing_window = self.SMOOTHING_WINDOW
        self.smoother = MovingAverage(smoothing_window)

        self.frames_seen = 0
        self.skip_counts: Dict[SkipReason, int] = {reason: 0 for reason in SkipReason}
        self._last_timestamp: Optional[float] = None

    def process_frame(self, frame: Frame) -> Optional[Any]:
        """
        Analyze one frame.

        Returns:
            The activity's output for this frame, or None
        """
        self._admit(frame.timestamp)
        self.frames_seen += 1
        if frame.is_empty:
            return self._skip(SkipReason.MISSING_LANDMARK, frame)
        return self._analyze(frame)

    def _analyze(self, frame: Frame) -> Optional[Any]:
        raise NotImplementedError

    def summarize(self) -> SummaryRecord:
        raise NotImplementedError

    @property
    def ledger(self) -> Sequence[Any]:
        """Completed events, oldest first."""
        return ()

    @property
    def frames_skipped(self) -> int:
        return sum(self.skip_counts.values())

    @property
    def last_timestamp(self) -> Optional[float]:
        return self._last_timestamp

    def _admit(self, timestamp: float):
        """Reject timestamps that go backwards; equal timestamps are allowed."""
        if self._last_timestamp is not None and timestamp < self._last_timestamp:
            raise FrameOrderError(timestamp, self._last_timestamp)
        self._last_timestamp = timestamp

    def _skip(self, reason: SkipReason, frame: Frame) -> None:
        self.skip_counts[reason] += 1
        logger.debug(f"{self.activity_key}: frame at {frame.timestamp:.3f}s skipped ({reason.value})")
        return None
