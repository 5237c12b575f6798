"""
Sit-and-reach flexibility tracking.

There is no phase machine here: the deliverable is the best reach in the
session, so every frame produces a sample of the dense series and updates
the running maximum.
"""

import logging
from typing import List, Optional, Sequence

from talenttrack.cv.base import ActivityDetector
from talenttrack.cv.events import ReachSample
from talenttrack.cv.geometry import horizontal_distance, midpoint, skip_reason
from talenttrack.cv.landmarks import FEET, Frame, WRISTS
from talenttrack.cv.summarizer import REACH_M_PER_PX, SitReachSummary, summarize_sit_reach

logger = logging.getLogger(__name__)


class SitReachTracker(ActivityDetector):
    """Tracks hand-past-feet horizontal reach."""

    activity_key = "sitreach"
    SMOOTHING_WINDOW = 5

    def __init__(
        self,
        fps: float = 30.0,
        smoothing_window: Optional[int] = None,
        m_per_px: float = REACH_M_PER_PX,
    ):
        super().__init__(fps, smoothing_window)
        self.m_per_px = m_per_px
        self.max_reach_px = 0.0
        self.time_of_max = 0.0
        self.samples: List[ReachSample] = []

        logger.info(f"SitReachTracker initialized: {fps} fps, window={self.smoother.capacity}")

    @property
    def ledger(self) -> Sequence[ReachSample]:
        return tuple(self.samples)

    def _analyze(self, frame: Frame) -> Optional[ReachSample]:
        wrists = [frame.get(i) for i in WRISTS]
        feet = [frame.get(i) for i in FEET]
        if None in wrists or None in feet:
            return self._skip(skip_reason(frame, WRISTS + FEET), frame)

        hand = midpoint(*wrists, frame.width, frame.height)
        foot = midpoint(*feet, frame.width, frame.height)
        return self.update(horizontal_distance(foot, hand), frame.timestamp)

    def update(self, reach_px: float, timestamp: float) -> ReachSample:
        """Push one raw reach distance (pixels) and record the smoothed sample."""
        self._admit(timestamp)
        smoothed = self.smoother.push(reach_px)

        if smoothed > self.max_reach_px:
            self.max_reach_px = smoothed
            self.time_of_max = timestamp

        sample = ReachSample(
            time_s=timestamp,
            reach_px=smoothed,
            reach_m=smoothed * self.m_per_px,
        )
        self.samples.append(sample)
        return sample

    def summarize(self) -> SitReachSummary:
        return summarize_sit_reach(self.max_reach_px, self.time_of_max, self.m_per_px)
