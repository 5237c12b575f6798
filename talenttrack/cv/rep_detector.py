"""
Rep counting for push-ups, pull-ups and sit-ups.

All three are two-phase oscillators driven by a smoothed elbow angle:

1. PUSH-UP: UP -> DOWN at <= 75 deg, DOWN -> UP at >= 110 deg. The gap
   between the two thresholds is a hysteresis band, so an angle hovering
   near one threshold can't flap the phase.
2. PULL-UP: WAITING -> UP when the head rises above its starting height,
   UP -> WAITING when the arms are extended (> 160 deg) and the head is
   back at or below the start.
3. SIT-UP: swing detector. A drop of >= 15 deg from the last extreme starts
   a rep, a rise of >= 15 deg from the new extreme completes it.

A rep is recorded only when its phase closes. A phase still open when the
session ends is discarded.
"""

import logging
from enum import Enum
from typing import List, Optional, Sequence

from talenttrack.cv.base import ActivityDetector
from talenttrack.cv.events import RepEvent
from talenttrack.cv.geometry import average_joint_angle, skip_reason
from talenttrack.cv.landmarks import Frame, JointIndex, LEFT_ARM, RIGHT_ARM
from talenttrack.cv.errors import SkipReason
from talenttrack.cv.summarizer import (
    PullupSummary,
    PushupSummary,
    SitupSummary,
    summarize_pullups,
    summarize_pushups,
    summarize_situps,
)

logger = logging.getLogger(__name__)

ARM_JOINTS = tuple(LEFT_ARM) + tuple(RIGHT_ARM)


class RepPhase(Enum):
    """Phases of a rep cycle."""
    UP = "up"
    DOWN = "down"
    WAITING = "waiting"


class PushupDetector(ActivityDetector):
    """
    Push-up detector.

    A rep is correct when the dip reached full depth (<= 75 deg) and lasted
    at least 0.2 s. Brief dips are still recorded, as incorrect reps.
    """

    activity_key = "pushups"
    SMOOTHING_WINDOW = 3

    DOWN_ANGLE = 75.0
    UP_ANGLE = 110.0
    MIN_DIP_DURATION = 0.2

    def __init__(self, fps: float = 30.0, smoothing_window: Optional[int] = None):
        super().__init__(fps, smoothing_window)
        self.phase = RepPhase.UP
        self.reps: List[RepEvent] = []

        self._dip_start_time: Optional[float] = None
        self._dip_min_angle: Optional[float] = None

        logger.info(f"PushupDetector initialized: {fps} fps, window={self.smoother.capacity}")

    @property
    def ledger(self) -> Sequence[RepEvent]:
        return tuple(self.reps)

    def _analyze(self, frame: Frame) -> Optional[RepEvent]:
        elbow_angle = average_joint_angle(frame, LEFT_ARM, RIGHT_ARM)
        if elbow_angle is None:
            return self._skip(skip_reason(frame, ARM_JOINTS), frame)
        return self.update(elbow_angle, frame.timestamp)

    def update(self, elbow_angle: float, timestamp: float) -> Optional[RepEvent]:
        """Push one raw elbow angle sample and advance the state machine."""
        self._admit(timestamp)
        smoothed = self.smoother.push(elbow_angle)
        completed = None

        if self.phase == RepPhase.UP and smoothed <= self.DOWN_ANGLE:
            self.phase = RepPhase.DOWN
            self._dip_start_time = timestamp
            self._dip_min_angle = smoothed
        elif self.phase == RepPhase.DOWN and smoothed >= self.UP_ANGLE:
            completed = self._complete_rep(timestamp)

        if self.phase == RepPhase.DOWN and smoothed < self._dip_min_angle:
            self._dip_min_angle = smoothed

        return completed

    def _complete_rep(self, timestamp: float) -> RepEvent:
        duration = timestamp - self._dip_start_time
        is_correct = self._dip_min_angle <= self.DOWN_ANGLE and duration >= self.MIN_DIP_DURATION

        rep = RepEvent(
            sequence_number=len(self.reps) + 1,
            phase_start_time=self._dip_start_time,
            phase_end_time=timestamp,
            duration_sec=duration,
            extremum_angle=self._dip_min_angle,
            is_correct=is_correct,
        )
        self.reps.append(rep)
        logger.info(f"Push-up #{rep.sequence_number}: min={rep.extremum_angle:.1f}, "
                    f"dip={duration:.2f}s, correct={is_correct}")

        self.phase = RepPhase.UP
        self._dip_start_time = None
        self._dip_min_angle = None
        return rep

    def summarize(self) -> PushupSummary:
        return summarize_pushups(self.reps)


class PullupDetector(ActivityDetector):
    """
    Pull-up detector.

    The head baseline is the nose height in the first frame where the nose
    is visible. It is never re-captured, so a camera shift mid-session
    degrades accuracy.

    A rep's extremum_angle is the smallest smoothed elbow angle seen while
    UP (the top of the pull), not the angle at the frame that closes it.
    """

    activity_key = "pullups"
    SMOOTHING_WINDOW = 3

    BOTTOM_ANGLE = 160.0
    MIN_DIP_DURATION = 0.1

    def __init__(self, fps: float = 30.0, smoothing_window: Optional[int] = None):
        super().__init__(fps, smoothing_window)
        self.phase = RepPhase.WAITING
        self.reps: List[RepEvent] = []
        self.baseline_head_y: Optional[float] = None

        self._dip_start_time: Optional[float] = None
        self._dip_min_angle: Optional[float] = None

        logger.info(f"PullupDetector initialized: {fps} fps, window={self.smoother.capacity}")

    @property
    def ledger(self) -> Sequence[RepEvent]:
        return tuple(self.reps)

    def _analyze(self, frame: Frame) -> Optional[RepEvent]:
        nose = frame.get(JointIndex.NOSE)
        head_y = nose.y * frame.height if nose is not None else None
        if head_y is not None:
            self._capture_baseline(head_y, frame.timestamp)

        elbow_angle = average_joint_angle(frame, LEFT_ARM, RIGHT_ARM)
        if elbow_angle is None:
            return self._skip(skip_reason(frame, ARM_JOINTS), frame)
        if head_y is None:
            return self._skip(SkipReason.MISSING_LANDMARK, frame)

        return self.update(elbow_angle, head_y, frame.timestamp)

    def update(self, elbow_angle: float, head_y: float, timestamp: float) -> Optional[RepEvent]:
        """Push one elbow angle / head height pair and advance the state machine."""
        self._admit(timestamp)
        self._capture_baseline(head_y, timestamp)
        smoothed = self.smoother.push(elbow_angle)
        completed = None

        if self.phase == RepPhase.WAITING and head_y < self.baseline_head_y:
            self.phase = RepPhase.UP
            self._dip_start_time = timestamp
            self._dip_min_angle = smoothed
        elif (
            self.phase == RepPhase.UP
            and smoothed > self.BOTTOM_ANGLE
            and head_y >= self.baseline_head_y
        ):
            duration = timestamp - self._dip_start_time
            if duration >= self.MIN_DIP_DURATION:
                completed = self._complete_rep(timestamp, duration)

        if self.phase == RepPhase.UP and smoothed < self._dip_min_angle:
            self._dip_min_angle = smoothed

        return completed

    def _capture_baseline(self, head_y: float, timestamp: float):
        if self.baseline_head_y is None:
            self.baseline_head_y = head_y
            logger.info(f"Pull-up head baseline captured at {timestamp:.2f}s: y={head_y:.1f}px")

    def _complete_rep(self, timestamp: float, duration: float) -> RepEvent:
        rep = RepEvent(
            sequence_number=len(self.reps) + 1,
            phase_start_time=self._dip_start_time,
            phase_end_time=timestamp,
            duration_sec=duration,
            extremum_angle=self._dip_min_angle,
        )
        self.reps.append(rep)
        logger.info(f"Pull-up #{rep.sequence_number}: dip={duration:.2f}s, "
                    f"min elbow={rep.extremum_angle:.1f}")

        self.phase = RepPhase.WAITING
        self._dip_start_time = None
        self._dip_min_angle = None
        return rep

    def summarize(self) -> PullupSummary:
        return summarize_pullups(self.reps)


class SitupDetector(ActivityDetector):
    """
    Sit-up detector.

    Uses the elbow angle as a proxy for torso flexion. Count-only: reps are
    not classified as correct or incorrect.
    """

    activity_key = "situps"
    SMOOTHING_WINDOW = 5

    MIN_ANGLE_CHANGE = 15.0

    def __init__(self, fps: float = 30.0, smoothing_window: Optional[int] = None):
        super().__init__(fps, smoothing_window)
        self.phase = RepPhase.UP
        self.reps: List[RepEvent] = []

        # Running max while UP, running min while DOWN
        self._last_extreme: Optional[float] = None
        self._dip_start_time: Optional[float] = None

        logger.info(f"SitupDetector initialized: {fps} fps, window={self.smoother.capacity}")

    @property
    def ledger(self) -> Sequence[RepEvent]:
        return tuple(self.reps)

    def _analyze(self, frame: Frame) -> Optional[RepEvent]:
        angle = average_joint_angle(frame, LEFT_ARM, RIGHT_ARM)
        if angle is None:
            return self._skip(skip_reason(frame, ARM_JOINTS), frame)
        return self.update(angle, frame.timestamp)

    def update(self, angle: float, timestamp: float) -> Optional[RepEvent]:
        """Push one raw angle sample and advance the state machine."""
        self._admit(timestamp)
        smoothed = self.smoother.push(angle)

        if self._last_extreme is None:
            self._last_extreme = smoothed
            return None

        if self.phase == RepPhase.UP:
            if smoothed > self._last_extreme:
                self._last_extreme = smoothed
            elif self._last_extreme - smoothed >= self.MIN_ANGLE_CHANGE:
                self.phase = RepPhase.DOWN
                self._dip_start_time = timestamp
                self._last_extreme = smoothed
            return None

        if smoothed < self._last_extreme:
            self._last_extreme = smoothed
            return None
        if smoothed - self._last_extreme >= self.MIN_ANGLE_CHANGE:
            return self._complete_rep(smoothed, timestamp)
        return None

    def _complete_rep(self, smoothed: float, timestamp: float) -> RepEvent:
        rep = RepEvent(
            sequence_number=len(self.reps) + 1,
            phase_start_time=self._dip_start_time,
            phase_end_time=timestamp,
            duration_sec=timestamp - self._dip_start_time,
            extremum_angle=self._last_extreme,
            angle_change=smoothed - self._last_extreme,
        )
        self.reps.append(rep)
        logger.info(f"Sit-up #{rep.sequence_number}: swing={rep.angle_change:.1f} deg")

        self.phase = RepPhase.UP
        self._last_extreme = smoothed
        self._dip_start_time = None
        return rep

    def summarize(self) -> SitupSummary:
        return summarize_situps(self.reps)
