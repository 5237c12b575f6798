"""
Session driver: one activity detector per session, fed frame by frame.

Usage:
    session = ActivitySession("pushups", fps=30.0)
    for frame in frames:
        event = session.process_frame(frame)
        if event:
            print(event)
    result = session.stop()

Lifecycle:
1. Start: detector created with the session's sampling rate
2. Frames: strictly non-decreasing timestamps, processed one at a time
3. Stop (or cancel): summarize whatever state exists, release the
   detector. An unfinished rep/jump is dropped, not force-closed.

Frames fed after stop raise SessionClosedError.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Optional, Type, Union

from talenttrack.config import get_settings
from talenttrack.cv.base import ActivityDetector
from talenttrack.cv.errors import SessionClosedError
from talenttrack.cv.jump_detector import VerticalJumpDetector
from talenttrack.cv.landmarks import Frame
from talenttrack.cv.reach_tracker import SitReachTracker
from talenttrack.cv.rep_detector import PullupDetector, PushupDetector, SitupDetector
from talenttrack.cv.shuttle_tracker import ShuttleRunTracker
from talenttrack.cv.summarizer import SummaryRecord

logger = logging.getLogger(__name__)


class ActivityType(Enum):
    """Supported activities, keyed as the client app names them."""
    PUSHUPS = "pushups"
    PULLUPS = "pullups"
    SITUPS = "situps"
    VERTICAL_JUMP = "verticaljump"
    SHUTTLE_RUN = "shuttlerun"
    SIT_REACH = "sitreach"

    @classmethod
    def all(cls):
        return [a.value for a in cls]


DETECTORS: Dict[ActivityType, Type[ActivityDetector]] = {
    ActivityType.PUSHUPS: PushupDetector,
    ActivityType.PULLUPS: PullupDetector,
    ActivityType.SITUPS: SitupDetector,
    ActivityType.VERTICAL_JUMP: VerticalJumpDetector,
    ActivityType.SHUTTLE_RUN: ShuttleRunTracker,
    ActivityType.SIT_REACH: SitReachTracker,
}


def create_activity_detector(
    activity: Union[str, ActivityType],
    fps: float = 30.0,
) -> ActivityDetector:
    """
    Factory function to create the detector for an activity.

    Unit scale factors come from Settings.

    Raises:
        ValueError: Unknown activity or non-positive fps
    """
    activity = ActivityType(activity) if isinstance(activity, str) else activity
    settings = get_settings()

    if activity == ActivityType.VERTICAL_JUMP:
        return VerticalJumpDetector(fps, cm_per_px=settings.jump_cm_per_px)
    if activity == ActivityType.SHUTTLE_RUN:
        return ShuttleRunTracker(fps, m_per_px=settings.shuttle_m_per_px)
    if activity == ActivityType.SIT_REACH:
        return SitReachTracker(fps, m_per_px=settings.reach_m_per_px)
    return DETECTORS[activity](fps)


@dataclass
class SessionResult:
    """
    Final record of a session.

    sets_completed/bad_sets/posture condense the activity summary into the
    fields every activity screen shows.
    """
    activity: str
    summary: SummaryRecord
    sets_completed: int = 0
    bad_sets: int = 0
    posture: str = "Good"
    duration_sec: float = 0.0
    frames_processed: int = 0
    frames_skipped: int = 0
    skip_reasons: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "activity": self.activity,
            "summary": self.summary.to_dict(),
            "sets_completed": self.sets_completed,
            "bad_sets": self.bad_sets,
            "posture": self.posture,
            "duration_sec": round(self.duration_sec, 2),
            "frames_processed": self.frames_processed,
            "frames_skipped": self.frames_skipped,
            "skip_reasons": dict(self.skip_reasons),
        }


class ActivitySession:
    """
    Owns exactly one activity detector for the lifetime of a session.

    Args:
        activity: Activity key or ActivityType
        fps: Sampling rate of the incoming frames
        event_callback: Called with every non-None per-frame output
    """

    def __init__(
        self,
        activity: Union[str, ActivityType],
        fps: Optional[float] = None,
        event_callback: Optional[Callable[[Any], None]] = None,
    ):
        self.activity = ActivityType(activity) if isinstance(activity, str) else activity
        self.fps = fps if fps is not None else get_settings().default_fps
        self.event_callback = event_callback

        self._detector: Optional[ActivityDetector] = create_activity_detector(self.activity, self.fps)
        self._first_timestamp: Optional[float] = None
        self._result: Optional[SessionResult] = None

        logger.info(f"Session started: {self.activity.value}, {self.fps} fps")

    @property
    def is_active(self) -> bool:
        return self._detector is not None

    @property
    def detector(self) -> ActivityDetector:
        if self._detector is None:
            raise SessionClosedError(f"{self.activity.value} session already stopped")
        return self._detector

    @property
    def result(self) -> Optional[SessionResult]:
        return self._result

    def process_frame(self, frame: Frame) -> Optional[Any]:
        """
        Feed one frame to the session's detector.

        Returns:
            The detector output for this frame (RepEvent, JumpEvent,
            ShuttleStatus, ReachSample) or None

        Raises:
            SessionClosedError: Session was already stopped
            FrameOrderError: Timestamp earlier than the previous frame
        """
        detector = self.detector
        output = detector.process_frame(frame)

        if self._first_timestamp is None:
            self._first_timestamp = frame.timestamp

        if output is not None and self.event_callback is not None:
            self.event_callback(output)
        return output

    def stop(self) -> SessionResult:
        """
        Stop the session, summarize and release the detector.

        Works at any point, including before the first frame.
        """
        detector = self.detector
        summary = detector.summarize()

        duration = 0.0
        if self._first_timestamp is not None and detector.last_timestamp is not None:
            duration = detector.last_timestamp - self._first_timestamp

        bad_sets = summary.events_flagged
        self._result = SessionResult(
            activity=self.activity.value,
            summary=summary,
            sets_completed=summary.events_completed,
            bad_sets=bad_sets,
            posture="Bad" if bad_sets > 0 else "Good",
            duration_sec=duration,
            frames_processed=detector.frames_seen,
            frames_skipped=detector.frames_skipped,
            skip_reasons={
                reason.value: count for reason, count in detector.skip_counts.items() if count
            },
        )
        self._detector = None

        logger.info(f"Session stopped: {self.activity.value}, "
                    f"{self._result.sets_completed} completed, {self._result.bad_sets} flagged, "
                    f"{self._result.frames_processed} frames ({self._result.frames_skipped} skipped)")
        return self._result

    # Cancelling is the same operation as stopping: the partial state is summarized.
    cancel = stop


def run_session(
    activity: Union[str, ActivityType],
    frames: Iterable[Frame],
    fps: Optional[float] = None,
    event_callback: Optional[Callable[[Any], None]] = None,
) -> SessionResult:
    """Batch mode: run a whole recorded frame sequence through one session."""
    session = ActivitySession(activity, fps=fps, event_callback=event_callback)
    for frame in frames:
        session.process_frame(frame)
    return session.stop()
