"""
Motion analysis pipeline for fitness assessment sessions.

PIPELINE COMPONENTS (per frame, one direction):
1. Landmarks: Frame / Landmark containers, fixed MediaPipe joint indices
2. Geometry: Joint angles and pixel distances from normalized landmarks
3. MovingAverage: Fixed-window smoothing per channel
4. Detectors: One state machine per activity
   - PushupDetector, PullupDetector, SitupDetector (rep counting)
   - VerticalJumpDetector (hip height baseline)
   - ShuttleRunTracker (confirmed direction reversals)
   - SitReachTracker (running maximum reach)
5. Summarizer: Pure reducers from final detector state to summary records
6. ActivitySession: Session lifecycle, frame ordering, stop/cancel

Usage:
    from talenttrack.cv import ActivitySession

    session = ActivitySession("pushups", fps=30.0)
    for frame in frames:
        event = session.process_frame(frame)
    result = session.stop()
"""

from talenttrack.cv.errors import (
    SkipReason, TalentTrackError, InvalidSessionUse, FrameOrderError, SessionClosedError
)
from talenttrack.cv.landmarks import Landmark, Frame, JointIndex
from talenttrack.cv.geometry import (
    joint_angle, average_joint_angle, mean_coordinate, midpoint,
    horizontal_distance, euclidean_distance
)
from talenttrack.cv.smoothing import MovingAverage
from talenttrack.cv.events import RepEvent, JumpEvent, ShuttleStatus, ShuttleState, ReachSample
from talenttrack.cv.base import ActivityDetector
from talenttrack.cv.rep_detector import PushupDetector, PullupDetector, SitupDetector, RepPhase
from talenttrack.cv.jump_detector import VerticalJumpDetector, JumpPhase
from talenttrack.cv.shuttle_tracker import ShuttleRunTracker, Direction
from talenttrack.cv.reach_tracker import SitReachTracker
from talenttrack.cv.summarizer import (
    SummaryRecord, PushupSummary, PullupSummary, SitupSummary,
    VerticalJumpSummary, ShuttleSummary, SitReachSummary,
    summarize_pushups, summarize_pullups, summarize_situps,
    summarize_vertical_jump, summarize_shuttle, summarize_sit_reach,
)
from talenttrack.cv.feedback import FeedbackCue, cue_for_event
from talenttrack.cv.session import (
    ActivityType, ActivitySession, SessionResult, create_activity_detector, run_session
)

__all__ = [
    # Errors
    "SkipReason",
    "TalentTrackError",
    "InvalidSessionUse",
    "FrameOrderError",
    "SessionClosedError",

    # Input
    "Landmark",
    "Frame",
    "JointIndex",

    # Geometry
    "joint_angle",
    "average_joint_angle",
    "mean_coordinate",
    "midpoint",
    "horizontal_distance",
    "euclidean_distance",

    # Smoothing
    "MovingAverage",

    # Events
    "RepEvent",
    "JumpEvent",
    "ShuttleStatus",
    "ShuttleState",
    "ReachSample",

    # Detectors
    "ActivityDetector",
    "PushupDetector",
    "PullupDetector",
    "SitupDetector",
    "RepPhase",
    "VerticalJumpDetector",
    "JumpPhase",
    "ShuttleRunTracker",
    "Direction",
    "SitReachTracker",

    # Summaries
    "SummaryRecord",
    "PushupSummary",
    "PullupSummary",
    "SitupSummary",
    "VerticalJumpSummary",
    "ShuttleSummary",
    "SitReachSummary",
    "summarize_pushups",
    "summarize_pullups",
    "summarize_situps",
    "summarize_vertical_jump",
    "summarize_shuttle",
    "summarize_sit_reach",

    # Feedback
    "FeedbackCue",
    "cue_for_event",

    # Sessions
    "ActivityType",
    "ActivitySession",
    "SessionResult",
    "create_activity_detector",
    "run_session",
]
