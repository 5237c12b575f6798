"""Short coaching cues shown to the athlete after each event."""

from dataclasses import dataclass
from typing import Any, Optional

from talenttrack.cv.events import JumpEvent, RepEvent, ShuttleStatus

GOOD_PUSHUP_CUES = ("Good rep!", "Perfect form!", "Keep it up!", "Excellent!", "Nice push-up!")
BAD_PUSHUP_CUES = ("Go lower!", "Keep your back straight!", "Full range of motion!", "Deeper!")

# Jumps below this are nudged to go higher
GOOD_JUMP_HEIGHT_PX = 50.0


@dataclass(frozen=True)
class FeedbackCue:
    text: str
    tone: str  # "good", "bad" or "neutral"


def _rotate(cues, sequence_number: int) -> str:
    return cues[(sequence_number - 1) % len(cues)]


def cue_for_event(activity_key: str, event: Any) -> Optional[FeedbackCue]:
    """Pick a cue for a detector output. None for outputs that don't warrant one."""
    if event is None:
        return None

    if isinstance(event, ShuttleStatus):
        return FeedbackCue(event.status.value, "neutral")

    if isinstance(event, JumpEvent):
        if event.height_px > GOOD_JUMP_HEIGHT_PX:
            return FeedbackCue("Nice jump!", "good")
        return FeedbackCue("Jump higher!", "bad")

    if isinstance(event, RepEvent):
        if activity_key == "pushups":
            if event.is_correct:
                return FeedbackCue(_rotate(GOOD_PUSHUP_CUES, event.sequence_number), "good")
            return FeedbackCue(_rotate(BAD_PUSHUP_CUES, event.sequence_number), "bad")
        if activity_key == "pullups":
            return FeedbackCue("Great pull-up!", "good")
        if activity_key == "situps":
            return FeedbackCue("Good sit-up!", "good")
        return FeedbackCue("Keep going!", "good")

    return None
