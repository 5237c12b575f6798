"""Live session schemas."""

from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field, field_validator

from talenttrack.cv.session import ActivityType


class SessionCreate(BaseModel):
    """Schema for starting a live session."""
    activity: str = Field(..., description="pushups, pullups, situps, verticaljump, shuttlerun or sitreach")
    fps: Optional[float] = Field(None, gt=0, description="Sampling rate of the frames that will be sent")

    @field_validator("activity")
    @classmethod
    def validate_activity(cls, v: str) -> str:
        valid = ActivityType.all()
        if v not in valid:
            raise ValueError(f"activity must be one of: {valid}")
        return v


class SessionCreated(BaseModel):
    session_id: str
    activity: str
    fps: float


class LandmarkIn(BaseModel):
    """Normalized landmark as produced by the pose model."""
    x: float
    y: float
    z: Optional[float] = None
    visibility: Optional[float] = Field(None, ge=0.0, le=1.0)


class FrameIn(BaseModel):
    """One pose sample."""
    landmarks: List[Optional[LandmarkIn]]
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    timestamp: float = Field(..., ge=0, description="Seconds since session start")


class FeedbackOut(BaseModel):
    text: str
    tone: str


class FrameOutput(BaseModel):
    """Per-frame result. event is None when the frame produced nothing."""
    event_type: Optional[str] = None  # rep, jump, shuttle_status, reach_sample
    event: Optional[Dict[str, Any]] = None
    feedback: Optional[FeedbackOut] = None


class SessionResultResponse(BaseModel):
    """Schema for the end-of-session record."""
    activity: str
    summary: Dict[str, Any]
    sets_completed: int
    bad_sets: int
    posture: str
    duration_sec: float
    frames_processed: int
    frames_skipped: int
    skip_reasons: Dict[str, int] = Field(default_factory=dict)
