"""Pydantic schemas for API request/response models."""

from talenttrack.schemas.session import (
    SessionCreate,
    SessionCreated,
    LandmarkIn,
    FrameIn,
    FeedbackOut,
    FrameOutput,
    SessionResultResponse,
)

__all__ = [
    "SessionCreate",
    "SessionCreated",
    "LandmarkIn",
    "FrameIn",
    "FeedbackOut",
    "FrameOutput",
    "SessionResultResponse",
]
