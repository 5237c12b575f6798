"""Live session API endpoints."""

import uuid
import logging
from collections import deque
from typing import Any, Deque, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from talenttrack.config import get_settings
from talenttrack.cv.errors import InvalidSessionUse
from talenttrack.cv.events import JumpEvent, ReachSample, RepEvent, ShuttleStatus
from talenttrack.cv.feedback import cue_for_event
from talenttrack.cv.landmarks import Frame
from talenttrack.cv.session import ActivitySession, SessionResult
from talenttrack.schemas.session import (
    SessionCreate,
    SessionCreated,
    FrameIn,
    FeedbackOut,
    FrameOutput,
    SessionResultResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

EVENT_TYPES = (
    (RepEvent, "rep"),
    (JumpEvent, "jump"),
    (ShuttleStatus, "shuttle_status"),
    (ReachSample, "reach_sample"),
)


class SessionRegistry:
    """
    In-memory live sessions for this process.

    Stopped sessions stay registered (so late frames get a clear 409) until
    deleted or until more than retain_stopped newer sessions have stopped;
    only active ones count towards the limit.
    """

    def __init__(self, max_active: int, retain_stopped: int = 100):
        self.max_active = max_active
        self.retain_stopped = retain_stopped
        self._sessions: Dict[str, ActivitySession] = {}
        self._stopped: Deque[str] = deque()

    def create(self, activity: str, fps: Optional[float]) -> str:
        if self.active_count() >= self.max_active:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Too many live sessions"
            )
        session_id = str(uuid.uuid4())
        self._sessions[session_id] = ActivitySession(activity, fps=fps)
        return session_id

    def get(self, session_id: str) -> ActivitySession:
        session = self._sessions.get(session_id)
        if session is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Session not found"
            )
        return session

    def stop(self, session_id: str) -> SessionResult:
        """Stop a session and keep it for late requests until it ages out."""
        result = self.get(session_id).stop()
        self._stopped.append(session_id)
        while len(self._stopped) > self.retain_stopped:
            expired = self._stopped.popleft()
            self._sessions.pop(expired, None)
            logger.debug(f"Stopped session {expired} evicted")
        return result

    def remove(self, session_id: str):
        self.get(session_id)
        del self._sessions[session_id]
        if session_id in self._stopped:
            self._stopped.remove(session_id)

    def active_count(self) -> int:
        return sum(1 for s in self._sessions.values() if s.is_active)

    def clear(self):
        self._sessions.clear()
        self._stopped.clear()

    def __len__(self) -> int:
        return len(self._sessions)


_registry: Optional[SessionRegistry] = None


def get_registry() -> SessionRegistry:
    """Dependency for the process-wide session registry."""
    global _registry
    if _registry is None:
        settings = get_settings()
        _registry = SessionRegistry(settings.max_live_sessions, settings.retain_stopped_sessions)
    return _registry


def _event_type(event: Any) -> Optional[str]:
    for cls, name in EVENT_TYPES:
        if isinstance(event, cls):
            return name
    return None


@router.post("", response_model=SessionCreated, status_code=status.HTTP_201_CREATED)
async def start_session(
    body: SessionCreate,
    registry: SessionRegistry = Depends(get_registry)
):
    """Start a live session for one activity."""
    session_id = registry.create(body.activity, body.fps)
    session = registry.get(session_id)
    logger.info(f"Live session {session_id} created ({session.activity.value})")
    return SessionCreated(session_id=session_id, activity=session.activity.value, fps=session.fps)


@router.post("/{session_id}/frames", response_model=FrameOutput)
async def submit_frame(
    session_id: str,
    body: FrameIn,
    registry: SessionRegistry = Depends(get_registry)
):
    """
    Feed one frame to a session.

    Frames must arrive in timestamp order. Handlers run on the event loop
    without awaiting, so frames of one session are never processed
    concurrently.
    """
    session = registry.get(session_id)
    frame = Frame.from_dicts(
        [lm.model_dump() if lm is not None else None for lm in body.landmarks],
        width=body.width,
        height=body.height,
        timestamp=body.timestamp,
        min_visibility=get_settings().min_landmark_visibility,
    )

    try:
        event = session.process_frame(frame)
    except InvalidSessionUse as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    if event is None:
        return FrameOutput()

    cue = cue_for_event(session.activity.value, event)
    return FrameOutput(
        event_type=_event_type(event),
        event=event.to_dict(),
        feedback=FeedbackOut(text=cue.text, tone=cue.tone) if cue else None,
    )


@router.post("/{session_id}/stop", response_model=SessionResultResponse)
async def stop_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_registry)
):
    """Stop (or cancel) a session and return its summary."""
    try:
        result = registry.stop(session_id)
    except InvalidSessionUse as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return SessionResultResponse(**result.to_dict())


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_registry)
):
    """Forget a session. An active session is discarded without a summary."""
    registry.remove(session_id)
