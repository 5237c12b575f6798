"""
Error taxonomy for the motion engine.

Routine pose problems (a joint not detected, a collapsed limb vector) are
NOT exceptions: the geometry kernel returns None and the detector skips the
frame for that channel. SkipReason names those cases for logging and
session bookkeeping.

Misusing a session (feeding frames out of order, feeding a stopped session)
breaks the smoothing and hysteresis state, so it raises.
"""

from enum import Enum


class SkipReason(Enum):
    """Why a frame contributed nothing to a channel."""
    MISSING_LANDMARK = "missing_landmark"
    DEGENERATE_GEOMETRY = "degenerate_geometry"


class TalentTrackError(Exception):
    """Base class for engine errors."""


class InvalidSessionUse(TalentTrackError):
    """A session was driven in a way that breaks its frame-order contract."""


class FrameOrderError(InvalidSessionUse):
    """Frame timestamp went backwards."""

    def __init__(self, timestamp: float, previous: float):
        self.timestamp = timestamp
        self.previous = previous
        super().__init__(
            f"Frame timestamp {timestamp:.3f}s is earlier than previous frame at {previous:.3f}s"
        )


class SessionClosedError(InvalidSessionUse):
    """Frame fed to a session that was already stopped and summarized."""
