"""
Per-frame outputs of the activity detectors.

Each activity emits exactly one kind of output:
- push-up / pull-up / sit-up: RepEvent (on phase closure)
- vertical jump: JumpEvent (on landing)
- shuttle run: ShuttleStatus (every valid frame)
- sit-and-reach: ReachSample (every valid frame)
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class RepEvent:
    """A completed repetition."""
    sequence_number: int
    phase_start_time: float
    phase_end_time: float
    duration_sec: float
    extremum_angle: float
    is_correct: Optional[bool] = None  # None = activity doesn't classify form
    angle_change: Optional[float] = None  # Sit-ups only

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class JumpEvent:
    """A completed jump, finalized at landing."""
    sequence_number: int
    takeoff_time: float
    landing_time: float
    height_px: float
    air_time_sec: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ShuttleState(str, Enum):
    """Shuttle run status labels shown to the athlete."""
    WAITING = "Waiting"
    RUNNING_TOWARDS = "Running Towards"
    RETURNING = "Returning"


@dataclass(frozen=True)
class ShuttleStatus:
    """Current shuttle run progress."""
    run_count: int
    status: ShuttleState

    def to_dict(self) -> Dict[str, Any]:
        return {"run_count": self.run_count, "status": self.status.value}


@dataclass(frozen=True)
class ReachSample:
    """One point of the sit-and-reach series."""
    time_s: float
    reach_px: float
    reach_m: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
