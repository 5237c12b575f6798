"""
End-of-session summaries.

One pure reducer per activity folds the final detector state (ledger and/or
running extrema) into a fixed-shape record. Reducers never mutate their
input, so summarizing the same state twice gives equal records. An empty
session yields a record of zeros.

Pixel distances are converted with fixed scale factors. There is no camera
calibration behind them: treat converted values as rough estimates.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Sequence

from talenttrack.cv.events import JumpEvent, RepEvent

JUMP_CM_PER_PX = 0.0264
SHUTTLE_M_PER_PX = 0.01
REACH_M_PER_PX = 0.01


def _mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


@dataclass(frozen=True)
class SummaryRecord:
    """Base for per-activity summaries."""

    @property
    def events_completed(self) -> int:
        """Completed reps/jumps/legs, for session-level reporting."""
        return 0

    @property
    def events_flagged(self) -> int:
        """Events classified as incorrect."""
        return 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PushupSummary(SummaryRecord):
    count: int = 0
    good_reps: int = 0
    bad_reps: int = 0
    avg_min_elbow_angle: float = 0.0
    avg_dip_duration: float = 0.0

    @property
    def events_completed(self) -> int:
        return self.count

    @property
    def events_flagged(self) -> int:
        return self.bad_reps


@dataclass(frozen=True)
class PullupSummary(SummaryRecord):
    count: int = 0
    avg_dip_duration: float = 0.0

    @property
    def events_completed(self) -> int:
        return self.count


@dataclass(frozen=True)
class SitupSummary(SummaryRecord):
    count: int = 0
    avg_angle_change: float = 0.0

    @property
    def events_completed(self) -> int:
        return self.count


@dataclass(frozen=True)
class VerticalJumpSummary(SummaryRecord):
    count: int = 0
    max_height_cm: float = 0.0
    avg_air_time: float = 0.0

    @property
    def events_completed(self) -> int:
        return self.count


@dataclass(frozen=True)
class ShuttleSummary(SummaryRecord):
    runs: int = 0
    distance_m: float = 0.0

    @property
    def events_completed(self) -> int:
        return self.runs


@dataclass(frozen=True)
class SitReachSummary(SummaryRecord):
    max_reach_m: float = 0.0
    time_of_max: float = 0.0


def summarize_pushups(reps: Sequence[RepEvent]) -> PushupSummary:
    if not reps:
        return PushupSummary()
    good = sum(1 for r in reps if r.is_correct)
    return PushupSummary(
        count=len(reps),
        good_reps=good,
        bad_reps=len(reps) - good,
        avg_min_elbow_angle=round(_mean([r.extremum_angle for r in reps]), 2),
        avg_dip_duration=round(_mean([r.duration_sec for r in reps]), 2),
    )


def summarize_pullups(reps: Sequence[RepEvent]) -> PullupSummary:
    if not reps:
        return PullupSummary()
    return PullupSummary(
        count=len(reps),
        avg_dip_duration=round(_mean([r.duration_sec for r in reps]), 2),
    )


def summarize_situps(reps: Sequence[RepEvent]) -> SitupSummary:
    if not reps:
        return SitupSummary()
    return SitupSummary(
        count=len(reps),
        avg_angle_change=round(_mean([r.angle_change or 0.0 for r in reps]), 2),
    )


def summarize_vertical_jump(
    jumps: Sequence[JumpEvent],
    cm_per_px: float = JUMP_CM_PER_PX,
) -> VerticalJumpSummary:
    if not jumps:
        return VerticalJumpSummary()
    max_height_px = max(j.height_px for j in jumps)
    return VerticalJumpSummary(
        count=len(jumps),
        max_height_cm=round(max_height_px * cm_per_px, 2),
        avg_air_time=round(_mean([j.air_time_sec for j in jumps]), 2),
    )


def summarize_shuttle(
    run_count: int,
    positions: Sequence[float],
    m_per_px: float = SHUTTLE_M_PER_PX,
) -> ShuttleSummary:
    if not positions:
        return ShuttleSummary()
    spread_px = max(positions) - min(positions)
    return ShuttleSummary(
        runs=run_count,
        distance_m=round(spread_px * m_per_px, 2),
    )


def summarize_sit_reach(
    max_reach_px: float,
    time_of_max: float,
    m_per_px: float = REACH_M_PER_PX,
) -> SitReachSummary:
    return SitReachSummary(
        max_reach_m=round(max_reach_px * m_per_px, 2),
        time_of_max=round(time_of_max, 2),
    )
