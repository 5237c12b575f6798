"""
Pose landmark containers consumed by the activity detectors.

Landmarks arrive from an external pose model (MediaPipe Pose indexing,
33 points) with coordinates normalized to the frame. The joint indices
below are a contract with that model: every detector addresses joints by
these numbers.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional
from enum import IntEnum


DEFAULT_MIN_VISIBILITY = 0.5


class JointIndex(IntEnum):
    """MediaPipe Pose landmark indices used by the detectors."""
    NOSE = 0
    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12
    LEFT_ELBOW = 13
    RIGHT_ELBOW = 14
    LEFT_WRIST = 15
    RIGHT_WRIST = 16
    LEFT_HIP = 23
    RIGHT_HIP = 24
    LEFT_KNEE = 25
    RIGHT_KNEE = 26
    LEFT_ANKLE = 27
    RIGHT_ANKLE = 28
    LEFT_HEEL = 29
    RIGHT_HEEL = 30
    LEFT_FOOT_INDEX = 31
    RIGHT_FOOT_INDEX = 32


# (shoulder, elbow, wrist) triplets
LEFT_ARM = (JointIndex.LEFT_SHOULDER, JointIndex.LEFT_ELBOW, JointIndex.LEFT_WRIST)
RIGHT_ARM = (JointIndex.RIGHT_SHOULDER, JointIndex.RIGHT_ELBOW, JointIndex.RIGHT_WRIST)

HIPS = (JointIndex.LEFT_HIP, JointIndex.RIGHT_HIP)
WRISTS = (JointIndex.LEFT_WRIST, JointIndex.RIGHT_WRIST)
FEET = (JointIndex.LEFT_FOOT_INDEX, JointIndex.RIGHT_FOOT_INDEX)
LOWER_BODY = (
    JointIndex.LEFT_ANKLE,
    JointIndex.RIGHT_ANKLE,
    JointIndex.LEFT_FOOT_INDEX,
    JointIndex.RIGHT_FOOT_INDEX,
)


@dataclass(frozen=True)
class Landmark:
    """Single normalized body landmark."""
    x: float  # Normalized x coordinate (0-1)
    y: float  # Normalized y coordinate (0-1)
    z: Optional[float] = None
    visibility: Optional[float] = None  # Confidence score (0-1), may be absent

    def is_usable(self, min_visibility: float = DEFAULT_MIN_VISIBILITY) -> bool:
        """A landmark without a visibility score is trusted."""
        return self.visibility is None or self.visibility >= min_visibility

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Landmark":
        return cls(
            x=float(data["x"]),
            y=float(data["y"]),
            z=data.get("z"),
            visibility=data.get("visibility"),
        )


@dataclass(frozen=True)
class Frame:
    """
    One pose sample: landmark list plus the frame geometry and timestamp.

    Landmarks are borrowed for the duration of one analysis call; detectors
    never keep references to them.
    """
    landmarks: List[Optional[Landmark]]
    width: float
    height: float
    timestamp: float
    min_visibility: float = DEFAULT_MIN_VISIBILITY
    frame_number: Optional[int] = field(default=None, compare=False)

    @classmethod
    def from_dicts(
        cls,
        points: Iterable[Optional[Dict[str, Any]]],
        width: float,
        height: float,
        timestamp: float,
        min_visibility: float = DEFAULT_MIN_VISIBILITY,
    ) -> "Frame":
        """Create a Frame from plain dicts (JSON payloads)."""
        landmarks = [Landmark.from_dict(p) if p is not None else None for p in points]
        return cls(
            landmarks=landmarks,
            width=width,
            height=height,
            timestamp=timestamp,
            min_visibility=min_visibility,
        )

    @classmethod
    def from_mediapipe(
        cls,
        pose_landmarks,
        width: float,
        height: float,
        timestamp: float,
        min_visibility: float = DEFAULT_MIN_VISIBILITY,
    ) -> "Frame":
        """Create a Frame from MediaPipe-style landmark objects (x/y/z/visibility attributes)."""
        landmarks = [
            Landmark(
                x=lm.x,
                y=lm.y,
                z=getattr(lm, "z", None),
                visibility=getattr(lm, "visibility", None),
            )
            for lm in (pose_landmarks or [])
        ]
        return cls(
            landmarks=landmarks,
            width=width,
            height=height,
            timestamp=timestamp,
            min_visibility=min_visibility,
        )

    @property
    def is_empty(self) -> bool:
        return len(self.landmarks) == 0

    def get(self, index: int) -> Optional[Landmark]:
        """Landmark at index, or None if absent or below usable confidence."""
        if not 0 <= index < len(self.landmarks):
            return None
        landmark = self.landmarks[index]
        if landmark is None or not landmark.is_usable(self.min_visibility):
            return None
        return landmark
