"""
Geometry kernel: joint angles and distances in pixel space.

All inputs are normalized landmarks; they are de-normalized with the frame
width/height before any math so angles are not skewed by the aspect ratio.
Functions return None ("unavailable") instead of raising when a landmark
is missing or a vector collapses to zero length; callers skip the frame
for that channel.
"""

from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from talenttrack.cv.errors import SkipReason
from talenttrack.cv.landmarks import Frame, Landmark

# Vectors shorter than this (pixels) have no usable direction
MIN_VECTOR_LENGTH_PX = 1e-6


def to_pixel(landmark: Landmark, width: float, height: float) -> np.ndarray:
    """Convert normalized coordinates to pixel coordinates [x, y]."""
    return np.array([landmark.x * width, landmark.y * height], dtype=float)


def joint_angle(
    a: Optional[Landmark],
    b: Optional[Landmark],
    c: Optional[Landmark],
    width: float,
    height: float,
) -> Optional[float]:
    """
    Interior angle at vertex B formed by A-B-C, in degrees [0, 180].

    Returns None if any landmark is missing or either limb vector is
    degenerate.
    """
    if a is None or b is None or c is None:
        return None

    pa = to_pixel(a, width, height)
    pb = to_pixel(b, width, height)
    pc = to_pixel(c, width, height)

    ba = pa - pb
    bc = pc - pb
    mag_ba = np.linalg.norm(ba)
    mag_bc = np.linalg.norm(bc)
    if mag_ba < MIN_VECTOR_LENGTH_PX or mag_bc < MIN_VECTOR_LENGTH_PX:
        return None

    cos_angle = np.clip(np.dot(ba, bc) / (mag_ba * mag_bc), -1.0, 1.0)
    return float(np.degrees(np.arccos(cos_angle)))


def frame_joint_angle(frame: Frame, triplet: Sequence[int]) -> Optional[float]:
    """Angle for a (A, vertex, C) index triplet of a frame."""
    a, b, c = (frame.get(i) for i in triplet)
    return joint_angle(a, b, c, frame.width, frame.height)


def average_joint_angle(
    frame: Frame,
    left: Sequence[int],
    right: Sequence[int],
) -> Optional[float]:
    """Mean of the left and right joint angles; None if either side is unavailable."""
    left_angle = frame_joint_angle(frame, left)
    right_angle = frame_joint_angle(frame, right)
    if left_angle is None or right_angle is None:
        return None
    return (left_angle + right_angle) / 2


def mean_coordinate(frame: Frame, indices: Iterable[int], axis: str) -> Optional[float]:
    """
    Mean pixel coordinate ("x" or "y") over a set of joints.

    None if any of the joints is unavailable.
    """
    if axis not in ("x", "y"):
        raise ValueError(f"axis must be 'x' or 'y', got {axis!r}")

    values = []
    for idx in indices:
        landmark = frame.get(idx)
        if landmark is None:
            return None
        point = to_pixel(landmark, frame.width, frame.height)
        values.append(point[0] if axis == "x" else point[1])

    if not values:
        return None
    return float(np.mean(values))


def midpoint(a: Landmark, b: Landmark, width: float, height: float) -> Tuple[float, float]:
    """Pixel midpoint of two landmarks."""
    mid = (to_pixel(a, width, height) + to_pixel(b, width, height)) / 2
    return float(mid[0]), float(mid[1])


def horizontal_distance(p: Tuple[float, float], q: Tuple[float, float]) -> float:
    """Signed horizontal distance q.x - p.x."""
    return q[0] - p[0]


def euclidean_distance(p: Tuple[float, float], q: Tuple[float, float]) -> float:
    return float(np.hypot(q[0] - p[0], q[1] - p[1]))


def skip_reason(frame: Frame, indices: Iterable[int]) -> SkipReason:
    """Classify why a channel over these joints was unavailable."""
    if any(frame.get(i) is None for i in indices):
        return SkipReason.MISSING_LANDMARK
    return SkipReason.DEGENERATE_GEOMETRY
