"""Synthetic pose builders shared by the test suite."""

import math
from typing import Any, Dict, List, Optional

import pytest

from talenttrack.cv.landmarks import Frame, JointIndex, Landmark

NUM_LANDMARKS = 33
WIDTH = 1000.0
HEIGHT = 1000.0
FPS = 30.0


def base_landmarks() -> List[Optional[Landmark]]:
    """33 visible landmarks parked in the middle of the frame."""
    return [Landmark(x=0.5, y=0.5, z=0.0, visibility=0.99) for _ in range(NUM_LANDMARKS)]


def _place_arm(landmarks, shoulder, elbow, wrist, elbow_x: float, angle_deg: float):
    # Upper arm points straight up from the elbow; the forearm is rotated so the
    # interior angle at the elbow equals angle_deg (square frame, no skew).
    theta = math.radians(angle_deg)
    landmarks[shoulder] = Landmark(x=elbow_x, y=0.3, visibility=0.99)
    landmarks[elbow] = Landmark(x=elbow_x, y=0.5, visibility=0.99)
    landmarks[wrist] = Landmark(
        x=elbow_x + 0.2 * math.sin(theta),
        y=0.5 - 0.2 * math.cos(theta),
        visibility=0.99,
    )


def arm_frame(angle_deg: float, timestamp: float, nose_y_px: Optional[float] = None) -> Frame:
    """Frame where both elbows bend to angle_deg."""
    landmarks = base_landmarks()
    _place_arm(landmarks, JointIndex.LEFT_SHOULDER, JointIndex.LEFT_ELBOW,
               JointIndex.LEFT_WRIST, 0.3, angle_deg)
    _place_arm(landmarks, JointIndex.RIGHT_SHOULDER, JointIndex.RIGHT_ELBOW,
               JointIndex.RIGHT_WRIST, 0.7, angle_deg)
    if nose_y_px is not None:
        landmarks[JointIndex.NOSE] = Landmark(x=0.5, y=nose_y_px / HEIGHT, visibility=0.99)
    return Frame(landmarks=landmarks, width=WIDTH, height=HEIGHT, timestamp=timestamp)


def hip_frame(hip_y_px: float, timestamp: float) -> Frame:
    landmarks = base_landmarks()
    landmarks[JointIndex.LEFT_HIP] = Landmark(x=0.45, y=hip_y_px / HEIGHT, visibility=0.99)
    landmarks[JointIndex.RIGHT_HIP] = Landmark(x=0.55, y=hip_y_px / HEIGHT, visibility=0.99)
    return Frame(landmarks=landmarks, width=WIDTH, height=HEIGHT, timestamp=timestamp)


def feet_frame(x_px: float, timestamp: float) -> Frame:
    landmarks = base_landmarks()
    for idx in (JointIndex.LEFT_ANKLE, JointIndex.RIGHT_ANKLE,
                JointIndex.LEFT_FOOT_INDEX, JointIndex.RIGHT_FOOT_INDEX):
        landmarks[idx] = Landmark(x=x_px / WIDTH, y=0.9, visibility=0.99)
    return Frame(landmarks=landmarks, width=WIDTH, height=HEIGHT, timestamp=timestamp)


def reach_frame(wrist_x_px: float, foot_x_px: float, timestamp: float) -> Frame:
    landmarks = base_landmarks()
    for idx in (JointIndex.LEFT_WRIST, JointIndex.RIGHT_WRIST):
        landmarks[idx] = Landmark(x=wrist_x_px / WIDTH, y=0.6, visibility=0.99)
    for idx in (JointIndex.LEFT_FOOT_INDEX, JointIndex.RIGHT_FOOT_INDEX):
        landmarks[idx] = Landmark(x=foot_x_px / WIDTH, y=0.6, visibility=0.99)
    return Frame(landmarks=landmarks, width=WIDTH, height=HEIGHT, timestamp=timestamp)


def hide(frame: Frame, *indices: int) -> Frame:
    """Copy of frame with the given landmarks below visibility threshold."""
    landmarks = list(frame.landmarks)
    for idx in indices:
        lm = landmarks[idx]
        landmarks[idx] = Landmark(x=lm.x, y=lm.y, z=lm.z, visibility=0.1)
    return Frame(landmarks=landmarks, width=frame.width, height=frame.height,
                 timestamp=frame.timestamp)


def pushup_frames(reps: int, hold_frames: int = 10, start: float = 0.0) -> List[Frame]:
    """Full-depth push-ups: 5 frames at 170 deg then hold_frames at 60 deg, per rep."""
    frames = []
    t = start
    for _ in range(reps):
        for angle in [170.0] * 5 + [60.0] * hold_frames:
            frames.append(arm_frame(angle, t))
            t += 1 / FPS
    for _ in range(5):
        frames.append(arm_frame(170.0, t))
        t += 1 / FPS
    return frames


def frame_payload(frame: Frame) -> Dict[str, Any]:
    """JSON body for the frames endpoint."""
    return {
        "landmarks": [
            None if lm is None else {"x": lm.x, "y": lm.y, "z": lm.z, "visibility": lm.visibility}
            for lm in frame.landmarks
        ],
        "width": frame.width,
        "height": frame.height,
        "timestamp": frame.timestamp,
    }


@pytest.fixture
def fps() -> float:
    return FPS
