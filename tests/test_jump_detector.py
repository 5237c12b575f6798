import pytest

from talenttrack.cv.errors import SkipReason
from talenttrack.cv.jump_detector import JumpPhase, VerticalJumpDetector
from talenttrack.cv.landmarks import Frame, JointIndex, Landmark
from talenttrack.cv.summarizer import VerticalJumpSummary

from conftest import hide, hip_frame


def feed(detector, samples):
    return [e for e in (detector.update(y, t) for y, t in samples) if e is not None]


def test_single_jump():
    detector = VerticalJumpDetector(smoothing_window=1)
    events = feed(detector, [(400, 0.0), (400, 0.5), (340, 1.0), (398, 1.6)])

    assert detector.baseline_y == 400
    assert len(events) == 1
    jump = events[0]
    assert jump.height_px == pytest.approx(60.0)
    assert jump.air_time_sec == pytest.approx(0.6)
    assert jump.takeoff_time == 1.0
    assert jump.landing_time == 1.6

    summary = detector.summarize()
    assert summary.count == 1
    assert summary.max_height_cm == round(60 * 0.0264, 2)
    assert summary.avg_air_time == 0.6


def test_apex_tracks_highest_point():
    detector = VerticalJumpDetector(smoothing_window=1)
    events = feed(detector, [(400, 0.0), (360, 0.2), (330, 0.3), (350, 0.4), (400, 0.6)])
    assert events[0].height_px == pytest.approx(70.0)


def test_rise_must_exceed_takeoff_threshold():
    detector = VerticalJumpDetector(smoothing_window=1)
    assert feed(detector, [(400, 0.0), (380, 0.2), (400, 0.4)]) == []
    assert detector.phase == JumpPhase.GROUNDED


def test_still_airborne_until_within_landing_tolerance():
    detector = VerticalJumpDetector(smoothing_window=1)
    events = feed(detector, [(400, 0.0), (350, 0.2), (390, 0.4)])
    assert events == []
    assert detector.phase == JumpPhase.AIRBORNE


def test_jump_in_flight_at_end_is_dropped():
    detector = VerticalJumpDetector(smoothing_window=1)
    feed(detector, [(400, 0.0), (340, 1.0), (330, 1.1)])

    assert detector.in_flight is not None
    assert detector.in_flight.apex_y == 330
    assert detector.ledger == ()
    assert detector.summarize() == VerticalJumpSummary()


def test_jumps_from_frames():
    detector = VerticalJumpDetector(fps=30.0)
    heights = ([400.0] * 10 + [300.0] * 10) * 3 + [400.0] * 10
    events = [detector.process_frame(hip_frame(y, i / 30)) for i, y in enumerate(heights)]
    jumps = [e for e in events if e is not None]

    assert len(jumps) == 3
    assert [j.sequence_number for j in jumps] == [1, 2, 3]
    assert all(j.height_px == pytest.approx(100.0) for j in jumps)


def test_missing_hip_skips_frame():
    detector = VerticalJumpDetector()
    assert detector.process_frame(hide(hip_frame(400, 0.0), JointIndex.LEFT_HIP)) is None
    assert detector.baseline_y is None
    assert detector.skip_counts[SkipReason.MISSING_LANDMARK] == 1


def test_custom_scale_factor():
    detector = VerticalJumpDetector(smoothing_window=1, cm_per_px=0.5)
    feed(detector, [(400, 0.0), (300, 0.2), (400, 0.5)])
    assert detector.summarize().max_height_cm == 50.0


def test_hip_height_is_midpoint_of_both_hips():
    frame = hip_frame(400, 0.0)
    landmarks = list(frame.landmarks)
    landmarks[JointIndex.LEFT_HIP] = Landmark(x=0.45, y=0.38, visibility=0.99)
    landmarks[JointIndex.RIGHT_HIP] = Landmark(x=0.55, y=0.42, visibility=0.99)
    detector = VerticalJumpDetector(smoothing_window=1)
    detector.process_frame(Frame(landmarks=landmarks, width=1000, height=1000, timestamp=0.0))
    assert detector.baseline_y == pytest.approx(400.0)
