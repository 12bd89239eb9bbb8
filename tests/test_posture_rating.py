"""Tests for posture rating."""

import pytest

from posture_modules import Landmark, Rating, RatingAngles, compute_rating_angles, rate, score_angles

# 측면 기립 자세: 귀-어깨-골반-무릎-발목이 한 수직선
SIDE_VIEW = {
    Landmark.LEFT_EAR: (100, 0),
    Landmark.LEFT_SHOULDER: (100, 50),
    Landmark.LEFT_HIP: (100, 200),
    Landmark.LEFT_KNEE: (100, 300),
    Landmark.LEFT_ANKLE: (100, 400),
}

RIGHT_SIDE = (
    Landmark.RIGHT_EAR, Landmark.RIGHT_SHOULDER, Landmark.RIGHT_HIP,
    Landmark.RIGHT_KNEE, Landmark.RIGHT_ANKLE,
)


def test_all_thresholds_met_is_good() -> None:
    angles = {"shoulder": 175, "neck": 20, "spine": 165, "knee": 170}
    assert score_angles(angles) == 4
    assert rate(angles) is Rating.GOOD


def test_missing_angles_award_nothing() -> None:
    angles = {"shoulder": 175, "neck": 20}
    assert score_angles(angles) == 2
    assert rate(angles) is Rating.AVERAGE


@pytest.mark.parametrize(
    "angles, expected",
    [
        ({"shoulder": 170, "neck": 30, "spine": 160}, Rating.GOOD),
        ({"shoulder": 169.9, "neck": 30.1, "spine": 160, "knee": 160}, Rating.AVERAGE),
        ({"shoulder": 150, "neck": 45, "spine": 120, "knee": 160}, Rating.POOR),
        ({}, Rating.POOR),
    ],
)
def test_threshold_boundaries(angles, expected) -> None:
    assert rate(angles) is expected


def test_rate_accepts_rating_angles() -> None:
    assert rate(RatingAngles(shoulder=180, neck=0, spine=None, knee=None)) is Rating.AVERAGE
    assert Rating.GOOD.value == "Good"


def test_side_view_angles(make_keypoints) -> None:
    kps = make_keypoints(SIDE_VIEW, scores={lm: 0.0 for lm in RIGHT_SIDE})
    angles = compute_rating_angles(kps)
    assert angles.shoulder == pytest.approx(180.0)
    assert angles.neck == pytest.approx(0.0)
    assert angles.spine == pytest.approx(180.0)
    assert angles.knee == pytest.approx(180.0)
    assert rate(angles) is Rating.GOOD


def test_forward_head_increases_neck_angle(make_keypoints) -> None:
    coords = {**SIDE_VIEW, Landmark.LEFT_EAR: (150, 0)}
    kps = make_keypoints(coords, scores={lm: 0.0 for lm in RIGHT_SIDE})
    assert compute_rating_angles(kps).neck == pytest.approx(45.0)


def test_sides_are_averaged(make_keypoints) -> None:
    coords = {
        **SIDE_VIEW,
        Landmark.RIGHT_HIP: (200, 200),
        Landmark.RIGHT_KNEE: (200, 300),
        Landmark.RIGHT_ANKLE: (300, 300),
    }
    kps = make_keypoints(coords)
    # 왼쪽 180°, 오른쪽 90°
    assert compute_rating_angles(kps).knee == pytest.approx(135.0)


def test_no_landmarks_gives_no_angles() -> None:
    angles = compute_rating_angles([])
    assert angles == RatingAngles()
    assert rate(angles) is Rating.POOR
