"""
자세 등급 (Good / Average / Poor)

PostureMetrics의 기울기 지표와는 다른 "삼각형 내각" 어휘를 쓴다.
  - shoulder: ear-shoulder-hip 내각       (≥ 170° 이면 +1)
  - neck:     어깨 위 수직선 대비 귀 기울기 (≤ 30° 이면 +1)
  - spine:    shoulder-hip-knee 내각      (≥ 160° 이면 +1)
  - knee:     hip-knee-ankle 내각         (≥ 160° 이면 +1)
점수 3점 이상 Good, 2점 Average, 그 외 Poor. 없는 각도는 점수를 주지 않을 뿐 오류가 아니다.
"""
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Optional

from posture_modules.angle_utils import angle_at_vertex, when_all
from posture_modules.keypoint_resolver import (
    DEFAULT_CONFIDENCE_THRESHOLD,
    resolve,
    to_keypoints,
)

SHOULDER_MIN = 170.0
NECK_MAX = 30.0
SPINE_MIN = 160.0
KNEE_MIN = 160.0

# 목 기울기 기준 수직선 길이 (px). 각도에는 영향 없음.
_VERTICAL_REF_LENGTH = 100.0


class Rating(str, Enum):
    GOOD = "Good"
    AVERAGE = "Average"
    POOR = "Poor"


@dataclass(frozen=True)
class RatingAngles:
    shoulder: Optional[float] = None
    neck: Optional[float] = None
    spine: Optional[float] = None
    knee: Optional[float] = None

    def to_dict(self):
        return asdict(self)


def score_angles(angles):
    """통과한 기준 개수를 센다. angles는 RatingAngles 또는 dict."""
    if isinstance(angles, RatingAngles):
        angles = angles.to_dict()

    score = 0
    shoulder = angles.get("shoulder")
    neck = angles.get("neck")
    spine = angles.get("spine")
    knee = angles.get("knee")
    if shoulder is not None and shoulder >= SHOULDER_MIN:
        score += 1
    if neck is not None and neck <= NECK_MAX:
        score += 1
    if spine is not None and spine >= SPINE_MIN:
        score += 1
    if knee is not None and knee >= KNEE_MIN:
        score += 1
    return score


def rate(angles) -> Rating:
    score = score_angles(angles)
    if score >= 3:
        return Rating.GOOD
    if score == 2:
        return Rating.AVERAGE
    return Rating.POOR


def _neck_angle(ear, shoulder):
    above = (shoulder[0], shoulder[1] - _VERTICAL_REF_LENGTH)
    return angle_at_vertex(ear, shoulder, above)


def _mean_present(*values):
    present = [v for v in values if v is not None]
    if not present:
        return None
    return sum(present) / len(present)


def compute_rating_angles(
    keypoints,
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
    scale_x: float = 1.0,
    scale_y: float = 1.0,
) -> RatingAngles:
    """
    좌/우 각각 내각을 구해 존재하는 쪽만 평균한다. 양쪽 다 없으면 None.
    """
    kps = to_keypoints(keypoints)
    sides = []
    for side in ("left", "right"):
        p = {
            part: resolve(kps, f"{side}_{part}", confidence_threshold, scale_x, scale_y)
            for part in ("ear", "shoulder", "hip", "knee", "ankle")
        }
        sides.append({
            "shoulder": when_all(angle_at_vertex, p["ear"], p["shoulder"], p["hip"]),
            "neck": when_all(_neck_angle, p["ear"], p["shoulder"]),
            "spine": when_all(angle_at_vertex, p["shoulder"], p["hip"], p["knee"]),
            "knee": when_all(angle_at_vertex, p["hip"], p["knee"], p["ankle"]),
        })

    left, right = sides
    return RatingAngles(**{
        name: _mean_present(left[name], right[name]) for name in ("shoulder", "neck", "spine", "knee")
    })
