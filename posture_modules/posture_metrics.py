"""
자세 지표 계산기

COCO 17 키포인트 → 머리/어깨/척추/골반 기울기, 머리 오프셋, 무릎 각도.

지표별 필요 랜드마크:
  - head_offset:  nose, 어깨 중점            (px, +x 방향이 양수)
  - head_tilt:    left/right eye             (°)
  - shoulder_tilt: left/right shoulder       (°)
  - spine_tilt:   어깨 중점 → 골반 중점        (°)
  - hip_tilt:     left/right hip             (°)
  - pelvic_tilt:  (L hip→knee 각) - (R hip→knee 각)   (°)
  - knee_angle_*: hip-knee-ankle 내각          (°)

필요한 랜드마크가 하나라도 없으면 해당 지표는 None. 대체값으로 채우지 않는다.
프레임 간 상태를 갖지 않으므로 라이브/단일 사진/다중 사진 모두 같은 compute()를 쓴다.
"""
import logging
from dataclasses import asdict, dataclass, field, fields
from typing import Dict, Optional

from posture_modules.angle_utils import (
    angle_at_vertex,
    angle_between,
    midpoint,
    to_degrees,
    when_all,
)
from posture_modules.keypoint_resolver import (
    DEFAULT_CONFIDENCE_THRESHOLD,
    Point,
    resolve,
    to_keypoints,
)
from posture_modules.landmarks import METRIC_LANDMARKS

logger = logging.getLogger(__name__)

METRIC_NAMES = (
    "head_offset",
    "head_tilt",
    "shoulder_tilt",
    "spine_tilt",
    "hip_tilt",
    "pelvic_tilt",
    "knee_angle_left",
    "knee_angle_right",
)


@dataclass(frozen=True)
class PostureMetrics:
    head_offset: Optional[float] = None
    head_tilt: Optional[float] = None
    shoulder_tilt: Optional[float] = None
    spine_tilt: Optional[float] = None
    hip_tilt: Optional[float] = None
    pelvic_tilt: Optional[float] = None
    knee_angle_left: Optional[float] = None
    knee_angle_right: Optional[float] = None
    # 렌더링용: 11개 랜드마크 + shoulder_mid, hip_mid
    points: Dict[str, Optional[Point]] = field(default_factory=dict, hash=False)

    def values(self):
        """지표 이름 → 값 dict (points 제외)."""
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name != "points"}

    def missing(self):
        return [name for name, value in self.values().items() if value is None]

    def to_dict(self):
        data = asdict(self)
        data["points"] = {k: (list(v) if v is not None else None) for k, v in self.points.items()}
        return data


def _tilt(p1, p2):
    return to_degrees(angle_between(p1, p2))


def _pelvic_tilt(left_hip, left_knee, right_hip, right_knee):
    return _tilt(left_hip, left_knee) - _tilt(right_hip, right_knee)


def compute(
    keypoints,
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
    scale_x: float = 1.0,
    scale_y: float = 1.0,
) -> PostureMetrics:
    """
    한 프레임(또는 사진)의 자세 지표를 계산한다.

    Args:
        keypoints: 모델 출력 순서의 키포인트 시퀀스 (Keypoint 또는 dict)
        confidence_threshold: 랜드마크 신뢰도 임계값 (기본 0.4)
        scale_x, scale_y: 정규화 좌표면 화면 너비/높이, 픽셀 좌표면 1.0

    Returns:
        PostureMetrics
    """
    kps = to_keypoints(keypoints)
    pts = {
        lm.key: resolve(kps, lm, confidence_threshold, scale_x, scale_y)
        for lm in METRIC_LANDMARKS
    }

    shoulder_mid = when_all(midpoint, pts["left_shoulder"], pts["right_shoulder"])
    hip_mid = when_all(midpoint, pts["left_hip"], pts["right_hip"])

    metrics = PostureMetrics(
        head_offset=when_all(lambda nose, mid: nose[0] - mid[0], pts["nose"], shoulder_mid),
        head_tilt=when_all(_tilt, pts["left_eye"], pts["right_eye"]),
        shoulder_tilt=when_all(_tilt, pts["left_shoulder"], pts["right_shoulder"]),
        spine_tilt=when_all(_tilt, shoulder_mid, hip_mid),
        hip_tilt=when_all(_tilt, pts["left_hip"], pts["right_hip"]),
        pelvic_tilt=when_all(
            _pelvic_tilt,
            pts["left_hip"], pts["left_knee"], pts["right_hip"], pts["right_knee"],
        ),
        knee_angle_left=when_all(
            angle_at_vertex, pts["left_hip"], pts["left_knee"], pts["left_ankle"],
        ),
        knee_angle_right=when_all(
            angle_at_vertex, pts["right_hip"], pts["right_knee"], pts["right_ankle"],
        ),
        points={**pts, "shoulder_mid": shoulder_mid, "hip_mid": hip_mid},
    )

    missing = metrics.missing()
    if missing:
        logger.debug(f"계산 불가 지표: {missing}")
    return metrics
