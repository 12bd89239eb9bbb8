"""
키포인트 → 신뢰도 필터링된 2D 좌표 변환

포즈 모델 출력(17개 키포인트)에서 랜드마크 하나를 꺼내
출력 화면의 픽셀 좌표로 스케일링한다.
신뢰도가 임계값 미만이거나 키포인트가 없으면 None(부재)을 반환한다.
"""
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from posture_modules.landmarks import Landmark

DEFAULT_CONFIDENCE_THRESHOLD = 0.4

Point = Tuple[float, float]


@dataclass(frozen=True)
class Keypoint:
    """포즈 모델이 낸 단일 키포인트 관측값. 좌표는 정규화([0,1]) 또는 픽셀."""

    x: float
    y: float
    score: float
    name: Optional[str] = None

    @classmethod
    def from_mapping(cls, data):
        """
        dict 형태의 키포인트를 변환한다.

        {"x":.., "y":.., "score":..} 와 기존 추출 JSON 형식 {"x":.., "y":.., "vis":..} 모두 허용.
        점수가 없으면 1.0으로 본다.
        """
        if "x" not in data or "y" not in data:
            raise ValueError(f"키포인트에 x/y 좌표가 없습니다: {data!r}")
        score = data.get("score", data.get("vis", 1.0))
        return cls(
            x=float(data["x"]),
            y=float(data["y"]),
            score=float(score),
            name=data.get("name"),
        )


def to_keypoints(raw):
    """Keypoint / dict / (x, y, score) 혼합 시퀀스를 Keypoint 리스트로 통일한다."""
    out = []
    for item in raw:
        if item is None or isinstance(item, Keypoint):
            out.append(item)
        elif isinstance(item, dict):
            out.append(Keypoint.from_mapping(item))
        else:
            x, y, score = item
            out.append(Keypoint(float(x), float(y), float(score)))
    return out


def resolve(
    keypoints: Sequence[Optional[Keypoint]],
    landmark,
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
    scale_x: float = 1.0,
    scale_y: float = 1.0,
) -> Optional[Point]:
    """
    랜드마크 하나를 화면 픽셀 좌표로 변환한다.

    Args:
        keypoints: 모델 출력 순서의 키포인트 시퀀스 (최대 17개)
        landmark: Landmark 또는 이름 ("left_shoulder" / "Left Shoulder")
        confidence_threshold: 이 값 미만의 점수는 신뢰하지 않는다
        scale_x, scale_y: 정규화 좌표면 화면 너비/높이, 픽셀 좌표면 1.0

    Returns:
        (x, y) 또는 None
    """
    if isinstance(landmark, Landmark):
        index = int(landmark)
    else:
        try:
            index = int(Landmark.from_name(landmark))
        except KeyError:
            return None

    if index >= len(keypoints):
        return None
    point = keypoints[index]
    # NaN 점수도 임계값 미달로 본다
    if point is None or not point.score >= confidence_threshold:
        return None

    return (point.x * scale_x, point.y * scale_y)
