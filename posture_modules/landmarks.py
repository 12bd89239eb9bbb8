"""
COCO 17 랜드마크 정의

포즈 모델 출력 순서(0~16)에 고정된 인덱스를 부여한다.
이름 조회는 snake_case("left_shoulder")와 표시용 이름("Left Shoulder")을 모두 받는다.
"""
from enum import IntEnum


class Landmark(IntEnum):
    NOSE = 0
    LEFT_EYE = 1
    RIGHT_EYE = 2
    LEFT_EAR = 3
    RIGHT_EAR = 4
    LEFT_SHOULDER = 5
    RIGHT_SHOULDER = 6
    LEFT_ELBOW = 7
    RIGHT_ELBOW = 8
    LEFT_WRIST = 9
    RIGHT_WRIST = 10
    LEFT_HIP = 11
    RIGHT_HIP = 12
    LEFT_KNEE = 13
    RIGHT_KNEE = 14
    LEFT_ANKLE = 15
    RIGHT_ANKLE = 16

    @property
    def key(self):
        """snake_case 이름 (예: "left_shoulder")."""
        return self.name.lower()

    @property
    def display_name(self):
        """표시용 이름 (예: "Left Shoulder")."""
        return self.name.replace("_", " ").title()

    @classmethod
    def from_name(cls, name):
        """
        이름으로 랜드마크를 찾는다.

        "left_shoulder", "Left Shoulder", "LEFT_SHOULDER" 모두 허용.
        알 수 없는 이름이면 KeyError.
        """
        normalized = str(name).strip().replace(" ", "_").replace("-", "_").upper()
        return cls[normalized]


# 표시 이름 → 인덱스
COCO_KEYPOINT_MAP = {lm.display_name: int(lm) for lm in Landmark}

# 자세 지표 계산에 쓰이는 11개 랜드마크
METRIC_LANDMARKS = (
    Landmark.NOSE,
    Landmark.LEFT_EYE, Landmark.RIGHT_EYE,
    Landmark.LEFT_SHOULDER, Landmark.RIGHT_SHOULDER,
    Landmark.LEFT_HIP, Landmark.RIGHT_HIP,
    Landmark.LEFT_KNEE, Landmark.RIGHT_KNEE,
    Landmark.LEFT_ANKLE, Landmark.RIGHT_ANKLE,
)
