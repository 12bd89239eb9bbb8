"""
자세 분석 코어 패키지: 키포인트 기반 기하 지표

landmarks:          COCO 17 랜드마크 열거형
keypoint_resolver:  신뢰도 필터링 + 화면 좌표 스케일링
angle_utils:        각도/거리/중점, 부재 결합(when_all)
posture_metrics:    자세 지표 계산
posture_rating:     Good / Average / Poor 등급
report_formatter:   지표 문자열 변환
"""
from posture_modules.landmarks import Landmark, COCO_KEYPOINT_MAP, METRIC_LANDMARKS
from posture_modules.keypoint_resolver import (
    DEFAULT_CONFIDENCE_THRESHOLD,
    Keypoint,
    resolve,
    to_keypoints,
)
from posture_modules.angle_utils import (
    angle_at_vertex,
    angle_between,
    cal_distance,
    midpoint,
    to_degrees,
    when_all,
)
from posture_modules.posture_metrics import METRIC_NAMES, PostureMetrics, compute
from posture_modules.posture_rating import (
    Rating,
    RatingAngles,
    compute_rating_angles,
    rate,
    score_angles,
)
from posture_modules.report_formatter import (
    PLACEHOLDER,
    format_metric_lines,
    format_value,
    metric_rows,
)

__all__ = [
    'Landmark',
    'COCO_KEYPOINT_MAP',
    'METRIC_LANDMARKS',
    'DEFAULT_CONFIDENCE_THRESHOLD',
    'Keypoint',
    'resolve',
    'to_keypoints',
    'angle_at_vertex',
    'angle_between',
    'cal_distance',
    'midpoint',
    'to_degrees',
    'when_all',
    'METRIC_NAMES',
    'PostureMetrics',
    'compute',
    'Rating',
    'RatingAngles',
    'compute_rating_angles',
    'rate',
    'score_angles',
    'PLACEHOLDER',
    'format_metric_lines',
    'format_value',
    'metric_rows',
]
