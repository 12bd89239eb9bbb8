"""
자세 스켈레톤 시각화 유틸리티
프레임 이미지 위에 자세 지표 키포인트/연결선을 기준값에 따라 색을 달리해 그린다.
"""
import cv2
import numpy as np

from config import OFFSET_THRESHOLD, TILT_THRESHOLD

# 색상 (BGR)
NEUTRAL_COLOR = (0, 255, 0)     # 라임
ALERT_COLOR = (0, 0, 255)       # 빨강
TEXT_COLOR = (255, 255, 255)
JOINT_RADIUS = 6
NOSE_RADIUS = 8
CONNECTION_THICKNESS = 4

# 연결선 → 색상 기준 지표 (None이면 항상 중립색)
POSTURE_CONNECTIONS = [
    ("left_shoulder", "right_shoulder", "shoulder_tilt"),
    ("left_hip", "right_hip", "hip_tilt"),
    ("shoulder_mid", "hip_mid", "spine_tilt"),
    ("left_hip", "left_knee", "pelvic_tilt"),
    ("right_hip", "right_knee", "pelvic_tilt"),
    ("left_knee", "left_ankle", None),
    ("right_knee", "right_ankle", None),
]

POSTURE_POINTS = [
    "nose", "left_eye", "right_eye",
    "left_shoulder", "right_shoulder",
    "left_hip", "right_hip",
    "left_knee", "right_knee",
    "left_ankle", "right_ankle",
    "shoulder_mid", "hip_mid",
]


def color_by_threshold(value, threshold):
    """|value| > threshold 이면 경고색. 값이 없으면 중립색."""
    if value is not None and abs(value) > threshold:
        return ALERT_COLOR
    return NEUTRAL_COLOR


class OpenCVSurface:
    """BGR numpy 이미지 위에 그리는 드로잉 표면."""

    def __init__(self, image):
        self.image = image

    def draw_circle(self, point, color, radius):
        center = (int(round(point[0])), int(round(point[1])))
        cv2.circle(self.image, center, radius, color, -1)

    def draw_line(self, p1, p2, color, width):
        pt_a = (int(round(p1[0])), int(round(p1[1])))
        pt_b = (int(round(p2[0])), int(round(p2[1])))
        cv2.line(self.image, pt_a, pt_b, color, width)


class SkeletonRenderer:
    """
    PostureMetrics의 점/지표를 드로잉 표면에 그린다.

    surface는 draw_circle(point, color, radius), draw_line(p1, p2, color, width)만 있으면 된다.
    끝점이 없는 선과 없는 점은 그리지 않는다.
    """

    def __init__(self, tilt_threshold=TILT_THRESHOLD, offset_threshold=OFFSET_THRESHOLD):
        self.tilt_threshold = tilt_threshold
        self.offset_threshold = offset_threshold

    def render(self, surface, metrics):
        points = metrics.points

        # 연결선 먼저 그리기 (관절점 아래에 깔림)
        for name_a, name_b, metric_name in POSTURE_CONNECTIONS:
            pa, pb = points.get(name_a), points.get(name_b)
            if pa is None or pb is None:
                continue
            value = getattr(metrics, metric_name) if metric_name else None
            color = color_by_threshold(value, self.tilt_threshold)
            surface.draw_line(pa, pb, color, CONNECTION_THICKNESS)

        # 관절점 그리기
        for name in POSTURE_POINTS:
            point = points.get(name)
            if point is None:
                continue
            surface.draw_circle(point, NEUTRAL_COLOR, JOINT_RADIUS)

        # 코: 머리 오프셋 강조
        nose = points.get("nose")
        if nose is not None and points.get("shoulder_mid") is not None:
            color = color_by_threshold(metrics.head_offset, self.offset_threshold)
            surface.draw_circle(nose, color, NOSE_RADIUS)


def draw_posture_overlay(image, metrics, renderer=None):
    """
    이미지 사본 위에 스켈레톤을 그려 반환한다.

    Args:
        image: BGR numpy array
        metrics: PostureMetrics 또는 None (포즈 미검출 시 원본 사본 반환)
    """
    canvas = image.copy()
    if metrics is None:
        return canvas
    (renderer or SkeletonRenderer()).render(OpenCVSurface(canvas), metrics)
    return canvas


def _ascii_text(line):
    # Hershey 폰트는 ASCII만 지원
    return line.replace("°", " deg").replace("—", "-")


def draw_report_banner(image, lines, alpha=0.6):
    """
    이미지 상단에 반투명 검정 띠를 깔고 지표 문자열을 적는다 (캡처 리포트용).
    """
    canvas = image.copy()
    height = min(canvas.shape[0], 30 + 25 * len(lines))
    band = canvas[:height].copy()
    cv2.rectangle(band, (0, 0), (canvas.shape[1], height), (0, 0, 0), -1)
    canvas[:height] = cv2.addWeighted(band, alpha, canvas[:height], 1 - alpha, 0)

    for i, line in enumerate(lines):
        cv2.putText(
            canvas, _ascii_text(line), (10, 30 + i * 25),
            cv2.FONT_HERSHEY_SIMPLEX, 0.6, TEXT_COLOR, 1, cv2.LINE_AA,
        )
    return canvas


def encode_png(image):
    """BGR 이미지를 PNG 바이트로 인코딩한다."""
    ok, buf = cv2.imencode(".png", image)
    if not ok:
        raise ValueError("PNG 인코딩 실패")
    return buf.tobytes()


def decode_image(data):
    """이미지 바이트를 BGR numpy array로 디코딩한다. 실패 시 None."""
    arr = np.frombuffer(data, dtype=np.uint8)
    if arr.size == 0:
        return None
    return cv2.imdecode(arr, cv2.IMREAD_COLOR)
