"""
자세 지표 → 사람이 읽는 문자열

오버레이 텍스트, 화면 표, PDF 리포트가 모두 같은 행 순서를 쓴다.
"""
from posture_modules.posture_metrics import PostureMetrics

PLACEHOLDER = "—"
DEG = "°"

# (라벨, 지표 이름, 단위)
METRIC_LABELS = (
    ("Head Offset", "head_offset", "px"),
    ("Head Tilt", "head_tilt", DEG),
    ("Shoulder Tilt", "shoulder_tilt", DEG),
    ("Spine Tilt", "spine_tilt", DEG),
    ("Hip Tilt", "hip_tilt", DEG),
    ("Pelvic Tilt", "pelvic_tilt", DEG),
    ("Knee Angle L", "knee_angle_left", DEG),
    ("Knee Angle R", "knee_angle_right", DEG),
)


def format_value(value):
    """소수점 한 자리, 없으면 PLACEHOLDER."""
    if value is None:
        return PLACEHOLDER
    return f"{value:.1f}"


def metric_rows(metrics):
    """표 형태 출력용 [(라벨, 값 문자열, 단위), ...]."""
    values = metrics.values() if metrics is not None else {}
    return [
        (label, format_value(values.get(name)), unit)
        for label, name, unit in METRIC_LABELS
    ]


def format_metric_lines(metrics):
    """
    오버레이/캡처용 고정 순서 문자열 리스트.

    metrics가 None(포즈 미검출)이면 모든 값이 PLACEHOLDER.
    """
    if metrics is None:
        metrics = PostureMetrics()
    f = format_value
    return [
        f"Head Offset: {f(metrics.head_offset)} px",
        f"Head Tilt: {f(metrics.head_tilt)} {DEG}",
        f"Shoulder Tilt: {f(metrics.shoulder_tilt)} {DEG}",
        f"Spine Tilt: {f(metrics.spine_tilt)} {DEG}",
        f"Hip Tilt: {f(metrics.hip_tilt)} {DEG}",
        f"Pelvic Tilt: {f(metrics.pelvic_tilt)} {DEG}",
        f"Knee Angles (L / R): {f(metrics.knee_angle_left)}{DEG} / {f(metrics.knee_angle_right)}{DEG}",
    ]
