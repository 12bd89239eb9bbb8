"""Tests for skeleton rendering and capture images."""

import numpy as np
import pytest

from posture_modules import Landmark, PostureMetrics, compute
from utils.visualization import (
    ALERT_COLOR,
    NEUTRAL_COLOR,
    NOSE_RADIUS,
    SkeletonRenderer,
    color_by_threshold,
    decode_image,
    draw_posture_overlay,
    draw_report_banner,
    encode_png,
)


class RecordingSurface:
    def __init__(self):
        self.circles = []
        self.lines = []

    def draw_circle(self, point, color, radius):
        self.circles.append((point, color, radius))

    def draw_line(self, p1, p2, color, width):
        self.lines.append((p1, p2, color, width))


def _render(metrics, **kwargs):
    surface = RecordingSurface()
    SkeletonRenderer(**kwargs).render(surface, metrics)
    return surface


def _line_color(surface, p1, p2):
    for a, b, color, _ in surface.lines:
        if (a, b) == (p1, p2):
            return color
    raise AssertionError(f"line {p1} -> {p2} not drawn")


def test_color_by_threshold() -> None:
    assert color_by_threshold(5.1, 5) == ALERT_COLOR
    assert color_by_threshold(-5.1, 5) == ALERT_COLOR
    assert color_by_threshold(5.0, 5) == NEUTRAL_COLOR
    assert color_by_threshold(None, 5) == NEUTRAL_COLOR


def test_full_pose_draws_all_parts(upright_keypoints) -> None:
    surface = _render(compute(upright_keypoints))
    assert len(surface.lines) == 7
    # 13개 점 + 코 강조
    assert len(surface.circles) == 14
    assert surface.circles[-1][2] == NOSE_RADIUS


def test_level_pose_is_neutral(upright_keypoints) -> None:
    metrics = compute(upright_keypoints)
    surface = _render(metrics)
    assert _line_color(surface, (100.0, 50.0), (200.0, 50.0)) == NEUTRAL_COLOR
    assert _line_color(surface, (120.0, 200.0), (180.0, 200.0)) == NEUTRAL_COLOR
    assert surface.circles[-1][1] == NEUTRAL_COLOR


def test_tilted_shoulders_drawn_red(make_keypoints) -> None:
    metrics = compute(make_keypoints({Landmark.RIGHT_SHOULDER: (200, 70)}))
    assert metrics.shoulder_tilt > 5
    surface = _render(metrics)
    assert _line_color(surface, (100.0, 50.0), (200.0, 70.0)) == ALERT_COLOR


def test_spine_line_uses_vertical_tilt_threshold(upright_keypoints) -> None:
    # 수직 척추는 90°이므로 기울기 기준 5°를 넘어 빨강으로 칠해진다
    metrics = compute(upright_keypoints)
    surface = _render(metrics)
    assert _line_color(surface, (150.0, 50.0), (150.0, 200.0)) == ALERT_COLOR


def test_head_offset_highlight(make_keypoints) -> None:
    surface = _render(compute(make_keypoints({Landmark.NOSE: (180, 30)})))
    assert surface.circles[-1] == ((180.0, 30.0), ALERT_COLOR, NOSE_RADIUS)


def test_absent_endpoints_are_skipped(make_keypoints) -> None:
    metrics = compute(make_keypoints(scores={Landmark.LEFT_SHOULDER: 0.0}))
    surface = _render(metrics)
    # 어깨선, 척추선이 빠진다
    assert len(surface.lines) == 5
    # 왼쪽 어깨, 어깨 중점 없음 + 코 강조도 없음
    assert len(surface.circles) == 11
    assert all(radius != NOSE_RADIUS for _, _, radius in surface.circles)


def test_limb_line_drawn_neutral_when_metric_absent(make_keypoints) -> None:
    metrics = compute(make_keypoints(
        {Landmark.LEFT_KNEE: (200, 300)},
        scores={Landmark.RIGHT_KNEE: 0.0},
    ))
    assert metrics.pelvic_tilt is None
    surface = _render(metrics)
    assert _line_color(surface, (120.0, 200.0), (200.0, 300.0)) == NEUTRAL_COLOR


def test_empty_metrics_draw_nothing() -> None:
    surface = _render(PostureMetrics())
    assert surface.lines == [] and surface.circles == []


def test_custom_thresholds(make_keypoints) -> None:
    metrics = compute(make_keypoints({Landmark.RIGHT_SHOULDER: (200, 70)}))
    surface = _render(metrics, tilt_threshold=90)
    assert _line_color(surface, (100.0, 50.0), (200.0, 70.0)) == NEUTRAL_COLOR


def test_draw_posture_overlay_does_not_modify_input(upright_keypoints, blank_frame) -> None:
    overlay = draw_posture_overlay(blank_frame, compute(upright_keypoints))
    assert blank_frame.sum() == 0
    assert overlay.shape == blank_frame.shape
    assert tuple(overlay[50, 100]) == NEUTRAL_COLOR


def test_draw_posture_overlay_without_pose(blank_frame) -> None:
    overlay = draw_posture_overlay(blank_frame, None)
    assert overlay is not blank_frame
    assert np.array_equal(overlay, blank_frame)


def test_report_banner_darkens_top_band() -> None:
    image = np.full((480, 640, 3), 200, dtype=np.uint8)
    lines = ["Head Offset: 1.0 px", "Head Tilt: — °"]
    banner = draw_report_banner(image, lines)
    assert banner.shape == image.shape
    assert banner[5, 600].mean() < 200
    assert np.array_equal(banner[300:], image[300:])


def test_png_encode_decode(blank_frame) -> None:
    data = encode_png(blank_frame)
    assert data[:4] == b"\x89PNG"
    assert decode_image(data).shape == blank_frame.shape
    assert decode_image(b"") is None
    assert decode_image(b"not an image") is None


@pytest.mark.parametrize("alpha", [0.0, 1.0])
def test_report_banner_alpha_extremes(alpha) -> None:
    image = np.full((100, 100, 3), 200, dtype=np.uint8)
    banner = draw_report_banner(image, [], alpha=alpha)
    # 줄이 없어도 상단 30px 띠는 깔린다
    expected = 200 if alpha == 0.0 else 0
    assert banner[10, 50, 0] == expected
