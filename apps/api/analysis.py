from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from config import CONFIDENCE_THRESHOLD, SUPPORTED_IMAGE_EXTENSIONS
from posture_modules import (
    PostureMetrics,
    Rating,
    RatingAngles,
    compute,
    compute_rating_angles,
    format_metric_lines,
    rate,
    to_keypoints,
)
from utils.keypoints import estimate_poses, load_pose_model
from utils.visualization import decode_image, draw_posture_overlay, encode_png

logger = logging.getLogger(__name__)


class ImageDecodeError(ValueError):
    """업로드된 바이트를 이미지로 읽을 수 없음."""


# --------------------
# result types
# --------------------
@dataclass
class FrameAnalysis:
    """프레임/사진 한 장의 분석 결과. 포즈 미검출이면 metrics 등은 None."""

    metrics: Optional[PostureMetrics] = None
    rating_angles: Optional[RatingAngles] = None
    rating: Optional[Rating] = None
    lines: List[str] = field(default_factory=lambda: format_metric_lines(None))

    @property
    def pose_found(self) -> bool:
        return self.metrics is not None

    def to_dict(self) -> dict:
        return {
            "pose_found": self.pose_found,
            "metrics": self.metrics.to_dict() if self.metrics else None,
            "rating_angles": self.rating_angles.to_dict() if self.rating_angles else None,
            "rating": self.rating.value if self.rating else None,
            "lines": list(self.lines),
        }


@dataclass
class PhotoAnalysis:
    name: str
    analysis: FrameAnalysis
    width: int
    height: int
    overlay_png: Optional[bytes] = None
    # 읽기 실패 등으로 분석하지 못한 사진의 사유
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict:
        data = self.analysis.to_dict()
        data.update({
            "name": self.name,
            "resolution": [self.width, self.height],
            "error": self.error,
        })
        return data


# --------------------
# model cache
# --------------------
@lru_cache(maxsize=1)
def get_pose_model():
    return load_pose_model()


# --------------------
# upload check
# --------------------
def is_supported_image(filename: str) -> bool:
    return Path(filename or "").suffix.lower() in SUPPORTED_IMAGE_EXTENSIONS


# --------------------
# core entry
# --------------------
def analyze_keypoints(
    keypoints,
    width: Optional[float] = None,
    height: Optional[float] = None,
    normalized: bool = False,
    confidence_threshold: float = CONFIDENCE_THRESHOLD,
) -> FrameAnalysis:
    """
    키포인트 한 세트 → 지표/등급/문자열.

    라이브 루프, 단일 사진, 다중 사진이 모두 이 함수를 거친다.
    normalized=True면 width/height로 스케일링한다.
    """
    if keypoints is None:
        return FrameAnalysis()

    if normalized:
        if not width or not height:
            raise ValueError("정규화 좌표는 width/height가 필요합니다.")
        scale_x, scale_y = float(width), float(height)
    else:
        scale_x = scale_y = 1.0

    kps = to_keypoints(keypoints)
    metrics = compute(kps, confidence_threshold, scale_x, scale_y)
    angles = compute_rating_angles(kps, confidence_threshold, scale_x, scale_y)
    return FrameAnalysis(
        metrics=metrics,
        rating_angles=angles,
        rating=rate(angles),
        lines=format_metric_lines(metrics),
    )


# --------------------
# image / frame
# --------------------
def analyze_frame(
    model,
    frame,
    confidence_threshold: float = CONFIDENCE_THRESHOLD,
) -> Tuple[FrameAnalysis, object]:
    """
    BGR 프레임 → (분석 결과, 스켈레톤 오버레이 이미지).

    여러 명이 잡히면 가장 큰 사람만 분석한다.
    """
    poses = estimate_poses(model, frame)
    if not poses:
        logger.debug("포즈 미검출 프레임")
        return FrameAnalysis(), frame.copy()

    analysis = analyze_keypoints(poses[0], confidence_threshold=confidence_threshold)
    return analysis, draw_posture_overlay(frame, analysis.metrics)


def analyze_image(
    model,
    data: bytes,
    name: str = "image",
    confidence_threshold: float = CONFIDENCE_THRESHOLD,
) -> PhotoAnalysis:
    image = decode_image(data)
    if image is None:
        logger.warning(f"이미지 디코딩 실패: {name}")
        raise ImageDecodeError(f"이미지를 읽을 수 없습니다: {name}")

    analysis, overlay = analyze_frame(model, image, confidence_threshold)
    if not analysis.pose_found:
        logger.warning(f"사람이 검출되지 않음: {name}")

    height, width = image.shape[:2]
    return PhotoAnalysis(
        name=name,
        analysis=analysis,
        width=int(width),
        height=int(height),
        overlay_png=encode_png(overlay),
    )


def analyze_images(
    model,
    files: Iterable[Tuple[str, bytes]],
    confidence_threshold: float = CONFIDENCE_THRESHOLD,
) -> List[PhotoAnalysis]:
    """
    여러 장의 사진을 각각 독립적으로 분석한다 (다중 사진 리포트용).

    읽을 수 없는 사진은 error가 채워진 PhotoAnalysis로 남기고 나머지는 계속 분석한다.
    """
    results = []
    for name, data in files:
        try:
            results.append(analyze_image(model, data, name, confidence_threshold))
        except ImageDecodeError as e:
            results.append(PhotoAnalysis(name=name, analysis=FrameAnalysis(), width=0, height=0, error=str(e)))
    failed = sum(1 for p in results if p.failed)
    logger.info(f"사진 {len(results)}장 분석 완료 (실패 {failed}장)")
    return results
