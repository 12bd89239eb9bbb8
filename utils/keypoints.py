"""
YOLO pose 모델 로딩 및 결과 → Keypoint 변환

모델 출력은 COCO 17 순서이므로 인덱스를 그대로 Landmark에 대응시킨다.
"""
import logging

from config import POSE_MODEL
from posture_modules.keypoint_resolver import Keypoint
from posture_modules.landmarks import Landmark

logger = logging.getLogger(__name__)


def load_pose_model(model_name=None):
    """YOLO pose 모델을 로드한다. 첫 호출 시 자동 다운로드."""
    from ultralytics import YOLO

    name = model_name or POSE_MODEL
    logger.info(f"포즈 모델 로드: {name}")
    return YOLO(name)


def select_best_person(result):
    """
    다중 인물 검출 시 바운딩 박스 면적이 가장 큰 사람을 선택한다.
    (카메라 앞 주 피사체가 가장 크게 찍힘)

    Returns:
        int: 선택된 사람 인덱스, 사람 미검출 시 -1
    """
    if result.boxes is None or len(result.boxes) == 0:
        return -1
    if len(result.boxes) == 1:
        return 0
    boxes = result.boxes.xyxy.cpu()
    areas = (boxes[:, 2] - boxes[:, 0]) * (boxes[:, 3] - boxes[:, 1])
    return int(areas.argmax())


def _to_numpy(tensor):
    return tensor.cpu().numpy() if hasattr(tensor, "cpu") else tensor


def yolo_result_to_keypoints(result, person_idx=None, normalized=False):
    """
    YOLO 추론 결과(단일 이미지)에서 한 사람의 키포인트 17개를 꺼낸다.

    Args:
        result: ultralytics Results
        person_idx: None이면 select_best_person()으로 선택
        normalized: True면 [0, 1] 정규화 좌표(xyn), False면 픽셀 좌표(xy)

    Returns:
        list[Keypoint] (17개) 또는 None (사람 미검출 시)
    """
    if result.keypoints is None or len(result.keypoints) == 0:
        return None

    if person_idx is None:
        person_idx = select_best_person(result)
    if person_idx < 0:
        return None

    coords = result.keypoints.xyn if normalized else result.keypoints.xy
    xy = _to_numpy(coords[person_idx])                                    # (17, 2)
    conf = result.keypoints.conf
    scores = _to_numpy(conf[person_idx]) if conf is not None else [1.0] * len(xy)  # (17,)

    return [
        Keypoint(
            x=float(xy[lm][0]),
            y=float(xy[lm][1]),
            score=round(float(scores[lm]), 4),
            name=lm.key,
        )
        for lm in Landmark
    ]


def estimate_poses(model, frame, normalized=False):
    """
    프레임 한 장에서 검출된 모든 사람의 키포인트 리스트를 반환한다.
    가장 큰 사람이 맨 앞에 온다.
    """
    results = model(frame, verbose=False)
    if not results:
        return []
    result = results[0]
    if result.keypoints is None or len(result.keypoints) == 0:
        return []

    best = select_best_person(result)
    order = [best] + [i for i in range(len(result.keypoints)) if i != best]
    poses = []
    for idx in order:
        if idx < 0:
            continue
        kps = yolo_result_to_keypoints(result, person_idx=idx, normalized=normalized)
        if kps is not None:
            poses.append(kps)
    return poses
