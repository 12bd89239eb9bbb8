"""
실시간 자세 분석
웹캠 프레임 → YOLO pose 키포인트 → 자세 지표 → 스켈레톤 오버레이

키 조작:
  c      현재 화면 + 지표를 posture_report.png로 저장
  q/Esc  종료
"""
import argparse
import logging
import sys

import cv2

from apps.api.analysis import analyze_frame
from config import CAMERA_INDEX, CAMERA_SIZE, CAPTURE_PATH, CONFIDENCE_THRESHOLD
from utils.keypoints import load_pose_model
from utils.visualization import draw_report_banner

logger = logging.getLogger(__name__)

WINDOW_NAME = "Posture"


def open_camera(index, size=CAMERA_SIZE):
    cap = cv2.VideoCapture(index)
    if not cap.isOpened():
        raise RuntimeError(f"카메라를 열 수 없습니다 (index={index})")
    cap.set(cv2.CAP_PROP_FRAME_WIDTH, size[0])
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, size[1])
    return cap


def save_capture(overlay, lines, path=CAPTURE_PATH):
    """오버레이 이미지에 지표 띠를 얹어 PNG로 저장한다."""
    report = draw_report_banner(overlay, lines)
    ok = cv2.imwrite(str(path), report)
    if ok:
        logger.info(f"캡처 저장: {path}")
    else:
        logger.warning(f"캡처 저장 실패: {path}")
    return ok


def run(camera_index=CAMERA_INDEX, confidence_threshold=CONFIDENCE_THRESHOLD, model_name=None):
    model = load_pose_model(model_name)
    cap = open_camera(camera_index)
    try:
        while True:
            ok, frame = cap.read()
            if not ok:
                logger.warning("프레임 읽기 실패, 종료")
                break

            analysis, overlay = analyze_frame(model, frame, confidence_threshold)
            cv2.imshow(WINDOW_NAME, draw_report_banner(overlay, analysis.lines, alpha=0.4))

            key = cv2.waitKey(1) & 0xFF
            if key in (ord("q"), 27):
                break
            if key == ord("c"):
                save_capture(overlay, analysis.lines)
    finally:
        cap.release()
        cv2.destroyAllWindows()


def main(argv=None):
    parser = argparse.ArgumentParser(description="웹캠 실시간 자세 분석")
    parser.add_argument("--camera", type=int, default=CAMERA_INDEX, help="카메라 인덱스")
    parser.add_argument("--threshold", type=float, default=CONFIDENCE_THRESHOLD,
                        help="키포인트 신뢰도 임계값")
    parser.add_argument("--model", default=None, help="YOLO pose 모델 파일")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        run(args.camera, args.threshold, args.model)
    except RuntimeError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
