import os
from pathlib import Path

# ===== 포즈 모델 설정 =====
POSE_MODEL = os.environ.get('POSTURE_POSE_MODEL', 'yolo26n-pose.pt')

# ===== 신뢰도 임계값 =====
CONFIDENCE_THRESHOLD = float(os.environ.get('POSTURE_CONFIDENCE_THRESHOLD', '0.4'))

# ===== 오버레이 색상 기준 =====
TILT_THRESHOLD   = 5     # 도(°)
OFFSET_THRESHOLD = 20    # px

# ===== 카메라 설정 =====
CAMERA_INDEX = int(os.environ.get('POSTURE_CAMERA_INDEX', '0'))
CAMERA_SIZE  = (640, 480)   # (width, height) 희망값
CAPTURE_PATH = Path('posture_report.png')

# ===== 업로드 제한 =====
SUPPORTED_IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.bmp', '.webp'}
MAX_UPLOAD_BYTES = 20 * 1024 * 1024
