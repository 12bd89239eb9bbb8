"""Shared fixtures for posture analysis tests."""

import numpy as np
import pytest

from posture_modules import Keypoint, Landmark

# 정면 기립 자세 (픽셀 좌표)
UPRIGHT = {
    Landmark.NOSE: (150, 30),
    Landmark.LEFT_EYE: (140, 25),
    Landmark.RIGHT_EYE: (160, 25),
    Landmark.LEFT_EAR: (130, 30),
    Landmark.RIGHT_EAR: (170, 30),
    Landmark.LEFT_SHOULDER: (100, 50),
    Landmark.RIGHT_SHOULDER: (200, 50),
    Landmark.LEFT_ELBOW: (90, 120),
    Landmark.RIGHT_ELBOW: (210, 120),
    Landmark.LEFT_WRIST: (85, 180),
    Landmark.RIGHT_WRIST: (215, 180),
    Landmark.LEFT_HIP: (120, 200),
    Landmark.RIGHT_HIP: (180, 200),
    Landmark.LEFT_KNEE: (120, 300),
    Landmark.RIGHT_KNEE: (180, 300),
    Landmark.LEFT_ANKLE: (120, 400),
    Landmark.RIGHT_ANKLE: (180, 400),
}


def build_keypoints(coords=None, scores=None):
    """UPRIGHT 기반 17개 Keypoint. coords/scores로 랜드마크별 덮어쓰기."""
    coords = {**UPRIGHT, **(coords or {})}
    scores = scores or {}
    return [
        Keypoint(float(coords[lm][0]), float(coords[lm][1]), scores.get(lm, 1.0), lm.key)
        for lm in Landmark
    ]


@pytest.fixture
def make_keypoints():
    return build_keypoints


@pytest.fixture
def upright_keypoints():
    return build_keypoints()


class FakeTensor(np.ndarray):
    """ultralytics 텐서 대용 (.cpu().numpy() 지원)."""

    def cpu(self):
        return self

    def numpy(self):
        return np.asarray(self)


def _tensor(data):
    return np.asarray(data, dtype=float).view(FakeTensor)


class FakeKeypoints:
    def __init__(self, xy, conf, width, height):
        self.xy = _tensor(xy)
        self.xyn = _tensor(np.asarray(xy, dtype=float) / [width, height])
        self.conf = _tensor(conf) if conf is not None else None

    def __len__(self):
        return len(self.xy)


class FakeBoxes:
    def __init__(self, xyxy):
        self.xyxy = _tensor(xyxy)

    def __len__(self):
        return len(self.xyxy)


class FakeResult:
    def __init__(self, people, width=640, height=480):
        """people: [(keypoint 리스트, 박스 (x1, y1, x2, y2)), ...]"""
        if not people:
            self.keypoints = None
            self.boxes = None
            return
        xy = [[(kp.x, kp.y) for kp in kps] for kps, _ in people]
        conf = [[kp.score for kp in kps] for kps, _ in people]
        self.keypoints = FakeKeypoints(xy, conf, width, height)
        self.boxes = FakeBoxes([box for _, box in people])


class FakePoseModel:
    """model(frame, verbose=False) → [FakeResult] 형태의 가짜 YOLO 모델."""

    def __init__(self, people=None):
        self.people = people or []
        self.calls = 0

    def __call__(self, frame, verbose=False):
        self.calls += 1
        height, width = frame.shape[:2]
        return [FakeResult(self.people, width, height)]


@pytest.fixture
def fake_model():
    return FakePoseModel([(build_keypoints(), (80, 20, 220, 410))])


@pytest.fixture
def empty_model():
    return FakePoseModel([])


@pytest.fixture
def blank_frame():
    return np.zeros((480, 640, 3), dtype=np.uint8)
