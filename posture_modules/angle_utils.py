"""
각도/거리/중점 계산 유틸리티

모든 점은 (x, y) 픽셀 좌표. 부재(None) 입력은 when_all()로 걸러서 넘긴다.
"""
import math

import numpy as np
from numpy.linalg import norm


def to_degrees(radians):
    """라디안을 도(°)로 변환한다."""
    return float(radians * (180.0 / math.pi))


def angle_between(p1, p2):
    """p1 → p2 벡터의 방향각(라디안, (-π, π])."""
    return float(np.arctan2(p2[1] - p1[1], p2[0] - p1[0]))


def cal_distance(p1, p2):
    """두 점 사이의 유클리드 거리를 반환한다."""
    p1, p2 = map(np.asarray, (p1, p2))
    return float(norm(p2 - p1))


def midpoint(p1, p2):
    """두 점의 중점을 반환한다."""
    return ((p1[0] + p2[0]) / 2, (p1[1] + p2[1]) / 2)


def angle_at_vertex(a, vertex, c):
    """
    코사인 법칙으로 ∠(a, vertex, c)를 도(°) 단위로 반환한다. 범위 [0, 180].

    vertex가 a 또는 c와 겹치면(변 길이 0) None.
    """
    s1 = cal_distance(vertex, a)
    s2 = cal_distance(vertex, c)
    s3 = cal_distance(a, c)
    if s1 * s2 == 0:
        return None
    # 거의 일직선인 점에서 부동소수 오차로 [-1, 1]을 벗어나는 것을 막는다
    cos_val = np.clip((s1 ** 2 + s2 ** 2 - s3 ** 2) / (2 * s1 * s2), -1.0, 1.0)
    return to_degrees(math.acos(float(cos_val)))


def when_all(fn, *values):
    """
    values가 모두 존재할 때만 fn(*values)를 계산하고, 하나라도 None이면 None.

    지표 계산의 부재 규칙을 한 곳에서 강제한다.
    """
    if any(v is None for v in values):
        return None
    return fn(*values)
