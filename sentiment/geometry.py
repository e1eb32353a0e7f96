"""Landmark geometry for MediaPipe Face Mesh output.

All functions take a landmark set (anything `as_landmark_array` accepts) and
work on normalized 2D image coordinates:

- calculate_ear: eye-aspect-ratio averaged over both eyes (blink signal)
- gaze_direction: horizontal iris position inside the eye, 0.5 = centred
- lip_tension: 1.0 for pressed lips, 0.0 for an open mouth
- eyebrow_height: vertical eye-to-eyebrow gap
- head_pose: nose offset relative to the face box (yaw, pitch)
"""
from __future__ import annotations
from typing import Sequence
import numpy as np

from sentiment.models import BehaviourSignals, HeadPose

# Face Mesh indices
LEFT_EYE = (33, 160, 158, 133, 153, 144)
RIGHT_EYE = (362, 385, 387, 263, 373, 380)
LEFT_IRIS, RIGHT_IRIS = 468, 473          # only present with refine_landmarks=True
LEFT_EYE_TOP, RIGHT_EYE_TOP = 159, 386
LEFT_EYE_OUTER, LEFT_EYE_INNER = 33, 133
RIGHT_EYE_OUTER, RIGHT_EYE_INNER = 263, 362
UPPER_LIP, LOWER_LIP = 13, 14
LEFT_BROW, RIGHT_BROW = 105, 334
NOSE_TIP, CHIN, FOREHEAD = 1, 152, 10
LEFT_CHEEK, RIGHT_CHEEK = 234, 454

EPS = 1e-6


def as_landmark_array(landmarks) -> np.ndarray:
    """Normalize a landmark set to a float (N, 2) array of x, y."""
    if isinstance(landmarks, np.ndarray):
        return landmarks[:, :2].astype(float)
    # mediapipe NormalizedLandmarkList
    if hasattr(landmarks, "landmark"):
        landmarks = landmarks.landmark
    pts = []
    for p in landmarks:
        if hasattr(p, "x"):
            pts.append((float(p.x), float(p.y)))
        else:
            pts.append((float(p[0]), float(p[1])))
    return np.asarray(pts, dtype=float).reshape(-1, 2)


def distance(p1: np.ndarray, p2: np.ndarray) -> float:
    return float(np.linalg.norm(np.asarray(p1, dtype=float)[:2] - np.asarray(p2, dtype=float)[:2]))


def eye_aspect_ratio(landmarks, indices: Sequence[int]) -> float:
    """
    EAR for one eye given six indices [p1..p6]:
        (|p2 - p6| + |p3 - p5|) / (2 * |p1 - p4|)
    """
    lm = as_landmark_array(landmarks)
    p1, p2, p3, p4, p5, p6 = (lm[i] for i in indices)
    vertical1 = distance(p2, p6)
    vertical2 = distance(p3, p5)
    horizontal = distance(p1, p4)
    return (vertical1 + vertical2) / (2.0 * max(horizontal, EPS))


def calculate_ear(landmarks) -> float:
    lm = as_landmark_array(landmarks)
    return (eye_aspect_ratio(lm, LEFT_EYE) + eye_aspect_ratio(lm, RIGHT_EYE)) / 2.0


def gaze_direction(landmarks) -> float:
    """Mean horizontal iris position of both eyes; 0.5 is centred for each eye."""
    lm = as_landmark_array(landmarks)
    if len(lm) > RIGHT_IRIS:
        left_iris, right_iris = lm[LEFT_IRIS], lm[RIGHT_IRIS]
    else:
        left_iris, right_iris = lm[LEFT_EYE_TOP], lm[RIGHT_EYE_TOP]

    left_pos = _iris_position(left_iris, lm[LEFT_EYE_OUTER], lm[LEFT_EYE_INNER])
    right_pos = _iris_position(right_iris, lm[RIGHT_EYE_OUTER], lm[RIGHT_EYE_INNER])
    return float((left_pos + right_pos) / 2.0)


def _iris_position(iris: np.ndarray, corner_a: np.ndarray, corner_b: np.ndarray) -> float:
    # measured from the image-left corner for both eyes, so 0.5 is centred either way
    left_corner = corner_a if corner_a[0] <= corner_b[0] else corner_b
    width = max(distance(corner_a, corner_b), EPS)
    return float((iris[0] - left_corner[0]) / width)


def lip_tension(landmarks) -> float:
    lm = as_landmark_array(landmarks)
    gap = distance(lm[UPPER_LIP], lm[LOWER_LIP])
    return 1.0 - min(gap * 10.0, 1.0)


def eyebrow_height(landmarks) -> float:
    lm = as_landmark_array(landmarks)
    left = lm[LEFT_EYE_TOP][1] - lm[LEFT_BROW][1]
    right = lm[RIGHT_EYE_TOP][1] - lm[RIGHT_BROW][1]
    return float((left + right) / 2.0)


def head_pose(landmarks) -> HeadPose:
    lm = as_landmark_array(landmarks)
    nose = lm[NOSE_TIP]
    left_cheek, right_cheek = lm[LEFT_CHEEK], lm[RIGHT_CHEEK]
    face_width = max(distance(left_cheek, right_cheek), EPS)
    yaw = (nose[0] - (left_cheek[0] + right_cheek[0]) / 2.0) / face_width

    chin, forehead = lm[CHIN], lm[FOREHEAD]
    face_height = max(distance(forehead, chin), EPS)
    pitch = (nose[1] - (forehead[1] + chin[1]) / 2.0) / face_height
    return HeadPose(yaw=float(yaw), pitch=float(pitch))


def behaviour_signals(landmarks) -> BehaviourSignals:
    lm = as_landmark_array(landmarks)
    return BehaviourSignals(
        gaze_direction=gaze_direction(lm),
        lip_tension=lip_tension(lm),
        eyebrow_height=eyebrow_height(lm),
        head_pose=head_pose(lm),
    )
