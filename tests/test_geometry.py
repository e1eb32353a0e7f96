import types
import numpy as np
import pytest

from sentiment import geometry as g


def test_ear_open_and_closed(face_landmarks, closed_eye_landmarks):
    assert g.calculate_ear(face_landmarks) == pytest.approx(0.3)
    assert g.calculate_ear(closed_eye_landmarks) == pytest.approx(0.04)

def test_eye_aspect_ratio_zero_width_does_not_divide_by_zero(face_landmarks):
    lm = face_landmarks.copy()
    lm[133] = lm[33]
    assert np.isfinite(g.eye_aspect_ratio(lm, g.LEFT_EYE))

def test_gaze_centred(face_landmarks):
    assert g.gaze_direction(face_landmarks) == pytest.approx(0.5)

def test_gaze_looking_right(face_landmarks):
    lm = face_landmarks.copy()
    lm[468, 0] += 0.03
    lm[473, 0] += 0.03
    assert g.gaze_direction(lm) == pytest.approx(0.8)

def test_gaze_falls_back_without_iris(face_landmarks):
    # 468 points: no refined iris landmarks, eye-top points are used instead
    assert g.gaze_direction(face_landmarks[:468]) == pytest.approx(0.5)

def test_lip_tension(face_landmarks):
    assert g.lip_tension(face_landmarks) == pytest.approx(0.9)
    lm = face_landmarks.copy()
    lm[14] = (0.5, 0.75)
    assert g.lip_tension(lm) == 0.0

def test_eyebrow_height(face_landmarks):
    assert g.eyebrow_height(face_landmarks) == pytest.approx(0.035)

def test_head_pose(face_landmarks):
    hp = g.head_pose(face_landmarks)
    assert hp.yaw == pytest.approx(0.0) and hp.pitch == pytest.approx(0.0)
    lm = face_landmarks.copy()
    lm[1] = (0.60, 0.56)
    hp = g.head_pose(lm)
    assert hp.yaw == pytest.approx(0.2)
    assert hp.pitch == pytest.approx(0.1)

def test_as_landmark_array_accepts_mediapipe_shape(face_landmarks):
    mesh = types.SimpleNamespace(landmark=[types.SimpleNamespace(x=x, y=y, z=0.1) for x, y in face_landmarks])
    arr = g.as_landmark_array(mesh)
    assert arr.shape == (478, 2)
    assert np.allclose(arr, face_landmarks)
    arr3 = g.as_landmark_array(np.hstack([face_landmarks, np.zeros((478, 1))]))
    assert arr3.shape == (478, 2)
