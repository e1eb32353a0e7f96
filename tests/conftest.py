import sys
import types

import numpy as np
import pytest

from sentiment.config import Settings


def _neutral_face() -> np.ndarray:
    """478 refined Face Mesh points for a centred, relaxed face (normalized coords)."""
    lm = np.full((478, 2), 0.5, dtype=float)
    # left eye (image-left): corners 33 / 133, lids 160-144, 158-153
    lm[33] = (0.30, 0.40); lm[133] = (0.40, 0.40)
    lm[160] = (0.33, 0.385); lm[144] = (0.33, 0.415)
    lm[158] = (0.37, 0.385); lm[153] = (0.37, 0.415)
    # right eye: corners 362 / 263, lids 385-380, 387-373
    lm[362] = (0.60, 0.40); lm[263] = (0.70, 0.40)
    lm[385] = (0.63, 0.385); lm[380] = (0.63, 0.415)
    lm[387] = (0.67, 0.385); lm[373] = (0.67, 0.415)
    # eye tops / iris
    lm[159] = (0.35, 0.385); lm[386] = (0.65, 0.385)
    lm[468] = (0.35, 0.40); lm[473] = (0.65, 0.40)
    # brows
    lm[105] = (0.35, 0.35); lm[334] = (0.65, 0.35)
    # lips
    lm[13] = (0.50, 0.60); lm[14] = (0.50, 0.61)
    # head box
    lm[1] = (0.50, 0.50)
    lm[234] = (0.25, 0.50); lm[454] = (0.75, 0.50)
    lm[10] = (0.50, 0.20); lm[152] = (0.50, 0.80)
    return lm


@pytest.fixture
def face_landmarks():
    return _neutral_face()


@pytest.fixture
def closed_eye_landmarks():
    lm = _neutral_face()
    for top, bottom in ((160, 144), (158, 153), (385, 380), (387, 373)):
        lm[top, 1] = 0.398
        lm[bottom, 1] = 0.402
    return lm


@pytest.fixture
def settings():
    return Settings()


class FakeFaceMesh:
    """Stands in for mp.solutions.face_mesh.FaceMesh; returns queued landmark sets."""
    instances = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.queue = []
        self.closed = False
        FakeFaceMesh.instances.append(self)

    def process(self, rgb):
        lm = self.queue.pop(0) if self.queue else None
        faces = None
        if lm is not None:
            faces = [types.SimpleNamespace(
                landmark=[types.SimpleNamespace(x=float(x), y=float(y), z=0.0) for x, y in lm]
            )]
        return types.SimpleNamespace(multi_face_landmarks=faces)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_mediapipe(monkeypatch):
    FakeFaceMesh.instances = []
    mp = types.SimpleNamespace(
        solutions=types.SimpleNamespace(face_mesh=types.SimpleNamespace(FaceMesh=FakeFaceMesh))
    )
    monkeypatch.setitem(sys.modules, "mediapipe", mp)
    return FakeFaceMesh


def make_deepface(results):
    """Fake deepface module whose analyze() returns `results` (or calls it if callable)."""
    class DeepFace:
        calls = 0

        @staticmethod
        def analyze(img_path, actions=None, enforce_detection=None, detector_backend=None, **kw):
            DeepFace.calls += 1
            return results(img_path) if callable(results) else results

    return types.SimpleNamespace(DeepFace=DeepFace)


HAPPY_FACE = [{
    "region": {"x": 10, "y": 10, "w": 120, "h": 120},
    "face_confidence": 0.95,
    "dominant_emotion": "happy",
    "emotion": {"angry": 1.0, "disgust": 0.0, "fear": 2.0, "happy": 80.0,
                "sad": 2.0, "surprise": 5.0, "neutral": 10.0},
}]
