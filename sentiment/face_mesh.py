"""
Behavioural signals from MediaPipe Face Mesh landmarks.
"""
from __future__ import annotations
from typing import Optional
import logging
import cv2
import numpy as np

from sentiment.blink import BlinkDetector
from sentiment.config import Settings
from sentiment.geometry import as_landmark_array, behaviour_signals, calculate_ear
from sentiment.models import BehaviourSignals

logger = logging.getLogger(__name__)


class FaceMeshTracker:
    """Runs Face Mesh on BGR frames, feeds the blink detector, returns behaviour signals."""
    def __init__(self, settings: Settings, blink: Optional[BlinkDetector] = None):
        # Lazy import so tests can monkeypatch sys.modules['mediapipe']
        import mediapipe as mp

        self.s = settings
        self.blink = blink or BlinkDetector(settings.BLINK_THRESHOLD, settings.BLINK_DEBOUNCE)
        self._mesh = mp.solutions.face_mesh.FaceMesh(
            max_num_faces=1,
            refine_landmarks=True,
            min_detection_confidence=0.5,
            min_tracking_confidence=0.5,
        )
        logger.debug("[mesh] Face Mesh initialized")

    def process(self, frame: np.ndarray, now: Optional[float] = None) -> Optional[BehaviourSignals]:
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        results = self._mesh.process(rgb)
        faces = getattr(results, "multi_face_landmarks", None)
        if not faces:
            return None

        lm = as_landmark_array(faces[0])
        self.blink.update(calculate_ear(lm), now)
        return behaviour_signals(lm)

    def close(self):
        self._mesh.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
