"""
Per-frame combination of emotion (DeepFace) and behaviour (Face Mesh).
"""
from __future__ import annotations
from typing import Optional
import logging
import time
import numpy as np

from sentiment.config import Settings
from sentiment.emotion import analyze_frame_emotions, dominant_emotion
from sentiment.face_mesh import FaceMeshTracker
from sentiment.models import BehaviourSignals, FrameMetrics

logger = logging.getLogger(__name__)


class FrameAnalyser:
    """
    Turns a BGR frame into one FrameMetrics sample.

    A sample is only produced when the emotion classifier finds a face; the
    face mesh may still miss it, in which case neutral behaviour defaults apply.
    """
    def __init__(self, settings: Settings, tracker: Optional[FaceMeshTracker] = None):
        self.s = settings
        self.tracker = tracker or FaceMeshTracker(settings)
        self.last_behaviour: Optional[BehaviourSignals] = None

    @property
    def blink(self):
        return self.tracker.blink

    def analyse(self, frame: np.ndarray, now: Optional[float] = None) -> Optional[FrameMetrics]:
        now = time.time() if now is None else float(now)

        try:
            emotions = analyze_frame_emotions(frame, self.s)
        except Exception:
            # keep the loop alive: treat as no face
            logger.exception("[frame] emotion inference failed; skipping sample")
            emotions = None

        try:
            behaviour = self.tracker.process(frame, now)
        except Exception:
            logger.exception("[frame] face mesh failed")
            behaviour = None
        if behaviour is not None:
            self.last_behaviour = behaviour

        if emotions is None:
            return None

        b = self.last_behaviour or BehaviourSignals()
        return FrameMetrics(
            emotions=emotions,
            dominant_emotion=dominant_emotion(emotions),
            blink_count=self.tracker.blink.blink_count,
            gaze_direction=b.gaze_direction,
            lip_tension=b.lip_tension,
            eyebrow_height=b.eyebrow_height,
            head_pose=b.head_pose,
            timestamp=now,
        )

    def close(self):
        self.tracker.close()
