"""
Facial emotion distribution with DeepFace.
"""
from __future__ import annotations
from typing import Dict, Mapping, Optional
import logging
import numpy as np

from sentiment.config import Settings
from sentiment.models import EMOTION_LABELS, EmotionScores

logger = logging.getLogger(__name__)

# DeepFace label -> our label
DEEPFACE_LABELS = {
    "neutral": "neutral",
    "happy": "happy",
    "sad": "sad",
    "angry": "angry",
    "fear": "fearful",
    "disgust": "disgusted",
    "surprise": "surprised",
}


def dominant_emotion(scores: EmotionScores | Mapping[str, float]) -> str:
    """Highest-probability label; on ties the later label in EMOTION_LABELS wins."""
    probs = scores.model_dump() if isinstance(scores, EmotionScores) else dict(scores)
    best_label, best_p = None, None
    for label in EMOTION_LABELS:
        p = float(probs.get(label, 0.0) or 0.0)
        if best_p is None or not (best_p > p):
            best_label, best_p = label, p
    return best_label


def to_emotion_scores(raw: Mapping[str, float]) -> EmotionScores:
    """Map a DeepFace emotion dict (percentages) onto 0..1 probabilities."""
    out: Dict[str, float] = {}
    for k, v in (raw or {}).items():
        label = DEEPFACE_LABELS.get(str(k).lower())
        if label is None:
            continue
        try:
            out[label] = float(v) / 100.0
        except (TypeError, ValueError):
            out[label] = 0.0
    return EmotionScores(**out)


def analyze_frame_emotions(frame: np.ndarray, settings: Settings) -> Optional[EmotionScores]:
    """
    Run DeepFace on one BGR frame and return the first valid face's distribution.

    Returns None if no face passes the size/confidence gates.
    """
    # Lazy import for easier testing and to avoid loading heavy stacks too early
    from deepface import DeepFace

    def _valid_face(r: Dict) -> bool:
        reg = (r or {}).get("region") or {}
        w = int(reg.get("w", 0)); h = int(reg.get("h", 0))
        ok_size = (w >= settings.MIN_FACE_BOX and h >= settings.MIN_FACE_BOX)
        conf = r.get("face_confidence")
        try:
            conf = float(conf) if conf is not None else 1.0
        except (TypeError, ValueError):
            conf = 1.0
        return ok_size and conf >= settings.MIN_FACE_CONFIDENCE

    res = DeepFace.analyze(
        frame,
        actions=["emotion"],
        enforce_detection=False,
        detector_backend=settings.DETECTOR_BACKEND,
    )
    res = res if isinstance(res, list) else [res]
    faces = [r for r in res if isinstance(r, dict) and _valid_face(r)]
    if not faces:
        return None

    raw = faces[0].get("emotion")
    if not isinstance(raw, dict) or not raw:
        # only a label came back; treat it as certain
        label = DEEPFACE_LABELS.get(str(faces[0].get("dominant_emotion") or "").lower())
        return EmotionScores(**{label: 1.0}) if label else None
    return to_emotion_scores(raw)
