"""Overlay drawing for the live interview window.

- draw_overlays: dominant emotion, confidence / stress meters, NO_FACE flag,
  and optionally the current question and transcript line
"""
from __future__ import annotations
import cv2
import numpy as np
from typing import Optional, Tuple

from sentiment.models import FrameMetrics

GREEN = (0, 200, 0)
RED = (0, 0, 255)
WHITE = (255, 255, 255)
GREY = (90, 90, 90)


def _meter(out: np.ndarray, label: str, value: int, origin: Tuple[int, int],
           color: Tuple[int, int, int], width: int = 160, height: int = 12):
    x, y = origin
    value = max(0, min(100, int(value)))
    cv2.rectangle(out, (x, y), (x + width, y + height), GREY, 1)
    cv2.rectangle(out, (x, y), (x + int(width * value / 100.0), y + height), color, -1)
    cv2.putText(out, f"{label} {value}%", (x + width + 8, y + height - 1),
                cv2.FONT_HERSHEY_SIMPLEX, 0.45, color, 1, cv2.LINE_AA)


def draw_overlays(frame: np.ndarray,
                  metrics: Optional[FrameMetrics],
                  confidence: Optional[int] = None,
                  stress: Optional[int] = None,
                  question: Optional[str] = None,
                  transcript: Optional[str] = None) -> np.ndarray:
    """Draw the current reading on a copy of the frame.

    Args:
        frame: BGR image
        metrics: latest sample, or None when no face was found
        confidence, stress: 0..100 scores for the meters
        question: question text shown at the bottom
        transcript: last transcript line shown above the question

    Returns:
        Annotated copy of the frame
    """
    out = frame.copy()
    h, w = out.shape[:2]

    if metrics is None:
        cv2.putText(out, "NO_FACE", (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 1.0, RED, 2, cv2.LINE_AA)
    else:
        label = (metrics.dominant_emotion or "").capitalize()
        cv2.putText(out, label, (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.9, GREEN, 2, cv2.LINE_AA)

    if confidence is not None:
        _meter(out, "Confidence", confidence, (10, 45), GREEN)
    if stress is not None:
        _meter(out, "Stress", stress, (10, 65), RED)

    if transcript:
        cv2.putText(out, transcript[-70:], (10, max(0, h - 40)), cv2.FONT_HERSHEY_SIMPLEX,
                    0.45, WHITE, 1, cv2.LINE_AA)
    if question:
        cv2.putText(out, question[:90], (10, max(0, h - 15)), cv2.FONT_HERSHEY_SIMPLEX,
                    0.5, WHITE, 1, cv2.LINE_AA)
    return out
