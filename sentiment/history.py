"""
Rolling window of per-frame metrics and its average.
"""
from __future__ import annotations
from collections import deque
from typing import Deque, Optional

from sentiment.emotion import dominant_emotion
from sentiment.models import EMOTION_LABELS, AverageMetrics, EmotionScores, FrameMetrics, HeadPose


class MetricsHistory:
    """Keeps the latest `maxlen` samples (oldest dropped first)."""
    def __init__(self, maxlen: int = 30):
        self._items: Deque[FrameMetrics] = deque(maxlen=max(1, int(maxlen)))

    def push(self, metrics: FrameMetrics):
        self._items.append(metrics)

    def clear(self):
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def average(self, blink_count: int = 0) -> Optional[AverageMetrics]:
        """
        Mean of emotions, gaze, lip tension, eyebrow height and head pose.
        `blink_count` is carried through as-is (it is already cumulative).
        """
        if not self._items:
            return None

        n = float(len(self._items))
        emo = {k: 0.0 for k in EMOTION_LABELS}
        gaze = lip = brow = yaw = pitch = 0.0
        for m in self._items:
            for k in EMOTION_LABELS:
                emo[k] += getattr(m.emotions, k, 0.0) or 0.0
            gaze += m.gaze_direction
            lip += m.lip_tension
            brow += m.eyebrow_height
            yaw += m.head_pose.yaw
            pitch += m.head_pose.pitch

        emotions = EmotionScores(**{k: v / n for k, v in emo.items()})
        return AverageMetrics(
            emotions=emotions,
            dominant_emotion=dominant_emotion(emotions),
            blink_count=int(blink_count),
            gaze_direction=gaze / n,
            lip_tension=lip / n,
            eyebrow_height=brow / n,
            head_pose=HeadPose(yaw=yaw / n, pitch=pitch / n),
        )
