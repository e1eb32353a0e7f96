"""
Blink counting from the eye-aspect-ratio signal.
"""
from __future__ import annotations
import time
from typing import Optional


class BlinkDetector:
    """Count closed-eye transitions with a short debounce between blinks."""
    def __init__(self, threshold: float = 0.2, debounce: float = 0.1):
        self.threshold = float(threshold)
        self.debounce = float(debounce)
        self.blink_count = 0
        self.eyes_closed = False
        self.last_blink_t = float("-inf")

    def update(self, ear: float, now: Optional[float] = None) -> int:
        """
        Feed one EAR reading.
        - below threshold with eyes open: eyes close; counts a blink if the
          previous blink is older than `debounce` seconds
        - at/above threshold: eyes open again
        Returns the running blink count.
        """
        now = time.monotonic() if now is None else float(now)
        if ear < self.threshold and not self.eyes_closed:
            self.eyes_closed = True
            if now - self.last_blink_t > self.debounce:
                self.blink_count += 1
                self.last_blink_t = now
        elif ear >= self.threshold:
            self.eyes_closed = False
        return self.blink_count

    def reset(self):
        self.blink_count = 0
