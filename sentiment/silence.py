"""
Energy-based silence detection using librosa RMS.
"""
from __future__ import annotations
from typing import List, Optional
import numpy as np
import librosa
from sentiment.models import SilenceSpan

def find_silences(
    y: np.ndarray,
    sr: int,
    min_silence_dur: float = 0.35,
    threshold: Optional[float] = None,
    frame_length: int = 2048,
    hop_length: int = 512,
) -> List[SilenceSpan]:
    """
    Silence spans in a mono signal. If `threshold` is None it is taken from the
    RMS distribution (80% of the 25th percentile).
    """
    if y.size == 0:
        return []
    rms = librosa.feature.rms(y=y, frame_length=frame_length, hop_length=hop_length)[0]
    times = librosa.frames_to_time(range(len(rms)), sr=sr, hop_length=hop_length)
    thr = float(threshold) if threshold is not None else max(np.percentile(rms, 25) * 0.8, 1e-6)

    spans: List[SilenceSpan] = []
    start_idx = None
    for i, is_silent in enumerate(rms < thr):
        if is_silent and start_idx is None:
            start_idx = i
        elif (not is_silent) and (start_idx is not None):
            s, e = float(times[start_idx]), float(times[i])
            if (e - s) >= min_silence_dur:
                spans.append(SilenceSpan(start=round(s, 2), end=round(e, 2)))
            start_idx = None

    # Tail case
    if start_idx is not None:
        s, e = float(times[start_idx]), float(times[-1])
        if (e - s) >= min_silence_dur:
            spans.append(SilenceSpan(start=round(s, 2), end=round(e, 2)))
    return spans

def detect_silences(
    audio_path: str,
    sample_rate: int = 16000,
    min_silence_dur: float = 0.35,
    threshold: Optional[float] = None,
) -> tuple[list[SilenceSpan], float]:
    """
    Load an audio file and detect silences.

    Returns:
        (silence_spans, duration_seconds)
    """
    y, sr = librosa.load(audio_path, sr=sample_rate, mono=True)
    duration = librosa.get_duration(y=y, sr=sr)
    return find_silences(y, sr, min_silence_dur, threshold), float(duration)
