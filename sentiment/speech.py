"""
Speech metrics from an answer transcript.
"""
from __future__ import annotations
import re
from typing import List, Optional

from sentiment.models import SilenceSpan, SpeechMetrics
from sentiment.scoring import round_half_up

DEFAULT_FILLERS = r"\b(um|uh|er|ah|like|you know|basically|actually|so|well)\b"


def count_long_pauses(silence_spans: List[SilenceSpan], min_pause: float = 1.5) -> int:
    return sum(1 for s in silence_spans if (s.end - s.start) >= min_pause)


def calculate_speech_metrics(
    transcript: str,
    time_ms: float,
    silence_spans: Optional[List[SilenceSpan]] = None,
    long_pause_sec: float = 1.5,
    fillers_regex: str = DEFAULT_FILLERS,
) -> SpeechMetrics:
    """
    Word count, words per minute, filler count and a one-line summary.

    Args:
        transcript: Answer transcript.
        time_ms: Time spent on the answer (milliseconds).
        silence_spans: Optional silences from the answer audio; enables pause_count.
        long_pause_sec: Minimum silence (sec) counted as a pause.
        fillers_regex: Regex pattern for filler words.

    Returns:
        SpeechMetrics
    """
    words = [w for w in (transcript or "").split() if w]
    word_count = len(words)
    seconds = float(time_ms) / 1000.0
    wpm = round_half_up(word_count / seconds * 60.0) if seconds > 0 else 0

    fillers = re.findall(fillers_regex, transcript or "", flags=re.IGNORECASE)
    filler_count = len(fillers)

    length_desc = "Brief" if word_count < 10 else "Moderate" if word_count < 30 else "Detailed"
    pace_desc = "slow pace" if wpm < 100 else "steady pace" if wpm < 150 else "fast pace"
    filler_desc = ("no fillers" if filler_count == 0
                   else "few fillers" if filler_count <= 2
                   else "frequent fillers")

    return SpeechMetrics(
        word_count=word_count,
        wpm=wpm,
        filler_count=filler_count,
        summary=f"{length_desc}, {pace_desc}, {filler_desc}",
        pause_count=(count_long_pauses(silence_spans, long_pause_sec)
                     if silence_spans is not None else None),
    )
