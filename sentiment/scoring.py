"""
Heuristic confidence / stress / truth scores from averaged face signals.

Every score starts from a fixed base, adds weighted emotion probabilities and
behaviour deviations, then is clamped to 0..100 and rounded half-up.
"""
from __future__ import annotations
import math
from typing import Optional, Union

from sentiment.models import AverageMetrics, EmotionScores, FrameMetrics, HeadPose, SentimentSummary

Metrics = Union[AverageMetrics, FrameMetrics]


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))

def clamp_score(x: float) -> int:
    return max(0, min(100, round_half_up(x)))

def _gaze_diff(m: Metrics) -> float:
    return abs(m.gaze_direction - 0.5)

def _head_movement(m: Metrics) -> float:
    return abs(m.head_pose.yaw) + abs(m.head_pose.pitch)


def default_metrics() -> AverageMetrics:
    """Stand-in for an answer that produced no face samples."""
    return AverageMetrics(
        emotions=EmotionScores(neutral=0.5),
        dominant_emotion="neutral",
        blink_count=0,
        gaze_direction=0.5,
        lip_tension=0.0,
        eyebrow_height=0.0,
        head_pose=HeadPose(),
    )


def calculate_confidence_score(m: Metrics) -> int:
    score = 55.0  # slightly above neutral

    e = m.emotions
    score += e.neutral * 20
    score += e.happy * 40
    score -= e.fearful * 25
    score -= e.sad * 15
    score -= e.surprised * 10
    score -= e.angry * 8

    score -= _gaze_diff(m) * 10
    score -= _head_movement(m) * 5
    score -= m.lip_tension * 5

    return clamp_score(score)


def calculate_stress_score(m: Metrics, baseline: Optional[AverageMetrics] = None) -> int:
    score = 15.0

    e = m.emotions
    score += e.fearful * 40
    score += e.surprised * 20
    score += e.angry * 25
    score += e.sad * 20
    score += e.disgusted * 15

    if baseline is not None:
        blink_increase = m.blink_count - baseline.blink_count
        score += max(0.0, blink_increase * 2)

    score += _gaze_diff(m) * 20
    score += m.lip_tension * 15
    score += _head_movement(m) * 10

    return clamp_score(score)


def calculate_truth_score(m: Optional[Metrics], baseline: Optional[AverageMetrics] = None) -> int:
    if m is None:
        return 50

    score = 55.0

    e = m.emotions
    score += e.neutral * 25
    score += e.happy * 15
    score -= e.fearful * 30
    score -= e.surprised * 10
    score -= e.angry * 15
    score -= e.sad * 10

    score -= _gaze_diff(m) * 25
    score -= m.lip_tension * 10

    if baseline is not None:
        blink_increase = m.blink_count - baseline.blink_count
        score -= max(0.0, blink_increase * 2)
        score -= abs(m.eyebrow_height - baseline.eyebrow_height) * 50

    return clamp_score(score)


def gaze_stability(m: Optional[Metrics]) -> int:
    # not clamped: a gaze far outside the eye reads below zero
    if m is None:
        return 50
    return round_half_up((1.0 - _gaze_diff(m) * 2) * 100)


def summarize_sentiment(
    avg: Optional[AverageMetrics],
    baseline: Optional[AverageMetrics] = None,
    blink_count: int = 0,
) -> SentimentSummary:
    """Scores for one answer; falls back to default_metrics() when there were no samples."""
    m = avg or default_metrics()
    return SentimentSummary(
        confidence=calculate_confidence_score(m),
        stress=calculate_stress_score(m, baseline),
        truth=calculate_truth_score(avg, baseline),
        dominant_emotion=avg.dominant_emotion if avg else "neutral",
        blink_count=int(blink_count),
        gaze_stability=gaze_stability(avg),
    )
