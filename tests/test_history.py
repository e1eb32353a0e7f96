import pytest

from sentiment.history import MetricsHistory
from sentiment.models import EmotionScores, FrameMetrics, HeadPose


def _m(happy=0.0, neutral=0.0, gaze=0.5, yaw=0.0, t=0.0):
    e = EmotionScores(happy=happy, neutral=neutral)
    return FrameMetrics(emotions=e, dominant_emotion="happy" if happy > neutral else "neutral",
                        gaze_direction=gaze, head_pose=HeadPose(yaw=yaw), timestamp=t)


def test_average_empty_is_none():
    assert MetricsHistory().average() is None

def test_average_means_and_dominant():
    h = MetricsHistory()
    h.push(_m(happy=0.8, neutral=0.2, gaze=0.4, yaw=0.1))
    h.push(_m(happy=0.2, neutral=0.6, gaze=0.6, yaw=-0.3))
    avg = h.average(blink_count=4)
    assert avg.emotions.happy == pytest.approx(0.5)
    assert avg.emotions.neutral == pytest.approx(0.4)
    assert avg.gaze_direction == pytest.approx(0.5)
    assert avg.head_pose.yaw == pytest.approx(-0.1)
    assert avg.dominant_emotion == "happy"
    assert avg.blink_count == 4

def test_window_keeps_latest_thirty():
    h = MetricsHistory(30)
    for i in range(35):
        h.push(_m(t=float(i)))
    assert len(h) == 30
    assert [m.timestamp for m in h][0] == 5.0
    h.clear()
    assert len(h) == 0
