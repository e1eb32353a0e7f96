import numpy as np

from sentiment.models import EmotionScores, FrameMetrics
from sentiment.visual import draw_overlays


def _frame():
    return np.zeros((240, 480, 3), dtype=np.uint8)

def test_draw_overlays_no_face_leaves_input_untouched():
    frame = _frame()
    out = draw_overlays(frame, None)
    assert out.shape == frame.shape
    assert frame.sum() == 0
    # red NO_FACE label in the top-left corner
    assert out[5:40, 0:200, 2].max() > 0

def test_draw_overlays_meters_and_text():
    m = FrameMetrics(emotions=EmotionScores(happy=0.9), dominant_emotion="happy")
    out = draw_overlays(_frame(), m, confidence=80, stress=20,
                        question="Tell me about yourself", transcript="I have been")
    assert out[45:58, 10:170, 1].max() == 200          # confidence bar filled green
    assert out[65:78, 10:170, 2].max() == 255          # stress bar red
    assert out[190:240, :, :].max() > 0                # question / transcript lines

def test_draw_overlays_clamps_meter_value():
    m = FrameMetrics(emotions=EmotionScores(), dominant_emotion="neutral")
    out = draw_overlays(_frame(), m, confidence=150)
    # value is clamped to a full bar
    assert out[50, 168, 1] == 200
