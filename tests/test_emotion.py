import sys
import numpy as np

import sentiment.emotion as emotion_mod
from sentiment.models import EmotionScores
from conftest import make_deepface, HAPPY_FACE


def test_dominant_emotion():
    assert emotion_mod.dominant_emotion(EmotionScores(happy=0.7, neutral=0.2)) == "happy"
    assert emotion_mod.dominant_emotion({"sad": 0.4, "fearful": 0.5}) == "fearful"

def test_dominant_emotion_tie_prefers_later_label():
    assert emotion_mod.dominant_emotion(EmotionScores()) == "surprised"
    assert emotion_mod.dominant_emotion(EmotionScores(neutral=0.5, happy=0.5)) == "happy"

def test_to_emotion_scores_maps_deepface_labels():
    s = emotion_mod.to_emotion_scores({"fear": 50.0, "disgust": 10.0, "surprise": 40.0, "contempt": 3})
    assert s.fearful == 0.5 and s.disgusted == 0.1 and s.surprised == 0.4
    assert s.neutral == 0.0

def test_analyze_frame_emotions(monkeypatch, settings):
    monkeypatch.setitem(sys.modules, "deepface", make_deepface(HAPPY_FACE))
    frame = np.zeros((160, 160, 3), dtype=np.uint8)
    s = emotion_mod.analyze_frame_emotions(frame, settings)
    assert s.happy == 0.8
    assert emotion_mod.dominant_emotion(s) == "happy"

def test_analyze_frame_emotions_rejects_weak_faces(monkeypatch, settings):
    weak = [{"region": {"x": 0, "y": 0, "w": 160, "h": 160}, "face_confidence": 0.0,
             "emotion": {"happy": 100.0}}]
    monkeypatch.setitem(sys.modules, "deepface", make_deepface(weak))
    frame = np.zeros((160, 160, 3), dtype=np.uint8)
    assert emotion_mod.analyze_frame_emotions(frame, settings) is None

    tiny = [{"region": {"x": 0, "y": 0, "w": 12, "h": 12}, "face_confidence": 0.9,
             "emotion": {"happy": 100.0}}]
    monkeypatch.setitem(sys.modules, "deepface", make_deepface(tiny))
    assert emotion_mod.analyze_frame_emotions(frame, settings) is None

def test_analyze_frame_emotions_label_only(monkeypatch, settings):
    only_label = {"region": {"x": 0, "y": 0, "w": 80, "h": 80}, "dominant_emotion": "fear"}
    monkeypatch.setitem(sys.modules, "deepface", make_deepface(only_label))
    s = emotion_mod.analyze_frame_emotions(np.zeros((80, 80, 3), dtype=np.uint8), settings)
    assert s.fearful == 1.0
