import cv2
import numpy as np
import pytest

import sentiment.pipeline as pipe
from sentiment.blink import BlinkDetector
from sentiment.config import Settings
from sentiment.models import EmotionScores, FrameMetrics, SilenceSpan


class DummyAnalyser:
    def __init__(self):
        self.blink = BlinkDetector()
        self.seen = []
        self.closed = False
    def analyse(self, frame, now=None):
        self.seen.append(now)
        if now is not None and now >= 1.6:
            return None  # face lost near the end
        return FrameMetrics(emotions=EmotionScores(happy=1.0), dominant_emotion="happy", timestamp=now)
    def close(self):
        self.closed = True


def _write_video(path, n=10, fps=5):
    h, w = 32, 32
    writer = cv2.VideoWriter(str(path), cv2.VideoWriter_fourcc(*"MJPG"), fps, (w, h))
    for _ in range(n):
        writer.write(np.zeros((h, w, 3), dtype=np.uint8))
    writer.release()


def test_analyze_answer_video(monkeypatch, tmp_path):
    vid = tmp_path / "answer.avi"
    _write_video(vid)
    monkeypatch.setattr(pipe, "has_audio_stream", lambda p: True)
    monkeypatch.setattr(pipe, "extract_audio_from_video", lambda *a, **k: str(tmp_path / "answer.wav"))
    monkeypatch.setattr(pipe, "transcribe_audio", lambda *a, **k: ("so hello world", "en"))
    monkeypatch.setattr(pipe, "detect_silences", lambda *a, **k: ([SilenceSpan(start=0.1, end=1.8)], 2.0))

    analyser = DummyAnalyser()
    s = Settings(FRAME_SAMPLE_INTERVAL=0.2, BASELINE_SECONDS=1.0)
    res = pipe.analyze_answer_video(str(vid), s, question="What is a closure?", analyser=analyser)

    assert res["question"] == "What is a closure?"
    assert res["transcript"] == "so hello world"
    assert res["time_ms"] == 2000
    assert len(res["timeline"]) == 10
    assert res["timeline"][-1]["flag"] == "NO_FACE"
    assert res["baseline"] is not None
    assert res["sentiment"]["confidence"] == 95
    assert res["sentiment"]["dominant_emotion"] == "happy"
    assert res["speech"]["word_count"] == 3 and res["speech"]["wpm"] == 90
    assert res["speech"]["pause_count"] == 1
    # caller-owned analyser is not closed
    assert analyser.closed is False

def test_analyze_answer_video_without_audio(monkeypatch, tmp_path):
    vid = tmp_path / "silent.avi"
    _write_video(vid, n=5)
    monkeypatch.setattr(pipe, "has_audio_stream", lambda p: False)
    res = pipe.analyze_answer_video(str(vid), Settings(), analyser=DummyAnalyser())
    assert res["transcript"] == "No response provided"
    assert res["question"] == pipe.RECORDED_QUESTION

def test_analyze_answer_video_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        pipe.analyze_answer_video(str(tmp_path / "nope.mp4"), Settings(), analyser=DummyAnalyser())

def test_analyze_answer_audio(monkeypatch, tmp_path):
    import soundfile as sf
    wav = tmp_path / "a.wav"
    sf.write(wav, np.zeros(16000, dtype="float32"), 16000)
    monkeypatch.setattr(pipe, "transcribe_audio", lambda *a, **k: ("hello world", "en"))
    monkeypatch.setattr(pipe, "detect_silences", lambda *a, **k: ([], 1.0))
    res = pipe.analyze_answer_audio(str(wav), Settings())
    assert res["transcript"] == "hello world"
    assert res["speech"]["wpm"] == 120
    assert res["sentiment"]["confidence"] == 65
