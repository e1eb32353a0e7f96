# sentiment/live.py
"""
Live mock interview in an OpenCV window.

Webcam frames feed the FrameAnalyser continuously; the microphone is recorded
per answer and transcribed with Whisper when the candidate moves on.

Keys:
- n: finish the current answer and go to the next question
- r: discard the current answer and start it again
- q: quit (answers given so far are still evaluated)
"""

from __future__ import annotations

import os
import tempfile
import threading
import time
from typing import Callable, List, Optional

import cv2
import numpy as np
import librosa
import soundfile as sf

from sentiment.asr import transcribe_audio
from sentiment.config import Settings
from sentiment.frame import FrameAnalyser
from sentiment.models import Evaluation, QuestionResult
from sentiment.scoring import calculate_confidence_score, calculate_stress_score, round_half_up
from sentiment.session import InterviewSession
from sentiment.silence import find_silences
from sentiment.speech import calculate_speech_metrics
from sentiment.visual import draw_overlays

import logging

logger = logging.getLogger(__name__)

WINDOW_TITLE = "Mock Interview (n=next, r=reset, q=quit)"
WHISPER_RATE = 16000


class AnswerRecorder:
    """Microphone capture into an in-memory buffer for the current answer."""
    def __init__(self, sample_rate: int = 16000, chunk_sec: float = 0.5):
        self.sr = int(sample_rate)
        self.chunk_frames = int(self.sr * chunk_sec)
        self._chunks: List[np.ndarray] = []
        self._lock = threading.Lock()
        self._stream = None

    def _callback(self, indata, frames, time_info, status):
        with self._lock:
            self._chunks.append(indata.copy().astype(np.float32).reshape(-1))

    def start(self):
        # lazy import: PortAudio is only needed when a microphone is used
        import sounddevice as sd
        self._stream = sd.InputStream(callback=self._callback, channels=1,
                                      samplerate=self.sr, blocksize=self.chunk_frames)
        self._stream.start()

    def stop(self):
        if self._stream is not None:
            self._stream.stop()
            self._stream.close()
            self._stream = None

    def clear(self):
        with self._lock:
            self._chunks = []

    def collect(self) -> np.ndarray:
        """Return everything recorded since the last collect/clear and empty the buffer."""
        with self._lock:
            chunks, self._chunks = self._chunks, []
        if not chunks:
            return np.zeros(0, dtype=np.float32)
        return np.concatenate(chunks, axis=0)


class LiveInterview:
    """Drives an InterviewSession from the webcam and microphone."""
    def __init__(self,
                 settings: Settings,
                 questions: List[str],
                 difficulty,
                 analyser: Optional[FrameAnalyser] = None,
                 recorder: Optional[AnswerRecorder] = None):
        self.s = settings
        self.analyser = analyser or FrameAnalyser(settings)
        self.recorder = recorder or AnswerRecorder(settings.AUDIO_SAMPLE_RATE)
        self.session = InterviewSession(questions, difficulty, settings, blink=self.analyser.blink)

    def _transcribe(self, audio: np.ndarray) -> str:
        if audio.size == 0:
            return ""
        # Whisper prefers a file path; write temp wav at its native rate
        if self.recorder.sr != WHISPER_RATE:
            audio = librosa.resample(audio, orig_sr=self.recorder.sr, target_sr=WHISPER_RATE)
        fd, tmp_path = tempfile.mkstemp(suffix=".wav")
        os.close(fd)
        try:
            sf.write(tmp_path, audio, WHISPER_RATE)
            text, _lang = transcribe_audio(tmp_path, self.s)
        finally:
            try:
                os.remove(tmp_path)
            except OSError:
                logger.warning(f"[live] failed to cleanup tmp file: {tmp_path}")
        return text

    def finish_answer(self) -> QuestionResult:
        """Transcribe the recorded answer and close the current question."""
        # the answer ends at the keypress, not after transcription
        now = time.time()
        audio = self.recorder.collect()
        text = self._transcribe(audio)
        if text:
            self.session.tracker.add_transcript(text, final=True)
        silences = find_silences(audio, self.recorder.sr, self.s.MIN_SILENCE_DUR) if audio.size else []

        result = self.session.next_question(now)
        result.speech = calculate_speech_metrics(result.response, result.time_ms, silences, self.s.LONG_PAUSE_SEC)
        logger.debug(f"[live] answer closed words={result.speech.word_count} wpm={result.speech.wpm}")
        return result

    def reset_answer(self):
        self.session.tracker.reset_answer()
        self.recorder.clear()

    def run(self, camera_index: Optional[int] = None) -> List[QuestionResult]:
        """Open the camera and run until every question is answered or 'q' is pressed."""
        cam_idx = self.s.CAMERA_INDEX if camera_index is None else camera_index
        cap = cv2.VideoCapture(cam_idx)
        if not cap.isOpened():
            raise RuntimeError(f"Could not open camera index {cam_idx}")

        self.session.start()
        self.recorder.start()
        try:
            while not self.session.complete:
                ok, frame = cap.read()
                if not ok:
                    break

                metrics = self.analyser.analyse(frame)
                self.session.observe(metrics)

                confidence = stress = None
                if metrics is not None:
                    confidence = calculate_confidence_score(metrics)
                    stress = calculate_stress_score(metrics, self.session.baseline)

                annotated = draw_overlays(frame, metrics, confidence, stress,
                                          question=self.session.current_question,
                                          transcript=self.session.tracker.display_transcript)
                cv2.imshow(WINDOW_TITLE, annotated)

                key = cv2.waitKey(1) & 0xFF
                if key == ord("q"):
                    break
                if key == ord("n"):
                    self.finish_answer()
                elif key == ord("r"):
                    self.reset_answer()
        finally:
            self.recorder.stop()
            cap.release()
            cv2.destroyAllWindows()
            self.analyser.close()

        return self.session.results

    def evaluate(self, evaluate: Callable[[str, str, object], Evaluation]) -> List[QuestionResult]:
        return self.session.evaluate_all(evaluate)


def _format_ms(ms: int) -> str:
    secs = int(ms) // 1000
    return f"{secs // 60}:{secs % 60:02d}"


def format_report(session: InterviewSession) -> str:
    """Plain-text results breakdown, one block per question."""
    lines = [f"Overall score: {session.overall_score()}%", ""]
    for i, r in enumerate(session.results):
        ev = r.evaluation or Evaluation()
        s, sp = r.sentiment, r.speech
        lines.append(f"{i + 1}. {r.question}  [{round_half_up(ev.score)}%] {'✓' if ev.correct else '✗'}")
        lines.append(f'   "{r.response}"')
        lines.append(f"   {ev.feedback}")
        lines.append(f"   Expression {s.dominant_emotion.capitalize()} | Confidence {s.confidence}% | "
                     f"Stress {s.stress}% | Gaze {s.gaze_stability}% | Time {_format_ms(r.time_ms)}")
        lines.append(f"   Words {sp.word_count} | WPM {sp.wpm} | Fillers {sp.filler_count} | {sp.summary}")
        lines.append("")
    return "\n".join(lines)
