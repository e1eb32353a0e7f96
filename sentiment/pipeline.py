# sentiment/pipeline.py
from __future__ import annotations
from typing import Dict, List, Optional
import logging
import os

import cv2

from sentiment.config import Settings
from sentiment.asr import transcribe_audio
from sentiment.audio_video import extract_audio_from_video, has_audio_stream
from sentiment.frame import FrameAnalyser
from sentiment.models import SilenceSpan
from sentiment.scoring import summarize_sentiment
from sentiment.session import InterviewSession, NO_RESPONSE
from sentiment.silence import detect_silences
from sentiment.speech import calculate_speech_metrics

logger = logging.getLogger(__name__)

RECORDED_QUESTION = "Recorded answer"


def _speech_from_audio(audio_path: str, settings: Settings) -> tuple[str, List[SilenceSpan], float]:
    text, lang = transcribe_audio(audio_path, settings)
    logger.debug(f"[pipeline] transcript lang={lang} chars={len(text)}")
    try:
        silences, duration = detect_silences(
            audio_path,
            sample_rate=settings.AUDIO_SAMPLE_RATE,
            min_silence_dur=settings.MIN_SILENCE_DUR,
        )
    except Exception:
        logger.exception("[pipeline] silence detection failed; continuing without pauses")
        silences, duration = [], 0.0
    return text, silences, duration


def analyze_answer_audio(audio_path: str, settings: Settings) -> Dict:
    """
    Transcribe a spoken answer and compute speech metrics (no face signals).
    """
    if not os.path.exists(audio_path):
        raise FileNotFoundError(f"Audio not found: {audio_path}")

    logger.debug(f"[pipeline] analyze_answer_audio start audio_path={audio_path}")
    text, silences, duration = _speech_from_audio(audio_path, settings)
    response = text.strip() or NO_RESPONSE
    speech = calculate_speech_metrics(response, duration * 1000.0, silences, settings.LONG_PAUSE_SEC)

    payload = {
        "transcript": response,
        "time_ms": int(duration * 1000),
        "silence_timeline": [s.model_dump() for s in silences],
        "metrics": None,
        "sentiment": summarize_sentiment(None).model_dump(),
        "speech": speech.model_dump(),
    }
    logger.debug("[pipeline] analyze_answer_audio finished successfully")
    return payload


def analyze_answer_video(
    video_path: str,
    settings: Settings,
    question: Optional[str] = None,
    analyser: Optional[FrameAnalyser] = None,
) -> Dict:
    """
    Full analysis of one recorded answer: sampled face signals over the video,
    baseline from its opening seconds, transcript and speech metrics from its audio.
    """
    if not os.path.exists(video_path):
        raise FileNotFoundError(f"Video not found: {video_path}")

    logger.debug(f"[pipeline] analyze_answer_video start video_path={video_path}")
    cap = cv2.VideoCapture(video_path)
    if not cap.isOpened():
        raise RuntimeError(f"Could not open video: {video_path}")

    fps = cap.get(cv2.CAP_PROP_FPS) or 25.0
    interval_frames = max(1, int(fps * float(settings.FRAME_SAMPLE_INTERVAL)))
    logger.debug(f"[pipeline] fps={fps} interval_frames={interval_frames}")

    own_analyser = analyser is None
    analyser = analyser or FrameAnalyser(settings)
    session = InterviewSession([question or RECORDED_QUESTION], None, settings, blink=analyser.blink)
    session.start(0.0)

    # 1) Face signals on sampled frames (video time drives blinks and baseline)
    timeline: List[Dict] = []
    frame_index = 0
    try:
        while True:
            ok, frame = cap.read()
            if not ok:
                break
            if frame_index % interval_frames == 0:
                t = frame_index / fps
                metrics = analyser.analyse(frame, t)
                session.observe(metrics, t)
                if metrics is not None:
                    timeline.append(metrics.model_dump())
                else:
                    timeline.append({"timestamp": round(t, 2), "flag": "NO_FACE"})
            frame_index += 1
    finally:
        cap.release()
        if own_analyser:
            analyser.close()
    video_seconds = frame_index / fps
    logger.debug(f"[pipeline] sampled {len(timeline)} frames over {video_seconds:.2f}s")

    # 2) Audio -> transcript + silences
    silences: List[SilenceSpan] = []
    if has_audio_stream(video_path):
        base, _ = os.path.splitext(video_path)
        audio_path = extract_audio_from_video(video_path, base + ".wav", sample_rate=settings.AUDIO_SAMPLE_RATE)
        try:
            text, silences, _duration = _speech_from_audio(audio_path, settings)
        finally:
            try:
                os.unlink(audio_path)
            except OSError:
                logger.warning(f"[pipeline] failed to cleanup audio file: {audio_path}")
        session.tracker.add_transcript(text, final=True)
    else:
        logger.debug("[pipeline] no audio stream; transcript left empty")

    # 3) Close the answer: sentiment + speech
    result = session.next_question(now=video_seconds)
    result.speech = calculate_speech_metrics(result.response, result.time_ms, silences, settings.LONG_PAUSE_SEC)

    payload = {
        "question": result.question,
        "transcript": result.response,
        "time_ms": result.time_ms,
        "timeline": timeline,
        "silence_timeline": [s.model_dump() for s in silences],
        "baseline": session.baseline.model_dump() if session.baseline else None,
        "metrics": result.metrics.model_dump() if result.metrics else None,
        "sentiment": result.sentiment.model_dump(),
        "speech": result.speech.model_dump(),
    }
    logger.debug("[pipeline] analyze_answer_video finished successfully")
    return payload
