"""
Whisper transcription for recorded answers (model loaded lazily).
"""
from __future__ import annotations
import logging
import numpy as np
import whisper
from sentiment.config import Settings

logger = logging.getLogger(__name__)

_model = None

def _ensure_model(settings: Settings):
    global _model
    if _model is None:
        logger.debug(f"[asr] loading whisper model={settings.WHISPER_MODEL} device={settings.DEVICE}")
        _model = whisper.load_model(settings.WHISPER_MODEL, device=settings.DEVICE)
    return _model

def transcribe_audio(audio: str | np.ndarray, settings: Settings) -> tuple[str, str]:
    """
    Transcribe an answer with Whisper.

    `audio` is a file path or a mono float32 array already at 16 kHz
    (the rate Whisper expects for raw arrays). fp16 is only used on CUDA.
    """
    model = _ensure_model(settings)
    if isinstance(audio, np.ndarray):
        audio = audio.astype(np.float32).reshape(-1)

    result = model.transcribe(audio, fp16=settings.DEVICE == "cuda")
    text = (result.get("text") or "").strip()
    return text, result.get("language", "en")
