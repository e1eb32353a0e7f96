"""
Configuration for the interview analyser.
"""
from pydantic import BaseModel
import os

class Settings(BaseModel):
    """
    Runtime settings with environment-variable overrides.
    """
    DEVICE: str = (os.getenv("DEVICE", "cpu") or "cpu")

    # LLM backend
    ANTHROPIC_MODEL: str = os.getenv("ANTHROPIC_MODEL", "claude-sonnet-4-20250514")
    DOCUMENT_EXCERPT_CHARS: int = int(os.getenv("DOCUMENT_EXCERPT_CHARS", "3000"))

    # Speech
    WHISPER_MODEL: str = os.getenv("WHISPER_MODEL", "base")
    AUDIO_SAMPLE_RATE: int = int(os.getenv("AUDIO_SAMPLE_RATE", "16000"))
    MIN_SILENCE_DUR: float = float(os.getenv("MIN_SILENCE_DUR", "0.35"))
    LONG_PAUSE_SEC: float = float(os.getenv("LONG_PAUSE_SEC", "1.5"))

    # Face signals
    CAMERA_INDEX: int = int(os.getenv("CAMERA_INDEX", "0"))
    HISTORY_SIZE: int = int(os.getenv("HISTORY_SIZE", "30"))
    BLINK_THRESHOLD: float = float(os.getenv("BLINK_THRESHOLD", "0.2"))
    BLINK_DEBOUNCE: float = float(os.getenv("BLINK_DEBOUNCE", "0.1"))
    BASELINE_SECONDS: float = float(os.getenv("BASELINE_SECONDS", "3"))
    FRAME_SAMPLE_INTERVAL: float = float(os.getenv("FRAME_SAMPLE_INTERVAL", "0.2"))
    DETECTOR_BACKEND: str = os.getenv("DETECTOR_BACKEND", "opencv")
    MIN_FACE_CONFIDENCE: float = float(os.getenv("MIN_FACE_CONFIDENCE", "0.5"))
    MIN_FACE_BOX: int = int(os.getenv("MIN_FACE_BOX", "40"))

    PORT: int = int(os.getenv("PORT", "3075"))
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")  # comma-separated

    def __init__(self, **data):
        super().__init__(**data)
        # Normalize DEVICE: strip comments/extra words, lower-case, validate
        dev = (self.DEVICE or "cpu").strip().split()[0].lower()
        if dev not in ("cpu", "cuda"):
            dev = "cpu"
        object.__setattr__(self, "DEVICE", dev)
