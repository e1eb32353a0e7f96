"""
Audio track extraction from recorded answers (FFmpeg).
"""
from __future__ import annotations
import subprocess
import os
import logging

logger = logging.getLogger(__name__)

def extract_audio_from_video(video_path: str, audio_path: str, sample_rate: int = 16000) -> str:
    """
    Extract a mono WAV track from a recorded answer.

    Raises:
        FileNotFoundError: Input file missing.
        RuntimeError: FFmpeg failure.
    """
    if not os.path.exists(video_path):
        raise FileNotFoundError(f"Video file not found: {video_path}")

    cmd = ["ffmpeg", "-y", "-i", video_path, "-ar", str(sample_rate), "-ac", "1", "-vn", audio_path]
    logger.debug(f"[av] ffmpeg extract cmd={' '.join(cmd)}")
    proc = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
    if proc.returncode != 0:
        err = proc.stderr.decode("utf-8", errors="ignore")
        logger.error(f"[av] ffmpeg failed code={proc.returncode} err={err[:400]}")
        raise RuntimeError(f"FFmpeg failed: {err}")
    return audio_path


def has_audio_stream(video_path: str) -> bool:
    """True if FFprobe reports at least one audio stream (webcam clips may have none)."""
    cmd = ["ffprobe", "-v", "error", "-select_streams", "a",
           "-show_entries", "stream=index", "-of", "csv=p=0", video_path]
    try:
        proc = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
    except FileNotFoundError:
        # no ffprobe on PATH; let extraction decide
        logger.warning("[av] ffprobe not found; assuming an audio stream exists")
        return True
    return proc.returncode == 0 and bool(proc.stdout.strip())
