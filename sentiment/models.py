"""
Pydantic data models for signals, results and API IO.
"""
from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Union

# Label order matters: dominant_emotion() breaks ties towards the later label.
EMOTION_LABELS = ("neutral", "happy", "sad", "angry", "fearful", "disgusted", "surprised")


class EmotionScores(BaseModel):
    neutral: float = 0.0
    happy: float = 0.0
    sad: float = 0.0
    angry: float = 0.0
    fearful: float = 0.0
    disgusted: float = 0.0
    surprised: float = 0.0

class HeadPose(BaseModel):
    yaw: float = 0.0
    pitch: float = 0.0

class BehaviourSignals(BaseModel):
    gaze_direction: float = 0.5
    lip_tension: float = 0.0
    eyebrow_height: float = 0.0
    head_pose: HeadPose = Field(default_factory=HeadPose)

class FrameMetrics(BaseModel):
    """One combined sample: emotions from the classifier, behaviour from the face mesh."""
    emotions: EmotionScores
    dominant_emotion: str
    blink_count: int = 0
    gaze_direction: float = 0.5
    lip_tension: float = 0.0
    eyebrow_height: float = 0.0
    head_pose: HeadPose = Field(default_factory=HeadPose)
    timestamp: float = 0.0

class AverageMetrics(BaseModel):
    emotions: EmotionScores = Field(default_factory=EmotionScores)
    dominant_emotion: str = "neutral"
    blink_count: int = 0
    gaze_direction: float = 0.5
    lip_tension: float = 0.0
    eyebrow_height: float = 0.0
    head_pose: HeadPose = Field(default_factory=HeadPose)


class SentimentSummary(BaseModel):
    confidence: int
    stress: int
    truth: int
    dominant_emotion: str
    blink_count: int
    gaze_stability: int

class SpeechMetrics(BaseModel):
    word_count: int
    wpm: int
    filler_count: int
    summary: str
    pause_count: Optional[int] = None

class SilenceSpan(BaseModel):
    start: float
    end: float

class Evaluation(BaseModel):
    score: float = 50
    feedback: str = "Could not evaluate"
    correct: bool = False

class QuestionResult(BaseModel):
    question: str
    response: str
    time_ms: int
    metrics: Optional[AverageMetrics] = None
    sentiment: SentimentSummary
    speech: SpeechMetrics
    evaluation: Optional[Evaluation] = None


# api io

class DocumentAnalysis(BaseModel):
    type: str = "Unknown"
    context: str = ""
    subject: str = ""

class DocumentContext(BaseModel):
    type: str = "Other"
    text: str = ""

class AnalyzeDocumentRequest(BaseModel):
    document: Optional[str] = None

class SuggestTopicsRequest(BaseModel):
    subject: Optional[str] = None

class GenerateQuestionsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    subject: str = ""
    difficulty: Optional[Union[str, int]] = None
    count: Optional[int] = None
    document_context: Optional[DocumentContext] = Field(None, alias="documentContext")

class EvaluateRequest(BaseModel):
    question: str = ""
    answer: Optional[str] = None
    difficulty: Optional[Union[str, int]] = None

class ScoreRequest(BaseModel):
    metrics: AverageMetrics
    baseline: Optional[AverageMetrics] = None

class ScoreResponse(BaseModel):
    confidence: int
    stress: int
    truth: int
    gaze_stability: int

class SpeechMetricsRequest(BaseModel):
    transcript: str = ""
    time_ms: float = 0
