"""
REST endpoints: question generation / evaluation (LLM) and answer analysis.
"""
import os
import shutil
import tempfile
import logging

from fastapi import APIRouter, UploadFile, File, HTTPException, Form
from fastapi.responses import JSONResponse

from sentiment.config import Settings
from sentiment import llm
from sentiment.models import (
    AnalyzeDocumentRequest,
    EvaluateRequest,
    GenerateQuestionsRequest,
    ScoreRequest,
    ScoreResponse,
    SpeechMetricsRequest,
    SuggestTopicsRequest,
)
from sentiment.pipeline import analyze_answer_video
from sentiment.scoring import (
    calculate_confidence_score,
    calculate_stress_score,
    calculate_truth_score,
    gaze_stability,
)
from sentiment.speech import calculate_speech_metrics

router = APIRouter()
settings = Settings()
logger = logging.getLogger(__name__)

FALLBACK_QUESTIONS = [
    "What is your experience with this subject area?",
    "Can you explain a key concept in this field?",
    "What are common best practices?",
    "How would you approach a typical problem?",
    "What tools or technologies do you prefer?",
]


@router.post("/api/analyze-document")
async def analyze_document(req: AnalyzeDocumentRequest):
    """
    Detect a pasted document's type and the subject to build questions from.
    """
    try:
        analysis = llm.analyze_document(req.document, settings)
        return analysis.model_dump()
    except Exception:
        logger.exception("[api] document analysis failed")
        return JSONResponse(
            status_code=500,
            content={"type": "Error", "context": "Failed to analyze document", "subject": ""},
        )


@router.post("/api/suggest-topics")
async def suggest_topics(req: SuggestTopicsRequest):
    try:
        return {"suggestions": llm.suggest_topics(req.subject, settings)}
    except Exception:
        logger.exception("[api] suggest topics failed")
        return JSONResponse(status_code=500, content={"suggestions": []})


@router.post("/api/generate-questions")
async def generate_questions(req: GenerateQuestionsRequest):
    """
    Generate interview questions for a subject and difficulty (1-5),
    optionally grounded in an analysed document excerpt.
    """
    logger.debug(f"[api] /api/generate-questions subject={req.subject!r} difficulty={req.difficulty} count={req.count}")
    try:
        questions = llm.generate_questions(
            req.subject, req.difficulty, req.count, req.document_context, settings
        )
        return {"questions": questions}
    except Exception:
        logger.exception("[api] question generation failed")
        return JSONResponse(status_code=500, content={"questions": FALLBACK_QUESTIONS})


@router.post("/api/evaluate")
async def evaluate(req: EvaluateRequest):
    try:
        evaluation = llm.evaluate_answer(req.question, req.answer, req.difficulty, settings)
        return evaluation.model_dump()
    except Exception:
        logger.exception("[api] evaluation failed")
        return JSONResponse(
            status_code=500,
            content={"score": 50, "feedback": "Could not evaluate answer", "correct": False},
        )


@router.post("/api/score", response_model=ScoreResponse)
async def score(req: ScoreRequest):
    """
    Heuristic confidence / stress / truth / gaze scores for averaged face metrics.
    """
    m = req.metrics
    return ScoreResponse(
        confidence=calculate_confidence_score(m),
        stress=calculate_stress_score(m, req.baseline),
        truth=calculate_truth_score(m, req.baseline),
        gaze_stability=gaze_stability(m),
    )


@router.post("/api/speech-metrics")
async def speech_metrics(req: SpeechMetricsRequest):
    return calculate_speech_metrics(req.transcript, req.time_ms).model_dump()


@router.post("/analyze/answer")
async def analyze_answer(
    file: UploadFile = File(...),
    question: str | None = Form(None),
):
    """
    Analyze a recorded answer video: sampled face signals, transcript,
    sentiment scores and speech metrics.

    Args:
        file: Uploaded video file.
        question: Optional question text the answer belongs to.

    Returns:
        JSONResponse: Structured analysis payload.
    """
    logger.debug(f"[api] /analyze/answer filename={file.filename}")
    try:
        suffix = os.path.splitext(file.filename or "")[1] or ".webm"
        with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as tmp:
            shutil.copyfileobj(file.file, tmp)
            tmp_path = tmp.name
    except Exception as e:
        logger.exception("[api] upload save failed")
        raise HTTPException(status_code=400, detail=f"Upload failed: {e}")

    try:
        payload = analyze_answer_video(tmp_path, settings, question=question)
        return JSONResponse(payload)
    except FileNotFoundError as e:
        logger.exception("[api] analyze_answer_video file not found")
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.exception("[api] analyze_answer_video failed")
        raise HTTPException(status_code=500, detail=str(e))
    finally:
        try:
            os.unlink(tmp_path)
        except OSError:
            logger.warning(f"[api] failed to cleanup tmp file: {tmp_path}")
