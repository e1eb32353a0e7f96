"""
Interview state: per-answer signal tracking, baseline, results and evaluation.
"""
from __future__ import annotations
from typing import Callable, List, Optional
import logging
import time

from sentiment.blink import BlinkDetector
from sentiment.config import Settings
from sentiment.history import MetricsHistory
from sentiment.models import AverageMetrics, Evaluation, FrameMetrics, QuestionResult
from sentiment.scoring import round_half_up, summarize_sentiment
from sentiment.speech import calculate_speech_metrics

logger = logging.getLogger(__name__)

NO_RESPONSE = "No response provided"


class AnswerTracker:
    """Signals and transcript collected while one question is being answered."""
    def __init__(self, settings: Settings, blink: Optional[BlinkDetector] = None):
        self.s = settings
        self.history = MetricsHistory(settings.HISTORY_SIZE)
        self.blink = blink or BlinkDetector(settings.BLINK_THRESHOLD, settings.BLINK_DEBOUNCE)
        self.full_transcript = ""
        self.interim_transcript = ""
        self.started_at: Optional[float] = None

    def start(self, now: Optional[float] = None):
        self.started_at = time.time() if now is None else float(now)
        self.reset_answer()

    def reset_answer(self):
        """Discard what was said and observed so far (the timer keeps running)."""
        self.full_transcript = ""
        self.interim_transcript = ""
        self.history.clear()
        self.blink.reset()

    def add_transcript(self, text: str, final: bool = True):
        if final:
            self.full_transcript += text + " "
            self.interim_transcript = ""
        else:
            self.interim_transcript = text

    @property
    def display_transcript(self) -> str:
        return (self.full_transcript + self.interim_transcript).strip()

    def push(self, metrics: FrameMetrics):
        self.history.push(metrics)

    def average(self) -> Optional[AverageMetrics]:
        return self.history.average(self.blink.blink_count)

    def elapsed_ms(self, now: Optional[float] = None) -> int:
        if self.started_at is None:
            return 0
        now = time.time() if now is None else float(now)
        return int((now - self.started_at) * 1000)


class InterviewSession:
    """
    Walks through a list of questions.

    The baseline is captured once, BASELINE_SECONDS after the session starts,
    and is kept across questions; the per-answer window and blink count are not.
    """
    def __init__(self, questions: List[str], difficulty, settings: Settings,
                 blink: Optional[BlinkDetector] = None):
        self.s = settings
        self.questions = list(questions)
        self.difficulty = difficulty
        self.tracker = AnswerTracker(settings, blink)
        self.current = 0
        self.results: List[QuestionResult] = []
        self.baseline: Optional[AverageMetrics] = None
        self.started_at: Optional[float] = None

    # ---- lifecycle ----
    def start(self, now: Optional[float] = None):
        now = time.time() if now is None else float(now)
        self.started_at = now
        self.tracker.start(now)

    @property
    def current_question(self) -> Optional[str]:
        return self.questions[self.current] if self.current < len(self.questions) else None

    @property
    def complete(self) -> bool:
        return self.current >= len(self.questions)

    def observe(self, metrics: Optional[FrameMetrics], now: Optional[float] = None):
        """Record one frame sample and capture the baseline when it is due."""
        now = time.time() if now is None else float(now)
        if metrics is not None:
            self.tracker.push(metrics)
        if (self.baseline is None and self.started_at is not None
                and now - self.started_at >= self.s.BASELINE_SECONDS):
            self.baseline = self.tracker.average()
            if self.baseline is not None:
                logger.debug(f"[session] baseline established: {self.baseline.model_dump()}")

    def next_question(self, now: Optional[float] = None) -> QuestionResult:
        """Close the current answer, score it and move on."""
        if self.complete:
            raise RuntimeError("No question in progress")

        now = time.time() if now is None else float(now)
        time_ms = self.tracker.elapsed_ms(now)
        avg = self.tracker.average()
        response = self.tracker.full_transcript.strip() or NO_RESPONSE
        blinks = self.tracker.blink.blink_count

        result = QuestionResult(
            question=self.questions[self.current],
            response=response,
            time_ms=time_ms,
            metrics=avg,
            sentiment=summarize_sentiment(avg, self.baseline, blinks),
            speech=calculate_speech_metrics(response, time_ms),
        )
        self.results.append(result)
        logger.debug(f"[session] q{self.current + 1} done time_ms={time_ms} "
                     f"confidence={result.sentiment.confidence} stress={result.sentiment.stress}")

        self.current += 1
        if not self.complete:
            self.tracker.start(now)
        return result

    def evaluate_all(self, evaluate: Callable[[str, str, object], Evaluation]) -> List[QuestionResult]:
        """
        Score every stored answer with `evaluate(question, answer, difficulty)`.
        A failed evaluation is recorded as a neutral 50 instead of aborting the report.
        """
        for i, r in enumerate(self.results):
            logger.debug(f"[session] evaluating question {i + 1} of {len(self.results)}")
            try:
                r.evaluation = evaluate(r.question, r.response, self.difficulty)
            except Exception:
                logger.exception(f"[session] evaluation failed for question {i + 1}")
                r.evaluation = Evaluation(score=50, feedback="Could not evaluate", correct=False)
        return self.results

    def overall_score(self) -> int:
        scored = [r.evaluation.score for r in self.results if r.evaluation is not None]
        if not scored:
            return 0
        return round_half_up(sum(scored) / len(scored))

    def restart(self, questions: Optional[List[str]] = None):
        self.questions = list(questions) if questions is not None else []
        self.current = 0
        self.results = []
        self.baseline = None
        self.started_at = None
        self.tracker.reset_answer()
        self.tracker.started_at = None
