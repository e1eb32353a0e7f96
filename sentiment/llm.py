"""
Anthropic Messages API wrapper: document analysis, topic suggestions,
question generation and answer evaluation.

The client is created lazily so tests can swap in a dummy through `_client`.
Replies are coerced to JSON: whole text first, then the first {...} / [...] span.
"""
from __future__ import annotations
import json
import logging
import re
from typing import Any, List, Optional

import anthropic
from pydantic import ValidationError

from sentiment.config import Settings
from sentiment.models import DocumentAnalysis, DocumentContext, Evaluation
from sentiment import prompts

logger = logging.getLogger(__name__)

ANSWER_PLACEHOLDER = "Your response will appear here..."
DEFAULT_QUESTION_COUNT = 5

_client = None


class LLMResponseError(RuntimeError):
    """The model replied with something that cannot be coerced to the expected JSON."""


def _ensure_client():
    global _client
    if _client is None:
        # reads ANTHROPIC_API_KEY from the environment
        _client = anthropic.Anthropic()
    return _client


def _complete(prompt: str, max_tokens: int, settings: Settings) -> str:
    client = _ensure_client()
    logger.debug(f"[llm] request model={settings.ANTHROPIC_MODEL} max_tokens={max_tokens} prompt_chars={len(prompt)}")
    response = client.messages.create(
        model=settings.ANTHROPIC_MODEL,
        max_tokens=max_tokens,
        messages=[{"role": "user", "content": prompt}],
    )
    text = response.content[0].text
    logger.debug(f"[llm] reply chars={len(text)}")
    return text


_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
_ARRAY_RE = re.compile(r"\[[\s\S]*\]")

def parse_json_reply(text: str, kind: str = "object") -> Optional[Any]:
    """
    Parse a model reply.

    Returns the parsed value, or None when no JSON span of `kind`
    ("object" or "array") is present. Raises LLMResponseError when a span is
    found but is not valid JSON.
    """
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        pass

    pattern = _OBJECT_RE if kind == "object" else _ARRAY_RE
    match = pattern.search(text or "")
    if not match:
        return None
    try:
        return json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise LLMResponseError(f"Malformed JSON in model reply: {e}") from e


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        raise LLMResponseError(f"Expected a JSON array, got {type(value).__name__}")
    return [str(v) for v in value]


def analyze_document(document: Optional[str], settings: Settings) -> DocumentAnalysis:
    """Classify a pasted document and pick the subject to generate questions for."""
    if not document or not document.strip():
        return DocumentAnalysis(type="Unknown", context="No document provided", subject="")

    excerpt = document[: settings.DOCUMENT_EXCERPT_CHARS]
    reply = _complete(prompts.analyze_document_prompt(excerpt), 500, settings)
    parsed = parse_json_reply(reply, "object")
    if not isinstance(parsed, dict):
        logger.warning("[llm] document analysis reply had no JSON object")
        return DocumentAnalysis(type="Unknown", context="Could not analyze document", subject="")
    try:
        return DocumentAnalysis.model_validate(parsed)
    except ValidationError as e:
        raise LLMResponseError(f"Unexpected document analysis shape: {e}") from e


def suggest_topics(subject: Optional[str], settings: Settings) -> List[str]:
    if not subject or not subject.strip():
        return []

    reply = _complete(prompts.suggest_topics_prompt(subject), 300, settings)
    parsed = parse_json_reply(reply, "array")
    if parsed is None:
        return []
    return _string_list(parsed)


def generate_questions(
    subject: str,
    difficulty,
    count: Optional[int],
    document_context: Optional[DocumentContext],
    settings: Settings,
) -> List[str]:
    """
    Single-focus interview questions for a subject.

    Raises:
        LLMResponseError: reply could not be parsed into a list.
    """
    question_count = count or DEFAULT_QUESTION_COUNT
    prompt = prompts.generate_questions_prompt(subject, difficulty, question_count, document_context)
    max_tokens = 1500 if question_count > 10 else 800

    reply = _complete(prompt, max_tokens, settings)
    parsed = parse_json_reply(reply, "array")
    if parsed is None:
        raise LLMResponseError("Could not parse questions")
    return _string_list(parsed)


def evaluate_answer(question: str, answer: Optional[str], difficulty, settings: Settings) -> Evaluation:
    """
    Score one answer against the difficulty level.

    Blank answers (or the UI placeholder) score 0 without calling the model.
    """
    if not answer or not answer.strip() or answer == ANSWER_PLACEHOLDER:
        return Evaluation(score=0, feedback="No answer provided", correct=False)

    reply = _complete(prompts.evaluate_answer_prompt(question, answer, difficulty), 500, settings)
    parsed = parse_json_reply(reply, "object")
    if not isinstance(parsed, dict):
        raise LLMResponseError("Could not parse evaluation response")
    if "score" not in parsed:
        raise LLMResponseError("Evaluation response has no score")
    try:
        return Evaluation.model_validate(parsed)
    except ValidationError as e:
        raise LLMResponseError(f"Unexpected evaluation shape: {e}") from e
