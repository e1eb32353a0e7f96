"""
Prompt templates for the question/evaluation model.
"""
from __future__ import annotations
from typing import Optional

from sentiment.models import DocumentContext

DIFFICULTY_DESCRIPTIONS = {
    "1": "beginner level - basic terminology and simple concepts",
    "2": "junior developer level - fundamental concepts and common practices",
    "3": "mid-level developer - practical application and deeper understanding",
    "4": "senior developer level - advanced concepts and architectural decisions",
    "5": "expert level - complex scenarios, trade-offs, and edge cases",
}

DIFFICULTY_EXPECTATIONS = {
    "1": "This is a BEGINNER level question. Accept basic, simple answers that show fundamental understanding. Do not expect technical depth or nuance.",
    "2": "This is a JUNIOR level question. Accept straightforward answers that demonstrate core concepts. Some technical terminology expected but not deep expertise.",
    "3": "This is a MID-LEVEL question. Expect practical understanding and reasonable technical depth. Should demonstrate working knowledge.",
    "4": "This is a SENIOR level question. Expect comprehensive answers with good technical depth, awareness of trade-offs, and practical experience.",
    "5": "This is an EXPERT level question. Expect sophisticated answers demonstrating deep expertise, nuanced understanding of edge cases, and architectural insight.",
}

DEFAULT_DIFFICULTY = "3"


def difficulty_key(difficulty) -> str:
    key = str(difficulty).strip() if difficulty is not None else ""
    return key if key in DIFFICULTY_DESCRIPTIONS else DEFAULT_DIFFICULTY


def analyze_document_prompt(document_excerpt: str) -> str:
    return f"""Analyze this document and identify what type it is and what knowledge areas it covers.

Document:
{document_excerpt}

Respond in this exact JSON format:
{{
    "type": "<one of: Job Description, CV/Resume, Study Material, Technical Documentation, Research Paper, Article, Other>",
    "context": "<brief 1-2 sentence description of what this document is about>",
    "subject": "<the main subject/topic area for generating test questions, e.g. 'React Development', 'Data Analysis', 'Machine Learning'>"
}}

Only return the JSON, nothing else."""


def suggest_topics_prompt(subject: str) -> str:
    return f"""Given the subject "{subject}", suggest 4-5 specific topics within this field that would be good for interview questions or knowledge testing.

Return ONLY a JSON array of topic strings, no other text:
["Topic 1", "Topic 2", "Topic 3", "Topic 4", "Topic 5"]

Make topics specific and testable. For example:
- "JavaScript" → ["Closures & Scope", "Async/Await & Promises", "Prototypes & Inheritance", "Event Loop", "ES6+ Features"]
- "Cardiology" → ["Heart Failure Management", "Arrhythmia Recognition", "Coronary Artery Disease", "Valvular Heart Disease", "ECG Interpretation"]"""


def generate_questions_prompt(
    subject: str,
    difficulty,
    count: int,
    document_context: Optional[DocumentContext] = None,
) -> str:
    prompt = f"""Generate {count} questions for: {subject}

Difficulty: {DIFFICULTY_DESCRIPTIONS[difficulty_key(difficulty)]}"""

    if document_context is not None:
        prompt += f"""

This is based on a {document_context.type}. Generate questions that test knowledge relevant to this specific document:

Document excerpt:
{document_context.text}

Generate questions that would test someone's competency for the skills/knowledge described in this document."""

    prompt += f"""

CRITICAL Requirements:
- Each question must be answerable in ONE SENTENCE (15-30 words max answer)
- Ask about ONE specific thing per question, not multiple concepts
- Questions should be direct and focused
- No compound questions or multi-part questions

Examples of GOOD questions (single focus):
- "What is the purpose of the virtual keyword in C++?"
- "What does the GROUP BY clause do in SQL?"
- "What is the time complexity of binary search?"

Examples of BAD questions (too complex):
- "Explain the differences between abstract classes and interfaces, and when would you use each?"
- "What are microservices, how do they communicate, and what are the pros and cons?"

Return ONLY a JSON array of {count} question strings, no other text:
["Question 1?", "Question 2?", ...]"""
    return prompt


def evaluate_answer_prompt(question: str, answer: str, difficulty) -> str:
    expectation = DIFFICULTY_EXPECTATIONS[difficulty_key(difficulty)]
    return f"""You are evaluating a technical interview answer. Be fair but rigorous.

{expectation}

Question: {question}

Candidate's Answer: {answer}

Evaluate the answer APPROPRIATE TO THE DIFFICULTY LEVEL and respond in this exact JSON format:
{{
    "score": <number 0-100>,
    "correct": <boolean>,
    "feedback": "<brief 1-2 sentence feedback>"
}}

Scoring guide (adjust expectations based on difficulty level):
- 80-100: Correct and appropriate for the level
- 60-79: Mostly correct, minor issues for this level
- 40-59: Partially correct, gaps for this level
- 20-39: Shows some understanding but insufficient for this level
- 0-19: Incorrect or no understanding shown

Only return the JSON, nothing else."""
