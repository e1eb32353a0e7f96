"""Run a live mock interview in a camera window.

Usage:
    python scripts/live_interview.py --subject "SQL" --difficulty 2 --count 5

Keys: n = next question, r = reset answer, q = quit.
"""
from __future__ import annotations
import argparse
import logging

from dotenv import load_dotenv

# .env must be loaded before Settings reads the environment
load_dotenv()

from sentiment import llm
from sentiment.config import Settings
from sentiment.live import LiveInterview, format_report


def main():
    p = argparse.ArgumentParser()
    p.add_argument("--subject", required=True, help="Subject to be interviewed on")
    p.add_argument("--difficulty", default="3", choices=["1", "2", "3", "4", "5"])
    p.add_argument("--count", type=int, default=5, help="Number of questions")
    p.add_argument("--camera", type=int, default=None, help="Camera index override")
    args = p.parse_args()

    logging.basicConfig(level=logging.INFO)
    s = Settings()

    questions = llm.generate_questions(args.subject, args.difficulty, args.count, None, s)
    interview = LiveInterview(s, questions, args.difficulty)
    interview.run(camera_index=args.camera)
    interview.evaluate(lambda q, a, d: llm.evaluate_answer(q, a, d, s))
    print(format_report(interview.session))


if __name__ == '__main__':
    main()
