"""
CLI to analyze a recorded answer video -> JSON.
"""
from __future__ import annotations
import argparse, json, os
from sentiment.config import Settings
from sentiment.pipeline import analyze_answer_video

def main():
    p = argparse.ArgumentParser()
    p.add_argument("--video", required=True, help="Path to the recorded answer")
    p.add_argument("--question", default=None, help="Question the answer belongs to")
    p.add_argument("--out", default="output/analysis.json", help="Path to output JSON")
    args = p.parse_args()

    settings = Settings()
    result = analyze_answer_video(args.video, settings, question=args.question)
    print(json.dumps(result, indent=2, ensure_ascii=False))

    os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)
    with open(args.out, "w", encoding="utf-8") as f:
        json.dump(result, f, indent=2, ensure_ascii=False)
    print(f"Analysis written to {args.out}")

if __name__ == "__main__":
    main()
