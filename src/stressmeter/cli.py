from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from .config import settings
from .config.profiles import SessionProfile
from .scenarios import SCENARIOS
from .schemas import Script
from .session import GameSession


def load_script(path: str) -> Script:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return Script(**data)


def run_script(script: Script) -> Dict[str, Any]:
    profile = SessionProfile.from_dict(script.profile)
    session = GameSession(profile)
    steps = [s.model_dump(exclude_none=True) for s in script.steps]
    results = session.replay(steps)
    return {
        "name": script.name,
        "results": results,
        "events": session.events,
        "final": session.snapshot(),
    }


def _bar(value: float, maximum: float, width: int = 30) -> str:
    filled = int(round(width * value / maximum)) if maximum else 0
    return "#" * filled + "." * (width - filled)


def _print_timeline(results: List[Dict[str, Any]], maximum: float) -> None:
    for r in results:
        flag = " GAME OVER" if r["game_over"] else ""
        print(f"{r['step']:3d} {r['kind']:<9} {str(r['outcome']):<14} "
              f"[{_bar(r['stress'], maximum)}] {r['stress']:6.1f}{flag}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Replay a stress meter script")
    parser.add_argument("--input", default="", help="Path to script JSON")
    parser.add_argument("--scenario", default="c", choices=sorted(SCENARIOS),
                        help="Built-in scenario when no --input is given")
    parser.add_argument("--out", default="", help="Optional output JSON path")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.LOG_LEVEL,
        format=settings.LOG_FORMAT,
    )

    script = load_script(args.input) if args.input else Script(**SCENARIOS[args.scenario]())
    report = run_script(script)

    print("=" * 60)
    print(report["name"])
    print("=" * 60)
    _print_timeline(report["results"], report["final"]["stress"]["max"])

    final = report["final"]
    print("-" * 60)
    print(f"stress={final['stress']['current']} responses={final['responses']['total_responses']} "
          f"positive={final['responses']['total_positive']} negative={final['responses']['total_negative']}")
    if final["score"] is not None:
        print(f"score={final['score']['score']}")

    if args.out:
        with open(args.out, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2, ensure_ascii=False)


if __name__ == "__main__":
    main()
