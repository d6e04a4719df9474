#!/usr/bin/env python3
"""
examples/playback_demo.py

Plays back the reference solution of a playground scenario and prints the
terminal log, the final repository inspector view and the completion summary.
"""

import argparse
import asyncio
import sys

from gitplayground.config import load_config
from gitplayground.content import load_content
from gitplayground.engine import ScenarioEngine
from gitplayground.views import render_inspection, render_summary


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Play back a Git playground scenario")
    parser.add_argument("--scenario", type=str, default="merge_conflict", help="Scenario id to play")
    parser.add_argument("--delay-ms", type=int, default=0, help="Delay between scripted commands")
    return parser.parse_args()


def main():
    """Run the playback demo."""
    args = parse_args()
    config = load_config(playback_delay=args.delay_ms / 1000)
    content = load_content(config.content_dir)
    engine = ScenarioEngine(content.scenarios, content.walkthrough, content.hint_book, config)

    if not engine.select_scenario(args.scenario):
        print(f"Unknown scenario: {args.scenario}", file=sys.stderr)
        return 1

    asyncio.run(engine.run_solution())

    print("\n".join(engine.session.logs))
    print("=" * 80)
    print("\n".join(render_inspection(engine.inspect())))
    if engine.summary:
        print("=" * 80)
        print("\n".join(render_summary(engine.summary)))

    return 0


if __name__ == "__main__":
    sys.exit(main())
