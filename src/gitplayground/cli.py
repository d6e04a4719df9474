"""Terminal front end for the Git playground."""

import argparse
import asyncio
import sys
from typing import List, Optional

from loguru import logger

from gitplayground.config import load_config
from gitplayground.content import ContentError, PlaygroundContent, load_content
from gitplayground.engine import ScenarioEngine
from gitplayground.views import render_inspection, render_summary

META_HELP = [
    ":help               show playground commands",
    ":scenarios          list scenarios",
    ":select ID          switch scenario",
    ":reset              restart the current scenario",
    ":rewind             undo the last state-changing command",
    ":hint               show the next hint",
    ":solution           play back the reference solution",
    ":guided on|off      toggle guided mode",
    ":inspect            show the repository inspector",
    ":objectives         show objective progress",
    ":explain CMD        explain a git command",
    ":prev / :next       recall recent commands",
    ":quit               leave the playground",
]


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Practice Git in a simulated terminal")
    parser.add_argument("--scenario", type=str, help="Scenario id to start with")
    parser.add_argument("--list", action="store_true", help="List scenarios and exit")
    parser.add_argument("--content-dir", type=str, help="Directory with playground content JSON files")
    parser.add_argument("--guided", action="store_true", help="Start in guided mode")
    parser.add_argument("--run-solution", action="store_true", help="Play back the solution and exit")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    return parser.parse_args(argv)


def describe_scenarios(engine: ScenarioEngine) -> List[str]:
    lines = []
    for scenario in engine.scenarios.values():
        marker = "*" if scenario.id == engine.active_scenario_id else " "
        kind = "sandbox" if scenario.sandbox else f"{len(scenario.objectives)} objectives"
        lines.append(f"{marker} {scenario.id:<18} {scenario.title} ({kind})")
    return lines


def describe_objectives(engine: ScenarioEngine) -> List[str]:
    scenario, session = engine.scenario, engine.session
    if scenario.sandbox or not scenario.objectives:
        return ["Sandbox mode: no objectives."]
    lines = [
        f"[{'x' if done else ' '}] {objective}" for objective, done in zip(scenario.objectives, session.objectives)
    ]
    step = engine.current_step
    if engine.guided_mode and step:
        lines.append(f"Guided: {step.title}")
    return lines


def run_meta_command(engine: ScenarioEngine, content: PlaygroundContent, line: str) -> Optional[List[str]]:
    """Execute a ``:``-prefixed command. Returns None when the user asked to quit."""
    name, _, argument = line[1:].strip().partition(" ")
    argument = argument.strip()

    if name in ("quit", "exit", "q"):
        return None
    if name == "help":
        lines = list(META_HELP)
        for section, items in content.help_sections.items():
            lines.append(f"{section}:")
            lines.extend(f"  {item.cmd:<34} {item.desc}" for item in items)
        return lines
    if name == "scenarios":
        return describe_scenarios(engine)
    if name == "select":
        if not engine.select_scenario(argument):
            return [f"Unknown scenario: {argument}"]
        return list(engine.session.logs)
    if name == "reset":
        engine.reset()
        return list(engine.session.logs)
    if name == "rewind":
        if not engine.rewind():
            return ["Nothing to rewind."]
        return [f"Rewound. {len(engine.session.history)} snapshots left."]
    if name == "hint":
        return [engine.cycle_hint()]
    if name == "solution":
        asyncio.run(engine.run_solution())
        return []
    if name == "guided":
        engine.set_guided_mode(argument.lower() in ("on", "true", "1", ""))
        return [f"Guided mode {'on' if engine.guided_mode else 'off'}."]
    if name == "inspect":
        return render_inspection(engine.inspect())
    if name == "objectives":
        return describe_objectives(engine)
    if name == "explain":
        return [content.hint_book.explain(argument) or f"No explanation for '{argument}'."]
    if name in ("prev", "next"):
        return [engine.navigate_history(name) or "(no command)"]
    return [f"Unknown playground command ':{name}'. Type :help for a list."]


def build_engine(args, printer=print) -> tuple:
    config = load_config(content_dir=args.content_dir)
    content = load_content(config.content_dir)

    def on_log(lines: List[str]) -> None:
        for line in lines:
            if line.startswith(config.prompt) and not engine.running_solution:
                continue
            printer(line)

    def on_complete(summary) -> None:
        for line in render_summary(summary):
            printer(line)

    config.on_log = on_log
    config.on_complete = on_complete
    engine = ScenarioEngine(content.scenarios, content.walkthrough, content.hint_book, config)
    return engine, content


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else load_config().log_level)

    try:
        engine, content = build_engine(args)
    except ContentError as e:
        logger.error(f"Could not load playground content: {str(e)}")
        return 1

    if args.list:
        for line in describe_scenarios(engine):
            print(line)
        return 0

    if args.scenario and not engine.select_scenario(args.scenario):
        logger.error(f"Unknown scenario: {args.scenario}")
        return 1

    if args.guided:
        engine.set_guided_mode(True)

    for line in engine.session.logs:
        print(line)

    if args.run_solution:
        asyncio.run(engine.run_solution())
        return 0

    while True:
        try:
            line = input(f"{engine.config.prompt} ")
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if line.strip().startswith(":"):
            output = run_meta_command(engine, content, line.strip())
            if output is None:
                break
            for text in output:
                print(text)
            continue

        outcome = engine.handle_command(line)
        if outcome and outcome.smart_hint:
            print(f"hint: {outcome.smart_hint}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
