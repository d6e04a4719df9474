"""
Scenario session orchestration for the Git playground.

The engine keeps one ScenarioSession per scenario id, routes submitted command
lines through the command workflow, maintains the undo history and objective
progress, and plays back reference solutions.
"""

import asyncio
import time
from typing import Dict, List, Optional

from loguru import logger

from gitplayground.config import PlaygroundConfig
from gitplayground.content import ContentError
from gitplayground.models.scenario import GuidedStep, Scenario
from gitplayground.models.session import (
    CommandOutcome,
    HistoryEntry,
    ScenarioSession,
    ScenarioSummary,
)
from gitplayground.models.state import CommandState
from gitplayground.nodes.hints import HintBook
from gitplayground.nodes.objectives import normalise_command
from gitplayground.views import RepoInspection, inspect_repository
from gitplayground.workflow import create_command_workflow

NO_HINTS = "No hints available right now."


class ScenarioEngine:
    """Owns every scenario session of one learner and the active selection."""

    def __init__(
        self,
        scenarios: List[Scenario],
        walkthrough: Optional[Dict[str, List[GuidedStep]]] = None,
        hint_book: Optional[HintBook] = None,
        config: Optional[PlaygroundConfig] = None,
    ):
        if not scenarios:
            raise ContentError("No playground scenarios found.")

        self.scenarios: Dict[str, Scenario] = {scenario.id: scenario for scenario in scenarios}
        self.walkthrough = walkthrough or {}
        self.hint_book = hint_book or HintBook()
        self.config = config or PlaygroundConfig()
        self.sessions: Dict[str, ScenarioSession] = {}
        self.active_scenario_id = scenarios[0].id
        self.guided_mode = False
        self.running_solution = False
        self.summary: Optional[ScenarioSummary] = None
        self._playback_token = 0
        self._app = create_command_workflow()

        self.sessions[self.active_scenario_id] = self._new_session(self.scenario)

    # Accessors

    @property
    def scenario(self) -> Scenario:
        return self.scenarios[self.active_scenario_id]

    @property
    def session(self) -> ScenarioSession:
        return self.sessions[self.active_scenario_id]

    @property
    def steps(self) -> List[GuidedStep]:
        return self.walkthrough.get(self.active_scenario_id, [])

    @property
    def current_step(self) -> Optional[GuidedStep]:
        steps = self.steps
        index = self.session.walk_index
        return steps[index] if index < len(steps) else None

    @property
    def current_hint(self) -> str:
        hints = self.scenario.hints
        if not hints:
            return NO_HINTS
        return hints[abs(self.session.hint_index) % len(hints)]

    def inspect(self) -> RepoInspection:
        return inspect_repository(self.session.repo)

    # Scenario lifecycle

    def _new_session(self, scenario: Scenario) -> ScenarioSession:
        now = time.time()
        return ScenarioSession(
            scenario_id=scenario.id,
            repo=scenario.initial_repo.to_repository(int(now * 1000)),
            logs=scenario.intro_lines(),
            objectives=[False] * len(scenario.objectives),
            started_at=now,
        )

    def select_scenario(self, scenario_id: str) -> bool:
        """Make ``scenario_id`` the active scenario; returns False if it is unknown."""
        if scenario_id == self.active_scenario_id:
            return True
        if scenario_id not in self.scenarios:
            logger.warning(f"Unknown scenario requested: {scenario_id}")
            self._notify("report_route_status", "not found")
            return False

        self.cancel_playback()
        self.active_scenario_id = scenario_id
        self.summary = None
        if self.config.resume_sessions and scenario_id in self.sessions:
            logger.info(f"Resumed scenario {scenario_id}")
        else:
            self.reset()
        logger.info(f"Selected scenario {scenario_id}")
        self._notify("report_route_status", "ok")
        return True

    def reset(self) -> None:
        """Restore the active scenario to its initial state."""
        self.cancel_playback()
        scenario = self.scenario
        self.sessions[scenario.id] = self._new_session(scenario)
        self.summary = None
        logger.info(f"Reset scenario {scenario.id}")
        self._notify("on_progress", 0, len(scenario.objectives), scenario.id)
        self._notify("on_reset", scenario.id)

    def rewind(self) -> bool:
        """Undo the most recent state-changing command; no-op with an empty history."""
        session = self.session
        if not session.history:
            return False

        entry = session.history.pop()
        session.repo = entry.repo.clone()
        session.logs = list(entry.logs)
        session.objectives = list(entry.objectives)
        session.walk_index = entry.walk_index
        logger.debug(f"Rewound '{entry.command}' in {session.scenario_id}")
        self._report_progress(session)
        return True

    def set_guided_mode(self, enabled: bool) -> None:
        self.guided_mode = enabled and not self.scenario.sandbox
        if enabled:
            self.session.walk_index = 0

    def cycle_hint(self) -> str:
        if not self.scenario.hints:
            return NO_HINTS
        self.session.hint_index += 1
        self.session.hints_used += 1
        return self.current_hint

    def close_summary(self) -> None:
        self.summary = None

    # Command handling

    def handle_command(self, command: str, from_script: bool = False) -> Optional[CommandOutcome]:
        """Run one command line for the active scenario.

        Returns None when the input is ignored: blank lines, and user input
        while a solution is playing back.
        """
        if self.running_solution and not from_script:
            logger.debug("Ignoring user input during solution playback")
            return None
        trimmed = command.strip()
        if not trimmed:
            return None

        scenario, session = self.scenario, self.session
        smart_hint = ""
        if not from_script:
            smart_hint = self.hint_book.smart_hint(scenario.id, trimmed)
            if smart_hint:
                session.hints_used += 1

        before = HistoryEntry(
            command=trimmed,
            repo=session.repo.clone(),
            logs=list(session.logs),
            objectives=list(session.objectives),
            walk_index=session.walk_index,
        )
        self._append_logs(session, [f"{self.config.prompt} {trimmed}"])

        step = self.current_step
        initial_state: CommandState = {
            "command": trimmed,
            "normalized": normalise_command(trimmed),
            "repo": session.repo,
            "scenario_id": scenario.id,
            "sandbox": scenario.sandbox,
            "objectives": list(scenario.objectives),
            "completed": list(session.objectives),
            "guided_mode": self.guided_mode,
            "expected": list(step.expected) if step else [],
            "walk_index": session.walk_index,
            "step_count": len(self.steps),
            "errors": [],
        }
        final_state = self._app.invoke(initial_state)
        for error in final_state.get("errors", []):
            logger.error(f"{error['node']}: {error['error']}")

        was_complete = session.all_complete
        session.repo = final_state["repo"]
        session.objectives = final_state["completed"]
        session.walk_index = final_state["walk_index"]
        session.commands_run += 1
        self._append_logs(session, final_state["output"])

        if final_state["state_changed"]:
            session.push_history(before, self.config.history_limit)
        session.memory.remember(trimmed, self.config.recent_limit)

        newly_completed = final_state.get("newly_completed", [])
        if newly_completed:
            self._report_progress(session)

        summary = None
        if not was_complete and session.all_complete and not scenario.sandbox:
            summary = self._complete(scenario, session)

        return CommandOutcome(
            command=trimmed,
            output=final_state["output"],
            state_changed=final_state["state_changed"],
            accepted=final_state["accepted"],
            newly_completed=newly_completed,
            walk_index=session.walk_index,
            smart_hint=smart_hint,
            note=self.hint_book.command_note(trimmed),
            summary=summary,
        )

    def navigate_history(self, direction: str) -> str:
        """Recall a recent command; ``direction`` is "prev" or "next"."""
        memory = self.session.memory
        if direction == "prev":
            return memory.previous()
        if direction == "next":
            return memory.next()
        raise ValueError(f"direction must be 'prev' or 'next', got {direction!r}")

    # Solution playback

    def cancel_playback(self) -> None:
        self._playback_token += 1
        self.running_solution = False

    async def run_solution(self) -> None:
        """Replay the active scenario's solution, one command per delay tick.

        Selecting another scenario or resetting during playback stops any
        remaining scripted commands from being applied.
        """
        scenario = self.scenario
        if scenario.sandbox or not scenario.solution or self.running_solution:
            return

        self._playback_token += 1
        token = self._playback_token
        self.running_solution = True
        logger.info(f"Playing back solution for {scenario.id}")
        try:
            for command in scenario.solution:
                if self._playback_token != token:
                    logger.info(f"Playback for {scenario.id} cancelled")
                    break
                self.handle_command(command, from_script=True)
                await asyncio.sleep(self.config.playback_delay)
        finally:
            if self._playback_token == token:
                self.running_solution = False

    # Internals

    def _append_logs(self, session: ScenarioSession, lines: List[str]) -> None:
        session.append_logs(lines, self.config.log_limit)
        if lines:
            self._notify("on_log", list(lines))

    def _report_progress(self, session: ScenarioSession) -> None:
        self._notify("on_progress", session.completed_count, len(session.objectives), session.scenario_id)

    def _complete(self, scenario: Scenario, session: ScenarioSession) -> ScenarioSummary:
        self.summary = ScenarioSummary(
            scenario_id=scenario.id,
            title=scenario.title,
            started_at=session.started_at,
            ended_at=time.time(),
            commands_run=session.commands_run,
            hints_used=session.hints_used,
            objectives=list(scenario.objectives),
        )
        logger.info(f"Scenario {scenario.id} complete after {session.commands_run} commands")
        self._notify("on_complete", self.summary)
        return self.summary

    def _notify(self, name: str, *args) -> None:
        callback = getattr(self.config, name)
        if callback is None:
            return
        try:
            callback(*args)
        except Exception as e:
            logger.error(f"{name} callback failed: {str(e)}")
