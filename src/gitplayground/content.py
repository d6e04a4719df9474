"""
Loading of the playground's static JSON content.

Content ships inside the package under ``gitplayground/data``; a directory
with the same file names can be used instead.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from gitplayground.models.scenario import GuidedStep, Scenario, SmartHintPack
from gitplayground.nodes.hints import HintBook

SCENARIOS_FILE = "scenarios.json"
WALKTHROUGH_FILE = "git_walkthrough.json"
SMART_HINTS_FILE = "git_smart_hints.json"
COMMAND_NOTES_FILE = "git_command_notes.json"
EXPLAIN_FILE = "git_explain.json"
HELP_FILE = "git_help.json"
DATA_DIR = Path(__file__).parent / "data"


class ContentError(ValueError):
    """Raised when playground content is missing or malformed."""


class ScenarioFile(BaseModel):
    """Top-level shape of scenarios.json."""

    scenarios: List[Scenario] = Field(default_factory=list)


@dataclass
class HelpItem:
    cmd: str
    desc: str


@dataclass
class PlaygroundContent:
    """Everything the engine and its hosts read from static content."""

    scenarios: List[Scenario]
    walkthrough: Dict[str, List[GuidedStep]] = field(default_factory=dict)
    hint_book: HintBook = field(default_factory=HintBook)
    help_sections: Dict[str, List[HelpItem]] = field(default_factory=dict)


def _read_json(name: str, content_dir: Optional[str]) -> Any:
    if content_dir:
        path = Path(content_dir) / name
        if not path.exists():
            logger.warning(f"Content file not found: {path}")
            return None
        text = path.read_text(encoding="utf-8")
    else:
        text = (DATA_DIR / name).read_text(encoding="utf-8")

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ContentError(f"{name} is not valid JSON: {str(e)}") from e


def _validate(name: str, adapter: TypeAdapter, data: Any):
    try:
        return adapter.validate_python(data)
    except ValidationError as e:
        raise ContentError(f"{name} failed validation: {str(e)}") from e


def _load(name: str, adapter: TypeAdapter, content_dir: Optional[str]):
    data = _read_json(name, content_dir)
    return _validate(name, adapter, {} if data is None else data)


def load_scenarios(content_dir: Optional[str] = None) -> List[Scenario]:
    scenarios = _load(SCENARIOS_FILE, TypeAdapter(ScenarioFile), content_dir).scenarios
    logger.debug(f"Loaded {len(scenarios)} scenarios")
    return scenarios


def load_walkthrough(content_dir: Optional[str] = None) -> Dict[str, List[GuidedStep]]:
    return _load(WALKTHROUGH_FILE, TypeAdapter(Dict[str, List[GuidedStep]]), content_dir)


def load_hint_book(content_dir: Optional[str] = None) -> HintBook:
    adapter = TypeAdapter(Dict[str, str])
    return HintBook(
        smart_hints=_load(SMART_HINTS_FILE, TypeAdapter(Dict[str, SmartHintPack]), content_dir),
        notes=_load(COMMAND_NOTES_FILE, adapter, content_dir),
        explanations=_load(EXPLAIN_FILE, adapter, content_dir),
    )


def load_help(content_dir: Optional[str] = None) -> Dict[str, List[HelpItem]]:
    sections = _load(HELP_FILE, TypeAdapter(Dict[str, List[Dict[str, str]]]), content_dir)
    return {
        section: [HelpItem(cmd=item.get("cmd", ""), desc=item.get("desc", "")) for item in items]
        for section, items in sections.items()
    }


def load_content(content_dir: Optional[str] = None) -> PlaygroundContent:
    """Load all playground content from ``content_dir`` or the packaged data."""
    return PlaygroundContent(
        scenarios=load_scenarios(content_dir),
        walkthrough=load_walkthrough(content_dir),
        hint_book=load_hint_book(content_dir),
        help_sections=load_help(content_dir),
    )
