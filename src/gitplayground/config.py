"""Runtime configuration for the playground."""

import os
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from dotenv import load_dotenv
from loguru import logger

HOST = "decodeai"


@dataclass
class PlaygroundConfig:
    """Settings and host callbacks consumed by the ScenarioEngine."""

    user: str = "student"
    log_limit: int = 200
    history_limit: int = 20
    recent_limit: int = 15
    playback_delay: float = 0.18  # seconds between scripted commands
    resume_sessions: bool = False
    content_dir: Optional[str] = None
    log_level: str = "WARNING"

    # Host callbacks
    report_route_status: Optional[Callable[[str], None]] = None
    on_progress: Optional[Callable[[int, int, str], None]] = None
    on_reset: Optional[Callable[[str], None]] = None
    on_complete: Optional[Callable[[Any], None]] = None
    on_log: Optional[Callable[[List[str]], None]] = None

    @property
    def prompt(self) -> str:
        return f"{self.user}@{HOST}:~$"


def _env_flag(name: str) -> Optional[bool]:
    value = os.getenv(name)
    if value is None:
        return None
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config(**overrides) -> PlaygroundConfig:
    """Build a config from the environment (and .env), then apply overrides."""
    load_dotenv()

    values = {}
    if os.getenv("PLAYGROUND_USER"):
        values["user"] = os.getenv("PLAYGROUND_USER")
    delay_ms = os.getenv("PLAYGROUND_PLAYBACK_DELAY_MS")
    if delay_ms:
        try:
            values["playback_delay"] = int(delay_ms) / 1000
        except ValueError:
            logger.warning(f"Ignoring PLAYGROUND_PLAYBACK_DELAY_MS={delay_ms!r}: expected whole milliseconds")
    resume = _env_flag("PLAYGROUND_RESUME_SESSIONS")
    if resume is not None:
        values["resume_sessions"] = resume
    if os.getenv("PLAYGROUND_CONTENT_DIR"):
        values["content_dir"] = os.getenv("PLAYGROUND_CONTENT_DIR")
    if os.getenv("PLAYGROUND_LOG_LEVEL"):
        values["log_level"] = os.getenv("PLAYGROUND_LOG_LEVEL").upper()

    values.update({key: value for key, value in overrides.items() if value is not None})
    return PlaygroundConfig(**values)
