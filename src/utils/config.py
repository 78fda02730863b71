"""Application settings loaded from environment variables and .env."""
import os
from dataclasses import dataclass
from pathlib import Path
from threading import Lock
from typing import MutableMapping, Optional, Tuple


DEFAULT_DATA_FILE = "data/event_registrations.json"
DEFAULT_EVENTS = (
    "Tech Conference 2024",
    "Web Development Workshop",
    "AI & Machine Learning Summit",
    "Networking Meetup",
)
DEFAULT_SIGNATURE = "Event Management Team"

SETTING_KEYS = {
    "EVENT_REGISTRATION_DATA_FILE",
    "EVENT_REGISTRATION_EVENTS",
    "EVENT_REGISTRATION_SIGNATURE",
    "LOG_LEVEL",
}

_ENV_LOADED = False
_ENV_LOCK = Lock()


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the registration manager."""

    data_file: str
    events: Tuple[str, ...]
    signature: str
    log_level: str


def load_env_file(
    env_path: Optional[Path] = None,
    force: bool = False,
    environ: Optional[MutableMapping[str, str]] = None
) -> None:
    """
    Load known settings from a .env file if present.

    Args:
        env_path: File to read (defaults to ./.env)
        force: Re-read even if a previous call already loaded it
        environ: Mapping to update (defaults to os.environ)

    Behavior:
        - Ignores blank lines, comments and lines without '='
        - Strips surrounding quotes from values
        - Never overrides variables already set in the environment
    """
    global _ENV_LOADED

    if _ENV_LOADED and not force:
        return

    with _ENV_LOCK:
        if _ENV_LOADED and not force:
            return

        env_path = env_path or Path(".env")
        if environ is None:
            environ = os.environ
        if env_path.exists():
            for raw_line in env_path.read_text(encoding="utf-8").splitlines():
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue

                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"\'')

                if key in SETTING_KEYS and key not in environ:
                    environ[key] = value

        _ENV_LOADED = True


def parse_event_list(raw: Optional[str]) -> Tuple[str, ...]:
    """
    Parse a comma separated event catalogue.

    Returns:
        Tuple of non-empty, trimmed event names in the given order,
        without duplicates; DEFAULT_EVENTS when nothing usable is given
    """
    if not raw:
        return DEFAULT_EVENTS

    events = []
    for item in raw.split(","):
        name = item.strip()
        if name and name not in events:
            events.append(name)

    return tuple(events) or DEFAULT_EVENTS


def load_settings(env_path: Optional[Path] = None) -> Settings:
    """Build Settings from the environment (after loading .env)."""
    load_env_file(env_path)

    return Settings(
        data_file=os.getenv("EVENT_REGISTRATION_DATA_FILE", DEFAULT_DATA_FILE),
        events=parse_event_list(os.getenv("EVENT_REGISTRATION_EVENTS")),
        signature=os.getenv("EVENT_REGISTRATION_SIGNATURE", DEFAULT_SIGNATURE),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
