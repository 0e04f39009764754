"""Environment-driven settings for the apwalk CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

import os

TOUR_PATH_VAR = "APWALK_TOUR_PATH"
NO_PAUSE_VAR = "APWALK_NO_PAUSE"
TUTORIAL_TITLE_VAR = "APWALK_TUTORIAL_TITLE"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    tour_dirs: Tuple[Path, ...] = ()
    pause_between_steps: bool = True
    tutorial_title: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        raw_path = env.get(TOUR_PATH_VAR, "")
        tour_dirs = tuple(
            Path(entry).expanduser() for entry in raw_path.split(os.pathsep) if entry.strip()
        )
        no_pause = env.get(NO_PAUSE_VAR, "").strip().lower() in _TRUTHY
        title = env.get(TUTORIAL_TITLE_VAR, "").strip() or None
        return cls(
            tour_dirs=tour_dirs,
            pause_between_steps=not no_pause,
            tutorial_title=title,
        )


def load_env_file(path: Path) -> None:
    """Export ``KEY=value`` lines from ``path`` without overriding the environment."""
    try:
        raw = Path(path).read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return
    for line in raw.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if stripped.startswith("export "):
            stripped = stripped[7:].lstrip()
        if "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue
        if (
            len(value) >= 2
            and value[0] == value[-1]
            and value[0] in ("'", '"')
        ):
            value = value[1:-1]
        if key not in os.environ:
            os.environ[key] = value
