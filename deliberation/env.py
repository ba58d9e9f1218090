"""Load ``.env`` files into the process environment without overriding it."""
from __future__ import annotations

import io
import logging
import os
from pathlib import Path
from typing import Iterable, Sequence

from dotenv import dotenv_values

LOGGER = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_CANDIDATES: tuple[Path, ...] = (
    PACKAGE_DIR.parent / ".env",
    PACKAGE_DIR / ".env",
)

_loaded = False


def _first_readable(candidates: Iterable[Path]) -> Path | None:
    for path in candidates:
        if path.is_file() and os.access(path, os.R_OK):
            return path
    return None


def _strip_semicolon_comments(text: str) -> str:
    # python-dotenv only understands ``#`` comments.
    lines = [line for line in text.splitlines() if not line.strip().startswith(";")]
    return "\n".join(lines)


def parse_env(text: str) -> dict[str, str]:
    """Parse ``KEY=VALUE`` text into a dictionary.

    Blank lines, ``#``/``;`` comments and lines without ``=`` are ignored.
    An ``export`` prefix and matching surrounding quotes are stripped.
    """

    stream = io.StringIO(_strip_semicolon_comments(text))
    values: dict[str, str] = {}
    for key, value in dotenv_values(stream=stream, interpolate=False).items():
        if value is None:
            continue
        values[key.strip()] = value.strip()
    return values


def apply_env(values: dict[str, str]) -> list[str]:
    """Set variables that are missing or empty; return the keys applied."""

    applied: list[str] = []
    for key, value in values.items():
        if os.environ.get(key):
            continue
        os.environ[key] = value
        applied.append(key)
    return applied


def load_env(
    candidates: Sequence[Path] | None = None,
    *,
    force: bool = False,
) -> Path | None:
    """Load the first readable ``.env`` candidate into ``os.environ``.

    Returns the path that was loaded, or ``None`` when nothing was read.
    Subsequent calls are no-ops unless ``force`` is set.
    """

    global _loaded
    if _loaded and not force:
        return None
    _loaded = True

    env_path = _first_readable(candidates or DEFAULT_CANDIDATES)
    if env_path is None:
        return None

    try:
        text = env_path.read_text(encoding="utf-8")
    except OSError as exc:
        LOGGER.warning("Could not read %s: %s", env_path, exc)
        return None

    applied = apply_env(parse_env(text))
    LOGGER.debug("Loaded %d variables from %s", len(applied), env_path)
    return env_path


__all__ = ["DEFAULT_CANDIDATES", "apply_env", "load_env", "parse_env"]
