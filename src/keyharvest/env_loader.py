"""``.env`` defaults for ``KEYHARVEST_*`` settings."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Tuple

from .errors import InvalidConfiguration

_LOADED = False
_QUOTES = {"'", '"'}


def _parse_line(raw_line: str) -> Optional[Tuple[str, str]]:
    line = raw_line.strip()
    if not line or line.startswith("#"):
        return None
    if line.startswith("export "):
        line = line[len("export "):]
    key, sep, value = line.partition("=")
    key = key.strip()
    if not sep or not key:
        return None
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        value = value[1:-1]
    return key, value


def load_dotenv_once(path: str | Path = ".env") -> None:
    """Fill unset environment variables from ``path`` on the first call only.

    A missing file is not an error. A file that exists but cannot be read
    raises :class:`InvalidConfiguration`.
    """

    global _LOADED
    if _LOADED:
        return

    env_path = Path(path)
    if env_path.exists():
        try:
            text = env_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise InvalidConfiguration(f"environment file {env_path} could not be read: {exc}") from exc
        for raw_line in text.splitlines():
            pair = _parse_line(raw_line)
            if pair is not None and pair[0] not in os.environ:
                os.environ[pair[0]] = pair[1]

    _LOADED = True


def reset() -> None:
    """Allow the next :func:`load_dotenv_once` call to read a file again."""

    global _LOADED
    _LOADED = False
