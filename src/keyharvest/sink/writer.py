"""Persist extracted values and run reports."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Sequence

import orjson

from ..errors import SinkWriteError

LOGGER = logging.getLogger(__name__)


class TextFileSink:
    """Write one extracted value per line, without a trailing newline."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def write(self, values: Sequence[str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("\n".join(values), encoding="utf-8")
        except OSError as exc:
            raise SinkWriteError(f"failed to write output file {self.path}: {exc}") from exc
        LOGGER.info("Wrote %d values to %s", len(values), self.path)


def write_summary(path: Path | str, payload: Mapping[str, Any]) -> None:
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(orjson.dumps(dict(payload), option=orjson.OPT_INDENT_2))
    except OSError as exc:
        raise SinkWriteError(f"failed to write summary file {target}: {exc}") from exc
