"""Read and decode the JSON array of records feeding a run."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import orjson

from ..errors import DecodeError, SourceReadError
from ..types import NestedValue

LOGGER = logging.getLogger(__name__)


def read_source(path: Path | str) -> bytes:
    """Return the raw bytes of ``path``."""

    source = Path(path)
    try:
        data = source.read_bytes()
    except OSError as exc:
        raise SourceReadError(f"failed to read file {source}: {exc}") from exc
    LOGGER.debug("Read %d bytes from %s", len(data), source)
    return data


def decode_records(blob: bytes | str) -> List[NestedValue]:
    """Parse ``blob`` in a single pass and return its top-level records.

    The document must be a JSON array; any other top-level shape is rejected
    because records are addressed by position during chunking.
    """

    try:
        payload = orjson.loads(blob)
    except orjson.JSONDecodeError as exc:
        raise DecodeError(f"failed to parse JSON: {exc}") from exc
    if not isinstance(payload, list):
        raise DecodeError(f"expected a JSON array at top level, got {type(payload).__name__}")
    return payload
