"""Failure kinds surfaced by an extraction run."""

from __future__ import annotations

from typing import Dict


class HarvestError(RuntimeError):
    """Base class for structured extraction failures."""

    kind = "harvest_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind, "message": self.message}


class SourceReadError(HarvestError):
    """Raised when the input file cannot be read."""

    kind = "source_read_error"


class DecodeError(HarvestError):
    """Raised when the input blob is not a well-formed JSON array."""

    kind = "decode_error"


class InvalidConfiguration(HarvestError, ValueError):
    """Raised before any work starts when settings are out of range."""

    kind = "invalid_configuration"


class EmptyResult(HarvestError):
    """Raised when a run finds nothing under the target key."""

    kind = "empty_result"


class SinkWriteError(HarvestError):
    """Raised when extracted values or the run report cannot be persisted."""

    kind = "sink_write_error"
