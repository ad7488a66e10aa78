"""Structured JSON event logging for extraction runs."""

from __future__ import annotations

import logging
from typing import Any, Dict

import orjson

EVENT_LOGGER_NAME = "keyharvest.events"

LOGGER = logging.getLogger(EVENT_LOGGER_NAME)


def log_event(event: str, **payload: Any) -> None:
    """Log ``event`` and its payload as a single JSON object."""

    data: Dict[str, Any] = {"event": event, **payload}
    LOGGER.info(orjson.dumps(data, default=str).decode("utf-8"))
