"""Flatten per-chunk results and derive the run summary."""

from __future__ import annotations

import math
from datetime import timedelta
from typing import List, Tuple

from ..errors import EmptyResult
from ..types import ExtractionResult, RunSummary


def _seconds(elapsed: float | timedelta) -> float:
    if isinstance(elapsed, timedelta):
        return elapsed.total_seconds()
    return float(elapsed)


def aggregate(
    results: ExtractionResult,
    chunk_count: int,
    total_records: int,
    elapsed: float | timedelta,
) -> Tuple[List[str], RunSummary]:
    if len(results) != chunk_count:
        raise ValueError(f"expected {chunk_count} chunk results, got {len(results)}")

    values: List[str] = []
    for index in range(chunk_count):
        values.extend(results[index])
    if not values:
        raise EmptyResult("no values found under the target key")

    seconds = _seconds(elapsed)
    throughput = len(values) / seconds if seconds > 0 else math.inf
    summary = RunSummary(
        total_records=total_records,
        total_extracted=len(values),
        total_chunks=chunk_count,
        elapsed_seconds=seconds,
        throughput=throughput,
    )
    return values, summary
