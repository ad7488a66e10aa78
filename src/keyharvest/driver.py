"""High-level orchestration of an extraction run."""

from __future__ import annotations

import logging
import time
from typing import List, Optional, Protocol, Sequence, Tuple

from .aggregate.aggregator import aggregate
from .chunking.chunker import chunk_records
from .config import HarvestConfig
from .decoding.decoder import decode_records, read_source
from .pool.worker_pool import WorkerPool
from .sink.writer import TextFileSink, write_summary
from .telemetry.events import log_event
from .types import ExtractionResult, NestedValue, RunReport, RunSummary

LOGGER = logging.getLogger(__name__)


class Sink(Protocol):
    def write(self, values: Sequence[str]) -> None:
        ...


def _log_chunk_done(index: int, count: int) -> None:
    log_event("chunk_done", chunk=index, values=count)


def extract_values(
    records: Sequence[NestedValue],
    config: HarvestConfig,
    *,
    started_at: Optional[float] = None,
) -> Tuple[List[str], RunSummary, ExtractionResult]:
    """Chunk, extract and aggregate already-decoded records."""

    config.validate()
    start = time.perf_counter() if started_at is None else started_at
    chunks = chunk_records(records, config.chunk_size)
    log_event("chunks_planned", chunks=len(chunks), chunk_size=config.chunk_size)
    LOGGER.info("Processing %d chunks with %d concurrent workers", len(chunks), config.max_concurrency)

    pool = WorkerPool(config.max_concurrency, on_chunk_done=_log_chunk_done)
    results = pool.run(chunks, config.target_key)
    elapsed = time.perf_counter() - start
    values, summary = aggregate(results, len(chunks), len(records), elapsed)
    log_event(
        "extraction_complete",
        extracted=summary.total_extracted,
        chunks=summary.total_chunks,
        peak_concurrency=results.peak_active,
    )
    return values, summary, results


def run_extraction(
    config: HarvestConfig,
    *,
    source: Optional[bytes] = None,
    sink: Optional[Sink] = None,
) -> RunReport:
    """Read, decode, extract and persist one input; return the run report.

    ``source`` replaces reading ``config.input_path`` and ``sink`` replaces
    the default text file sink at ``config.output_path``.
    """

    config.validate()
    start = time.perf_counter()
    input_label = config.input_path if source is None else None
    log_event("harvest_start", input=input_label, target_key=config.target_key)

    blob = read_source(config.input_path) if source is None else source
    records = decode_records(blob)
    log_event("records_decoded", records=len(records))

    values, summary, results = extract_values(records, config, started_at=start)

    output = sink if sink is not None else TextFileSink(config.output_path)
    output.write(values)
    log_event("output_written", values=len(values), output=config.output_path if sink is None else None)

    report = RunReport(
        summary=summary,
        input_path=input_label,
        output_path=config.output_path if sink is None else None,
        target_key=config.target_key,
        chunk_size=config.chunk_size,
        max_concurrency=config.max_concurrency,
        peak_concurrency=results.peak_active,
        success=True,
    )
    if config.summary_path is not None:
        write_summary(config.summary_path, report.to_dict())

    LOGGER.info(
        "Extracted %d values from %d records in %.4f seconds (%.2f values/sec)",
        summary.total_extracted,
        summary.total_records,
        summary.elapsed_seconds,
        summary.throughput,
    )
    log_event("harvest_complete", **report.to_dict())
    return report
