"""Bounded-concurrency execution of the extractor over all chunks."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Callable, List, Optional, Sequence

from ..extraction.extractor import extract_all
from ..types import Chunk, ExtractionResult
from .gate import AdmissionGate, check_permits

LOGGER = logging.getLogger(__name__)

ChunkCallback = Callable[[int, int], None]


class WorkerPool:
    """Run one extraction task per chunk with at most ``max_concurrency`` active."""

    def __init__(self, max_concurrency: int = 10, *, on_chunk_done: Optional[ChunkCallback] = None) -> None:
        self.max_concurrency = check_permits(max_concurrency)
        self.on_chunk_done = on_chunk_done

    def run(self, chunks: Sequence[Chunk], target_key: str) -> ExtractionResult:
        """Extract every chunk and return once all of them have finished.

        Results are stored by chunk index, so completion order never affects
        the final ordering. If a task fails unexpectedly, the first failure in
        chunk order is raised after every other task has completed.
        """

        result = ExtractionResult(len(chunks))
        if not chunks:
            return result
        gate = AdmissionGate(self.max_concurrency)
        workers = self._executor_workers(len(chunks))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="keyharvest") as executor:
            futures: List[Future] = [
                executor.submit(self._run_chunk, chunk, target_key, gate, result) for chunk in chunks
            ]
            wait(futures)
        result.peak_active = gate.peak
        for future in futures:
            exc = future.exception()
            if exc is not None:
                raise exc
        return result

    def _executor_workers(self, chunk_count: int) -> int:
        return min(self.max_concurrency, chunk_count)

    def _run_chunk(self, chunk: Chunk, target_key: str, gate: AdmissionGate, result: ExtractionResult) -> None:
        with gate.slot():
            values = extract_all(chunk.records, target_key)
        result.store(chunk.index, values)
        LOGGER.debug("chunk #%d: found %d values", chunk.index, len(values))
        if self.on_chunk_done is not None:
            self.on_chunk_done(chunk.index, len(values))
