from __future__ import annotations

import threading
import time

import pytest

from keyharvest.chunking.chunker import chunk_records
from keyharvest.errors import InvalidConfiguration
from keyharvest.pool import worker_pool
from keyharvest.pool.worker_pool import WorkerPool


def _records(count: int) -> list[dict]:
    return [{"description": f"d{idx}"} for idx in range(count)]


def test_results_are_indexed_by_chunk() -> None:
    chunks = chunk_records(_records(7), 3)
    result = WorkerPool(4).run(chunks, "description")

    assert len(result) == 3
    assert result.is_complete()
    assert result[0] == ["d0", "d1", "d2"]
    assert result[1] == ["d3", "d4", "d5"]
    assert result[2] == ["d6"]


def test_empty_chunk_list_returns_empty_result() -> None:
    result = WorkerPool(3).run([], "description")
    assert len(result) == 0
    assert result.is_complete()


@pytest.mark.parametrize("value", [0, -1, True, "10"])
def test_invalid_concurrency_is_rejected(value) -> None:
    with pytest.raises(InvalidConfiguration):
        WorkerPool(value)


@pytest.mark.parametrize("limit", [1, 2, 5])
@pytest.mark.parametrize("chunk_count", [1, 4, 23])
def test_concurrency_never_exceeds_limit(monkeypatch: pytest.MonkeyPatch, limit: int, chunk_count: int) -> None:
    lock = threading.Lock()
    state = {"active": 0, "peak": 0}
    real_extract_all = worker_pool.extract_all

    def slow_extract_all(values, target_key):
        with lock:
            state["active"] += 1
            state["peak"] = max(state["peak"], state["active"])
        time.sleep(0.005)
        try:
            return real_extract_all(values, target_key)
        finally:
            with lock:
                state["active"] -= 1

    monkeypatch.setattr(worker_pool, "extract_all", slow_extract_all)
    chunks = chunk_records(_records(chunk_count), 1)
    result = WorkerPool(limit).run(chunks, "description")

    assert state["peak"] <= limit
    assert 1 <= result.peak_active <= limit
    assert [values[0] for values in result] == [f"d{idx}" for idx in range(chunk_count)]


def test_completion_order_does_not_affect_slots(monkeypatch: pytest.MonkeyPatch) -> None:
    real_extract_all = worker_pool.extract_all

    def reversed_delay(values, target_key):
        index = int(values[0]["description"][1:])
        time.sleep(0.002 * (10 - index))
        return real_extract_all(values, target_key)

    monkeypatch.setattr(worker_pool, "extract_all", reversed_delay)
    chunks = chunk_records(_records(10), 1)
    result = WorkerPool(10).run(chunks, "description")

    assert [values for values in result] == [[f"d{idx}"] for idx in range(10)]


def test_on_chunk_done_reports_each_chunk() -> None:
    seen: list[tuple[int, int]] = []
    lock = threading.Lock()

    def record(index: int, count: int) -> None:
        with lock:
            seen.append((index, count))

    chunks = chunk_records(_records(5) + [{}], 2)
    WorkerPool(2, on_chunk_done=record).run(chunks, "description")

    assert sorted(seen) == [(0, 2), (1, 2), (2, 1)]


def test_unexpected_failure_is_raised_after_all_tasks_finish(monkeypatch: pytest.MonkeyPatch) -> None:
    finished: list[int] = []
    lock = threading.Lock()
    real_extract_all = worker_pool.extract_all

    def flaky(values, target_key):
        index = int(values[0]["description"][1:])
        if index == 1:
            raise RuntimeError("chunk failed")
        time.sleep(0.01)
        with lock:
            finished.append(index)
        return real_extract_all(values, target_key)

    monkeypatch.setattr(worker_pool, "extract_all", flaky)
    chunks = chunk_records(_records(4), 1)
    with pytest.raises(RuntimeError, match="chunk failed"):
        WorkerPool(2).run(chunks, "description")

    assert sorted(finished) == [0, 2, 3]


class _WideExecutorPool(WorkerPool):
    def _executor_workers(self, chunk_count: int) -> int:
        return chunk_count


def test_gate_bounds_active_tasks_when_threads_outnumber_permits(monkeypatch: pytest.MonkeyPatch) -> None:
    lock = threading.Lock()
    state = {"active": 0, "peak": 0}
    real_extract_all = worker_pool.extract_all

    def slow_extract_all(values, target_key):
        with lock:
            state["active"] += 1
            state["peak"] = max(state["peak"], state["active"])
        time.sleep(0.01)
        try:
            return real_extract_all(values, target_key)
        finally:
            with lock:
                state["active"] -= 1

    monkeypatch.setattr(worker_pool, "extract_all", slow_extract_all)
    chunks = chunk_records(_records(12), 1)
    result = _WideExecutorPool(2).run(chunks, "description")

    assert state["peak"] <= 2
    assert result.peak_active == 2
    assert [values[0] for values in result] == [f"d{idx}" for idx in range(12)]
