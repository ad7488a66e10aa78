"""Public data structures shared by the extraction pipeline."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

Scalar = Union[str, int, float, bool, None]
NestedValue = Union[Mapping, list, tuple, Scalar]


class NodeKind(Enum):
    """Closed set of shapes a decoded JSON value can take."""

    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"


def node_kind(value: Any) -> NodeKind:
    """Classify ``value``; strings and bytes are scalars, never sequences."""

    if isinstance(value, Mapping):
        return NodeKind.MAPPING
    if isinstance(value, (list, tuple)):
        return NodeKind.SEQUENCE
    return NodeKind.SCALAR


@dataclass(slots=True)
class Chunk:
    """Contiguous slice of top-level records handled by one worker task."""

    index: int
    start: int
    stop: int
    records: Sequence[NestedValue]

    def __len__(self) -> int:
        return self.stop - self.start


class ExtractionResult:
    """Pre-sized slot array holding each chunk's extracted values.

    Every slot is written exactly once, by the task owning that chunk index,
    so the array needs no lock. Slots are read only after the pool barrier.
    """

    __slots__ = ("_slots", "peak_active")

    def __init__(self, size: int) -> None:
        self._slots: List[Optional[List[str]]] = [None] * size
        self.peak_active = 0

    def __len__(self) -> int:
        return len(self._slots)

    def __getitem__(self, index: int) -> List[str]:
        values = self._slots[index]
        if values is None:
            raise RuntimeError(f"chunk #{index} has not been stored")
        return values

    def __iter__(self) -> Iterator[List[str]]:
        for index in range(len(self._slots)):
            yield self[index]

    def store(self, index: int, values: List[str]) -> None:
        if self._slots[index] is not None:
            raise RuntimeError(f"chunk #{index} was already stored")
        self._slots[index] = values

    def is_complete(self) -> bool:
        return all(values is not None for values in self._slots)


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Counts and timing derived once at the end of a run."""

    total_records: int
    total_extracted: int
    total_chunks: int
    elapsed_seconds: float
    throughput: float


@dataclass(slots=True)
class RunReport:
    """Serialisable outcome of one extraction run."""

    summary: RunSummary
    input_path: Optional[Path]
    output_path: Optional[Path]
    target_key: str
    chunk_size: int
    max_concurrency: int
    peak_concurrency: int = 0
    success: bool = False

    def to_dict(self) -> Dict[str, Any]:
        summary = asdict(self.summary)
        throughput = summary["throughput"]
        return {
            "input_file": str(self.input_path) if self.input_path else None,
            "output_file": str(self.output_path) if self.output_path else None,
            "total_routes": summary["total_records"],
            "total_descriptions": summary["total_extracted"],
            "total_chunks": summary["total_chunks"],
            "processing_time_seconds": summary["elapsed_seconds"],
            "descriptions_per_second": throughput if math.isfinite(throughput) else None,
            "success": self.success,
            "target_key": self.target_key,
            "chunk_size": self.chunk_size,
            "max_concurrency": self.max_concurrency,
            "peak_concurrency": self.peak_concurrency,
        }
