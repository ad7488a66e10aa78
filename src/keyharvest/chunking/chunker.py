"""Split the decoded records into contiguous worker-sized chunks."""

from __future__ import annotations

from typing import List, Sequence

from ..errors import InvalidConfiguration
from ..types import Chunk, NestedValue


def chunk_records(records: Sequence[NestedValue], size: int) -> List[Chunk]:
    """Partition ``records`` into ceil(len / size) chunks in input order.

    Chunk ``i`` covers ``[i * size, min((i + 1) * size, len(records)))``; only
    the last chunk may be shorter than ``size``. Each chunk holds a shallow
    slice, so the record objects themselves are shared with ``records``.
    """

    if isinstance(size, bool) or not isinstance(size, int) or size < 1:
        raise InvalidConfiguration(f"chunk size must be a positive integer, got {size!r}")
    chunks: List[Chunk] = []
    for index, start in enumerate(range(0, len(records), size)):
        stop = min(start + size, len(records))
        chunks.append(Chunk(index=index, start=start, stop=stop, records=records[start:stop]))
    return chunks
