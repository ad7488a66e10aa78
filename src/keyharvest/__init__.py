"""keyharvest: bounded-concurrency key extraction over large JSON arrays."""

from .chunking.chunker import chunk_records
from .config import HarvestConfig, load_config
from .driver import extract_values, run_extraction
from .errors import (
    DecodeError,
    EmptyResult,
    HarvestError,
    InvalidConfiguration,
    SinkWriteError,
    SourceReadError,
)
from .extraction.extractor import extract, extract_all
from .pool.worker_pool import WorkerPool
from .types import Chunk, ExtractionResult, RunReport, RunSummary

__all__ = [
    "Chunk",
    "DecodeError",
    "EmptyResult",
    "ExtractionResult",
    "HarvestConfig",
    "HarvestError",
    "InvalidConfiguration",
    "RunReport",
    "RunSummary",
    "SinkWriteError",
    "SourceReadError",
    "WorkerPool",
    "chunk_records",
    "extract",
    "extract_all",
    "extract_values",
    "load_config",
    "run_extraction",
]
