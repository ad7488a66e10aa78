"""Command-line entrypoint for keyharvest."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List

import orjson

from .config import load_config
from .driver import run_extraction
from .env_loader import load_dotenv_once
from .errors import EmptyResult, HarvestError, InvalidConfiguration
from .telemetry.events import log_event

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID_CONFIGURATION = 2
EXIT_EMPTY_RESULT = 3


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract every string stored under a key from a large JSON array"
    )
    parser.add_argument("input", type=Path, nargs="?", default=None, help="JSON array file to scan")
    parser.add_argument("--output", type=Path, default=None, help="Plain-text file receiving one value per line")
    parser.add_argument("--summary", type=Path, default=None, help="Optional JSON run report path")
    parser.add_argument("--config", type=Path, default=None, help="Optional configuration YAML")
    parser.add_argument("--chunk-size", type=int, default=None, help="Records per worker chunk (default: 50)")
    parser.add_argument("--max-concurrency", type=int, default=None, help="Concurrent workers (default: 10)")
    parser.add_argument("--target-key", default=None, help="Key whose string values are collected (default: description)")
    parser.add_argument("--env-file", type=Path, default=Path(".env"), help="Environment defaults file")
    parser.add_argument("--json", action="store_true", help="Print the run report as JSON")
    parser.add_argument("--log-level", default="INFO", help="Python logging level (default: INFO)")
    return parser


def main(argv: List[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    overrides = {
        "input_path": args.input,
        "output_path": args.output,
        "summary_path": args.summary,
        "chunk_size": args.chunk_size,
        "max_concurrency": args.max_concurrency,
        "target_key": args.target_key,
    }
    try:
        load_dotenv_once(args.env_file)
        config = load_config(args.config, overrides=overrides)
        report = run_extraction(config)
    except InvalidConfiguration as exc:
        log_event("harvest_failed", **exc.to_dict())
        return EXIT_INVALID_CONFIGURATION
    except EmptyResult as exc:
        log_event("harvest_failed", **exc.to_dict())
        return EXIT_EMPTY_RESULT
    except HarvestError as exc:
        log_event("harvest_failed", **exc.to_dict())
        return EXIT_FAILED

    if args.json:
        print(orjson.dumps(report.to_dict(), option=orjson.OPT_INDENT_2).decode("utf-8"))
    else:
        LOGGER.info(
            "Processed input=%s | records=%s | values=%s | chunks=%s",
            report.input_path,
            report.summary.total_records,
            report.summary.total_extracted,
            report.summary.total_chunks,
        )
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
