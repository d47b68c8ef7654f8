"""Command-line entry point: ``qbench``."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from pydantic import ValidationError

from qbench import __version__
from qbench.config import Settings, get_settings
from qbench.connectors.postgres_pool import create_pool_from_settings
from qbench.core.definition_loader import load_suite
from qbench.core.export import render_table, write_results
from qbench.core.orchestrator import BenchmarkOrchestrator
from qbench.errors import QBenchError
from qbench.models.results import BenchmarkRunResult

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qbench",
        description=(
            "Benchmark revisions of SQL queries against a live database. "
            "Every revision runs in a transaction that is rolled back."
        ),
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "-u", "--url", default=None, help="Database connection URL."
    )
    parser.add_argument(
        "-d",
        "--bench-dir",
        default=None,
        help="Directory from which benchmark definitions are loaded.",
    )
    parser.add_argument(
        "-p",
        "--pattern",
        default=None,
        help="Glob pattern for definition files (e.g. '*.toml', '*.json').",
    )
    parser.add_argument(
        "-c",
        "--max-connections",
        type=int,
        default=None,
        help="Maximum number of pooled connections.",
    )
    parser.add_argument(
        "-i",
        "--iterations",
        type=int,
        default=None,
        help="Timed executions per revision.",
    )
    parser.add_argument(
        "--acquire-timeout",
        type=float,
        default=None,
        help="Seconds to wait for a free connection.",
    )
    parser.add_argument(
        "--idle-timeout",
        type=float,
        default=None,
        help="Seconds before an idle connection is recycled.",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Also write results to this file (.json or .toml).",
    )
    parser.add_argument("--log-level", default=None, help="Logging level.")
    return parser


def _resolve_settings(args: argparse.Namespace) -> Settings:
    return get_settings().with_overrides(
        DATABASE_URL=args.url,
        BENCH_DIR=args.bench_dir,
        PATTERN=args.pattern,
        MAX_CONNECTIONS=args.max_connections,
        ITERATIONS=args.iterations,
        ACQUIRE_TIMEOUT=args.acquire_timeout,
        IDLE_TIMEOUT=args.idle_timeout,
        LOG_LEVEL=args.log_level,
    )


async def _run(config: Settings) -> Optional[BenchmarkRunResult]:
    suite = load_suite(config.BENCH_DIR, config.PATTERN)
    if not suite.benchmarks:
        print(
            f"No benchmarks found in {config.BENCH_DIR} matching '{config.PATTERN}'"
        )
        return None

    async with create_pool_from_settings(config) as pool:
        orchestrator = BenchmarkOrchestrator(pool, config.ITERATIONS)
        return await orchestrator.run(suite)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        config = _resolve_settings(args)
    except ValidationError as e:
        parser.error(str(e))

    logging.basicConfig(level=config.LOG_LEVEL)
    try:
        result = asyncio.run(_run(config))
        if result is None:
            return 0
        render_table(result)
        if args.output:
            path = write_results(result, args.output)
            logger.info(f"Results written to {path}")
        return 0
    except QBenchError as e:
        logger.error(str(e))
        print(f"[qbench] {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("[qbench] interrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
