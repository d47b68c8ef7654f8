"""
Benchmark orchestration.

Fans a suite out into one task per revision. All benchmarks and all their
revisions are scheduled at once; the connection pool is what bounds how many
actually run. Outcomes are collected by index so they keep definition order
regardless of completion order.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Optional

from qbench.core.revision_executor import RevisionExecutor
from qbench.models.benchmark import BenchmarkDefinition, BenchmarkSuite
from qbench.models.results import (
    BenchmarkOutcome,
    BenchmarkRunResult,
    RevisionOutcome,
)

if TYPE_CHECKING:
    from qbench.connectors.postgres_pool import PostgresConnectionPool

logger = logging.getLogger(__name__)


class BenchmarkOrchestrator:
    """
    Runs a BenchmarkSuite against a pool.

    Per-revision failures are outcomes, not faults. A revision that cannot
    even start (no connection, transaction begin failed) is logged and left
    out of its benchmark's outcomes; siblings keep running.
    """

    def __init__(
        self,
        pool: "PostgresConnectionPool",
        iterations: int = 1,
        executor: Optional[RevisionExecutor] = None,
    ):
        self.pool = pool
        self.executor = executor or RevisionExecutor(pool, iterations)

    async def run(self, suite: BenchmarkSuite) -> BenchmarkRunResult:
        """
        Run every benchmark of the suite concurrently.

        Args:
            suite: Benchmarks to run

        Returns:
            BenchmarkRunResult with one BenchmarkOutcome per definition
        """
        logger.info(
            f"Running {len(suite.benchmarks)} benchmark(s), "
            f"{suite.revision_count} revision(s), "
            f"{self.executor.iterations} iteration(s) each"
        )
        outcomes = await asyncio.gather(
            *(self.run_benchmark(bench) for bench in suite.benchmarks)
        )
        return BenchmarkRunResult(results=list(outcomes))

    async def run_benchmark(self, bench: BenchmarkDefinition) -> BenchmarkOutcome:
        """Run all revisions of one benchmark concurrently."""
        results = await asyncio.gather(
            *(self.executor.execute(rev) for rev in bench.revisions),
            return_exceptions=True,
        )

        revision_outcomes: list[RevisionOutcome] = []
        for rev, result in zip(bench.revisions, results):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, Exception):
                logger.error(
                    f"Benchmark '{bench.name}': revision '{rev.name}' "
                    f"could not run: {result}"
                )
                continue
            revision_outcomes.append(result)

        logger.info(
            f"Benchmark '{bench.name}' finished: "
            f"{sum(1 for o in revision_outcomes if o.succeeded)}"
            f"/{len(bench.revisions)} revision(s) succeeded"
        )
        return BenchmarkOutcome(name=bench.name, revision_outcomes=revision_outcomes)


async def run_suite(
    suite: BenchmarkSuite, pool: "PostgresConnectionPool", iterations: int
) -> BenchmarkRunResult:
    """
    Run a suite against an already-configured pool.

    Pool construction/connect failures propagate and abort the run.
    """
    await pool.initialize()
    return await BenchmarkOrchestrator(pool, iterations).run(suite)
