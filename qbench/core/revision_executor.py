"""
Revision execution.

Runs one revision's lifecycle (pre-script, timed iterations, post-script)
inside a single transaction that is always rolled back. Expected failures
come back as outcome variants; only failing to obtain a connection or to
begin the transaction raises.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Any

from qbench.core.statements import split_statements
from qbench.errors import ScriptError, TransactionBeginError
from qbench.models.benchmark import Revision
from qbench.models.results import (
    PostScriptFailureOutcome,
    PreScriptFailureOutcome,
    QueryFailureOutcome,
    RevisionOutcome,
    SuccessOutcome,
)

if TYPE_CHECKING:
    from qbench.connectors.postgres_pool import PostgresConnectionPool

logger = logging.getLogger(__name__)


def _error_message(exc: BaseException) -> str:
    msg = str(exc).strip()
    return msg or type(exc).__name__


class GuardedTransaction:
    """
    A connection's transaction behind an ``asyncio.Lock``.

    asyncpg connections reject concurrent operations, so every statement,
    and the final rollback, goes through the lock. Owned by exactly one
    executor invocation.
    """

    def __init__(self, conn: Any):
        self._conn = conn
        self._tx = conn.transaction()
        self._lock = asyncio.Lock()
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    async def begin(self) -> None:
        async with self._lock:
            await self._tx.start()
            self._active = True

    async def execute(self, statement: str) -> None:
        async with self._lock:
            await self._conn.execute(statement)

    async def rollback(self) -> None:
        async with self._lock:
            if not self._active:
                return
            self._active = False
            await self._tx.rollback()


class RevisionExecutor:
    """Executes revisions against a pool with a fixed iteration count."""

    def __init__(self, pool: "PostgresConnectionPool", iterations: int = 1):
        if iterations < 1:
            raise ValueError(f"iterations must be at least 1, got {iterations}")
        self.pool = pool
        self.iterations = iterations

    async def execute(self, revision: Revision) -> RevisionOutcome:
        """
        Run a revision and report how it went.

        Args:
            revision: Revision to benchmark

        Returns:
            Success, Failure, PreScriptFailure or PostScriptFailure outcome

        Raises:
            PoolExhaustionError: No connection within the acquire timeout
            TransactionBeginError: The transaction could not be started
        """
        logger.debug(f"Starting revision '{revision.name}'")
        async with self.pool.connection() as conn:
            tx = GuardedTransaction(conn)
            try:
                await tx.begin()
            except Exception as e:
                raise TransactionBeginError(revision.name, e) from e

            try:
                outcome = await self._run_phases(revision, tx)
            finally:
                await self._rollback(revision, tx)

        logger.debug(f"Finished revision '{revision.name}': {outcome.status}")
        return outcome

    async def _run_phases(
        self, revision: Revision, tx: GuardedTransaction
    ) -> RevisionOutcome:
        pre_script_ns = 0
        if revision.pre_script is not None:
            try:
                pre_script_ns = await self._run_script(tx, revision.pre_script)
            except ScriptError as e:
                logger.warning(
                    f"Pre-script of revision '{revision.name}' failed on "
                    f"{e.statement!r}: {e.cause}"
                )
                return PreScriptFailureOutcome(
                    revision_name=revision.name, error=_error_message(e.cause)
                )

        durations: list[int] = []
        for i in range(self.iterations):
            start = time.perf_counter_ns()
            try:
                await tx.execute(revision.query)
            except Exception as e:
                logger.warning(
                    f"Query of revision '{revision.name}' failed on iteration "
                    f"{i + 1}/{self.iterations}: {e}"
                )
                return QueryFailureOutcome(
                    revision_name=revision.name, error=_error_message(e)
                )
            durations.append(time.perf_counter_ns() - start)

        average_ns = sum(durations) // len(durations)

        post_script_ns = 0
        if revision.post_script is not None:
            try:
                post_script_ns = await self._run_script(tx, revision.post_script)
            except ScriptError as e:
                # Query timings are dropped here; only the error is reported.
                logger.warning(
                    f"Post-script of revision '{revision.name}' failed on "
                    f"{e.statement!r}: {e.cause}"
                )
                return PostScriptFailureOutcome(
                    revision_name=revision.name, error=_error_message(e.cause)
                )

        return SuccessOutcome(
            revision_name=revision.name,
            per_iteration_durations=durations,
            average_duration=average_ns,
            pre_script_duration=pre_script_ns,
            post_script_duration=post_script_ns,
        )

    @staticmethod
    async def _run_script(tx: GuardedTransaction, script: str) -> int:
        """Execute each non-empty statement in order; return elapsed ns."""
        start = time.perf_counter_ns()
        for statement in split_statements(script):
            if not statement:
                continue
            try:
                await tx.execute(statement)
            except Exception as e:
                raise ScriptError(statement, e) from e
        return time.perf_counter_ns() - start

    @staticmethod
    async def _rollback(revision: Revision, tx: GuardedTransaction) -> None:
        try:
            await tx.rollback()
        except Exception as e:
            # The pool resets the connection on release.
            logger.warning(f"Rollback of revision '{revision.name}' failed: {e}")


async def execute_revision(
    revision: Revision, pool: "PostgresConnectionPool", iterations: int
) -> RevisionOutcome:
    """Run a single revision; see ``RevisionExecutor.execute``."""
    return await RevisionExecutor(pool, iterations).execute(revision)
