"""
Error taxonomy for qbench.

Only engine-level faults are raised. Failures of a revision's pre-script,
query, or post-script are reported as outcome variants instead
(see ``qbench.models.results``).
"""

from __future__ import annotations


class QBenchError(Exception):
    """Base class for all qbench errors."""


class DefinitionParseError(QBenchError):
    """A benchmark definition file is malformed or unsupported."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse benchmark definition {path}: {reason}")


class PoolConnectError(QBenchError):
    """The connection pool could not be created (database unreachable)."""


class PoolExhaustionError(QBenchError):
    """No connection became available within the acquire timeout."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(
            f"Timed out after {timeout:g}s waiting for a pooled connection"
        )


class TransactionBeginError(QBenchError):
    """A transaction could not be started for a revision."""

    def __init__(self, revision_name: str, cause: BaseException):
        self.revision_name = revision_name
        self.cause = cause
        super().__init__(
            f"Could not begin transaction for revision '{revision_name}': {cause}"
        )


class ExportFormatError(QBenchError):
    """Results could not be exported in the requested format."""


class ScriptError(Exception):
    """
    A statement inside a pre/post script failed.

    Internal to the revision executor; converted into an outcome variant
    before it can escape.
    """

    def __init__(self, statement: str, cause: BaseException):
        self.statement = statement
        self.cause = cause
        super().__init__(str(cause))
