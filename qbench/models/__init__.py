"""
Data models for qbench.

This package contains Pydantic models for:
- Benchmark definitions (suites, benchmarks, revisions)
- Benchmark outcomes (per revision and per benchmark)
"""

from qbench.models.benchmark import (
    Revision,
    BenchmarkDefinition,
    BenchmarkFile,
    BenchmarkSuite,
)

from qbench.models.results import (
    OutcomeStatus,
    SuccessOutcome,
    QueryFailureOutcome,
    PreScriptFailureOutcome,
    PostScriptFailureOutcome,
    RevisionOutcome,
    BenchmarkOutcome,
    BenchmarkRunResult,
)

__all__ = [
    # benchmark
    "Revision",
    "BenchmarkDefinition",
    "BenchmarkFile",
    "BenchmarkSuite",
    # results
    "OutcomeStatus",
    "SuccessOutcome",
    "QueryFailureOutcome",
    "PreScriptFailureOutcome",
    "PostScriptFailureOutcome",
    "RevisionOutcome",
    "BenchmarkOutcome",
    "BenchmarkRunResult",
]
