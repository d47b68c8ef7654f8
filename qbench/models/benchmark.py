"""
Benchmark Definition Models

Immutable Pydantic models describing what to run:
- Revision: one candidate formulation of a query
- BenchmarkDefinition: a named group of revisions compared against each other
- BenchmarkSuite: every definition loaded for a run
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Revision(BaseModel):
    """A single query formulation plus optional setup/teardown scripts."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Revision label shown in results")
    query: str = Field(..., description="Statement whose latency is measured")
    pre_script: Optional[str] = Field(
        None, description="Setup statements run once before the timed loop"
    )
    post_script: Optional[str] = Field(
        None, description="Teardown statements run once after the timed loop"
    )

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("query must not be empty")
        return v


class BenchmarkDefinition(BaseModel):
    """A named benchmark; names are not required to be unique."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Benchmark name")
    revisions: tuple[Revision, ...] = Field(
        ..., description="Revisions in definition order"
    )


class BenchmarkFile(BaseModel):
    """Top-level document of a definition file (``{queries: [...]}``)."""

    model_config = ConfigDict(frozen=True)

    queries: tuple[BenchmarkDefinition, ...] = Field(default_factory=tuple)


class BenchmarkSuite(BaseModel):
    """Ordered collection of every benchmark in a run."""

    model_config = ConfigDict(frozen=True)

    benchmarks: tuple[BenchmarkDefinition, ...] = Field(default_factory=tuple)

    @classmethod
    def from_files(cls, files: List[BenchmarkFile]) -> "BenchmarkSuite":
        benchmarks: list[BenchmarkDefinition] = []
        for f in files:
            benchmarks.extend(f.queries)
        return cls(benchmarks=tuple(benchmarks))

    def __len__(self) -> int:
        return len(self.benchmarks)

    @property
    def revision_count(self) -> int:
        return sum(len(b.revisions) for b in self.benchmarks)
