"""
Benchmark Result Models

Defines the outcome tree produced by a run. All durations are integer
nanoseconds. Dumped with ``by_alias=True``, duration fields carry an
explicit ``_ns`` suffix.
"""

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class OutcomeStatus(str, Enum):
    """Discriminator for revision outcomes."""

    SUCCESS = "success"
    FAILURE = "failure"
    PRE_SCRIPT_FAILURE = "pre_script_failure"
    POST_SCRIPT_FAILURE = "post_script_failure"


class _OutcomeBase(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    revision_name: str = Field(..., description="Revision this outcome belongs to")

    @property
    def succeeded(self) -> bool:
        return False


class SuccessOutcome(_OutcomeBase):
    """Every phase of the revision completed."""

    status: Literal["success"] = "success"
    per_iteration_durations: List[int] = Field(
        ...,
        alias="per_iteration_durations_ns",
        description="Query duration of each iteration, in order (ns)",
    )
    average_duration: int = Field(
        ...,
        alias="average_duration_ns",
        description="Mean of per-iteration durations (ns)",
    )
    pre_script_duration: int = Field(
        0,
        alias="pre_script_duration_ns",
        description="Total pre-script time, 0 when absent (ns)",
    )
    post_script_duration: int = Field(
        0,
        alias="post_script_duration_ns",
        description="Total post-script time, 0 when absent (ns)",
    )

    @model_validator(mode="after")
    def validate_durations(self) -> "SuccessOutcome":
        if not self.per_iteration_durations:
            raise ValueError("a successful outcome needs at least one iteration")
        return self

    @property
    def succeeded(self) -> bool:
        return True

    @property
    def iterations(self) -> int:
        return len(self.per_iteration_durations)

    @property
    def min_duration(self) -> int:
        return min(self.per_iteration_durations)

    @property
    def max_duration(self) -> int:
        return max(self.per_iteration_durations)


class QueryFailureOutcome(_OutcomeBase):
    """The timed query failed; partial iteration durations are not kept."""

    status: Literal["failure"] = "failure"
    error: str = Field(..., description="Database error message")


class PreScriptFailureOutcome(_OutcomeBase):
    """The pre-script failed; the query and post-script never ran."""

    status: Literal["pre_script_failure"] = "pre_script_failure"
    error: str = Field(..., description="Database error message")


class PostScriptFailureOutcome(_OutcomeBase):
    """The post-script failed; query durations are discarded."""

    status: Literal["post_script_failure"] = "post_script_failure"
    error: str = Field(..., description="Database error message")


RevisionOutcome = Annotated[
    Union[
        SuccessOutcome,
        QueryFailureOutcome,
        PreScriptFailureOutcome,
        PostScriptFailureOutcome,
    ],
    Field(discriminator="status"),
]


class BenchmarkOutcome(BaseModel):
    """Outcomes of every reachable revision of one benchmark."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Benchmark name")
    revision_outcomes: List[RevisionOutcome] = Field(
        default_factory=list, description="Outcomes in revision definition order"
    )

    def successes(self) -> List[SuccessOutcome]:
        return [o for o in self.revision_outcomes if isinstance(o, SuccessOutcome)]

    def fastest(self) -> Optional[SuccessOutcome]:
        """Successful revision with the lowest average duration, if any."""
        ok = self.successes()
        if not ok:
            return None
        return min(ok, key=lambda o: o.average_duration)


class BenchmarkRunResult(BaseModel):
    """Output of a full run, one entry per benchmark definition."""

    model_config = ConfigDict(frozen=True)

    results: List[BenchmarkOutcome] = Field(default_factory=list)
