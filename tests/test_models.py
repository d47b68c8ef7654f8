"""
Tests for the Pydantic data models.

Validates model creation, validation, and serialization.
"""

import pytest
from pydantic import TypeAdapter, ValidationError

from qbench.models import (
    BenchmarkDefinition,
    BenchmarkFile,
    BenchmarkOutcome,
    BenchmarkRunResult,
    BenchmarkSuite,
    PostScriptFailureOutcome,
    QueryFailureOutcome,
    Revision,
    RevisionOutcome,
    SuccessOutcome,
)


def _success(name: str, *durations: int) -> SuccessOutcome:
    return SuccessOutcome(
        revision_name=name,
        per_iteration_durations=list(durations),
        average_duration=sum(durations) // len(durations),
    )


class TestDefinitionModels:
    def test_revision_optional_scripts(self) -> None:
        rev = Revision(name="1.0.0", query="SELECT 1;")

        assert rev.pre_script is None
        assert rev.post_script is None

    def test_revision_is_frozen(self) -> None:
        rev = Revision(name="1.0.0", query="SELECT 1;")

        with pytest.raises(ValidationError):
            rev.name = "2.0.0"

    def test_revision_rejects_unknown_keys(self) -> None:
        with pytest.raises(ValidationError):
            Revision(name="1.0.0", query="SELECT 1;", prescript="typo")

    def test_revision_rejects_blank_query(self) -> None:
        with pytest.raises(ValidationError):
            Revision(name="1.0.0", query="   ")

    def test_suite_from_files_keeps_order(self) -> None:
        files = [
            BenchmarkFile.model_validate(
                {"queries": [{"name": "a", "revisions": []}, {"name": "b", "revisions": []}]}
            ),
            BenchmarkFile.model_validate(
                {
                    "queries": [
                        {"name": "a", "revisions": [{"name": "r", "query": "SELECT 1;"}]}
                    ]
                }
            ),
        ]

        suite = BenchmarkSuite.from_files(files)

        assert [b.name for b in suite.benchmarks] == ["a", "b", "a"]
        assert len(suite) == 3
        assert suite.revision_count == 1


class TestOutcomeModels:
    def test_success_requires_iterations(self) -> None:
        with pytest.raises(ValidationError):
            SuccessOutcome(
                revision_name="r", per_iteration_durations=[], average_duration=0
            )

    def test_success_helpers(self) -> None:
        outcome = _success("r", 10, 30, 20)

        assert outcome.succeeded
        assert outcome.iterations == 3
        assert outcome.min_duration == 10
        assert outcome.max_duration == 30
        assert outcome.average_duration == 20

    def test_dump_uses_ns_aliases(self) -> None:
        data = _success("r", 5, 7).model_dump(by_alias=True)

        assert data == {
            "revision_name": "r",
            "status": "success",
            "per_iteration_durations_ns": [5, 7],
            "average_duration_ns": 6,
            "pre_script_duration_ns": 0,
            "post_script_duration_ns": 0,
        }

    def test_discriminated_union_round_trip(self) -> None:
        adapter = TypeAdapter(RevisionOutcome)

        parsed = adapter.validate_python(
            {"status": "failure", "revision_name": "r", "error": "boom"}
        )
        assert isinstance(parsed, QueryFailureOutcome)

        parsed = adapter.validate_python(
            {
                "status": "success",
                "revision_name": "r",
                "per_iteration_durations_ns": [4],
                "average_duration_ns": 4,
            }
        )
        assert isinstance(parsed, SuccessOutcome)
        assert parsed.average_duration == 4

    def test_fastest(self) -> None:
        outcome = BenchmarkOutcome(
            name="b",
            revision_outcomes=[
                _success("slow", 100),
                PostScriptFailureOutcome(revision_name="broken", error="x"),
                _success("fast", 10),
            ],
        )

        assert outcome.fastest().revision_name == "fast"
        assert [o.revision_name for o in outcome.successes()] == ["slow", "fast"]

    def test_fastest_without_success(self) -> None:
        outcome = BenchmarkOutcome(
            name="b",
            revision_outcomes=[QueryFailureOutcome(revision_name="r", error="x")],
        )

        assert outcome.fastest() is None

    def test_run_result_json(self) -> None:
        result = BenchmarkRunResult(
            results=[BenchmarkOutcome(name="b", revision_outcomes=[_success("r", 1)])]
        )

        restored = BenchmarkRunResult.model_validate_json(
            result.model_dump_json(by_alias=True)
        )

        assert restored == result
