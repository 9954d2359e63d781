"""Tests for per-component conformance assessment."""

from datetime import datetime, timezone

from pctf.framework.conformance import (
    DEFAULT_EVIDENCE,
    ConformanceAssessor,
    placeholder_evaluator,
)
from pctf.models.conformance import (
    ComponentConformanceResult,
    ConformanceAssessmentResult,
)
from pctf.models.types import AssuranceLevel, ConformanceCriterion, RiskLevel


def _now() -> datetime:
    return datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def _criterion(criterion_id: str, required: bool = True) -> ConformanceCriterion:
    return ConformanceCriterion(
        id=criterion_id,
        description=f"Requirement {criterion_id}",
        assurance_level=AssuranceLevel.LOA2,
        risk_level=RiskLevel.MEDIUM,
        is_required=required,
    )


class TestPlaceholderEvaluator:
    def test_always_conformant(self) -> None:
        assert placeholder_evaluator(_criterion("X-1")) == (True, DEFAULT_EVIDENCE)


class TestAssessComponent:
    def test_all_conformant(self) -> None:
        result = ConformanceAssessor().assess_component(
            "Privacy", [_criterion("A"), _criterion("B")], _now(),
        )
        assert result.component_name == "Privacy"
        assert result.is_conformant is True
        assert [a.criterion_id for a in result.assessed_criteria] == ["A", "B"]
        assert all(a.last_assessed == _now() for a in result.assessed_criteria)
        assert result.assessed_criteria[0].description == "Requirement A"

    def test_one_failure_fails_component(self) -> None:
        assessor = ConformanceAssessor(
            evaluator=lambda c: (c.id != "B", f"checked {c.id}"),
        )
        result = assessor.assess_component(
            "Privacy", [_criterion("A"), _criterion("B")], _now(),
        )
        assert result.is_conformant is False
        assert result.assessed_criteria[1].evidence == "checked B"

    def test_optional_criteria_still_assessed(self) -> None:
        assessor = ConformanceAssessor(evaluator=lambda c: (c.is_required, "n/a"))
        result = assessor.assess_component(
            "Authentication", [_criterion("A"), _criterion("C", required=False)], _now(),
        )
        assert result.is_conformant is False

    def test_empty_catalog_is_conformant(self) -> None:
        result = ConformanceAssessor().assess_component("Empty", [], _now())
        assert result.is_conformant is True
        assert result.assessed_criteria == ()


class TestAggregation:
    def _component(self, name: str, ok: bool) -> ComponentConformanceResult:
        return ComponentConformanceResult(
            component_name=name,
            is_conformant=ok,
            assessed_criteria=(),
            assessment_date=_now(),
        )

    def test_and_fold(self) -> None:
        assessment = ConformanceAssessmentResult("P-1", _now())
        assessment.add(self._component("Privacy", True))
        assert assessment.overall_conformance is True
        assessment.add(self._component("Infrastructure", False))
        assessment.add(self._component("Other", True))
        assert assessment.overall_conformance is False
        assert len(assessment.component_results) == 3

    def test_no_components_is_conformant(self) -> None:
        assert ConformanceAssessmentResult("P-1", _now()).overall_conformance is True
