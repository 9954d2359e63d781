"""Per-component conformance assessment.

How a single criterion is judged is a pluggable evaluator. The default
evaluator marks every criterion conformant with fixed evidence text;
no real evidence gathering exists yet, so that placeholder is the
reference behaviour. A component is conformant iff all its criteria are.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Iterable, Optional

from pctf.models.conformance import AssessedCriterion, ComponentConformanceResult
from pctf.models.types import ConformanceCriterion

DEFAULT_EVIDENCE = "Conformance verified through automated testing"

# criterion -> (is_conformant, evidence)
CriterionEvaluator = Callable[[ConformanceCriterion], tuple[bool, str]]


def placeholder_evaluator(criterion: ConformanceCriterion) -> tuple[bool, str]:
    return True, DEFAULT_EVIDENCE


class ConformanceAssessor:
    """Turns a provider's criterion catalog into a component result."""

    def __init__(self, evaluator: Optional[CriterionEvaluator] = None) -> None:
        self._evaluator = evaluator or placeholder_evaluator

    def assess_component(
        self,
        component_name: str,
        criteria: Iterable[ConformanceCriterion],
        now: Optional[datetime] = None,
    ) -> ComponentConformanceResult:
        now = now or datetime.now(timezone.utc)
        assessed = []
        for criterion in criteria:
            is_conformant, evidence = self._evaluator(criterion)
            assessed.append(AssessedCriterion(
                criterion_id=criterion.id,
                description=criterion.description,
                is_conformant=is_conformant,
                evidence=evidence,
                last_assessed=now,
            ))
        return ComponentConformanceResult(
            component_name=component_name,
            is_conformant=all(a.is_conformant for a in assessed),
            assessed_criteria=tuple(assessed),
            assessment_date=now,
        )
