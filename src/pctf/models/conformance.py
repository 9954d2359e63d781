"""Conformance assessment and ecosystem reporting models.

Assessment results are created fresh on every call and never persisted.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime

from pctf.models.types import ParticipantType


class ComponentKind(str, enum.Enum):
    """Capability provider kinds, in assessment order.

    Member order is the order of ``component_results`` in every
    assessment. Consumers diff reports on it, so do not reorder.
    """
    AUTHENTICATION = "Authentication"
    VERIFIED_PERSON = "VerifiedPerson"
    PRIVACY = "Privacy"
    INFRASTRUCTURE = "Infrastructure"
    DIGITAL_WALLET = "DigitalWallet"
    TRUST_REGISTRY = "TrustRegistry"


@dataclass(frozen=True)
class AssessedCriterion:
    criterion_id: str
    description: str
    is_conformant: bool
    evidence: str
    last_assessed: datetime


@dataclass(frozen=True)
class ComponentConformanceResult:
    """Assessment of one attached provider. Conformant iff every criterion is."""
    component_name: str
    is_conformant: bool
    assessed_criteria: tuple[AssessedCriterion, ...]
    assessment_date: datetime


@dataclass
class ConformanceAssessmentResult:
    """Overall assessment: AND over the components actually attached."""
    participant_id: str
    assessment_date: datetime
    overall_conformance: bool = True
    component_results: list[ComponentConformanceResult] = field(default_factory=list)

    def add(self, component: ComponentConformanceResult) -> None:
        self.component_results.append(component)
        self.overall_conformance = self.overall_conformance and component.is_conformant


@dataclass(frozen=True)
class ComponentCoverage:
    authentication: int
    identity_providers: int
    privacy_providers: int


@dataclass(frozen=True)
class EcosystemValidationResult:
    timestamp: datetime
    participant_count: int
    active_participants: int
    component_coverage: ComponentCoverage
    interoperability_issues: tuple[str, ...]


@dataclass(frozen=True)
class ParticipantSummary:
    total: int
    active: int
    by_type: dict[ParticipantType, int]


@dataclass(frozen=True)
class FrameworkStatusReport:
    """Counts snapshot of the framework. ``component_summary`` is keyed by kind."""
    framework_id: str
    version: str
    generated_at: datetime
    participant_summary: ParticipantSummary
    component_summary: dict[ComponentKind, int]
    compliance_status: str = "IN_PROGRESS"
