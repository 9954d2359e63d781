"""Privacy service provider (PCTF04, PIPEDA-aligned).

Criterion assurance levels are fixed by the privacy component itself,
not taken from the participant's certification level.
"""

from __future__ import annotations

import enum

from pctf.models.types import AssuranceLevel, ConformanceCriterion, RiskLevel


class PrivacyPrinciple(str, enum.Enum):
    """The ten PIPEDA fair information principles."""
    ACCOUNTABILITY = "ACCOUNTABILITY"
    IDENTIFYING_PURPOSE = "IDENTIFYING_PURPOSE"
    CONSENT = "CONSENT"
    LIMITING_COLLECTION = "LIMITING_COLLECTION"
    LIMITING_USE_DISCLOSURE = "LIMITING_USE_DISCLOSURE"
    ACCURACY = "ACCURACY"
    SAFEGUARDS = "SAFEGUARDS"
    OPENNESS = "OPENNESS"
    INDIVIDUAL_ACCESS = "INDIVIDUAL_ACCESS"
    CHALLENGING_COMPLIANCE = "CHALLENGING_COMPLIANCE"


_CRITERIA: tuple[ConformanceCriterion, ...] = (
    ConformanceCriterion(
        id="PRIV-CC-01",
        description="Organization implements all PIPEDA principles",
        assurance_level=AssuranceLevel.LOA3,
        risk_level=RiskLevel.HIGH,
        is_required=True,
        mitigation_strategies=(
            "Regular privacy impact assessments",
            "Staff privacy training",
            "Privacy by design implementation",
        ),
    ),
    ConformanceCriterion(
        id="PRIV-CC-02",
        description="Consent mechanisms are clear, meaningful, and auditable",
        assurance_level=AssuranceLevel.LOA2,
        risk_level=RiskLevel.MEDIUM,
        is_required=True,
        mitigation_strategies=(
            "Plain language consent forms",
            "Granular consent options",
            "Consent audit trails",
        ),
    ),
    ConformanceCriterion(
        id="PRIV-CC-03",
        description="Data minimization practices are implemented",
        assurance_level=AssuranceLevel.LOA2,
        risk_level=RiskLevel.MEDIUM,
        is_required=True,
        mitigation_strategies=(
            "Purpose limitation controls",
            "Automated data deletion",
            "Regular data inventory reviews",
        ),
    ),
)


class PrivacyServiceProvider:
    """Privacy provider. Consent and access workflows live outside the core."""

    principles: tuple[PrivacyPrinciple, ...] = tuple(PrivacyPrinciple)

    def __init__(self, provider_id: str, name: str) -> None:
        self.provider_id = provider_id
        self.name = name

    def get_conformance_criteria(self) -> list[ConformanceCriterion]:
        return list(_CRITERIA)
