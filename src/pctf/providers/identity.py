"""Identity provider for the Verified Person component (PCTF05)."""

from __future__ import annotations

from pctf.models.types import AssuranceLevel, ConformanceCriterion, RiskLevel


_CATALOG: tuple[tuple[str, str, RiskLevel, tuple[str, ...]], ...] = (
    (
        "VP-CC-01",
        "Identity Provider implements comprehensive identity proofing process",
        RiskLevel.HIGH,
        (
            "Multi-source evidence validation",
            "Biometric verification when appropriate",
            "Regular process audits",
        ),
    ),
    (
        "VP-CC-02",
        "Evidence validation includes authenticity and integrity checks",
        RiskLevel.HIGH,
        (
            "Document security feature verification",
            "Cross-reference with authoritative sources",
            "Fraud detection algorithms",
        ),
    ),
    (
        "VP-CC-03",
        "Identity resolution prevents duplicate enrollments",
        RiskLevel.MEDIUM,
        (
            "Comprehensive database searches",
            "Biometric deduplication",
            "Identity attribute correlation",
        ),
    ),
)


class IdentityProvider:
    """Identity proofing provider. Evidence validation is out of scope."""

    def __init__(
        self,
        provider_id: str,
        name: str,
        assurance_level: AssuranceLevel,
    ) -> None:
        self.provider_id = provider_id
        self.name = name
        self.assurance_level = assurance_level

    def get_conformance_criteria(self) -> list[ConformanceCriterion]:
        return [
            ConformanceCriterion(
                id=criterion_id,
                description=description,
                assurance_level=self.assurance_level,
                risk_level=risk,
                is_required=True,
                mitigation_strategies=strategies,
            )
            for criterion_id, description, risk, strategies in _CATALOG
        ]
