"""Authentication service provider (PCTF03).

Credential issuance and session management belong to the provider's
own service and are not modelled here. The framework needs only the
provider's identity and its criterion catalog.
"""

from __future__ import annotations

from pctf.models.types import AssuranceLevel, ConformanceCriterion, RiskLevel


class AuthenticationServiceProvider:
    """Credential / authentication service provider."""

    def __init__(
        self,
        participant_id: str,
        name: str,
        assurance_level: AssuranceLevel,
    ) -> None:
        self.participant_id = participant_id
        self.name = name
        self.assurance_level = assurance_level

    def get_conformance_criteria(self) -> list[ConformanceCriterion]:
        return [
            ConformanceCriterion(
                id="AUTH-CC-01",
                description="Credential Service Provider maintains secure credential lifecycle",
                assurance_level=self.assurance_level,
                risk_level=RiskLevel.HIGH,
                is_required=True,
                mitigation_strategies=(
                    "Implement secure key management",
                    "Regular security audits",
                    "Multi-factor authentication for administrative access",
                ),
            ),
            ConformanceCriterion(
                id="AUTH-CC-02",
                description="Authentication processes protect against replay attacks",
                assurance_level=self.assurance_level,
                risk_level=RiskLevel.MEDIUM,
                is_required=True,
                mitigation_strategies=(
                    "Use time-based tokens",
                    "Implement nonce validation",
                    "Session timeout controls",
                ),
            ),
            ConformanceCriterion(
                id="AUTH-CC-03",
                description="Biometric authenticators meet specified accuracy requirements",
                assurance_level=self.assurance_level,
                risk_level=RiskLevel.MEDIUM,
                is_required=False,
                mitigation_strategies=(
                    "Regular calibration of biometric systems",
                    "Fallback authentication methods",
                    "Anti-spoofing measures",
                ),
            ),
        ]
