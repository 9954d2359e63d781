"""Infrastructure service provider (PCTF08)."""

from __future__ import annotations

import enum

from pctf.models.types import AssuranceLevel, ConformanceCriterion, RiskLevel


class SecurityLevel(str, enum.Enum):
    BASIC = "BASIC"
    ENHANCED = "ENHANCED"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class InfrastructureServiceProvider:
    """Hosting / operations provider for high-assurance participants.

    Health checks and metrics collection are out of scope; the provider
    carries its security level and criterion catalog only.
    """

    def __init__(
        self,
        provider_id: str,
        name: str,
        security_level: SecurityLevel = SecurityLevel.ENHANCED,
        assurance_level: AssuranceLevel = AssuranceLevel.LOA2,
    ) -> None:
        self.provider_id = provider_id
        self.process_id = f"INFRA-{provider_id}"
        self.name = name
        self.security_level = security_level
        self.assurance_level = assurance_level

    def get_conformance_criteria(self) -> list[ConformanceCriterion]:
        level = self.assurance_level
        return [
            ConformanceCriterion(
                id="INFRA-001",
                description="Infrastructure components must meet minimum security standards",
                assurance_level=level,
                risk_level=RiskLevel.HIGH,
                is_required=True,
                mitigation_strategies=(
                    "Implement multi-layered security controls",
                    "Regular security assessments and audits",
                    "Continuous monitoring and alerting",
                ),
            ),
            ConformanceCriterion(
                id="INFRA-002",
                description="Infrastructure must maintain 99.9% availability",
                assurance_level=level,
                risk_level=RiskLevel.MEDIUM,
                is_required=True,
                mitigation_strategies=(
                    "Implement redundancy and failover mechanisms",
                    "Regular backup and disaster recovery testing",
                    "Performance monitoring and capacity planning",
                ),
            ),
            ConformanceCriterion(
                id="INFRA-003",
                description="All infrastructure changes must be logged and auditable",
                assurance_level=level,
                risk_level=RiskLevel.MEDIUM,
                is_required=True,
                mitigation_strategies=(
                    "Comprehensive audit logging",
                    "Change management processes",
                    "Regular compliance reviews",
                ),
            ),
        ]
