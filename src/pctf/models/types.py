"""Core enums and participant data shared by every PCTF component.

Assurance levels are ordinal (LOA1 lowest, LOA4 highest). Participant
types are a closed set: provider dispatch in the framework orchestrator
switches over every member explicitly.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


class AssuranceLevel(str, enum.Enum):
    """Levels of Assurance as defined in the PCTF."""
    LOA1 = "LOA1"
    LOA2 = "LOA2"
    LOA3 = "LOA3"
    LOA4 = "LOA4"

    @property
    def rank(self) -> int:
        return int(self.value[-1])


class RiskLevel(str, enum.Enum):
    """Risk rating attached to a conformance criterion."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    VERY_HIGH = "VERY_HIGH"


class ProcessStatus(str, enum.Enum):
    """Lifecycle of a trusted process run (e.g. the registry sweep)."""
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    SUSPENDED = "SUSPENDED"
    REVOKED = "REVOKED"


class ParticipantType(str, enum.Enum):
    """Roles a participant can hold in the ecosystem."""
    CREDENTIAL_SERVICE_PROVIDER = "CREDENTIAL_SERVICE_PROVIDER"
    AUTHENTICATION_SERVICE_PROVIDER = "AUTHENTICATION_SERVICE_PROVIDER"
    IDENTITY_PROVIDER = "IDENTITY_PROVIDER"
    VERIFIER = "VERIFIER"
    ISSUER = "ISSUER"
    WALLET_PROVIDER = "WALLET_PROVIDER"
    TRUST_REGISTRY = "TRUST_REGISTRY"
    RELYING_PARTY = "RELYING_PARTY"


@dataclass(frozen=True)
class ConformanceCriterion:
    """A named, risk-rated requirement a provider claims to satisfy."""
    id: str
    description: str
    assurance_level: AssuranceLevel
    risk_level: RiskLevel
    is_required: bool
    mitigation_strategies: tuple[str, ...] = ()


@dataclass
class Participant:
    """An ecosystem actor registered with the framework orchestrator.

    Identity fields are fixed at registration. Only ``is_active`` is
    expected to change afterwards, and that is done outside the core.
    """
    participant_id: str
    name: str
    type: ParticipantType
    certification_level: AssuranceLevel
    is_active: bool = True
    registration_date: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    description: Optional[str] = None
