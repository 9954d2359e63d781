"""Trust registry entry, certification, and verification data models.

A registry entry is the registry's own record about a participant. It
is distinct from the orchestrator's Participant record: registering a
participant with the framework does not create a registry entry.

Invariants enforced by the registry:
- 0 <= trust_score <= 100 at all times.
- Verification results are immutable once created.
- Verification history is append-only, in call order.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from pctf.models.types import AssuranceLevel, ParticipantType


class TrustStatus(str, enum.Enum):
    """Registry status of a participant.

    UNKNOWN is never assigned by the registry itself; it exists for
    callers that need to represent "not found".
    """
    TRUSTED = "TRUSTED"
    PROVISIONAL = "PROVISIONAL"
    SUSPENDED = "SUSPENDED"
    REVOKED = "REVOKED"
    UNKNOWN = "UNKNOWN"


class CertificationStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    EXPIRED = "EXPIRED"
    REVOKED = "REVOKED"


@dataclass
class Certification:
    """A certification listed on a registry entry. No independent lifecycle."""
    certification_id: str
    issuing_authority: str
    certification_standard: str
    issuance_date: datetime
    expiration_date: Optional[datetime] = None
    scope: list[str] = field(default_factory=list)
    status: CertificationStatus = CertificationStatus.ACTIVE

    def is_active(self, now: datetime) -> bool:
        """ACTIVE and not yet expired at ``now``."""
        if self.status != CertificationStatus.ACTIVE:
            return False
        return self.expiration_date is None or self.expiration_date > now


@dataclass(frozen=True)
class Address:
    street: str
    city: str
    province: str
    postal_code: str
    country: str


@dataclass(frozen=True)
class ContactInformation:
    organization_name: str
    contact_person: str
    email: str
    address: Address
    phone: Optional[str] = None
    website: Optional[str] = None


@dataclass(frozen=True)
class PublicKeyInfo:
    """Published key material. Carried as data only, never verified."""
    key_id: str
    key_type: str
    public_key: str
    algorithm: str
    valid_from: datetime
    usage: tuple[str, ...] = ()
    valid_until: Optional[datetime] = None


@dataclass
class TrustRegistryEntry:
    """Current registry state for a single participant."""
    participant_id: str
    name: str
    type: ParticipantType
    status: TrustStatus
    assurance_level: AssuranceLevel
    contact_information: Optional[ContactInformation]
    registration_date: datetime
    last_verified: datetime
    certifications: list[Certification] = field(default_factory=list)
    expiration_date: Optional[datetime] = None
    trust_score: int = 0
    governance_framework: str = "DIACC-PCTF"
    public_keys: list[PublicKeyInfo] = field(default_factory=list)

    def active_certifications(self, now: datetime) -> list[Certification]:
        return [c for c in self.certifications if c.is_active(now)]


@dataclass(frozen=True)
class TrustVerificationRequest:
    """A third party's request to verify a participant."""
    participant_id: str
    requested_by: str
    verification_scope: tuple[str, ...] = ()
    request_date: Optional[datetime] = None


@dataclass(frozen=True)
class VerificationDetails:
    criteria_checked: tuple[str, ...]
    passed: tuple[str, ...]
    failed: tuple[str, ...]
    warnings: tuple[str, ...]


@dataclass(frozen=True)
class ValidityWindow:
    valid_from: datetime
    valid_until: datetime


@dataclass(frozen=True)
class TrustVerificationResult:
    """Point-in-time outcome of the verification decision procedure.

    ``validity.valid_until`` is a data value only. Nothing invalidates a
    stale result automatically.
    """
    participant_id: str
    trust_status: TrustStatus
    trust_score: int
    verification_date: datetime
    verification_details: VerificationDetails
    validity: ValidityWindow
    requested_by: Optional[str] = None


@dataclass(frozen=True)
class SearchCriteria:
    """Registry search filters. Unset filters are ignored; set ones AND together."""
    type: Optional[ParticipantType] = None
    status: Optional[TrustStatus] = None
    assurance_level: Optional[AssuranceLevel] = None
    min_trust_score: Optional[int] = None

    def matches(self, entry: TrustRegistryEntry) -> bool:
        if self.type is not None and entry.type != self.type:
            return False
        if self.status is not None and entry.status != self.status:
            return False
        if (
            self.assurance_level is not None
            and entry.assurance_level != self.assurance_level
        ):
            return False
        if (
            self.min_trust_score is not None
            and entry.trust_score < self.min_trust_score
        ):
            return False
        return True
