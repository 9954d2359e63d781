"""Core data models for the PCTF trust framework."""

from pctf.models.types import (
    AssuranceLevel,
    ConformanceCriterion,
    Participant,
    ParticipantType,
    ProcessStatus,
    RiskLevel,
)
from pctf.models.trust import (
    Address,
    Certification,
    CertificationStatus,
    ContactInformation,
    PublicKeyInfo,
    SearchCriteria,
    TrustRegistryEntry,
    TrustStatus,
    TrustVerificationRequest,
    TrustVerificationResult,
    ValidityWindow,
    VerificationDetails,
)
from pctf.models.conformance import (
    AssessedCriterion,
    ComponentConformanceResult,
    ComponentCoverage,
    ComponentKind,
    ConformanceAssessmentResult,
    EcosystemValidationResult,
    FrameworkStatusReport,
    ParticipantSummary,
)
from pctf.models.result import ProcessResult

__all__ = [
    "AssuranceLevel",
    "ConformanceCriterion",
    "Participant",
    "ParticipantType",
    "ProcessStatus",
    "RiskLevel",
    "Address",
    "Certification",
    "CertificationStatus",
    "ContactInformation",
    "PublicKeyInfo",
    "SearchCriteria",
    "TrustRegistryEntry",
    "TrustStatus",
    "TrustVerificationRequest",
    "TrustVerificationResult",
    "ValidityWindow",
    "VerificationDetails",
    "AssessedCriterion",
    "ComponentConformanceResult",
    "ComponentCoverage",
    "ComponentKind",
    "ConformanceAssessmentResult",
    "EcosystemValidationResult",
    "FrameworkStatusReport",
    "ParticipantSummary",
    "ProcessResult",
]
