"""Trust Registry provider (PCTF13) — entry lifecycle, verification, sweep.

Status lifecycle:
- Initial status is whatever the caller submits; the registry never forces one.
- TRUSTED → SUSPENDED happens automatically only in the maintenance
  sweep, when the entry's expiration date has passed.
- Any status → any status via update_participant_status (admin action).
- Nothing is ever promoted automatically. UNKNOWN is never assigned here.

Verification decision (see _decide):
1. Persisted status TRUSTED passes, anything else fails.
2. At least one ACTIVE, unexpired certification passes.
3. Score >= 70 passes, 50..69 warns, < 50 fails.
4. Result is TRUSTED, downgraded to PROVISIONAL on any failure, and
   overridden by the persisted status whenever that is not TRUSTED.
5. Results are valid for a fixed 24 hours from verification.

Maintenance sweep (see execute_process): only an out-of-range score
blocks it. Expired entries and certifications are findings.

The registry exclusively owns its entries and verification history.
All mutations run under one re-entrant lock, so writes for a given
participant id are serialised.
"""

from __future__ import annotations

import dataclasses
import threading
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from pctf.errors import (
    CertificationError,
    DuplicateError,
    IntegrityError,
    NotFoundError,
    PCTFError,
    ValidationError,
)
from pctf.models.result import ProcessResult
from pctf.models.trust import (
    Certification,
    SearchCriteria,
    TrustRegistryEntry,
    TrustStatus,
    TrustVerificationRequest,
    TrustVerificationResult,
    ValidityWindow,
    VerificationDetails,
)
from pctf.models.types import (
    AssuranceLevel,
    ConformanceCriterion,
    ProcessStatus,
    RiskLevel,
)
from pctf.persistence.activity_log import ActivityKind, ActivityLog, ActivityRecord, ActivitySink
from pctf.persistence.repository import InMemoryRepository, Repository
from pctf.trust.scoring import compute_trust_score, is_valid_score

SCORE_PASS_THRESHOLD = 70
SCORE_WARN_THRESHOLD = 50
VERIFICATION_VALIDITY = timedelta(hours=24)

_REQUIRED_FIELDS = (
    "participant_id",
    "name",
    "type",
    "assurance_level",
    "contact_information",
)

# Errors that malformed caller input can raise deep inside an operation
_INPUT_FAULTS = (ValueError, TypeError, AttributeError)


def _copy_entry(entry: TrustRegistryEntry) -> TrustRegistryEntry:
    return dataclasses.replace(
        entry,
        certifications=list(entry.certifications),
        public_keys=list(entry.public_keys),
    )


class TrustRegistryProvider:
    """Registry of trust entries for ecosystem participants.

    Usage:
        registry = TrustRegistryProvider("TR-001", "National Trust Registry")
        registry.register_participant(entry)
        result = registry.verify_trust(TrustVerificationRequest("ASP-001", "RP-001"))
        registry.execute_process()   # periodic maintenance sweep
    """

    def __init__(
        self,
        registry_id: str,
        name: str,
        governance_framework: str = "DIACC-PCTF",
        assurance_level: AssuranceLevel = AssuranceLevel.LOA2,
        sink: Optional[ActivitySink] = None,
        entries: Optional[Repository[TrustRegistryEntry]] = None,
        history: Optional[Repository[list[TrustVerificationResult]]] = None,
    ) -> None:
        self.registry_id = registry_id
        self.process_id = f"TRUST-REG-{registry_id}"
        self.name = name
        self.description = "PCTF Trust Registry Service Provider"
        self.governance_framework = governance_framework
        self.assurance_level = assurance_level
        self.status = ProcessStatus.PENDING

        self._sink: ActivitySink = sink if sink is not None else ActivityLog()
        self._entries: Repository[TrustRegistryEntry] = (
            entries if entries is not None else InMemoryRepository()
        )
        self._history: Repository[list[TrustVerificationResult]] = (
            history if history is not None else InMemoryRepository()
        )
        self._lock = threading.RLock()
        # Set when the activity sink fails after state was committed
        self.activity_degraded = False
        self.activity_error: Optional[str] = None

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def validate_input(self, entry: Any) -> bool:
        """True iff every required entry field is present and non-empty."""
        if entry is None:
            return False
        return all(getattr(entry, name, None) for name in _REQUIRED_FIELDS)

    def register_participant(
        self,
        entry: TrustRegistryEntry,
        now: Optional[datetime] = None,
    ) -> ProcessResult:
        """Register a participant in the trust registry.

        Rejects the whole request on missing fields (ValidationError), a
        known participant id (DuplicateError), or any certification that
        lacks an id/issuer or has already expired (CertificationError).
        The stored entry is a copy carrying the computed initial score.
        """
        now = now or datetime.now(timezone.utc)
        try:
            with self._lock:
                if not self.validate_input(entry):
                    raise ValidationError(
                        "Invalid trust registry entry data",
                        issues=[
                            f"Missing required field: {name}"
                            for name in _REQUIRED_FIELDS
                            if not getattr(entry, name, None)
                        ],
                    )
                if self._entries.contains(entry.participant_id):
                    raise DuplicateError(
                        f"Participant already registered: {entry.participant_id}"
                    )
                self._validate_certifications(entry.certifications, now)

                stored = _copy_entry(entry)
                stored.status = TrustStatus(stored.status)
                stored.trust_score = compute_trust_score(stored, now)
                self._entries.put(stored.participant_id, stored)
        except PCTFError as exc:
            self._record_failure("register_participant", entry, exc)
            return ProcessResult.from_error(exc)
        except _INPUT_FAULTS as exc:
            return ProcessResult.from_error(exc, "Failed to register participant")

        self._record(
            ActivityKind.TRUST_ENTRY_REGISTERED,
            stored.participant_id,
            status=stored.status.value,
            trust_score=stored.trust_score,
        )
        return ProcessResult.ok(
            "Participant registered successfully",
            participant_id=stored.participant_id,
            trust_score=stored.trust_score,
        )

    def _validate_certifications(
        self,
        certifications: list[Certification],
        now: datetime,
    ) -> None:
        issues: list[str] = []
        for position, cert in enumerate(certifications):
            if not cert.certification_id or not cert.issuing_authority:
                issues.append(
                    f"Invalid certification at position {position}: "
                    f"missing certification_id or issuing_authority"
                )
            if cert.expiration_date is not None and cert.expiration_date < now:
                issues.append(f"Certification {cert.certification_id} has expired")
        if issues:
            raise CertificationError(issues=issues)

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------

    def verify_trust(
        self,
        request: TrustVerificationRequest,
        now: Optional[datetime] = None,
    ) -> ProcessResult:
        """Run the verification decision for a participant and record it.

        The result is appended to the participant's history and the
        entry's ``last_verified`` is set to the verification time. The
        stored score is reported as-is, not recomputed.
        """
        now = now or datetime.now(timezone.utc)
        try:
            with self._lock:
                entry = self._require_entry(request.participant_id)
                result = self._decide(entry, now, requested_by=request.requested_by)

                history = self._history.get(entry.participant_id)
                if history is None:
                    history = []
                    self._history.put(entry.participant_id, history)
                history.append(result)
                entry.last_verified = now
        except PCTFError as exc:
            return ProcessResult.from_error(exc, "Participant not found in trust registry")
        except _INPUT_FAULTS as exc:
            return ProcessResult.from_error(exc, "Trust verification failed")

        self._record(
            ActivityKind.TRUST_VERIFIED,
            result.participant_id,
            trust_status=result.trust_status.value,
            trust_score=result.trust_score,
            requested_by=request.requested_by,
        )
        return ProcessResult.ok(
            "Trust verification completed",
            verification_result=result,
        )

    @staticmethod
    def _decide(
        entry: TrustRegistryEntry,
        now: datetime,
        requested_by: Optional[str] = None,
    ) -> TrustVerificationResult:
        passed: list[str] = []
        failed: list[str] = []
        warnings: list[str] = []

        if entry.status == TrustStatus.TRUSTED:
            passed.append("Trust status verification")
        else:
            failed.append(f"Trust status is {entry.status.value}")

        if entry.active_certifications(now):
            passed.append("Active certifications found")
        else:
            failed.append("No active certifications")

        if entry.trust_score >= SCORE_PASS_THRESHOLD:
            passed.append("Trust score meets threshold")
        elif entry.trust_score >= SCORE_WARN_THRESHOLD:
            warnings.append("Trust score below recommended threshold")
        else:
            failed.append("Trust score too low")

        trust_status = TrustStatus.TRUSTED
        if failed:
            trust_status = TrustStatus.PROVISIONAL
        # Persisted non-TRUSTED status always wins over the computed one
        if entry.status != TrustStatus.TRUSTED:
            trust_status = entry.status

        return TrustVerificationResult(
            participant_id=entry.participant_id,
            trust_status=trust_status,
            trust_score=entry.trust_score,
            verification_date=now,
            verification_details=VerificationDetails(
                criteria_checked=tuple(passed + failed + warnings),
                passed=tuple(passed),
                failed=tuple(failed),
                warnings=tuple(warnings),
            ),
            validity=ValidityWindow(
                valid_from=now,
                valid_until=now + VERIFICATION_VALIDITY,
            ),
            requested_by=requested_by,
        )

    # ------------------------------------------------------------------
    # Administration and queries
    # ------------------------------------------------------------------

    def update_participant_status(
        self,
        participant_id: str,
        status: TrustStatus,
        reason: str,
        now: Optional[datetime] = None,
    ) -> ProcessResult:
        """Unconditionally move an entry to ``status`` and rescore it."""
        now = now or datetime.now(timezone.utc)
        try:
            with self._lock:
                entry = self._require_entry(participant_id)
                previous_status = entry.status
                entry.status = TrustStatus(status)
                entry.last_verified = now
                entry.trust_score = compute_trust_score(entry, now)
        except PCTFError as exc:
            return ProcessResult.from_error(exc)
        except _INPUT_FAULTS as exc:
            return ProcessResult.from_error(exc, "Failed to update participant status")

        self._record(
            ActivityKind.TRUST_STATUS_CHANGED,
            participant_id,
            previous_status=previous_status.value,
            new_status=entry.status.value,
            reason=reason,
            trust_score=entry.trust_score,
        )
        return ProcessResult.ok(
            "Participant status updated successfully",
            participant_id=participant_id,
            previous_status=previous_status,
            new_status=entry.status,
            trust_score=entry.trust_score,
        )

    def get_trust_entry(self, participant_id: str) -> Optional[TrustRegistryEntry]:
        """A copy of the stored entry, or None."""
        entry = self._entries.get(participant_id)
        return _copy_entry(entry) if entry is not None else None

    def search_trust_registry(
        self,
        criteria: Optional[SearchCriteria] = None,
    ) -> list[TrustRegistryEntry]:
        """Copies of the entries matching every set filter, in registration order."""
        criteria = criteria or SearchCriteria()
        return [_copy_entry(e) for e in self._entries.values() if criteria.matches(e)]

    def get_verification_history(
        self,
        participant_id: str,
    ) -> list[TrustVerificationResult]:
        """Verification results in call order. Returns a copy."""
        return list(self._history.get(participant_id) or [])

    def compute_score(
        self,
        entry: TrustRegistryEntry,
        now: Optional[datetime] = None,
    ) -> int:
        return compute_trust_score(entry, now)

    @property
    def entry_count(self) -> int:
        return len(self._entries)

    def _require_entry(self, participant_id: str) -> TrustRegistryEntry:
        entry = self._entries.get(participant_id)
        if entry is None:
            raise NotFoundError(f"Participant not found: {participant_id}")
        return entry

    # ------------------------------------------------------------------
    # Maintenance sweep
    # ------------------------------------------------------------------

    def execute_process(self, now: Optional[datetime] = None) -> ProcessResult:
        """Integrity check, then score recompute, then expiry demotion.

        Each step runs only if the previous one succeeded. Corrupted
        state (an out-of-range score) aborts before anything is mutated.
        Expired entries and certifications are reported as findings; the
        demotion step is what repairs them, so they do not block it.
        """
        now = now or datetime.now(timezone.utc)
        self.status = ProcessStatus.IN_PROGRESS
        self._record(ActivityKind.SWEEP_STARTED, self.registry_id)
        try:
            with self._lock:
                faults = self._score_faults()
                if faults:
                    raise IntegrityError(issues=faults)
                findings = self._expiry_findings(now)
                updated = self._update_trust_scores(now)
                suspended = self._process_expired_entries(now)
        except IntegrityError as exc:
            self.status = ProcessStatus.FAILED
            self._record(
                ActivityKind.INTEGRITY_FAILED,
                self.registry_id,
                issue_count=len(exc.issues),
            )
            return ProcessResult.from_error(exc)
        except _INPUT_FAULTS as exc:
            self.status = ProcessStatus.FAILED
            return ProcessResult.from_error(exc, "Trust registry process failed")

        self.status = ProcessStatus.COMPLETED
        self._record(
            ActivityKind.SWEEP_COMPLETED,
            self.registry_id,
            entry_count=self.entry_count,
            scores_updated=updated,
            suspended=len(suspended),
            findings=len(findings),
        )
        return ProcessResult.ok(
            "Trust registry validated successfully",
            registry_id=self.registry_id,
            entry_count=self.entry_count,
            governance_framework=self.governance_framework,
            scores_updated=updated,
            suspended=suspended,
            findings=findings,
        )

    def check_integrity(self, now: Optional[datetime] = None) -> list[str]:
        """Report every integrity issue: expiry findings, then score faults.

        Empty list = healthy.
        """
        now = now or datetime.now(timezone.utc)
        return self._expiry_findings(now) + self._score_faults()

    def _expiry_findings(self, now: datetime) -> list[str]:
        findings: list[str] = []
        for participant_id, entry in self._entries.items():
            if entry.expiration_date is not None and entry.expiration_date < now:
                findings.append(f"Entry {participant_id} has expired")
            for cert in entry.certifications:
                if cert.expiration_date is not None and cert.expiration_date < now:
                    findings.append(
                        f"Certification {cert.certification_id} for "
                        f"{participant_id} has expired"
                    )
        return findings

    def _score_faults(self) -> list[str]:
        return [
            f"Invalid trust score for {participant_id}: {entry.trust_score}"
            for participant_id, entry in self._entries.items()
            if not is_valid_score(entry.trust_score)
        ]

    def _update_trust_scores(self, now: datetime) -> int:
        updated = 0
        for participant_id, entry in self._entries.items():
            new_score = compute_trust_score(entry, now)
            if new_score != entry.trust_score:
                previous = entry.trust_score
                entry.trust_score = new_score
                updated += 1
                self._record(
                    ActivityKind.TRUST_SCORE_UPDATED,
                    participant_id,
                    previous_score=previous,
                    new_score=new_score,
                )
        return updated

    def _process_expired_entries(self, now: datetime) -> list[str]:
        suspended: list[str] = []
        for participant_id, entry in self._entries.items():
            if (
                entry.expiration_date is not None
                and entry.expiration_date < now
                and entry.status == TrustStatus.TRUSTED
            ):
                entry.status = TrustStatus.SUSPENDED
                suspended.append(participant_id)
                self._record(ActivityKind.ENTRY_SUSPENDED, participant_id)
        return suspended

    # ------------------------------------------------------------------
    # Conformance catalog
    # ------------------------------------------------------------------

    def get_conformance_criteria(self) -> list[ConformanceCriterion]:
        return [
            ConformanceCriterion(
                id="TRUST-001",
                description="Trust registry must maintain accurate participant information",
                assurance_level=self.assurance_level,
                risk_level=RiskLevel.HIGH,
                is_required=True,
                mitigation_strategies=(
                    "Regular verification of participant information",
                    "Automated certification status checking",
                    "Audit trails for all registry changes",
                ),
            ),
            ConformanceCriterion(
                id="TRUST-002",
                description="Trust scores must be calculated using verifiable criteria",
                assurance_level=self.assurance_level,
                risk_level=RiskLevel.MEDIUM,
                is_required=True,
                mitigation_strategies=(
                    "Transparent trust scoring algorithms",
                    "Regular trust score recalculation",
                    "Third-party validation of scoring methods",
                ),
            ),
            ConformanceCriterion(
                id="TRUST-003",
                description="Registry must provide real-time trust verification",
                assurance_level=self.assurance_level,
                risk_level=RiskLevel.MEDIUM,
                is_required=True,
                mitigation_strategies=(
                    "High availability infrastructure",
                    "Distributed registry architecture",
                    "Real-time status monitoring",
                ),
            ),
        ]

    # ------------------------------------------------------------------
    # Activity recording
    # ------------------------------------------------------------------

    def _record(self, kind: ActivityKind, subject_id: str, **payload: Any) -> None:
        """Record an event after its state change has been committed.

        The change stands even if the sink fails. A failure marks the
        registry as degraded instead of escaping the operation.
        """
        try:
            self._sink.record(ActivityRecord.create(
                kind, source=self.registry_id, subject_id=subject_id, payload=payload,
            ))
        except (ValueError, OSError) as exc:
            self.activity_degraded = True
            self.activity_error = f"Activity log failure: {exc}"

    def _record_failure(self, operation: str, entry: Any, error: PCTFError) -> None:
        self._record(
            ActivityKind.OPERATION_FAILED,
            getattr(entry, "participant_id", None) or self.registry_id,
            operation=operation,
            error_type=type(error).__name__,
            issues=list(error.issues),
        )
