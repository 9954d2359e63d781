"""Framework orchestrator — participant directory, provider dispatch, conformance.

The orchestrator is a thin coordination layer. It owns the participant
directory and one provider repository per component kind, keyed by
participant id. It holds provider instances but never reaches into
their state: conformance is read only through the criterion catalog.

Dispatch on participant type is a fixed table (see provider_directives).
Changing which providers a type receives is a code change, not config.
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Any, Optional

from pctf.errors import DuplicateError, NotFoundError, PCTFError, ValidationError
from pctf.framework.conformance import ConformanceAssessor
from pctf.models.conformance import (
    ComponentCoverage,
    ComponentKind,
    ConformanceAssessmentResult,
    EcosystemValidationResult,
    FrameworkStatusReport,
    ParticipantSummary,
)
from pctf.models.result import ProcessResult
from pctf.models.types import AssuranceLevel, Participant, ParticipantType
from pctf.persistence.activity_log import ActivityKind, ActivityLog, ActivityRecord, ActivitySink
from pctf.persistence.repository import InMemoryRepository, Repository
from pctf.policy.resolver import PolicyResolver
from pctf.providers.authentication import AuthenticationServiceProvider
from pctf.providers.identity import IdentityProvider
from pctf.providers.infrastructure import InfrastructureServiceProvider
from pctf.providers.privacy import PrivacyServiceProvider
from pctf.providers.protocol import ConformanceProvider
from pctf.providers.wallet import DigitalWalletProvider
from pctf.trust.registry import TrustRegistryProvider

# Issuers, verifiers and relying parties at these levels also get infrastructure
HIGH_ASSURANCE_LEVELS = frozenset({AssuranceLevel.LOA3, AssuranceLevel.LOA4})

_AUTHENTICATION_TYPES = frozenset({
    ParticipantType.AUTHENTICATION_SERVICE_PROVIDER,
    ParticipantType.CREDENTIAL_SERVICE_PROVIDER,
})
_PRIVACY_TYPES = frozenset({
    ParticipantType.ISSUER,
    ParticipantType.VERIFIER,
    ParticipantType.RELYING_PARTY,
})

_REQUIRED_FIELDS = ("participant_id", "name", "type")

_INPUT_FAULTS = (ValueError, TypeError, AttributeError)


def provider_directives(participant: Participant) -> tuple[ComponentKind, ...]:
    """Which provider kinds to attach to a participant, in assessment order.

    Every ParticipantType is handled explicitly. A type outside the
    enum attaches nothing; that is not an error.
    """
    ptype = participant.type
    if ptype in _AUTHENTICATION_TYPES:
        return (ComponentKind.AUTHENTICATION,)
    if ptype == ParticipantType.IDENTITY_PROVIDER:
        return (ComponentKind.VERIFIED_PERSON,)
    if ptype == ParticipantType.WALLET_PROVIDER:
        return (ComponentKind.DIGITAL_WALLET,)
    if ptype == ParticipantType.TRUST_REGISTRY:
        return (ComponentKind.TRUST_REGISTRY,)
    if ptype in _PRIVACY_TYPES:
        if participant.certification_level in HIGH_ASSURANCE_LEVELS:
            return (ComponentKind.PRIVACY, ComponentKind.INFRASTRUCTURE)
        return (ComponentKind.PRIVACY,)
    return ()


class PCTFFramework:
    """Coordinates participants and their capability providers.

    Usage:
        framework = PCTFFramework(resolver=PolicyResolver.from_config_dir(config_dir))
        framework.register_participant(participant)
        result = framework.assess_conformance(participant.participant_id)
        report = framework.generate_status_report()
    """

    def __init__(
        self,
        framework_id: Optional[str] = None,
        version: Optional[str] = None,
        resolver: Optional[PolicyResolver] = None,
        sink: Optional[ActivitySink] = None,
        assessor: Optional[ConformanceAssessor] = None,
    ) -> None:
        self._resolver = resolver or PolicyResolver.default()
        self.framework_id = framework_id or self._resolver.framework_id()
        self.version = version or self._resolver.framework_version()
        self._sink: ActivitySink = sink if sink is not None else ActivityLog()
        self._assessor = assessor or ConformanceAssessor()

        self._participants: Repository[Participant] = InMemoryRepository()
        self._providers: dict[ComponentKind, Repository[ConformanceProvider]] = {
            kind: InMemoryRepository() for kind in ComponentKind
        }
        self._lock = threading.RLock()
        # Set when the activity sink fails after state was committed
        self.activity_degraded = False
        self.activity_error: Optional[str] = None

    # ------------------------------------------------------------------
    # Registration and dispatch
    # ------------------------------------------------------------------

    def register_participant(self, participant: Participant) -> ProcessResult:
        """Validate, store, and attach providers for a participant."""
        try:
            with self._lock:
                self._validate_participant(participant)
                kinds = provider_directives(participant)
                providers = {
                    kind: self._build_provider(kind, participant) for kind in kinds
                }
                self._participants.put(participant.participant_id, participant)
                for kind, provider in providers.items():
                    self._providers[kind].put(participant.participant_id, provider)
        except PCTFError as exc:
            return ProcessResult.from_error(exc)
        except _INPUT_FAULTS as exc:
            return ProcessResult.from_error(exc, "Failed to register participant")

        self._record(
            ActivityKind.PARTICIPANT_REGISTERED,
            participant.participant_id,
            type=getattr(participant.type, "value", participant.type),
            certification_level=getattr(participant.certification_level, "value", None),
        )
        if kinds:
            self._record(
                ActivityKind.PROVIDERS_ATTACHED,
                participant.participant_id,
                providers=[k.value for k in kinds],
            )
        return ProcessResult.ok(
            "Participant registered successfully",
            participant_id=participant.participant_id,
            providers=list(kinds),
        )

    def _validate_participant(self, participant: Participant) -> None:
        missing = [
            name for name in _REQUIRED_FIELDS
            if not getattr(participant, name, None)
        ]
        if missing:
            raise ValidationError(
                "Missing required participant information",
                issues=[f"Missing required field: {name}" for name in missing],
            )
        if self._participants.contains(participant.participant_id):
            raise DuplicateError(
                f"Participant already registered: {participant.participant_id}"
            )

    def _build_provider(
        self,
        kind: ComponentKind,
        participant: Participant,
    ) -> ConformanceProvider:
        pid = participant.participant_id
        level = participant.certification_level
        if kind == ComponentKind.AUTHENTICATION:
            return AuthenticationServiceProvider(pid, participant.name, level)
        if kind == ComponentKind.VERIFIED_PERSON:
            return IdentityProvider(pid, participant.name, level)
        if kind == ComponentKind.PRIVACY:
            return PrivacyServiceProvider(pid, participant.name)
        if kind == ComponentKind.INFRASTRUCTURE:
            return InfrastructureServiceProvider(
                pid,
                participant.name,
                security_level=self._resolver.infrastructure_security_level(),
                assurance_level=level,
            )
        if kind == ComponentKind.DIGITAL_WALLET:
            return DigitalWalletProvider(
                f"WALLET-{pid}",
                pid,
                self._resolver.default_wallet_type(),
                participant.name,
                assurance_level=level,
            )
        if kind == ComponentKind.TRUST_REGISTRY:
            return TrustRegistryProvider(
                pid,
                participant.name,
                governance_framework=self._resolver.governance_framework(),
                assurance_level=level,
                sink=self._sink,
            )
        raise ValueError(f"No provider factory for component kind: {kind}")

    # ------------------------------------------------------------------
    # Provider lookup
    # ------------------------------------------------------------------

    def get_provider(
        self,
        kind: ComponentKind,
        participant_id: str,
    ) -> Optional[ConformanceProvider]:
        return self._providers[kind].get(participant_id)

    def get_providers(self, participant_id: str) -> list[ComponentKind]:
        """Kinds attached to a participant, in assessment order."""
        return [
            kind for kind in ComponentKind
            if self._providers[kind].contains(participant_id)
        ]

    def get_authentication_provider(
        self, participant_id: str,
    ) -> Optional[AuthenticationServiceProvider]:
        return self._providers[ComponentKind.AUTHENTICATION].get(participant_id)

    def get_identity_provider(self, participant_id: str) -> Optional[IdentityProvider]:
        return self._providers[ComponentKind.VERIFIED_PERSON].get(participant_id)

    def get_privacy_provider(self, participant_id: str) -> Optional[PrivacyServiceProvider]:
        return self._providers[ComponentKind.PRIVACY].get(participant_id)

    def get_infrastructure_provider(
        self, participant_id: str,
    ) -> Optional[InfrastructureServiceProvider]:
        return self._providers[ComponentKind.INFRASTRUCTURE].get(participant_id)

    def get_wallet_provider(self, participant_id: str) -> Optional[DigitalWalletProvider]:
        return self._providers[ComponentKind.DIGITAL_WALLET].get(participant_id)

    def get_trust_registry(self, participant_id: str) -> Optional[TrustRegistryProvider]:
        return self._providers[ComponentKind.TRUST_REGISTRY].get(participant_id)

    # ------------------------------------------------------------------
    # Conformance aggregation
    # ------------------------------------------------------------------

    def assess_conformance(
        self,
        participant_id: str,
        now: Optional[datetime] = None,
    ) -> ProcessResult:
        """Assess every attached provider and AND the results together.

        Components the participant does not have are skipped, not failed.
        The result is returned, never stored.
        """
        now = now or datetime.now(timezone.utc)
        try:
            with self._lock:
                if not self._participants.contains(participant_id):
                    raise NotFoundError(f"Participant not found: {participant_id}")

                assessment = ConformanceAssessmentResult(
                    participant_id=participant_id,
                    assessment_date=now,
                )
                for kind in ComponentKind:
                    provider = self._providers[kind].get(participant_id)
                    if provider is None:
                        continue
                    assessment.add(self._assessor.assess_component(
                        kind.value, provider.get_conformance_criteria(), now,
                    ))
        except PCTFError as exc:
            return ProcessResult.from_error(exc)
        except _INPUT_FAULTS as exc:
            return ProcessResult.from_error(exc, "Conformance assessment failed")

        self._record(
            ActivityKind.CONFORMANCE_ASSESSED,
            participant_id,
            overall_conformance=assessment.overall_conformance,
            components=[c.component_name for c in assessment.component_results],
        )
        return ProcessResult.ok(
            "Conformance assessment completed",
            assessment=assessment,
        )

    # ------------------------------------------------------------------
    # Directory queries and ecosystem reports
    # ------------------------------------------------------------------

    def get_participant(self, participant_id: str) -> Optional[Participant]:
        return self._participants.get(participant_id)

    def get_participants(self) -> list[Participant]:
        return self._participants.values()

    def get_participants_by_type(self, ptype: ParticipantType) -> list[Participant]:
        return [p for p in self._participants.values() if p.type == ptype]

    def validate_ecosystem(self, now: Optional[datetime] = None) -> ProcessResult:
        """Counts plus the two fixed interoperability checks.

        Succeeds iff at least one participant is active and there are no
        interoperability issues.
        """
        now = now or datetime.now(timezone.utc)
        with self._lock:
            participants = self._participants.values()
            active = sum(1 for p in participants if p.is_active)

            issues = self._check_interoperability()
            validation = EcosystemValidationResult(
                timestamp=now,
                participant_count=len(participants),
                active_participants=active,
                component_coverage=ComponentCoverage(
                    authentication=len(self._providers[ComponentKind.AUTHENTICATION]),
                    identity_providers=len(self._providers[ComponentKind.VERIFIED_PERSON]),
                    privacy_providers=len(self._providers[ComponentKind.PRIVACY]),
                ),
                interoperability_issues=tuple(issues),
            )
        is_valid = active > 0 and not issues

        self._record(
            ActivityKind.ECOSYSTEM_VALIDATED,
            self.framework_id,
            is_valid=is_valid,
            issue_count=len(issues),
        )
        return ProcessResult(
            success=is_valid,
            message=(
                "Ecosystem validation successful" if is_valid
                else "Ecosystem validation issues found"
            ),
            data={"validation": validation},
        )

    def _check_interoperability(self) -> list[str]:
        issues: list[str] = []
        if len(self._providers[ComponentKind.VERIFIED_PERSON]) == 0:
            issues.append("No identity providers registered")
        if len(self._providers[ComponentKind.AUTHENTICATION]) == 0:
            issues.append("No authentication providers registered")
        return issues

    def generate_status_report(
        self,
        now: Optional[datetime] = None,
    ) -> FrameworkStatusReport:
        now = now or datetime.now(timezone.utc)
        participants = self._participants.values()

        by_type = {ptype: 0 for ptype in ParticipantType}
        for p in participants:
            by_type[p.type] = by_type.get(p.type, 0) + 1

        return FrameworkStatusReport(
            framework_id=self.framework_id,
            version=self.version,
            generated_at=now,
            participant_summary=ParticipantSummary(
                total=len(participants),
                active=sum(1 for p in participants if p.is_active),
                by_type=by_type,
            ),
            component_summary={
                kind: len(self._providers[kind]) for kind in ComponentKind
            },
        )

    def _record(self, kind: ActivityKind, subject_id: str, **payload: Any) -> None:
        """Record a committed change. Sink failures mark the framework degraded."""
        try:
            self._sink.record(ActivityRecord.create(
                kind, source=self.framework_id, subject_id=subject_id, payload=payload,
            ))
        except (ValueError, OSError) as exc:
            self.activity_degraded = True
            self.activity_error = f"Activity log failure: {exc}"
