"""Tests for trust scoring — proves the score formula and its clamp hold."""

from datetime import datetime, timedelta, timezone

import pytest

from pctf.models.trust import (
    Certification,
    CertificationStatus,
    TrustRegistryEntry,
    TrustStatus,
)
from pctf.models.types import AssuranceLevel, ParticipantType
from pctf.trust.scoring import (
    clamp_score,
    compute_trust_score,
    is_valid_score,
    whole_days_between,
)


def _now() -> datetime:
    return datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def _cert(
    cert_id: str = "CERT-1",
    expires_in_days: int | None = 365,
    status: CertificationStatus = CertificationStatus.ACTIVE,
) -> Certification:
    now = _now()
    return Certification(
        certification_id=cert_id,
        issuing_authority="DIACC",
        certification_standard="PCTF",
        issuance_date=now - timedelta(days=10),
        expiration_date=(
            None if expires_in_days is None else now + timedelta(days=expires_in_days)
        ),
        status=status,
    )


def _entry(
    status: TrustStatus = TrustStatus.TRUSTED,
    level: AssuranceLevel = AssuranceLevel.LOA2,
    certifications: list[Certification] | None = None,
    registered_days_ago: float = 0,
    verified_days_ago: float = 0,
) -> TrustRegistryEntry:
    now = _now()
    return TrustRegistryEntry(
        participant_id="P-1",
        name="Participant One",
        type=ParticipantType.RELYING_PARTY,
        status=status,
        assurance_level=level,
        contact_information=None,
        registration_date=now - timedelta(days=registered_days_ago),
        last_verified=now - timedelta(days=verified_days_ago),
        certifications=certifications or [],
    )


class TestScoreFormula:
    def test_trusted_loa2_no_certs(self) -> None:
        assert compute_trust_score(_entry(), _now()) == 90

    def test_provisional_loa1(self) -> None:
        entry = _entry(status=TrustStatus.PROVISIONAL, level=AssuranceLevel.LOA1)
        assert compute_trust_score(entry, _now()) == 65

    def test_suspended_with_one_cert(self) -> None:
        entry = _entry(status=TrustStatus.SUSPENDED, certifications=[_cert()])
        # 50 - 20 + 10 + 5
        assert compute_trust_score(entry, _now()) == 45

    def test_unknown_status_gets_no_bonus(self) -> None:
        entry = _entry(status=TrustStatus.UNKNOWN)
        assert compute_trust_score(entry, _now()) == 60

    @pytest.mark.parametrize(
        "level, expected",
        [
            (AssuranceLevel.LOA1, 65),
            (AssuranceLevel.LOA2, 70),
            (AssuranceLevel.LOA3, 75),
            (AssuranceLevel.LOA4, 80),
        ],
    )
    def test_assurance_bonus(self, level: AssuranceLevel, expected: int) -> None:
        entry = _entry(status=TrustStatus.PROVISIONAL, level=level)
        assert compute_trust_score(entry, _now()) == expected

    def test_certification_bonus_capped_at_twenty(self) -> None:
        three = [_cert(f"C-{i}") for i in range(3)]
        six = [_cert(f"C-{i}") for i in range(6)]
        base = dict(status=TrustStatus.PROVISIONAL, level=AssuranceLevel.LOA1)
        assert compute_trust_score(_entry(certifications=three, **base), _now()) == 80
        assert compute_trust_score(_entry(certifications=six, **base), _now()) == 85


class TestCertificationPredicate:
    """Only ACTIVE, unexpired certifications count."""

    def test_expired_cert_not_counted(self) -> None:
        entry = _entry(
            status=TrustStatus.PROVISIONAL,
            certifications=[_cert(expires_in_days=-1)],
        )
        assert compute_trust_score(entry, _now()) == 70

    def test_cert_expiring_exactly_now_not_counted(self) -> None:
        entry = _entry(
            status=TrustStatus.PROVISIONAL,
            certifications=[_cert(expires_in_days=0)],
        )
        assert compute_trust_score(entry, _now()) == 70

    def test_suspended_cert_not_counted(self) -> None:
        entry = _entry(
            status=TrustStatus.PROVISIONAL,
            certifications=[_cert(status=CertificationStatus.SUSPENDED)],
        )
        assert compute_trust_score(entry, _now()) == 70

    def test_cert_without_expiry_counted(self) -> None:
        entry = _entry(
            status=TrustStatus.PROVISIONAL,
            certifications=[_cert(expires_in_days=None)],
        )
        assert compute_trust_score(entry, _now()) == 75


class TestAgeAdjustments:
    def test_established_bonus_needs_more_than_365_days(self) -> None:
        base = dict(status=TrustStatus.PROVISIONAL)
        assert compute_trust_score(_entry(registered_days_ago=365, **base), _now()) == 70
        assert compute_trust_score(_entry(registered_days_ago=366, **base), _now()) == 75

    def test_partial_day_floors(self) -> None:
        """365 days and 23 hours is still 365 whole days."""
        entry = _entry(status=TrustStatus.PROVISIONAL, registered_days_ago=365.99)
        assert compute_trust_score(entry, _now()) == 70

    def test_stale_penalty_needs_more_than_90_days(self) -> None:
        base = dict(status=TrustStatus.PROVISIONAL)
        assert compute_trust_score(_entry(verified_days_ago=90, **base), _now()) == 70
        assert compute_trust_score(_entry(verified_days_ago=91, **base), _now()) == 65

    def test_whole_days_between_floors(self) -> None:
        now = _now()
        assert whole_days_between(now - timedelta(hours=47), now) == 1
        assert whole_days_between(now + timedelta(hours=1), now) == -1


class TestScoreClamping:
    """Scores must always be in [0, 100]."""

    def test_clamped_at_hundred(self) -> None:
        entry = _entry(
            level=AssuranceLevel.LOA4,
            certifications=[_cert(f"C-{i}") for i in range(4)],
            registered_days_ago=400,
        )
        # 50 + 30 + 20 + 20 + 5 = 125
        assert compute_trust_score(entry, _now()) == 100

    def test_clamped_at_zero(self) -> None:
        entry = _entry(
            status=TrustStatus.REVOKED,
            level=AssuranceLevel.LOA1,
            verified_days_ago=100,
        )
        # 50 - 50 + 5 - 5 = 0
        assert compute_trust_score(entry, _now()) == 0

    def test_clamp_score_bounds(self) -> None:
        assert clamp_score(-7) == 0
        assert clamp_score(130) == 100
        assert clamp_score(42) == 42

    def test_is_valid_score(self) -> None:
        assert is_valid_score(0)
        assert is_valid_score(100)
        assert not is_valid_score(101)
        assert not is_valid_score(-1)


class TestPurity:
    def test_same_instant_same_score(self) -> None:
        entry = _entry(certifications=[_cert()])
        assert compute_trust_score(entry, _now()) == compute_trust_score(entry, _now())

    def test_does_not_mutate_entry(self) -> None:
        entry = _entry(certifications=[_cert()])
        compute_trust_score(entry, _now())
        assert entry.trust_score == 0
