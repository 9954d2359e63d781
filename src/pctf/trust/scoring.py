"""Trust score computation as a pure function of an entry and a clock.

Score model (0-100, integer):
  score = 50
        + status bonus      (TRUSTED +30, PROVISIONAL +10, SUSPENDED -20, REVOKED -50)
        + assurance bonus   (LOA4 +20, LOA3 +15, LOA2 +10, LOA1 +5)
        + min(active certifications * 5, 20)
        + 5 if registered more than 365 whole days ago
        - 5 if last verified more than 90 whole days ago
  clamped to [0, 100].

The formula must be reproduced exactly: scores are compared across
registries. Do not make any of these values configurable.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pctf.models.trust import TrustRegistryEntry, TrustStatus
from pctf.models.types import AssuranceLevel

BASE_SCORE = 50
SCORE_MIN = 0
SCORE_MAX = 100

STATUS_BONUS: dict[TrustStatus, int] = {
    TrustStatus.TRUSTED: 30,
    TrustStatus.PROVISIONAL: 10,
    TrustStatus.SUSPENDED: -20,
    TrustStatus.REVOKED: -50,
}

ASSURANCE_BONUS: dict[AssuranceLevel, int] = {
    AssuranceLevel.LOA4: 20,
    AssuranceLevel.LOA3: 15,
    AssuranceLevel.LOA2: 10,
    AssuranceLevel.LOA1: 5,
}

CERTIFICATION_POINTS = 5
CERTIFICATION_CAP = 20

ESTABLISHED_AFTER_DAYS = 365
ESTABLISHED_BONUS = 5
STALE_AFTER_DAYS = 90
STALE_PENALTY = 5


def whole_days_between(earlier: datetime, now: datetime) -> int:
    """Floor of the elapsed days. Negative if ``earlier`` is in the future."""
    return (now - earlier).days


def clamp_score(raw: int) -> int:
    return max(SCORE_MIN, min(SCORE_MAX, raw))


def compute_trust_score(
    entry: TrustRegistryEntry,
    now: Optional[datetime] = None,
) -> int:
    """Compute the trust score for an entry at ``now``. Does not mutate it."""
    now = now or datetime.now(timezone.utc)

    score = BASE_SCORE
    score += STATUS_BONUS.get(entry.status, 0)
    score += ASSURANCE_BONUS.get(entry.assurance_level, 0)
    score += min(
        len(entry.active_certifications(now)) * CERTIFICATION_POINTS,
        CERTIFICATION_CAP,
    )

    if whole_days_between(entry.registration_date, now) > ESTABLISHED_AFTER_DAYS:
        score += ESTABLISHED_BONUS
    if whole_days_between(entry.last_verified, now) > STALE_AFTER_DAYS:
        score -= STALE_PENALTY

    return clamp_score(score)


def is_valid_score(score: float) -> bool:
    return SCORE_MIN <= score <= SCORE_MAX
