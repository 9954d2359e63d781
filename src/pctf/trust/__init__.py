"""Trust registry engine: scoring, verification and the maintenance sweep."""

from pctf.trust.registry import TrustRegistryProvider
from pctf.trust.scoring import compute_trust_score

__all__ = ["TrustRegistryProvider", "compute_trust_score"]
