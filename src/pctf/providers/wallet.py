"""Digital wallet provider (PCTF12).

Credential storage and presentation are out of scope. A wallet's
security features are derived from its type at construction.
"""

from __future__ import annotations

import enum

from pctf.models.types import AssuranceLevel, ConformanceCriterion, RiskLevel


class WalletType(str, enum.Enum):
    MOBILE = "MOBILE"
    WEB = "WEB"
    HARDWARE = "HARDWARE"
    CLOUD = "CLOUD"
    HYBRID = "HYBRID"


class SecurityFeature(str, enum.Enum):
    BIOMETRIC_AUTH = "BIOMETRIC_AUTH"
    MULTI_FACTOR_AUTH = "MULTI_FACTOR_AUTH"
    HARDWARE_SECURITY_MODULE = "HARDWARE_SECURITY_MODULE"
    SECURE_ENCLAVE = "SECURE_ENCLAVE"
    END_TO_END_ENCRYPTION = "END_TO_END_ENCRYPTION"


# Features added on top of END_TO_END_ENCRYPTION, which every wallet has
_TYPE_FEATURES: dict[WalletType, tuple[SecurityFeature, ...]] = {
    WalletType.HARDWARE: (SecurityFeature.HARDWARE_SECURITY_MODULE,),
    WalletType.MOBILE: (
        SecurityFeature.BIOMETRIC_AUTH,
        SecurityFeature.SECURE_ENCLAVE,
    ),
    WalletType.WEB: (SecurityFeature.MULTI_FACTOR_AUTH,),
    WalletType.CLOUD: (SecurityFeature.MULTI_FACTOR_AUTH,),
    WalletType.HYBRID: (
        SecurityFeature.MULTI_FACTOR_AUTH,
        SecurityFeature.BIOMETRIC_AUTH,
    ),
}


def default_security_features(wallet_type: WalletType) -> list[SecurityFeature]:
    """Security features a wallet of this type ships with."""
    return [SecurityFeature.END_TO_END_ENCRYPTION, *_TYPE_FEATURES.get(wallet_type, ())]


class DigitalWalletProvider:
    """Wallet provider owned by a participant."""

    def __init__(
        self,
        wallet_id: str,
        owner_id: str,
        wallet_type: WalletType,
        name: str,
        assurance_level: AssuranceLevel = AssuranceLevel.LOA2,
    ) -> None:
        self.wallet_id = wallet_id
        self.owner_id = owner_id
        self.wallet_type = wallet_type
        self.process_id = f"WALLET-{wallet_id}"
        self.name = name
        self.assurance_level = assurance_level
        self.security_features = default_security_features(wallet_type)

    def get_conformance_criteria(self) -> list[ConformanceCriterion]:
        return [
            ConformanceCriterion(
                id="WALLET-001",
                description="Digital wallet must implement strong authentication mechanisms",
                assurance_level=self.assurance_level,
                risk_level=RiskLevel.HIGH,
                is_required=True,
                mitigation_strategies=(
                    "Multi-factor authentication required",
                    "Biometric authentication where supported",
                    "Hardware security module integration",
                ),
            ),
            ConformanceCriterion(
                id="WALLET-002",
                description="Credentials must be stored with end-to-end encryption",
                assurance_level=self.assurance_level,
                risk_level=RiskLevel.HIGH,
                is_required=True,
                mitigation_strategies=(
                    "AES-256 encryption for credential storage",
                    "Key derivation from user authentication",
                    "Secure key management practices",
                ),
            ),
            ConformanceCriterion(
                id="WALLET-003",
                description="All wallet operations must be logged and auditable",
                assurance_level=self.assurance_level,
                risk_level=RiskLevel.MEDIUM,
                is_required=True,
                mitigation_strategies=(
                    "Comprehensive audit logging",
                    "Tamper-evident log storage",
                    "Regular log review and analysis",
                ),
            ),
        ]
