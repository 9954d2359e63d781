"""Capability providers attached to participants by the framework.

Providers share no base class. The only thing the framework asks of
them is the ``ConformanceProvider`` capability.
"""

from pctf.providers.authentication import AuthenticationServiceProvider
from pctf.providers.identity import IdentityProvider
from pctf.providers.infrastructure import InfrastructureServiceProvider, SecurityLevel
from pctf.providers.privacy import PrivacyServiceProvider
from pctf.providers.protocol import ConformanceProvider
from pctf.providers.wallet import DigitalWalletProvider, WalletType

__all__ = [
    "AuthenticationServiceProvider",
    "ConformanceProvider",
    "DigitalWalletProvider",
    "IdentityProvider",
    "InfrastructureServiceProvider",
    "PrivacyServiceProvider",
    "SecurityLevel",
    "WalletType",
]
