"""Policy resolver, the single read path for framework configuration.

Configuration lives in ``config/framework_params.json``. A handful of
deployment values can be overridden from the environment; a ``.env``
file beside the config directory is loaded first (existing environment
variables win over the file).

Scoring weights and verification thresholds are deliberately absent:
they are fixed constants in ``pctf.trust.scoring`` and
``pctf.trust.registry`` and must not vary between deployments.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import load_dotenv

from pctf.models.types import AssuranceLevel
from pctf.providers.infrastructure import SecurityLevel
from pctf.providers.wallet import WalletType


PARAMS_FILENAME = "framework_params.json"

ENV_FRAMEWORK_ID = "PCTF_FRAMEWORK_ID"
ENV_FRAMEWORK_VERSION = "PCTF_FRAMEWORK_VERSION"
ENV_ACTIVITY_LOG = "PCTF_ACTIVITY_LOG"

DEFAULT_PARAMS: dict[str, Any] = {
    "framework": {
        "framework_id": "PCTF-001",
        "version": "1.0.0",
        "governance_framework": "DIACC-PCTF",
    },
    "trust_registry": {
        "default_assurance_level": "LOA2",
    },
    "dispatch": {
        "default_wallet_type": "CLOUD",
        "infrastructure_security_level": "ENHANCED",
    },
}


class PolicyResolver:
    """Typed accessors over the framework parameters.

    Usage:
        resolver = PolicyResolver.from_config_dir(Path("config"))
        framework = PCTFFramework(resolver=resolver)
    """

    def __init__(
        self,
        params: dict[str, Any],
        env: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._params = params
        self._env: Mapping[str, str] = env if env is not None else {}

    @classmethod
    def from_config_dir(
        cls,
        config_dir: Path,
        load_env: bool = True,
    ) -> PolicyResolver:
        """Load parameters from a config directory.

        Raises FileNotFoundError if the params file is missing and
        ValueError if a required section is absent.
        """
        path = config_dir / PARAMS_FILENAME
        with path.open("r", encoding="utf-8") as handle:
            params = json.load(handle)

        for section in DEFAULT_PARAMS:
            if section not in params:
                raise ValueError(f"{path.name}: missing section '{section}'")

        if load_env:
            load_dotenv(config_dir.parent / ".env")
            return cls(params, env=os.environ)
        return cls(params)

    @classmethod
    def default(cls) -> PolicyResolver:
        """Built-in parameters, no environment overrides."""
        return cls(copy.deepcopy(DEFAULT_PARAMS))

    @property
    def params(self) -> dict[str, Any]:
        return self._params

    def framework_id(self) -> str:
        return self._env.get(ENV_FRAMEWORK_ID) or self._params["framework"]["framework_id"]

    def framework_version(self) -> str:
        return self._env.get(ENV_FRAMEWORK_VERSION) or self._params["framework"]["version"]

    def governance_framework(self) -> str:
        return self._params["framework"]["governance_framework"]

    def registry_assurance_level(self) -> AssuranceLevel:
        """Assurance level of a standalone registry (dispatch uses the participant's)."""
        return AssuranceLevel(self._params["trust_registry"]["default_assurance_level"])

    def default_wallet_type(self) -> WalletType:
        return WalletType(self._params["dispatch"]["default_wallet_type"])

    def infrastructure_security_level(self) -> SecurityLevel:
        return SecurityLevel(self._params["dispatch"]["infrastructure_security_level"])

    def activity_log_path(self) -> Optional[Path]:
        raw = self._env.get(ENV_ACTIVITY_LOG)
        return Path(raw) if raw else None
