#!/usr/bin/env python3
"""PCTF invariant checks against framework parameters and scoring constants."""

import json
import re
import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
PARAMS_PATH = ROOT / "config" / "framework_params.json"

sys.path.insert(0, str(ROOT / "src"))

from pctf.models.trust import TrustStatus  # noqa: E402
from pctf.models.types import AssuranceLevel  # noqa: E402
from pctf.providers.infrastructure import SecurityLevel  # noqa: E402
from pctf.providers.wallet import WalletType  # noqa: E402
from pctf.trust import scoring  # noqa: E402

REQUIRED_SECTIONS = ("framework", "trust_registry", "dispatch")
VERSION_PATTERN = re.compile(r"^\d+\.\d+\.\d+$")


def load_json(path: Path) -> dict:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def check_enum_value(value: object, enum_cls: type, label: str, errors: list[str]) -> None:
    allowed = [member.value for member in enum_cls]
    if value not in allowed:
        errors.append(f"{label} must be one of {allowed}, got {value!r}")


def check_params(params: dict, errors: list[str]) -> None:
    for section in REQUIRED_SECTIONS:
        if section not in params:
            errors.append(f"Missing config section: {section}")
    if errors:
        return

    # --- Framework identity ---
    framework = params["framework"]
    for key in ("framework_id", "version", "governance_framework"):
        value = framework.get(key)
        if not isinstance(value, str) or not value.strip():
            errors.append(f"framework.{key} must be a non-empty string")
    version = framework.get("version")
    if isinstance(version, str) and not VERSION_PATTERN.match(version):
        errors.append(f"framework.version must be MAJOR.MINOR.PATCH, got {version!r}")

    # --- Trust registry ---
    check_enum_value(
        params["trust_registry"].get("default_assurance_level"),
        AssuranceLevel,
        "trust_registry.default_assurance_level",
        errors,
    )

    # --- Dispatch ---
    dispatch = params["dispatch"]
    check_enum_value(
        dispatch.get("default_wallet_type"), WalletType,
        "dispatch.default_wallet_type", errors,
    )
    check_enum_value(
        dispatch.get("infrastructure_security_level"), SecurityLevel,
        "dispatch.infrastructure_security_level", errors,
    )


def check_scoring(errors: list[str]) -> None:
    """Scoring constants must keep their ordering and stay inside the range."""
    levels = sorted(AssuranceLevel, key=lambda level: level.rank)
    bonuses = [scoring.ASSURANCE_BONUS[level] for level in levels]
    if bonuses != sorted(bonuses) or len(set(bonuses)) != len(bonuses):
        errors.append("ASSURANCE_BONUS must strictly increase with assurance level")

    status_order = (
        TrustStatus.REVOKED,
        TrustStatus.SUSPENDED,
        TrustStatus.PROVISIONAL,
        TrustStatus.TRUSTED,
    )
    status_bonuses = [scoring.STATUS_BONUS[status] for status in status_order]
    if status_bonuses != sorted(status_bonuses):
        errors.append("STATUS_BONUS must order REVOKED < SUSPENDED < PROVISIONAL < TRUSTED")
    if TrustStatus.UNKNOWN in scoring.STATUS_BONUS:
        errors.append("STATUS_BONUS must not score UNKNOWN")

    if scoring.CERTIFICATION_CAP % scoring.CERTIFICATION_POINTS != 0:
        errors.append("CERTIFICATION_CAP must be a multiple of CERTIFICATION_POINTS")
    if not (scoring.SCORE_MIN <= scoring.BASE_SCORE <= scoring.SCORE_MAX):
        errors.append("BASE_SCORE must lie within [SCORE_MIN, SCORE_MAX]")
    if scoring.STALE_AFTER_DAYS >= scoring.ESTABLISHED_AFTER_DAYS:
        errors.append("STALE_AFTER_DAYS must be shorter than ESTABLISHED_AFTER_DAYS")


def check(params_path: Path = PARAMS_PATH) -> int:
    errors: list[str] = []
    try:
        params = load_json(params_path)
    except (OSError, json.JSONDecodeError) as exc:
        print(f"Invariant check failed:\n- cannot read {params_path.name}: {exc}")
        return 1

    check_params(params, errors)
    check_scoring(errors)

    if errors:
        print("Invariant check failed:")
        for err in errors:
            print(f"- {err}")
        return 1

    print("Invariant check passed.")
    return 0


if __name__ == "__main__":
    raise SystemExit(check())
