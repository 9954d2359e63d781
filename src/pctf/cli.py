"""PCTF CLI — command-line interface for the trust framework.

Usage:
    python -m pctf.cli status
    python -m pctf.cli demo
    python -m pctf.cli score --status TRUSTED --level LOA3 --certs 2
    python -m pctf.cli assess --participants participants.json
    python -m pctf.cli check-invariants
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

from pctf.framework.orchestrator import PCTFFramework
from pctf.models.trust import (
    Address,
    Certification,
    ContactInformation,
    TrustRegistryEntry,
    TrustStatus,
    TrustVerificationRequest,
)
from pctf.models.types import AssuranceLevel, Participant, ParticipantType
from pctf.persistence.activity_log import ActivityLog
from pctf.policy.resolver import PolicyResolver
from pctf.trust.scoring import compute_trust_score


DEFAULT_CONFIG = Path(__file__).resolve().parents[2] / "config"

DEMO_PARTICIPANTS = (
    ("ASP-001", "SecureAuth Services Inc.",
     ParticipantType.AUTHENTICATION_SERVICE_PROVIDER, AssuranceLevel.LOA3),
    ("IDP-001", "TrustedID Solutions",
     ParticipantType.IDENTITY_PROVIDER, AssuranceLevel.LOA3),
    ("RP-001", "Government Services Portal",
     ParticipantType.RELYING_PARTY, AssuranceLevel.LOA2),
    ("WALLET-001", "SecureWallet Technologies",
     ParticipantType.WALLET_PROVIDER, AssuranceLevel.LOA2),
    ("TR-001", "National Trust Registry",
     ParticipantType.TRUST_REGISTRY, AssuranceLevel.LOA4),
)


def _to_json(obj: Any) -> str:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        obj = dataclasses.asdict(obj)
    return json.dumps(obj, indent=2, default=str)


def _make_framework(config_dir: Path) -> PCTFFramework:
    """Create a framework from config, logging to file if configured."""
    resolver = PolicyResolver.from_config_dir(config_dir)
    return PCTFFramework(
        resolver=resolver,
        sink=ActivityLog(storage_path=resolver.activity_log_path()),
    )


def _register_demo(framework: PCTFFramework) -> list[str]:
    errors: list[str] = []
    for participant_id, name, ptype, level in DEMO_PARTICIPANTS:
        result = framework.register_participant(
            Participant(participant_id, name, ptype, level)
        )
        errors.extend(result.errors)
    return errors


def _demo_entry(
    participant_id: str,
    name: str,
    ptype: ParticipantType,
    level: AssuranceLevel,
    now: datetime,
) -> TrustRegistryEntry:
    return TrustRegistryEntry(
        participant_id=participant_id,
        name=name,
        type=ptype,
        status=TrustStatus.TRUSTED,
        assurance_level=level,
        contact_information=ContactInformation(
            organization_name=name,
            contact_person="Compliance Office",
            email=f"compliance@{participant_id.lower()}.example",
            address=Address("100 Queen St", "Ottawa", "ON", "K1A 0A1", "CA"),
        ),
        registration_date=now - timedelta(days=400),
        last_verified=now,
        certifications=[
            Certification(
                certification_id=f"CERT-{participant_id}",
                issuing_authority="DIACC",
                certification_standard="PCTF",
                issuance_date=now - timedelta(days=30),
                expiration_date=now + timedelta(days=335),
            ),
        ],
    )


def cmd_status(args: argparse.Namespace) -> int:
    framework = _make_framework(args.config)
    errors = _register_demo(framework)
    if errors:
        print(f"Failed: {'; '.join(errors)}", file=sys.stderr)
        return 1
    print(_to_json(framework.generate_status_report()))
    return 0


def cmd_demo(args: argparse.Namespace) -> int:
    """Walk the demo ecosystem through registration, verification and a sweep."""
    now = datetime.now(timezone.utc)
    framework = _make_framework(args.config)
    errors = _register_demo(framework)
    if errors:
        print(f"Failed: {'; '.join(errors)}", file=sys.stderr)
        return 1

    registry = framework.get_trust_registry("TR-001")
    steps: dict[str, Any] = {}
    for participant_id, name, ptype, level in DEMO_PARTICIPANTS[:2]:
        steps[f"register:{participant_id}"] = registry.register_participant(
            _demo_entry(participant_id, name, ptype, level, now), now,
        )
    steps["verify:ASP-001"] = registry.verify_trust(
        TrustVerificationRequest("ASP-001", requested_by="RP-001"), now,
    )
    steps["suspend:IDP-001"] = registry.update_participant_status(
        "IDP-001", TrustStatus.SUSPENDED, "Scheduled audit", now,
    )
    steps["verify:IDP-001"] = registry.verify_trust(
        TrustVerificationRequest("IDP-001", requested_by="RP-001"), now,
    )
    steps["sweep"] = registry.execute_process(now)
    for participant_id, *_ in DEMO_PARTICIPANTS:
        steps[f"assess:{participant_id}"] = framework.assess_conformance(participant_id, now)
    steps["ecosystem"] = framework.validate_ecosystem(now)

    output = {label: dataclasses.asdict(result) for label, result in steps.items()}
    output["status_report"] = dataclasses.asdict(framework.generate_status_report(now))
    print(json.dumps(output, indent=2, default=str))

    failed = [label for label, result in steps.items() if not result.success]
    if failed:
        print(f"Failed steps: {', '.join(failed)}", file=sys.stderr)
        return 1
    return 0


def cmd_score(args: argparse.Namespace) -> int:
    now = datetime.now(timezone.utc)
    entry = TrustRegistryEntry(
        participant_id="CLI-SCORE",
        name="CLI score",
        type=ParticipantType.RELYING_PARTY,
        status=TrustStatus(args.status),
        assurance_level=AssuranceLevel(args.level),
        contact_information=None,
        registration_date=now - timedelta(days=args.registered_days_ago),
        last_verified=now - timedelta(days=args.verified_days_ago),
        certifications=[
            Certification(f"CERT-{i}", "CLI", "PCTF", now)
            for i in range(args.certs)
        ],
    )
    print(json.dumps({"trust_score": compute_trust_score(entry, now)}))
    return 0


def _load_participants(path: Path) -> list[Participant]:
    with path.open("r", encoding="utf-8") as handle:
        raw = json.load(handle)
    return [
        Participant(
            participant_id=item["participant_id"],
            name=item["name"],
            type=ParticipantType(item["type"]),
            certification_level=AssuranceLevel(item["certification_level"]),
            is_active=item.get("is_active", True),
            description=item.get("description"),
        )
        for item in raw
    ]


def cmd_assess(args: argparse.Namespace) -> int:
    """Register participants from a JSON file and assess each one."""
    try:
        participants = _load_participants(args.participants)
    except (OSError, ValueError, KeyError, TypeError) as exc:
        print(f"Failed: cannot load participants: {exc}", file=sys.stderr)
        return 1

    framework = _make_framework(args.config)
    assessments = []
    exit_code = 0
    for participant in participants:
        result = framework.register_participant(participant)
        if result.success:
            result = framework.assess_conformance(participant.participant_id)
        if not result.success:
            print(f"Failed: {'; '.join(result.errors)}", file=sys.stderr)
            exit_code = 1
            continue
        assessments.append(dataclasses.asdict(result.data["assessment"]))

    print(json.dumps(assessments, indent=2, default=str))
    return exit_code


def cmd_check_invariants(args: argparse.Namespace) -> int:
    """Run configuration invariant checks."""
    tools_dir = Path(__file__).resolve().parents[2] / "tools"
    sys.path.insert(0, str(tools_dir))
    from check_invariants import check
    return check(args.config / "framework_params.json")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pctf",
        description="PCTF trust framework CLI",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG,
        help="Path to config directory (default: config/)",
    )
    sub = parser.add_subparsers(dest="command")

    # status
    sub.add_parser("status", help="Show framework status for the demo ecosystem")

    # demo
    sub.add_parser("demo", help="Run the end-to-end demo scenario")

    # score
    p_score = sub.add_parser("score", help="Compute a trust score")
    p_score.add_argument(
        "--status", default=TrustStatus.TRUSTED.value,
        choices=[s.value for s in TrustStatus],
        help="Trust status (default: TRUSTED)",
    )
    p_score.add_argument(
        "--level", default=AssuranceLevel.LOA2.value,
        choices=[a.value for a in AssuranceLevel],
        help="Assurance level (default: LOA2)",
    )
    p_score.add_argument("--certs", type=int, default=0, help="Active certifications")
    p_score.add_argument(
        "--registered-days-ago", type=int, default=0,
        help="Days since registration (default: 0)",
    )
    p_score.add_argument(
        "--verified-days-ago", type=int, default=0,
        help="Days since last verification (default: 0)",
    )

    # assess
    p_assess = sub.add_parser("assess", help="Register and assess participants from JSON")
    p_assess.add_argument(
        "--participants", type=Path, required=True,
        help="JSON file holding a list of participants",
    )

    # check-invariants
    sub.add_parser("check-invariants", help="Run configuration invariant checks")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "status": cmd_status,
        "demo": cmd_demo,
        "score": cmd_score,
        "assess": cmd_assess,
        "check-invariants": cmd_check_invariants,
    }

    handler = commands.get(args.command)
    if handler is None:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    return handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
