"""Tests for PCTF CLI — proves CLI dispatches correctly."""

import json
from pathlib import Path

import pytest

from pctf.cli import build_parser, main


class TestCLIParsing:
    def test_status_command(self) -> None:
        args = build_parser().parse_args(["status"])
        assert args.command == "status"

    def test_score_command(self) -> None:
        args = build_parser().parse_args([
            "score", "--status", "PROVISIONAL", "--level", "LOA4", "--certs", "2",
        ])
        assert args.command == "score"
        assert args.status == "PROVISIONAL"
        assert args.certs == 2
        assert args.registered_days_ago == 0

    def test_score_rejects_unknown_level(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["score", "--level", "LOA9"])

    def test_assess_requires_file(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["assess"])


class TestCLIExecution:
    def test_no_command_shows_help(self) -> None:
        assert main([]) == 0

    def test_status_runs(self, capsys) -> None:
        assert main(["status"]) == 0
        report = json.loads(capsys.readouterr().out)
        assert report["framework_id"] == "PCTF-001"
        assert report["participant_summary"]["total"] == 5
        assert report["compliance_status"] == "IN_PROGRESS"

    def test_demo_runs(self, capsys) -> None:
        assert main(["demo"]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output["sweep"]["success"] is True
        verification = output["verify:IDP-001"]["data"]["verification_result"]
        assert verification["trust_status"] == "SUSPENDED"
        assert output["ecosystem"]["success"] is True

    def test_score_runs(self, capsys) -> None:
        assert main([
            "score", "--status", "PROVISIONAL", "--level", "LOA1",
            "--certs", "6", "--verified-days-ago", "91",
        ]) == 0
        # 50 + 10 + 5 + 20 - 5
        assert json.loads(capsys.readouterr().out) == {"trust_score": 80}

    def test_assess_runs(self, tmp_path: Path, capsys) -> None:
        path = tmp_path / "participants.json"
        path.write_text(json.dumps([
            {
                "participant_id": "ISS-001",
                "name": "Provincial Registry Office",
                "type": "ISSUER",
                "certification_level": "LOA3",
            },
        ]), encoding="utf-8")
        assert main(["assess", "--participants", str(path)]) == 0
        assessments = json.loads(capsys.readouterr().out)
        assert [c["component_name"] for c in assessments[0]["component_results"]] == [
            "Privacy", "Infrastructure",
        ]

    def test_assess_duplicate_fails(self, tmp_path: Path) -> None:
        item = {
            "participant_id": "ISS-001",
            "name": "Provincial Registry Office",
            "type": "ISSUER",
            "certification_level": "LOA2",
        }
        path = tmp_path / "participants.json"
        path.write_text(json.dumps([item, item]), encoding="utf-8")
        assert main(["assess", "--participants", str(path)]) == 1

    def test_assess_bad_file(self, tmp_path: Path) -> None:
        path = tmp_path / "participants.json"
        path.write_text("not json", encoding="utf-8")
        assert main(["assess", "--participants", str(path)]) == 1

    def test_check_invariants_runs(self) -> None:
        assert main(["check-invariants"]) == 0
