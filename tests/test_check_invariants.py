"""Tests for the invariant checker tool."""

import copy
import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "tools"))

from check_invariants import check  # noqa: E402
from pctf.policy.resolver import DEFAULT_PARAMS  # noqa: E402


def _write(tmp_path: Path, params: dict) -> Path:
    path = tmp_path / "framework_params.json"
    path.write_text(json.dumps(params), encoding="utf-8")
    return path


class TestCheckInvariants:
    def test_shipped_config_passes(self, capsys) -> None:
        assert check() == 0
        assert "Invariant check passed." in capsys.readouterr().out

    def test_missing_section_fails(self, tmp_path: Path, capsys) -> None:
        params = copy.deepcopy(DEFAULT_PARAMS)
        del params["trust_registry"]
        assert check(_write(tmp_path, params)) == 1
        assert "Missing config section: trust_registry" in capsys.readouterr().out

    @pytest.mark.parametrize(
        "section, key, value, message",
        [
            ("framework", "version", "v1", "framework.version must be MAJOR.MINOR.PATCH"),
            ("framework", "framework_id", "  ", "framework.framework_id must be a non-empty string"),
            ("trust_registry", "default_assurance_level", "LOA5", "trust_registry.default_assurance_level"),
            ("dispatch", "default_wallet_type", "PAPER", "dispatch.default_wallet_type"),
            ("dispatch", "infrastructure_security_level", "NONE", "dispatch.infrastructure_security_level"),
        ],
    )
    def test_bad_values_fail(
        self, tmp_path: Path, capsys, section: str, key: str, value: str, message: str,
    ) -> None:
        params = copy.deepcopy(DEFAULT_PARAMS)
        params[section][key] = value
        assert check(_write(tmp_path, params)) == 1
        assert message in capsys.readouterr().out

    def test_unreadable_file_fails(self, tmp_path: Path) -> None:
        assert check(tmp_path / "missing.json") == 1
