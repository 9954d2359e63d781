"""Tests for the activity log — proves records are hashed, append-only, and recoverable."""

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from pctf.persistence.activity_log import ActivityKind, ActivityLog, ActivityRecord


def _record(subject_id: str = "ASP-001", **payload) -> ActivityRecord:
    return ActivityRecord.create(
        ActivityKind.TRUST_VERIFIED,
        source="TR-001",
        subject_id=subject_id,
        payload=payload,
        timestamp_utc=datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc),
    )


class TestActivityRecord:
    def test_hash_is_deterministic(self) -> None:
        a = ActivityRecord.create(
            ActivityKind.SWEEP_STARTED, "TR-001", "TR-001",
            event_id="act-fixed", timestamp_utc=datetime(2025, 1, 1, tzinfo=timezone.utc),
        )
        b = ActivityRecord.create(
            ActivityKind.SWEEP_STARTED, "TR-001", "TR-001",
            event_id="act-fixed", timestamp_utc=datetime(2025, 1, 1, tzinfo=timezone.utc),
        )
        assert a.event_hash == b.event_hash
        assert a.event_hash.startswith("sha256:")

    def test_payload_changes_hash(self) -> None:
        a = _record(trust_score=90)
        b = ActivityRecord.create(
            a.kind, a.source, a.subject_id, {"trust_score": 91},
            event_id=a.event_id,
            timestamp_utc=datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc),
        )
        assert a.event_hash != b.event_hash

    def test_timestamp_format(self) -> None:
        assert _record().timestamp_utc == "2025-06-01T12:00:00Z"

    def test_generated_ids_are_unique(self) -> None:
        assert _record().event_id != _record().event_id

    def test_verify_and_dict_form(self) -> None:
        record = _record(trust_score=90)
        assert record.verify()
        row = record.to_dict()
        assert row["kind"] == "trust_verified"
        assert ActivityRecord.from_dict(row) == record

    def test_verify_detects_edit(self) -> None:
        row = _record(trust_score=90).to_dict()
        row["subject_id"] = "IDP-001"
        assert not ActivityRecord.from_dict(row).verify()


class TestActivityLog:
    def test_record_and_filter(self) -> None:
        log = ActivityLog()
        log.record(_record("ASP-001"))
        log.record(_record("IDP-001"))
        log.record(ActivityRecord.create(ActivityKind.SWEEP_STARTED, "TR-001", "TR-001"))
        assert log.count == 3
        assert len(log.events(kind=ActivityKind.TRUST_VERIFIED)) == 2
        assert [e.subject_id for e in log.events(subject_id="IDP-001")] == ["IDP-001"]
        assert log.last_event.kind == ActivityKind.SWEEP_STARTED

    def test_duplicate_id_rejected(self) -> None:
        log = ActivityLog()
        event = _record()
        log.record(event)
        with pytest.raises(ValueError, match="Duplicate event ID"):
            log.record(event)

    def test_empty_log(self) -> None:
        log = ActivityLog()
        assert log.count == 0
        assert log.last_event is None


class TestPersistence:
    def test_round_trip_through_file(self, tmp_path: Path) -> None:
        path = tmp_path / "activity.jsonl"
        log = ActivityLog(storage_path=path)
        log.record(_record(trust_score=90))
        log.record(_record("IDP-001"))

        reloaded = ActivityLog(storage_path=path)
        assert reloaded.count == 2
        assert reloaded.events()[0].payload == {"trust_score": 90}
        assert reloaded.events()[1].event_hash == log.events()[1].event_hash

    def test_tampered_line_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "activity.jsonl"
        ActivityLog(storage_path=path).record(_record(trust_score=90))

        data = json.loads(path.read_text(encoding="utf-8"))
        data["payload"]["trust_score"] = 100
        path.write_text(json.dumps(data) + "\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Integrity check failed"):
            ActivityLog(storage_path=path)

    def test_replayed_line_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "activity.jsonl"
        ActivityLog(storage_path=path).record(_record())
        line = path.read_text(encoding="utf-8")
        path.write_text(line + line, encoding="utf-8")

        with pytest.raises(ValueError, match="Duplicate event ID on recovery"):
            ActivityLog(storage_path=path)
