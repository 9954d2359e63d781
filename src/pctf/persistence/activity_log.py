"""Append-only activity log recording registry actions.

Components never write to a global logger. Each one is handed an
``ActivitySink`` at construction and records typed events into it.
``ActivityLog`` is the standard sink: events are immutable once written,
hashed over their canonical JSON form, and optionally mirrored to a
JSONL file (one JSON object per line) that can be loaded back.
"""

from __future__ import annotations

import enum
import hashlib
import json
import uuid
from dataclasses import dataclass, fields
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Protocol

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class ActivityKind(str, enum.Enum):
    """Classification of recorded activity."""
    PARTICIPANT_REGISTERED = "participant_registered"
    PROVIDERS_ATTACHED = "providers_attached"
    TRUST_ENTRY_REGISTERED = "trust_entry_registered"
    TRUST_VERIFIED = "trust_verified"
    TRUST_STATUS_CHANGED = "trust_status_changed"
    TRUST_SCORE_UPDATED = "trust_score_updated"
    ENTRY_SUSPENDED = "entry_suspended"
    SWEEP_STARTED = "sweep_started"
    SWEEP_COMPLETED = "sweep_completed"
    INTEGRITY_FAILED = "integrity_failed"
    CONFORMANCE_ASSESSED = "conformance_assessed"
    ECOSYSTEM_VALIDATED = "ecosystem_validated"
    OPERATION_FAILED = "operation_failed"


def _canonical_hash(
    event_id: str,
    kind_value: str,
    timestamp_utc: str,
    source: str,
    subject_id: str,
    payload: dict[str, Any],
) -> str:
    canonical = json.dumps(
        {
            "event_id": event_id,
            "kind": kind_value,
            "timestamp_utc": timestamp_utc,
            "source": source,
            "subject_id": subject_id,
            "payload": payload,
        },
        sort_keys=True,
        ensure_ascii=False,
        default=str,
    ).encode("utf-8")
    return f"sha256:{hashlib.sha256(canonical).hexdigest()}"


@dataclass(frozen=True)
class ActivityRecord:
    """A single immutable activity event.

    ``source`` names the component that recorded it (e.g. the registry
    id); ``subject_id`` is the participant the event is about, or the
    source itself for component-wide events such as a sweep.
    """
    event_id: str
    kind: ActivityKind
    timestamp_utc: str
    source: str
    subject_id: str
    payload: dict[str, Any]
    event_hash: str

    @staticmethod
    def create(
        kind: ActivityKind,
        source: str,
        subject_id: str,
        payload: Optional[dict[str, Any]] = None,
        timestamp_utc: Optional[datetime] = None,
        event_id: Optional[str] = None,
    ) -> ActivityRecord:
        """Build a record stamped now (UTC, whole seconds) and hashed."""
        stamp = (timestamp_utc or datetime.now(timezone.utc)).strftime(TIMESTAMP_FORMAT)
        record_id = event_id or f"act-{uuid.uuid4().hex[:12]}"
        body = dict(payload or {})
        return ActivityRecord(
            event_id=record_id,
            kind=kind,
            timestamp_utc=stamp,
            source=source,
            subject_id=subject_id,
            payload=body,
            event_hash=_canonical_hash(
                record_id, kind.value, stamp, source, subject_id, body,
            ),
        )

    def verify(self) -> bool:
        """True iff the stored hash matches the record's content."""
        return self.event_hash == _canonical_hash(
            self.event_id, self.kind.value, self.timestamp_utc,
            self.source, self.subject_id, self.payload,
        )

    def to_dict(self) -> dict[str, Any]:
        row = {name: getattr(self, name) for name in _FIELDS}
        row["kind"] = self.kind.value
        return row

    @classmethod
    def from_dict(cls, row: dict[str, Any]) -> ActivityRecord:
        values = {name: row[name] for name in _FIELDS}
        values["kind"] = ActivityKind(values["kind"])
        return cls(**values)


_FIELDS = tuple(f.name for f in fields(ActivityRecord))


class ActivitySink(Protocol):
    """Anything that can receive activity events."""

    def record(self, event: ActivityRecord) -> None: ...


class ActivityLog:
    """Append-only activity log, optionally mirrored to a JSONL file.

    An existing file is replayed on construction. A line whose hash does
    not match its content, or whose id was already seen, aborts the load
    with ValueError.
    """

    def __init__(self, storage_path: Optional[Path] = None) -> None:
        self._storage_path = storage_path
        self._records: list[ActivityRecord] = []
        self._seen: set[str] = set()

        if storage_path is not None and storage_path.exists():
            self._replay(storage_path)

    def record(self, event: ActivityRecord) -> None:
        """Append an event. A repeated event id raises ValueError."""
        self._accept(event, f"Duplicate event ID: {event.event_id}")
        if self._storage_path is not None:
            line = json.dumps(
                event.to_dict(), sort_keys=True, ensure_ascii=False, default=str,
            )
            with self._storage_path.open("a", encoding="utf-8") as out:
                out.write(line + "\n")

    def events(
        self,
        kind: Optional[ActivityKind] = None,
        subject_id: Optional[str] = None,
    ) -> list[ActivityRecord]:
        """Recorded events in order, optionally filtered by kind and subject."""
        return [
            e for e in self._records
            if (kind is None or e.kind == kind)
            and (subject_id is None or e.subject_id == subject_id)
        ]

    @property
    def count(self) -> int:
        return len(self._records)

    @property
    def last_event(self) -> Optional[ActivityRecord]:
        if not self._records:
            return None
        return self._records[-1]

    def _accept(self, event: ActivityRecord, duplicate_message: str) -> None:
        if event.event_id in self._seen:
            raise ValueError(duplicate_message)
        self._records.append(event)
        self._seen.add(event.event_id)

    def _replay(self, path: Path) -> None:
        lines = path.read_text(encoding="utf-8").splitlines()
        for number, raw in enumerate(lines, 1):
            if not raw.strip():
                continue
            event = ActivityRecord.from_dict(json.loads(raw))
            if not event.verify():
                raise ValueError(
                    f"Integrity check failed (line {number}): "
                    f"event {event.event_id} does not match its hash"
                )
            self._accept(
                event,
                f"Duplicate event ID on recovery (line {number}): {event.event_id}",
            )
