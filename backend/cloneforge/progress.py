"""
In-memory progress tracking for running project pipelines.

Records are upserted by project id and carry a fresh timestamp on every
write. There is no timer: every write sweeps out records older than the
TTL, so the store stays bounded by recency. Process-local only; a
multi-worker deployment needs a shared store with the same
upsert / timestamp / TTL contract.
"""

import re
import threading
from datetime import datetime, timedelta, timezone
from typing import Optional

from cloneforge.config import get_settings
from cloneforge.models import ProjectStatus


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


DEFAULT_RECORD = {
    "status": ProjectStatus.PENDING.value,
    "step": "Initializing",
    "progress": 0,
    "message": "Starting...",
}

STATUS_STEPS = {
    "PENDING": "Initializing",
    "ANALYZING": "Analyzing Website",
    "ANALYZED": "Analysis Complete",
    "GENERATING": "Generating Code",
    "COMPLETED": "Completed",
    "FAILED": "Failed",
}

STATUS_PROGRESS = {
    "PENDING": 10,
    "ANALYZING": 30,
    "ANALYZED": 60,
    "GENERATING": 80,
    "COMPLETED": 100,
    "FAILED": 0,
}

STATUS_MESSAGES = {
    "PENDING": "Project created, starting analysis...",
    "ANALYZING": "Analyzing website structure and content...",
    "ANALYZED": "Analysis complete, starting code generation...",
    "GENERATING": "Generating code for multiple frameworks...",
    "COMPLETED": "Website successfully cloned! Ready for download.",
    "FAILED": "An error occurred during the cloning process.",
}


class ProgressStore:
    def __init__(self, ttl_seconds: int = 3600, clock=utc_now):
        self.ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._records: dict[str, dict] = {}
        self._lock = threading.Lock()

    def update(self, project_id: str, **fields) -> dict:
        """Shallow-merge fields into the record, stamp it, evict stale entries."""
        now = self._clock()
        with self._lock:
            current = self._records.get(project_id) or dict(DEFAULT_RECORD)
            updated = {**current, **fields, "timestamp": now}
            self._records[project_id] = updated
            self._evict_stale(now)
            return dict(updated)

    def get(self, project_id: str) -> Optional[dict]:
        with self._lock:
            record = self._records.get(project_id)
            return dict(record) if record else None

    def discard(self, project_id: str):
        with self._lock:
            self._records.pop(project_id, None)

    def _evict_stale(self, now: datetime):
        cutoff = now - self.ttl
        stale = [pid for pid, rec in self._records.items() if rec["timestamp"] < cutoff]
        for pid in stale:
            del self._records[pid]

    def __contains__(self, project_id) -> bool:
        with self._lock:
            return project_id in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


# Postgres drops trailing zeros from fractional seconds; 3.10 fromisoformat wants 3 or 6 digits
_FRACTION_RE = re.compile(r"([T ]\d{2}:\d{2}:\d{2})\.(\d+)")


def _normalize_fraction(value: str) -> str:
    return _FRACTION_RE.sub(lambda m: f"{m.group(1)}.{m.group(2)[:6].ljust(6, '0')}", value, count=1)


def _parse_timestamp(value) -> Optional[datetime]:
    if isinstance(value, datetime):
        ts = value
    elif isinstance(value, str) and value:
        try:
            ts = datetime.fromisoformat(_normalize_fraction(value.replace("Z", "+00:00")))
        except ValueError:
            return None
    else:
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def progress_from_status(status: str, updated_at=None) -> dict:
    """Fallback snapshot derived from the persisted project status."""
    return {
        "status": status,
        "step": STATUS_STEPS.get(status, "Unknown"),
        "progress": STATUS_PROGRESS.get(status, 0),
        "message": STATUS_MESSAGES.get(status, "Processing..."),
        "timestamp": _parse_timestamp(updated_at) or updated_at,
    }


def resolve_progress(record: Optional[dict], project: dict) -> dict:
    """
    Pick the fresher of the live record and the status-derived snapshot.
    The live store is never updated when a pipeline fails, so a newer
    FAILED row in the database has to win over a stale 50% record.
    """
    derived = progress_from_status(project.get("status", "PENDING"), project.get("updated_at"))
    if not record:
        return derived

    persisted_at = _parse_timestamp(project.get("updated_at"))
    recorded_at = _parse_timestamp(record.get("timestamp"))
    if persisted_at and recorded_at and persisted_at > recorded_at:
        return derived
    return record


# Default process-wide store; the API and the pipeline both receive it explicitly
progress_store = ProgressStore(ttl_seconds=get_settings().progress_ttl_seconds)


def update_progress(project_id: str, **fields) -> dict:
    return progress_store.update(project_id, **fields)
