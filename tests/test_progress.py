"""Tests for the in-memory progress store and status-derived fallback."""

from datetime import datetime, timedelta, timezone

from cloneforge.progress import ProgressStore, progress_from_status, resolve_progress

T0 = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class Clock:
    def __init__(self, now=T0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


class TestProgressStore:
    def test_first_update_creates_record_with_defaults(self):
        store = ProgressStore(clock=Clock())
        record = store.update("p1", step="Starting Analysis", progress=15)
        assert record == {
            "status": "PENDING",
            "step": "Starting Analysis",
            "progress": 15,
            "message": "Starting...",
            "timestamp": T0,
        }

    def test_updates_shallow_merge_and_restamp(self):
        clock = Clock()
        store = ProgressStore(clock=clock)
        store.update("p1", status="ANALYZING", progress=15, details={"a": 1})
        clock.advance(seconds=5)
        record = store.update("p1", progress=25, details={"b": 2})

        assert record["status"] == "ANALYZING"
        assert record["progress"] == 25
        assert record["details"] == {"b": 2}
        assert record["timestamp"] == T0 + timedelta(seconds=5)
        assert store.get("p1") == record

    def test_returned_snapshot_is_a_copy(self):
        store = ProgressStore(clock=Clock())
        snapshot = store.update("p1", progress=10)
        snapshot["progress"] = 99
        assert store.get("p1")["progress"] == 10

    def test_get_unknown_is_none(self):
        assert ProgressStore().get("missing") is None

    def test_stale_record_evicted_on_write_for_other_project(self):
        clock = Clock()
        store = ProgressStore(ttl_seconds=3600, clock=clock)
        store.update("old", progress=50)
        clock.advance(hours=1, seconds=1)
        store.update("new", progress=10)

        assert "old" not in store
        assert store.get("old") is None
        assert "new" in store
        assert len(store) == 1

    def test_record_within_ttl_survives(self):
        clock = Clock()
        store = ProgressStore(ttl_seconds=3600, clock=clock)
        store.update("recent", progress=50)
        clock.advance(minutes=59)
        store.update("other", progress=10)
        assert "recent" in store

    def test_no_eviction_without_writes(self):
        clock = Clock()
        store = ProgressStore(ttl_seconds=60, clock=clock)
        store.update("p1", progress=1)
        clock.advance(hours=5)
        assert store.get("p1") is not None

    def test_discard(self):
        store = ProgressStore()
        store.update("p1", progress=1)
        store.discard("p1")
        store.discard("p1")
        assert len(store) == 0


class TestStatusFallback:
    def test_progress_from_status(self):
        snap = progress_from_status("GENERATING", "2026-01-01T12:00:00+00:00")
        assert snap["step"] == "Generating Code"
        assert snap["progress"] == 80
        assert snap["message"] == "Generating code for multiple frameworks..."
        assert snap["timestamp"] == T0

    def test_unknown_status(self):
        snap = progress_from_status("WEIRD")
        assert snap["step"] == "Unknown"
        assert snap["progress"] == 0
        assert snap["message"] == "Processing..."

    def test_resolve_without_live_record_uses_status(self):
        project = {"status": "COMPLETED", "updated_at": "2026-01-01T12:00:00Z"}
        assert resolve_progress(None, project)["progress"] == 100

    def test_resolve_prefers_fresher_live_record(self):
        live = {"status": "GENERATING", "step": "Generating REACT Code", "progress": 90,
                "message": "...", "timestamp": T0 + timedelta(seconds=10)}
        project = {"status": "GENERATING", "updated_at": T0.isoformat()}
        assert resolve_progress(live, project) is live

    def test_resolve_prefers_newer_persisted_failure(self):
        live = {"status": "ANALYZING", "step": "Analyzing Website Structure", "progress": 25,
                "message": "...", "timestamp": T0}
        project = {"status": "FAILED", "updated_at": (T0 + timedelta(seconds=30)).isoformat()}
        resolved = resolve_progress(live, project)
        assert resolved["status"] == "FAILED"
        assert resolved["step"] == "Failed"


def test_update_progress_writes_process_store():
    from cloneforge.progress import progress_store, update_progress

    record = update_progress("module-level", step="Analysis Complete", progress=50)
    try:
        assert record["progress"] == 50
        assert progress_store.get("module-level")["step"] == "Analysis Complete"
    finally:
        progress_store.discard("module-level")


class TestTimestampParsing:
    def test_five_digit_fraction_from_database(self):
        snap = progress_from_status("FAILED", "2026-01-01T12:00:30.12345+00:00")
        assert snap["timestamp"] == T0 + timedelta(seconds=30, microseconds=123450)

    def test_long_fraction_is_truncated_to_microseconds(self):
        snap = progress_from_status("FAILED", "2026-01-01 12:00:30.1234567Z")
        assert snap["timestamp"] == T0 + timedelta(seconds=30, microseconds=123456)

    def test_newer_failed_row_with_odd_fraction_beats_live_record(self):
        live = {"status": "ANALYZING", "step": "Analyzing Website Structure", "progress": 25,
                "message": "...", "timestamp": T0}
        project = {"status": "FAILED", "updated_at": "2026-01-01T12:00:30.1+00:00"}
        assert resolve_progress(live, project)["status"] == "FAILED"
