"""
Tests for the stale pending verification job
"""
from datetime import datetime

import pytz

from app.services.scheduler import jobs

NOW = pytz.utc.localize(datetime(2025, 3, 12, 20, 0))


def _pending(fake_db, habit_id, updated_at):
    fake_db.add_row("habit_verifications", {
        "habit_id": habit_id,
        "pending_verification": True,
        "image_url": "https://img/1.jpg",
        "updated_at": updated_at
    })


def test_cutoff_uses_timeout():
    assert jobs.get_pending_cutoff_iso(NOW) == "2025-03-12T19:45:00+00:00"


def test_resets_only_stale_pending(fake_db):
    _pending(fake_db, "old", "2025-03-12T19:00:00+00:00")
    _pending(fake_db, "fresh", "2025-03-12T19:55:00+00:00")
    fake_db.add_row("habit_verifications", {
        "habit_id": "done",
        "is_verified": True,
        "updated_at": "2025-03-01T00:00:00+00:00"
    })

    assert jobs.reconcile_stale_pending_verifications(NOW) == 1

    rows = {r["habit_id"]: r for r in fake_db.rows("habit_verifications")}
    assert rows["old"]["pending_verification"] is False
    assert rows["old"]["image_url"] is None
    assert rows["fresh"]["pending_verification"] is True
    assert rows["done"]["is_verified"] is True


def test_database_failure_is_logged_not_raised(fake_db):
    fake_db.failing_tables.add("habit_verifications")
    assert jobs.reconcile_stale_pending_verifications(NOW) == 0
