"""
Tests for the points and streak ledger
"""
from datetime import date

import pytest

from app.services import points
from app.services.points import service as points_service


TODAY = date(2025, 3, 10)


@pytest.fixture
def today(monkeypatch):
    monkeypatch.setattr(points_service, "get_app_today_date", lambda: TODAY)
    return TODAY


def test_compute_streak_rules():
    assert points.compute_streak(None, 0, TODAY) == 1
    assert points.compute_streak(date(2025, 3, 9), 4, TODAY) == 5
    assert points.compute_streak(date(2025, 3, 7), 4, TODAY) == 1
    assert points.compute_streak(TODAY, 4, TODAY) == 4


def test_add_points_creates_then_increments(fake_db):
    assert points.add_points("u1", 5) == 5
    assert points.add_points("u1", 5) == 10
    assert fake_db.rows("user_points")[0]["total_points"] == 10


def test_add_points_returns_zero_on_database_failure(fake_db):
    fake_db.failing_tables.add("rpc")
    assert points.add_points("u1", 5) == 0


def test_award_helpers_use_fixed_amounts(fake_db):
    assert points.award_habit_completion_points("u1") == 5
    assert points.award_stack_completion_points("u1") == 15


def test_update_streak_first_activity(fake_db, today):
    assert points.update_streak("u1") == 1
    row = fake_db.rows("user_points")[0]
    assert row["current_streak"] == 1
    assert row["last_activity_date"] == "2025-03-10"


def test_update_streak_continues_from_yesterday(fake_db, today):
    fake_db.add_row("user_points", {"user_id": "u1", "current_streak": 6, "last_activity_date": "2025-03-09"})
    streak = points.advance_streak("u1")
    assert streak.previous == 6
    assert streak.current == 7
    assert streak.changed


def test_update_streak_same_day_is_unchanged(fake_db, today):
    fake_db.add_row("user_points", {"user_id": "u1", "current_streak": 3, "last_activity_date": "2025-03-10"})
    streak = points.advance_streak("u1")
    assert streak.current == 3
    assert not streak.changed


def test_update_streak_resets_after_gap(fake_db, today):
    fake_db.add_row("user_points", {"user_id": "u1", "current_streak": 12, "last_activity_date": "2025-03-01"})
    assert points.update_streak("u1") == 1


def test_update_streak_keeps_points(fake_db, today):
    fake_db.add_row("user_points", {"user_id": "u1", "total_points": 40, "current_streak": 1,
                                    "last_activity_date": "2025-03-09"})
    points.update_streak("u1")
    assert fake_db.rows("user_points")[0]["total_points"] == 40


def test_update_streak_returns_zero_when_read_fails(fake_db, today):
    fake_db.failing_tables.add("user_points")
    assert points.update_streak("u1") == 0


@pytest.mark.parametrize("streak,bonus", [(3, 5), (7, 15), (14, 30), (30, 50)])
def test_streak_bonus_on_exact_milestones(fake_db, streak, bonus):
    assert points.check_and_award_streak_bonus("u1", streak) == bonus


@pytest.mark.parametrize("streak", [1, 2, 4, 8, 29, 31])
def test_no_streak_bonus_between_milestones(fake_db, streak):
    assert points.check_and_award_streak_bonus("u1", streak) == 0
    assert fake_db.rows("user_points") == []


def test_get_user_points(fake_db):
    assert points.get_user_points("u1") is None
    fake_db.add_row("user_points", {"user_id": "u1", "total_points": 25, "current_streak": 2,
                                    "last_activity_date": "2025-03-10"})
    data = points.get_user_points("u1")
    assert data.total_points == 25
    assert data.current_streak == 2
    assert data.last_activity_date == TODAY


def test_get_user_points_none_on_failure(fake_db):
    fake_db.failing_tables.add("user_points")
    assert points.get_user_points("u1") is None
