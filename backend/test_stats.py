"""
Tests for dashboard stats, timeframe reports, achievements and the leaderboard
"""
from datetime import datetime

import pytest
import pytz

from app.core.exceptions import ProfileNotFoundError
from app.models.stats import Timeframe
from app.services import stats
from app.utils.timezone import get_timeframe_start

# Wednesday 2025-03-12, 13:00 in Los Angeles
NOW = pytz.utc.localize(datetime(2025, 3, 12, 20, 0))


def _verify(fake_db, habit, verified_at):
    habit["completed"] = True
    fake_db.add_row("habit_verifications", {
        "habit_id": habit["id"],
        "is_verified": True,
        "verified_at": verified_at
    })


def test_timeframe_starts():
    assert get_timeframe_start("day", NOW).astimezone(pytz.utc) == pytz.utc.localize(datetime(2025, 3, 12, 7, 0))
    assert get_timeframe_start("week", NOW).astimezone(pytz.utc) == pytz.utc.localize(datetime(2025, 3, 9, 8, 0))
    assert get_timeframe_start("month", NOW).astimezone(pytz.utc) == pytz.utc.localize(datetime(2025, 3, 1, 8, 0))
    with pytest.raises(ValueError):
        get_timeframe_start("year", NOW)


def test_user_stats_for_new_user(fake_db):
    result = stats.get_user_stats("u1")
    assert result.habit_count == 0
    assert result.streak == 0
    assert result.completion_rate == 0
    assert result.goals_achieved == 0


def test_user_stats_counts_only_own_habits(fake_db, make_stack):
    _, (a, b, c) = make_stack("u1", habits=("A", "B", "C"))
    make_stack("u2", habits=("X",))
    a["completed"] = True
    fake_db.add_row("user_points", {"user_id": "u1", "total_points": 35, "current_streak": 4})

    result = stats.get_user_stats("u1")
    assert result.habit_count == 3
    assert result.goals_achieved == 1
    assert result.completion_rate == 33
    assert result.streak == 4
    assert result.total_points == 35


def test_user_stats_default_to_zero_on_failure(fake_db, make_stack):
    make_stack("u1", habits=("A",))
    fake_db.failing_tables.update({"habits", "user_points"})
    result = stats.get_user_stats("u1")
    assert result.habit_count == 0
    assert result.streak == 0


def test_dashboard_requires_profile(fake_db):
    with pytest.raises(ProfileNotFoundError):
        stats.get_dashboard("u1")


def test_timeframe_stats(fake_db, make_stack):
    _, (today, this_week, this_month, last_month) = make_stack("u1", habits=("A", "B", "C", "D"))
    _verify(fake_db, today, "2025-03-12T10:00:00+00:00")
    _verify(fake_db, this_week, "2025-03-10T10:00:00+00:00")
    _verify(fake_db, this_month, "2025-03-02T10:00:00+00:00")
    _verify(fake_db, last_month, "2025-02-20T10:00:00+00:00")

    day = stats.get_timeframe_stats("u1", Timeframe.DAY, NOW)
    assert day.habits_completed == 1
    assert day.total_habits == 4
    assert day.completion_rate == 25
    assert day.points_earned == 5
    assert day.streak_maintained is True

    assert stats.get_timeframe_stats("u1", Timeframe.WEEK, NOW).habits_completed == 2
    assert stats.get_timeframe_stats("u1", Timeframe.MONTH, NOW).habits_completed == 3


def test_empty_timeframe(fake_db):
    day = stats.get_timeframe_stats("u1", Timeframe.DAY, NOW)
    assert day.habits_completed == 0
    assert day.completion_rate == 0
    assert day.streak_maintained is False


def test_achievements_thresholds():
    earned = {a.id for a in stats.get_achievements(7, 100, 5) if a.earned}
    assert earned == {"streak_3", "streak_7", "points_100", "habits_5"}
    assert len(stats.get_achievements(0, 0, 0)) == 8


def test_report(fake_db, make_stack):
    _, (a,) = make_stack("u1")
    _verify(fake_db, a, "2025-03-12T10:00:00+00:00")
    fake_db.add_row("user_points", {"user_id": "u1", "total_points": 15, "current_streak": 3})

    report = stats.get_report("u1", NOW)
    assert report.current_streak == 3
    assert set(report.timeframes) == {Timeframe.DAY, Timeframe.WEEK, Timeframe.MONTH}
    assert report.timeframes[Timeframe.DAY].habits_completed == 1
    assert {a.id for a in report.achievements if a.earned} == {"streak_3"}


def test_leaderboard(fake_db):
    fake_db.add_row("profiles", {"id": "u1", "name": "Ana", "username": "ana1"})
    fake_db.add_row("profiles", {"id": "u2", "name": "Ben", "username": "ben"})
    fake_db.add_row("user_points", {"user_id": "u1", "total_points": 20, "current_streak": 2})
    fake_db.add_row("user_points", {"user_id": "u2", "total_points": 50, "current_streak": 1})
    fake_db.add_row("user_points", {"user_id": "u3", "total_points": 5, "current_streak": 0})

    board = stats.get_leaderboard("u1")

    assert [e.user_id for e in board] == ["u2", "u1", "u3"]
    assert [e.rank for e in board] == [1, 2, 3]
    assert board[1].is_current_user is True
    assert board[0].is_current_user is False
    assert board[2].username == "Unknown User"
    assert board[2].name == "Unknown"
