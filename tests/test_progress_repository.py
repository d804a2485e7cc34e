from datetime import datetime, timedelta, timezone

import pytest

from lifetrack.domain.progress import (
    Activity,
    ActivityFilter,
    ActivityPoint,
    ProgressFilter,
    ProgressType,
)
from lifetrack.gateways.db.postgres import NoRowsError
from lifetrack.gateways.db.progress_repository import (
    ActivityNotFoundError,
    ProgressRepository,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class FakeConnection:
    def __init__(self, row=None, rows=(), rowcount=1):
        self.row = row
        self.rows = list(rows)
        self.rowcount = rowcount
        self.calls = []

    def query_row(self, sql, *args):
        self.calls.append(("query_row", sql, args))
        if self.row is None:
            raise NoRowsError()
        return self.row

    def query(self, sql, *args):
        self.calls.append(("query", sql, args))
        return list(self.rows)

    def execute(self, sql, *args):
        self.calls.append(("execute", sql, args))
        return self.rowcount


def activity_row(activity_id=1, name="Daily Mood", ended_at=None):
    return (activity_id, 5, [1, 2], name, None, "mood", 1, NOW, ended_at, NOW)


def test_create_activity_stamps_time_and_returns_id():
    conn = FakeConnection(row=(4,))
    activity = Activity(
        user_id=5,
        name="Daily Mood",
        progress_type=ProgressType.MOOD,
        frequency_days=1,
        started_at=NOW,
    )
    assert ProgressRepository(conn).create_activity(activity) == 4
    assert activity.created_at is not None
    args = conn.calls[0][2]
    assert args[:7] == (5, [], "Daily Mood", "", "mood", 1, NOW)
    assert args[7] is None


def test_list_activities_without_filters():
    conn = FakeConnection(rows=[activity_row()])
    activities = ProgressRepository(conn).list_activities(ActivityFilter(user_id=5))
    assert activities[0].progress_type is ProgressType.MOOD
    assert activities[0].life_part_ids == [1, 2]
    assert activities[0].description == ""
    _, sql, args = conn.calls[0]
    assert "ended_at IS NULL" not in sql
    assert sql.endswith("ORDER BY frequency_days ASC, name ASC")
    assert args == (5,)


def test_list_activities_active_only_and_life_parts():
    conn = FakeConnection(rows=[])
    ProgressRepository(conn).list_activities(
        ActivityFilter(user_id=5, active_only=True, life_part_ids=[1, 2])
    )
    _, sql, args = conn.calls[0]
    assert "ended_at IS NULL" in sql
    assert "life_part_ids && $2" in sql
    assert args == (5, [1, 2])


def test_get_activity_none_when_missing():
    assert ProgressRepository(FakeConnection()).get_activity(1, 5) is None


def test_get_activity_maps_row():
    repo = ProgressRepository(FakeConnection(row=activity_row(ended_at=NOW)))
    activity = repo.get_activity(1, 5)
    assert activity.name == "Daily Mood"
    assert not activity.is_active()


def test_finish_activity_passes_arguments():
    conn = FakeConnection(rowcount=1)
    ProgressRepository(conn).finish_activity(1, 5, NOW)
    kind, sql, args = conn.calls[0]
    assert kind == "execute"
    assert args == (NOW, 1, 5)
    assert "ended_at IS NULL" in sql


def test_finish_activity_already_finished_raises():
    with pytest.raises(ActivityNotFoundError, match="activity not found or already finished"):
        ProgressRepository(FakeConnection(rowcount=0)).finish_activity(1, 5, NOW)


def test_create_progress_stamps_time():
    conn = FakeConnection(row=(8,))
    point = ActivityPoint(activity_id=1, user_id=5, value=2, hours_left=5.5, note="Feeling great today", progress_at=NOW)
    assert ProgressRepository(conn).create_progress(point) == 8
    assert point.created_at is not None
    assert conn.calls[0][2][:6] == (1, 5, 2, 5.5, "Feeling great today", NOW)


def test_list_progress_without_filters():
    conn = FakeConnection(rows=[(8, 1, 5, 2, None, None, NOW, NOW)])
    points = ProgressRepository(conn).list_progress(ProgressFilter(user_id=5))
    assert points[0].value == 2
    assert points[0].note == ""
    assert points[0].hours_left is None
    _, sql, args = conn.calls[0]
    assert "LIMIT" not in sql
    assert "ORDER BY progress_at DESC" in sql
    assert args == (5,)


def test_list_progress_with_all_filters():
    conn = FakeConnection(rows=[])
    start, end = NOW - timedelta(days=7), NOW
    ProgressRepository(conn).list_progress(
        ProgressFilter(user_id=5, activity_id=1, start=start, end=end, limit=10)
    )
    _, sql, args = conn.calls[0]
    assert "activity_id = $2" in sql
    assert "progress_at >= $3" in sql
    assert "progress_at <= $4" in sql
    assert sql.endswith("LIMIT 10")
    assert args == (5, 1, start, end)


def test_get_trend_stats_maps_values():
    conn = FakeConnection(row=(4, 1.0, 2.0))
    stats = ProgressRepository(conn).get_trend_stats(1, 5, NOW - timedelta(days=30), NOW)
    assert stats.count == 4
    assert stats.average == 1.0
    assert stats.percentile_80 == 2.0
    assert conn.calls[0][2][:2] == (1, 5)