from datetime import datetime, timezone

import pytest

from lifetrack.domain.progress import (
    Activity,
    ActivityFilter,
    ActivityPoint,
    ActivityStats,
    LifePart,
    ProgressFilter,
    ProgressType,
    TrendStats,
)


@pytest.mark.parametrize(
    "name", ["mood", "habit_progress", "project_progress", "promise_state"]
)
def test_progress_type_values(name):
    assert ProgressType(name).value == name


def test_unknown_progress_type_rejected():
    with pytest.raises(ValueError):
        ProgressType("weather")


def test_activity_active_until_ended():
    activity = Activity(name="Daily Mood", progress_type=ProgressType.MOOD, frequency_days=1)
    assert activity.is_active() is True
    activity.ended_at = datetime(2024, 5, 1, tzinfo=timezone.utc)
    assert activity.is_active() is False


def test_activity_lists_are_independent():
    first = Activity(name="Weekly Review")
    second = Activity(name="Project Alpha")
    first.life_part_ids.append(1)
    assert second.life_part_ids == []


def test_progress_filter_defaults_mean_no_filter():
    progress_filter = ProgressFilter(user_id=4)
    assert progress_filter.activity_id == 0
    assert progress_filter.start is None
    assert progress_filter.end is None
    assert progress_filter.limit == 0


def test_activity_stats_default_trends_are_separate():
    stats = ActivityStats(activity_id=2)
    stats.trend_last_week.count = 2
    assert stats.trend_overall.count == 0
    assert stats.last_3_points == []


def test_trend_stats_holds_values():
    trend = TrendStats(count=4, average=1.0, percentile_80=2.0)
    assert trend.count == 4
    assert trend.average == 1.0


def test_activity_point_fields():
    point = ActivityPoint(activity_id=3, value=2, note="Feeling great today", hours_left=5.5)
    assert point.value == 2
    assert point.hours_left == 5.5
    assert point.note == "Feeling great today"


def test_filter_and_life_part_defaults():
    assert ActivityFilter(user_id=1).active_only is False
    assert LifePart(name="Health").description == ""
    assert ProgressType.MOOD == "mood"