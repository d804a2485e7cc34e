"""Storage of activities and their progress points in PostgreSQL."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from lifetrack.domain.progress import (
    Activity,
    ActivityFilter,
    ActivityPoint,
    ProgressFilter,
    ProgressType,
    TrendStats,
)
from lifetrack.gateways.db.postgres import RepositoryBase, select

_ACTIVITY_COLUMNS = (
    "id",
    "user_id",
    "life_part_ids",
    "name",
    "description",
    "progress_type",
    "frequency_days",
    "started_at",
    "ended_at",
    "created_at",
)

_POINT_COLUMNS = (
    "id",
    "activity_id",
    "user_id",
    "value",
    "hours_left",
    "note",
    "progress_at",
    "created_at",
)

_INSERT_ACTIVITY = """
    INSERT INTO activities (user_id, life_part_ids, name, description, progress_type, frequency_days, started_at, ended_at, created_at)
    VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
    RETURNING id"""

_SELECT_ACTIVITY = f"""
    SELECT {", ".join(_ACTIVITY_COLUMNS)}
    FROM activities
    WHERE id = $1 AND user_id = $2"""

_FINISH_ACTIVITY = """
    UPDATE activities
    SET ended_at = $1
    WHERE id = $2 AND user_id = $3 AND ended_at IS NULL"""

_INSERT_PROGRESS = """
    INSERT INTO activity_progress (activity_id, user_id, value, hours_left, note, progress_at, created_at)
    VALUES ($1, $2, $3, $4, $5, $6, $7)
    RETURNING id"""

_SELECT_TREND = """
    SELECT COUNT(*) as count,
           COALESCE(AVG(value), 0) as average,
           COALESCE(PERCENTILE_CONT(0.8) WITHIN GROUP (ORDER BY value), 0) as percentile_80
    FROM activity_progress
    WHERE activity_id = $1 AND user_id = $2 AND progress_at >= $3 AND progress_at <= $4"""


class ActivityNotFoundError(LookupError):
    """The activity does not exist or has already been finished."""

    def __init__(self, message: str = "activity not found or already finished") -> None:
        super().__init__(message)


def _progress_type(value: Any) -> ProgressType | str:
    try:
        return ProgressType(value)
    except ValueError:
        return value


def _activity_from_row(row: Sequence[Any]) -> Activity:
    (
        activity_id,
        user_id,
        life_part_ids,
        name,
        description,
        progress_type,
        frequency_days,
        started_at,
        ended_at,
        created_at,
    ) = row
    return Activity(
        id=activity_id,
        user_id=user_id,
        life_part_ids=list(life_part_ids or []),
        name=name,
        description=description or "",
        progress_type=_progress_type(progress_type),
        frequency_days=int(frequency_days),
        started_at=started_at,
        ended_at=ended_at,
        created_at=created_at,
    )


def _point_from_row(row: Sequence[Any]) -> ActivityPoint:
    point_id, activity_id, user_id, value, hours_left, note, progress_at, created_at = row
    return ActivityPoint(
        id=point_id,
        activity_id=activity_id,
        user_id=user_id,
        value=int(value),
        hours_left=None if hours_left is None else float(hours_left),
        note=note or "",
        progress_at=progress_at,
        created_at=created_at,
    )


class ProgressRepository(RepositoryBase):
    """Tracked activities and the progress recorded for them."""

    def create_activity(self, activity: Activity) -> int:
        """Store an activity, stamping its creation time; return its id."""
        activity.created_at = datetime.now(timezone.utc)
        row = self.connection.query_row(
            _INSERT_ACTIVITY,
            activity.user_id,
            list(activity.life_part_ids),
            activity.name,
            activity.description,
            getattr(activity.progress_type, "value", activity.progress_type),
            activity.frequency_days,
            activity.started_at,
            activity.ended_at,
            activity.created_at,
        )
        return int(row[0])

    def list_activities(self, activity_filter: ActivityFilter) -> list[Activity]:
        """Activities matching the filter, by frequency and then name."""
        query = (
            select(*_ACTIVITY_COLUMNS)
            .from_table("activities")
            .where_eq("user_id", activity_filter.user_id)
        )
        if activity_filter.active_only:
            query = query.where_eq("ended_at", None)
        if activity_filter.life_part_ids:
            query = query.where(
                "life_part_ids && ?", list(activity_filter.life_part_ids)
            )
        sql, args = query.order_by("frequency_days ASC", "name ASC").to_sql()
        return [_activity_from_row(row) for row in self.connection.query(sql, *args)]

    def get_activity(self, activity_id: int, user_id: int) -> Activity | None:
        """An activity of a user, or None when there is none."""
        row = self._fetch_one_or_none(_SELECT_ACTIVITY, activity_id, user_id)
        return None if row is None else _activity_from_row(row)

    def finish_activity(
        self, activity_id: int, user_id: int, ended_at: datetime
    ) -> None:
        """End a running activity; raises ActivityNotFoundError otherwise."""
        affected = self.connection.execute(
            _FINISH_ACTIVITY, ended_at, activity_id, user_id
        )
        if affected == 0:
            raise ActivityNotFoundError()

    def create_progress(self, point: ActivityPoint) -> int:
        """Store a progress point, stamping its creation time; return its id."""
        point.created_at = datetime.now(timezone.utc)
        row = self.connection.query_row(
            _INSERT_PROGRESS,
            point.activity_id,
            point.user_id,
            point.value,
            point.hours_left,
            point.note,
            point.progress_at,
            point.created_at,
        )
        return int(row[0])

    def list_progress(self, progress_filter: ProgressFilter) -> list[ActivityPoint]:
        """Progress points matching the filter, newest first."""
        query = (
            select(*_POINT_COLUMNS)
            .from_table("activity_progress")
            .where_eq("user_id", progress_filter.user_id)
            .order_by("progress_at DESC")
        )
        if progress_filter.activity_id != 0:
            query = query.where_eq("activity_id", progress_filter.activity_id)
        if progress_filter.start is not None:
            query = query.where_gte("progress_at", progress_filter.start)
        if progress_filter.end is not None:
            query = query.where_lte("progress_at", progress_filter.end)
        if progress_filter.limit > 0:
            query = query.limit(progress_filter.limit)
        sql, args = query.to_sql()
        return [_point_from_row(row) for row in self.connection.query(sql, *args)]

    def get_trend_stats(
        self, activity_id: int, user_id: int, start: datetime, end: datetime
    ) -> TrendStats:
        """Count, average and 80th percentile of the values in the window."""
        count, average, percentile = self.connection.query_row(
            _SELECT_TREND, activity_id, user_id, start, end
        )
        return TrendStats(
            count=int(count or 0),
            average=float(average or 0),
            percentile_80=float(percentile or 0),
        )