"""Life areas, tracked activities and their progress points."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ProgressType(str, Enum):
    """Scale on which progress of an activity is recorded."""

    MOOD = "mood"
    HABIT_PROGRESS = "habit_progress"
    PROJECT_PROGRESS = "project_progress"
    PROMISE_STATE = "promise_state"


@dataclass(kw_only=True)
class LifePart:
    id: int = 0
    user_id: int = 0
    name: str = ""
    description: str = ""
    created_at: datetime | None = None


@dataclass(kw_only=True)
class Activity:
    """A goal or habit checked in every frequency_days days."""

    id: int = 0
    user_id: int = 0
    life_part_ids: list[int] = field(default_factory=list)
    name: str = ""
    description: str = ""
    progress_type: ProgressType | str = ""
    frequency_days: int = 0
    started_at: datetime | None = None
    ended_at: datetime | None = None
    created_at: datetime | None = None

    def is_active(self) -> bool:
        """An activity without an end time is still tracked."""
        return self.ended_at is None


@dataclass(kw_only=True)
class ActivityPoint:
    """A single progress value from -2 to +2."""

    id: int = 0
    activity_id: int = 0
    user_id: int = 0
    value: int = 0
    hours_left: float | None = None
    note: str = ""
    progress_at: datetime | None = None
    created_at: datetime | None = None


@dataclass(kw_only=True)
class TrendStats:
    count: int = 0
    average: float = 0.0
    percentile_80: float = 0.0


@dataclass(kw_only=True)
class ActivityStats:
    activity_id: int = 0
    last_3_points: list[ActivityPoint] = field(default_factory=list)
    trend_overall: TrendStats = field(default_factory=TrendStats)
    trend_last_month: TrendStats = field(default_factory=TrendStats)
    trend_last_week: TrendStats = field(default_factory=TrendStats)


@dataclass(kw_only=True)
class ActivityFilter:
    user_id: int = 0
    active_only: bool = False
    life_part_ids: list[int] = field(default_factory=list)


@dataclass(kw_only=True)
class ProgressFilter:
    """Progress query; zero activity_id, None bounds and zero limit mean no filter."""

    user_id: int = 0
    activity_id: int = 0
    start: datetime | None = None
    end: datetime | None = None
    limit: int = 0