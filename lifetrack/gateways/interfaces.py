"""Storage operations the application relies on."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Protocol

from lifetrack.domain.exercise import Exercise, Set, Workout, WorkoutSet
from lifetrack.domain.food import ConsumptionLog, Food, FoodFilter, FoodStats
from lifetrack.domain.nutrition_stats import NutritionStats, NutritionStatsFilter
from lifetrack.domain.progress import (
    Activity,
    ActivityFilter,
    ActivityPoint,
    ProgressFilter,
    TrendStats,
)


class Database(Protocol):
    """Everything stored about foods, training and progress."""

    def create_food(self, food: Food) -> int:
        """Store a food and return its id."""
        ...

    def get_food(self, food_id: int) -> Food:
        """Fetch a food by id."""
        ...

    def add_consumption_log(self, log: ConsumptionLog) -> None:
        """Record an eaten portion."""
        ...

    def search_food(self, food_filter: FoodFilter) -> list[Food]:
        """Find foods matching the filter, ordered by name."""
        ...

    def get_consumption_log(
        self, user_id: int, consumed_at: datetime
    ) -> ConsumptionLog:
        """Fetch the record a user made at the given moment."""
        ...

    def get_consumption_logs_by_user(self, user_id: int) -> list[ConsumptionLog]:
        """All records of a user, newest first."""
        ...

    def get_last_consumption_time(self, user_id: int) -> datetime | None:
        """When the user last ate, or None."""
        ...

    def get_nutrition_stats(
        self, stats_filter: NutritionStatsFilter
    ) -> list[NutritionStats]:
        """Aggregated nutrition for the filter's window."""
        ...

    def get_top_products(
        self, user_id: int, start: datetime, end: datetime, limit: int
    ) -> list[FoodStats]:
        """Most often logged foods in the window."""
        ...

    def create_exercise(self, exercise: Exercise) -> int:
        """Store an exercise and return its id."""
        ...

    def list_with_last_used(self, user_id: int) -> list[Exercise]:
        """Exercises with the time they were last used, newest first."""
        ...

    def list_exercises(self, user_id: int, limit: int) -> list[Exercise]:
        """Exercises ordered by last use."""
        ...

    def create_workout(self, workout: Workout) -> int:
        """Store a workout and return its id."""
        ...

    def close_workout(self, workout_id: int, completed_at: datetime) -> None:
        """Mark a workout completed."""
        ...

    def list_workouts(self, user_id: int) -> list[Workout]:
        """Workouts of a user, newest first."""
        ...

    def create_set(self, exercise_set: Set) -> int:
        """Store a set and return its id."""
        ...

    def get_last_set(self, user_id: int) -> WorkoutSet | None:
        """The latest set with its workout, or None."""
        ...

    def list_sets(self, user_id: int, start: datetime, end: datetime) -> list[Set]:
        """Sets in the window, newest first."""
        ...

    def get_exercises_by_ids(
        self, user_id: int, exercise_ids: list[int]
    ) -> list[Exercise]:
        """Exercises of a user with the given ids."""
        ...

    def get_workouts_by_ids(
        self, user_id: int, workout_ids: list[int]
    ) -> list[Workout]:
        """Workouts of a user with the given ids."""
        ...

    def create_activity(self, activity: Activity) -> int:
        """Store an activity and return its id."""
        ...

    def list_activities(self, activity_filter: ActivityFilter) -> list[Activity]:
        """Activities matching the filter."""
        ...

    def get_activity(self, activity_id: int, user_id: int) -> Activity | None:
        """An activity of a user, or None."""
        ...

    def finish_activity(
        self, activity_id: int, user_id: int, ended_at: datetime
    ) -> None:
        """End an activity that is still running."""
        ...

    def create_progress(self, point: ActivityPoint) -> int:
        """Store a progress point and return its id."""
        ...

    def list_progress(self, progress_filter: ProgressFilter) -> list[ActivityPoint]:
        """Progress points matching the filter, newest first."""
        ...

    def get_trend_stats(
        self, activity_id: int, user_id: int, start: datetime, end: datetime
    ) -> TrendStats:
        """Count, average and 80th percentile of progress in the window."""
        ...


class DatabaseMaintainer(Protocol):
    """Schema and data upkeep."""

    def apply_migrations(self, migrations_dir: str | Path) -> None:
        """Run the SQL files of a directory in name order."""
        ...

    def truncate_user_data(self, user_id: int) -> None:
        """Delete everything stored for a user."""
        ...