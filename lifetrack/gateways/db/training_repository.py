"""Storage of exercises, workouts and sets in PostgreSQL."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from lifetrack.domain.exercise import EquipmentType, Exercise, Set, Workout, WorkoutSet
from lifetrack.gateways.db.postgres import RepositoryBase, select
from lifetrack.util import null_if_zero

_INSERT_EXERCISE = """
    INSERT INTO exercises (user_id, name, equipment_type, created_at)
    VALUES ($1, $2, $3, $4)
    RETURNING id"""

_SELECT_WITH_LAST_USED = """
    SELECT e.id, e.user_id, e.name, e.equipment_type, e.created_at,
           MAX(s.created_at) as last_used_at
    FROM exercises e
    LEFT JOIN sets s ON e.id = s.exercise_id
    WHERE e.user_id = $1
    GROUP BY e.id, e.user_id, e.name, e.equipment_type, e.created_at
    ORDER BY e.created_at DESC"""

_SELECT_EXERCISES = """
    SELECT e.id, e.user_id, e.name, e.equipment_type, e.created_at,
           MAX(s.created_at) as last_used_at
    FROM exercises e
    LEFT JOIN sets s ON e.id = s.exercise_id AND s.user_id = $1
    WHERE e.user_id = $1
    GROUP BY e.id, e.user_id, e.name, e.equipment_type, e.created_at
    ORDER BY last_used_at DESC NULLS LAST, e.name ASC
    LIMIT $2"""

_INSERT_WORKOUT = """
    INSERT INTO workouts (user_id, started_at, completed_at)
    VALUES ($1, $2, $3)
    RETURNING id"""

_CLOSE_WORKOUT = """
    UPDATE workouts
    SET completed_at = $1
    WHERE id = $2"""

_SELECT_WORKOUTS = """
    SELECT id, user_id, started_at, completed_at
    FROM workouts
    WHERE user_id = $1
    ORDER BY started_at DESC"""

_INSERT_SET = """
    INSERT INTO sets (user_id, workout_id, exercise_id, reps, duration_seconds, weight_kg, created_at)
    VALUES ($1, $2, $3, $4, $5, $6, $7)
    RETURNING id"""

_SELECT_LAST_SET = """
    SELECT
        w.id, w.user_id, w.started_at, w.completed_at,
        s.id, s.user_id, s.workout_id, s.exercise_id,
        COALESCE(s.reps, 0), COALESCE(s.duration_seconds, 0), COALESCE(s.weight_kg, 0),
        s.created_at
    FROM sets s
    JOIN workouts w ON s.workout_id = w.id
    WHERE s.user_id = $1
    ORDER BY s.created_at DESC
    LIMIT 1"""

_SELECT_SETS = """
    SELECT id, user_id, workout_id, exercise_id,
           COALESCE(reps, 0), COALESCE(duration_seconds, 0), COALESCE(weight_kg, 0),
           created_at
    FROM sets
    WHERE user_id = $1
      AND created_at >= $2
      AND created_at <= $3
    ORDER BY created_at DESC"""


def _equipment(value: Any) -> EquipmentType | str:
    return EquipmentType(value) if EquipmentType.is_valid(value) else value


def _plain(value: Any) -> Any:
    return getattr(value, "value", value)


def _exercise_from_row(row: Sequence[Any]) -> Exercise:
    exercise_id, user_id, name, equipment_type, created_at, *rest = row
    return Exercise(
        id=exercise_id,
        user_id=user_id,
        name=name,
        equipment_type=_equipment(equipment_type),
        created_at=created_at,
        last_used_at=rest[0] if rest else None,
    )


def _workout_from_row(row: Sequence[Any]) -> Workout:
    workout_id, user_id, started_at, completed_at = row
    return Workout(
        id=workout_id,
        user_id=user_id,
        started_at=started_at,
        completed_at=completed_at,
    )


def _set_from_row(row: Sequence[Any]) -> Set:
    set_id, user_id, workout_id, exercise_id, reps, duration, weight, created_at = row
    return Set(
        id=set_id,
        user_id=user_id,
        workout_id=workout_id,
        exercise_id=exercise_id,
        reps=int(reps or 0),
        duration_seconds=int(duration or 0),
        weight_kg=float(weight or 0),
        created_at=created_at,
    )


class TrainingRepository(RepositoryBase):
    """Exercises, the workouts they are done in, and their sets."""

    def create_exercise(self, exercise: Exercise) -> int:
        """Store an exercise, stamping its creation time; return its id."""
        exercise.created_at = datetime.now(timezone.utc)
        row = self.connection.query_row(
            _INSERT_EXERCISE,
            exercise.user_id,
            exercise.name,
            _plain(exercise.equipment_type),
            exercise.created_at,
        )
        return int(row[0])

    def list_with_last_used(self, user_id: int) -> list[Exercise]:
        """Exercises with their last use, newest created first."""
        return [
            _exercise_from_row(row)
            for row in self.connection.query(_SELECT_WITH_LAST_USED, user_id)
        ]

    def list_exercises(self, user_id: int, limit: int) -> list[Exercise]:
        """Exercises by last use, unused ones last, then by name."""
        return [
            _exercise_from_row(row)
            for row in self.connection.query(_SELECT_EXERCISES, user_id, limit)
        ]

    def create_workout(self, workout: Workout) -> int:
        """Store a workout and return its id."""
        row = self.connection.query_row(
            _INSERT_WORKOUT, workout.user_id, workout.started_at, workout.completed_at
        )
        return int(row[0])

    def close_workout(self, workout_id: int, completed_at: datetime) -> None:
        """Mark a workout completed at the given time."""
        self.connection.execute(_CLOSE_WORKOUT, completed_at, workout_id)

    def list_workouts(self, user_id: int) -> list[Workout]:
        """Workouts of a user, newest first."""
        return [
            _workout_from_row(row)
            for row in self.connection.query(_SELECT_WORKOUTS, user_id)
        ]

    def create_set(self, exercise_set: Set) -> int:
        """Store a set; zero reps, duration or weight are stored as NULL."""
        row = self.connection.query_row(
            _INSERT_SET,
            exercise_set.user_id,
            exercise_set.workout_id,
            exercise_set.exercise_id,
            null_if_zero(exercise_set.reps),
            null_if_zero(exercise_set.duration_seconds),
            null_if_zero(exercise_set.weight_kg),
            exercise_set.created_at,
        )
        return int(row[0])

    def get_last_set(self, user_id: int) -> WorkoutSet | None:
        """The latest set of a user with its workout, or None."""
        row = self._fetch_one_or_none(_SELECT_LAST_SET, user_id)
        if row is None:
            return None
        return WorkoutSet(
            workout=_workout_from_row(row[:4]),
            set=_set_from_row(row[4:]),
        )

    def list_sets(self, user_id: int, start: datetime, end: datetime) -> list[Set]:
        """Sets made within the window, newest first."""
        return [
            _set_from_row(row)
            for row in self.connection.query(_SELECT_SETS, user_id, start, end)
        ]

    def get_exercises_by_ids(
        self, user_id: int, exercise_ids: list[int]
    ) -> list[Exercise]:
        """Exercises of a user with the given ids."""
        if not exercise_ids:
            return []
        sql, args = (
            select("id", "user_id", "name", "equipment_type", "created_at")
            .from_table("exercises")
            .where_eq("user_id", user_id)
            .where_eq("id", list(exercise_ids))
            .to_sql()
        )
        return [_exercise_from_row(row) for row in self.connection.query(sql, *args)]

    def get_workouts_by_ids(
        self, user_id: int, workout_ids: list[int]
    ) -> list[Workout]:
        """Workouts of a user with the given ids."""
        if not workout_ids:
            return []
        sql, args = (
            select("id", "user_id", "started_at", "completed_at")
            .from_table("workouts")
            .where_eq("user_id", user_id)
            .where_eq("id", list(workout_ids))
            .to_sql()
        )
        return [_workout_from_row(row) for row in self.connection.query(sql, *args)]