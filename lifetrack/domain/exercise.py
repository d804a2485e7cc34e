"""Exercises, workouts and sets."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class EquipmentType(str, Enum):
    """Kind of equipment an exercise is performed with."""

    MACHINE = "machine"
    BARBELL = "barbell"
    DUMBBELLS = "dumbbells"
    BODYWEIGHT = "bodyweight"

    @classmethod
    def is_valid(cls, value: object) -> bool:
        """Tell whether the value names a known equipment type."""
        try:
            cls(value)
        except ValueError:
            return False
        return True


@dataclass(kw_only=True)
class Exercise:
    id: int = 0
    user_id: int = 0
    name: str = ""
    equipment_type: EquipmentType | str = ""
    created_at: datetime | None = None
    last_used_at: datetime | None = None


@dataclass(kw_only=True)
class ExerciseSearch:
    user_id: int = 0
    ids: list[int] = field(default_factory=list)
    limit: int = 0


@dataclass(kw_only=True)
class Workout:
    id: int = 0
    user_id: int = 0
    started_at: datetime | None = None
    completed_at: datetime | None = None

    def is_active(self) -> bool:
        """A workout with no completion time is still running."""
        return self.completed_at is None


@dataclass(kw_only=True)
class Set:
    """One set of an exercise; zero reps, duration or weight mean unused."""

    id: int = 0
    user_id: int = 0
    workout_id: int = 0
    exercise_id: int = 0
    reps: int = 0
    duration_seconds: int = 0
    weight_kg: float = 0.0
    created_at: datetime | None = None


@dataclass(kw_only=True)
class WorkoutSet:
    workout: Workout = field(default_factory=Workout)
    set: Set = field(default_factory=Set)