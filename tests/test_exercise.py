from datetime import datetime, timezone

import pytest

from lifetrack.domain.exercise import (
    EquipmentType,
    Exercise,
    ExerciseSearch,
    Set,
    Workout,
    WorkoutSet,
)


@pytest.mark.parametrize("name", ["machine", "barbell", "dumbbells", "bodyweight"])
def test_known_equipment_types_are_valid(name):
    assert EquipmentType.is_valid(name) is True
    assert EquipmentType(name).value == name


@pytest.mark.parametrize("name", ["invalid_type", "", "Barbell", None])
def test_unknown_equipment_types_are_invalid(name):
    assert EquipmentType.is_valid(name) is False


def test_enum_member_is_valid():
    assert EquipmentType.is_valid(EquipmentType.BARBELL) is True
    assert EquipmentType.BARBELL == "barbell"


def test_workout_activity_follows_completion():
    started = datetime(2024, 1, 1, 10, tzinfo=timezone.utc)
    active = Workout(user_id=1, started_at=started)
    assert active.is_active() is True
    done = Workout(user_id=1, started_at=started, completed_at=started)
    assert done.is_active() is False


def test_exercise_defaults():
    exercise = Exercise(name="Bench Press", equipment_type=EquipmentType.BARBELL)
    assert exercise.last_used_at is None
    assert exercise.id == 0
    assert exercise.name == "Bench Press"


def test_set_defaults_mean_unused():
    exercise_set = Set(exercise_id=3, duration_seconds=60)
    assert exercise_set.reps == 0
    assert exercise_set.weight_kg == 0
    assert exercise_set.duration_seconds == 60


def test_workout_set_holds_both_parts():
    workout = Workout(id=5)
    exercise_set = Set(id=9, workout_id=5, reps=10, weight_kg=80.5)
    pair = WorkoutSet(workout=workout, set=exercise_set)
    assert pair.workout.id == pair.set.workout_id
    assert pair.set.weight_kg == 80.5


def test_exercise_search_lists_are_independent():
    first = ExerciseSearch(user_id=1)
    second = ExerciseSearch(user_id=2)
    first.ids.append(4)
    assert second.ids == []