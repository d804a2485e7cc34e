# lifetrack

Domain model and storage layer for a personal tracker of food, workouts and
life progress. It covers a food database with detailed nutrients, a
consumption log, exercises with workouts and sets, and activities with
progress points scored from -2 to +2. Data is kept in PostgreSQL behind a
small connection protocol, so any driver wrapped to offer `query_row`,
`query` and `execute` can be plugged in.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Overview

- `lifetrack.domain.food`: `Food`, `Nutrients`, `BasicNutrients`,
  `ConsumptionLog`, `FoodFilter`, `FoodComponent`, `FoodStats`.
  `Nutrients.to_json` / `Nutrients.from_json` and `encode_food_components` /
  `decode_food_components` convert the `nutrients` and `food_composition`
  columns to and from JSON. `BasicNutrients.to_full()` gives a `Nutrients`
  with the eight main values set.
- `lifetrack.domain.nutrients`: `calculate_proportional_nutrients(base, amount_g)`
  scales per-100 g values to an amount in grams. `add_proportional_nutrients(total, component, amount_g)`
  adds a scaled component into a total in place. `round_to_3_decimals` rounds
  halves away from zero. `glycemic_index` is rounded to a whole number.
- `lifetrack.domain.exercise`: `Exercise`, `EquipmentType` (with
  `EquipmentType.is_valid`), `ExerciseSearch`, `Workout` (with `is_active`),
  `Set`, `WorkoutSet`.
- `lifetrack.domain.progress`: `Activity` (with `is_active`), `ActivityPoint`,
  `LifePart`, `ProgressType`, `TrendStats`, `ActivityStats`, `ActivityFilter`,
  `ProgressFilter`.
- `lifetrack.domain.nutrition_stats`: `NutritionStats` (with `is_empty`),
  `NutritionStatsFilter`, `AggregationType` (`TOTAL` or `BY_DAY`).
- `lifetrack.util`: small helpers for optional values: `value_if`,
  `none_if_zero`, `none_if_empty`, `value_or` and `null_if_zero`.
- `lifetrack.gateways.context`: `use_db(db)` and `use_user_id(user_id)` are
  context managers that bind a database and a user to the current context.
  `current_db()` and `current_user_id()` read them back and return `None` or
  `0` when nothing is bound.
- `lifetrack.gateways.interfaces`: the `Database` and `DatabaseMaintainer`
  protocols.
- `lifetrack.gateways.db.postgres`: the `Connection` protocol, `NoRowsError`,
  and an immutable `SELECT` builder started with `select(...)`. It renders
  `$1, $2, ...` placeholders.
- `lifetrack.gateways.db.repository`: `Repository` joins `FoodRepository`,
  `TrainingRepository` and `ProgressRepository`, and adds `apply_migrations`
  and `truncate_user_data`. `new_repository(connection)` returns the
  repository twice, once as the database and once as the maintainer.

## The connection

A connection needs three methods:

- `query_row(sql, *args)` returns the first row as a sequence, or raises
  `NoRowsError` if there is none.
- `query(sql, *args)` returns an iterable of rows.
- `execute(sql, *args)` returns the number of rows affected.

JSON columns may come back as text, bytes or already decoded objects.

## Example

```python
from lifetrack.domain.food import Food, Nutrients
from lifetrack.domain.nutrients import calculate_proportional_nutrients
from lifetrack.gateways.db.repository import new_repository

repo, maintainer = new_repository(connection)  # any object with query_row/query/execute
maintainer.apply_migrations("migrations")      # runs the .sql files in name order

apple = Food(name="Apple", user_id=1, food_type="product",
             nutrients=Nutrients(calories=52.0, protein_g=0.3))
apple_id = repo.create_food(apple)

portion = calculate_proportional_nutrients(apple.nutrients, 150.0)
print(portion.calories)  # 78.0
```

## Errors and missing rows

- These return `None` when nothing is found: `get_last_consumption_time`,
  `get_last_set` and `get_activity`.
- `get_food` and `get_consumption_log` raise `NoRowsError` when nothing is
  found.
- `finish_activity` raises `ActivityNotFoundError` if the activity does not
  exist or is already finished.
- `get_nutrition_stats` raises `ValueError` for an unknown aggregation type.
- `apply_migrations` raises `RuntimeError` if a file cannot be read or
  applied.

## What this package does not do

- It is a library only. It has no command, no HTTP server and no tool or
  assistant interface on top of the repository.
- It ships no database driver.
- It ships no migration files. The schema must be supplied as a directory of
  `.sql` files passed to `apply_migrations`.