"""The complete PostgreSQL repository and its upkeep."""

from __future__ import annotations

from pathlib import Path

from lifetrack.gateways.db.food_repository import FoodRepository
from lifetrack.gateways.db.postgres import Connection
from lifetrack.gateways.db.progress_repository import ProgressRepository
from lifetrack.gateways.db.training_repository import TrainingRepository

_USER_TABLES = (
    "consumption_log",
    "food",
    "sets",
    "workouts",
    "exercises",
    "activity_progress",
    "activities",
    "life_parts",
)


class Repository(FoodRepository, TrainingRepository, ProgressRepository):
    """Every stored entity, plus schema migrations and data clean-up."""

    def apply_migrations(self, migrations_dir: str | Path) -> None:
        """Run the .sql files of a directory in name order."""
        directory = Path(migrations_dir)
        try:
            entries = list(directory.iterdir())
        except OSError as exc:
            raise RuntimeError(f"failed to read migrations directory: {exc}") from exc

        files = sorted(
            (entry for entry in entries if entry.is_file() and entry.suffix == ".sql"),
            key=lambda entry: entry.name,
        )
        for path in files:
            try:
                script = path.read_text(encoding="utf-8")
            except OSError as exc:
                raise RuntimeError(
                    f"failed to read migration file {path.name}: {exc}"
                ) from exc
            try:
                self.connection.execute(script)
            except Exception as exc:
                raise RuntimeError(
                    f"failed to apply migration {path.name}: {exc}"
                ) from exc

    def truncate_user_data(self, user_id: int) -> None:
        """Delete everything stored for a user, dependents first."""
        for table in _USER_TABLES:
            self.connection.execute(f"DELETE FROM {table} WHERE user_id = $1", user_id)


def new_repository(connection: Connection) -> tuple[Repository, Repository]:
    """Create a repository; it serves both as database and as maintainer."""
    repository = Repository(connection)
    return repository, repository