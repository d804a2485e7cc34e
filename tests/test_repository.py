import pytest

from lifetrack.domain.exercise import Exercise
from lifetrack.domain.food import FoodFilter
from lifetrack.gateways.db.postgres import NoRowsError
from lifetrack.gateways.db.repository import Repository, new_repository


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


class FailingConnection(FakeConnection):
    def execute(self, sql, *args):
        raise ValueError("syntax error")


def test_new_repository_returns_one_object_for_both_roles():
    conn = FakeConnection()
    repo, maintainer = new_repository(conn)
    assert repo is maintainer
    assert isinstance(repo, Repository)
    assert repo.connection is conn


def test_truncate_user_data_deletes_from_every_table_in_order():
    conn = FakeConnection()
    Repository(conn).truncate_user_data(7)
    tables = [sql.split()[2] for _, sql, _ in conn.calls]
    assert tables == [
        "consumption_log",
        "food",
        "sets",
        "workouts",
        "exercises",
        "activity_progress",
        "activities",
        "life_parts",
    ]
    assert all(args == (7,) for _, _, args in conn.calls)
    assert all(kind == "execute" for kind, _, _ in conn.calls)


def test_apply_migrations_runs_sql_files_in_name_order(tmp_path):
    (tmp_path / "002_b.sql").write_text("CREATE TABLE b ();", encoding="utf-8")
    (tmp_path / "001_a.sql").write_text("CREATE TABLE a ();", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
    (tmp_path / "dir.sql").mkdir()
    conn = FakeConnection()
    Repository(conn).apply_migrations(tmp_path)
    assert [sql for _, sql, _ in conn.calls] == ["CREATE TABLE a ();", "CREATE TABLE b ();"]


def test_apply_migrations_missing_directory(tmp_path):
    with pytest.raises(RuntimeError, match="failed to read migrations directory"):
        Repository(FakeConnection()).apply_migrations(tmp_path / "absent")


def test_apply_migrations_reports_failing_file(tmp_path):
    (tmp_path / "001_a.sql").write_text("BROKEN", encoding="utf-8")
    with pytest.raises(RuntimeError, match="failed to apply migration 001_a.sql"):
        Repository(FailingConnection()).apply_migrations(tmp_path)