"""PostgreSQL connection contract and a small SELECT builder."""

from __future__ import annotations

import itertools
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from typing import Any, Protocol

_PLACEHOLDER = re.compile(r"\?\??")
_SEQUENCES = (list, tuple, set, frozenset)


class NoRowsError(LookupError):
    """A single-row query found nothing."""

    def __init__(self, message: str = "no rows in result set") -> None:
        super().__init__(message)


class Connection(Protocol):
    """The queries a repository runs; placeholders are $1, $2, ..."""

    def query_row(self, sql: str, *args: Any) -> Sequence[Any]:
        """Return the first row, raising NoRowsError when there is none."""
        ...

    def query(self, sql: str, *args: Any) -> Iterable[Sequence[Any]]:
        """Return all rows."""
        ...

    def execute(self, sql: str, *args: Any) -> int:
        """Run a statement and return the number of rows affected."""
        ...


def _number_placeholders(sql: str) -> str:
    counter = itertools.count(1)

    def substitute(match: re.Match[str]) -> str:
        if match.group(0) == "??":
            return "?"
        return f"${next(counter)}"

    return _PLACEHOLDER.sub(substitute, sql)


@dataclass(frozen=True)
class SelectBuilder:
    """An immutable SELECT statement; each method returns a new builder."""

    columns: tuple[str, ...] = ()
    table: str | None = None
    conditions: tuple[tuple[str, tuple[Any, ...]], ...] = ()
    grouping: tuple[str, ...] = ()
    ordering: tuple[str, ...] = ()
    row_limit: int | None = None

    def from_table(self, table: str) -> SelectBuilder:
        return replace(self, table=table)

    def column(self, expression: str) -> SelectBuilder:
        return replace(self, columns=(*self.columns, expression))

    def where(self, clause: str, *args: Any) -> SelectBuilder:
        """Add a raw condition with ? placeholders; ?? stands for a literal ?."""
        return replace(self, conditions=(*self.conditions, (clause, tuple(args))))

    def where_eq(self, column: str, value: Any) -> SelectBuilder:
        """Equality; a sequence gives IN, None gives IS NULL."""
        if value is None:
            return self.where(f"{column} IS NULL")
        if isinstance(value, _SEQUENCES):
            items = tuple(value)
            if not items:
                return self.where("(1=0)")
            marks = ",".join("?" for _ in items)
            return self.where(f"{column} IN ({marks})", *items)
        return self.where(f"{column} = ?", value)

    def where_gte(self, column: str, value: Any) -> SelectBuilder:
        return self.where(f"{column} >= ?", value)

    def where_lte(self, column: str, value: Any) -> SelectBuilder:
        return self.where(f"{column} <= ?", value)

    def group_by(self, *args: str) -> SelectBuilder:
        return replace(self, grouping=(*self.grouping, *args))

    def order_by(self, *args: str) -> SelectBuilder:
        return replace(self, ordering=(*self.ordering, *args))

    def limit(self, count: int) -> SelectBuilder:
        if count < 0:
            raise ValueError("limit must not be negative")
        return replace(self, row_limit=count)

    def to_sql(self) -> tuple[str, list[Any]]:
        """Render the statement and its arguments."""
        if not self.columns:
            raise ValueError("select statements must have at least one result column")
        parts = ["SELECT " + ", ".join(self.columns)]
        if self.table:
            parts.append("FROM " + self.table)
        args: list[Any] = []
        if self.conditions:
            parts.append("WHERE " + " AND ".join(clause for clause, _ in self.conditions))
            for _, clause_args in self.conditions:
                args.extend(clause_args)
        if self.grouping:
            parts.append("GROUP BY " + ", ".join(self.grouping))
        if self.ordering:
            parts.append("ORDER BY " + ", ".join(self.ordering))
        if self.row_limit is not None:
            parts.append(f"LIMIT {self.row_limit}")
        return _number_placeholders(" ".join(parts)), args


def select(*args: str) -> SelectBuilder:
    """Start a SELECT of the given columns."""
    return SelectBuilder(columns=tuple(args))


class RepositoryBase:
    """Shared state of the repositories: the connection they query."""

    def __init__(self, connection: Connection) -> None:
        self.connection = connection

    def _fetch_one_or_none(self, sql: str, *args: Any) -> Sequence[Any] | None:
        try:
            return self.connection.query_row(sql, *args)
        except NoRowsError:
            return None