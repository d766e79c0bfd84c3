"""
Search query construction for `tracking_numbers`.

Filters are turned into a WHERE clause plus an ordered list of bound values.
User input only ever travels as a bound value ($1, $2, ...); the SQL text is
assembled from fixed fragments chosen by which filters are present.

Filter syntax:
- `tracking_number`, `order_number`: substring match; `!x` means "does not contain x"
- `status`: exact match; `!x` means "is not x"
- `created_after`, `created_before`: inclusive bounds on `created_at`
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

NEGATION_PREFIX = "!"

SEARCH_COLUMNS = "tracking_number, order_number, status, created_at, updated_at"


@dataclass(frozen=True)
class SearchFilters:
    tracking_number: str | None = None
    order_number: str | None = None
    status: str | None = None
    created_after: str | None = None
    created_before: str | None = None


@dataclass(frozen=True)
class SearchQuery:
    sql: str
    args: tuple[Any, ...]


def parse_search_value(raw: str) -> tuple[bool, str]:
    """
    Split a raw filter value into (negated, value).
    """
    if raw.startswith(NEGATION_PREFIX):
        return True, raw[len(NEGATION_PREFIX):]
    return False, raw


def escape_like(value: str) -> str:
    # Postgres LIKE uses backslash as its default escape character.
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass
class _WhereBuilder:
    clauses: list[str] = field(default_factory=list)
    args: list[Any] = field(default_factory=list)

    def bind(self, value: Any) -> str:
        self.args.append(value)
        return f"${len(self.args)}"

    def contains(self, column: str, raw: str) -> None:
        negated, value = parse_search_value(raw)
        op = "NOT LIKE" if negated else "LIKE"
        self.clauses.append(f"{column} {op} {self.bind('%' + escape_like(value) + '%')}")

    def equals(self, column: str, raw: str) -> None:
        negated, value = parse_search_value(raw)
        op = "<>" if negated else "="
        self.clauses.append(f"{column} {op} {self.bind(value)}")

    def bound(self, column: str, op: str, raw: str) -> None:
        # Bound as text so the database, not the driver, parses the timestamp.
        self.clauses.append(f"{column} {op} ({self.bind(raw)}::text)::timestamptz")

    def where_sql(self) -> str:
        if not self.clauses:
            return "TRUE"
        return " AND ".join(self.clauses)


def build_search_query(filters: SearchFilters, *, limit: int) -> SearchQuery:
    """
    Build the search SELECT for the given filters.

    Empty values are treated as absent. Results are ordered by `created_at`
    ascending and capped at `limit` rows.
    """
    where = _WhereBuilder()

    if filters.tracking_number:
        where.contains("tracking_number", filters.tracking_number)
    if filters.order_number:
        where.contains("order_number", filters.order_number)
    if filters.status:
        where.equals("status", filters.status)
    if filters.created_after:
        where.bound("created_at", ">=", filters.created_after)
    if filters.created_before:
        where.bound("created_at", "<=", filters.created_before)

    predicate = where.where_sql()
    limit_param = where.bind(int(limit))

    sql = (
        f"SELECT {SEARCH_COLUMNS}\n"
        "FROM tracking_numbers\n"
        f"WHERE {predicate}\n"
        "ORDER BY created_at ASC\n"
        f"LIMIT {limit_param}"
    )
    return SearchQuery(sql=sql, args=tuple(where.args))
