"""
repositories/query_builder.py
-----------------------------
Incremental SELECT builder for searches with optional criteria.

Each `where_*` call appends its clause and its parameter together, and only
when the criterion is present, so the placeholders in the SQL and the
parameter list can never drift apart. The mandatory scope predicate (the
company id) is always the first condition.
"""

from datetime import date
from typing import Any, Optional

from utils.logger import get_logger

logger = get_logger(__name__)

DATE_FORMAT = "%Y-%m-%d"
# Appended after LIKE so the wildcards in user text match literally.
LIKE_ESCAPE = "ESCAPE '\\'"


def format_date(day: date) -> str:
    """Canonical sortable text form of a date (YYYY-MM-DD)."""
    return day.strftime(DATE_FORMAT)


def contains_pattern(text: str) -> str:
    """Lower-cased `%text%` LIKE pattern with `\\`, `%` and `_` escaped."""
    escaped = (
        text.strip().lower()
        .replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )
    return f"%{escaped}%"


class QueryBuilder:
    """
    Accumulates an SQL statement and its positional parameters.

    Clause order in the output is fixed regardless of call order:
    WHERE (scope first, then filters in the order added), GROUP BY,
    ORDER BY, LIMIT.

    Example:
        qb = QueryBuilder("SELECT * FROM orders o", "o.id_company", 1)
        qb.where_on_or_after("o.order_date", date(2024, 1, 1))
        qb.order_by("o.order_date DESC")
        sql, params = qb.build()
        # "SELECT * FROM orders o WHERE o.id_company = ? AND o.order_date >= ?
        #  ORDER BY o.order_date DESC", [1, "2024-01-01"]
    """

    def __init__(self, base_sql: str, scope_column: str, scope_value: Any):
        if scope_value is None:
            raise ValueError(f"A value for {scope_column} is required")
        self._base_sql = base_sql.strip()
        self._conditions: list[str] = [f"{scope_column} = ?"]
        self._params: list[Any] = [scope_value]
        self._group_by: list[str] = []
        self._order_by: list[str] = []
        self._limit: Optional[int] = None

    # ── Predicates ────────────────────────────────────────

    def where_equals(self, column: str, value: Any) -> "QueryBuilder":
        """Exact match, applied only when `value` is not None."""
        if value is not None:
            self._add(f"{column} = ?", value)
        return self

    def where_contains(self, column: str, text: Optional[str]) -> "QueryBuilder":
        """
        Case-insensitive substring match, applied only when `text` is not blank.
        Both sides are lowered so the result does not depend on the store's collation.
        """
        if text is not None and text.strip():
            self._add(f"LOWER({column}) LIKE ? {LIKE_ESCAPE}", contains_pattern(text))
        return self

    def where_on_or_after(self, column: str, day: Optional[date]) -> "QueryBuilder":
        """Inclusive lower date bound, applied only when `day` is given."""
        if day is not None:
            self._add(f"{column} >= ?", format_date(day))
        return self

    def where_on_or_before(self, column: str, day: Optional[date]) -> "QueryBuilder":
        """Inclusive upper date bound, applied only when `day` is given."""
        if day is not None:
            self._add(f"{column} <= ?", format_date(day))
        return self

    # ── Shaping ───────────────────────────────────────────

    def group_by(self, *columns: str) -> "QueryBuilder":
        self._group_by.extend(columns)
        return self

    def order_by(self, *terms: str) -> "QueryBuilder":
        self._order_by.extend(terms)
        return self

    def limit(self, count: Optional[int]) -> "QueryBuilder":
        """Cap the number of rows; None removes the cap."""
        if count is not None and count < 0:
            raise ValueError(f"LIMIT must be non-negative, got {count}")
        self._limit = count
        return self

    # ── Output ────────────────────────────────────────────

    def build(self) -> tuple[str, list]:
        """
        Returns:
            (sql, params) with one parameter per `?` placeholder, in order.
        """
        parts = [self._base_sql, "WHERE " + " AND ".join(self._conditions)]
        params = list(self._params)
        if self._group_by:
            parts.append("GROUP BY " + ", ".join(self._group_by))
        if self._order_by:
            parts.append("ORDER BY " + ", ".join(self._order_by))
        if self._limit is not None:
            parts.append("LIMIT ?")
            params.append(self._limit)
        sql = " ".join(parts)
        logger.debug(f"Built query: {sql} | params={params}")
        return sql, params

    def _add(self, clause: str, value: Any) -> None:
        self._conditions.append(clause)
        self._params.append(value)
