"""
repositories/base_repo.py
-------------------------
Generic CRUD engine shared by every concrete repository.

A `Repository[T]` is parameterized by an `EntityMapper[T]`: the table identity,
the INSERT/UPDATE templates and the functions converting between rows and
entities. Every entry point (CRUD or custom finder) maps rows through the same
mapper, so each entity has exactly one mapping implementation.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

from db.connection import Database, rows_as_dicts
from db.errors import NotFound, PersistenceError, UnsupportedParameterType
from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

_PASS_THROUGH = (bool, int, float, str)


def bind_param(value: Any) -> Any:
    """
    Validate one SQL parameter and convert it to a driver-native value.

    Supported: None, bool, int, float, str and Decimal (bound as float).

    Raises:
        UnsupportedParameterType: For any other type. Dates, bytes, lists and
            the like must be converted by the caller (mappers do this).
    """
    if value is None or isinstance(value, _PASS_THROUGH):
        return value
    if isinstance(value, Decimal):
        return float(value)
    raise UnsupportedParameterType(
        f"Unsupported SQL parameter type: {type(value).__name__} ({value!r})"
    )


def bind_params(values: Iterable[Any]) -> tuple:
    """Bind every value of a positional parameter list."""
    return tuple(bind_param(v) for v in values)


def fetch_rows(db: Database, sql: str, *params: Any) -> list[dict]:
    """
    Run a parameterized SELECT through the binder and return raw rows as dicts.
    Shared by the repositories and by report queries that map to non-entity rows.
    """
    bound = bind_params(params)
    try:
        with db.cursor() as cur:
            cur.execute(db.prepare(sql), bound)
            return rows_as_dicts(cur)
    except PersistenceError as e:
        logger.error(f"Query failed: {e} | sql={sql}")
        raise


def _assign_id(entity: Any, new_id: int) -> None:
    entity.id = new_id


@dataclass(frozen=True)
class EntityMapper(Generic[T]):
    """
    Everything the generic engine needs to know about one entity.

    Attributes:
        table: Table name.
        id_column: Primary key column.
        insert_sql: INSERT over every non-identity column, `?` placeholders.
        update_sql: UPDATE of the same columns with `WHERE <id_column> = ?` last.
        from_row: Builds an entity from a column-name keyed row.
        insert_params: Positional values for `insert_sql`.
        update_params: Positional values for `update_sql`. Defaults to
            `insert_params` followed by the entity id.
        assign_id: Stores the generated key on a freshly inserted entity.
    """
    table: str
    id_column: str
    insert_sql: str
    update_sql: str
    from_row: Callable[[dict], T]
    insert_params: Callable[[T], tuple]
    update_params: Optional[Callable[[T], tuple]] = None
    assign_id: Callable[[T, int], None] = _assign_id

    def params_for_update(self, entity: T) -> tuple:
        if self.update_params is not None:
            return self.update_params(entity)
        return tuple(self.insert_params(entity)) + (entity.id,)


class Repository(Generic[T]):
    """Generic CRUD operations over the table described by `mapper`."""

    def __init__(self, db: Database, mapper: EntityMapper[T]):
        self.db = db
        self.mapper = mapper

    # ── CREATE ────────────────────────────────────────────

    def save(self, entity: T) -> T:
        """
        Insert a new row built from the entity's non-identity fields.

        Returns:
            The same entity with its generated `id` populated.

        Raises:
            ConstraintViolation: On a UNIQUE or FOREIGN KEY failure.
        """
        params = bind_params(self.mapper.insert_params(entity))
        sql = self.mapper.insert_sql
        returning = self.db.dialect == "postgresql"
        if returning:
            sql = f"{sql} RETURNING {self.mapper.id_column}"
        try:
            with self.db.cursor() as cur:
                cur.execute(self.db.prepare(sql), params)
                new_id = cur.fetchone()[0] if returning else cur.lastrowid
        except PersistenceError as e:
            logger.error(f"Failed to save into {self.mapper.table}: {e}")
            raise
        self.mapper.assign_id(entity, new_id)
        logger.info(f"Saved {self.mapper.table} #{new_id}")
        return entity

    # ── READ ──────────────────────────────────────────────

    def find_by_id(self, entity_id: int) -> Optional[T]:
        """Fetch one entity by primary key, or None if it does not exist."""
        sql = f"SELECT * FROM {self.mapper.table} WHERE {self.mapper.id_column} = ?"
        return self.execute_query_for_single_result(sql, entity_id)

    def find_all(self) -> list[T]:
        """Fetch every row of the table, ordered by primary key."""
        sql = f"SELECT * FROM {self.mapper.table} ORDER BY {self.mapper.id_column}"
        return self.execute_query(sql)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, entity: T) -> None:
        """
        Replace every column of the row identified by `entity.id`.

        Raises:
            NotFound: If no row has that id.
            ConstraintViolation: On a UNIQUE or FOREIGN KEY failure.
        """
        params = bind_params(self.mapper.params_for_update(entity))
        try:
            with self.db.cursor() as cur:
                cur.execute(self.db.prepare(self.mapper.update_sql), params)
                updated = cur.rowcount
        except PersistenceError as e:
            logger.error(f"Failed to update {self.mapper.table} #{entity.id}: {e}")
            raise
        if updated == 0:
            raise NotFound(f"No {self.mapper.table} row with id {entity.id}")

    # ── DELETE ────────────────────────────────────────────

    def delete(self, entity_id: int) -> None:
        """Delete a row by primary key. Deleting a missing id is a no-op."""
        sql = f"DELETE FROM {self.mapper.table} WHERE {self.mapper.id_column} = ?"
        deleted = self.execute_update(sql, entity_id)
        if deleted:
            logger.info(f"Deleted {self.mapper.table} #{entity_id}")

    # ── CUSTOM QUERIES ────────────────────────────────────

    def execute_query(self, sql: str, *params: Any) -> list[T]:
        """Run a parameterized SELECT and map every row through the mapper."""
        return [self.mapper.from_row(row) for row in self.fetch_rows(sql, *params)]

    def execute_query_for_single_result(self, sql: str, *params: Any) -> Optional[T]:
        """Run a parameterized SELECT and return its first mapped row, if any."""
        results = self.execute_query(sql, *params)
        return results[0] if results else None

    def execute_update(self, sql: str, *params: Any) -> int:
        """
        Run a parameterized INSERT/UPDATE/DELETE.

        Returns:
            The number of affected rows.
        """
        bound = bind_params(params)
        try:
            with self.db.cursor() as cur:
                cur.execute(self.db.prepare(sql), bound)
                return cur.rowcount
        except PersistenceError as e:
            logger.error(f"Failed to execute statement on {self.mapper.table}: {e}")
            raise

    def fetch_rows(self, sql: str, *params: Any) -> list[dict]:
        """Run a parameterized SELECT and return raw rows as dicts."""
        return fetch_rows(self.db, sql, *params)
