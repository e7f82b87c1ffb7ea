"""
repositories/worker_repo.py
---------------------------
Data access layer for workers (the users of the system).
"""

from typing import Optional

from db.connection import Database
from models.worker import OWNER, ROLES, Worker
from repositories.base_repo import EntityMapper, Repository
from repositories.query_builder import contains_pattern


def _row_to_worker(row: dict) -> Worker:
    return Worker(
        id=row["id_worker"],
        full_name=row["full_name"],
        national_id=row["national_id"],
        role=row["role"],
        font=row["font"],
        background_color=row["background_color"],
        secret_hash=row["secret_hash"],
    )


def _worker_params(w: Worker) -> tuple:
    return (w.full_name, w.national_id, w.role, w.font, w.background_color, w.secret_hash)


WORKER_MAPPER = EntityMapper(
    table="worker",
    id_column="id_worker",
    insert_sql=(
        "INSERT INTO worker (full_name, national_id, role, font, background_color, secret_hash) "
        "VALUES (?, ?, ?, ?, ?, ?)"
    ),
    update_sql=(
        "UPDATE worker SET full_name = ?, national_id = ?, role = ?, "
        "font = ?, background_color = ?, secret_hash = ? WHERE id_worker = ?"
    ),
    from_row=_row_to_worker,
    insert_params=_worker_params,
)


class WorkerRepository(Repository[Worker]):
    """Repository for CRUD operations on the worker table."""

    def __init__(self, db: Database):
        super().__init__(db, WORKER_MAPPER)

    def find_by_national_id(self, national_id: str) -> Optional[Worker]:
        sql = "SELECT * FROM worker WHERE national_id = ?"
        return self.execute_query_for_single_result(sql, national_id)

    def find_by_name(self, name: str) -> list[Worker]:
        """Workers whose name contains `name` (case-insensitive)."""
        sql = "SELECT * FROM worker WHERE LOWER(full_name) LIKE ? ESCAPE '\\' ORDER BY full_name"
        return self.execute_query(sql, contains_pattern(name))

    def find_by_role(self, role: str) -> list[Worker]:
        if role not in ROLES:
            raise ValueError(f"Unknown role {role!r}; expected one of {ROLES}")
        sql = "SELECT * FROM worker WHERE role = ? ORDER BY id_worker"
        return self.execute_query(sql, role)

    def owner_exists(self) -> bool:
        """
        True if at least one worker holds the OWNER role.
        Used on first login to decide whether an owner account must be created.
        """
        sql = "SELECT * FROM worker WHERE role = ? LIMIT 1"
        return self.execute_query_for_single_result(sql, OWNER) is not None

    def find_by_credentials(self, national_id: str, secret: str) -> Optional[Worker]:
        """
        Fetch the worker matching a login pair, or None.
        The secret is checked against the stored hash, never compared in SQL.
        """
        worker = self.find_by_national_id(national_id)
        if worker is None or not worker.check_secret(secret):
            return None
        return worker
