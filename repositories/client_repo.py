"""
repositories/client_repo.py
---------------------------
Data access layer for customers.
"""

from typing import Optional

from db.connection import Database
from models.client import Client
from repositories.base_repo import EntityMapper, Repository
from repositories.query_builder import contains_pattern


def _row_to_client(row: dict) -> Client:
    return Client(
        id=row["id_client"],
        full_name=row["full_name"],
        national_id=row["national_id"],
        phone=row["phone"],
        email=row["email"],
    )


CLIENT_MAPPER = EntityMapper(
    table="client",
    id_column="id_client",
    insert_sql="INSERT INTO client (full_name, national_id, phone, email) VALUES (?, ?, ?, ?)",
    update_sql=(
        "UPDATE client SET full_name = ?, national_id = ?, phone = ?, email = ? "
        "WHERE id_client = ?"
    ),
    from_row=_row_to_client,
    insert_params=lambda c: (c.full_name, c.national_id, c.phone, c.email),
)


class ClientRepository(Repository[Client]):
    """Repository for CRUD operations on the client table."""

    def __init__(self, db: Database):
        super().__init__(db, CLIENT_MAPPER)

    def find_by_national_id(self, national_id: str) -> Optional[Client]:
        """
        Fetch a client by national ID.

        Useful to reject duplicates before an insert; the UNIQUE constraint
        remains the real guarantee.
        """
        sql = "SELECT * FROM client WHERE national_id = ?"
        return self.execute_query_for_single_result(sql, national_id)

    def find_by_name(self, name: str) -> list[Client]:
        """Clients whose name contains `name` (case-insensitive)."""
        sql = "SELECT * FROM client WHERE LOWER(full_name) LIKE ? ESCAPE '\\' ORDER BY full_name"
        return self.execute_query(sql, contains_pattern(name))
