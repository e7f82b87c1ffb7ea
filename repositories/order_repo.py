"""
repositories/order_repo.py
--------------------------
Data access layer for sale headers.
Dates are persisted as YYYY-MM-DD text so that text and calendar order agree.
"""

from datetime import date

from db.connection import Database
from models.order import Order
from repositories.base_repo import EntityMapper, Repository
from repositories.query_builder import format_date


def _row_to_order(row: dict) -> Order:
    return Order(
        id=row["id_order"],
        worker_id=row["id_worker"],
        client_id=row["id_client"],
        company_id=row["id_company"],
        order_date=date.fromisoformat(row["order_date"]),
    )


def _order_params(order: Order) -> tuple:
    return (order.worker_id, order.client_id, order.company_id, format_date(order.order_date))


ORDER_MAPPER = EntityMapper(
    table="orders",
    id_column="id_order",
    insert_sql=(
        "INSERT INTO orders (id_worker, id_client, id_company, order_date) "
        "VALUES (?, ?, ?, ?)"
    ),
    update_sql=(
        "UPDATE orders SET id_worker = ?, id_client = ?, id_company = ?, order_date = ? "
        "WHERE id_order = ?"
    ),
    from_row=_row_to_order,
    insert_params=_order_params,
)


class OrderRepository(Repository[Order]):
    """Repository for CRUD operations on the orders table."""

    def __init__(self, db: Database):
        super().__init__(db, ORDER_MAPPER)

    def find_by_client(self, client_id: int) -> list[Order]:
        sql = "SELECT * FROM orders WHERE id_client = ? ORDER BY order_date DESC, id_order DESC"
        return self.execute_query(sql, client_id)

    def find_by_worker(self, worker_id: int) -> list[Order]:
        sql = "SELECT * FROM orders WHERE id_worker = ? ORDER BY order_date DESC, id_order DESC"
        return self.execute_query(sql, worker_id)

    def find_by_company(self, company_id: int) -> list[Order]:
        sql = "SELECT * FROM orders WHERE id_company = ? ORDER BY order_date DESC, id_order DESC"
        return self.execute_query(sql, company_id)

    def find_by_date_range(self, start: date, end: date) -> list[Order]:
        """
        Orders dated within a range.

        Args:
            start: Start date (inclusive).
            end: End date (inclusive).
        """
        sql = (
            "SELECT * FROM orders WHERE order_date BETWEEN ? AND ? "
            "ORDER BY order_date DESC, id_order DESC"
        )
        return self.execute_query(sql, format_date(start), format_date(end))
