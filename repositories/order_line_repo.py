"""
repositories/order_line_repo.py
-------------------------------
Data access layer for order lines (products and quantities of a sale).
There is no cascade from orders: lines are cleared explicitly with
`delete_by_order`.
"""

from typing import Optional

from db.connection import Database
from models.order import OrderLine
from repositories.base_repo import EntityMapper, Repository
from utils.logger import get_logger

logger = get_logger(__name__)


def _row_to_line(row: dict) -> OrderLine:
    return OrderLine(
        id=row["id_order_line"],
        order_id=row["id_order"],
        product_id=row["id_product"],
        quantity=row["quantity"],
    )


ORDER_LINE_MAPPER = EntityMapper(
    table="order_line",
    id_column="id_order_line",
    insert_sql="INSERT INTO order_line (id_order, id_product, quantity) VALUES (?, ?, ?)",
    update_sql=(
        "UPDATE order_line SET id_order = ?, id_product = ?, quantity = ? "
        "WHERE id_order_line = ?"
    ),
    from_row=_row_to_line,
    insert_params=lambda line: (line.order_id, line.product_id, line.quantity),
)


class OrderLineRepository(Repository[OrderLine]):
    """Repository for CRUD operations on the order_line table."""

    def __init__(self, db: Database):
        super().__init__(db, ORDER_LINE_MAPPER)

    def find_by_order(self, order_id: int) -> list[OrderLine]:
        """Every line of an order, in insertion order."""
        sql = "SELECT * FROM order_line WHERE id_order = ? ORDER BY id_order_line"
        return self.execute_query(sql, order_id)

    def find_by_product(self, product_id: int) -> list[OrderLine]:
        """Every line that sold a product, across all orders."""
        sql = "SELECT * FROM order_line WHERE id_product = ? ORDER BY id_order_line"
        return self.execute_query(sql, product_id)

    def find_by_order_and_product(self, order_id: int, product_id: int) -> Optional[OrderLine]:
        sql = "SELECT * FROM order_line WHERE id_order = ? AND id_product = ?"
        return self.execute_query_for_single_result(sql, order_id, product_id)

    def delete_by_order(self, order_id: int) -> int:
        """
        Remove every line of an order.

        Returns:
            Number of lines deleted.
        """
        sql = "DELETE FROM order_line WHERE id_order = ?"
        deleted = self.execute_update(sql, order_id)
        logger.info(f"Cleared {deleted} line(s) of order #{order_id}")
        return deleted
