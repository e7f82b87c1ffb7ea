"""
repositories/product_repo.py
----------------------------
Data access layer for the product catalog.
Products are never hard-deleted by the application; `set_active(False)`
withdraws them from sale while keeping historical order lines intact.
"""

from decimal import Decimal

from db.connection import Database
from models.product import Product
from repositories.base_repo import EntityMapper, Repository
from repositories.query_builder import contains_pattern


def _row_to_product(row: dict) -> Product:
    return Product(
        id=row["id_product"],
        name=row["name"],
        # REAL (SQLite) comes back as float, NUMERIC (PostgreSQL) as Decimal
        price=Decimal(str(row["price"])),
        active=bool(row["active"]),
    )


PRODUCT_MAPPER = EntityMapper(
    table="product",
    id_column="id_product",
    insert_sql="INSERT INTO product (name, price, active) VALUES (?, ?, ?)",
    update_sql="UPDATE product SET name = ?, price = ?, active = ? WHERE id_product = ?",
    from_row=_row_to_product,
    insert_params=lambda p: (p.name, p.price, p.active),
)


class ProductRepository(Repository[Product]):
    """Repository for CRUD operations on the product table."""

    def __init__(self, db: Database):
        super().__init__(db, PRODUCT_MAPPER)

    # ── READ ──────────────────────────────────────────────

    def find_by_name(self, name: str) -> list[Product]:
        """Products (active or not) whose name contains `name`."""
        sql = "SELECT * FROM product WHERE LOWER(name) LIKE ? ESCAPE '\\' ORDER BY name"
        return self.execute_query(sql, contains_pattern(name))

    def find_active(self) -> list[Product]:
        sql = "SELECT * FROM product WHERE active = TRUE ORDER BY name"
        return self.execute_query(sql)

    def find_active_by_name(self, name: str) -> list[Product]:
        """Active products whose name contains `name`; the sale form's lookup."""
        sql = "SELECT * FROM product WHERE LOWER(name) LIKE ? ESCAPE '\\' AND active = TRUE ORDER BY name"
        return self.execute_query(sql, contains_pattern(name))

    def find_by_price_range(self, min_price: Decimal, max_price: Decimal) -> list[Product]:
        """Products priced within [min_price, max_price]."""
        sql = "SELECT * FROM product WHERE price BETWEEN ? AND ? ORDER BY price, name"
        return self.execute_query(sql, min_price, max_price)

    # ── UPDATE ────────────────────────────────────────────

    def set_active(self, product_id: int, active: bool) -> bool:
        """
        Activate or deactivate a product.

        Returns:
            True if the product exists.
        """
        sql = "UPDATE product SET active = ? WHERE id_product = ?"
        return self.execute_update(sql, bool(active), product_id) > 0
