"""
repositories/sales_query_repo.py
--------------------------------
Multi-criteria sales search and top-seller aggregation.

Both queries are always scoped to one company; every other criterion is
optional and only narrows the result when supplied. Text criteria match
case-insensitively on any store.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from db.connection import Database
from models.report import SaleInfo, TopSeller
from repositories.base_repo import fetch_rows
from repositories.query_builder import QueryBuilder
from utils.logger import get_logger

logger = get_logger(__name__)

_SALES_BASE_SQL = """
    SELECT o.id_order, c.full_name AS client_name, w.full_name AS worker_name, o.order_date
    FROM orders o
    INNER JOIN client c ON o.id_client = c.id_client
    INNER JOIN worker w ON o.id_worker = w.id_worker
"""

_TOP_SELLERS_BASE_SQL = """
    SELECT p.name AS product_name,
           SUM(l.quantity) AS quantity_sold,
           SUM(l.quantity * p.price) AS amount_sold
    FROM orders o
    INNER JOIN order_line l ON o.id_order = l.id_order
    INNER JOIN product p ON l.id_product = p.id_product
"""


class SalesQueryRepository:
    """Read-only advanced queries over orders, lines, clients and workers."""

    def __init__(self, db: Database):
        self.db = db

    def search_sales(
        self,
        company_id: int,
        order_id: Optional[int] = None,
        client_name: Optional[str] = None,
        worker_name: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[SaleInfo]:
        """
        Find the company's sales matching every supplied criterion.

        Args:
            company_id: Company the sales belong to (required).
            order_id: Exact order id.
            client_name: Substring of the client's name; blank means "any".
            worker_name: Substring of the worker's name; blank means "any".
            date_from: Earliest order date (inclusive).
            date_to: Latest order date (inclusive).

        Returns:
            SaleInfo rows, most recent first.
        """
        qb = (
            QueryBuilder(_SALES_BASE_SQL, "o.id_company", company_id)
            .where_equals("o.id_order", order_id)
            .where_contains("c.full_name", client_name)
            .where_contains("w.full_name", worker_name)
            .where_on_or_after("o.order_date", date_from)
            .where_on_or_before("o.order_date", date_to)
            .order_by("o.order_date DESC", "o.id_order DESC")
        )
        sql, params = qb.build()
        rows = fetch_rows(self.db, sql, *params)
        logger.info(f"Sales search for company {company_id} returned {len(rows)} row(s)")
        return [
            SaleInfo(
                order_id=r["id_order"],
                client_name=r["client_name"],
                worker_name=r["worker_name"],
                order_date=date.fromisoformat(r["order_date"]),
            )
            for r in rows
        ]

    def top_sellers(
        self,
        company_id: int,
        worker_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> list[TopSeller]:
        """
        Rank products by units sold.

        Args:
            company_id: Company the sales belong to (required).
            worker_id: Only count sales registered by this worker.
            date_from: Earliest order date (inclusive).
            date_to: Latest order date (inclusive).
            limit: Maximum number of products; None returns all of them.

        Returns:
            TopSeller rows ordered by quantity sold, highest first. The amount
            is computed with each product's current price.
        """
        qb = (
            QueryBuilder(_TOP_SELLERS_BASE_SQL, "o.id_company", company_id)
            .where_equals("o.id_worker", worker_id)
            .where_on_or_after("o.order_date", date_from)
            .where_on_or_before("o.order_date", date_to)
            .group_by("p.id_product", "p.name")
            .order_by("quantity_sold DESC", "p.name")
            .limit(limit)
        )
        sql, params = qb.build()
        rows = fetch_rows(self.db, sql, *params)
        return [
            TopSeller(
                product_name=r["product_name"],
                quantity_sold=int(r["quantity_sold"]),
                amount_sold=Decimal(str(r["amount_sold"])).quantize(Decimal("0.01")),
            )
            for r in rows
        ]
