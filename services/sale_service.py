"""
services/sale_service.py
------------------------
Business logic for registering sales.
An order and its lines are always written inside one transaction, so a
failure part-way leaves neither a header without lines nor stray lines.
"""

import asyncio
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from config import DEFAULT_COMPANY_NAME, DEFAULT_COMPANY_TAX_ID
from db.connection import Database
from models import NEW_ID
from models.company import Company
from models.order import Order, OrderLine
from repositories.base_repo import fetch_rows
from repositories.company_repo import CompanyRepository
from repositories.order_line_repo import OrderLineRepository
from repositories.order_repo import OrderRepository
from repositories.product_repo import ProductRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class SaleService:
    """
    Handles the write side of a sale.

    Responsibilities:
        - Create an order with all its lines atomically.
        - Add products to an existing order without duplicating lines.
        - Compute order totals from the lines.
        - Resolve the company sales are registered under.
    """

    def __init__(self, db: Database):
        self.db = db
        self.orders = OrderRepository(db)
        self.lines = OrderLineRepository(db)
        self.products = ProductRepository(db)
        self.companies = CompanyRepository(db)

    def register_sale(
        self,
        worker_id: int,
        client_id: int,
        company_id: int,
        items: Iterable[tuple[int, int]],
        order_date: Optional[date] = None,
    ) -> Order:
        """
        Persist a new order and its lines as a single unit.

        Args:
            worker_id: Worker registering the sale.
            client_id: Customer.
            company_id: Company the sale belongs to.
            items: (product_id, quantity) pairs. A product listed more than
                once becomes one line with the summed quantity.
            order_date: Defaults to today.

        Returns:
            The saved Order, with its id populated.

        Raises:
            ValueError: If there are no items, a quantity is not positive, or a
                product is unknown or inactive. Nothing is written.
            PersistenceError: On any store failure. Nothing is written.
        """
        merged = self._merge_items(items)
        if not merged:
            raise ValueError("A sale needs at least one product")

        order = Order(worker_id, client_id, company_id, order_date or date.today())
        try:
            with self.db.transaction():
                self.orders.save(order)
                for product_id, quantity in merged.items():
                    product = self.products.find_by_id(product_id)
                    if product is None or not product.active:
                        raise ValueError(f"Product #{product_id} is not available for sale")
                    self.lines.save(OrderLine(order.id, product_id, quantity))
        except Exception:
            order.id = NEW_ID
            raise
        logger.info(f"Registered order #{order.id} with {len(merged)} line(s)")
        return order

    async def register_sale_async(self, *args, **kwargs) -> Order:
        """`register_sale` run on a worker thread, for async callers."""
        return await asyncio.to_thread(self.register_sale, *args, **kwargs)

    def add_line(self, order_id: int, product_id: int, quantity: int) -> OrderLine:
        """
        Add units of a product to an order.
        If the product is already on the order its quantity is increased
        instead of inserting a second line.
        """
        if quantity <= 0:
            raise ValueError(f"Quantity must be positive, got {quantity}")
        with self.db.transaction():
            line = self.lines.find_by_order_and_product(order_id, product_id)
            if line is None:
                return self.lines.save(OrderLine(order_id, product_id, quantity))
            line.quantity += quantity
            self.lines.update(line)
            return line

    def replace_lines(self, order_id: int, items: Iterable[tuple[int, int]]) -> list[OrderLine]:
        """Clear an order's lines and write `items` in their place, atomically."""
        merged = self._merge_items(items)
        with self.db.transaction():
            self.lines.delete_by_order(order_id)
            return [self.lines.save(OrderLine(order_id, pid, qty)) for pid, qty in merged.items()]

    def clear_order(self, order_id: int) -> int:
        """Remove every line of an order. Returns the number removed."""
        return self.lines.delete_by_order(order_id)

    def order_total(self, order_id: int) -> Decimal:
        """Sum of quantity * unit price over the order's lines."""
        sql = """
            SELECT COALESCE(SUM(l.quantity * p.price), 0) AS total
            FROM order_line l
            INNER JOIN product p ON l.id_product = p.id_product
            WHERE l.id_order = ?
        """
        rows = fetch_rows(self.db, sql, order_id)
        return Decimal(str(rows[0]["total"])).quantize(Decimal("0.01"))

    def current_company(self) -> Company:
        """
        The company sales are registered under when none was chosen:
        the most recently created one, or a default company created on
        first use.
        """
        company = self.companies.find_latest()
        if company is None:
            company = self.companies.save(Company(DEFAULT_COMPANY_NAME, DEFAULT_COMPANY_TAX_ID))
            logger.info(f"No company registered; created default '{company.name}'")
        return company

    @staticmethod
    def _merge_items(items: Iterable[tuple[int, int]]) -> dict[int, int]:
        merged: dict[int, int] = {}
        for product_id, quantity in items:
            if quantity <= 0:
                raise ValueError(f"Quantity must be positive, got {quantity} for product #{product_id}")
            merged[product_id] = merged.get(product_id, 0) + quantity
        return merged
