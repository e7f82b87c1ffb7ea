"""
models/report.py
----------------
Read-only rows produced by the advanced sales queries.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class SaleInfo:
    """One row of the sales search: an order with its client and worker names."""
    order_id: int
    client_name: str
    worker_name: str
    order_date: date


@dataclass(frozen=True)
class TopSeller:
    """
    Aggregated sales of one product.

    Attributes:
        product_name: Product name.
        quantity_sold: Sum of quantities over the matching order lines.
        amount_sold: Sum of quantity * current unit price.
    """
    product_name: str
    quantity_sold: int
    amount_sold: Decimal
