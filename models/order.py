"""
models/order.py
---------------
Domain models for sale headers and their line items.
"""

from dataclasses import dataclass, field
from datetime import date

from models import NEW_ID


@dataclass
class Order:
    """
    A sale header. The monetary total is not stored; it is derived from lines.

    Attributes:
        worker_id: Worker who registered the sale.
        client_id: Customer the sale was made to.
        company_id: Company (tenant) the sale belongs to.
        order_date: Calendar date of the sale.
        id: Database primary key (NEW_ID for new records).
    """
    worker_id: int
    client_id: int
    company_id: int
    order_date: date = field(default_factory=date.today)
    id: int = NEW_ID


@dataclass
class OrderLine:
    """
    One product inside an order. (order_id, product_id) is unique.

    Attributes:
        order_id: Parent order.
        product_id: Product sold.
        quantity: Units sold, always positive.
        id: Database primary key (NEW_ID for new records).
    """
    order_id: int
    product_id: int
    quantity: int
    id: int = NEW_ID

    def __post_init__(self):
        if self.quantity <= 0:
            raise ValueError(f"Quantity must be positive, got {self.quantity}")
