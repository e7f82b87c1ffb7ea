"""
models/product.py
-----------------
Domain model for catalog products.
"""

from dataclasses import dataclass
from decimal import Decimal

from models import NEW_ID


@dataclass
class Product:
    """
    A sellable product. Products are deactivated, never removed, so that
    historical order lines keep pointing at them.

    Attributes:
        name: Product name.
        price: Unit price, non-negative.
        active: False once the product is withdrawn from sale.
        id: Database primary key (NEW_ID for new records).
    """
    name: str
    price: Decimal
    active: bool = True
    id: int = NEW_ID

    def __post_init__(self):
        if not isinstance(self.price, Decimal):
            self.price = Decimal(str(self.price))
        if self.price < 0:
            raise ValueError(f"Product price cannot be negative: {self.price}")
