"""
models/company.py
-----------------
Domain model for the business that owns the sales (the tenant).
"""

from dataclasses import dataclass
from typing import Optional

from models import NEW_ID


@dataclass
class Company:
    """
    A company registered in the system. Every order belongs to exactly one.

    Attributes:
        name: Trade name.
        tax_id: Tax identification number (RUC). Unique together with `name`.
        email: Optional contact email.
        location: Optional address.
        logo_path: Optional path to the logo image shown on receipts.
        id: Database primary key (NEW_ID for new records).
    """
    name: str
    tax_id: str
    email: Optional[str] = None
    location: Optional[str] = None
    logo_path: Optional[str] = None
    id: int = NEW_ID

    def __str__(self) -> str:
        return f"{self.name} ({self.tax_id})"
