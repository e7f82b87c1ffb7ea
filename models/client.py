"""
models/client.py
----------------
Domain model for customers.
"""

from dataclasses import dataclass
from typing import Optional

from models import NEW_ID


@dataclass
class Client:
    """
    A customer that sales are registered against.

    Attributes:
        full_name: Customer name.
        national_id: National ID document (DNI). Unique.
        phone: Optional phone number.
        email: Optional email.
        id: Database primary key (NEW_ID for new records).
    """
    full_name: str
    national_id: str
    phone: Optional[str] = None
    email: Optional[str] = None
    id: int = NEW_ID
