"""
models/worker.py
----------------
Domain model for the staff who register sales.
"""

from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from models import NEW_ID

OWNER = "OWNER"
SUPERVISOR = "SUPERVISOR"
STAFF = "STAFF"
ROLES = (OWNER, SUPERVISOR, STAFF)


@dataclass
class Worker:
    """
    A person allowed to log in and register sales.

    Attributes:
        full_name: Worker name.
        national_id: National ID document (DNI). Unique, doubles as the login user.
        role: One of ROLES.
        font: Optional UI font preference, e.g. "Arial 12".
        background_color: Optional UI background color, e.g. "#FFFFFF".
        secret_hash: Salted hash of the login secret; the raw secret is never stored.
        id: Database primary key (NEW_ID for new records).
    """
    full_name: str
    national_id: str
    role: str  # 'OWNER' | 'SUPERVISOR' | 'STAFF'
    font: Optional[str] = None
    background_color: Optional[str] = None
    secret_hash: Optional[str] = None
    id: int = NEW_ID

    def is_owner(self) -> bool:
        return self.role == OWNER

    def set_secret(self, secret: str) -> None:
        if not secret or not isinstance(secret, str):
            raise ValueError("secret required")
        self.secret_hash = generate_password_hash(secret)

    def check_secret(self, secret: str) -> bool:
        return bool(self.secret_hash) and check_password_hash(self.secret_hash, secret or "")

    def __str__(self) -> str:
        return f"{self.role}: {self.full_name}"
