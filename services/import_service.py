"""
services/import_service.py
--------------------------
Bulk import of clients, products and workers from CSV spreadsheets.

Each valid row is saved on its own, so one bad row never blocks the rest.
Rows with missing required fields, unparseable prices, unknown roles or an
already-registered national ID are skipped and reported.
"""

import io
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional, Union

import pandas as pd

from db.connection import Database
from db.errors import ConstraintViolation
from models.client import Client
from models.product import Product
from models.worker import OWNER, STAFF, SUPERVISOR, Worker
from repositories.base_repo import Repository
from repositories.client_repo import ClientRepository
from repositories.product_repo import ProductRepository
from repositories.worker_repo import WorkerRepository
from utils.logger import get_logger

logger = get_logger(__name__)

Source = Union[str, io.IOBase]

# Spreadsheets in the field use the Spanish job titles.
_ROLE_ALIASES = {
    "JEFE": OWNER,
    "OWNER": OWNER,
    "SUPERVISOR": SUPERVISOR,
    "TRABAJADOR": STAFF,
    "STAFF": STAFF,
}


@dataclass
class ImportResult:
    """Outcome of one import: how many rows were saved and why others were not."""
    imported: int = 0
    skipped: int = 0
    messages: list[str] = field(default_factory=list)

    def skip(self, row_number: int, reason: str) -> None:
        self.skipped += 1
        self.messages.append(f"Row {row_number} skipped: {reason}")


class ImportService:
    """Reads CSV files with pandas and persists their rows via the repositories."""

    def __init__(self, db: Database):
        self.clients = ClientRepository(db)
        self.products = ProductRepository(db)
        self.workers = WorkerRepository(db)

    # ── Public API ────────────────────────────────────────

    def import_clients(self, source: Source) -> ImportResult:
        """Columns: nombre, dni (required); telefono, email (optional)."""
        df = self._read(source, required=("nombre", "dni"))

        def build(row: dict, result: ImportResult, n: int) -> Optional[Client]:
            if self.clients.find_by_national_id(row["dni"]) is not None:
                result.skip(n, f"client with DNI {row['dni']} already exists")
                return None
            return Client(
                full_name=row["nombre"],
                national_id=row["dni"],
                phone=row.get("telefono") or None,
                email=row.get("email") or None,
            )

        return self._import(df, ("nombre", "dni"), build, self.clients)

    def import_products(self, source: Source) -> ImportResult:
        """Columns: nombre, precio (required). Prices must be greater than zero."""
        df = self._read(source, required=("nombre", "precio"))

        def build(row: dict, result: ImportResult, n: int) -> Optional[Product]:
            try:
                price = Decimal(row["precio"].replace(",", "."))
            except InvalidOperation:
                result.skip(n, f"invalid price '{row['precio']}'")
                return None
            if not price.is_finite() or price <= 0:
                result.skip(n, "price must be greater than 0")
                return None
            return Product(name=row["nombre"], price=price)

        return self._import(df, ("nombre", "precio"), build, self.products)

    def import_workers(self, source: Source) -> ImportResult:
        """
        Columns: nombre, dni, puesto (required);
        'tipo de letra', 'color de fondo' (optional UI preferences).
        """
        df = self._read(source, required=("nombre", "dni", "puesto"))

        def build(row: dict, result: ImportResult, n: int) -> Optional[Worker]:
            role = _ROLE_ALIASES.get(row["puesto"].upper())
            if role is None:
                result.skip(n, f"invalid role '{row['puesto']}'")
                return None
            if self.workers.find_by_national_id(row["dni"]) is not None:
                result.skip(n, f"worker with DNI {row['dni']} already exists")
                return None
            return Worker(
                full_name=row["nombre"],
                national_id=row["dni"],
                role=role,
                font=row.get("tipo de letra") or None,
                background_color=row.get("color de fondo") or None,
            )

        return self._import(df, ("nombre", "dni", "puesto"), build, self.workers)

    # ── Helpers ───────────────────────────────────────────

    @staticmethod
    def _read(source: Source, required: tuple[str, ...]) -> pd.DataFrame:
        """
        Load a CSV as strings with normalized (trimmed, lower-case) headers.
        `utf-8-sig` drops the BOM Excel prepends to the first header.

        Raises:
            ValueError: If a required column is missing.
        """
        df = pd.read_csv(source, dtype=str, keep_default_na=False, encoding="utf-8-sig")
        df.columns = [str(c).strip().lower() for c in df.columns]
        missing = [c for c in required if c not in df.columns]
        if missing:
            raise ValueError(f"Missing required column(s): {', '.join(missing)}")
        for column in df.columns:
            df[column] = df[column].str.strip()
        return df

    @staticmethod
    def _import(
        df: pd.DataFrame,
        required: tuple[str, ...],
        build: Callable[[dict, ImportResult, int], object],
        repo: Repository,
    ) -> ImportResult:
        result = ImportResult()
        for index, row in enumerate(df.to_dict(orient="records")):
            row_number = index + 2  # header is line 1
            if any(not row[c] for c in required):
                result.skip(row_number, "required fields are empty")
                continue
            entity = build(row, result, row_number)
            if entity is None:
                continue
            try:
                repo.save(entity)
                result.imported += 1
            except ConstraintViolation as e:
                result.skip(row_number, str(e))
        logger.info(
            f"Imported {result.imported} {repo.mapper.table} row(s), skipped {result.skipped}"
        )
        return result
