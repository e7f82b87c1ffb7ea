"""
services/export_service.py
---------------------------
Generates CSV and Excel exports of sales data.
"""

import io
from datetime import date, timedelta
from pathlib import Path
from typing import Optional

import pandas as pd
from dateutil.relativedelta import relativedelta

from config import EXPORT_DIR
from db.connection import Database
from repositories.sales_query_repo import SalesQueryRepository
from utils.logger import get_logger

logger = get_logger(__name__)

SALES_COLUMNS = ["Order", "Date", "Client", "Worker"]
TOP_SELLER_COLUMNS = ["Product", "Quantity", "Amount"]


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of a month."""
    start = date(year, month, 1)
    end = start + relativedelta(months=1) - timedelta(days=1)
    return start, end


class ExportService:
    """Turns sales searches and top-seller rankings into downloadable files."""

    def __init__(self, db: Database):
        self.repo = SalesQueryRepository(db)

    def sales_frame(self, company_id: int, **filters) -> pd.DataFrame:
        """
        Sales search results as a DataFrame.

        Args:
            company_id: Company the sales belong to.
            **filters: Any keyword accepted by SalesQueryRepository.search_sales.
        """
        sales = self.repo.search_sales(company_id, **filters)
        data = [
            [s.order_id, s.order_date.isoformat(), s.client_name, s.worker_name]
            for s in sales
        ]
        return pd.DataFrame(data, columns=SALES_COLUMNS)

    def top_sellers_frame(
        self,
        company_id: int,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> pd.DataFrame:
        rows = self.repo.top_sellers(company_id, date_from=date_from, date_to=date_to, limit=limit)
        data = [[r.product_name, r.quantity_sold, float(r.amount_sold)] for r in rows]
        return pd.DataFrame(data, columns=TOP_SELLER_COLUMNS)

    def export_sales_csv(self, company_id: int, **filters) -> io.BytesIO:
        """
        Export matching sales as a CSV file.

        Returns:
            A BytesIO buffer containing the CSV data (UTF-8 with BOM, for Excel).
        """
        df = self.sales_frame(company_id, **filters)
        buffer = io.BytesIO()
        df.to_csv(buffer, index=False, encoding="utf-8-sig")
        buffer.seek(0)
        logger.info(f"Exported {len(df)} sales as CSV for company {company_id}")
        return buffer

    def export_month_excel(self, company_id: int, year: int, month: int) -> io.BytesIO:
        """
        Export a month's sales as an Excel (.xlsx) workbook with two sheets:
        the sales list and the product ranking for the same period.

        Returns:
            A BytesIO buffer containing the Excel data.
        """
        start, end = month_bounds(year, month)
        sales = self.sales_frame(company_id, date_from=start, date_to=end)
        ranking = self.top_sellers_frame(company_id, date_from=start, date_to=end)

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            sales.to_excel(writer, sheet_name="Sales", index=False)
            ranking.to_excel(writer, sheet_name="Top products", index=False)

        buffer.seek(0)
        logger.info(
            f"Exported {len(sales)} sales for {year}-{month:02d} as Excel for company {company_id}"
        )
        return buffer

    @staticmethod
    def save(buffer: io.BytesIO, filename: str, directory: Optional[str] = None) -> Path:
        """Write an export buffer to `directory` (EXPORT_DIR by default)."""
        target_dir = Path(directory or EXPORT_DIR)
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / filename
        path.write_bytes(buffer.getvalue())
        logger.info(f"Saved export to {path}")
        return path
