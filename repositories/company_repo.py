"""
repositories/company_repo.py
----------------------------
Data access layer for companies (tenants).
"""

from typing import Optional

from db.connection import Database
from models.company import Company
from repositories.base_repo import EntityMapper, Repository
from repositories.query_builder import contains_pattern


def _row_to_company(row: dict) -> Company:
    """Convert a database row to a Company domain object."""
    return Company(
        id=row["id_company"],
        name=row["name"],
        tax_id=row["tax_id"],
        email=row["email"],
        location=row["location"],
        logo_path=row["logo_path"],
    )


def _company_params(company: Company) -> tuple:
    return (company.name, company.tax_id, company.email, company.location, company.logo_path)


COMPANY_MAPPER = EntityMapper(
    table="company",
    id_column="id_company",
    insert_sql=(
        "INSERT INTO company (name, tax_id, email, location, logo_path) "
        "VALUES (?, ?, ?, ?, ?)"
    ),
    update_sql=(
        "UPDATE company SET name = ?, tax_id = ?, email = ?, location = ?, logo_path = ? "
        "WHERE id_company = ?"
    ),
    from_row=_row_to_company,
    insert_params=_company_params,
)


class CompanyRepository(Repository[Company]):
    """Repository for CRUD operations on the company table."""

    def __init__(self, db: Database):
        super().__init__(db, COMPANY_MAPPER)

    def find_by_tax_id(self, tax_id: str) -> Optional[Company]:
        """Fetch the first company registered with a tax id."""
        sql = "SELECT * FROM company WHERE tax_id = ? ORDER BY id_company"
        return self.execute_query_for_single_result(sql, tax_id)

    def find_by_name(self, name: str) -> list[Company]:
        """Companies whose name contains `name` (case-insensitive)."""
        sql = "SELECT * FROM company WHERE LOWER(name) LIKE ? ESCAPE '\\' ORDER BY id_company"
        return self.execute_query(sql, contains_pattern(name))

    def find_latest(self) -> Optional[Company]:
        """
        The most recently inserted company.
        Used as the default tenant when none has been selected explicitly.
        """
        sql = "SELECT * FROM company ORDER BY id_company DESC LIMIT 1"
        return self.execute_query_for_single_result(sql)
