from datetime import date
from decimal import Decimal

import pytest

from db.errors import ConstraintViolation
from models.company import Company
from models.order import OrderLine
from models.product import Product
from models.worker import OWNER, STAFF, SUPERVISOR, Worker
from repositories.sales_query_repo import SalesQueryRepository


# ── Company ───────────────────────────────────────────────

def test_company_finders(repos, company):
    assert repos.companies.find_by_tax_id("20123456789") == company
    assert repos.companies.find_by_tax_id("0") is None
    assert repos.companies.find_by_name("gd") == [company]


def test_find_latest_company(repos):
    assert repos.companies.find_latest() is None
    repos.companies.save(Company("GDI", "20123456789"))
    newer = repos.companies.save(Company("Otra SAC", "20999999999"))
    assert repos.companies.find_latest() == newer


# ── Client ────────────────────────────────────────────────

def test_client_finders(repos, sales):
    assert repos.clients.find_by_national_id("22222222") == sales.beto
    assert repos.clients.find_by_national_id("33333333") is None
    assert repos.clients.find_by_name("RUIZ") == [sales.ana]
    assert repos.clients.find_by_name("zzz") == []


# ── Worker ────────────────────────────────────────────────

def test_worker_finders(repos, sales):
    assert repos.workers.find_by_national_id("70000002") == sales.maria
    assert repos.workers.find_by_name("paz") == [sales.luis]
    assert repos.workers.find_by_role(STAFF) == [sales.maria]
    assert repos.workers.find_by_role(SUPERVISOR) == []


def test_find_by_role_rejects_unknown_role(repos):
    with pytest.raises(ValueError):
        repos.workers.find_by_role("JEFE")


def test_owner_exists(repos):
    assert repos.workers.owner_exists() is False
    repos.workers.save(Worker("Maria Soto", "70000002", STAFF))
    assert repos.workers.owner_exists() is False
    repos.workers.save(Worker("Luis Paz", "70000001", OWNER))
    assert repos.workers.owner_exists() is True


def test_find_by_credentials(repos, sales):
    found = repos.workers.find_by_credentials("70000001", "luis123")
    assert found == sales.luis
    assert found.is_owner()
    assert repos.workers.find_by_credentials("70000001", "wrong") is None
    assert repos.workers.find_by_credentials("70000009", "luis123") is None


def test_secret_is_stored_hashed(repos, sales):
    rows = repos.workers.fetch_rows("SELECT national_id, secret_hash FROM worker ORDER BY id_worker")
    assert [r["national_id"] for r in rows] == ["70000001", "70000002"]
    for row, raw in zip(rows, ["luis123", "maria123"]):
        assert row["secret_hash"] != raw
        assert raw not in row["secret_hash"]


def test_secret_change_survives_update(repos, sales):
    luis = repos.workers.find_by_id(sales.luis.id)
    luis.set_secret("nueva-clave")
    repos.workers.update(luis)
    assert repos.workers.find_by_credentials("70000001", "luis123") is None
    assert repos.workers.find_by_credentials("70000001", "nueva-clave") == luis


def test_worker_without_secret_cannot_log_in(repos):
    repos.workers.save(Worker("Rosa Lima", "70000003", SUPERVISOR))
    assert repos.workers.find_by_credentials("70000003", "") is None
    assert repos.workers.find_by_credentials("70000003", "x") is None


def test_empty_secret_is_rejected():
    with pytest.raises(ValueError):
        Worker("Rosa Lima", "70000003", SUPERVISOR).set_secret("")


def test_invalid_role_is_rejected_by_the_store(repos):
    with pytest.raises(ConstraintViolation):
        repos.workers.save(Worker("X", "70000005", "JEFE"))


# ── Product ───────────────────────────────────────────────

def test_soft_deactivation_hides_product_from_active_lookups(repos, sales):
    assert repos.products.set_active(sales.pen.id, False) is True
    assert [p.name for p in repos.products.find_active()] == ["Cuaderno"]
    assert repos.products.find_active_by_name("lapi") == []
    # still visible to the catalog and to history
    assert [p.name for p in repos.products.find_by_name("lapi")] == ["Lapicero"]
    assert len(repos.lines.find_by_product(sales.pen.id)) == 2

    assert repos.products.set_active(sales.pen.id, True) is True
    assert [p.name for p in repos.products.find_active_by_name("LAPI")] == ["Lapicero"]


def test_set_active_on_missing_product(repos):
    assert repos.products.set_active(999, False) is False


def test_find_by_price_range_is_inclusive(repos):
    for name, price in [("A", "1.00"), ("B", "2.50"), ("C", "5.00"), ("D", "9.99")]:
        repos.products.save(Product(name, Decimal(price)))
    found = repos.products.find_by_price_range(Decimal("2.50"), Decimal("5.00"))
    assert [p.name for p in found] == ["B", "C"]


# ── Order ─────────────────────────────────────────────────

def test_order_finders(repos, sales):
    assert repos.orders.find_by_client(sales.ana.id) == [sales.order_c, sales.order_a]
    assert repos.orders.find_by_worker(sales.luis.id) == [sales.order_b, sales.order_a]
    assert repos.orders.find_by_company(sales.company.id) == [sales.order_b, sales.order_a]


def test_find_by_date_range_includes_both_bounds(repos, sales):
    found = repos.orders.find_by_date_range(date(2024, 1, 10), date(2024, 2, 5))
    assert found == [sales.order_b, sales.order_c, sales.order_a]
    assert repos.orders.find_by_date_range(date(2024, 1, 11), date(2024, 1, 14)) == []


# ── Order line ────────────────────────────────────────────

def test_order_line_finders(repos, sales):
    lines = repos.lines.find_by_order(sales.order_a.id)
    assert [(l.product_id, l.quantity) for l in lines] == [
        (sales.notebook.id, 3),
        (sales.pen.id, 1),
    ]
    line = repos.lines.find_by_order_and_product(sales.order_b.id, sales.pen.id)
    assert line.quantity == 5
    assert repos.lines.find_by_order_and_product(sales.order_b.id, sales.notebook.id) is None


def test_product_appears_once_per_order(repos, sales):
    with pytest.raises(ConstraintViolation):
        repos.lines.save(OrderLine(sales.order_a.id, sales.pen.id, 2))


def test_line_for_unknown_order_is_rejected(repos, sales):
    with pytest.raises(ConstraintViolation):
        repos.lines.save(OrderLine(999, sales.pen.id, 2))


def test_delete_by_order(repos, sales):
    assert repos.lines.delete_by_order(sales.order_a.id) == 2
    assert repos.lines.find_by_order(sales.order_a.id) == []
    assert len(repos.lines.find_by_order(sales.order_b.id)) == 1
    assert repos.lines.delete_by_order(sales.order_a.id) == 0


# ── Partial-name matching ─────────────────────────────────

def test_wildcards_in_search_text_match_literally(repos):
    for name in ["Ana", "Cuaderno 50% dcto", "Lapicero_azul", "Lapicero rojo"]:
        repos.products.save(Product(name, Decimal("1")))
    assert [p.name for p in repos.products.find_by_name("%")] == ["Cuaderno 50% dcto"]
    assert [p.name for p in repos.products.find_by_name("lapicero_")] == ["Lapicero_azul"]
    assert [p.name for p in repos.products.find_active_by_name("_")] == ["Lapicero_azul"]


def test_percent_does_not_match_every_client(repos, sales):
    assert repos.clients.find_by_name("%") == []
    assert repos.workers.find_by_name("_") == []
    assert repos.companies.find_by_name("%") == []


def test_sales_search_treats_wildcards_literally(db, sales):
    assert SalesQueryRepository(db).search_sales(sales.company.id, client_name="%") == []
