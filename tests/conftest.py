import sqlite3
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from db.connection import Database
from db.init_db import create_tables
from models.client import Client
from models.company import Company
from models.order import Order, OrderLine
from models.product import Product
from models.worker import OWNER, STAFF, Worker
from repositories.client_repo import ClientRepository
from repositories.company_repo import CompanyRepository
from repositories.order_line_repo import OrderLineRepository
from repositories.order_repo import OrderRepository
from repositories.product_repo import ProductRepository
from repositories.worker_repo import WorkerRepository


@pytest.fixture
def db():
    conn = sqlite3.connect(":memory:", check_same_thread=False)
    database = Database(conn, sqlite3)
    create_tables(database)
    yield database
    database.close()


@pytest.fixture
def repos(db):
    return SimpleNamespace(
        companies=CompanyRepository(db),
        clients=ClientRepository(db),
        workers=WorkerRepository(db),
        products=ProductRepository(db),
        orders=OrderRepository(db),
        lines=OrderLineRepository(db),
    )


@pytest.fixture
def company(repos):
    return repos.companies.save(Company("GDI", "20123456789", email="ventas@gdi.pe"))


@pytest.fixture
def sales(repos, company):
    """
    Company with two orders:
      A: 2024-01-10, client Ana Ruiz, worker Luis Paz  -> 3 x Cuaderno, 1 x Lapicero
      B: 2024-02-05, client Beto Cruz, worker Luis Paz -> 5 x Lapicero
    plus order C for another company that must never leak into searches.
    """
    other = repos.companies.save(Company("Otra SAC", "20999999999"))
    ana = repos.clients.save(Client("Ana Ruiz", "11111111"))
    beto = repos.clients.save(Client("Beto Cruz", "22222222"))
    luis = Worker("Luis Paz", "70000001", OWNER)
    luis.set_secret("luis123")
    repos.workers.save(luis)
    maria = Worker("Maria Soto", "70000002", STAFF)
    maria.set_secret("maria123")
    repos.workers.save(maria)
    notebook = repos.products.save(Product("Cuaderno", Decimal("4.50")))
    pen = repos.products.save(Product("Lapicero", Decimal("1.20")))

    order_a = repos.orders.save(Order(luis.id, ana.id, company.id, date(2024, 1, 10)))
    repos.lines.save(OrderLine(order_a.id, notebook.id, 3))
    repos.lines.save(OrderLine(order_a.id, pen.id, 1))

    order_b = repos.orders.save(Order(luis.id, beto.id, company.id, date(2024, 2, 5)))
    repos.lines.save(OrderLine(order_b.id, pen.id, 5))

    order_c = repos.orders.save(Order(maria.id, ana.id, other.id, date(2024, 1, 15)))
    repos.lines.save(OrderLine(order_c.id, notebook.id, 50))

    return SimpleNamespace(
        company=company, other=other,
        ana=ana, beto=beto, luis=luis, maria=maria,
        notebook=notebook, pen=pen,
        order_a=order_a, order_b=order_b, order_c=order_c,
    )
