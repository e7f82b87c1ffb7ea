"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import Database
from utils.logger import get_logger

logger = get_logger(__name__)

SQLITE_SCHEMA = [
    """
    -- Companies: the tenant every sale is scoped to
    CREATE TABLE IF NOT EXISTS company (
        id_company      INTEGER PRIMARY KEY NOT NULL,
        name            TEXT NOT NULL,
        tax_id          TEXT NOT NULL,
        email           TEXT,
        location        TEXT,
        logo_path       TEXT,
        UNIQUE (name, tax_id)
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS client (
        id_client       INTEGER PRIMARY KEY NOT NULL,
        full_name       TEXT NOT NULL,
        national_id     TEXT NOT NULL UNIQUE,
        phone           TEXT,
        email           TEXT
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS worker (
        id_worker       INTEGER PRIMARY KEY NOT NULL,
        full_name       TEXT NOT NULL,
        national_id     TEXT NOT NULL UNIQUE,
        role            TEXT NOT NULL CHECK (role IN ('OWNER', 'SUPERVISOR', 'STAFF')),
        font            TEXT,
        background_color TEXT,
        secret_hash     TEXT
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS product (
        id_product      INTEGER PRIMARY KEY NOT NULL,
        name            TEXT NOT NULL,
        price           REAL NOT NULL CHECK (price >= 0),
        active          INTEGER NOT NULL DEFAULT 1
    );
    """,
    """
    -- Sale headers; the total is derived from order_line
    CREATE TABLE IF NOT EXISTS orders (
        id_order        INTEGER PRIMARY KEY NOT NULL,
        id_worker       INTEGER NOT NULL REFERENCES worker (id_worker),
        id_client       INTEGER NOT NULL REFERENCES client (id_client),
        id_company      INTEGER NOT NULL REFERENCES company (id_company),
        order_date      TEXT NOT NULL
    );
    """,
    """
    -- A product appears at most once per order
    CREATE TABLE IF NOT EXISTS order_line (
        id_order_line   INTEGER PRIMARY KEY NOT NULL,
        id_order        INTEGER NOT NULL REFERENCES orders (id_order),
        id_product      INTEGER NOT NULL REFERENCES product (id_product),
        quantity        INTEGER NOT NULL CHECK (quantity > 0),
        UNIQUE (id_order, id_product)
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_orders_company_date ON orders (id_company, order_date);",
]

POSTGRES_SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS company (
        id_company      SERIAL PRIMARY KEY,
        name            VARCHAR(150) NOT NULL,
        tax_id          VARCHAR(20) NOT NULL,
        email           VARCHAR(150),
        location        VARCHAR(250),
        logo_path       TEXT,
        UNIQUE (name, tax_id)
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS client (
        id_client       SERIAL PRIMARY KEY,
        full_name       VARCHAR(150) NOT NULL,
        national_id     VARCHAR(20) NOT NULL UNIQUE,
        phone           VARCHAR(30),
        email           VARCHAR(150)
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS worker (
        id_worker       SERIAL PRIMARY KEY,
        full_name       VARCHAR(150) NOT NULL,
        national_id     VARCHAR(20) NOT NULL UNIQUE,
        role            VARCHAR(20) NOT NULL CHECK (role IN ('OWNER', 'SUPERVISOR', 'STAFF')),
        font            VARCHAR(100),
        background_color VARCHAR(20),
        secret_hash     TEXT
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS product (
        id_product      SERIAL PRIMARY KEY,
        name            VARCHAR(150) NOT NULL,
        price           NUMERIC(12,2) NOT NULL CHECK (price >= 0),
        active          BOOLEAN NOT NULL DEFAULT TRUE
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS orders (
        id_order        SERIAL PRIMARY KEY,
        id_worker       INT NOT NULL REFERENCES worker (id_worker),
        id_client       INT NOT NULL REFERENCES client (id_client),
        id_company      INT NOT NULL REFERENCES company (id_company),
        order_date      VARCHAR(10) NOT NULL
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS order_line (
        id_order_line   SERIAL PRIMARY KEY,
        id_order        INT NOT NULL REFERENCES orders (id_order),
        id_product      INT NOT NULL REFERENCES product (id_product),
        quantity        INT NOT NULL CHECK (quantity > 0),
        UNIQUE (id_order, id_product)
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_orders_company_date ON orders (id_company, order_date);",
]


def create_tables(db: Database) -> None:
    """
    Execute the schema DDL for the connection's dialect.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    statements = SQLITE_SCHEMA if db.dialect == "sqlite" else POSTGRES_SCHEMA
    try:
        with db.transaction():
            for statement in statements:
                with db.cursor() as cur:
                    cur.execute(statement)
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        logger.error(f"Failed to initialize schema: {e}")
        raise


if __name__ == "__main__":
    from db.connection import connect
    database = connect()
    create_tables(database)
    database.close()
    print("Database schema created successfully.")
