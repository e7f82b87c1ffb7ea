import sqlite3
from types import SimpleNamespace

import pytest

from db.connection import Database, connect
from db.errors import ConnectivityFailure, ConstraintViolation, PersistenceError
from models.client import Client
from repositories.client_repo import ClientRepository


def test_write_outside_transaction_is_committed_immediately(db):
    clients = ClientRepository(db)
    clients.save(Client("Ana Ruiz", "11111111"))
    assert not db.in_transaction
    # rollback must not undo an already committed call
    db._conn.rollback()
    assert len(clients.find_all()) == 1


def test_transaction_commits_all_writes(db):
    clients = ClientRepository(db)
    with db.transaction():
        clients.save(Client("Ana Ruiz", "11111111"))
        clients.save(Client("Beto Cruz", "22222222"))
    assert [c.full_name for c in clients.find_all()] == ["Ana Ruiz", "Beto Cruz"]


def test_transaction_rolls_back_on_error(db):
    clients = ClientRepository(db)
    with pytest.raises(ConstraintViolation):
        with db.transaction():
            clients.save(Client("Ana Ruiz", "11111111"))
            clients.save(Client("Ana Duplicada", "11111111"))
    assert clients.find_all() == []


def test_transaction_rolls_back_on_non_database_error(db):
    clients = ClientRepository(db)
    with pytest.raises(RuntimeError):
        with db.transaction():
            clients.save(Client("Ana Ruiz", "11111111"))
            raise RuntimeError("boom")
    assert clients.find_all() == []


def test_nested_transactions_join_the_outer_scope(db):
    clients = ClientRepository(db)
    with pytest.raises(RuntimeError):
        with db.transaction():
            with db.transaction():
                clients.save(Client("Ana Ruiz", "11111111"))
            assert db.in_transaction
            raise RuntimeError("outer failure")
    assert clients.find_all() == []
    assert not db.in_transaction


def test_closed_handle_raises_connectivity_failure(db):
    clients = ClientRepository(db)
    db.close()
    with pytest.raises(ConnectivityFailure):
        clients.find_all()
    with pytest.raises(ConnectivityFailure):
        with db.transaction():
            pass


def test_malformed_statement_is_a_persistence_error(db):
    clients = ClientRepository(db)
    with pytest.raises(PersistenceError) as excinfo:
        clients.execute_query("SELEC * FROM client")
    assert not isinstance(excinfo.value, ConnectivityFailure)
    assert isinstance(excinfo.value.cause, sqlite3.Error)
    assert excinfo.value.__cause__ is excinfo.value.cause


def test_prepare_rewrites_placeholders_for_pyformat_drivers():
    driver = SimpleNamespace(paramstyle="pyformat")
    database = Database(connection=object(), driver=driver)
    assert database.dialect == "postgresql"
    assert database.prepare("SELECT * FROM t WHERE a = ? AND b = ?") == (
        "SELECT * FROM t WHERE a = %s AND b = %s"
    )


def test_prepare_keeps_qmark_for_sqlite(db):
    assert db.prepare("SELECT ? + ?") == "SELECT ? + ?"


def test_connect_sqlite_file_creates_parent_directory(tmp_path):
    path = tmp_path / "nested" / "gdi.db"
    database = connect(f"sqlite:///{path}")
    try:
        assert database.dialect == "sqlite"
        assert path.parent.is_dir()
    finally:
        database.close()


def test_connect_in_memory():
    database = connect("sqlite:///:memory:")
    try:
        with database.cursor() as cur:
            cur.execute("PRAGMA foreign_keys")
            assert cur.fetchone()[0] == 1
    finally:
        database.close()


def test_connect_rejects_unknown_scheme():
    with pytest.raises(ValueError):
        connect("mysql://localhost/gdi")


def test_unknown_table_is_not_a_connectivity_failure(db):
    clients = ClientRepository(db)
    with pytest.raises(PersistenceError) as excinfo:
        clients.execute_query("SELECT * FROM missing_table")
    assert type(excinfo.value) is PersistenceError


@pytest.mark.parametrize(
    "message",
    ["database is locked", "unable to open database file", "disk I/O error"],
)
def test_sqlite_store_failures_are_connectivity_failures(db, message):
    error = db._translate(sqlite3.OperationalError(message))
    assert isinstance(error, ConnectivityFailure)


def test_sqlite_interface_error_is_a_connectivity_failure(db):
    assert isinstance(db._translate(sqlite3.InterfaceError("bad handle")), ConnectivityFailure)


class _PgError(Exception):
    pgcode = None


class _PgOperationalError(_PgError):
    pass


class _PgIntegrityError(_PgError):
    pass


class _PgInterfaceError(_PgError):
    pass


_PG_DRIVER = SimpleNamespace(
    paramstyle="pyformat",
    Error=_PgError,
    OperationalError=_PgOperationalError,
    IntegrityError=_PgIntegrityError,
    InterfaceError=_PgInterfaceError,
)


def _pg_error(cls, pgcode):
    exc = cls("failure")
    exc.pgcode = pgcode
    return exc


@pytest.mark.parametrize(
    "pgcode, unavailable",
    [("08006", True), ("08001", True), (None, True), ("42601", False), ("42P01", False)],
)
def test_postgres_operational_errors_use_sqlstate_class(pgcode, unavailable):
    database = Database(connection=object(), driver=_PG_DRIVER)
    error = database._translate(_pg_error(_PgOperationalError, pgcode))
    assert isinstance(error, ConnectivityFailure) is unavailable
    assert isinstance(error, PersistenceError)


def test_postgres_integrity_error_is_a_constraint_violation():
    database = Database(connection=object(), driver=_PG_DRIVER)
    error = database._translate(_pg_error(_PgIntegrityError, "23505"))
    assert isinstance(error, ConstraintViolation)
