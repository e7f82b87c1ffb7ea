"""
db/errors.py
------------
Persistence error taxonomy.
Driver exceptions (sqlite3, psycopg2) never leak out of the db layer: they are
re-raised as one of the classes below, with the original kept as `cause`.
"""

from typing import Optional


class PersistenceError(Exception):
    """Base class for every failure raised by the persistence layer."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class ConstraintViolation(PersistenceError):
    """A UNIQUE, NOT NULL, CHECK or FOREIGN KEY constraint rejected a write."""


class ConnectivityFailure(PersistenceError):
    """The store is unreachable or the connection handle is no longer usable."""


class NotFound(PersistenceError):
    """An update targeted an identity that matches no row."""


class UnsupportedParameterType(PersistenceError, TypeError):
    """A value of a type the binder does not handle was passed as a SQL parameter."""
