from .defaults import default_list

import sqlite3
from enum import StrEnum, auto
from typing import Any

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine

from shophub.utils.logging import get_logger

logger = get_logger(__name__)

db = SQLAlchemy()


class Backend(StrEnum):
    SQLITE = auto()
    POSTGRESQL = auto()
    MYSQL = auto()


def get_backend(session: Any = None) -> Backend:
    """Dialect of the engine bound to ``session`` (defaults to ``db.session``)."""
    name = (session or db.session).get_bind().dialect.name
    if name == "sqlite":
        return Backend.SQLITE
    if name == "postgresql":
        return Backend.POSTGRESQL
    if name in ("mysql", "mariadb"):
        return Backend.MYSQL
    raise ValueError(f"Unsupported Database Backend: {name}")


@event.listens_for(Engine, "connect")
def _sqlite_pragmas(dbapi_connection: Any, connection_record: Any) -> None:
    if not isinstance(dbapi_connection, sqlite3.Connection):
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def is_duplicate(exc: Exception, column: str | None = None) -> bool:
    """
    True when ``exc`` is a unique-constraint violation, optionally on ``column``.
    """
    msg = str(exc).lower()
    checks = ["unique", "duplicate", "uniq_"]
    if not any(c in msg for c in checks):
        return False
    if column:
        return column.lower() in msg
    return True
