"""DuckDB connection management for the baseline store."""

import threading
from pathlib import Path

import duckdb
from loguru import logger

from app.models import ALL_DDL
from settings import DB_PATH

TABLES = ("unit", "baseline")

_local = threading.local()


def db_exists(path: str | Path | None = None) -> bool:
    return Path(path or DB_PATH).exists()


def _tables_exist(conn: duckdb.DuckDBPyConnection) -> bool:
    """True when every baseline table is present."""
    try:
        (found,) = conn.execute(
            "SELECT COUNT(*) FROM information_schema.tables WHERE table_name IN (?, ?)",
            list(TABLES),
        ).fetchone()
    except duckdb.Error:
        return False
    return found == len(TABLES)


def init_tables(conn: duckdb.DuckDBPyConnection) -> None:
    """Create unit/baseline tables (idempotent)."""
    if _tables_exist(conn):
        return
    for ddl in ALL_DDL:
        conn.execute(ddl)
    logger.info("Baseline tables initialized")


def _connect(path: str, read_only: bool) -> duckdb.DuckDBPyConnection:
    """Open ``path``; a missing file is created with empty tables first."""
    if not db_exists(path):
        logger.warning("DB not found: {}. Creating empty baseline store.", path)
        with duckdb.connect(path) as conn:
            init_tables(conn)
    return duckdb.connect(path, read_only=read_only)


def get_db(read_only: bool = True, path: str | None = None) -> duckdb.DuckDBPyConnection:
    """Thread-local connection, reopened if a writable one is asked of a read-only handle."""
    path = path or DB_PATH
    conn = getattr(_local, "conn", None)
    if conn is not None and (_local.path != path or (_local.read_only and not read_only)):
        close_db()
        conn = None
    if conn is None:
        conn = _connect(path, read_only)
        _local.conn, _local.path, _local.read_only = conn, path, read_only
        logger.debug("DB connected: {} (read_only={})", path, read_only)
    return conn


def close_db() -> None:
    conn = getattr(_local, "conn", None)
    if conn is not None:
        conn.close()
        _local.conn = None
        logger.debug("DB connection closed")


def reconnect_db(read_only: bool = True, path: str | None = None) -> duckdb.DuckDBPyConnection:
    """Drop the thread's connection and open a fresh one."""
    close_db()
    return get_db(read_only, path)


def get_write_connection(path: str | None = None) -> duckdb.DuckDBPyConnection:
    """Dedicated writable connection for loads; the caller closes it."""
    conn = _connect(path or DB_PATH, read_only=False)
    init_tables(conn)
    return conn


def memory_connection() -> duckdb.DuckDBPyConnection:
    """In-memory store with tables created, for scratch analysis and tests."""
    conn = duckdb.connect(":memory:")
    init_tables(conn)
    return conn
