"""Base repository class."""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

import duckdb
import polars as pl
from loguru import logger

from app.repositories.db import get_db, reconnect_db


class BaseRepository:
    """Cached reads over one DuckDB connection.

    Pass ``conn`` to run against a connection the caller owns (a write
    connection or an in-memory store); such a repository is always writable.
    ``revision`` increases on every write so dependents can drop derived caches.
    """

    def __init__(self, read_only: bool = True, conn: duckdb.DuckDBPyConnection | None = None):
        self._owns_conn = conn is None
        self._db = get_db(read_only) if conn is None else conn
        self._read_only = read_only and conn is None
        self._cache: dict[str, Any] = {}
        self._revision = 0
        logger.debug("{} initialized", self.__class__.__name__)

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def connection(self) -> duckdb.DuckDBPyConnection:
        return self._db

    def clear_cache(self) -> None:
        self._cache.clear()
        logger.debug("Cache cleared")

    def refresh(self) -> None:
        """Reconnect (own connection only), clear cache and bump the revision."""
        if self._owns_conn:
            self._db = reconnect_db(self._read_only)
        self._touch()
        logger.info("Repository refreshed")

    def _touch(self) -> None:
        self.clear_cache()
        self._revision += 1

    def _cached(self, key: str, fn: Callable[[], Any]) -> Any:
        if key not in self._cache:
            self._cache[key] = fn()
            logger.debug("Cache miss: {}", key)
        return self._cache[key]

    def _require_writable(self) -> None:
        if self._read_only:
            raise RuntimeError(f"{self.__class__.__name__} is read-only")

    @contextmanager
    def transaction(self, **frames: pl.DataFrame) -> Iterator[None]:
        """Run the block atomically with ``frames`` registered as views.

        Rolls back and re-raises on error. The cache is dropped and the
        revision bumped either way.
        """
        self._require_writable()
        for name, df in frames.items():
            self._db.register(name, df)
        self.execute("BEGIN TRANSACTION")
        try:
            yield
            self.execute("COMMIT")
        except Exception:
            self.execute("ROLLBACK")
            raise
        finally:
            for name in frames:
                self._db.unregister(name)
            self._touch()

    def execute(self, query: str, params: list | None = None) -> Any:
        if params:
            return self._db.execute(query, params)
        return self._db.execute(query)

    def fetchall(self, query: str, params: list | None = None) -> list:
        return self.execute(query, params).fetchall()

    def fetchone(self, query: str, params: list | None = None) -> Any:
        return self.execute(query, params).fetchone()
