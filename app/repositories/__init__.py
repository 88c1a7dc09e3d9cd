"""Repositories package - data access layer for our database."""

from app.repositories.base import BaseRepository
from app.repositories.baseline import BaselineRepository
from app.repositories.db import (
    close_db,
    get_db,
    get_write_connection,
    init_tables,
    memory_connection,
    reconnect_db,
)

__all__ = [
    # DB
    "get_db",
    "close_db",
    "reconnect_db",
    "init_tables",
    "get_write_connection",
    "memory_connection",
    # Base
    "BaseRepository",
    # Baseline
    "BaselineRepository",
]
