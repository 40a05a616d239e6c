"""Durable storage backends."""

from .sqlite_store import SQLiteStore, get_connection

__all__ = ["SQLiteStore", "get_connection"]
