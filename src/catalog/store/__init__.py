"""Relational storage for catalog records."""

from catalog.store.database import Database, DatabaseError

__all__ = ["Database", "DatabaseError"]
