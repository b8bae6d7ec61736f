"""Catalog site server: clean-URL page resolution plus a small CRUD API."""

__version__ = "0.1.0"
