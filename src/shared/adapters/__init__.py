"""Adapters for post storage implementations."""

from .sqlite_adapter import SQLitePostRepository

__all__ = ["SQLitePostRepository"]
