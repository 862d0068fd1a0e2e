"""
Repository layer for the local key-value store.

This module contains all persistence operations, encapsulating SQL and
serialization logic.
"""
from repositories.base import Database
from repositories.state_repository import AppStateRepository

__all__ = [
    "Database",
    "AppStateRepository",
]
