"""
Database module for the phonebook backend
"""

from .connection import (
    create_schema,
    dispose_database,
    get_async_engine,
    get_async_session,
    init_database,
)

__all__ = [
    "create_schema",
    "dispose_database",
    "get_async_engine",
    "get_async_session",
    "init_database",
]
