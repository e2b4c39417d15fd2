"""
Phonebook backend
GraphQL API for persons, users, authors and books
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
