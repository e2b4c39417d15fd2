"""Entity store: find/insert/save over the ORM models."""

from .base import EntityStore, StoreValidationError, validate_document

__all__ = ["EntityStore", "StoreValidationError", "validate_document"]
