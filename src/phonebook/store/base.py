"""Generic entity store over an async SQLAlchemy session."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption

from ..dbmodels import Base
from ..logging import get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class StoreValidationError(Exception):
    """Raised when a write violates a uniqueness or field constraint."""

    def __init__(self, model: str, detail: str | None = None, errors: dict[str, str] | None = None):
        self.model = model
        self.detail = detail
        self.errors = errors or {}
        super().__init__(f"{model} validation failed")


def _model_label(model: type[Base]) -> str:
    # Persons -> Person, Users -> User
    name = model.__name__
    return name[:-1] if name.endswith("s") else name


def validate_document(doc: Base) -> None:
    """Check required and minimum-length constraints declared on the model."""
    model = type(doc)
    errors: dict[str, str] = {}

    for column in model.__table__.columns:
        if column.primary_key or column.default is not None:
            continue
        value = getattr(doc, column.key, None)
        if value is None and not column.nullable:
            errors[column.key] = f"Path `{column.key}` is required."

    for field, min_length in model.__min_lengths__.items():
        value = getattr(doc, field, None)
        if isinstance(value, str) and len(value) < min_length:
            errors[field] = (
                f"Path `{field}` (`{value}`) is shorter than the minimum allowed length "
                f"({min_length})."
            )

    if errors:
        raise StoreValidationError(_model_label(model), detail="; ".join(errors.values()), errors=errors)


class EntityStore(Generic[ModelT]):
    """Persistence boundary for one entity kind.

    Reads and writes happen on the caller's session; the caller owns the
    transaction (see ``get_async_session``).
    """

    def __init__(self, session: AsyncSession, model: type[ModelT]):
        self.session = session
        self.model = model

    async def find(
        self, *criteria: Any, options: Sequence[ORMOption] = (), order_by: Any = None
    ) -> list[ModelT]:
        stmt = select(self.model).where(*criteria).options(*options)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        result = await self.session.execute(stmt)
        return list(result.scalars().unique().all())

    async def find_one(self, *criteria: Any, options: Sequence[ORMOption] = ()) -> ModelT | None:
        stmt = select(self.model).where(*criteria).options(*options).limit(1)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def count(self, *criteria: Any) -> int:
        stmt = select(func.count()).select_from(self.model).where(*criteria)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def insert(self, doc: ModelT) -> ModelT:
        """Validate and add a new document, flushing so constraint errors surface now."""
        self.session.add(doc)
        return await self.save(doc)

    async def save(self, doc: ModelT) -> ModelT:
        """Validate and flush pending changes of an already tracked document."""
        validate_document(doc)
        try:
            await self.session.flush()
        except IntegrityError as e:
            label = _model_label(self.model)
            logger.info("Store write rejected", model=label, error=str(e.orig))
            raise StoreValidationError(label, detail=str(e.orig)) from e
        return doc
