"""Base repository: primary-key lookup, add/delete, and store error translation."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.exceptions import translate_store_error
from app.infrastructure.persistence.database import Base


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Re-raise SQLAlchemyError raised inside the block as StoreException.

    Domain exceptions raised inside the block pass through unchanged.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        raise translate_store_error(exc, operation) from exc


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so value matches literally (escape char is backslash)."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_model, add and remove.

    Subclasses map ORM rows to application DTOs; ORM instances do not
    leave the repository.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_model(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def add(self, obj: ModelType) -> ModelType:
        """Persist a new record and flush so defaults and keys are populated."""
        self.db.add(obj)
        await self.db.flush()
        return obj

    async def remove(self, obj: ModelType) -> None:
        """Delete the record."""
        await self.db.delete(obj)
        await self.db.flush()
