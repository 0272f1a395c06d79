"""Base repository: session and model wiring, primary-key lookup, store error translation."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.domain.exceptions import StoreUnavailableError
from campus_events.infrastructure.persistence.database import Base
from campus_events.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository over one ORM model.

    Subclasses wrap their statements in _translate_errors so driver failures
    surface as StoreUnavailableError with the original error chained.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def _get_model(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None. Always reloads column values."""
        model: Any = self.model
        result = await self.db.execute(
            select(self.model)
            .where(model.id == entity_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @contextmanager
    def _translate_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            logger.exception("%s store operation '%s' failed", self.model.__name__, operation)
            raise StoreUnavailableError(operation, type(exc).__name__) from exc
