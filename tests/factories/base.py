"""Base factory for async SQLAlchemy models."""

from typing import Any, TypeVar, Generic

import factory
from sqlalchemy.ext.asyncio import AsyncSession


T = TypeVar("T")


class AsyncSQLAlchemyModelFactory(factory.Factory, Generic[T]):
    """Base factory for async SQLAlchemy models."""

    class Meta:
        abstract = True

    @classmethod
    def _create(cls, model_class: type[T], *args: Any, **kwargs: Any) -> T:
        """Create model instance without persisting to database."""
        return model_class(**kwargs)

    @classmethod
    async def create_async(cls, session: AsyncSession, **kwargs: Any) -> T:
        """Create and commit a model instance so other sessions can see it."""
        instance = cls.create(**kwargs)
        session.add(instance)
        await session.commit()
        return instance

    @classmethod
    async def create_batch_async(
        cls, session: AsyncSession, size: int, **kwargs: Any
    ) -> list[T]:
        """Create and commit multiple model instances."""
        instances = cls.create_batch(size, **kwargs)
        session.add_all(instances)
        await session.commit()
        return instances
