"""Generic persistence interface over AsyncSession.

Learn: services never touch IntegrityError. Repository flushes every write
immediately so that constraint violations surface at the call site, and
translates them into UniqueConstraintViolation carrying the columns of the
violated constraint. That is how a service can tell "username taken" from
"email taken", or an idempotent duplicate like from a real failure.

Misses are not errors here: find_unique returns None and find_many returns
an empty list. Deciding that a miss is a 404 is the service's job.
"""

from typing import Any, Generic, Optional, TypeVar

from sqlalchemy import UniqueConstraint, select
from sqlalchemy.exc import DataError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.db.models import Base
from bazaar.errors import UnexpectedFailure, UniqueConstraintViolation, ValidationError

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """CRUD for one mapped class."""

    def __init__(self, db: AsyncSession, model: type[ModelT]):
        self.db = db
        self.model = model

    async def create(self, **fields: Any) -> ModelT:
        instance = self.model(**fields)
        self.db.add(instance)
        await self._flush()
        return instance

    async def find_unique(self, **key: Any) -> Optional[ModelT]:
        q = select(self.model).filter_by(**key)
        result = await self.db.execute(q)
        return result.scalars().first()

    async def find_many(
        self,
        *filters: Any,
        order_by: Any = None,
        limit: Optional[int] = None,
    ) -> list[ModelT]:
        q = select(self.model).where(*filters)
        if order_by is not None:
            q = q.order_by(order_by)
        if limit is not None:
            q = q.limit(limit)
        result = await self.db.execute(q)
        return list(result.scalars().all())

    async def update(self, instance: ModelT, fields: dict[str, Any]) -> ModelT:
        for name, value in fields.items():
            setattr(instance, name, value)
        await self._flush()
        return instance

    async def delete(self, instance: ModelT) -> None:
        await self.db.delete(instance)
        await self._flush()

    # ─── Internals ───────────────────────────────────────

    async def _flush(self) -> None:
        try:
            await self.db.flush()
        except IntegrityError as e:
            await self.db.rollback()
            field_group = self._violated_field_group(e)
            if field_group is None:
                raise UnexpectedFailure(
                    "Database constraint failed",
                    details={"message": str(e.orig)},
                ) from e
            raise UniqueConstraintViolation(field_group) from e
        except DataError as e:
            # Value the column type cannot hold (numeric overflow, too long, ...)
            await self.db.rollback()
            raise ValidationError(
                "Value out of range for column",
                details={"message": str(e.orig)},
            ) from e

    def _violated_field_group(self, error: IntegrityError) -> Optional[tuple[str, ...]]:
        """Match the driver message against this table's unique constraints.

        PostgreSQL reports the constraint name, SQLite reports
        "table.col, table.col", so both spellings are checked.
        """
        message = str(error.orig)
        table = self.model.__table__
        for constraint in table.constraints:
            if not isinstance(constraint, UniqueConstraint):
                continue
            columns = tuple(c.name for c in constraint.columns)
            if constraint.name and constraint.name in message:
                return columns
            qualified = ", ".join(f"{table.name}.{c}" for c in columns)
            if qualified and qualified in message:
                return columns
        return None
