"""Record Service - identifier assignment and delete-and-renumber for roster tables"""

import asyncio
import logging
from typing import Any, List, Type, TypeVar

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import RosterRecord

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=RosterRecord)


class RecordService:
    """
    Service layer for roster tables.

    Identifiers of every table form the dense sequence 1..N. Mutating
    operations hold the table's lock from the first read until commit, so
    concurrent requests cannot observe the same maximum identifier or
    interleave two renumberings.
    """

    @staticmethod
    async def list_records(db: AsyncSession, model: Type[R]) -> List[R]:
        result = await db.execute(select(model).order_by(model.id))
        return list(result.scalars().all())

    @staticmethod
    async def next_identifier(db: AsyncSession, model: Type[RosterRecord]) -> int:
        """Current maximum identifier plus one, or 1 for an empty table."""
        result = await db.execute(select(func.max(model.id)))
        max_id = result.scalar_one_or_none()
        return (max_id or 0) + 1

    @staticmethod
    async def create_record(
        db: AsyncSession,
        model: Type[R],
        lock: asyncio.Lock,
        **fields: Any,
    ) -> R:
        """
        Append a row with the next identifier.

        Args:
            db: Database session
            model: Roster model class
            lock: Writer lock of the model's table
            **fields: Column values other than id

        Returns:
            The persisted row
        """
        async with lock:
            try:
                next_id = await RecordService.next_identifier(db, model)
                record = model(id=next_id, **fields)
                db.add(record)
                await db.commit()
                await db.refresh(record)
            except SQLAlchemyError:
                await db.rollback()
                raise

        logger.info(
            "Record created",
            extra={"table": model.__tablename__, "record_id": record.id},
        )
        return record

    @staticmethod
    async def delete_and_renumber(
        db: AsyncSession,
        model: Type[RosterRecord],
        target_id: int,
        lock: asyncio.Lock,
    ) -> int:
        """
        Delete a row and renumber the survivors to 1..N in their current order.

        A missing target is not an error; renumbering still runs. Everything
        happens in one transaction, so a failure at any step rolls the table
        back to its previous dense state.

        Returns:
            Number of rows left in the table
        """
        table = model.__tablename__
        async with lock:
            try:
                result = await db.execute(
                    delete(model)
                    .where(model.id == target_id)
                    .execution_options(synchronize_session=False)
                )
                deleted = result.rowcount

                result = await db.execute(select(model.id).order_by(model.id))
                current_ids = list(result.scalars().all())

                # Ascending order: each new id is free, its previous holder already moved or deleted
                for position, current_id in enumerate(current_ids, start=1):
                    if current_id == position:
                        continue
                    await db.execute(
                        update(model)
                        .where(model.id == current_id)
                        .values(id=position)
                        .execution_options(synchronize_session=False)
                    )

                await db.commit()
            except SQLAlchemyError:
                await db.rollback()
                logger.error(
                    "Delete and renumber failed, transaction rolled back",
                    extra={"table": table, "target_id": target_id},
                    exc_info=True,
                )
                raise

        logger.info(
            "Record deleted and table renumbered",
            extra={
                "table": table,
                "target_id": target_id,
                "deleted": deleted,
                "remaining": len(current_ids),
            },
        )
        return len(current_ids)
