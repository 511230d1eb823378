import logging
from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import models
from app.core.errors import StoreUnavailable

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# RECORD STORE
# Purpose: exact-match and ordered retrieval by dataset, existence by id, insert.
# Natural order is insertion order: created_at, then id.
# -----------------------------------------------------------------------------

NATURAL_ORDER = (models.DatasetRecord.created_at, models.DatasetRecord.id)


async def find_by_dataset(
    dataset_name: str,
    db: AsyncSession,
    order_by: Optional[Any] = None,
    descending: bool = False,
) -> List[models.DatasetRecord]:
    """
    Fetch every record of a dataset.

    Args:
        dataset_name: Exact dataset name to match.
        db: Async database session.
        order_by: Optional mapped column to sort on in SQL.
        descending: Sort direction for ``order_by``.

    Returns:
        Records in natural order, or ordered by ``order_by`` with ties
        kept in natural order.
    """

    query = select(models.DatasetRecord).where(
        models.DatasetRecord.dataset_name == dataset_name
    )

    if order_by is not None:
        query = query.order_by(order_by.desc() if descending else order_by.asc())

    query = query.order_by(*NATURAL_ORDER)

    try:
        result = await db.execute(query)
        return list(result.scalars().all())
    except SQLAlchemyError as error:
        logger.error(f"Failed to load dataset {dataset_name!r}: {error}")
        raise StoreUnavailable() from error


async def exists_by_id(record_id: int, db: AsyncSession) -> bool:
    query = select(models.DatasetRecord.id).where(models.DatasetRecord.id == record_id)
    try:
        result = await db.execute(query)
        return result.scalar_one_or_none() is not None
    except SQLAlchemyError as error:
        logger.error(f"Failed to look up record {record_id}: {error}")
        raise StoreUnavailable() from error


async def save(record: models.DatasetRecord, db: AsyncSession) -> models.DatasetRecord:
    """
    Insert a record and commit.

    A primary key collision is re-raised as IntegrityError after the
    rollback, so the caller can report it as a duplicate id.
    """

    try:
        db.add(record)
        await db.commit()
        return record
    except IntegrityError:
        await db.rollback()
        raise
    except SQLAlchemyError as error:
        await db.rollback()
        logger.error(f"Failed to save record {record.id}: {error}")
        raise StoreUnavailable() from error
