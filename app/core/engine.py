import logging
from typing import Dict, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import models, schemas, store
from app.core.errors import (
    DatasetNotFound,
    DuplicateId,
    InvalidField,
    InvalidSortOrder,
    MissingId,
    UnsupportedField,
)
from app.core.fields import FieldDescriptor, resolve_field

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# QUERY ENGINE
# group-by and sort-by over one dataset, plus the insert write gate.
# Stateless: all state lives in the store.
# -----------------------------------------------------------------------------

SORT_ORDER_ALIASES = {
    "asc": schemas.SortOrder.ASC,
    "ascending": schemas.SortOrder.ASC,
    "desc": schemas.SortOrder.DESC,
    "descending": schemas.SortOrder.DESC,
}


def _resolve(field_name: str, operation: str) -> FieldDescriptor:
    try:
        return resolve_field(field_name)
    except UnsupportedField as error:
        logger.warning(f"Rejected {operation} on unknown field {field_name!r}")
        raise InvalidField(field_name, operation) from error


def parse_sort_order(sort_order: str) -> schemas.SortOrder:
    """Accept asc/ascending/desc/descending in any case."""
    direction = SORT_ORDER_ALIASES.get(str(sort_order).lower())
    if direction is None:
        logger.warning(f"Rejected sort order {sort_order!r}")
        raise InvalidSortOrder(sort_order)
    return direction


async def group_by_field(
    dataset_name: str, field_name: str, db: AsyncSession
) -> Dict[str, List[models.DatasetRecord]]:
    """
    Group the records of a dataset by the rendered value of one field.

    Args:
        dataset_name: Dataset to group.
        field_name: Public field name, e.g. "department".
        db: Async database session.

    Returns:
        Mapping of group key to records, keys in first-seen order and
        records in store order within each key.

    Raises:
        InvalidField: field is not part of the record schema.
        DatasetNotFound: the dataset has no records.
    """

    descriptor = _resolve(field_name, "groupBy")

    records = await store.find_by_dataset(dataset_name, db)
    if not records:
        raise DatasetNotFound(dataset_name)

    grouped: Dict[str, List[models.DatasetRecord]] = {}
    for record in records:
        grouped.setdefault(descriptor.group_key(record), []).append(record)

    logger.info(
        f"Grouped {len(records)} records of {dataset_name!r} by {field_name} "
        f"into {len(grouped)} groups"
    )
    return grouped


async def get_sorted_records(
    dataset_name: str, field_name: str, sort_order: str, db: AsyncSession
) -> List[models.DatasetRecord]:
    """
    Return the records of a dataset ordered by one field.

    Ordering is done by the store. Ties keep insertion order in both
    directions.
    """

    descriptor = _resolve(field_name, "sortBy")
    direction = parse_sort_order(sort_order)

    records = await store.find_by_dataset(
        dataset_name,
        db,
        order_by=descriptor.column,
        descending=direction == schemas.SortOrder.DESC,
    )
    if not records:
        raise DatasetNotFound(dataset_name)

    logger.info(
        f"Sorted {len(records)} records of {dataset_name!r} by {field_name} "
        f"({direction.value})"
    )
    return records


async def exists_by_id(record_id: int, db: AsyncSession) -> bool:
    return await store.exists_by_id(record_id, db)


async def insert_record(
    dataset_name: str, record: schemas.RecordCreate, db: AsyncSession
) -> models.DatasetRecord:
    """
    Store a record in a dataset.

    Ids are unique across every dataset. The dataset name from the caller's
    payload is ignored and replaced by ``dataset_name``.

    Raises:
        MissingId: the record has no id.
        DuplicateId: a record with this id already exists in any dataset.
    """

    if record.id is None:
        logger.warning(f"Rejected insert into {dataset_name!r} without an id")
        raise MissingId()

    if await store.exists_by_id(record.id, db):
        logger.warning(f"Rejected insert of duplicate id {record.id}")
        raise DuplicateId(record.id)

    new_record = models.DatasetRecord(
        **record.model_dump(exclude={"dataset_name"}), dataset_name=dataset_name
    )

    # A concurrent insert may win between the check and the write;
    # the primary key constraint catches it.
    try:
        saved = await store.save(new_record, db)
    except IntegrityError as error:
        logger.warning(f"Insert of id {record.id} lost a race: {error}")
        raise DuplicateId(record.id) from error

    logger.info(f"Inserted record {saved.id} into {dataset_name!r}")
    return saved
