from typing import Annotated, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import engine, schemas
from app.core.database import get_db
from app.core.fields import supported_fields

router = APIRouter(prefix="/api/dataset", tags=["Datasets"])

db_dep = Annotated[AsyncSession, Depends(get_db)]


# Field names accepted by groupBy / sortBy
@router.get("/fields", response_model=schemas.FieldsResponse)
async def list_fields():
    return {"fields": supported_fields()}


# Add record
@router.post(
    "/{dataset_name}/record",
    response_model=schemas.RecordCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_record_to_dataset(
    dataset_name: str, record: schemas.RecordCreate, db: db_dep
):
    saved = await engine.insert_record(dataset_name, record, db)
    return schemas.RecordCreatedResponse(dataset=dataset_name, record_id=saved.id)


# Group or sort records
@router.get(
    "/{dataset_name}/query",
    response_model=Union[schemas.GroupedRecordsResponse, schemas.SortedRecordsResponse],
)
async def query_dataset(
    dataset_name: str,
    db: db_dep,
    group_by: Annotated[Optional[str], Query(alias="groupBy")] = None,
    sort_by: Annotated[Optional[str], Query(alias="sortBy")] = None,
    order: str = schemas.SortOrder.ASC.value,
):
    if group_by is not None and sort_by is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Use either groupBy or sortBy, not both",
        )

    if group_by is not None:
        if not group_by.strip():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="groupBy field cannot be empty",
            )
        grouped = await engine.group_by_field(dataset_name, group_by, db)
        return schemas.GroupedRecordsResponse(
            grouped_records={
                key: [schemas.RecordResponse.model_validate(r) for r in records]
                for key, records in grouped.items()
            }
        )

    if sort_by is not None:
        records = await engine.get_sorted_records(dataset_name, sort_by, order, db)
        return schemas.SortedRecordsResponse(
            sorted_records=[schemas.RecordResponse.model_validate(r) for r in records]
        )

    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Either groupBy or sortBy is required",
    )
