from typing import Optional, List, Dict
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Letters and spaces, at least one letter
LETTERS_AND_SPACES = r"^ *[A-Za-z][A-Za-z ]*$"

# Column ranges: id is BIGINT, age is INTEGER
MAX_ID = 2**63 - 1
MAX_AGE = 2**31 - 1


# =========================
# Enums
# =========================
class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


# Wire format is camelCase, python side stays snake_case
class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =========================
# RECORD
# =========================
class RecordBase(CamelModel):
    name: str = Field(min_length=1, pattern=LETTERS_AND_SPACES)
    age: int = Field(ge=0, le=MAX_AGE)
    department: str = Field(min_length=1, pattern=LETTERS_AND_SPACES)


class RecordCreate(RecordBase):
    # Missing id is reported by the write gate, not by validation
    id: Optional[int] = Field(default=None, ge=1, le=MAX_ID)
    # Always overwritten with the dataset from the path
    dataset_name: Optional[str] = None


class RecordResponse(RecordBase):
    id: int
    dataset_name: str

    model_config = ConfigDict(from_attributes=True)


class RecordCreatedResponse(CamelModel):
    message: str = "Record added successfully"
    dataset: str
    record_id: int


# =========================
# QUERIES
# =========================
class GroupedRecordsResponse(CamelModel):
    grouped_records: Dict[str, List[RecordResponse]]


class SortedRecordsResponse(CamelModel):
    sorted_records: List[RecordResponse]


class FieldsResponse(BaseModel):
    fields: List[str]


# =========================
# ERRORS
# =========================
class ErrorResponse(BaseModel):
    error: str
    code: str
    status: int
    details: Optional[List[str]] = None
