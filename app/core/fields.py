"""
Closed table of the record fields that can be grouped or sorted on.

Callers pass field names as plain strings (``?groupBy=age``). Those strings
are only ever looked up in ``FIELDS``; nothing reads an attribute off a
record by a caller-supplied name.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, List, Mapping

from app.core import models
from app.core.errors import UnsupportedField


def render_group_key(value: Any) -> str:
    """Canonical group key: None -> "null", ints in decimal, strings as-is."""
    if value is None:
        return "null"
    return str(value)


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    column: Any  # mapped column, used by the store for ORDER BY
    accessor: Callable[[models.DatasetRecord], Any]
    render: Callable[[Any], str] = render_group_key

    def value_of(self, record: models.DatasetRecord) -> Any:
        return self.accessor(record)

    def group_key(self, record: models.DatasetRecord) -> str:
        return self.render(self.accessor(record))


FIELDS: Mapping[str, FieldDescriptor] = MappingProxyType(
    {
        "id": FieldDescriptor(
            "id", models.DatasetRecord.id, lambda record: record.id
        ),
        "datasetName": FieldDescriptor(
            "datasetName",
            models.DatasetRecord.dataset_name,
            lambda record: record.dataset_name,
        ),
        "name": FieldDescriptor(
            "name", models.DatasetRecord.name, lambda record: record.name
        ),
        "age": FieldDescriptor(
            "age", models.DatasetRecord.age, lambda record: record.age
        ),
        "department": FieldDescriptor(
            "department",
            models.DatasetRecord.department,
            lambda record: record.department,
        ),
    }
)


def supported_fields() -> List[str]:
    return list(FIELDS)


def resolve_field(field_name: str) -> FieldDescriptor:
    try:
        return FIELDS[field_name]
    except KeyError:
        raise UnsupportedField(field_name) from None
