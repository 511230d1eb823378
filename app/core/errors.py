"""
Failure kinds of the record service.

Every error carries a stable ``code`` tag and a message that names the
offending dataset, field, order or id. The HTTP layer maps each class to a
status code in one place (``app.main``).
"""


class RecordServiceError(Exception):
    code = "record_service_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingId(RecordServiceError):
    code = "missing_id"

    def __init__(self):
        super().__init__("ID is required")


class DuplicateId(RecordServiceError):
    code = "duplicate_id"

    def __init__(self, record_id: int):
        super().__init__(f"Record with ID {record_id} already exists")
        self.record_id = record_id


class InvalidField(RecordServiceError):
    code = "invalid_field"

    def __init__(self, field_name: str, operation: str):
        super().__init__(f"Unsupported {operation} field: {field_name}")
        self.field_name = field_name
        self.operation = operation


class InvalidSortOrder(RecordServiceError):
    code = "invalid_sort_order"

    def __init__(self, sort_order: str):
        super().__init__(f"Invalid sort order: {sort_order}. Use 'asc' or 'desc'.")
        self.sort_order = sort_order


class DatasetNotFound(RecordServiceError):
    code = "dataset_not_found"

    def __init__(self, dataset_name: str):
        super().__init__(f"No records found for dataset: {dataset_name}")
        self.dataset_name = dataset_name


class StoreUnavailable(RecordServiceError):
    code = "store_unavailable"

    def __init__(self):
        super().__init__("Record store is unavailable")


class UnsupportedField(LookupError):
    """Raised by the field table for a name outside the record schema."""

    def __init__(self, field_name: str):
        super().__init__(field_name)
        self.field_name = field_name
