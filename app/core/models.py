from datetime import datetime, timezone

from sqlalchemy import BigInteger, Column, Integer, String, TIMESTAMP

from app.core.database import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# =========================
# Dataset record
# =========================
class DatasetRecord(Base):
    """
    A flat record that belongs to exactly one dataset.

    The id is assigned by the caller and is unique across all datasets.
    A dataset has no table of its own: it exists while at least one
    record carries its name.
    """

    __tablename__ = "dataset_records"

    id = Column(BigInteger, primary_key=True, autoincrement=False)

    dataset_name = Column(String, nullable=False, index=True)

    name = Column(String, nullable=False)
    age = Column(Integer, nullable=False)
    department = Column(String, nullable=False)

    created_at = Column(  # natural (insertion) order of the store
        TIMESTAMP(timezone=True),
        nullable=False,
        default=utc_now,
    )
