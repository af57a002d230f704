# retailers/models/entity.py
import uuid
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import declared_attr

from retailers.utils.dates import utcnow


def new_row_key() -> str:
    return str(uuid.uuid4())


def new_etag() -> str:
    return uuid.uuid4().hex


# Common keys of every record in the legacy entity store.
# Records are addressed by (partition_key, row_key). etag is the mapper's
# version column: every flush writes a fresh value and the UPDATE only
# matches the row when the stored etag is still the one that was loaded.
class TableEntityMixin:
    PARTITION = None

    @declared_attr
    def partition_key(cls):
        return Column(String(64), primary_key=True, default=cls.PARTITION)

    @declared_attr
    def row_key(cls):
        return Column(String(64), primary_key=True, default=new_row_key)

    @declared_attr
    def etag(cls):
        return Column(String(32), nullable=False)

    @declared_attr
    def timestamp(cls):
        return Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __mapper_args__ = {
        "version_id_col": etag,
        "version_id_generator": lambda version: new_etag(),
    }
