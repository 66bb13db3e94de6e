from components.config import StoreConfig
from components.record import (
    DuplicateRecordError,
    Record,
    RecordNotFoundError,
    RecordStoreError,
)
from components.record_store import RecordStore

__all__ = [
    "DuplicateRecordError",
    "Record",
    "RecordNotFoundError",
    "RecordStore",
    "RecordStoreError",
    "StoreConfig",
]
