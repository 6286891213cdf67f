"""
Persistence components for the SecurePay backend.
"""

from .record_store import (
    RecordStore,
    InMemoryRecordStore,
    RedisRecordStore,
    create_record_store,
)
from .repository import SecurePayRepository

__all__ = [
    "RecordStore",
    "InMemoryRecordStore",
    "RedisRecordStore",
    "create_record_store",
    "SecurePayRepository",
]
