"""Record stores for admin resources.

All stores implement the RecordStore protocol defined in base.py.

Available Stores:
    - MemoryRecordStore: In-memory storage of pydantic models
"""

from admin_duplicatable.storage.base import RecordStore
from admin_duplicatable.storage.memory import MemoryRecordStore

__all__ = [
    "RecordStore",
    "MemoryRecordStore",
]
