"""In-memory record store with asyncio concurrency control.

This module provides a RecordStore implementation backed by a dictionary
of pydantic models. It is suitable for development, tests and demo
applications.

Identity:
    - New records (``id is None``) get the next sequential id, converted with
      ``id_type`` (``int`` by default, ``str`` for string-keyed resources)
    - Explicit ids that look like integers advance the sequence; other ids
      (slugs, uuids) are stored as given
    - The id is written back onto the saved instance, as ORMs do
    - Stored and returned records are deep copies, so callers never share
      state with the store

Validation:
    - An optional validator callable decides whether a record may be saved
    - Rejected records are not stored and keep ``id = None``

Examples:
    Basic usage::

        from admin_duplicatable.storage.memory import MemoryRecordStore

        store = MemoryRecordStore(name="posts")
        post = Post(title="Hello")

        assert await store.save(post)
        assert post.id == 1
        found = await store.find(1)

    Rejecting invalid records::

        store = MemoryRecordStore(validator=lambda post: bool(post.title))
        assert not await store.save(Post(title=""))
"""

import asyncio
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel

from admin_duplicatable.exceptions import RecordNotFoundError
from admin_duplicatable.storage.base import RecordStore


class MemoryRecordStore(RecordStore):
    """In-memory record store for pydantic models with an ``id`` field.

    Attributes:
        name: Resource name used in error messages.
        validator: Optional callable returning False for records that must
            not be saved.
        id_type: Converts sequence numbers into ids for new records.
        _records: Dictionary mapping ids to stored records.
        _next_id: Next id handed out to a new record.
        _lock: Lock serializing id assignment and writes.
    """

    def __init__(
        self,
        name: str = "record",
        validator: Callable[[Any], bool] | None = None,
        id_type: Callable[[int], Any] = int,
    ) -> None:
        self.name = name
        self.validator = validator
        self.id_type = id_type
        self._records: dict[Any, BaseModel] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def find(self, record_id: Any) -> BaseModel:
        """Look up a record by identifier.

        Args:
            record_id: The record identifier.

        Returns:
            A deep copy of the stored record.

        Raises:
            RecordNotFoundError: If no record has this identifier.
        """
        record = self._records.get(record_id)
        if record is None:
            raise RecordNotFoundError(
                message=f"Couldn't find {self.name} with id={record_id}",
                resource=self.name,
                record_id=record_id,
            )
        return record.model_copy(deep=True)

    async def save(self, record: BaseModel) -> bool:
        """Persist a new or existing record.

        Args:
            record: The record to persist. Unsaved records are assigned an id.

        Returns:
            True if the record was saved, False if the validator rejected it.
        """
        if self.validator is not None and not self.validator(record):
            return False

        async with self._lock:
            if record.id is None:
                record.id = self.id_type(self._next_id)
                self._next_id += 1
            else:
                position = _sequence_position(record.id)
                if position is not None and position >= self._next_id:
                    self._next_id = position + 1

            self._records[record.id] = record.model_copy(deep=True)

        return True

    async def all(self) -> list[BaseModel]:
        """Return deep copies of every stored record, ordered by id.

        Numeric ids come first in numeric order, then the rest by text.
        """
        return [
            self._records[key].model_copy(deep=True)
            for key in sorted(self._records, key=_ordering_key)
        ]

    async def count(self) -> int:
        """Return the number of stored records."""
        return len(self._records)


def _sequence_position(record_id: Any) -> int | None:
    if isinstance(record_id, bool):
        return None
    if isinstance(record_id, int):
        return record_id
    if isinstance(record_id, str) and record_id.isdecimal():
        return int(record_id)
    return None


def _ordering_key(record_id: Any) -> tuple[int, int, str]:
    position = _sequence_position(record_id)
    if position is None:
        return (1, 0, str(record_id))
    return (0, position, "")
