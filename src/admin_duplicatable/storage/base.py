"""Record store protocol for admin resources.

This module defines the interface an admin screen and the duplication
feature need from a persistence backend: look a record up by id, and try
to save a record. Implementations can wrap an ORM session, a document
store or an in-memory dictionary.

Examples:
    Implementing a custom record store::

        from admin_duplicatable.exceptions import RecordNotFoundError
        from admin_duplicatable.storage.base import RecordStore

        class SessionRecordStore:
            def __init__(self, session, model):
                self.session = session
                self.model = model

            async def find(self, record_id):
                row = await self.session.get(self.model, record_id)
                if row is None:
                    raise RecordNotFoundError(
                        message=f"{self.model.__name__} {record_id} not found",
                        resource=self.model.__name__,
                        record_id=record_id,
                    )
                return row

            async def save(self, record):
                if not record.is_valid():
                    return False
                self.session.add(record)
                await self.session.flush()
                return True

            async def all(self):
                return list(await self.session.scalars(select(self.model)))

Contract:
    1. ``find()`` raises RecordNotFoundError for unknown ids and never
       returns None.

    2. ``save()`` returns False for records the backend rejects (for
       example on validation failure) and leaves no partial state behind.
       It returns True once the record is persisted, and a previously
       unsaved record then carries its new id.

    3. Backend failures other than validation propagate as exceptions.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RecordStore(Protocol):
    """Protocol defining the persistence interface of an admin resource.

    All methods are async so stores can be backed by network databases
    without blocking the event loop.
    """

    async def find(self, record_id: Any) -> Any:
        """Look up a record by identifier.

        Args:
            record_id: The record identifier.

        Returns:
            The record.

        Raises:
            RecordNotFoundError: If no record has this identifier.
        """
        ...

    async def save(self, record: Any) -> bool:
        """Persist a new or existing record.

        Args:
            record: The record to persist.

        Returns:
            True if the record was saved, False if the store rejected it.
        """
        ...

    async def all(self) -> list[Any]:
        """Return every stored record, ordered by identifier."""
        ...
