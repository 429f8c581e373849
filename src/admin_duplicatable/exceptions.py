"""Custom exceptions for resource duplication.

This module defines the exception hierarchy used by the record stores,
the admin screen and the duplication configurator.

Examples:
    Handling a missing record::

        from admin_duplicatable.exceptions import RecordNotFoundError

        try:
            post = await store.find(42)
        except RecordNotFoundError as e:
            logger.info("record.missing", resource=e.resource, record_id=e.record_id)
            post = None

    Guarding a registration::

        from admin_duplicatable.exceptions import RegistrationError

        try:
            screen.member_action("duplicate", handler)
        except RegistrationError as e:
            logger.error("registration.failed", error=e.message)
            raise
"""

from typing import Any


class DuplicatableError(Exception):
    """Base exception for all duplication-related errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        """Initialize the exception with a message.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)


class RecordNotFoundError(DuplicatableError):
    """No record exists for the requested identifier.

    Raised by record stores from ``find()``. The admin screen renders it as
    an HTTP 404. The "form" duplication pre-handler swallows it and falls
    back to an empty form; the "save" handler lets it propagate.

    Attributes:
        message: Human-readable error description.
        resource: Name of the resource that was searched.
        record_id: The identifier that was not found.
    """

    def __init__(self, message: str, resource: str, record_id: Any) -> None:
        """Initialize the not-found error with details.

        Args:
            message: Human-readable error description.
            resource: Name of the resource that was searched.
            record_id: The identifier that was not found.
        """
        super().__init__(message)
        self.resource = resource
        self.record_id = record_id


class RegistrationError(DuplicatableError):
    """An admin screen hook could not be registered.

    Raised at configuration time, for example when two member actions share
    a name or an action item targets an unknown view.

    Attributes:
        message: Human-readable error description.
        resource: Name of the resource being configured.
    """

    def __init__(self, message: str, resource: str) -> None:
        """Initialize the registration error with details.

        Args:
            message: Human-readable error description.
            resource: Name of the resource being configured.
        """
        super().__init__(message)
        self.resource = resource
