"""Core type definitions for resource duplication.

This module provides the small value types shared by the duplication
configurator and the admin screen: the duplication strategy, the outcome of
a single duplication request, action buttons and flash notices.

Examples:
    Normalizing a strategy::

        from admin_duplicatable.models import DuplicationStrategy

        DuplicationStrategy.parse("save")    # DuplicationStrategy.SAVE
        DuplicationStrategy.parse(None)      # DuplicationStrategy.FORM
        DuplicationStrategy.parse("clone")   # DuplicationStrategy.FORM

    Describing an action button::

        item = ActionItem(label="Duplicate Post", href="/posts/new?_source_id=1")
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field

# Views an admin screen renders, and every action name its routes use
SCREEN_VIEWS = ("index", "new", "show", "edit")
SCREEN_ACTIONS = SCREEN_VIEWS + ("create", "update")


class DuplicationStrategy(str, Enum):
    """How a duplicate record is produced and surfaced.

    Attributes:
        FORM: Copy the source into a blank creation form. Nothing is saved
            until the user submits the form through the normal create flow.
        SAVE: Copy and persist the source in one request, then redirect to
            the edit view of the copy.
    """

    FORM = "form"
    SAVE = "save"

    @classmethod
    def parse(cls, value: Any) -> "DuplicationStrategy":
        """Normalize a configured value into a strategy.

        Only ``save`` selects the save strategy. Anything else, including
        ``None`` and unrecognized values, selects ``FORM``.

        Args:
            value: A strategy, a string, or None.

        Returns:
            The matching strategy.

        Examples:
            >>> DuplicationStrategy.parse("SAVE")
            <DuplicationStrategy.SAVE: 'save'>
            >>> DuplicationStrategy.parse(42)
            <DuplicationStrategy.FORM: 'form'>
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value.strip().lower() == cls.SAVE.value:
            return cls.SAVE
        return cls.FORM


class DuplicationOutcome(str, Enum):
    """Result of a single duplication request.

    Attributes:
        PREFILLED: The "new" form was pre-filled with a transient copy.
        SKIPPED: No usable source id was given; the form stays empty.
        SUCCEEDED: The copy was saved.
        FAILED: The copy was rejected by the record store.
    """

    PREFILLED = "prefilled"
    SKIPPED = "skipped"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ActionItem(BaseModel):
    """An action button rendered on an admin view.

    Attributes:
        label: Button text, already translated.
        href: Target URL of the button.
    """

    label: str = Field(..., min_length=1)
    href: str = Field(..., min_length=1)


class FlashMessage(BaseModel):
    """A one-time message that survives a redirect.

    Attributes:
        kind: ``notice`` for success messages, ``error`` for failures.
        message: User-facing text.
    """

    kind: Literal["notice", "error"]
    message: str
