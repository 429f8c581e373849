"""Configuration module for resource duplication.

This module provides the DuplicationConfig class that selects the
duplication strategy for one admin resource and tunes the request surface
it registers.

Example:
    Basic usage with defaults:

        >>> config = DuplicationConfig()
        >>> config.via
        <DuplicationStrategy.FORM: 'form'>

    Duplicate by saving straight away:

        >>> config = DuplicationConfig(via="save")
        >>> config.via
        <DuplicationStrategy.SAVE: 'save'>

    Loading from environment:

        >>> import os
        >>> os.environ['DUPLICATABLE_VIA'] = 'save'
        >>> config = DuplicationConfig.from_env()

    Loading from dictionary:

        >>> config = DuplicationConfig.from_dict({'via': 'save', 'member_action': 'clone'})
"""

import os
import re
from typing import Any

from pydantic import BaseModel, Field, field_validator

from admin_duplicatable.models import SCREEN_ACTIONS, DuplicationStrategy

# Statuses that RedirectResponse may use for the duplicate redirects
VALID_REDIRECT_STATUSES = {301, 302, 303, 307, 308}

_PARAM_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_SEGMENT_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]*$")


class DuplicationConfig(BaseModel):
    """Configuration for duplicating the records of one admin resource.

    Attributes:
        via: Duplication strategy. ``save`` persists the copy immediately;
            every other value, including unrecognized ones, means ``form``.
            Default is ``form``.
        source_param: Query parameter carrying the source record id on the
            "new" view when duplicating via form. Default is ``_source_id``.
        member_action: Path segment of the member route registered when
            duplicating via save. Default is ``duplicate``.
        redirect_status: HTTP status used for the redirects issued after a
            save duplication. Default is 302.
        translation_scope: Scope under which labels and notices are looked
            up in the translation catalog. Default is ``admin``.

    Example:
        >>> config = DuplicationConfig(via="save", member_action="clone")
        >>> config.member_action
        'clone'

    Note:
        This class is immutable (frozen=True). Create a new instance if you
        need different settings.
    """

    via: DuplicationStrategy = Field(
        default=DuplicationStrategy.FORM,
        description="Duplication strategy: 'form' or 'save'",
    )
    source_param: str = Field(
        default="_source_id",
        description="Query parameter naming the source record on the new view",
    )
    member_action: str = Field(
        default="duplicate",
        description="Path segment of the save-duplication member route",
    )
    redirect_status: int = Field(
        default=302,
        description="HTTP status of the redirects issued after duplicating",
    )
    translation_scope: str = Field(
        default="admin",
        description="Translation catalog scope for labels and notices",
    )

    model_config = {"frozen": True}

    @field_validator("via", mode="before")
    @classmethod
    def validate_via(cls, v: Any) -> DuplicationStrategy:
        """Normalize the strategy, falling back to ``form``.

        Args:
            v: Strategy value as given by the caller.

        Returns:
            The normalized strategy.

        Example:
            >>> DuplicationConfig(via="bogus").via
            <DuplicationStrategy.FORM: 'form'>
        """
        return DuplicationStrategy.parse(v)

    @field_validator("source_param")
    @classmethod
    def validate_source_param(cls, v: str) -> str:
        """Validate the query parameter name.

        Raises:
            ValueError: If the name is empty or not identifier-like.
        """
        if not _PARAM_PATTERN.match(v):
            raise ValueError(f"source_param must be an identifier-like name, got {v!r}")
        return v

    @field_validator("member_action")
    @classmethod
    def validate_member_action(cls, v: str) -> str:
        """Validate the member route segment.

        Raises:
            ValueError: If the segment is empty, contains characters that
                do not belong in a URL path segment, or names one of the
                screen's own actions.
        """
        if not _SEGMENT_PATTERN.match(v):
            raise ValueError(
                f"member_action must be a lowercase path segment, got {v!r}"
            )
        if v in SCREEN_ACTIONS:
            raise ValueError(
                f"member_action must not reuse a screen action name, got {v!r}"
            )
        return v

    @field_validator("redirect_status")
    @classmethod
    def validate_redirect_status(cls, v: int) -> int:
        """Validate the redirect status code.

        Raises:
            ValueError: If the status is not a redirect status.
        """
        if v not in VALID_REDIRECT_STATUSES:
            raise ValueError(
                f"redirect_status must be one of "
                f"{', '.join(str(s) for s in sorted(VALID_REDIRECT_STATUSES))}, got {v}"
            )
        return v

    @field_validator("translation_scope")
    @classmethod
    def validate_translation_scope(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("translation_scope cannot be empty")
        return v.strip()

    @classmethod
    def from_env(cls, prefix: str = "DUPLICATABLE_") -> "DuplicationConfig":
        """Create configuration from environment variables.

        Variable names are the uppercase field names with the prefix, for
        example ``DUPLICATABLE_VIA``.

        Args:
            prefix: Prefix for environment variable names.

        Returns:
            DuplicationConfig populated from environment variables.

        Example:
            >>> import os
            >>> os.environ['DUPLICATABLE_VIA'] = 'save'
            >>> os.environ['DUPLICATABLE_REDIRECT_STATUS'] = '303'
            >>> config = DuplicationConfig.from_env()
            >>> config.redirect_status
            303
        """
        config_dict: dict[str, Any] = {}

        field_types = {
            "via": str,
            "source_param": str,
            "member_action": str,
            "redirect_status": int,
            "translation_scope": str,
        }

        for field_name, field_type in field_types.items():
            env_value = os.environ.get(f"{prefix}{field_name.upper()}")
            if env_value is not None:
                config_dict[field_name] = int(env_value) if field_type is int else env_value

        return cls(**config_dict)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "DuplicationConfig":
        """Create configuration from a dictionary.

        Args:
            config_dict: Dictionary with configuration values.

        Returns:
            DuplicationConfig populated from the dictionary.

        Raises:
            ValidationError: If the dictionary contains invalid values.
        """
        return cls(**config_dict)
