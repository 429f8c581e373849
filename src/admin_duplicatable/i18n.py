"""Translation lookup for admin labels and notices.

Messages are looked up by key inside a scope and fall back to an English
default. Interpolation uses ``str.format`` placeholders.

Examples:
    >>> translator = Translator({"admin": {"duplicate_model": "Dupliquer {model}"}})
    >>> translator.t("duplicate_model", default="Duplicate {model}", model="Article")
    'Dupliquer Article'
    >>> Translator().t("duplicate_model", default="Duplicate {model}", model="Post")
    'Duplicate Post'
"""

from collections.abc import Mapping
from typing import Any

from admin_duplicatable.observability.logging import get_logger

logger = get_logger(__name__)

DUPLICATE_MODEL = "duplicate_model"
DUPLICATED = "duplicated"
NOT_DUPLICATED = "not_duplicated"

DEFAULT_MESSAGES = {
    DUPLICATE_MODEL: "Duplicate {model}",
    DUPLICATED: "{model} was successfully duplicated.",
    NOT_DUPLICATED: "{model} could not be duplicated.",
}


class Translator:
    """Scoped message catalog with English fallbacks.

    Attributes:
        translations: Mapping of scope name to a mapping of key to template.
        scope: Scope used when ``t()`` is called without one.
    """

    def __init__(
        self,
        translations: Mapping[str, Mapping[str, str]] | None = None,
        scope: str = "admin",
    ) -> None:
        self.translations = dict(translations or {})
        self.scope = scope

    def t(
        self,
        key: str,
        default: str | None = None,
        scope: str | None = None,
        **params: Any,
    ) -> str:
        """Translate a key, interpolating ``params`` into the template.

        Args:
            key: Message key, e.g. ``duplicate_model``.
            default: Template used when the catalog has no entry. When
                omitted, the built-in English message for the key is used.
            scope: Catalog scope; defaults to the translator's scope.
            **params: Values for the template placeholders.

        Returns:
            The translated, interpolated message. Keys with no entry and
            no default translate to the key itself.
        """
        scope = scope or self.scope
        template = self.translations.get(scope, {}).get(key)
        if template is None:
            template = default if default is not None else DEFAULT_MESSAGES.get(key, key)

        try:
            return template.format(**params)
        except (KeyError, IndexError, ValueError, AttributeError) as e:
            # Unknown placeholder, stray brace or bad field lookup; render it raw
            logger.warning(
                "i18n.interpolation_failed",
                key=key,
                scope=scope,
                error=str(e),
            )
            return template
