"""Deep copying of records and their associations.

A copier turns a stored record into an unsaved duplicate. The default
implementation works on pydantic models: nested models and collections
(associations) are copied recursively, identity fields are cleared and an
optional hook can adjust the copy.

Examples:
    Copy a post with its comments::

        from admin_duplicatable.core.copier import ModelDeepCopier

        copier = ModelDeepCopier()
        duplicate = copier.deep_copy(post)
        assert duplicate.id is None
        assert duplicate.comments == post.comments
        assert duplicate.comments is not post.comments

    Mark copies and skip a field::

        def suffix_title(post):
            post.title = f"{post.title} (copy)"
            return post

        copier = ModelDeepCopier(exclude=("slug",), tweak=suffix_title)
"""

from collections.abc import Callable, Iterable
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel


@runtime_checkable
class DeepCopier(Protocol):
    """Produces an association-aware, unsaved clone of a record."""

    def deep_copy(self, record: Any) -> Any:
        """Return an unsaved duplicate of ``record``."""
        ...


class ModelDeepCopier(DeepCopier):
    """Deep copier for pydantic models.

    Attributes:
        exclude: Fields reset to their declared default on the copy, or to
            None when the field has no default.
        reset: Fields set to None on the copy, on the record itself and on
            every nested model (associations get fresh identities too).
        tweak: Optional callable receiving the copy and returning the
            (possibly modified) copy.
    """

    def __init__(
        self,
        exclude: Iterable[str] = (),
        reset: Iterable[str] = ("id",),
        tweak: Callable[[Any], Any] | None = None,
    ) -> None:
        self.exclude = tuple(exclude)
        self.reset = tuple(reset)
        self.tweak = tweak

    def deep_copy(self, record: BaseModel) -> BaseModel:
        """Return an unsaved duplicate of ``record``.

        Args:
            record: The source record. It is never modified.

        Returns:
            A new model instance sharing no mutable state with the source.
        """
        duplicate = record.model_copy(deep=True)

        for name in self.exclude:
            field = type(duplicate).model_fields.get(name)
            if field is not None:
                default = None if field.is_required() else field.get_default(call_default_factory=True)
                setattr(duplicate, name, default)

        self._reset_identity(duplicate)

        if self.tweak is not None:
            duplicate = self.tweak(duplicate)
        return duplicate

    def _reset_identity(self, value: Any) -> None:
        if isinstance(value, BaseModel):
            for name in self.reset:
                if name in type(value).model_fields:
                    setattr(value, name, None)
            for name in type(value).model_fields:
                self._reset_identity(getattr(value, name, None))
        elif isinstance(value, (list, tuple, set)):
            for item in value:
                self._reset_identity(item)
        elif isinstance(value, dict):
            for item in value.values():
                self._reset_identity(item)
