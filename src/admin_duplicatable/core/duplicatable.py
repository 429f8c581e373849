"""Duplication feature for admin screens.

Enabling duplication on a screen registers one of two behaviors:

Via form (default):
    - A "Duplicate {Model}" button on the show view links to the new view
      with ``?_source_id=<id>``.
    - A before action on the new view deep-copies the source record and
      uses the unsaved copy to pre-fill the form. Blank, malformed or
      unknown source ids fall back to the empty form silently.

Via save:
    - A "Duplicate {Model}" button on the show view links to the member
      route ``/{id}/duplicate``.
    - The member action deep-copies the record, saves the copy and
      redirects to the copy's edit view with a notice, or back to the
      source's show view with an error when the store rejects the copy.
      Unknown source ids are not caught and render as a 404.

Saving via form is left to the screen's normal create flow, so a copy
made for the form is never persisted by this module.

Examples:
    Duplicate posts via the new form::

        posts = AdminScreen(Post, MemoryRecordStore(name="posts"))
        duplicatable(posts)

    Duplicate posts, including fields the form does not show, via save::

        duplicatable(posts, via="save")

    Full control over copying and labels::

        Duplicatable(
            DuplicationConfig(via="save", member_action="clone"),
            copier=ModelDeepCopier(tweak=suffix_title),
            translator=Translator({"admin": {"duplicate_model": "Clone {model}"}}),
        ).register(posts)
"""

from contextlib import AbstractContextManager
from typing import Any

from starlette.requests import Request
from starlette.responses import Response

from admin_duplicatable.adapters.screen import AdminScreen, ViewContext
from admin_duplicatable.config import DuplicationConfig
from admin_duplicatable.core.copier import DeepCopier, ModelDeepCopier
from admin_duplicatable.core.flash import flash
from admin_duplicatable.exceptions import RecordNotFoundError, RegistrationError
from admin_duplicatable.i18n import DUPLICATE_MODEL, DUPLICATED, NOT_DUPLICATED, Translator
from admin_duplicatable.models import ActionItem, DuplicationOutcome, DuplicationStrategy
from admin_duplicatable.observability.logging import bound_duplication_context, get_logger
from admin_duplicatable.observability.metrics import record_duplication, record_registration

logger = get_logger(__name__)

ACTION_ITEM_NAME = "duplicate"


class Duplicatable:
    """Registers resource duplication on admin screens.

    One instance can be registered on several screens; it holds no
    per-request state.

    Attributes:
        config: Strategy and request-surface settings.
        copier: Deep-copy service producing unsaved duplicates.
        translator: Overrides the screen's translator when given.
    """

    def __init__(
        self,
        config: DuplicationConfig | None = None,
        copier: DeepCopier | None = None,
        translator: Translator | None = None,
    ) -> None:
        self.config = config or DuplicationConfig()
        self.copier = copier or ModelDeepCopier()
        self.translator = translator

    def register(self, screen: AdminScreen) -> None:
        """Enable duplication on ``screen``.

        Nothing is registered when this raises.

        Raises:
            RegistrationError: If duplication is already enabled on the
                screen, or the screen rejects the member action.
        """
        if screen.has_action_item(ACTION_ITEM_NAME):
            raise RegistrationError(
                f"Duplication is already enabled on {screen.name!r}", resource=screen.name
            )

        if self.config.via is DuplicationStrategy.SAVE:
            self._enable_via_save(screen)
        else:
            self._enable_via_form(screen)

        record_registration(screen.name, self.config.via.value)
        with self._log_context(screen):
            logger.info("duplication.registered")

    def _enable_via_form(self, screen: AdminScreen) -> None:
        param = self.config.source_param

        def render(request: Request, context: ViewContext) -> ActionItem:
            url = screen.url_for(request, "new").include_query_params(
                **{param: context.resource.id}
            )
            return ActionItem(label=self._button_label(screen), href=str(url))

        async def preload_source(request: Request, context: ViewContext) -> None:
            raw = request.query_params.get(param, "").strip()
            if not raw:
                return

            with self._log_context(screen):
                try:
                    source = await screen.store.find(screen.parse_id(raw))
                except (ValueError, RecordNotFoundError):
                    self._track(screen, DuplicationOutcome.SKIPPED, source_id=raw)
                    return

                if context.resource is None:
                    context.resource = self.copier.deep_copy(source)
                self._track(screen, DuplicationOutcome.PREFILLED, source_id=source.id)

        screen.action_item(ACTION_ITEM_NAME, render, only=("show",))
        screen.before_action("new", preload_source)

    def _enable_via_save(self, screen: AdminScreen) -> None:
        member = self.config.member_action

        def render(request: Request, context: ViewContext) -> ActionItem:
            url = screen.url_for(request, member, id=context.resource.id)
            return ActionItem(label=self._button_label(screen), href=str(url))

        async def duplicate(request: Request, screen: AdminScreen) -> Response:
            with self._log_context(screen):
                resource = await screen.store.find(request.path_params["id"])
                copy = self.copier.deep_copy(resource)

                if await screen.store.save(copy):
                    self._track(
                        screen,
                        DuplicationOutcome.SUCCEEDED,
                        source_id=resource.id,
                        duplicate_id=copy.id,
                    )
                    flash(request, "notice", self._message(screen, DUPLICATED))
                    return screen.redirect(
                        request, "edit", status_code=self.config.redirect_status, id=copy.id
                    )

                self._track(screen, DuplicationOutcome.FAILED, source_id=resource.id)
                flash(request, "error", self._message(screen, NOT_DUPLICATED))
                return screen.redirect(
                    request, "show", status_code=self.config.redirect_status, id=resource.id
                )

        # Member route first, so a rejected route leaves no button behind
        screen.member_action(member, duplicate, methods=("GET", "POST"))
        screen.action_item(ACTION_ITEM_NAME, render, only=("show",))

    def _translator(self, screen: AdminScreen) -> Translator:
        return self.translator or screen.translator

    def _button_label(self, screen: AdminScreen) -> str:
        return self._message(screen, DUPLICATE_MODEL)

    def _message(self, screen: AdminScreen, key: str) -> str:
        return self._translator(screen).t(
            key, scope=self.config.translation_scope, model=screen.label
        )

    def _log_context(self, screen: AdminScreen) -> AbstractContextManager[Any]:
        return bound_duplication_context(screen.name, self.config.via.value)

    def _track(self, screen: AdminScreen, outcome: DuplicationOutcome, **fields: Any) -> None:
        record_duplication(screen.name, self.config.via.value, outcome.value)
        log = logger.warning if outcome is DuplicationOutcome.FAILED else logger.info
        log(f"duplication.{outcome.value}", **fields)


def duplicatable(
    screen: AdminScreen,
    config: DuplicationConfig | None = None,
    *,
    copier: DeepCopier | None = None,
    translator: Translator | None = None,
    **options: Any,
) -> None:
    """Enable duplication on ``screen``.

    Args:
        screen: The resource's admin screen.
        config: Full configuration. Keyword ``options`` override its fields.
        copier: Deep-copy service; defaults to ModelDeepCopier.
        translator: Translation lookup; defaults to the screen's.
        **options: Configuration fields, e.g. ``via="save"``.

    Examples:
        >>> duplicatable(posts, via="save")
    """
    if options:
        base = config.model_dump() if config is not None else {}
        config = DuplicationConfig.from_dict({**base, **options})

    Duplicatable(config, copier=copier, translator=translator).register(screen)
