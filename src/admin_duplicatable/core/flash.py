"""Session-backed flash notices.

Flash messages are stored in the Starlette session under ``_flash`` and
removed the next time a view renders them. The application must install
``starlette.middleware.sessions.SessionMiddleware``.

Examples:
    >>> flash(request, "notice", "Post was successfully duplicated.")
    >>> pop_flashes(request)
    [FlashMessage(kind='notice', message='Post was successfully duplicated.')]
"""

from starlette.requests import Request

from admin_duplicatable.models import FlashMessage
from admin_duplicatable.observability.logging import get_logger

logger = get_logger(__name__)

FLASH_SESSION_KEY = "_flash"


def flash(request: Request, kind: str, message: str) -> None:
    """Queue a message for the next rendered view.

    Args:
        request: Current request.
        kind: ``notice`` or ``error``.
        message: User-facing text.
    """
    entry = FlashMessage(kind=kind, message=message)  # type: ignore[arg-type]

    if "session" not in request.scope:
        logger.warning("flash.no_session", kind=kind, message=message)
        return

    queued = list(request.session.get(FLASH_SESSION_KEY, []))
    queued.append(entry.model_dump())
    request.session[FLASH_SESSION_KEY] = queued


def pop_flashes(request: Request) -> list[FlashMessage]:
    """Return and clear the queued messages."""
    if "session" not in request.scope:
        return []
    queued = request.session.pop(FLASH_SESSION_KEY, [])
    return [FlashMessage.model_validate(entry) for entry in queued]
