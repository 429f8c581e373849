"""Admin screen for one resource, served through Starlette.

The AdminScreen is the registry the duplication feature hooks into. It
owns the resource's record store and exposes three extension points:

1. Action items: buttons rendered on selected views (index, new, show, edit)
2. Before actions: async pre-handlers run before a view is rendered
3. Member actions: custom routes scoped to a single record

Views render JSON documents describing the page: the resource label, the
record or form values, the visible action items and pending flash notices.

Examples:
    Mounting a screen on a Starlette application::

        from starlette.applications import Starlette
        from starlette.middleware import Middleware
        from starlette.middleware.sessions import SessionMiddleware

        from admin_duplicatable.adapters.screen import AdminScreen
        from admin_duplicatable.storage.memory import MemoryRecordStore

        posts = AdminScreen(Post, MemoryRecordStore(name="posts"))

        app = Starlette(
            routes=posts.routes(),
            middleware=[Middleware(SessionMiddleware, secret_key="change-me")],
        )

    Routes registered for ``posts``::

        GET  /posts                  posts:index
        GET  /posts/new              posts:new
        POST /posts                  posts:create
        GET  /posts/{id}             posts:show
        GET  /posts/{id}/edit        posts:edit
        POST /posts/{id}             posts:update
        *    /posts/{id}/<member>    posts:<member>

    Member actions must be registered before ``mount()``, which copies the
    routes into the application once.
"""

from collections.abc import Awaitable, Callable, Iterable
from typing import Any, Literal

from pydantic import BaseModel, ValidationError
from pydantic_core import to_jsonable_python
from starlette.datastructures import URL
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse, RedirectResponse, Response
from starlette.routing import BaseRoute, Route

from admin_duplicatable.core.flash import pop_flashes
from admin_duplicatable.exceptions import RecordNotFoundError, RegistrationError
from admin_duplicatable.i18n import Translator
from admin_duplicatable.models import SCREEN_ACTIONS, SCREEN_VIEWS, ActionItem
from admin_duplicatable.observability.logging import get_logger
from admin_duplicatable.storage.base import RecordStore

logger = get_logger(__name__)

VIEWS = SCREEN_VIEWS


class ViewContext:
    """Per-request state shared by before actions and the view.

    Attributes:
        action: Name of the view being rendered.
        record_id: Identifier from the path, None for collection views.
        resource: Record the view renders. Before actions may set it; the
            "new" view only builds an empty record when it is still None.
    """

    def __init__(self, action: str, record_id: Any = None) -> None:
        self.action = action
        self.record_id = record_id
        self.resource: Any = None


ActionItemRenderer = Callable[[Request, ViewContext], ActionItem | None]
BeforeAction = Callable[[Request, ViewContext], Awaitable[None]]
MemberHandler = Callable[[Request, "AdminScreen"], Awaitable[Response]]


class _ActionItemRegistration:
    def __init__(self, name: str, render: ActionItemRenderer, only: frozenset[str]) -> None:
        self.name = name
        self.render = render
        self.only = only


class _MemberActionRegistration:
    def __init__(self, name: str, handler: MemberHandler, methods: tuple[str, ...]) -> None:
        self.name = name
        self.handler = handler
        self.methods = methods


class AdminScreen:
    """Auto-generated management screen for one resource.

    Attributes:
        model: Pydantic model class of the resource's records.
        store: Record store used for lookups and persistence.
        name: URL prefix and route-name namespace, e.g. ``posts``.
        label: Display label, e.g. ``Post``.
        translator: Translation lookup for labels and notices.
        id_convertor: Starlette path convertor for record ids. With ``str``
            the store must key records by string ids, e.g.
            ``MemoryRecordStore(id_type=str)``.
    """

    def __init__(
        self,
        model: type[BaseModel],
        store: RecordStore,
        name: str | None = None,
        label: str | None = None,
        translator: Translator | None = None,
        id_convertor: Literal["int", "str"] = "int",
    ) -> None:
        if "id" not in model.model_fields:
            raise RegistrationError(
                f"{model.__name__} has no 'id' field",
                resource=name or model.__name__,
            )

        self.model = model
        self.store = store
        self.name = name or f"{model.__name__.lower()}s"
        self.label = label or model.__name__
        self.translator = translator or Translator()
        self.id_convertor = id_convertor
        self._action_items: list[_ActionItemRegistration] = []
        self._before_actions: dict[str, list[BeforeAction]] = {view: [] for view in VIEWS}
        self._member_actions: dict[str, _MemberActionRegistration] = {}
        self._mounted = False

    # ------------------------------------------------------------------
    # Extension points
    # ------------------------------------------------------------------

    def action_item(
        self,
        name: str,
        render: ActionItemRenderer,
        only: Iterable[str] = ("show",),
    ) -> None:
        """Register an action button.

        Args:
            name: Unique name of the button on this screen.
            render: Called per request with the request and view context;
                returns the button or None to hide it.
            only: Views the button appears on.

        Raises:
            RegistrationError: If the name is taken or a view is unknown.
        """
        views = frozenset(only)
        unknown = views - set(VIEWS)
        if unknown:
            raise RegistrationError(
                f"Unknown views for action item {name!r}: {', '.join(sorted(unknown))}",
                resource=self.name,
            )
        if self.has_action_item(name):
            raise RegistrationError(
                f"Action item {name!r} is already registered", resource=self.name
            )

        self._action_items.append(_ActionItemRegistration(name, render, views))

    def has_action_item(self, name: str) -> bool:
        return any(item.name == name for item in self._action_items)

    def before_action(self, action: str, callback: BeforeAction) -> None:
        """Register an async pre-handler for a view.

        Raises:
            RegistrationError: If the view is unknown.
        """
        if action not in self._before_actions:
            raise RegistrationError(
                f"Cannot add a before action to unknown view {action!r}",
                resource=self.name,
            )
        self._before_actions[action].append(callback)

    def member_action(
        self,
        name: str,
        handler: MemberHandler,
        methods: Iterable[str] = ("GET",),
    ) -> None:
        """Register a custom route at ``/<name>/{id}/<action>``.

        Args:
            name: Path segment and route-name suffix.
            handler: Async callable receiving the request and this screen.
            methods: HTTP methods the route accepts.

        Raises:
            RegistrationError: If the name collides with a screen action or
                another member action, or the screen is already mounted.
        """
        if self._mounted:
            raise RegistrationError(
                f"Cannot add member action {name!r} after the screen was mounted",
                resource=self.name,
            )
        if name in SCREEN_ACTIONS or name in self._member_actions:
            raise RegistrationError(
                f"Member action {name!r} is already registered", resource=self.name
            )

        self._member_actions[name] = _MemberActionRegistration(
            name, handler, tuple(method.upper() for method in methods)
        )
        logger.debug("screen.member_action_registered", resource=self.name, action=name)

    # ------------------------------------------------------------------
    # Helpers for views and extensions
    # ------------------------------------------------------------------

    def parse_id(self, raw: Any) -> Any:
        """Convert a raw identifier (e.g. a query string value).

        Raises:
            ValueError: If the value is not a valid identifier.
        """
        if self.id_convertor == "int":
            return int(raw)
        return str(raw)

    def url_for(self, request: Request, action: str, **path_params: Any) -> URL:
        """Build the URL of one of this screen's routes."""
        return request.url_for(f"{self.name}:{action}", **path_params)

    def redirect(
        self,
        request: Request,
        action: str,
        status_code: int = 303,
        **path_params: Any,
    ) -> RedirectResponse:
        """Redirect to one of this screen's routes."""
        url = self.url_for(request, action, **path_params)
        return RedirectResponse(str(url), status_code=status_code)

    def routes(self) -> list[BaseRoute]:
        """Build the Starlette routes of this screen."""
        prefix = f"/{self.name}"
        member = f"{prefix}/{{id:{self.id_convertor}}}"

        routes: list[BaseRoute] = [
            Route(prefix, self._guard(self.index), methods=["GET"], name=f"{self.name}:index"),
            Route(f"{prefix}/new", self._guard(self.new), methods=["GET"], name=f"{self.name}:new"),
            Route(prefix, self._guard(self.create), methods=["POST"], name=f"{self.name}:create"),
            Route(member, self._guard(self.show), methods=["GET"], name=f"{self.name}:show"),
            Route(f"{member}/edit", self._guard(self.edit), methods=["GET"], name=f"{self.name}:edit"),
            Route(member, self._guard(self.update), methods=["POST"], name=f"{self.name}:update"),
        ]

        for registration in self._member_actions.values():
            routes.append(
                Route(
                    f"{member}/{registration.name}",
                    self._guard(self._member_endpoint(registration)),
                    methods=list(registration.methods),
                    name=f"{self.name}:{registration.name}",
                )
            )

        return routes

    def mount(self, app: Any) -> None:
        """Append this screen's routes to a Starlette or FastAPI application.

        Later member actions are rejected, since the application only sees
        the routes that exist now.
        """
        app.router.routes.extend(self.routes())
        self._mounted = True

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    async def index(self, request: Request) -> Response:
        context = ViewContext("index")
        await self._run_before_actions(request, context)
        records = await self.store.all()
        return self._render(
            request,
            context,
            records=[record.model_dump(mode="json") for record in records],
        )

    async def new(self, request: Request) -> Response:
        context = ViewContext("new")
        await self._run_before_actions(request, context)
        if context.resource is None:
            context.resource = self.model.model_construct()
        return self._render(request, context, form=self._form_values(context.resource))

    async def create(self, request: Request) -> Response:
        payload = await self._json_body(request)
        payload.pop("id", None)
        return await self._persist(request, payload)

    async def show(self, request: Request) -> Response:
        context = ViewContext("show", request.path_params["id"])
        context.resource = await self.store.find(context.record_id)
        await self._run_before_actions(request, context)
        return self._render(request, context, record=context.resource.model_dump(mode="json"))

    async def edit(self, request: Request) -> Response:
        context = ViewContext("edit", request.path_params["id"])
        context.resource = await self.store.find(context.record_id)
        await self._run_before_actions(request, context)
        return self._render(
            request,
            context,
            id=to_jsonable_python(context.resource.id),
            form=self._form_values(context.resource),
        )

    async def update(self, request: Request) -> Response:
        record = await self.store.find(request.path_params["id"])
        payload = {**record.model_dump(), **await self._json_body(request), "id": record.id}
        return await self._persist(request, payload)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _guard(
        self, endpoint: Callable[[Request], Awaitable[Response]]
    ) -> Callable[[Request], Awaitable[Response]]:
        # Missing records render as the framework's standard 404
        async def guarded(request: Request) -> Response:
            try:
                return await endpoint(request)
            except RecordNotFoundError as e:
                raise HTTPException(status_code=404, detail=e.message) from e

        return guarded

    def _member_endpoint(
        self, registration: _MemberActionRegistration
    ) -> Callable[[Request], Awaitable[Response]]:
        async def endpoint(request: Request) -> Response:
            return await registration.handler(request, self)

        return endpoint

    async def _run_before_actions(self, request: Request, context: ViewContext) -> None:
        for callback in self._before_actions[context.action]:
            await callback(request, context)

    async def _json_body(self, request: Request) -> dict[str, Any]:
        try:
            payload = await request.json()
        except ValueError as e:
            raise HTTPException(status_code=400, detail="Request body must be JSON") from e
        if not isinstance(payload, dict):
            raise HTTPException(status_code=400, detail="Request body must be a JSON object")
        return payload

    async def _persist(self, request: Request, payload: dict[str, Any]) -> Response:
        try:
            record = self.model.model_validate(payload)
        except ValidationError as e:
            return JSONResponse(
                {"errors": to_jsonable_python(e.errors(include_url=False, include_context=False))},
                status_code=422,
            )

        if not await self.store.save(record):
            return JSONResponse(
                {"errors": [{"msg": f"{self.label} could not be saved"}]},
                status_code=422,
            )
        return self.redirect(request, "show", id=record.id)

    def _form_values(self, record: Any) -> dict[str, Any]:
        return {
            name: to_jsonable_python(getattr(record, name, None))
            for name in self.model.model_fields
            if name != "id"
        }

    def _visible_action_items(self, request: Request, context: ViewContext) -> list[dict[str, str]]:
        items = []
        for registration in self._action_items:
            if context.action not in registration.only:
                continue
            item = registration.render(request, context)
            if item is not None:
                items.append(item.model_dump())
        return items

    def _render(self, request: Request, context: ViewContext, **body: Any) -> JSONResponse:
        return JSONResponse(
            {
                "resource": self.label,
                "action": context.action,
                **body,
                "action_items": self._visible_action_items(request, context),
                "flash": [message.model_dump() for message in pop_flashes(request)],
            }
        )
