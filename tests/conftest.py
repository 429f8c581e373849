"""
Pytest configuration and shared fixtures for admin_duplicatable tests.
"""

from collections.abc import Callable

import pytest
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.sessions import SessionMiddleware

from admin_duplicatable.adapters.screen import AdminScreen


@pytest.fixture
def build_app() -> Callable[..., Starlette]:
    """Build a Starlette app serving the given screens with sessions enabled."""

    def _build(*screens: AdminScreen) -> Starlette:
        routes = []
        for screen in screens:
            routes.extend(screen.routes())
        return Starlette(
            routes=routes,
            middleware=[Middleware(SessionMiddleware, secret_key="test-secret")],
        )

    return _build
