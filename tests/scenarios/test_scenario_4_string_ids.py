"""Scenario 4: Duplicating records keyed by string ids

This module runs both duplication strategies on a screen whose records use
slug ids (``id_convertor="str"``):
- The form strategy links to ``new?_source_id=<slug>`` and pre-fills the form
- The save strategy copies the slugged record under the next sequence id
- Unknown slugs fall back to the empty form, or render a 404 via save
"""

import asyncio
from typing import Optional

import pytest
from pydantic import BaseModel
from starlette.testclient import TestClient

from admin_duplicatable.adapters.screen import AdminScreen
from admin_duplicatable.core.duplicatable import duplicatable
from admin_duplicatable.storage.memory import MemoryRecordStore


class Article(BaseModel):
    """Article model keyed by slug."""

    id: Optional[str] = None
    title: str
    tags: list[str] = []


@pytest.fixture
def store() -> MemoryRecordStore:
    """Create a store holding one slugged article."""
    store = MemoryRecordStore(name="articles", id_type=str)
    asyncio.run(store.save(Article(id="intro", title="Introduction", tags=["guide"])))
    return store


def _screen(store: MemoryRecordStore, **options: str) -> AdminScreen:
    screen = AdminScreen(Article, store, id_convertor="str")
    duplicatable(screen, **options)
    return screen


# ============================================================================
# Via form
# ============================================================================


def test_form_button_carries_slug(build_app, store: MemoryRecordStore) -> None:
    client = TestClient(build_app(_screen(store)))

    assert client.get("/articles/intro").json()["action_items"] == [
        {
            "label": "Duplicate Article",
            "href": "http://testserver/articles/new?_source_id=intro",
        }
    ]


def test_form_prefilled_from_slug(build_app, store: MemoryRecordStore) -> None:
    client = TestClient(build_app(_screen(store)))

    body = client.get("/articles/new", params={"_source_id": "intro"}).json()

    assert body["form"] == {"title": "Introduction", "tags": ["guide"]}
    assert asyncio.run(store.count()) == 1


def test_form_unknown_slug_renders_empty_form(build_app, store: MemoryRecordStore) -> None:
    client = TestClient(build_app(_screen(store)))

    body = client.get("/articles/new", params={"_source_id": "missing"}).json()

    assert body["form"] == {"title": None, "tags": []}


# ============================================================================
# Via save
# ============================================================================


def test_save_duplicates_slugged_record(build_app, store: MemoryRecordStore) -> None:
    client = TestClient(build_app(_screen(store, via="save")))

    response = client.post("/articles/intro/duplicate", follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"] == "http://testserver/articles/1/edit"

    edit = client.get("/articles/1/edit").json()
    assert edit["id"] == "1"
    assert edit["form"] == {"title": "Introduction", "tags": ["guide"]}
    assert edit["flash"] == [
        {"kind": "notice", "message": "Article was successfully duplicated."}
    ]


def test_save_button_carries_slug(build_app, store: MemoryRecordStore) -> None:
    client = TestClient(build_app(_screen(store, via="save")))

    item = client.get("/articles/intro").json()["action_items"][0]

    assert item["href"] == "http://testserver/articles/intro/duplicate"


def test_save_unknown_slug_is_404(build_app, store: MemoryRecordStore) -> None:
    client = TestClient(build_app(_screen(store, via="save")))

    response = client.post("/articles/missing/duplicate")

    assert response.status_code == 404
    assert asyncio.run(store.count()) == 1
