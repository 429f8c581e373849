"""Unit tests for MemoryRecordStore.

This test suite covers:
    - find() for existing and missing ids
    - save() id assignment and updates
    - Validator rejections
    - Isolation between stored and returned records
    - Concurrent saves
"""

import asyncio
from typing import Optional

import pytest
from pydantic import BaseModel

from admin_duplicatable.exceptions import RecordNotFoundError
from admin_duplicatable.storage.base import RecordStore
from admin_duplicatable.storage.memory import MemoryRecordStore


class Note(BaseModel):
    id: Optional[int] = None
    text: str
    labels: list[str] = []


@pytest.fixture
def store():
    """Create a fresh MemoryRecordStore for each test."""
    return MemoryRecordStore(name="notes")


# ============================================================================
# Basic Operations
# ============================================================================


def test_satisfies_protocol(store):
    assert isinstance(store, RecordStore)


@pytest.mark.asyncio
async def test_find_missing_raises(store):
    """Test that find() raises for unknown ids."""
    with pytest.raises(RecordNotFoundError) as exc_info:
        await store.find(42)

    assert exc_info.value.resource == "notes"
    assert exc_info.value.record_id == 42
    assert exc_info.value.message == "Couldn't find notes with id=42"


@pytest.mark.asyncio
async def test_save_assigns_sequential_ids(store):
    """Test that new records get 1, 2, 3... written back onto the instance."""
    first, second = Note(text="a"), Note(text="b")

    assert await store.save(first) is True
    assert await store.save(second) is True

    assert first.id == 1
    assert second.id == 2
    assert (await store.find(2)).text == "b"


@pytest.mark.asyncio
async def test_save_existing_updates(store):
    """Test that saving a record with an id overwrites it."""
    note = Note(text="a")
    await store.save(note)
    note.text = "changed"

    await store.save(note)

    assert (await store.find(1)).text == "changed"
    assert await store.count() == 1


@pytest.mark.asyncio
async def test_explicit_ids_advance_sequence(store):
    """Test that saving id=10 makes the next new record id=11."""
    await store.save(Note(id=10, text="imported"))
    fresh = Note(text="new")

    await store.save(fresh)

    assert fresh.id == 11


@pytest.mark.asyncio
async def test_all_is_ordered_by_id(store):
    await store.save(Note(id=5, text="five"))
    await store.save(Note(id=2, text="two"))

    assert [note.text for note in await store.all()] == ["two", "five"]


# ============================================================================
# String Ids
# ============================================================================


class Page(BaseModel):
    id: Optional[str] = None
    title: str


@pytest.fixture
def pages():
    return MemoryRecordStore(name="pages", id_type=str)


@pytest.mark.asyncio
async def test_string_ids_are_stored_as_given(pages):
    """Test that slug ids save and load without touching the sequence."""
    assert await pages.save(Page(id="about", title="About")) is True

    assert (await pages.find("about")).title == "About"
    fresh = Page(title="Fresh")
    await pages.save(fresh)
    assert fresh.id == "1"


@pytest.mark.asyncio
async def test_numeric_string_ids_advance_sequence(pages):
    await pages.save(Page(id="7", title="Imported"))
    fresh = Page(title="Fresh")

    await pages.save(fresh)

    assert fresh.id == "8"
    assert (await pages.find("8")).title == "Fresh"


@pytest.mark.asyncio
async def test_string_ids_ordering(pages):
    for record_id in ("10", "zeta", "2", "alpha"):
        await pages.save(Page(id=record_id, title=record_id))

    assert [page.id for page in await pages.all()] == ["2", "10", "alpha", "zeta"]


@pytest.mark.asyncio
async def test_slug_ids_in_integer_store(store):
    """Test that a non-numeric id never breaks the integer sequence."""
    await store.save(Page(id="about", title="About"))
    note = Note(text="a")

    await store.save(note)

    assert note.id == 1


# ============================================================================
# Validation
# ============================================================================


@pytest.mark.asyncio
async def test_validator_rejection_returns_false():
    """Test that rejected records are not stored and keep no id."""
    store = MemoryRecordStore(validator=lambda note: bool(note.text))
    note = Note(text="")

    assert await store.save(note) is False

    assert note.id is None
    assert await store.count() == 0


@pytest.mark.asyncio
async def test_validator_rejection_keeps_existing_record():
    store = MemoryRecordStore(validator=lambda note: bool(note.text))
    note = Note(text="ok")
    await store.save(note)
    note.text = ""

    assert await store.save(note) is False
    assert (await store.find(1)).text == "ok"


@pytest.mark.asyncio
async def test_rejection_does_not_consume_ids():
    store = MemoryRecordStore(validator=lambda note: note.text != "bad")
    await store.save(Note(text="bad"))
    good = Note(text="good")

    await store.save(good)

    assert good.id == 1


# ============================================================================
# Isolation
# ============================================================================


@pytest.mark.asyncio
async def test_returned_records_are_copies(store):
    await store.save(Note(text="a", labels=["x"]))

    found = await store.find(1)
    found.labels.append("y")

    assert (await store.find(1)).labels == ["x"]


@pytest.mark.asyncio
async def test_saved_instance_is_not_shared(store):
    note = Note(text="a", labels=["x"])
    await store.save(note)

    note.labels.append("y")

    assert (await store.find(1)).labels == ["x"]


# ============================================================================
# Concurrency
# ============================================================================


@pytest.mark.asyncio
async def test_concurrent_saves_get_distinct_ids(store):
    """Test that simultaneous saves never share an id."""
    notes = [Note(text=str(i)) for i in range(50)]

    results = await asyncio.gather(*(store.save(note) for note in notes))

    assert all(results)
    assert sorted(note.id for note in notes) == list(range(1, 51))
    assert await store.count() == 50
