import asyncio

import pytest

from notetaker.client.store import NoteStore
from notetaker.core.errors import NoteNotFoundError, NoteTransportError

from conftest import FakeNoteApi, make_note


async def test_first_load_fetches_then_reads_local_collection(fake_api):
    store = NoteStore(fake_api)
    assert not store.loaded

    await store.load()
    await store.load()

    assert fake_api.calls == ["list_notes"]
    assert [n.id for n in store.notes] == ["1", "2"]


async def test_forced_load_refetches(fake_api):
    store = NoteStore(fake_api)
    await store.load()
    await store.load(force=True)
    assert fake_api.calls == ["list_notes", "list_notes"]


async def test_view_filters_and_sorts_a_copy(fake_api):
    store = NoteStore(fake_api)
    await store.load()

    assert [n.id for n in store.view("milk eggs")] == ["1"]
    assert [n.id for n in store.view("milk", "by title", descending=True)] == ["2", "1"]
    assert [n.id for n in store.notes] == ["1", "2"]


async def test_delete_removes_note_without_refetch(fake_api):
    store = NoteStore(fake_api)
    await store.load()

    deleted = await store.delete("1")

    assert deleted.id == "1"
    assert [n.id for n in store.notes] == ["2"]
    assert fake_api.calls == ["list_notes", "delete_note"]


async def test_failed_delete_is_not_rolled_back(fake_api):
    store = NoteStore(fake_api)
    await store.load()
    fake_api.fail_with = NoteTransportError("connection refused")

    with pytest.raises(NoteTransportError):
        await store.delete("1")

    assert [n.id for n in store.notes] == ["2"]


async def test_delete_of_unknown_note_reports_not_found(fake_api):
    store = NoteStore(fake_api)
    await store.load()

    with pytest.raises(NoteNotFoundError):
        await store.delete("99")

    assert [n.id for n in store.notes] == ["1", "2"]


async def test_delete_all_empties_collection(fake_api):
    store = NoteStore(fake_api)
    await store.load()

    deleted = await store.delete_all()

    assert len(deleted) == 2
    assert store.notes == ()
    assert fake_api.calls == ["list_notes", "delete_all_notes"]


async def test_create_and_update_are_reconciled(fake_api):
    store = NoteStore(fake_api)
    await store.load()

    created = await store.create(title="Holiday", body="Book flights")
    assert store.get(created.id) == created

    updated = await store.update("1", title="Groceries", body="milk eggs bread")
    assert store.get("1") == updated
    assert [n.id for n in store.notes] == ["1", "2", created.id]
    assert fake_api.calls.count("list_notes") == 1


class GatedNoteApi(FakeNoteApi):
    """list_notes снимает копию списка и отвечает только после release"""

    def __init__(self, notes=()):
        super().__init__(notes)
        self.release = asyncio.Event()

    async def list_notes(self):
        snapshot = await super().list_notes()
        await self.release.wait()
        return snapshot


@pytest.fixture
def gated_api():
    return GatedNoteApi([
        make_note(1, "Shopping", "milk eggs", user="ann"),
        make_note(2, "Work", "milk report", user="bob"),
    ])


async def test_delete_during_load_is_not_undone_by_response(gated_api):
    store = NoteStore(gated_api)
    loading = asyncio.create_task(store.load(force=True))
    await asyncio.sleep(0)

    await store.delete("1")
    gated_api.release.set()
    await loading

    assert [n.id for n in store.notes] == ["2"]


async def test_delete_all_during_load_keeps_collection_empty(gated_api):
    store = NoteStore(gated_api)
    loading = asyncio.create_task(store.load(force=True))
    await asyncio.sleep(0)

    await store.delete_all()
    gated_api.release.set()
    await loading

    assert store.notes == ()


async def test_create_and_update_during_load_survive_response(gated_api):
    store = NoteStore(gated_api)
    loading = asyncio.create_task(store.load(force=True))
    await asyncio.sleep(0)

    created = await store.create(title="Holiday", body="Book flights")
    updated = await store.update("2", title="Work", body="milk report v2")
    gated_api.release.set()
    await loading

    assert [n.id for n in store.notes] == ["1", "2", created.id]
    assert store.get("2") == updated
