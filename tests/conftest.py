import os
import tempfile
from datetime import datetime, timedelta
from pathlib import Path

# Настройки читаются при импорте notetaker, поэтому окружение задаётся до него
_DB_DIR = tempfile.mkdtemp(prefix="notetaker-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{Path(_DB_DIR) / 'test.db'}"
os.environ["API_URL"] = ""
os.environ["CREATE_TABLES"] = "false"

import httpx
import pytest

import notetaker.db.models  # noqa: F401
from notetaker.core.db import Base, engine
from notetaker.core.errors import NoteNotFoundError, NoteValidationError
from notetaker.domains.notes.schemas import NoteRead
from notetaker.main import app


@pytest.fixture
async def db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest.fixture
async def client(db):
    app.state.note_store = None
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    store = app.state.note_store
    if store is not None:
        await store.api.aclose()
    app.state.note_store = None


async def gql(client, query, variables=None):
    response = await client.post("/graphql", json={"query": query, "variables": variables or {}})
    assert response.status_code == 200
    return response.json()


def make_note(note_id, title="Title", body="Body", user=None, location=None, inserted_at=None, updated_at=None):
    inserted_at = inserted_at or datetime(2024, 1, 1, 12, 0, 0)
    return NoteRead(
        id=str(note_id),
        title=title,
        body=body,
        user=user,
        location=location,
        inserted_at=inserted_at,
        updated_at=updated_at or inserted_at
    )


class FakeNoteApi:
    """API заметок в памяти; считает обращения к каждой операции"""

    def __init__(self, notes=()):
        self.notes = {note.id: note for note in notes}
        self.calls = []
        self.fail_with = None
        self._next_id = max((int(n) for n in self.notes), default=0) + 1

    def _call(self, name):
        self.calls.append(name)
        if self.fail_with is not None:
            raise self.fail_with

    async def list_notes(self):
        self._call("list_notes")
        return list(self.notes.values())

    async def get_note(self, note_id):
        self._call("get_note")
        if note_id not in self.notes:
            raise NoteNotFoundError(note_id)
        return self.notes[note_id]

    async def create_note(self, title, body, user=None, location=None):
        self._call("create_note")
        if not title or not body:
            raise NoteValidationError("Invalid note")
        note = make_note(self._next_id, title, body, user, location)
        self._next_id += 1
        self.notes[note.id] = note
        return note

    async def update_note(self, note_id, title, body, user=None, location=None):
        self._call("update_note")
        if note_id not in self.notes:
            raise NoteNotFoundError(note_id)
        old = self.notes[note_id]
        note = make_note(
            note_id, title, body, user, location,
            inserted_at=old.inserted_at,
            updated_at=old.inserted_at + timedelta(seconds=1)
        )
        self.notes[note_id] = note
        return note

    async def delete_note(self, note_id):
        self._call("delete_note")
        if note_id not in self.notes:
            raise NoteNotFoundError(note_id)
        return self.notes.pop(note_id)

    async def delete_all_notes(self):
        self._call("delete_all_notes")
        deleted = list(self.notes.values())
        self.notes.clear()
        return deleted

    async def aclose(self):
        pass


@pytest.fixture
def fake_api():
    return FakeNoteApi([
        make_note(1, "Shopping", "milk eggs", user="ann"),
        make_note(2, "Work", "milk report", user="bob"),
    ])
