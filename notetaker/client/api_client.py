import logging
from typing import Any, Dict, List, Optional

import httpx

from notetaker.core.errors import NoteApiError, NoteNotFoundError, NoteTransportError
from notetaker.domains.notes.schemas import NoteRead

logger = logging.getLogger(__name__)

NOTE_FIELDS = """
    id
    title
    body
    user
    location
    insertedAt
    updatedAt
"""

LIST_NOTES = f"""
query {{
  notes {{ {NOTE_FIELDS} }}
}}
"""

GET_NOTE = f"""
query ($id: ID!) {{
  getNote(id: $id) {{ {NOTE_FIELDS} }}
}}
"""

CREATE_NOTE = f"""
mutation ($title: String!, $body: String!, $user: String, $location: String) {{
  createNote(title: $title, body: $body, user: $user, location: $location) {{ {NOTE_FIELDS} }}
}}
"""

UPDATE_NOTE = f"""
mutation ($id: ID!, $title: String!, $body: String!, $user: String, $location: String) {{
  updateNote(id: $id, title: $title, body: $body, user: $user, location: $location) {{ {NOTE_FIELDS} }}
}}
"""

DELETE_NOTE = f"""
mutation ($id: ID!) {{
  deleteNote(id: $id) {{ {NOTE_FIELDS} }}
}}
"""

DELETE_ALL_NOTES = f"""
mutation {{
  deleteAllNotes {{ {NOTE_FIELDS} }}
}}
"""


class NoteApiClient:
    """Клиент GraphQL API заметок"""

    def __init__(self, http_client: httpx.AsyncClient, endpoint: str = "/graphql"):
        self.http_client = http_client
        self.endpoint = endpoint

    async def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Выполнение запроса; ошибки GraphQL превращаются в исключения"""
        try:
            response = await self.http_client.post(
                self.endpoint,
                json={"query": query, "variables": variables or {}}
            )
        except httpx.HTTPError as e:
            logger.error(f"GraphQL request failed: {e}")
            raise NoteTransportError(f"GraphQL request failed: {e}")

        try:
            payload = response.json()
        except ValueError:
            payload = None
        if not isinstance(payload, dict):
            raise NoteTransportError(f"Unexpected response from API (HTTP {response.status_code})")

        errors = payload.get("errors")
        if errors:
            first = errors[0]
            code = (first.get("extensions") or {}).get("code", "API_ERROR")
            if code == "NOT_FOUND":
                raise NoteNotFoundError((variables or {}).get("id"))
            raise NoteApiError(first.get("message", "GraphQL error"), code=code, details={"errors": errors})

        return payload.get("data") or {}

    async def list_notes(self) -> List[NoteRead]:
        data = await self.execute(LIST_NOTES)
        return [NoteRead.model_validate(note) for note in data["notes"]]

    async def get_note(self, note_id: str) -> NoteRead:
        data = await self.execute(GET_NOTE, {"id": note_id})
        return NoteRead.model_validate(data["getNote"])

    async def create_note(
        self,
        title: str,
        body: str,
        user: Optional[str] = None,
        location: Optional[str] = None
    ) -> NoteRead:
        data = await self.execute(
            CREATE_NOTE,
            {"title": title, "body": body, "user": user, "location": location}
        )
        return NoteRead.model_validate(data["createNote"])

    async def update_note(
        self,
        note_id: str,
        title: str,
        body: str,
        user: Optional[str] = None,
        location: Optional[str] = None
    ) -> NoteRead:
        data = await self.execute(
            UPDATE_NOTE,
            {"id": note_id, "title": title, "body": body, "user": user, "location": location}
        )
        return NoteRead.model_validate(data["updateNote"])

    async def delete_note(self, note_id: str) -> NoteRead:
        data = await self.execute(DELETE_NOTE, {"id": note_id})
        return NoteRead.model_validate(data["deleteNote"])

    async def delete_all_notes(self) -> List[NoteRead]:
        data = await self.execute(DELETE_ALL_NOTES)
        return [NoteRead.model_validate(note) for note in data["deleteAllNotes"]]

    async def aclose(self) -> None:
        await self.http_client.aclose()
