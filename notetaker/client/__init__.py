from notetaker.client.api_client import NoteApiClient
from notetaker.client.store import NoteStore
from notetaker.client.editor import NoteEditor, NoteForm, EditorMode, EditorState

__all__ = [
    "NoteApiClient",
    "NoteStore",
    "NoteEditor", "NoteForm", "EditorMode", "EditorState"
]
