from notetaker.domains.notes.entities import Note
from notetaker.domains.notes.schemas import NoteBase, NoteCreate, NoteUpdate, NoteRead
from notetaker.domains.notes.listing import filter_notes, sort_notes, SORT_KEYS
from notetaker.domains.notes.services import NoteService

__all__ = [
    "Note",
    "NoteBase", "NoteCreate", "NoteUpdate", "NoteRead",
    "filter_notes", "sort_notes", "SORT_KEYS",
    "NoteService"
]
