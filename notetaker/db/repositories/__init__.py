from notetaker.db.repositories.note_repository import NoteRepository

__all__ = [
    "NoteRepository"
]
