from notetaker.db.models.note import Note

__all__ = [
    "Note"
]
