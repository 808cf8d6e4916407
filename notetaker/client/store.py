import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from notetaker.client.api_client import NoteApiClient
from notetaker.domains.notes.listing import filter_notes, sort_notes
from notetaker.domains.notes.schemas import NoteRead

logger = logging.getLogger(__name__)


@dataclass
class _PendingLoad:
    """Локальные изменения, сделанные пока list_notes ждёт ответа"""
    removed: Set[str] = field(default_factory=set)
    upserted: Dict[str, NoteRead] = field(default_factory=dict)
    cleared: bool = False

    def merge(self, fetched: List[NoteRead]) -> List[NoteRead]:
        notes = [] if self.cleared else [n for n in fetched if n.id not in self.removed]
        for index, note in enumerate(notes):
            if note.id in self.upserted:
                notes[index] = self.upserted.pop(note.id)
        return notes + list(self.upserted.values())


class NoteStore:
    """Локальная коллекция заметок на стороне клиента.

    Первое обращение загружает список из API, дальше список читается из
    памяти и меняется только методами этого класса, которые сверяются с
    ответами сервера. Удаление оптимистичное: заметка пропадает из
    коллекции до ответа сервера и не возвращается, если запрос упал.
    Ответ list_notes не отменяет изменений, сделанных во время запроса.
    """

    def __init__(self, api: NoteApiClient):
        self.api = api
        self._notes: List[NoteRead] = []
        self._loaded = False
        self._pending_loads: List[_PendingLoad] = []

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def notes(self) -> Tuple[NoteRead, ...]:
        return tuple(self._notes)

    async def load(self, force: bool = False) -> Tuple[NoteRead, ...]:
        """Загрузка из сети при первом вызове или при force, иначе из памяти"""
        if force or not self._loaded:
            pending = _PendingLoad()
            self._pending_loads.append(pending)
            try:
                fetched = await self.api.list_notes()
            finally:
                self._pending_loads.remove(pending)
            self._notes = pending.merge(fetched)
            self._loaded = True
            logger.debug(f"Loaded {len(self._notes)} notes")
        return self.notes

    def view(self, phrase: Optional[str] = None, sort_key: str = "none", descending: bool = False) -> List[NoteRead]:
        """Отфильтрованная и отсортированная копия коллекции"""
        return sort_notes(filter_notes(self._notes, phrase), sort_key, descending)

    def get(self, note_id: str) -> Optional[NoteRead]:
        for note in self._notes:
            if note.id == note_id:
                return note
        return None

    def upsert(self, note: NoteRead) -> None:
        """Учесть заметку, которую вернул create/update"""
        for pending in self._pending_loads:
            pending.upserted[note.id] = note
        for index, existing in enumerate(self._notes):
            if existing.id == note.id:
                self._notes[index] = note
                return
        self._notes.append(note)

    def discard(self, note_id: str) -> Optional[NoteRead]:
        for pending in self._pending_loads:
            pending.removed.add(note_id)
            pending.upserted.pop(note_id, None)
        note = self.get(note_id)
        if note is not None:
            self._notes = [n for n in self._notes if n.id != note_id]
        return note

    async def create(self, **fields) -> NoteRead:
        note = await self.api.create_note(**fields)
        self.upsert(note)
        return note

    async def update(self, note_id: str, **fields) -> NoteRead:
        note = await self.api.update_note(note_id, **fields)
        self.upsert(note)
        return note

    async def delete(self, note_id: str) -> NoteRead:
        """Удаление заметки с немедленным обновлением коллекции"""
        self.discard(note_id)
        try:
            return await self.api.delete_note(note_id)
        except Exception:
            logger.error(f"Deleting note {note_id} failed after it was removed locally")
            raise

    async def delete_all(self) -> List[NoteRead]:
        """Удаление всех заметок с немедленной очисткой коллекции"""
        for pending in self._pending_loads:
            pending.cleared = True
            pending.upserted.clear()
        self._notes = []
        try:
            return await self.api.delete_all_notes()
        except Exception:
            logger.error("Deleting all notes failed after the local list was cleared")
            raise
