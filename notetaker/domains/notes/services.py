import logging
from typing import Optional, List, Any, Type
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from notetaker.core.errors import NoteValidationError
from notetaker.db.repositories.note_repository import NoteRepository
from notetaker.domains.notes.entities import Note
from notetaker.domains.notes.schemas import NoteCreate, NoteUpdate

logger = logging.getLogger(__name__)


MAX_NOTE_ID = 2 ** 63 - 1


def parse_note_id(note_id: Any) -> Optional[int]:
    """id приходит из GraphQL строкой; нечисловой id или id вне диапазона
    INTEGER не может существовать"""
    try:
        parsed = int(note_id)
    except (TypeError, ValueError):
        return None
    if not 1 <= parsed <= MAX_NOTE_ID:
        return None
    return parsed


def _validate(schema: Type[BaseModel], **fields) -> BaseModel:
    try:
        return schema(**fields)
    except ValidationError as e:
        invalid = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        logger.warning(f"Note validation failed for fields {invalid}")
        raise NoteValidationError(
            f"Invalid note: {', '.join(invalid)} must not be empty",
            details={"fields": invalid}
        )


class NoteService:
    """Сервис для работы с заметками"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repository = NoteRepository(session)

    async def list_notes(self) -> List[Note]:
        """Получение всех заметок"""
        return await self.note_repository.list_all()

    async def get_note(self, note_id: Any) -> Optional[Note]:
        """Получение заметки по id"""
        parsed_id = parse_note_id(note_id)
        if parsed_id is None:
            return None
        return await self.note_repository.get_by_id(parsed_id)

    async def create_note(
        self,
        title: str,
        body: str,
        user: Optional[str] = None,
        location: Optional[str] = None
    ) -> Note:
        """Создание новой заметки"""
        data = _validate(NoteCreate, title=title, body=body, user=user, location=location)

        note = Note.create_note(
            title=data.title,
            body=data.body,
            user=data.user,
            location=data.location
        )
        created = await self.note_repository.create(note)
        logger.info(f"Note {created.id} created")
        return created

    async def update_note(
        self,
        note_id: Any,
        title: str,
        body: str,
        user: Optional[str] = None,
        location: Optional[str] = None
    ) -> Optional[Note]:
        """Обновление заметки"""
        data = _validate(NoteUpdate, title=title, body=body, user=user, location=location)

        note = await self.get_note(note_id)
        if not note:
            return None

        note.update(
            title=data.title,
            body=data.body,
            user=data.user,
            location=data.location
        )
        updated = await self.note_repository.update(note)
        if updated:
            logger.info(f"Note {updated.id} updated")
        return updated

    async def delete_note(self, note_id: Any) -> Optional[Note]:
        """Удаление заметки"""
        parsed_id = parse_note_id(note_id)
        if parsed_id is None:
            return None

        deleted = await self.note_repository.delete(parsed_id)
        if deleted:
            logger.info(f"Note {deleted.id} deleted")
        return deleted

    async def delete_all_notes(self) -> List[Note]:
        """Удаление всех заметок"""
        deleted = await self.note_repository.delete_all()
        logger.info(f"Deleted all notes ({len(deleted)})")
        return deleted
