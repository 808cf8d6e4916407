from typing import Optional, List, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete

from notetaker.db.models.note import Note as NoteModel

if TYPE_CHECKING:
    from notetaker.domains.notes.entities import Note


class NoteRepository:
    """Репозиторий для работы с заметками"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, note: "Note") -> "Note":
        """Создание новой заметки, id назначает БД"""
        db_note = NoteModel(
            title=note.title,
            body=note.body,
            user=note.user,
            location=note.location,
            inserted_at=note.inserted_at,
            updated_at=note.updated_at
        )

        self.session.add(db_note)
        await self.session.commit()
        await self.session.refresh(db_note)
        return self._to_domain(db_note)

    async def get_by_id(self, note_id: int) -> Optional["Note"]:
        """Получение заметки по id"""
        db_note = await self.session.get(NoteModel, note_id)
        return self._to_domain(db_note) if db_note else None

    async def list_all(self) -> List["Note"]:
        """Все заметки в порядке хранения"""
        result = await self.session.execute(select(NoteModel).order_by(NoteModel.id))
        return [self._to_domain(db_note) for db_note in result.scalars().all()]

    async def update(self, note: "Note") -> Optional["Note"]:
        """Обновление заметки"""
        db_note = await self.session.get(NoteModel, note.id)
        if not db_note:
            return None

        db_note.title = note.title
        db_note.body = note.body
        db_note.user = note.user
        db_note.location = note.location
        db_note.updated_at = note.updated_at

        await self.session.commit()
        await self.session.refresh(db_note)
        return self._to_domain(db_note)

    async def delete(self, note_id: int) -> Optional["Note"]:
        """Удаление заметки; возвращает удалённую заметку"""
        db_note = await self.session.get(NoteModel, note_id)
        if not db_note:
            return None

        deleted = self._to_domain(db_note)
        await self.session.delete(db_note)
        await self.session.commit()
        return deleted

    async def delete_all(self) -> List["Note"]:
        """Удаление всех заметок; возвращает удалённые"""
        deleted = await self.list_all()
        await self.session.execute(delete(NoteModel))
        await self.session.commit()
        return deleted

    def _to_domain(self, db_note: NoteModel) -> "Note":
        """Преобразование модели БД в доменную сущность"""
        from notetaker.domains.notes.entities import Note

        return Note(
            id=db_note.id,
            title=db_note.title,
            body=db_note.body,
            user=db_note.user,
            location=db_note.location,
            inserted_at=db_note.inserted_at,
            updated_at=db_note.updated_at
        )
