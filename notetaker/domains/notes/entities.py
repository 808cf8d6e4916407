from datetime import datetime, timedelta, timezone
from typing import Optional


def utcnow() -> datetime:
    """Текущее время UTC без tzinfo (так время хранится в таблице)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Note:
    """Сущность заметки домена Notes"""

    def __init__(
        self,
        title: str,
        body: str,
        user: Optional[str] = None,
        location: Optional[str] = None,
        id: Optional[int] = None,
        inserted_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.title = title
        self.body = body
        self.user = user
        self.location = location
        self.inserted_at = inserted_at or utcnow()
        self.updated_at = updated_at or self.inserted_at

    def update(
        self,
        title: str,
        body: str,
        user: Optional[str] = None,
        location: Optional[str] = None
    ) -> None:
        """Замена полей заметки с обновлением updated_at"""
        self.title = title
        self.body = body
        self.user = user
        self.location = location
        self.touch()

    def touch(self) -> None:
        """updated_at строго возрастает при каждом изменении"""
        now = utcnow()
        if now <= self.updated_at:
            now = self.updated_at + timedelta(microseconds=1)
        self.updated_at = now

    @classmethod
    def create_note(
        cls,
        title: str,
        body: str,
        user: Optional[str] = None,
        location: Optional[str] = None
    ) -> "Note":
        """Создание новой заметки: inserted_at == updated_at"""
        now = utcnow()
        return cls(
            title=title,
            body=body,
            user=user,
            location=location,
            inserted_at=now,
            updated_at=now
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Note):
            return False
        return self.id is not None and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Note(id={self.id}, title={self.title})"
