from pydantic import BaseModel, Field, field_validator, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime


class NoteBase(BaseModel):
    """Базовая схема заметки"""
    title: str = Field(..., min_length=1, max_length=255)
    body: str = Field(..., min_length=1)
    user: Optional[str] = Field(None, max_length=255)
    location: Optional[str] = Field(None, max_length=255)

    @field_validator('title', 'body')
    @classmethod
    def validate_required(cls, v):
        if not v.strip():
            raise ValueError('Field cannot be empty')
        return v.strip()

    @field_validator('user', 'location')
    @classmethod
    def empty_to_none(cls, v):
        if v is None or not v.strip():
            return None
        return v.strip()


class NoteCreate(NoteBase):
    """Схема для создания заметки"""
    pass


class NoteUpdate(NoteBase):
    """Схема для обновления заметки (все поля заменяются)"""
    pass


class NoteRead(BaseModel):
    """Заметка в том виде, в каком её возвращает GraphQL API"""
    id: str
    title: str
    body: str
    user: Optional[str] = None
    location: Optional[str] = None
    inserted_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)
