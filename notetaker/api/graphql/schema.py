import logging
from datetime import datetime
from typing import List, Optional

import strawberry
from fastapi import Depends
from graphql import GraphQLError
from sqlalchemy.ext.asyncio import AsyncSession
from strawberry.fastapi import GraphQLRouter
from strawberry.types import Info

from notetaker.core.db import get_db
from notetaker.core.errors import NoteNotFoundError, NoteValidationError
from notetaker.domains.notes.entities import Note as NoteEntity
from notetaker.domains.notes.services import NoteService

logger = logging.getLogger(__name__)


@strawberry.type(description="A short text note")
class Note:
    id: strawberry.ID
    title: str
    body: str
    user: Optional[str]
    location: Optional[str]
    inserted_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, note: NoteEntity) -> "Note":
        return cls(
            id=strawberry.ID(str(note.id)),
            title=note.title,
            body=note.body,
            user=note.user,
            location=note.location,
            inserted_at=note.inserted_at,
            updated_at=note.updated_at
        )


def _service(info: Info) -> NoteService:
    return NoteService(info.context["db"])


def _not_found(note_id) -> GraphQLError:
    error = NoteNotFoundError(note_id)
    logger.warning(str(error))
    return GraphQLError(str(error), extensions={"code": error.code})


def _invalid(error: NoteValidationError) -> GraphQLError:
    return GraphQLError(str(error), extensions={"code": error.code, **error.details})


@strawberry.type
class Query:
    @strawberry.field(description="List every note")
    async def notes(self, info: Info) -> List[Note]:
        notes = await _service(info).list_notes()
        return [Note.from_entity(note) for note in notes]

    @strawberry.field(description="Fetch a single note by id")
    async def get_note(self, info: Info, id: strawberry.ID) -> Note:
        note = await _service(info).get_note(id)
        if not note:
            raise _not_found(id)
        return Note.from_entity(note)


@strawberry.type
class Mutation:
    @strawberry.mutation(description="Insert a new note into the system")
    async def create_note(
        self,
        info: Info,
        title: str,
        body: str,
        user: Optional[str] = None,
        location: Optional[str] = None
    ) -> Note:
        try:
            note = await _service(info).create_note(title, body, user=user, location=location)
        except NoteValidationError as e:
            raise _invalid(e)
        return Note.from_entity(note)

    @strawberry.mutation(description="Replace the fields of an existing note")
    async def update_note(
        self,
        info: Info,
        id: strawberry.ID,
        title: str,
        body: str,
        user: Optional[str] = None,
        location: Optional[str] = None
    ) -> Note:
        try:
            note = await _service(info).update_note(id, title, body, user=user, location=location)
        except NoteValidationError as e:
            raise _invalid(e)
        if not note:
            raise _not_found(id)
        return Note.from_entity(note)

    @strawberry.mutation(description="Delete a note, returning it")
    async def delete_note(self, info: Info, id: strawberry.ID) -> Note:
        note = await _service(info).delete_note(id)
        if not note:
            raise _not_found(id)
        return Note.from_entity(note)

    @strawberry.mutation(description="Delete every note, returning the deleted notes")
    async def delete_all_notes(self, info: Info) -> List[Note]:
        notes = await _service(info).delete_all_notes()
        return [Note.from_entity(note) for note in notes]


schema = strawberry.Schema(query=Query, mutation=Mutation)


async def get_context(db: AsyncSession = Depends(get_db)):
    return {"db": db}


router = GraphQLRouter(schema, context_getter=get_context)
