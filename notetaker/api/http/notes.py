import logging
from pathlib import Path
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Form, HTTPException, Query, Request, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from notetaker.client.api_client import NoteApiClient
from notetaker.client.editor import EditorState, NoteEditor, NoteForm
from notetaker.client.store import NoteStore
from notetaker.core.config import settings
from notetaker.core.errors import NotetakerError
from notetaker.domains.notes.listing import SORT_KEYS

logger = logging.getLogger(__name__)

router = APIRouter(tags=["notes"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[2] / "templates"))

GENERIC_ERROR = "Error!"
NOT_FOUND_ERROR = "Error: Attempted to edit note which does not exist!"


def build_note_store(app) -> NoteStore:
    """Клиент API: внешний адрес из настроек или GraphQL этого же приложения"""
    if settings.api_url:
        return NoteStore(NoteApiClient(httpx.AsyncClient(), endpoint=settings.api_url))
    http_client = httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://notetaker"
    )
    return NoteStore(NoteApiClient(http_client))


def get_note_store(request: Request) -> NoteStore:
    """Единственная клиентская коллекция заметок процесса"""
    store = getattr(request.app.state, "note_store", None)
    if store is None:
        store = build_note_store(request.app)
        request.app.state.note_store = store
    return store


def _message(request: Request, message: str, status_code: int):
    return templates.TemplateResponse(
        request,
        "notes/message.html",
        {"message": message},
        status_code=status_code
    )


@router.get("/", include_in_schema=False)
async def root():
    return RedirectResponse("/notes")


@router.get("/notes")
async def list_notes(
    request: Request,
    q: str = Query(""),
    sort: str = Query("none"),
    desc: bool = Query(False),
    refresh: bool = Query(False),
    store: NoteStore = Depends(get_note_store)
):
    """Список заметок с фильтром и сортировкой"""
    if sort not in SORT_KEYS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown sort key: {sort}"
        )

    try:
        await store.load(force=refresh)
    except NotetakerError as e:
        logger.error(f"Loading notes failed: {e}")
        return _message(request, GENERIC_ERROR, status.HTTP_502_BAD_GATEWAY)

    return templates.TemplateResponse(
        request,
        "notes/list.html",
        {
            "notes": store.view(q, sort, desc),
            "total": len(store.notes),
            "q": q,
            "sort": sort,
            "desc": desc,
            "sort_keys": SORT_KEYS
        }
    )


@router.post("/notes/delete-all")
async def delete_all_notes(request: Request, store: NoteStore = Depends(get_note_store)):
    """Удаление всех заметок"""
    try:
        await store.delete_all()
    except NotetakerError:
        return _message(request, GENERIC_ERROR, status.HTTP_502_BAD_GATEWAY)
    return RedirectResponse("/notes", status_code=status.HTTP_303_SEE_OTHER)


@router.post("/notes/{note_id}/delete")
async def delete_note(request: Request, note_id: str, store: NoteStore = Depends(get_note_store)):
    """Удаление заметки"""
    try:
        await store.delete(note_id)
    except NotetakerError:
        return _message(request, GENERIC_ERROR, status.HTTP_502_BAD_GATEWAY)
    return RedirectResponse("/notes", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/createNote")
async def note_editor(request: Request, store: NoteStore = Depends(get_note_store)):
    """Форма новой заметки или редактирования существующей (?id=)"""
    editor = NoteEditor.from_params(store, request.query_params)
    state = await editor.load()

    if state is EditorState.NOT_FOUND:
        return _message(request, NOT_FOUND_ERROR, status.HTTP_404_NOT_FOUND)
    if state is EditorState.FAILED:
        return _message(request, GENERIC_ERROR, status.HTTP_502_BAD_GATEWAY)

    return templates.TemplateResponse(request, "notes/editor.html", {"editor": editor})


@router.post("/createNote")
async def submit_note(
    request: Request,
    title: str = Form(""),
    body: str = Form(""),
    user: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    store: NoteStore = Depends(get_note_store)
):
    """Отправка формы редактора"""
    editor = NoteEditor.from_params(store, request.query_params)
    form = NoteForm(title=title, body=body, user=user, location=location)

    if await editor.submit(form) is not EditorState.SUBMITTED:
        return _message(request, GENERIC_ERROR, status.HTTP_400_BAD_REQUEST)

    return RedirectResponse("/notes", status_code=status.HTTP_303_SEE_OTHER)
