import enum
import logging
from dataclasses import dataclass, asdict
from typing import Mapping, Optional

from notetaker.client.store import NoteStore
from notetaker.core.errors import NoteNotFoundError, NotetakerError
from notetaker.domains.notes.schemas import NoteRead

logger = logging.getLogger(__name__)


class EditorMode(enum.Enum):
    CREATE = "create"
    EDIT = "edit"


class EditorState(enum.Enum):
    READY = "ready"
    SUBMITTED = "submitted"
    FAILED = "failed"
    NOT_FOUND = "not_found"


@dataclass
class NoteForm:
    """Значения полей формы редактора"""
    title: str = ""
    body: str = ""
    user: Optional[str] = None
    location: Optional[str] = None

    @classmethod
    def from_note(cls, note: NoteRead) -> "NoteForm":
        return cls(title=note.title, body=note.body, user=note.user, location=note.location)

    def to_variables(self) -> dict:
        return asdict(self)


class NoteEditor:
    """Форма создания/редактирования заметки.

    Режим определяется параметром ``id`` адреса страницы: без него форма
    создаёт новую заметку, с ним редактирует существующую.
    """

    def __init__(self, store: NoteStore, note_id: Optional[str] = None):
        self.store = store
        self.note_id = note_id or None
        self.form = NoteForm()
        self.state = EditorState.READY
        self.result: Optional[NoteRead] = None

    @classmethod
    def from_params(cls, store: NoteStore, params: Mapping[str, str]) -> "NoteEditor":
        return cls(store, note_id=(params.get("id") or "").strip() or None)

    @property
    def mode(self) -> EditorMode:
        return EditorMode.EDIT if self.note_id else EditorMode.CREATE

    @property
    def is_editing(self) -> bool:
        return self.mode is EditorMode.EDIT

    async def load(self) -> EditorState:
        """Загрузка существующей заметки для заполнения формы"""
        if not self.is_editing:
            return self.state
        try:
            note = await self.store.api.get_note(self.note_id)
        except NoteNotFoundError:
            logger.warning(f"Attempted to edit note {self.note_id} which does not exist")
            self.state = EditorState.NOT_FOUND
        except NotetakerError as e:
            logger.error(f"Loading note {self.note_id} failed: {e}")
            self.state = EditorState.FAILED
        else:
            self.form = NoteForm.from_note(note)
        return self.state

    async def submit(self, form: NoteForm) -> EditorState:
        """Отправка формы: createNote или updateNote в зависимости от режима"""
        self.form = form
        try:
            if self.is_editing:
                self.result = await self.store.update(self.note_id, **form.to_variables())
            else:
                self.result = await self.store.create(**form.to_variables())
        except NotetakerError as e:
            logger.error(f"Submitting note failed: {e}")
            self.state = EditorState.FAILED
        else:
            self.state = EditorState.SUBMITTED
        return self.state
