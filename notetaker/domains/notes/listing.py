"""Фильтрация и сортировка списка заметок.

Функции работают с любыми объектами, у которых есть атрибуты
``title``, ``body``, ``user``, ``inserted_at`` и ``updated_at``
(доменная ``Note`` и клиентская ``NoteRead``).
"""
import locale
from datetime import datetime
from functools import cmp_to_key
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

Comparator = Callable[[Any, Any], int]


def filter_notes(notes: Iterable[Any], phrase: Optional[str]) -> List[Any]:
    """Заметки, в которых встречается каждое слово фразы.

    Слово ищется как подстрока в ``lower(title) + lower(body)``, поэтому
    фраза может совпасть и на стыке заголовка и текста. Пустая фраза
    пропускает все заметки. Порядок сохраняется, вход не изменяется.
    """
    words = (phrase or "").lower().split()
    if not words:
        return list(notes)

    def matches(note) -> bool:
        haystack = (note.title or "").lower() + (note.body or "").lower()
        return all(word in haystack for word in words)

    return [note for note in notes if matches(note)]


def _note_timestamp(note) -> datetime:
    return note.updated_at or note.inserted_at


def _compare(a, b) -> int:
    return (a > b) - (a < b)


def compare_by_date(a, b) -> int:
    return _compare(_note_timestamp(a), _note_timestamp(b))


def _text_key(value: Optional[str]):
    # casefold первым ключом: в локали C strxfrm сравнивает по кодам символов
    value = value or ""
    return locale.strxfrm(value.casefold()), locale.strxfrm(value)


def _compare_text(attr: str) -> Comparator:
    def comparator(a, b) -> int:
        return _compare(_text_key(getattr(a, attr)), _text_key(getattr(b, attr)))
    return comparator


# None - естественный порядок (только разворот при descending)
SORT_STRATEGIES: Dict[str, Optional[Comparator]] = {
    "none": None,
    "by date": compare_by_date,
    "by title": _compare_text("title"),
    "by body": _compare_text("body"),
    "by creator": _compare_text("user"),
}

SORT_KEYS = tuple(SORT_STRATEGIES)


def sort_notes(notes: Sequence[Any], key: str = "none", descending: bool = False) -> List[Any]:
    """Сортировка копии списка выбранной стратегией.

    Убывающий порядок всегда ровно обратен возрастающему, для любой
    стратегии, включая ``none``.
    """
    if key not in SORT_STRATEGIES:
        raise ValueError(f"Unknown sort key: {key!r}")

    comparator = SORT_STRATEGIES[key]
    result = list(notes)
    if comparator is not None:
        result.sort(key=cmp_to_key(comparator))
    if descending:
        result.reverse()
    return result
