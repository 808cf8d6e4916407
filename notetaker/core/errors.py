"""
Исключения приложения Notetaker
"""
from typing import Optional, Dict, Any


class NotetakerError(Exception):
    """Базовое исключение приложения"""
    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Преобразование в стандартный формат ошибки"""
        return {
            "code": self.code,
            "message": str(self),
            "details": self.details
        }


class NoteNotFoundError(NotetakerError):
    """Заметка с указанным id не существует"""
    def __init__(self, note_id: Any, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Note {note_id} not found", code="NOT_FOUND", details=details)
        self.note_id = note_id


class NoteValidationError(NotetakerError):
    """Не заполнены обязательные поля заметки"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class NoteApiError(NotetakerError):
    """GraphQL API вернул ошибку"""
    def __init__(self, message: str, code: str = "API_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=code, details=details)


class NoteTransportError(NoteApiError):
    """Сетевая ошибка при обращении к API"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="TRANSPORT_ERROR", details=details)
