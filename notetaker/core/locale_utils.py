import locale
import logging

logger = logging.getLogger(__name__)


def configure_collation(name: str = "") -> bool:
    """Правила сравнения строк (LC_COLLATE) из окружения или по имени локали"""
    try:
        locale.setlocale(locale.LC_COLLATE, name)
    except locale.Error as e:
        logger.warning(f"Collation locale {name or '<environment>'!r} is unavailable: {e}")
        return False
    return True
