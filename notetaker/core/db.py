from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from notetaker.core.config import settings

# Базовый класс для моделей
Base = declarative_base()

engine = create_async_engine(settings.database_url, echo=settings.sql_echo)

SessionLocal = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def get_db():
    """Сессия БД для dependency injection в FastAPI"""
    async with SessionLocal() as session:
        yield session


async def init_models() -> None:
    """Создание всех таблиц, если миграции не запускались"""
    import notetaker.db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
