from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from notetaker.api.graphql.schema import router as graphql_router
from notetaker.api.http.health import router as health_router
from notetaker.api.http.notes import router as notes_router
from notetaker.core.config import settings
from notetaker.core.db import init_models
from notetaker.core.locale_utils import configure_collation
from notetaker.core.logging_utils import configure_logging

STATIC_DIR = Path(__file__).resolve().parent / "static"

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


class NoCacheStaticFiles(StaticFiles):
    """Статика (скрипт геолокации редактора) всегда запрашивается заново"""

    async def get_response(self, path: str, scope):
        response = await super().get_response(path, scope)
        response.headers.update(NO_CACHE_HEADERS)
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    configure_collation(settings.collation_locale)
    if settings.create_tables:
        await init_models()
    yield
    store = getattr(app.state, "note_store", None)
    if store is not None:
        await store.api.aclose()


app = FastAPI(
    title="Notetaker",
    description="Basic note-taking web application backed by a GraphQL API",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount("/static", NoCacheStaticFiles(directory=str(STATIC_DIR)), name="static")

# Подключаем роутеры
app.include_router(health_router)
app.include_router(graphql_router, prefix="/graphql")
app.include_router(notes_router)


def run():
    """Запуск сервера разработки"""
    import uvicorn

    uvicorn.run("notetaker.main:app", host=settings.host, port=settings.port)
