from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./notetaker.db"
    sql_echo: bool = False
    create_tables: bool = True

    # Пустая строка - страницы обращаются к GraphQL этого же процесса
    api_url: str = ""

    # Пустая строка - локаль из окружения (LANG / LC_ALL)
    collation_locale: str = ""

    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    model_config = {"env_file": ".env", "extra": "ignore"}

settings = Settings()
