from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    app_env: str = "dev"
    app_name: str = "projectdesk-backend"
    database_url: str = "sqlite:///./projectdesk.db"
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    # Request header naming the acting user's login.
    actor_header: str = "X-Remote-User"
    seed_admin_login: str = "admin"
    # Log every SQL statement through the sqlalchemy.engine logger.
    database_echo: bool = False
    description_preview_length: int = 255


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings()
