from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - JWT_SECRET (signing secret for login tokens)

    Optional:
      - DATABASE_URL (defaults to a local SQLite file)
      - BCRYPT_ROUNDS (cost factor for password hashing)
    """

    PROJECT_NAME: str = "Catalog Backend"
    API_PREFIX: str = "/api"

    DATABASE_URL: str = "sqlite:///./catalog.db"

    # JWT signing (login tokens)
    JWT_SECRET: str
    JWT_ALG: str = "HS256"

    BCRYPT_ROUNDS: int = 10

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
