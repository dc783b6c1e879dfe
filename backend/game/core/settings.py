import os
import sys

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "Game Players API"
    API_V1_STR: str = "/api/v1"

    # Local SQLite file by default; override with DATABASE_URL in .env
    DATABASE_URL: str = "sqlite:///./game.db"

    LOG_LEVEL: str = "INFO"

    # Paging defaults for GET /players
    DEFAULT_PAGE_SIZE: int = 3
    MAX_PAGE_SIZE: int = 100

    class Config:
        # Avoid picking up local .env during pytest runs.
        env_file = None if ("pytest" in sys.modules or os.getenv("PYTEST_CURRENT_TEST")) else ".env"


settings = Settings()
