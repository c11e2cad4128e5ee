from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./bedrock.db"

    # Backend
    BACKEND_HOST: str = "0.0.0.0"
    BACKEND_PORT: int = 8000
    APP_DEBUG: bool = True
    APP_VERSION: str = "0.1.0"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # structured JSON in production, colored console in dev
    LOG_SQL: bool = False

    # Validation
    VALIDATION_LANGUAGE: str = "en"

    @property
    def is_production(self) -> bool:
        return not self.APP_DEBUG

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
