from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    ENV: str = Field(default="dev")  # dev|prod|test

    # Security
    JWT_SECRET: str = Field(default="change-me")
    JWT_ALG: str = Field(default="HS256")
    JWT_EXPIRES_MIN: int = Field(default=60 * 12)
    SESSION_COOKIE_NAME: str = Field(default="session")
    SESSION_COOKIE_SECURE: bool = Field(default=False)

    # DB
    DATABASE_URL: str = Field(default="postgresql+psycopg://app:app@db:5432/app")

    # CORS
    CORS_ORIGINS: str = Field(default="http://localhost:3000,http://localhost")

    # Files
    EXPORT_DIR: str = Field(default="/app/data/exports")

    # Bootstrap manager (GET /setup, and startup seeding in dev)
    SEED_DEFAULT_MANAGER: bool = Field(default=True)
    DEFAULT_MANAGER_EMAIL: str = Field(default="admin@system.ru")
    DEFAULT_MANAGER_PASSWORD: str = Field(default="admin123")
    DEFAULT_MANAGER_NAME: str = Field(default="Администратор")


settings = Settings()
