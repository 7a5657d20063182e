"""Settings loaded from environment variables (+ optional .env)."""

from dotenv import find_dotenv, load_dotenv
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv(find_dotenv())


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TASKMASTER_", extra="ignore", frozen=True)

    database_url: str = "sqlite:///tasks.db"
    log_level: str = "INFO"
    # Comma or space separated.
    cors_origins: str = "*"
    seed_sample_data: bool = False
    host: str = "127.0.0.1"
    # Plain PORT is what most hosting platforms set.
    port: int = Field(default=3000, validation_alias=AliasChoices("TASKMASTER_PORT", "PORT"))

    @field_validator("log_level")
    @classmethod
    def upper_level(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def cors_origin_list(self) -> list[str]:
        return [p for p in self.cors_origins.replace(",", " ").split() if p]


def get_settings() -> Settings:
    return Settings()
