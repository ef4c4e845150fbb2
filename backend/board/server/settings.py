"""Board server configuration via environment variables."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class BoardServerSettings(BaseSettings):
    model_config = {"env_prefix": "BOARD_", "populate_by_name": True}

    host: str = "127.0.0.1"
    port: int = Field(default=3000, gt=0, lt=65536, validation_alias=AliasChoices("BOARD_PORT", "PORT"))
    log_dir: str | None = "backend/logs/board"
    static_dir: str = "frontend/public"
