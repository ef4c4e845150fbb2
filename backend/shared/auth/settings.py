"""Auth and storage settings."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

from shared.auth.token import CREDENTIAL_TTL_SECONDS


class AuthSettings(BaseSettings):
    model_config = {"env_prefix": "AUTH_", "populate_by_name": True}

    # HMAC secret for signing credentials -- required, no default.
    # The application fails to start if neither AUTH_SECRET_KEY nor SECRET_KEY is set.
    secret_key: str = Field(min_length=1, validation_alias=AliasChoices("AUTH_SECRET_KEY", "SECRET_KEY"))

    # SQLite database file path
    database_path: str = Field(
        default="backend/storage.db",
        validation_alias=AliasChoices("AUTH_DATABASE_PATH", "DATABASE_PATH"),
    )

    credential_ttl_seconds: int = Field(default=CREDENTIAL_TTL_SECONDS, gt=0)

    # "bcrypt" in production, "simple" for fast tests
    password_hasher: str = "bcrypt"

    # Cookie Secure flag -- False for local dev (HTTP)
    cookie_secure: bool = False
