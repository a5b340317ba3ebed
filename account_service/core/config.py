"""Application configuration loaded from environment variables.

Settings for database, API, logging, password hashing and bearer tokens.
Uses pydantic-settings for validation and .env file support.
"""

from typing import Literal

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Known insecure default password that must not be used in production
# Security: Runtime check in check_production_security() prevents use in production
_INSECURE_DEFAULT_PASSWORD = "account_dev_password"  # nosec B105

# Minimum length for TOKEN_SECRET in production (256 bits = 32 bytes)
_MIN_TOKEN_SECRET_LENGTH = 32

# bcrypt accepts cost factors 4..31
_MIN_BCRYPT_ROUNDS = 4
_MAX_BCRYPT_ROUNDS = 31


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_host: str = "localhost"
    database_port: int = 5432
    database_name: str = "account_service"
    database_user: str = "account_user"
    database_password: str = _INSECURE_DEFAULT_PASSWORD

    # CORS (Security)
    # Production: Set ALLOWED_ORIGINS to specific domain(s)
    allowed_origins: list[str] = ["http://localhost:3000"]

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"

    # Bearer tokens
    # TOKEN_SECRET keys the HMAC used to store token digests
    token_secret: SecretStr = SecretStr("dev-token-secret-change-me")

    # Passwords
    bcrypt_rounds: int = 12
    password_min_length: int = 8

    # Pagination
    default_per_page: int = 15

    @property
    def database_url(self) -> str:
        """Async database URL for SQLAlchemy."""
        return (
            f"postgresql+asyncpg://{self.database_user}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    @property
    def database_url_sync(self) -> str:
        """Sync database URL for Alembic (psycopg 3 driver)."""
        return (
            f"postgresql+psycopg://{self.database_user}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    @model_validator(mode="after")
    def check_production_security(self) -> "Settings":
        """Validate security requirements.

        Checks:
        - bcrypt rounds must be within the range bcrypt accepts (all environments)
        - Password minimum length must be at least 8 (all environments)
        - CORS must not use wildcard origin (all environments)
        - Database password must not be the default in production
        - TOKEN_SECRET must be set and >= 32 chars in production
        """
        if not _MIN_BCRYPT_ROUNDS <= self.bcrypt_rounds <= _MAX_BCRYPT_ROUNDS:
            msg = (
                f"BCRYPT_ROUNDS must be between {_MIN_BCRYPT_ROUNDS} and "
                f"{_MAX_BCRYPT_ROUNDS}. Got: {self.bcrypt_rounds}"
            )
            raise ValueError(msg)

        if self.password_min_length < 8:
            msg = (
                "PASSWORD_MIN_LENGTH must be at least 8. "
                f"Got: {self.password_min_length}"
            )
            raise ValueError(msg)

        if "*" in self.allowed_origins:
            msg = (
                "ALLOWED_ORIGINS must not contain '*' (wildcard). "
                "List the frontend origins explicitly."
            )
            raise ValueError(msg)

        if self.environment == "production":
            if self.database_password == _INSECURE_DEFAULT_PASSWORD:
                msg = (
                    "Cannot use default database password in production. "
                    "Set DATABASE_PASSWORD environment variable to a secure value."
                )
                raise ValueError(msg)

            secret_value = self.token_secret.get_secret_value()
            if len(secret_value) < _MIN_TOKEN_SECRET_LENGTH:
                msg = (
                    f"TOKEN_SECRET must be at least {_MIN_TOKEN_SECRET_LENGTH} "
                    'characters in production. Generate with: python -c "import '
                    'secrets; print(secrets.token_hex(32))"'
                )
                raise ValueError(msg)

        return self


settings = Settings()
