"""Configuration management for the Fraud Review service.

Configuration is loaded from environment variables, one prefix per
config section (APP_, DATABASE_, SECURITY_, FRAUD_RULES_, ...).
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Constants for database URL construction
POSTGRESQL_PREFIX = "postgresql://"
ASYNCPG_DRIVER = "+asyncpg"
PSYCPG_DRIVER = "+psycopg"


class AppEnvironment(str, Enum):
    LOCAL = "local"
    TEST = "test"
    PROD = "prod"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class AppConfig(BaseSettings):
    name: str = Field(default="fraud-review")
    env: AppEnvironment = Field(default=AppEnvironment.LOCAL)
    version: str = Field(default="0.1.0")
    debug: bool = Field(default=False)
    log_level: LogLevel = Field(default=LogLevel.INFO)

    model_config = SettingsConfigDict(env_prefix="APP_")

    @field_validator("env", mode="before")
    @classmethod
    def validate_env(cls, v: str | AppEnvironment) -> AppEnvironment:
        if isinstance(v, AppEnvironment):
            return v
        return AppEnvironment(v)

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        if isinstance(v, LogLevel):
            return v
        return LogLevel(v.upper())


class ServerConfig(BaseSettings):
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)
    workers: int = Field(default=4)

    model_config = SettingsConfigDict(env_prefix="SERVER_")


class DatabaseConfig(BaseSettings):
    # Primary: full connection URL
    url_app: str = Field(default="", alias="database_url_app")

    # Admin URL for schema setup (optional)
    url_admin: str = Field(default="", alias="database_url_admin")

    # Fallback: individual components
    host: str = Field(default="localhost")
    port: int = Field(default=5432)
    name: str = Field(default="fraud_review")
    user: str = Field(default="postgres")
    password: SecretStr = Field(default=SecretStr(""))
    pool_size: int = Field(default=10)
    max_overflow: int = Field(default=20)
    pool_timeout: int = Field(default=30)
    pool_recycle: int = Field(default=1800)
    echo: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_prefix="DATABASE_",
        populate_by_name=True,
    )

    @property
    def async_url(self) -> str:
        """Build async database URL."""
        if self.url_app:
            url = self.url_app
            if url.startswith(POSTGRESQL_PREFIX) and ASYNCPG_DRIVER not in url:
                new_prefix = POSTGRESQL_PREFIX.removesuffix("://") + ASYNCPG_DRIVER + "://"
                url = url.replace(POSTGRESQL_PREFIX, new_prefix, 1)
            return url
        password = self.password.get_secret_value()
        return (
            f"postgresql{ASYNCPG_DRIVER}://{self.user}:{password}"
            f"@{self.host}:{self.port}/{self.name}"
        )

    @property
    def sync_url(self) -> str:
        """Build sync database URL for setup scripts."""
        if self.url_app:
            url = self.url_app
            if ASYNCPG_DRIVER in url:
                url = url.replace(ASYNCPG_DRIVER, PSYCPG_DRIVER, 1)
            elif PSYCPG_DRIVER not in url:
                url = url.replace(POSTGRESQL_PREFIX, "postgresql+psycopg://", 1)
            return url
        password = self.password.get_secret_value()
        return f"postgresql+psycopg://{self.user}:{password}@{self.host}:{self.port}/{self.name}"


class SecurityConfig(BaseSettings):
    # Signs access tokens. Required outside local/test.
    session_secret: SecretStr = Field(default=SecretStr(""))
    token_algorithm: str = Field(default="HS256")
    token_ttl_minutes: int = Field(default=7 * 24 * 60)
    bcrypt_rounds: int = Field(default=10)

    cors_allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:5000", validate_default=True
    )
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: list[str] = Field(default=["GET", "POST", "PATCH", "DELETE"])
    cors_allow_headers: list[str] = Field(default=["Authorization", "Content-Type"])

    model_config = SettingsConfigDict(env_prefix="SECURITY_")

    @field_validator("cors_allowed_origins", mode="after")
    @classmethod
    def validate_cors_allowed_origins(cls, v: str | list[str]) -> list[str]:
        """Parse comma-separated string into list of origins."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


class FraudRulesConfig(BaseSettings):
    high_value_threshold: Decimal = Field(default=Decimal("5000"), gt=0)
    velocity_window_minutes: int = Field(default=60, ge=1)

    model_config = SettingsConfigDict(env_prefix="FRAUD_RULES_")


class ObservabilityConfig(BaseSettings):
    service_name: str = Field(default="fraud-review")
    otlp_endpoint: str | None = Field(default=None)
    otlp_insecure: bool = Field(default=True)
    log_record_format: str = Field(default="json")

    model_config = SettingsConfigDict(env_prefix="OTEL_")


class Settings(BaseSettings):
    app: AppConfig = Field(default_factory=AppConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    fraud_rules: FraudRulesConfig = Field(default_factory=FraudRulesConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    @model_validator(mode="after")
    def validate_security_settings(self) -> Settings:
        """Refuse to run a deployed environment without a signing secret."""
        if (
            not self.security.session_secret.get_secret_value()
            and self.app.env == AppEnvironment.PROD
        ):
            raise ValueError("SECURITY_SESSION_SECRET must be set in the prod environment")
        return self

    @property
    def signing_key(self) -> str:
        """Key used to sign access tokens.

        Local and test environments fall back to a fixed development key.
        """
        secret = self.security.session_secret.get_secret_value()
        return secret or "fraud-review-dev-secret"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def reload_settings() -> Settings:
    """Reload settings (useful for testing)."""
    get_settings.cache_clear()
    return get_settings()
