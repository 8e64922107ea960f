"""Configuration models and loading."""

from pathlib import Path
from urllib.parse import urlsplit

from pydantic import AliasChoices, BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.exceptions import ConfigurationError

DEFAULT_BACKEND_URL = "http://localhost:3001"

ENV_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    env_ignore_empty=True,
    extra="ignore",
    populate_by_name=True,
)


class BackendSettings(BaseSettings):
    model_config = ENV_CONFIG

    base_url: str = Field(
        default=DEFAULT_BACKEND_URL,
        validation_alias=AliasChoices("BACKEND_URL", "NEXT_PUBLIC_BACKEND_URL"),
    )
    timeout: float = Field(default=10.0, gt=0, validation_alias="BACKEND_TIMEOUT")

    @field_validator("base_url", mode="before")
    @classmethod
    def validate_base_url(cls, v: str | None) -> str:
        """Fall back to the local default when unset, else require an http(s) origin."""
        return resolve_backend_url(v)


class ProxySettings(BaseSettings):
    model_config = ENV_CONFIG

    host: str = Field(default="127.0.0.1", validation_alias="PROXY_HOST")
    port: int = Field(default=3000, gt=0, lt=65536, validation_alias="PROXY_PORT")
    forward_credentials: bool = Field(default=True, validation_alias="PROXY_FORWARD_CREDENTIALS")
    debug: bool = Field(default=False, validation_alias="PROXY_DEBUG")


class LoggingSettings(BaseSettings):
    model_config = ENV_CONFIG

    log_dir: Path = Field(
        default_factory=lambda: Path.cwd() / "logs",
        validation_alias="PROXY_LOG_DIR",
    )

    @property
    def log_file(self) -> Path:
        return self.log_dir / "proxy.log"


class Config(BaseModel):
    backend: BackendSettings = Field(default_factory=BackendSettings)
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def load_config() -> Config:
    """Build configuration from the environment (and .env), falling back to defaults.

    Called once at startup; the result is passed to the app factory.
    """
    return Config(
        backend=_load(BackendSettings),
        proxy=_load(ProxySettings),
        logging=_load(LoggingSettings),
    )


def resolve_backend_url(value: str | None) -> str:
    """Return the backend origin, or the local development default when unset."""
    if value is None or not value.strip():
        return DEFAULT_BACKEND_URL

    url = value.strip().rstrip("/")
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ValueError(f"BACKEND_URL must be an absolute http(s) URL, got {value!r}")
    return url


def _load(settings_cls: type[BaseSettings]) -> BaseSettings:
    try:
        return settings_cls()
    except ValidationError as e:
        problems = "; ".join(
            f"{_env_name(settings_cls, error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from None


def _env_name(settings_cls: type[BaseSettings], loc: tuple) -> str:
    """Name the environment variable behind a validation error location."""
    key = str(loc[0]) if loc else ""
    field = settings_cls.model_fields.get(key)
    if field is None:
        return key.upper()
    alias = field.validation_alias
    if isinstance(alias, AliasChoices):
        return str(alias.choices[0])
    return str(alias or key).upper()
