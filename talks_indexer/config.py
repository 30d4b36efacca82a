"""Configuration loaded from environment variables (and .env)."""

import os
from enum import Enum
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from talks_indexer.errors import ConfigError


class Mode(str, Enum):
    PRODUCTION = "production"
    DEVELOPMENT = "development"


class SearchBackend(str, Enum):
    ELASTICSEARCH = "elasticsearch"
    ALGOLIA = "algolia"


class HttpConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)

    @property
    def addr(self) -> str:
        return f"{self.host}:{self.port}"


class ServiceCredentials(BaseModel):
    """URL plus optional basic-auth credentials for an upstream service."""

    url: str
    user: str = ""
    password: str = ""

    @property
    def has_credentials(self) -> bool:
        return bool(self.user and self.password)

    @property
    def auth(self) -> Optional[tuple[str, str]]:
        """Basic-auth pair, or None when credentials are incomplete."""
        return (self.user, self.password) if self.has_credentials else None


class AlgoliaConfig(BaseModel):
    app_id: str = ""
    api_key: str = ""

    @property
    def is_configured(self) -> bool:
        return bool(self.app_id and self.api_key)


class IndexConfig(BaseModel):
    private: str = "javazone_private"
    public: str = "javazone_public"


class Config(BaseModel):
    """Process configuration, passed explicitly to each component."""

    mode: Mode = Mode.PRODUCTION
    http: HttpConfig = Field(default_factory=HttpConfig)
    moresleep: ServiceCredentials = Field(
        default_factory=lambda: ServiceCredentials(url="http://localhost:8082")
    )
    elasticsearch: ServiceCredentials = Field(
        default_factory=lambda: ServiceCredentials(url="http://localhost:9200")
    )
    index: IndexConfig = Field(default_factory=IndexConfig)
    search_backend: SearchBackend = SearchBackend.ELASTICSEARCH
    algolia: AlgoliaConfig = Field(default_factory=AlgoliaConfig)

    @property
    def is_development(self) -> bool:
        return self.mode == Mode.DEVELOPMENT


def _service(env: Mapping[str, str], prefix: str, default_url: str) -> dict:
    return {
        "url": env.get(f"{prefix}_URL") or default_url,
        "user": env.get(f"{prefix}_USER", ""),
        "password": env.get(f"{prefix}_PASSWORD", ""),
    }


def load_config(env: Optional[Mapping[str, str]] = None) -> Config:
    """Build a Config from `env` (defaults to os.environ after loading .env).

    Raises:
        ConfigError: if a value fails validation (bad port, unknown mode...).
    """
    if env is None:
        load_dotenv()
        env = os.environ

    raw = {
        "mode": env.get("MODE") or Mode.PRODUCTION.value,
        "http": {
            "host": env.get("HTTP_HOST") or "0.0.0.0",
            "port": env.get("HTTP_PORT") or 8080,
        },
        "moresleep": _service(env, "MORESLEEP", "http://localhost:8082"),
        "elasticsearch": _service(env, "ELASTICSEARCH", "http://localhost:9200"),
        "index": {
            "private": env.get("PRIVATE_INDEX") or "javazone_private",
            "public": env.get("PUBLIC_INDEX") or "javazone_public",
        },
        "search_backend": env.get("SEARCH_BACKEND") or SearchBackend.ELASTICSEARCH.value,
        "algolia": {
            "app_id": env.get("ALGOLIA_APP_ID", ""),
            "api_key": env.get("ALGOLIA_API_KEY", ""),
        },
    }

    try:
        return Config.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"invalid configuration: {e}") from e
