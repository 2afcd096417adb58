"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AnyHttpUrl, BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class BackendSettings(BaseModel):
    """Connection details for the hosted search.nixos.org Elasticsearch cluster.

    The credentials are the public ones shipped with the search.nixos.org
    frontend; the cluster has no per-user authentication.
    """

    base_url: AnyHttpUrl = Field(
        default="https://nixos-search-7-1733963800.us-east-1.bonsaisearch.net:443",
    )
    index_prefix: str = Field(default="latest-37-nixos", min_length=1)
    username: str = "aWVSALXpZv"
    password: SecretStr = SecretStr("X8gPHnzL52wFEekuxsfQ9cSh")
    request_timeout_seconds: int = Field(default=30, ge=1, le=300)
    max_retries: int = Field(default=3, ge=0, le=10)
    retry_base_delay: float = Field(default=0.5, ge=0)


class NixSearchSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="NIXSEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    default_channel: str = Field(default="unstable", min_length=1)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    backend: BackendSettings = Field(default_factory=BackendSettings)


@lru_cache
def get_settings() -> NixSearchSettings:
    """Return cached settings instance."""

    return NixSearchSettings()


__all__ = [
    "BackendSettings",
    "NixSearchSettings",
    "get_settings",
]
