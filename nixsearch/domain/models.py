"""Pydantic models for search requests, backend envelopes and package records."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _BackendModel(BaseModel):
    """Immutable model read from backend JSON by alias."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class SearchRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    channel: str = Field(min_length=1)
    query: str


class License(_BackendModel):
    full_name: str = Field(default="", alias="fullName")
    url: str | None = None


class PackageRecord(_BackendModel):
    name: str = Field(default="", alias="package_pname")
    attr_name: str = Field(default="", alias="package_attr_name")
    attr_set: str = Field(default="", alias="package_attr_set")
    outputs: list[str] = Field(default_factory=list, alias="package_outputs")
    default_output: str | None = Field(default=None, alias="package_default_output")
    description: str | None = Field(default=None, alias="package_description")
    programs: list[str] = Field(default_factory=list, alias="package_programs")
    homepage: list[str] = Field(default_factory=list, alias="package_homepage")
    version: str = Field(default="", alias="package_pversion")
    platforms: list[str] = Field(default_factory=list, alias="package_platforms")
    position: str = Field(default="", alias="package_position")
    licenses: list[License] = Field(default_factory=list, alias="package_license")

    @field_validator(
        "outputs",
        "programs",
        "homepage",
        "platforms",
        "licenses",
        mode="before",
    )
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        if value is None:
            return []
        return value

    @field_validator("name", "attr_name", "attr_set", "version", "position", mode="before")
    @classmethod
    def _null_to_blank(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value


class RemoteError(_BackendModel):
    """Structured ``error`` object of a failed Elasticsearch response."""

    type: str = ""
    reason: str = ""
    resource_type: str | None = Field(default=None, alias="resource.type")
    resource_id: str | None = Field(default=None, alias="resource.id")

    @field_validator("type", "reason", mode="before")
    @classmethod
    def _null_to_blank(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value


class SearchHit(_BackendModel):
    id: str = Field(default="", alias="_id")
    package: PackageRecord = Field(alias="_source")


class SearchHits(_BackendModel):
    hits: list[SearchHit] = Field(default_factory=list)

    @field_validator("hits", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        if value is None:
            return []
        return value


class SearchResponse(_BackendModel):
    # populated on failure
    error: RemoteError | None = None
    status: int | None = None
    # populated on success
    hits: SearchHits = Field(default_factory=SearchHits)


class SearchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    request: SearchRequest
    packages: tuple[PackageRecord, ...]


__all__ = [
    "License",
    "PackageRecord",
    "RemoteError",
    "SearchHit",
    "SearchHits",
    "SearchRequest",
    "SearchResponse",
    "SearchResult",
]
