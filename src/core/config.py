"""Configuration models and YAML loader for the market scan."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


class SearchFilters(BaseModel):
    """Reed search filters. None means the parameter is not sent."""

    location_name: str | None = "London"
    distance_from_location: int | None = Field(default=15, ge=0)
    permanent: bool | None = False
    contract: bool | None = True
    temp: bool | None = None
    part_time: bool | None = None
    full_time: bool | None = None
    minimum_salary: int | None = Field(default=None, ge=0)
    maximum_salary: int | None = Field(default=None, ge=0)
    posted_by_recruitment_agency: bool | None = None
    posted_by_direct_employer: bool | None = None


class QueryConfig(BaseModel):
    """A single configured query."""

    keywords: str
    filters: SearchFilters = Field(default_factory=SearchFilters)
    include_keywords: list[str] = Field(default_factory=list)
    exclude_keywords: list[str] = Field(default_factory=list)
    max_age_days: int = Field(default=40, ge=0)

    @field_validator("keywords")
    @classmethod
    def keywords_not_empty(cls, v: str) -> str:
        if not v.strip():
            msg = "keywords must not be empty"
            raise ValueError(msg)
        return v.strip()


class ApiConfig(BaseModel):
    """Reed API connection settings."""

    base_url: str = "https://www.reed.co.uk/api/1.0"
    api_key_env: str = "REED_API_KEY"
    timeout_s: float = Field(default=20.0, gt=0)
    concurrency: int = Field(default=8, ge=1, le=32)

    def api_key(self) -> str:
        """Read the API key from the configured environment variable."""
        key = os.environ.get(self.api_key_env)
        if not key:
            msg = f"{self.api_key_env} environment variable is required"
            raise ValueError(msg)
        return key


class CacheConfig(BaseModel):
    """Response cache location."""

    path: str = "data/cache"


class PaginationConfig(BaseModel):
    """Paging policy for search queries.

    enforce_result_limit=False opts out of the result-count guard for
    backends known to support deep paging.
    """

    page_size: int = Field(default=100, ge=1, le=100)
    result_limit: int = Field(default=500, ge=1)
    enforce_result_limit: bool = True


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    api: ApiConfig = Field(default_factory=ApiConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    queries: list[QueryConfig] = Field(default_factory=list, validate_default=True)

    @field_validator("queries")
    @classmethod
    def at_least_one_query(cls, v: list[QueryConfig]) -> list[QueryConfig]:
        if not v:
            msg = "at least one query must be configured"
            raise ValueError(msg)
        return v

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
