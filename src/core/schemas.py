"""Core data models for the market scan."""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.cache.fingerprint import drop_nulls, fingerprint

Scalar = bool | int | float | str


class RequestDescriptor(BaseModel):
    """Everything that identifies one external call.

    Null-valued params are dropped on construction, so they neither reach
    the wire nor influence the fingerprint.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    params: dict[str, Scalar] = Field(default_factory=dict)

    @field_validator("params", mode="before")
    @classmethod
    def strip_nulls(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return drop_nulls(v)
        return v

    @property
    def fingerprint(self) -> str:
        return fingerprint({"path": self.path, "params": self.params})

    def with_params(self, **params: Scalar | None) -> "RequestDescriptor":
        """Return a copy with extra params merged over the existing ones."""
        return RequestDescriptor(path=self.path, params={**self.params, **params})


class SearchResultStub(BaseModel):
    """One entry of a search page. Fields beyond the id and link pass through."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    job_id: int | str = Field(alias="jobId")
    job_url: str = Field(default="", alias="jobUrl")


class PageResult(BaseModel):
    """One page of search results; total_available covers the whole query."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    items: list[SearchResultStub] = Field(default_factory=list, alias="results")
    total_available: int = Field(default=0, ge=0, alias="totalResults")

    @field_validator("items", mode="before")
    @classmethod
    def null_items_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class JobDetail(BaseModel):
    """Full record for one job as returned by the detail endpoint."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    job_id: int | str | None = Field(default=None, alias="jobId")
    job_description: str = Field(default="", alias="jobDescription")
    date_posted: str = Field(alias="datePosted")
    job_url: str = Field(default="", alias="jobUrl")

    @field_validator("job_description", "job_url", mode="before")
    @classmethod
    def null_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class EnrichedJob(BaseModel):
    """A JobDetail paired with its recency for one pipeline run.

    Frozen; days_ago is derived per run and never written to the cache.
    """

    model_config = ConfigDict(frozen=True)

    detail: JobDetail
    days_ago: int = Field(ge=0)


class FilterCriteria(BaseModel):
    """Snapshot of the text and age criteria applied to one query run."""

    model_config = ConfigDict(frozen=True)

    keywords: str
    match_include: frozenset[str] = frozenset()
    match_exclude: frozenset[str] = frozenset()
    max_age_days: int = Field(default=40, ge=0)

    @field_validator("match_include", "match_exclude", mode="before")
    @classmethod
    def normalize_terms(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = [v]
        if isinstance(v, Iterable):
            return frozenset(t.lower().strip() for t in v if t.strip())
        return v
