"""Immutable query builder and query results.

Usage::

    query = JobQuery(keywords="python").excluding("ai", "machine").max_age(7)
    result = await query.run(service)
    print(result.count)
    for line in result.links():
        print(line)

Every chained call returns a new JobQuery; ``run`` snapshots the criteria
before any network work starts.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.core.config import QueryConfig, SearchFilters
from src.core.schemas import EnrichedJob, FilterCriteria
from src.pipeline.recency import format_days_ago

if TYPE_CHECKING:
    from src.pipeline.orchestrator import SearchService

DEFAULT_MAX_AGE_DAYS = 40


class JobQuery(BaseModel):
    """Search keywords plus the criteria applied to the resolved details."""

    model_config = ConfigDict(frozen=True)

    keywords: str
    filters: SearchFilters = Field(default_factory=SearchFilters)
    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()
    max_age_days: int = Field(default=DEFAULT_MAX_AGE_DAYS, ge=0)

    @field_validator("keywords")
    @classmethod
    def keywords_not_empty(cls, v: str) -> str:
        if not v.strip():
            msg = "keywords must not be empty"
            raise ValueError(msg)
        return v.strip()

    @classmethod
    def from_config(cls, config: QueryConfig) -> JobQuery:
        return cls(
            keywords=config.keywords,
            filters=config.filters,
            include=tuple(config.include_keywords),
            exclude=tuple(config.exclude_keywords),
            max_age_days=config.max_age_days,
        )

    def _replace(self, **changes: Any) -> JobQuery:
        data = {
            "keywords": self.keywords,
            "filters": self.filters,
            "include": self.include,
            "exclude": self.exclude,
            "max_age_days": self.max_age_days,
        }
        data.update(changes)
        return JobQuery.model_validate(data)

    def including(self, *terms: str) -> JobQuery:
        """Require every given term in the description."""
        return self._replace(include=self.include + terms)

    def excluding(self, *terms: str) -> JobQuery:
        """Reject descriptions containing any given term."""
        return self._replace(exclude=self.exclude + terms)

    def max_age(self, days: int) -> JobQuery:
        return self._replace(max_age_days=days)

    def with_filters(self, **overrides: Any) -> JobQuery:
        """Override individual search filters (e.g. ``location_name="Leeds"``)."""
        filters = SearchFilters.model_validate({**self.filters.model_dump(), **overrides})
        return self._replace(filters=filters)

    def criteria(self) -> FilterCriteria:
        """Snapshot of the text and age criteria."""
        return FilterCriteria(
            keywords=self.keywords,
            match_include=self.include,
            match_exclude=self.exclude,
            max_age_days=self.max_age_days,
        )

    async def run(self, service: SearchService, *, now: datetime | None = None) -> QueryResult:
        """Search, resolve details and filter through ``service``."""
        return await service.run_query(self, now=now)


class QueryResult(BaseModel):
    """Outcome of one query run: the criteria used and the surviving jobs."""

    model_config = ConfigDict(frozen=True)

    criteria: FilterCriteria
    raw_count: int = 0
    jobs: list[EnrichedJob] = Field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.jobs)

    def links(self) -> list[str]:
        """One ``"<url> (N Days ago)"`` line per job, newest first."""
        return [f"{j.detail.job_url} ({format_days_ago(j.days_ago)})" for j in self.jobs]
