"""Orchestrator: wires cache, fetcher, paginator, detail resolver and filter chain.

Data flow:
  1. Paginated search → stubs (through the fingerprint cache)
  2. Detail resolver  → one JobDetail per stub (through the same cache)
  3. Filter pipeline  → text filters, recency, age limit, sort
Any failure aborts the query; partial result sets are never returned.
"""

import json
import logging
from datetime import datetime

from src.cache.store import FingerprintCache
from src.core.config import PaginationConfig, SearchFilters, Settings
from src.core.schemas import JobDetail, SearchResultStub
from src.pipeline.details import DEFAULT_CONCURRENCY, fetch_detail, resolve_details
from src.pipeline.fetcher import CachedFetcher
from src.pipeline.matcher import run_pipeline
from src.pipeline.paginator import fetch_all_pages
from src.pipeline.query import JobQuery, QueryResult
from src.platforms.base import JobBoardClient
from src.platforms.reed.searcher import build_page_descriptor, build_search_descriptor

logger = logging.getLogger(__name__)


class SearchService:
    """Programmatic entry point: search, resolve details, run whole queries.

    Usage::

        async with ReedClient(settings.api, api_key) as client:
            service = SearchService(client, FingerprintCache(settings.cache.path))
            result = await JobQuery(keywords="python").max_age(7).run(service)
    """

    def __init__(
        self,
        client: JobBoardClient,
        cache: FingerprintCache,
        pagination: PaginationConfig | None = None,
        *,
        concurrency: int = DEFAULT_CONCURRENCY,
        refresh: bool = False,
    ) -> None:
        self._fetcher = CachedFetcher(cache, client)
        self._pagination = pagination or PaginationConfig()
        self._concurrency = concurrency
        self._refresh = refresh

    @property
    def fetcher(self) -> CachedFetcher:
        return self._fetcher

    async def search(
        self,
        keywords: str,
        filters: SearchFilters | None = None,
    ) -> list[SearchResultStub]:
        """Every search result for the keywords and filters, in page order."""
        template = build_search_descriptor(keywords, filters or SearchFilters())
        return await fetch_all_pages(
            self._fetcher,
            template,
            page_size=self._pagination.page_size,
            result_limit=self._pagination.result_limit,
            enforce_result_limit=self._pagination.enforce_result_limit,
            refresh=self._refresh,
        )

    async def resolve_details(self, stubs: list[SearchResultStub]) -> list[JobDetail]:
        """One JobDetail per stub, in stub order."""
        return await resolve_details(
            self._fetcher, stubs, concurrency=self._concurrency, refresh=self._refresh,
        )

    async def details(self, job_id: int | str) -> JobDetail:
        """Detail record for a single job."""
        return await fetch_detail(self._fetcher, job_id, refresh=self._refresh)

    async def run_query(self, query: JobQuery, *, now: datetime | None = None) -> QueryResult:
        """Search → resolve details → filter and enrich."""
        criteria = query.criteria()
        logger.info("Searching '%s'", query.keywords)
        stubs = await self.search(query.keywords, query.filters)
        logger.info("Raw results: %d", len(stubs))
        details = await self.resolve_details(stubs)
        jobs = run_pipeline(criteria, details, now)
        return QueryResult(criteria=criteria, raw_count=len(stubs), jobs=jobs)


def is_first_page_cached(
    cache: FingerprintCache,
    query: JobQuery,
    pagination: PaginationConfig,
) -> bool:
    """True if the query's first search page is already in the cache."""
    template = build_search_descriptor(query.keywords, query.filters)
    return cache.has(build_page_descriptor(template, skip=0, take=pagination.page_size))


class QueryReport:
    """Summary of a single configured query execution."""

    def __init__(
        self,
        query: JobQuery,
        result: QueryResult,
        started_at: datetime,
        finished_at: datetime,
    ) -> None:
        self.query = query
        self.result = result
        self.started_at = started_at
        self.finished_at = finished_at

    @property
    def keywords(self) -> str:
        return self.query.keywords

    @property
    def raw_count(self) -> int:
        return self.result.raw_count

    @property
    def matched_count(self) -> int:
        return self.result.count


async def run_all_queries(
    settings: Settings,
    service: SearchService,
    *,
    now: datetime | None = None,
) -> list[QueryReport]:
    """Run every configured query in order.

    The first failing query aborts the run and its error propagates.
    """
    reports: list[QueryReport] = []
    for config in settings.queries:
        query = JobQuery.from_config(config)
        started_at = datetime.now()
        result = await query.run(service, now=now)
        finished_at = datetime.now()
        logger.info(
            "Query '%s': %d raw, %d matched", query.keywords, result.raw_count, result.count,
        )
        reports.append(QueryReport(query, result, started_at, finished_at))

    fetcher = service.fetcher
    logger.info("Cache: %d hits, %d misses", fetcher.hits, fetcher.misses)
    return reports


def export_results_json(reports: list[QueryReport]) -> str:
    """Export query results as a JSON string."""
    data = []
    for r in reports:
        for job in r.result.jobs:
            d = job.detail
            extra = d.model_extra or {}
            data.append({
                "keywords": r.keywords,
                "job_id": d.job_id,
                "job_title": extra.get("jobTitle", ""),
                "employer": extra.get("employerName", ""),
                "location": extra.get("locationName", ""),
                "url": d.job_url,
                "date_posted": d.date_posted,
                "days_ago": job.days_ago,
            })
    return json.dumps(data, indent=2)
