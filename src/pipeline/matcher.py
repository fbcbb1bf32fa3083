"""Filter and enrichment chain for resolved job details.

Stage order:
  1. ExcludeTermsFilter  : drop descriptions containing any excluded term
  2. IncludeTermsFilter  : keep descriptions containing every included term
  3. attach_recency      : pair each detail with its days_ago
  4. MaxAgeFilter        : keep days_ago <= max_age_days
  5. sort_by_recency     : stable ascending sort on days_ago

Pure: no I/O, deterministic for a fixed ``now``.
"""

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timezone

from src.core.schemas import EnrichedJob, FilterCriteria, JobDetail
from src.pipeline.recency import days_ago

logger = logging.getLogger(__name__)

# A filter is a callable that takes details and returns a subset.
Filter = Callable[[list[JobDetail]], list[JobDetail]]


class ExcludeTermsFilter:
    """Remove details whose description contains any excluded term (case-insensitive).

    Terms arrive lowercased and stripped from FilterCriteria.
    """

    def __init__(self, terms: Iterable[str]) -> None:
        self._terms = sorted(terms)

    def __call__(self, details: list[JobDetail]) -> list[JobDetail]:
        if not self._terms:
            return details
        result = [
            d for d in details
            if not self._matches_any(d.job_description)
        ]
        excluded = len(details) - len(result)
        if excluded:
            logger.debug("ExcludeTermsFilter: removed %d details", excluded)
        return result

    def _matches_any(self, description: str) -> bool:
        text = description.lower()
        return any(t in text for t in self._terms)


class IncludeTermsFilter:
    """Keep only details whose description contains every included term.

    If no terms are configured, the filter is a no-op.
    """

    def __init__(self, terms: Iterable[str]) -> None:
        self._terms = sorted(terms)

    def __call__(self, details: list[JobDetail]) -> list[JobDetail]:
        if not self._terms:
            return details
        result = [
            d for d in details
            if self._matches_all(d.job_description)
        ]
        excluded = len(details) - len(result)
        if excluded:
            logger.debug("IncludeTermsFilter: removed %d details", excluded)
        return result

    def _matches_all(self, description: str) -> bool:
        text = description.lower()
        return all(t in text for t in self._terms)


class MaxAgeFilter:
    """Remove enriched jobs older than max_age_days."""

    def __init__(self, max_age_days: int) -> None:
        self._max_age_days = max_age_days

    def __call__(self, jobs: list[EnrichedJob]) -> list[EnrichedJob]:
        result = [j for j in jobs if j.days_ago <= self._max_age_days]
        excluded = len(jobs) - len(result)
        if excluded:
            logger.debug(
                "MaxAgeFilter: removed %d jobs older than %d days",
                excluded, self._max_age_days,
            )
        return result


def run_filter_chain(
    details: list[JobDetail],
    filters: list[Filter],
) -> list[JobDetail]:
    """Apply filters in order, returning the surviving details."""
    result = details
    for f in filters:
        result = f(result)
    return result


def attach_recency(details: list[JobDetail], now: datetime | None = None) -> list[EnrichedJob]:
    """Pair every detail with its whole-day age at ``now``.

    Raises:
        FutureDateError: A posting date lies after ``now``.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    return [EnrichedJob(detail=d, days_ago=days_ago(d.date_posted, now)) for d in details]


def sort_by_recency(jobs: list[EnrichedJob]) -> list[EnrichedJob]:
    """Newest first. sorted() is stable, so equal ages keep their input order."""
    return sorted(jobs, key=lambda j: j.days_ago)


def build_text_filters(criteria: FilterCriteria) -> list[Filter]:
    """Build the text filter chain for a criteria snapshot."""
    return [
        ExcludeTermsFilter(criteria.match_exclude),
        IncludeTermsFilter(criteria.match_include),
    ]


def run_pipeline(
    criteria: FilterCriteria,
    details: list[JobDetail],
    now: datetime | None = None,
) -> list[EnrichedJob]:
    """Filter, enrich, age-limit and sort a batch of details."""
    matched = run_filter_chain(details, build_text_filters(criteria))
    enriched = attach_recency(matched, now)
    recent = MaxAgeFilter(criteria.max_age_days)(enriched)
    logger.info(
        "Pipeline '%s': %d details, %d text matches, %d within %d days",
        criteria.keywords, len(details), len(matched), len(recent), criteria.max_age_days,
    )
    return sort_by_recency(recent)
