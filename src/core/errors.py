"""Exception hierarchy for the market scan pipeline.

Every failure is surfaced to the caller of a query; nothing here is retried
and no partial result set is ever returned.
"""

from pathlib import Path


class JobScanError(Exception):
    """Base class for all pipeline errors."""


class ResultSetTooLarge(JobScanError):
    """First page reported more results than can be paged safely."""

    def __init__(self, total: int, limit: int) -> None:
        self.total = total
        self.limit = limit
        super().__init__(f"Too many results: {total} (limit {limit})")


class IncompletePagination(JobScanError):
    """A page came back empty before reaching the reported total."""

    def __init__(self, fetched: int, total: int) -> None:
        self.fetched = fetched
        self.total = total
        super().__init__(
            f"Empty page after {fetched} of {total} results; backend is inconsistent",
        )


class DetailResolutionFailed(JobScanError):
    """A single detail lookup failed, failing the whole batch."""

    def __init__(self, job_id: int | str) -> None:
        self.job_id = job_id
        super().__init__(f"Failed to resolve details for job {job_id}")


class FutureDateError(JobScanError):
    """Posting date lies after the reference instant."""

    def __init__(self, date_posted: str) -> None:
        self.date_posted = date_posted
        super().__init__(f"Posting date {date_posted!r} is in the future")


class CacheIOError(JobScanError):
    """Reading, writing or deleting a cache entry failed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Cache I/O failed for {path}: {reason}")


class CacheEntryNotFound(JobScanError):
    """No cache entry exists for the requested fingerprint."""
