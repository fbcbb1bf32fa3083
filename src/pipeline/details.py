"""Fan-out detail lookups for a batch of search results.

All-or-nothing: the first failed lookup cancels the rest and fails the batch.
"""

import asyncio
import logging

from src.core.errors import DetailResolutionFailed
from src.core.schemas import JobDetail, SearchResultStub
from src.pipeline.fetcher import CachedFetcher
from src.platforms.reed.searcher import build_detail_descriptor

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 8


async def fetch_detail(
    fetcher: CachedFetcher,
    job_id: int | str,
    *,
    refresh: bool = False,
) -> JobDetail:
    """Fetch and parse the detail record for one job."""
    payload = await fetcher.fetch(build_detail_descriptor(job_id), refresh=refresh)
    return JobDetail.model_validate(payload)


async def resolve_details(
    fetcher: CachedFetcher,
    stubs: list[SearchResultStub],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
    refresh: bool = False,
) -> list[JobDetail]:
    """Resolve one JobDetail per stub, preserving input order.

    Duplicate job ids are looked up once. At most ``concurrency`` lookups run
    at the same time.

    Raises:
        DetailResolutionFailed: Any lookup failed; chained to the original error.
    """
    job_ids = [s.job_id for s in stubs]
    unique_ids = list(dict.fromkeys(job_ids))
    if not unique_ids:
        return []

    semaphore = asyncio.Semaphore(concurrency)

    async def _resolve(job_id: int | str) -> JobDetail:
        async with semaphore:
            try:
                return await fetch_detail(fetcher, job_id, refresh=refresh)
            except Exception as e:
                raise DetailResolutionFailed(job_id) from e

    tasks = {job_id: asyncio.create_task(_resolve(job_id)) for job_id in unique_ids}
    _, pending = await asyncio.wait(tasks.values(), return_when=asyncio.FIRST_EXCEPTION)

    if pending:
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

    for task in tasks.values():
        if not task.cancelled() and task.exception() is not None:
            error = task.exception()
            logger.error("Detail batch failed: %s", error)
            raise error  # type: ignore[misc]

    by_id = {job_id: task.result() for job_id, task in tasks.items()}
    logger.info("Resolved %d details (%d unique)", len(job_ids), len(unique_ids))
    return [by_id[job_id] for job_id in job_ids]
