"""Sequential paging over one search query with a result-count guard.

Each page's offset depends on what has been accumulated so far, and the
guard is only checked against the first page's total.
"""

import logging

from src.core.errors import IncompletePagination, ResultSetTooLarge
from src.core.schemas import PageResult, RequestDescriptor, SearchResultStub
from src.pipeline.fetcher import CachedFetcher
from src.platforms.reed.searcher import build_page_descriptor

logger = logging.getLogger(__name__)

PAGE_SIZE = 100
RESULT_LIMIT = 500


async def fetch_page(
    fetcher: CachedFetcher,
    template: RequestDescriptor,
    skip: int,
    take: int,
    *,
    refresh: bool = False,
) -> PageResult:
    """Fetch and parse one page starting at offset ``skip``."""
    descriptor = build_page_descriptor(template, skip=skip, take=take)
    payload = await fetcher.fetch(descriptor, refresh=refresh)
    return PageResult.model_validate(payload)


async def fetch_all_pages(
    fetcher: CachedFetcher,
    template: RequestDescriptor,
    *,
    page_size: int = PAGE_SIZE,
    result_limit: int = RESULT_LIMIT,
    enforce_result_limit: bool = True,
    refresh: bool = False,
) -> list[SearchResultStub]:
    """Collect every result of a search, in page order.

    Raises:
        ResultSetTooLarge: First page reports ``total >= result_limit`` and the
            guard is enforced. No further pages are requested.
        IncompletePagination: A page returned no items before the total was reached.
    """
    page = await fetch_page(fetcher, template, skip=0, take=page_size, refresh=refresh)
    total = page.total_available

    if enforce_result_limit and total >= result_limit:
        raise ResultSetTooLarge(total, result_limit)

    results: list[SearchResultStub] = []
    page_num = 1
    while True:
        if not page.items and len(results) < total:
            raise IncompletePagination(len(results), total)
        results.extend(page.items)
        logger.info("Page %d: %d of %d results", page_num, len(results), total)
        if len(results) >= total:
            break
        page_num += 1
        page = await fetch_page(
            fetcher, template, skip=len(results), take=page_size, refresh=refresh,
        )

    if len(results) > total:
        logger.warning(
            "Backend returned %d results for a total of %d, truncating",
            len(results), total,
        )
        del results[total:]

    return results
