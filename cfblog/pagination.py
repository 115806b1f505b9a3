"""Pagination helpers.

``calc_pagination`` computes the page-number window shown by listing
pages. ``collect_pages`` walks a paginated endpoint page by page until the
reported page count or a caller-supplied item limit is reached.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

T = TypeVar("T")

# fetch_page(page) -> (items on that page, total page count reported by the API)
PageFetcher = Callable[[int], Tuple[List[T], int]]


class PaginationWindow(BaseModel):
    """Page numbers to display around the current page."""

    model_config = ConfigDict(frozen=True)

    pages: List[int]
    has_prev: bool
    has_next: bool


def calc_pagination(current: int, total_pages: int, window: int = 5) -> PaginationWindow:
    """Compute a window of page numbers centred on ``current``.

    Args:
        current: Current page number
        total_pages: Total number of pages
        window: Maximum number of page links

    Returns:
        Contiguous page numbers clamped to ``[1, total_pages]`` plus
        previous/next flags
    """
    half = window // 2
    start = max(1, current - half)
    end = min(total_pages, start + window - 1)
    start = max(1, end - window + 1)
    return PaginationWindow(
        pages=list(range(start, end + 1)),
        has_prev=current > 1,
        has_next=current < total_pages,
    )


def collect_pages(
    fetch_page: PageFetcher,
    limit: int,
    label: str = "items",
    partial_on_error: bool = False,
    concurrency: int = 1,
) -> List[T]:
    """Fetch pages until the last page or ``limit`` items.

    Args:
        fetch_page: Callable returning the items of one page and the total
            page count
        limit: Stop once at least this many items were collected
        label: Name used in log messages
        partial_on_error: Return what was collected so far when a page fails
            instead of raising
        concurrency: Pages fetched in parallel after the first one; 1 keeps
            the traversal strictly sequential

    Returns:
        Items in page order, not de-duplicated
    """
    items: List[T] = []
    page = 1

    try:
        page_items, total_pages = fetch_page(page)
    except Exception as e:
        if not partial_on_error:
            raise
        logger.error("Fetching %s page %d failed: %s", label, page, e)
        return items

    items.extend(page_items)
    last_page = total_pages or 1
    logger.info("Fetched %s page %d: %d items, %d pages total", label, page, len(page_items), last_page)

    if concurrency > 1:
        return _collect_parallel(fetch_page, items, last_page, limit, label, partial_on_error, concurrency)

    while page < last_page and len(items) < limit:
        page += 1
        try:
            page_items, total_pages = fetch_page(page)
        except Exception as e:
            if not partial_on_error:
                raise
            logger.error("Fetching %s page %d failed, keeping %d items: %s", label, page, len(items), e)
            return items
        items.extend(page_items)
        last_page = total_pages or 1
        logger.info("Fetched %s page %d: %d items, %d pages total", label, page, len(page_items), last_page)

    if page < last_page:
        logger.warning("Reached %s limit %d, more may be available", label, limit)
    return items


def _collect_parallel(
    fetch_page: PageFetcher,
    items: List[T],
    last_page: int,
    limit: int,
    label: str,
    partial_on_error: bool,
    concurrency: int,
) -> List[T]:
    """Fetch pages ``2..last_page`` in batches of ``concurrency``.

    Results are merged in page order and the stop rules are applied in
    that order, so the outcome matches the sequential traversal.
    """
    page = 1
    with ThreadPoolExecutor(max_workers=concurrency) as executor:
        while page < last_page and len(items) < limit:
            batch = list(range(page + 1, min(last_page, page + concurrency) + 1))
            futures = [executor.submit(fetch_page, n) for n in batch]
            for number, future in zip(batch, futures):
                try:
                    page_items, _ = future.result()
                except Exception as e:
                    if not partial_on_error:
                        raise
                    logger.error("Fetching %s page %d failed, keeping %d items: %s", label, number, len(items), e)
                    return items
                items.extend(page_items)
                page = number
                logger.info("Fetched %s page %d: %d items", label, number, len(page_items))
                if len(items) >= limit:
                    break

    if page < last_page:
        logger.warning("Reached %s limit %d, more may be available", label, limit)
    return items
