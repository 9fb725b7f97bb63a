"""Cursor pagination for Jira's enhanced search (``/rest/api/3/search/jql``)."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .config import MAX_SEARCH_PAGES

logger = logging.getLogger(__name__)

PageFetcher = Callable[[str | None], dict[str, Any]]
ProgressCallback = Callable[[str, int | None, int | None], None]


@dataclass(slots=True, frozen=True)
class PageContinuation:
    done: bool
    cursor: str | None = None


@dataclass(slots=True)
class SearchResult:
    issues: list[dict[str, Any]] = field(default_factory=list)
    pages: int = 0
    truncated: bool = False


def continuation_from_page(data: dict[str, Any]) -> PageContinuation:
    """Read ``isLast`` / ``nextPageToken`` from a search response.

    A missing ``isLast`` counts as the final page. Only a missing (``None``)
    token ends iteration; an empty string is still a token.
    """
    cursor = data.get("nextPageToken")
    is_last = data.get("isLast")
    if is_last is None:
        is_last = True
    if is_last or cursor is None:
        return PageContinuation(done=True)
    return PageContinuation(done=False, cursor=str(cursor))


def collect_pages(
    fetch_page: PageFetcher,
    *,
    max_pages: int = MAX_SEARCH_PAGES,
    progress: ProgressCallback | None = None,
) -> SearchResult:
    """Call ``fetch_page`` with successive cursors until the search is exhausted.

    Pages are requested strictly in sequence, each one needing the previous
    page's cursor. Any exception from ``fetch_page`` propagates and no partial
    result is returned. Hitting ``max_pages`` stops the loop and marks the
    result as truncated.
    """
    result = SearchResult()
    cursor: str | None = None
    for page_number in range(1, max_pages + 1):
        data = fetch_page(cursor)
        batch = data.get("issues") or []
        result.issues.extend(batch)
        result.pages = page_number
        logger.debug("Fetched search page %s (%s issues)", page_number, len(batch))
        if progress:
            progress(f"Fetched page {page_number} ({len(result.issues)} issues)", page_number, None)
        continuation = continuation_from_page(data)
        if continuation.done:
            return result
        cursor = continuation.cursor
    result.truncated = True
    logger.warning(
        "Search stopped after %s pages (%s issues); remaining results were not fetched",
        max_pages,
        len(result.issues),
    )
    return result
