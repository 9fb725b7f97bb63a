"""Jira API client wrapper (REST v3 enhanced search, issue detail, attachment content)."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any
from urllib.parse import quote, urlsplit

from jira import JIRA, JIRAError

from .config import DEFAULT_CONTENT_TYPE, MAX_SEARCH_PAGES, SEARCH_PAGE_SIZE
from .errors import BadRequestError, UpstreamError
from .pagination import ProgressCallback, SearchResult, collect_pages

logger = logging.getLogger(__name__)


class JiraAPI:
    def __init__(self, server: str, email: str, token: str):
        self.server = server.rstrip("/")
        # No retries: an upstream failure is terminal for the request
        self.client = JIRA(
            basic_auth=(email, token),
            options={"server": self.server, "rest_api_version": "3"},
            get_server_info=False,
            max_retries=0,
        )

    @property
    def session(self):
        session = getattr(self.client, "_session", None)
        if session is None:
            raise RuntimeError("JIRA session unavailable")
        return session

    def _request(self, method: str, url: str, *, failure: str = "Jira request failed", **kwargs):
        # ResilientSession raises JIRAError for every status >= 400
        try:
            return self.session.request(method, url, **kwargs)
        except JIRAError as exc:
            logger.error("%s %s rejected with %s", method, url, exc.status_code)
            # exc.text is only the parsed errorMessages; keep the raw body
            body = exc.response.text if exc.response is not None else (exc.text or "")
            raise UpstreamError(exc.status_code, body, failure) from exc

    def search_page(
        self,
        jql: str,
        fields: Sequence[str],
        page_size: int = SEARCH_PAGE_SIZE,
        token: str | None = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"jql": jql, "maxResults": page_size, "fields": list(fields)}
        if token is not None:
            body["nextPageToken"] = token
        resp = self._request(
            "POST",
            f"{self.server}/rest/api/3/search/jql",
            data=json.dumps(body),
            headers={"Accept": "application/json", "Content-Type": "application/json"},
        )
        return resp.json()

    def search_all(
        self,
        jql: str,
        fields: Sequence[str],
        *,
        page_size: int = SEARCH_PAGE_SIZE,
        max_pages: int = MAX_SEARCH_PAGES,
        progress: ProgressCallback | None = None,
    ) -> SearchResult:
        return collect_pages(
            lambda token: self.search_page(jql, fields, page_size, token),
            max_pages=max_pages,
            progress=progress,
        )

    def fetch_issue_raw(self, issue_key: str, fields: Sequence[str]) -> dict[str, Any]:
        url = f"{self.server}/rest/api/3/issue/{quote(issue_key, safe='')}"
        resp = self._request(
            "GET",
            url,
            params={"fields": ",".join(fields)},
            headers={"Accept": "application/json"},
        )
        return resp.json()

    def fetch_attachment(self, content_url: str) -> tuple[bytes, str]:
        """Download attachment bytes; returns ``(content, content_type)``.

        Only URLs on the configured Jira server are fetched, since the request
        carries the dashboard's credentials.
        """
        if urlsplit(content_url).netloc != urlsplit(self.server).netloc:
            raise BadRequestError("Attachment URL is not on the configured Jira server")
        resp = self._request("GET", content_url, failure="Attachment fetch failed")
        content_type = resp.headers.get("content-type") or DEFAULT_CONTENT_TYPE
        return resp.content, content_type
