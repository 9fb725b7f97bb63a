"""Read-only operations exposed to the presentation layer.

Each handler wraps one :class:`IssueService` call in the same error boundary
and answers with an :class:`ApiResponse`: a JSON payload (or raw bytes for
attachments) plus an HTTP-style status code. Failures become an envelope of
the form ``{"error": ..., "details": ..., "status": ...}``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .errors import BadRequestError, ConfigurationError, UpstreamError
from .pagination import ProgressCallback
from .service import IssueService

logger = logging.getLogger(__name__)

ServiceProvider = Callable[[], IssueService]


@dataclass(slots=True)
class ApiResponse:
    status: int
    payload: dict[str, Any] | None = None
    body: bytes | None = None
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def error_message(self) -> str | None:
        """One-line message for display, e.g. ``"Jira request failed: <details>"``."""
        if self.ok or not self.payload:
            return None
        error = self.payload.get("error") or f"Request failed ({self.status})"
        details = self.payload.get("details")
        return f"{error}: {details}" if details else error


def error_response(status: int, error: str, *, details: str | None = None, upstream: int | None = None) -> ApiResponse:
    payload: dict[str, Any] = {"error": error}
    if details is not None:
        payload["details"] = details
    if upstream is not None:
        payload["status"] = upstream
    return ApiResponse(status=status, payload=payload)


def _run(operation: str, call: Callable[[], ApiResponse]) -> ApiResponse:
    try:
        return call()
    except BadRequestError as exc:
        logger.info("%s: bad request: %s", operation, exc)
        return error_response(400, str(exc))
    except UpstreamError as exc:
        return error_response(502, exc.message, details=exc.body, upstream=exc.status)
    except ConfigurationError as exc:
        logger.error("%s: %s", operation, exc)
        return error_response(500, "Server error", details=str(exc))
    except Exception as exc:
        logger.exception("%s failed", operation)
        return error_response(500, "Server error", details=str(exc))


def handle_list_issues(
    provider: ServiceProvider, *, progress: ProgressCallback | None = None
) -> ApiResponse:
    def call() -> ApiResponse:
        grouped = provider().fetch_grouped_issues(progress=progress)
        return ApiResponse(status=200, payload=grouped.to_payload())

    return _run("list issues", call)


def handle_issue_detail(provider: ServiceProvider, issue_key: str | None) -> ApiResponse:
    def call() -> ApiResponse:
        detail = provider().fetch_issue_detail(issue_key or "")
        return ApiResponse(status=200, payload=detail.to_payload())

    return _run(f"issue detail {issue_key}", call)


def handle_attachment(provider: ServiceProvider, content_url: str | None, filename: str | None = None) -> ApiResponse:
    def call() -> ApiResponse:
        if not content_url:
            raise BadRequestError("Missing contentUrl")
        attachment = provider().fetch_attachment(content_url, filename)
        return ApiResponse(
            status=200,
            body=attachment.content,
            headers={
                "Content-Type": attachment.content_type,
                "Content-Disposition": attachment.content_disposition,
            },
        )

    return _run("attachment proxy", call)
