"""Exception hierarchy shared by the Jira client, service and API handlers."""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for expected dashboard failures."""


class ConfigurationError(DashboardError):
    """A required credential or URL is not configured."""


class BadRequestError(DashboardError):
    """The caller supplied missing or malformed input."""


class UpstreamError(DashboardError):
    """Jira answered with a non-success status.

    Carries the upstream status code and raw response body so the caller can
    diagnose the condition without re-issuing the request.
    """

    def __init__(self, status: int | None, body: str, message: str = "Jira request failed"):
        super().__init__(f"{message} ({status}): {body[:200]}")
        self.status = status
        self.body = body
        self.message = message
