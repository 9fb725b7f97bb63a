"""Central configuration, constants, and Jira connection settings."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .errors import ConfigurationError

# =============================================================================
# Jira Connection Settings
# =============================================================================
DEFAULT_PROJECT_KEY = "IMOSHELP"
TIMEZONE = "Europe/Vilnius"

# Keys accepted in secrets / environment, first match wins
SERVER_KEYS: Sequence[str] = ("JIRA_SERVER", "JIRA_BASE_URL")
EMAIL_KEYS: Sequence[str] = ("JIRA_EMAIL",)
TOKEN_KEYS: Sequence[str] = ("JIRA_API_TOKEN", "JIRA_TOKEN")
PROJECT_KEYS: Sequence[str] = ("JIRA_PROJECT_KEY",)

# =============================================================================
# Search / Pagination
# =============================================================================
SEARCH_PAGE_SIZE: int = 100
# Circuit breaker for the enhanced search loop (~3000 issues at 100/page)
MAX_SEARCH_PAGES: int = 30

SEARCH_FIELDS: Sequence[str] = ("summary", "fixVersions")

DETAIL_FIELDS: Sequence[str] = (
    "summary",
    "description",
    "comment",
    "attachment",
    "fixVersions",
    "issuetype",
    "status",
    "assignee",
    "priority",
    "created",
)


def release_jql(project_key: str) -> str:
    """All issues of ``project_key`` with at least one fix version, newest first."""
    return f"project = {project_key} AND fixVersion IS NOT EMPTY ORDER BY updated DESC"


# =============================================================================
# Display defaults
# =============================================================================
UNKNOWN_AUTHOR = "Unknown"
DEFAULT_ATTACHMENT_FILENAME = "attachment"
DEFAULT_CONTENT_TYPE = "application/octet-stream"
BOARD_TITLE = "IMOS mėnesiniai atnaujinimai"


@dataclass(slots=True, frozen=True)
class JiraSettings:
    server: str
    email: str
    token: str
    project_key: str = DEFAULT_PROJECT_KEY


def _lookup(source: Mapping[str, Any], keys: Sequence[str]) -> str | None:
    # Streamlit secrets may nest values under a [jira] section
    section = source.get("jira")
    if not isinstance(section, Mapping):
        section = {}
    for key in keys:
        for candidate in (section.get(key), source.get(key)):
            if isinstance(candidate, str) and candidate.strip():
                return candidate.strip()
    return None


def _first(sources: Sequence[Mapping[str, Any]], keys: Sequence[str]) -> str | None:
    for source in sources:
        value = _lookup(source, keys)
        if value:
            return value
    return None


def load_settings(*sources: Mapping[str, Any]) -> JiraSettings:
    """Build :class:`JiraSettings` from one or more mappings.

    Parameters
    ----------
    *sources : Mapping
        Checked in order (e.g. ``st.secrets`` then ``os.environ``). Each may keep
        its values at the top level or under a ``jira`` section.

    Raises
    ------
    ConfigurationError
        If the server URL, email or API token is missing from every source.
    """
    server = _first(sources, SERVER_KEYS)
    email = _first(sources, EMAIL_KEYS)
    token = _first(sources, TOKEN_KEYS)
    project = _first(sources, PROJECT_KEYS) or DEFAULT_PROJECT_KEY

    missing = [
        name
        for name, value in (
            (SERVER_KEYS[0], server),
            (EMAIL_KEYS[0], email),
            (TOKEN_KEYS[0], token),
        )
        if not value
    ]
    if missing:
        raise ConfigurationError(f"Missing configuration value: {', '.join(missing)}")
    return JiraSettings(server=server.rstrip("/"), email=email, token=token, project_key=project)
