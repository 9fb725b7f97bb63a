"""IssueService: orchestrates release grouping, issue detail and attachment fetches."""

from __future__ import annotations

import logging

from .config import (
    DEFAULT_ATTACHMENT_FILENAME,
    DEFAULT_PROJECT_KEY,
    DETAIL_FIELDS,
    SEARCH_FIELDS,
    JiraSettings,
    release_jql,
)
from .errors import BadRequestError
from .grouping import group_by_fix_version
from .jira_client import JiraAPI
from .mappers import map_issue_detail
from .models import AttachmentContent, GroupedIssues, IssueDetailModel
from .pagination import ProgressCallback

logger = logging.getLogger(__name__)


class IssueService:
    def __init__(self, api: JiraAPI, project_key: str = DEFAULT_PROJECT_KEY):
        self.api = api
        self.project_key = project_key

    @classmethod
    def from_settings(cls, settings: JiraSettings) -> IssueService:
        api = JiraAPI(settings.server, settings.email, settings.token)
        return cls(api, project_key=settings.project_key)

    @property
    def server(self) -> str:
        return self.api.server

    def fetch_grouped_issues(self, *, progress: ProgressCallback | None = None) -> GroupedIssues:
        """Fetch every issue with a fix version and group them by release."""
        jql = release_jql(self.project_key)
        if progress:
            progress(f"Querying released work for {self.project_key}", None, None)
        result = self.api.search_all(jql, SEARCH_FIELDS, progress=progress)
        groups = group_by_fix_version(result.issues, self.server)
        logger.info(
            "Grouped %s issues into %s releases (%s pages)",
            len(result.issues),
            len(groups),
            result.pages,
        )
        return GroupedIssues(total=len(result.issues), groups=groups, truncated=result.truncated)

    def fetch_issue_detail(self, issue_key: str) -> IssueDetailModel:
        key = (issue_key or "").strip()
        if not key:
            raise BadRequestError("Missing issue key")
        raw = self.api.fetch_issue_raw(key, DETAIL_FIELDS)
        return map_issue_detail(raw, self.server)

    def fetch_attachment(self, content_url: str | None, filename: str | None = None) -> AttachmentContent:
        if not content_url:
            raise BadRequestError("Missing contentUrl")
        content, content_type = self.api.fetch_attachment(content_url)
        return AttachmentContent(
            content=content,
            content_type=content_type,
            filename=filename or DEFAULT_ATTACHMENT_FILENAME,
        )
