"""Domain data models for release groups, issue details, comments and attachments.

``to_payload`` produces the JSON shapes returned by the API handlers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class IssueRef:
    key: str
    summary: str
    url: str

    def to_payload(self) -> dict[str, Any]:
        return {"key": self.key, "summary": self.summary, "url": self.url}


@dataclass(slots=True)
class ReleaseGroup:
    fix_version: str
    released: bool | None
    issues: list[IssueRef] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        return {
            "fixVersion": self.fix_version,
            "released": self.released,
            "issues": [i.to_payload() for i in self.issues],
        }


@dataclass(slots=True)
class GroupedIssues:
    total: int
    groups: list[ReleaseGroup] = field(default_factory=list)
    truncated: bool = False

    def to_payload(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "truncated": self.truncated,
            "groups": [g.to_payload() for g in self.groups],
        }


@dataclass(slots=True)
class AttachmentModel:
    id: str | None
    filename: str | None
    mime_type: str | None
    size: int | None
    content_url: str | None

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "filename": self.filename,
            "mimeType": self.mime_type,
            "size": self.size,
            "contentUrl": self.content_url,
        }


@dataclass(slots=True)
class CommentModel:
    id: str | None
    author: str
    created: str | None
    body_text: str

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "author": self.author,
            "created": self.created,
            "bodyText": self.body_text,
        }


@dataclass(slots=True)
class IssueDetailModel:
    key: str
    url: str
    summary: str
    status: str | None
    assignee: str | None
    priority: str | None
    issue_type: str | None
    created: str | None
    fix_versions: list[str] = field(default_factory=list)
    description_text: str = ""
    comments: list[CommentModel] = field(default_factory=list)
    attachments: list[AttachmentModel] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "url": self.url,
            "summary": self.summary,
            "status": self.status,
            "assignee": self.assignee,
            "priority": self.priority,
            "issueType": self.issue_type,
            "created": self.created,
            "fixVersions": list(self.fix_versions),
            "descriptionText": self.description_text,
            "comments": [c.to_payload() for c in self.comments],
            "attachments": [a.to_payload() for a in self.attachments],
        }


@dataclass(slots=True)
class AttachmentContent:
    content: bytes
    content_type: str
    filename: str

    @property
    def content_disposition(self) -> str:
        safe = self.filename.replace('"', "")
        return f'inline; filename="{safe}"'
