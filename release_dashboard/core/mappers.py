"""Mapping raw Jira issue JSON into release-dashboard models."""

from __future__ import annotations

from typing import Any

from .adf import flatten_to_text
from .attachments import build_attachment_lookup, resolve_placeholders
from .config import UNKNOWN_AUTHOR
from .models import AttachmentModel, CommentModel, IssueDetailModel, IssueRef


def issue_url(base_url: str, key: str) -> str:
    return f"{base_url.rstrip('/')}/browse/{key}"


def _name(fields: dict[str, Any], field_name: str, attr: str = "name") -> str | None:
    value = fields.get(field_name)
    if not isinstance(value, dict):
        return None
    return value.get(attr)


def map_issue_ref(raw: dict[str, Any], base_url: str) -> IssueRef:
    key = raw.get("key")
    fields = raw.get("fields") or {}
    return IssueRef(key=key, summary=fields.get("summary") or "", url=issue_url(base_url, key))


def map_attachment(raw: dict[str, Any]) -> AttachmentModel:
    return AttachmentModel(
        id=raw.get("id"),
        filename=raw.get("filename"),
        mime_type=raw.get("mimeType"),
        size=raw.get("size"),
        content_url=raw.get("content"),
    )


def map_comment(raw: dict[str, Any], lookup: dict[str, dict[str, Any]]) -> CommentModel:
    author = (raw.get("author") or {}).get("displayName")
    return CommentModel(
        id=raw.get("id"),
        author=author or UNKNOWN_AUTHOR,
        created=raw.get("created"),
        body_text=resolve_placeholders(flatten_to_text(raw.get("body")), lookup),
    )


def map_issue_detail(raw: dict[str, Any], base_url: str) -> IssueDetailModel:
    """Assemble the detail view of one issue fetched with ``DETAIL_FIELDS``.

    Description and comment bodies are flattened from ADF and their attachment
    placeholders resolved against the issue's own attachment list.
    """
    fields = raw.get("fields") or {}
    attachments_raw = [a for a in fields.get("attachment") or [] if isinstance(a, dict)]
    lookup = build_attachment_lookup(attachments_raw)
    comments_raw = (fields.get("comment") or {}).get("comments") or []
    key = raw.get("key")
    return IssueDetailModel(
        key=key,
        url=issue_url(base_url, key),
        summary=fields.get("summary") or "",
        status=_name(fields, "status"),
        assignee=_name(fields, "assignee", "displayName"),
        priority=_name(fields, "priority"),
        issue_type=_name(fields, "issuetype"),
        created=fields.get("created"),
        fix_versions=[v.get("name") for v in fields.get("fixVersions") or [] if isinstance(v, dict)],
        description_text=resolve_placeholders(flatten_to_text(fields.get("description")), lookup),
        comments=[map_comment(c, lookup) for c in comments_raw if isinstance(c, dict)],
        attachments=[map_attachment(a) for a in attachments_raw],
    )
