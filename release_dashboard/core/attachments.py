"""Replace flattened attachment placeholders with readable labels."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from .adf import ATTACHMENT_TOKEN

GENERIC_ATTACHMENT_LABEL = "[Attachment]"
DEFAULT_FILENAME = "file"

_ATTACHMENT_ID_RE = re.compile(r"\[ATTACHMENT_ID:([^\]]+)\]")


def build_attachment_lookup(raw_attachments: Iterable[Any] | None) -> dict[str, dict[str, Any]]:
    lookup: dict[str, dict[str, Any]] = {}
    for item in raw_attachments or []:
        if isinstance(item, dict) and item.get("id"):
            lookup[str(item["id"])] = item
    return lookup


def is_image(mime_type: str | None) -> bool:
    return str(mime_type or "").lower().startswith("image/")


def attachment_label(attachment: Mapping[str, Any]) -> str:
    filename = attachment.get("filename") or DEFAULT_FILENAME
    if is_image(attachment.get("mimeType")):
        return f"[Image: {filename}]"
    return f"[File: {filename}]"


def resolve_placeholders(text: str, lookup: Mapping[str, Mapping[str, Any]]) -> str:
    """Swap every attachment token in ``text`` for a human-readable label.

    ``[ATTACHMENT_ID:<id>]`` becomes ``[Image: name]`` / ``[File: name]`` when
    ``id`` is known, otherwise ``[Attachment]``; bare ``[ATTACHMENT]`` tokens
    always become ``[Attachment]``.
    """
    if not text:
        return ""

    def _label(match: re.Match[str]) -> str:
        attachment = lookup.get(match.group(1))
        if attachment is None:
            return GENERIC_ATTACHMENT_LABEL
        return attachment_label(attachment)

    resolved = _ATTACHMENT_ID_RE.sub(_label, text)
    return resolved.replace(ATTACHMENT_TOKEN, GENERIC_ATTACHMENT_LABEL)
