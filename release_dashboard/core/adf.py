"""Flatten Atlassian Document Format (ADF) trees into readable plain text.

Jira Cloud returns descriptions and comment bodies as ADF, a recursive JSON
document of typed nodes. Raw dicts are parsed into a small closed family of
node variants, each of which knows how to render itself. Embedded media is
rendered as an ``[ATTACHMENT_ID:<id>]`` placeholder so that it can later be
replaced by a readable label (see :mod:`release_dashboard.core.attachments`).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

BLOCK_NODE_TYPES: frozenset[str] = frozenset(
    {
        "doc",
        "paragraph",
        "heading",
        "blockquote",
        "listItem",
        "bulletList",
        "orderedList",
        "codeBlock",
        "panel",
        "rule",
        "table",
        "tableRow",
        "tableCell",
    }
)
LINK_CARD_TYPES: frozenset[str] = frozenset({"inlineCard", "blockCard", "embedCard"})
MEDIA_WRAPPER_TYPES: frozenset[str] = frozenset({"mediaGroup", "mediaSingle"})

ATTACHMENT_TOKEN = "[ATTACHMENT]"


def attachment_token(attachment_id: str) -> str:
    return f"[ATTACHMENT_ID:{attachment_id}]"


@dataclass(slots=True, frozen=True)
class TextNode:
    text: str
    href: str | None = None

    def render(self) -> str:
        if self.href:
            # A link whose label is the URL itself is shown once
            label = self.text.strip()
            if label and label != self.href:
                return f"{self.text} ({self.href})"
            return self.href
        return self.text


@dataclass(slots=True, frozen=True)
class HardBreak:
    def render(self) -> str:
        return "\n"


@dataclass(slots=True, frozen=True)
class LinkCard:
    url: str | None = None

    def render(self) -> str:
        return f"[Link: {self.url}]\n" if self.url else "[Link]\n"


@dataclass(slots=True, frozen=True)
class MediaNode:
    id: str | None = None

    def render(self) -> str:
        return attachment_token(self.id) if self.id else ATTACHMENT_TOKEN


@dataclass(slots=True, frozen=True)
class MediaWrapper:
    content: tuple[Any, ...] = field(default_factory=tuple)

    def render(self) -> str:
        inner = flatten(self.content)
        return f"{inner}\n" if inner else f"{ATTACHMENT_TOKEN}\n"


@dataclass(slots=True, frozen=True)
class ContainerNode:
    type: str | None
    content: tuple[Any, ...] = field(default_factory=tuple)

    @property
    def is_block(self) -> bool:
        return self.type in BLOCK_NODE_TYPES

    def render(self) -> str:
        inner = flatten(self.content)
        return f"{inner}\n" if self.is_block else inner


Node = TextNode | HardBreak | LinkCard | MediaNode | MediaWrapper | ContainerNode


def _link_href(marks: Any) -> str | None:
    if not isinstance(marks, list):
        return None
    for mark in marks:
        if isinstance(mark, dict) and mark.get("type") == "link":
            href = (mark.get("attrs") or {}).get("href")
            return str(href) if href else None
    return None


def _parse_content(raw: Any) -> tuple[Any, ...]:
    if raw is None:
        return ()
    if isinstance(raw, list):
        return tuple(parse_node(child) for child in raw)
    return (parse_node(raw),)


def parse_node(raw: Any) -> Node | str | list | None:
    """Parse one raw ADF value into a node variant.

    Strings and ``None`` are passed through untouched, lists are parsed
    element-wise, and any dict becomes the variant matching its ``type``
    (falling back to :class:`ContainerNode`).
    """
    if raw is None or isinstance(raw, str):
        return raw
    if isinstance(raw, list):
        return [parse_node(child) for child in raw]
    if not isinstance(raw, dict):
        return None

    node_type = raw.get("type")
    attrs = raw.get("attrs") or {}
    if node_type == "text":
        text = raw.get("text")
        return TextNode(text=str(text) if text is not None else "", href=_link_href(raw.get("marks")))
    if node_type == "hardBreak":
        return HardBreak()
    if node_type in LINK_CARD_TYPES:
        url = attrs.get("url")
        return LinkCard(url=str(url) if url else None)
    if node_type == "media":
        media_id = attrs.get("id")
        return MediaNode(id=str(media_id) if media_id else None)
    if node_type in MEDIA_WRAPPER_TYPES:
        return MediaWrapper(content=_parse_content(raw.get("content")))
    return ContainerNode(type=node_type, content=_parse_content(raw.get("content")))


def flatten(value: Any) -> str:
    """Render an ADF value (raw dict, parsed node, list, string or ``None``)."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, Sequence):
        return "".join(flatten(child) for child in value)
    if isinstance(value, dict):
        value = parse_node(value)
    render = getattr(value, "render", None)
    if render is None:
        return ""
    return render()


def flatten_to_text(document: Any) -> str:
    """Flatten a document and trim surrounding whitespace."""
    return flatten(document).strip()
