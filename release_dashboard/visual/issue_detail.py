"""Issue detail dialog: description, comments and attachments of one ticket."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import streamlit as st

from release_dashboard.core.api import ServiceProvider, handle_attachment, handle_issue_detail
from release_dashboard.core.attachments import is_image
from release_dashboard.visual.formatting import display_or_dash, format_size, format_timestamp


def _render_comments(comments: list[Mapping[str, Any]]) -> None:
    st.markdown(f"#### Comments ({len(comments)})")
    if not comments:
        st.caption("No comments.")
        return
    for comment in comments:
        with st.container(border=True):
            st.markdown(f"**{comment.get('author')}** • {format_timestamp(comment.get('created'))}")
            st.text(comment.get("bodyText") or "—")


def _render_attachment(provider: ServiceProvider, attachment: Mapping[str, Any]) -> None:
    filename = attachment.get("filename") or "attachment"
    meta = attachment.get("mimeType") or "file"
    size = format_size(attachment.get("size"))
    st.markdown(f"**{filename}**  \n{meta}{' • ' + size if size else ''}")
    if not st.toggle("Load", key=f"attachment-{attachment.get('id')}"):
        return
    response = handle_attachment(provider, attachment.get("contentUrl"), filename)
    if not response.ok:
        st.error(response.error_message)
        return
    if is_image(attachment.get("mimeType")):
        st.image(response.body, caption=filename)
    st.download_button(
        "Open / download",
        data=response.body,
        file_name=filename,
        mime=response.headers.get("Content-Type"),
        key=f"download-{attachment.get('id')}",
    )


def _render_attachments(provider: ServiceProvider, attachments: list[Mapping[str, Any]]) -> None:
    st.markdown(f"#### Attachments ({len(attachments)})")
    if not attachments:
        st.caption("No attachments.")
        return
    for attachment in attachments:
        with st.container(border=True):
            _render_attachment(provider, attachment)


@st.dialog("Issue details", width="large")
def show_issue_dialog(provider: ServiceProvider, issue_key: str) -> None:
    with st.spinner(f"Loading {issue_key}"):
        response = handle_issue_detail(provider, issue_key)
    if not response.ok:
        st.error(f"Error: {response.error_message}")
        return
    details = response.payload
    st.subheader(f"{details['key']} — {details['summary']}")
    st.markdown(
        f"Status: **{display_or_dash(details['status'])}** • "
        f"Assignee: **{display_or_dash(details['assignee'])}** • "
        f"Priority: **{display_or_dash(details['priority'])}**  \n"
        f"Created: **{format_timestamp(details['created'])}**"
    )
    if details["fixVersions"]:
        st.caption("Fix versions: " + ", ".join(details["fixVersions"]))

    left, right = st.columns([3, 2])
    with left:
        st.markdown("#### Description")
        st.text(details["descriptionText"] or "—")
        _render_comments(details["comments"])
    with right:
        _render_attachments(provider, details["attachments"])
        st.link_button("Open in Jira ↗", details["url"])
