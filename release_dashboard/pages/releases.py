"""Release board page: issues grouped by fix version, newest release first.

Fetches the grouped dataset once per refresh and keeps it in session state;
search and open/close state are applied locally over that payload.
"""

from __future__ import annotations

import streamlit as st

from release_dashboard.app import SERVICE_STATE_KEY, current_service, register_page
from release_dashboard.core.api import handle_list_issues
from release_dashboard.core.config import BOARD_TITLE, MAX_SEARCH_PAGES
from release_dashboard.features.release_view import build_release_context, set_all_open
from release_dashboard.visual.issue_detail import show_issue_dialog
from release_dashboard.visual.progress import ProgressReporter
from release_dashboard.visual.tables import render_issue_table

PAYLOAD_KEY = "release_payload"
ERROR_KEY = "release_error"
OPEN_STATE_KEY = "release_open_state"


def _refresh() -> None:
    reporter = ProgressReporter("Fetching issues with fix versions")
    response = handle_list_issues(current_service, progress=reporter.callback)
    if not response.ok:
        reporter.error(response.error_message)
        st.session_state[PAYLOAD_KEY] = None
        st.session_state[ERROR_KEY] = response.error_message
        return
    payload = response.payload
    st.session_state[PAYLOAD_KEY] = payload
    st.session_state[ERROR_KEY] = None
    st.session_state[OPEN_STATE_KEY] = set_all_open({}, payload["groups"], True)
    reporter.complete(f"Loaded {payload['total']} ticket(s) in {len(payload['groups'])} release(s).")


def _released_badge(released: bool | None) -> str:
    if released is True:
        return "✅ released"
    if released is False:
        return "🕒 unreleased"
    return ""


@register_page("Release Board")
def releases_page():
    st.title(BOARD_TITLE)
    if SERVICE_STATE_KEY not in st.session_state:
        st.warning("Initialize connection on Setup page first.")
        return

    if st.session_state.get(PAYLOAD_KEY) is None and st.session_state.get(ERROR_KEY) is None:
        _refresh()

    query_col, open_col, close_col, refresh_col = st.columns([6, 1, 1, 1])
    query = query_col.text_input(
        "Search",
        placeholder="Search (key, summary, month…)",
        label_visibility="collapsed",
    )
    payload = st.session_state.get(PAYLOAD_KEY)
    groups = (payload or {}).get("groups") or []
    if open_col.button("Open all"):
        st.session_state[OPEN_STATE_KEY] = set_all_open(st.session_state.get(OPEN_STATE_KEY, {}), groups, True)
    if close_col.button("Close all"):
        st.session_state[OPEN_STATE_KEY] = set_all_open(st.session_state.get(OPEN_STATE_KEY, {}), groups, False)
    if refresh_col.button("Refresh", type="primary"):
        _refresh()
        payload = st.session_state.get(PAYLOAD_KEY)

    error = st.session_state.get(ERROR_KEY)
    if error:
        st.error(f"Error: {error}")
        return

    ctx = build_release_context(payload, query, st.session_state.get(OPEN_STATE_KEY))
    st.caption(f"Months: **{ctx.release_count}** • Tickets: **{ctx.shown_count}**")
    if ctx.truncated:
        st.warning(
            f"Only the first {MAX_SEARCH_PAGES} result pages were loaded; "
            f"{ctx.total} tickets are shown and older ones may be missing."
        )
    if not ctx.groups:
        st.info("No tickets match." if query else "No tickets found.")
        return

    table_view = st.toggle("Table view", help="Show each release as a table with links into Jira")
    for group in ctx.groups:
        name = group["fixVersion"]
        label = f"{name} ({len(group['issues'])}) {_released_badge(group.get('released'))}".rstrip()
        with st.expander(label, expanded=ctx.open_state.get(name, True)):
            if table_view:
                render_issue_table(group)
                continue
            for issue in group["issues"]:
                key_col, summary_col = st.columns([1, 8])
                if key_col.button(issue["key"], key=f"open-{name}-{issue['key']}", help="Open details"):
                    show_issue_dialog(current_service, issue["key"])
                summary_col.write(issue["summary"])
