"""Application entry point: page registry, router and session service lookup."""

from __future__ import annotations

import streamlit as st

from release_dashboard.core.config import BOARD_TITLE
from release_dashboard.core.errors import ConfigurationError
from release_dashboard.core.service import IssueService

PAGES = {}

SERVICE_STATE_KEY = "issue_service"
SETUP_PAGE = "Setup / Connection"


def register_page(label):
    def decorator(func):
        PAGES[label] = func
        return func

    return decorator


def current_service() -> IssueService:
    """Return the session's IssueService; used as the API handlers' provider."""
    service = st.session_state.get(SERVICE_STATE_KEY)
    if service is None:
        raise ConfigurationError("Jira connection is not configured; use the Setup page")
    return service


def main():
    st.sidebar.title(BOARD_TITLE)
    pages = list(PAGES.keys())
    if not pages:
        st.write("No pages registered yet.")
        return
    preferred_order = [
        "Release Board",  # grouped issues by fix version
        SETUP_PAGE,  # configuration
    ]
    ordered = [name for name in preferred_order if name in pages]
    trailing = sorted(name for name in pages if name not in preferred_order)
    pages = ordered + trailing

    # If setup exists and no issue_service yet, default to setup page
    if SETUP_PAGE in pages and SERVICE_STATE_KEY not in st.session_state:
        default = pages.index(SETUP_PAGE)
    else:
        default = 0
    page = st.sidebar.selectbox("Page", pages, index=default)
    PAGES[page]()


if __name__ == "__main__":
    main()
