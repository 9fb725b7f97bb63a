"""Progress banner for paged Jira fetches."""

from __future__ import annotations

import streamlit as st

from release_dashboard.core.config import MAX_SEARCH_PAGES


class ProgressReporter:
    """Renders a banner + progress bar fed by IssueService progress callbacks.

    The search API does not report a page count up front, so the bar is
    measured against the page safety bound unless a total is supplied.
    """

    def __init__(self, title: str, expected_steps: int = MAX_SEARCH_PAGES):
        self._container = st.container()
        self._container.info(title)
        self._message_placeholder = self._container.empty()
        self._progress_placeholder = self._container.progress(0.0)
        self._expected = expected_steps
        self._finalized = False

    def callback(self, message: str, current: int | None = None, total: int | None = None) -> None:
        self.update(message, current=current, total=total)

    def update(self, message: str, *, current: int | None = None, total: int | None = None) -> None:
        if self._finalized:
            return
        self._message_placeholder.write(message)
        if current is None:
            return
        bound = total if total and total > 0 else self._expected
        self._progress_placeholder.progress(min(max(current / bound, 0.0), 1.0))

    def complete(self, message: str) -> None:
        if self._finalized:
            return
        self._progress_placeholder.progress(1.0)
        self._container.success(message)
        self._finalized = True

    def error(self, message: str) -> None:
        if self._finalized:
            return
        self._container.error(message)
        self._finalized = True
