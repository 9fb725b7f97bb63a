"""Connection setup page: collect Jira credentials and initialize IssueService."""

from __future__ import annotations

import logging
import os

import streamlit as st

from release_dashboard.app import SERVICE_STATE_KEY, SETUP_PAGE, register_page
from release_dashboard.core.config import DEFAULT_PROJECT_KEY, load_settings
from release_dashboard.core.errors import ConfigurationError
from release_dashboard.core.service import IssueService

logger = logging.getLogger(__name__)


def _defaults() -> dict[str, str]:
    try:
        settings = load_settings(st.secrets, os.environ)
    except (ConfigurationError, FileNotFoundError):
        # FileNotFoundError: no secrets.toml present
        return {}
    return {
        "server": settings.server,
        "email": settings.email,
        "token": settings.token,
        "project": settings.project_key,
    }


@register_page(SETUP_PAGE)
def setup_page():
    st.title("Jira Connection Setup")
    st.caption("Enter credentials (use secrets manager in production).")

    # Pre-fill from secrets / environment if available (user can override)
    defaults = _defaults()
    server = st.text_input(
        "Jira Server URL",
        value=st.session_state.get("jira_server") or defaults.get("server", ""),
    )
    email = st.text_input(
        "Email / Username",
        value=st.session_state.get("jira_email") or defaults.get("email", ""),
    )
    token = st.text_input("API Token", type="password", value=defaults.get("token", ""))
    project = st.text_input("Project key", value=defaults.get("project", DEFAULT_PROJECT_KEY))
    init_btn = st.button("Initialize Connection", type="primary")

    if init_btn:
        try:
            settings = load_settings(
                {
                    "JIRA_SERVER": server,
                    "JIRA_EMAIL": email,
                    "JIRA_API_TOKEN": token,
                    "JIRA_PROJECT_KEY": project,
                }
            )
        except ConfigurationError as exc:
            st.error(f"All fields required. {exc}")
            return
        try:
            st.session_state[SERVICE_STATE_KEY] = IssueService.from_settings(settings)
            st.session_state["jira_server"] = settings.server
            st.session_state["jira_email"] = settings.email
            st.success("Connection initialized.")
        except Exception as e:  # pragma: no cover
            logger.exception("Failed to initialize Jira client")
            st.error(f"Failed to initialize Jira client: {e}")

    if SERVICE_STATE_KEY in st.session_state:
        st.info("IssueService ready.")
