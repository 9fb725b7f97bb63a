"""Convenience launcher for the Streamlit app.

Usage:
  streamlit run run_dashboard.py

Automatically imports every module in ``release_dashboard/pages`` so each page
decorated with ``@register_page`` registers itself without manual edits here.
Credentials are read from ``.streamlit/secrets.toml`` (top level or a
``[jira]`` section) and then from the environment (``JIRA_BASE_URL``,
``JIRA_EMAIL``, ``JIRA_API_TOKEN``, optional ``JIRA_PROJECT_KEY``).
"""

import logging
import os
from importlib import import_module
from pathlib import Path

import streamlit as st

from release_dashboard.app import SERVICE_STATE_KEY, main

st.set_page_config(layout="wide", page_title="Release Dashboard")
logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("run_dashboard")


def _secrets():
    try:
        # Touch the mapping so a missing secrets.toml surfaces here
        st.secrets.get("jira")
    except FileNotFoundError:
        return {}
    return st.secrets


def _auto_init_issue_service():
    """Initialize Jira service from Streamlit secrets / environment if available."""
    if SERVICE_STATE_KEY in st.session_state:
        return

    from release_dashboard.core.config import load_settings
    from release_dashboard.core.errors import ConfigurationError
    from release_dashboard.core.service import IssueService

    try:
        settings = load_settings(_secrets(), os.environ)
    except ConfigurationError as exc:
        st.sidebar.warning(f"Jira secrets not found ({exc}). Please use the Setup page.")
        return
    try:
        st.session_state[SERVICE_STATE_KEY] = IssueService.from_settings(settings)
        st.session_state["jira_server"] = settings.server
    except Exception as e:
        logger.exception("Jira connection failed")
        st.sidebar.error(f"Jira connection failed: {e}")
        # Clear any partial state to ensure user is directed to setup
        st.session_state.pop(SERVICE_STATE_KEY, None)


_auto_init_issue_service()

PAGES_DIR = Path(__file__).parent / "release_dashboard" / "pages"
for py in sorted(PAGES_DIR.glob("[!_]*.py")):
    mod_name = f"release_dashboard.pages.{py.stem}"
    try:
        import_module(mod_name)
    except Exception:  # pragma: no cover - defensive
        logger.exception("Failed importing page %s", mod_name)

if __name__ == "__main__":
    main()
