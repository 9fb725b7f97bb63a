"""Release group tables for Streamlit rendering."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pandas as pd
import streamlit as st

from release_dashboard.features.release_view.filters import groups_to_dataframe


def issue_table(group: Mapping[str, Any]) -> tuple[pd.DataFrame, dict[str, object]]:
    """Key / summary table for one release with a link column into Jira."""
    df = groups_to_dataframe([group])
    if df.empty:
        return df, {}
    table = df[["url", "summary"]].rename(columns={"url": "Ticket", "summary": "Summary"})
    cfg = {
        "Ticket": st.column_config.LinkColumn(
            "Ticket",
            display_text=r"browse/(.*)$",
            help="Open in Jira",
            width="small",
        )
    }
    return table, cfg


def render_issue_table(group: Mapping[str, Any]) -> None:
    table, cfg = issue_table(group)
    if table.empty:
        st.caption("No tickets.")
        return
    st.dataframe(table, hide_index=True, column_config=cfg, use_container_width=True)
