"""Release board feature module: search and open/close state over grouped issues."""

from release_dashboard.features.release_view.context import ReleaseViewContext, build_release_context
from release_dashboard.features.release_view.filters import (
    filter_groups,
    groups_to_dataframe,
    is_group_open,
    set_all_open,
    shown_issue_count,
)

__all__ = [
    "ReleaseViewContext",
    "build_release_context",
    "filter_groups",
    "groups_to_dataframe",
    "is_group_open",
    "set_all_open",
    "shown_issue_count",
]
