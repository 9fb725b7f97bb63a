"""Pure helpers to build the release board view state for testing (no Streamlit)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from release_dashboard.features.release_view import filters as rv


@dataclass(slots=True)
class ReleaseViewContext:
    groups: list[dict[str, Any]]
    release_count: int
    shown_count: int
    total: int
    truncated: bool = False
    open_state: dict[str, bool] = field(default_factory=dict)


def build_release_context(
    payload: Mapping[str, Any] | None,
    query: str | None = None,
    open_state: Mapping[str, bool] | None = None,
) -> ReleaseViewContext:
    if not payload:
        return ReleaseViewContext([], 0, 0, 0)
    all_groups = payload.get("groups") or []
    groups = rv.filter_groups(all_groups, query)
    state = {g["fixVersion"]: rv.is_group_open(open_state or {}, g["fixVersion"]) for g in all_groups}
    return ReleaseViewContext(
        groups=groups,
        release_count=len(all_groups),
        shown_count=rv.shown_issue_count(groups),
        total=int(payload.get("total") or 0),
        truncated=bool(payload.get("truncated")),
        open_state=state,
    )
