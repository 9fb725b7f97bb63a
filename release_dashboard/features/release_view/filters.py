"""Client-side search and open/close state over an already grouped payload.

All functions take the ``groups`` list returned by the list-issues handler
(``[{fixVersion, released, issues: [{key, summary, url}]}]``) and never touch
Jira.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import pandas as pd

GROUP_TABLE_COLUMNS = ("fixVersion", "released", "key", "summary", "url")


def normalize(text: str | None) -> str:
    return (text or "").strip().lower()


def filter_groups(groups: Iterable[Mapping[str, Any]], query: str | None) -> list[dict[str, Any]]:
    """Keep issues whose ``key summary fixVersion`` contains ``query``.

    Matching is case-insensitive. Groups left without issues are dropped; an
    empty query returns every group unchanged.
    """
    q = normalize(query)
    groups = [dict(g) for g in groups]
    if not q:
        return groups
    out: list[dict[str, Any]] = []
    for group in groups:
        name = group.get("fixVersion") or ""
        issues = [
            issue
            for issue in group.get("issues") or []
            if q in normalize(f"{issue.get('key', '')} {issue.get('summary', '')} {name}")
        ]
        if issues:
            out.append({**group, "issues": issues})
    return out


def shown_issue_count(groups: Iterable[Mapping[str, Any]]) -> int:
    return sum(len(g.get("issues") or []) for g in groups)


def set_all_open(
    state: Mapping[str, bool],
    groups: Iterable[Mapping[str, Any]],
    is_open: bool,
) -> dict[str, bool]:
    out = dict(state)
    for group in groups:
        out[group["fixVersion"]] = is_open
    return out


def is_group_open(state: Mapping[str, bool], name: str) -> bool:
    # Releases are expanded until the user collapses them
    return state.get(name, True)


def groups_to_dataframe(groups: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """Flatten groups into one row per (release, issue) membership."""
    rows = []
    for group in groups:
        for issue in group.get("issues") or []:
            rows.append(
                {
                    "fixVersion": group.get("fixVersion"),
                    "released": group.get("released"),
                    "key": issue.get("key"),
                    "summary": issue.get("summary"),
                    "url": issue.get("url"),
                }
            )
    return pd.DataFrame(rows, columns=list(GROUP_TABLE_COLUMNS))
