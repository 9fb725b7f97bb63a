"""Group aggregated issues by fix version and order releases newest first."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .mappers import map_issue_ref
from .models import ReleaseGroup
from .releases import parse_release_name


def _release_order(group: ReleaseGroup) -> tuple[int, int, str]:
    parsed = parse_release_name(group.fix_version)
    if parsed is None:
        return (1, 0, group.fix_version)
    return (0, -parsed.sort_key, "")


def sort_groups(groups: Iterable[ReleaseGroup]) -> list[ReleaseGroup]:
    """Parseable releases by descending ``(year, month)``, then the rest by name."""
    return sorted(groups, key=_release_order)


def group_by_fix_version(raw_issues: Iterable[dict[str, Any]], base_url: str) -> list[ReleaseGroup]:
    """Partition raw search results into one :class:`ReleaseGroup` per fix version.

    Each issue joins every distinct fix version it lists (exact, case-sensitive
    names). The first issue seen for a version decides the group's ``released``
    flag. Issues keep their search order inside a group.
    """
    groups: dict[str, ReleaseGroup] = {}
    for raw in raw_issues:
        ref = map_issue_ref(raw, base_url)
        fix_versions = (raw.get("fields") or {}).get("fixVersions") or []
        seen: set[str] = set()
        for fv in fix_versions:
            name = fv.get("name") if isinstance(fv, dict) else None
            if not name or name in seen:
                continue
            seen.add(name)
            group = groups.get(name)
            if group is None:
                group = ReleaseGroup(fix_version=name, released=fv.get("released"))
                groups[name] = group
            group.issues.append(ref)
    return sort_groups(groups.values())
