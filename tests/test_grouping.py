from release_dashboard.core.grouping import group_by_fix_version, sort_groups
from release_dashboard.core.models import ReleaseGroup
from release_dashboard.core.releases import parse_release_name

BASE = "https://example.atlassian.net"


def _issue(key, *versions, summary=None):
    return {
        "key": key,
        "fields": {
            "summary": summary if summary is not None else f"Summary {key}",
            "fixVersions": [v if isinstance(v, dict) else {"name": v} for v in versions],
        },
    }


def test_duplicate_version_on_one_issue_counts_once():
    groups = group_by_fix_version([_issue("IM-1", "2024 Sausis", "2024 Sausis")], BASE)
    assert len(groups) == 1
    assert [i.key for i in groups[0].issues] == ["IM-1"]


def test_issue_joins_every_release_in_search_order():
    raw = [_issue("IM-2", "2024 vasaris", "2024 sausis"), _issue("IM-1", "2024 sausis")]
    groups = group_by_fix_version(raw, BASE)
    assert [g.fix_version for g in groups] == ["2024 vasaris", "2024 sausis"]
    assert [i.key for i in groups[1].issues] == ["IM-2", "IM-1"]
    ref = groups[0].issues[0]
    assert ref.to_payload() == {"key": "IM-2", "summary": "Summary IM-2", "url": f"{BASE}/browse/IM-2"}


def test_released_first_seen_wins():
    raw = [
        _issue("IM-1", {"name": "2024 sausis"}),
        _issue("IM-2", {"name": "2024 sausis", "released": True}),
        _issue("IM-3", {"name": "2024 kovas", "released": False}),
    ]
    groups = {g.fix_version: g for g in group_by_fix_version(raw, BASE)}
    assert groups["2024 sausis"].released is None
    assert groups["2024 kovas"].released is False


def test_names_are_case_sensitive_and_blank_names_skipped():
    raw = [_issue("IM-1", "2024 Sausis", "2024 sausis", {"name": ""}, {"released": True}, "junk")]
    groups = group_by_fix_version(raw, BASE)
    assert sorted(g.fix_version for g in groups) == ["2024 Sausis", "2024 sausis", "junk"]


def test_missing_summary_and_versions():
    raw = [{"key": "IM-1", "fields": {"summary": None, "fixVersions": [{"name": "Backlog"}]}}, {"key": "IM-2"}]
    groups = group_by_fix_version(raw, BASE)
    assert len(groups) == 1
    assert groups[0].issues[0].summary == ""


def test_sort_order_is_total():
    names = ["Zeta", "2023 gruodis", "2024 Sausis", "Alpha", "2024 vasaris", "1999 sausis", "2025 spalis"]
    ordered = [g.fix_version for g in sort_groups(ReleaseGroup(n, None) for n in names)]
    assert ordered == ["2025 spalis", "2024 vasaris", "2024 Sausis", "2023 gruodis", "1999 sausis", "Alpha", "Zeta"]

    keys = [parse_release_name(n) for n in ordered]
    parseable = [k.sort_key for k in keys if k is not None]
    assert parseable == sorted(parseable, reverse=True)
    first_unparseable = next(i for i, k in enumerate(keys) if k is None)
    assert all(k is None for k in keys[first_unparseable:])
