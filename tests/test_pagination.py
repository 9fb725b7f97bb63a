import pytest

from release_dashboard.core.errors import UpstreamError
from release_dashboard.core.pagination import PageContinuation, collect_pages, continuation_from_page


class ScriptedPages:
    def __init__(self, pages):
        self.pages = list(pages)
        self.cursors = []

    def __call__(self, cursor):
        self.cursors.append(cursor)
        item = self.pages.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def test_continuation_rules():
    assert continuation_from_page({}) == PageContinuation(done=True)
    assert continuation_from_page({"isLast": True, "nextPageToken": "t"}).done
    assert continuation_from_page({"isLast": False}).done
    assert continuation_from_page({"isLast": False, "nextPageToken": "t"}) == PageContinuation(False, "t")
    # an empty token is still a token
    assert continuation_from_page({"isLast": False, "nextPageToken": ""}) == PageContinuation(False, "")


def test_three_pages_accumulate_in_order():
    fetch = ScriptedPages(
        [
            {"issues": [{"key": "A-1"}, {"key": "A-2"}], "isLast": False, "nextPageToken": "p2"},
            {"issues": [{"key": "A-3"}], "isLast": False, "nextPageToken": "p3"},
            {"issues": [{"key": "A-4"}], "isLast": True},
        ]
    )
    result = collect_pages(fetch)
    assert [i["key"] for i in result.issues] == ["A-1", "A-2", "A-3", "A-4"]
    assert fetch.cursors == [None, "p2", "p3"]
    assert result.pages == 3
    assert not result.truncated


def test_missing_is_last_stops_after_first_page():
    fetch = ScriptedPages([{"issues": [{"key": "A-1"}], "nextPageToken": "p2"}])
    result = collect_pages(fetch)
    assert len(result.issues) == 1
    assert fetch.cursors == [None]


def test_safety_bound_truncates_silently():
    pages = [{"issues": [{"key": f"A-{n}"}], "isLast": False, "nextPageToken": f"p{n}"} for n in range(5)]
    progress_calls = []
    result = collect_pages(ScriptedPages(pages), max_pages=3, progress=lambda *a: progress_calls.append(a))
    assert len(result.issues) == 3
    assert result.truncated
    assert result.pages == 3
    assert [c[1] for c in progress_calls] == [1, 2, 3]


def test_failure_aborts_without_partial_result():
    fetch = ScriptedPages(
        [
            {"issues": [{"key": "A-1"}], "isLast": False, "nextPageToken": "p2"},
            UpstreamError(500, "boom"),
        ]
    )
    with pytest.raises(UpstreamError) as excinfo:
        collect_pages(fetch)
    assert excinfo.value.status == 500
    assert excinfo.value.body == "boom"
