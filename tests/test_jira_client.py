import json

import pytest
from jira import JIRAError

from release_dashboard.core.config import DETAIL_FIELDS, SEARCH_FIELDS, release_jql
from release_dashboard.core.errors import BadRequestError, UpstreamError

SERVER = "https://example.atlassian.net"


def test_search_all_posts_cursor_and_projection(make_api, make_response):
    api = make_api(
        [
            make_response(payload={"issues": [{"key": "IM-1"}], "isLast": False, "nextPageToken": "abc"}),
            make_response(payload={"issues": [{"key": "IM-2"}], "isLast": True}),
        ]
    )
    result = api.search_all(release_jql("IMOSHELP"), SEARCH_FIELDS)

    assert [i["key"] for i in result.issues] == ["IM-1", "IM-2"]
    first, second = api.calls
    assert first.method == "POST"
    assert first.url == f"{SERVER}/rest/api/3/search/jql"
    body = json.loads(first.kwargs["data"])
    assert body == {
        "jql": "project = IMOSHELP AND fixVersion IS NOT EMPTY ORDER BY updated DESC",
        "maxResults": 100,
        "fields": ["summary", "fixVersions"],
    }
    assert json.loads(second.kwargs["data"])["nextPageToken"] == "abc"


def test_non_success_status_raises_upstream_error(make_api, make_response):
    api = make_api([make_response(status_code=400, text="bad jql")])
    with pytest.raises(UpstreamError) as excinfo:
        api.search_page("nonsense", SEARCH_FIELDS)
    assert excinfo.value.status == 400
    assert excinfo.value.body == "bad jql"


def test_jira_error_keeps_raw_body(make_api, make_response):
    raw = '{"errorMessages": ["Issue does not exist or you do not have permission to see it."], "errors": {}}'
    api = make_api([make_response(status_code=404, text=raw)])
    with pytest.raises(UpstreamError) as excinfo:
        api.fetch_issue_raw("IM-404", DETAIL_FIELDS)
    assert excinfo.value.status == 404
    assert excinfo.value.body == raw
    assert isinstance(excinfo.value.__cause__, JIRAError)


def test_jira_error_without_response_falls_back_to_text(make_api):
    api = make_api([JIRAError(text="Issue does not exist", status_code=404)])
    with pytest.raises(UpstreamError) as excinfo:
        api.fetch_issue_raw("IM-404", DETAIL_FIELDS)
    assert excinfo.value.status == 404
    assert excinfo.value.body == "Issue does not exist"


def test_issue_key_is_path_escaped(make_api, make_response):
    api = make_api([make_response(payload={"key": "IM 1/2"})])
    api.fetch_issue_raw("IM 1/2", DETAIL_FIELDS)
    call = api.calls[0]
    assert call.url == f"{SERVER}/rest/api/3/issue/IM%201%2F2"
    assert call.kwargs["params"]["fields"].split(",") == list(DETAIL_FIELDS)


def test_fetch_attachment_returns_bytes_and_type(make_api, make_response):
    api = make_api([make_response(content=b"PNG", headers={"content-type": "image/png"})])
    content, content_type = api.fetch_attachment(f"{SERVER}/rest/api/3/attachment/content/1")
    assert content == b"PNG"
    assert content_type == "image/png"


def test_fetch_attachment_defaults_content_type(make_api, make_response):
    api = make_api([make_response(content=b"x")])
    _, content_type = api.fetch_attachment(f"{SERVER}/rest/api/3/attachment/content/1")
    assert content_type == "application/octet-stream"


def test_fetch_attachment_rejects_foreign_hosts(make_api):
    api = make_api([])
    with pytest.raises(BadRequestError):
        api.fetch_attachment("https://evil.example.com/steal")
    assert api.calls == []


def test_attachment_failure_message(make_api, make_response):
    api = make_api([make_response(status_code=403, text="forbidden")])
    with pytest.raises(UpstreamError) as excinfo:
        api.fetch_attachment(f"{SERVER}/rest/api/3/attachment/content/1")
    assert excinfo.value.message == "Attachment fetch failed"
