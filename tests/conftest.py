"""Test configuration ensuring local package import when editable install not active.

If users invoke `pytest` outside the project's virtualenv, we still add the project
root to sys.path so `import release_dashboard` works. Also provides a scripted
stand-in for the authenticated jira session.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest
from jira import JIRAError

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from release_dashboard.core.jira_client import JiraAPI  # noqa: E402

SERVER = "https://example.atlassian.net"


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None, headers=None, content=b""):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload or {})
        self.headers = headers or {}
        self.content = content

    def json(self):
        return self._payload


def _parsed_error_text(resp: FakeResponse) -> str:
    try:
        data = json.loads(resp.text)
    except ValueError:
        return resp.text
    messages = data.get("errorMessages") if isinstance(data, dict) else None
    return ", ".join(messages) if messages else resp.text


class FakeSession:
    """Replays queued responses (or exceptions) and records each request.

    Like jira's ResilientSession, a status >= 400 is raised as ``JIRAError``
    whose ``text`` is the parsed error message and whose ``response`` keeps
    the raw body.
    """

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append(SimpleNamespace(method=method, url=url, kwargs=kwargs))
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        if item.status_code >= 400:
            raise JIRAError(
                text=_parsed_error_text(item),
                status_code=item.status_code,
                url=url,
                response=item,
            )
        return item


class FakeJiraAPI(JiraAPI):
    def __init__(self, responses=None, server=SERVER):
        self.server = server
        self.client = SimpleNamespace(_session=FakeSession(responses))

    @property
    def calls(self):
        return self.client._session.calls


@pytest.fixture
def make_api():
    return FakeJiraAPI


@pytest.fixture
def make_response():
    return FakeResponse
