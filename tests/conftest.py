"""Shared fixtures: a DirectoryClient wired to a stubbed Slack API."""

import json

import httpx
import pytest

from slack_share.client import DirectoryClient
from slack_share.config import ShareConfig
from slack_share.utils import get_client


USERS_OK = {
    "ok": True,
    "members": [
        {"id": "U1", "team_id": "T1", "deleted": False, "profile": {"real_name": "Alice"}},
        {"id": "U2", "team_id": "T1", "deleted": True, "profile": {"real_name": "Bob"}},
    ],
}


class FakeSlack:
    """Records requests and answers them from per-endpoint responses."""

    def __init__(self):
        self.requests = []
        self.responses = {
            "users.list": httpx.Response(200, json=USERS_OK),
            "chat.postMessage": httpx.Response(200, json={"ok": True}),
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        endpoint = request.url.path.rsplit("/", 1)[-1]
        response = self.responses[endpoint]
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(request)
        return httpx.Response(response.status_code, headers=response.headers, content=response.content)

    def calls(self, endpoint: str) -> list:
        return [r for r in self.requests if r.url.path.endswith(endpoint)]

    def last_body(self, endpoint: str) -> dict:
        return json.loads(self.calls(endpoint)[-1].content)


@pytest.fixture
def slack():
    return FakeSlack()


@pytest.fixture
def config(tmp_path):
    return ShareConfig(token="xoxb-test", cache_path=tmp_path / "cache" / "users.json")


@pytest.fixture
def client(config, slack):
    http = get_client(
        config.token, config.base_url, config.timeout, transport=httpx.MockTransport(slack.handler)
    )
    with DirectoryClient(config, http=http) as c:
        yield c
    http.close()
