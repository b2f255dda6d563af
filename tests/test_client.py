"""Tests for the directory client against a stubbed Slack API."""

import httpx
import pytest

from slack_share.errors import (
    DeliveryFailure,
    RemoteApplicationFailure,
    RemoteAuthFailure,
    RemoteProtocolFailure,
    TransportError,
)
from slack_share.models import DirectoryEntry
from slack_share.storage import DirectoryCache


ALICE = DirectoryEntry(id="U1", team="T1", name="Alice")


class TestFetchDirectory:
    def test_skips_deleted_members(self, client, slack):
        assert client.fetch_directory() == [ALICE]

    def test_sends_bearer_token(self, client, slack):
        client.fetch_directory()
        request = slack.calls("users.list")[0]
        assert request.method == "GET"
        assert str(request.url) == "https://slack.com/api/users.list"
        assert request.headers["Authorization"] == "Bearer xoxb-test"
        assert request.headers["Content-Type"] == "application/json"

    def test_application_failure_carries_error(self, client, slack):
        slack.responses["users.list"] = httpx.Response(200, json={"ok": False, "error": "invalid_auth"})
        with pytest.raises(RemoteApplicationFailure) as exc:
            client.fetch_directory()
        assert exc.value.error == "invalid_auth"
        assert "invalid_auth" in str(exc.value)

    def test_application_failure_without_error(self, client, slack):
        slack.responses["users.list"] = httpx.Response(200, json={"ok": False})
        with pytest.raises(RemoteApplicationFailure, match="Unknown error"):
            client.fetch_directory()

    @pytest.mark.parametrize("status", [401, 403])
    def test_auth_status(self, client, slack, status):
        slack.responses["users.list"] = httpx.Response(status, text="nope")
        with pytest.raises(RemoteAuthFailure):
            client.fetch_directory()

    def test_server_error_status(self, client, slack):
        slack.responses["users.list"] = httpx.Response(500, text="oops")
        with pytest.raises(RemoteProtocolFailure):
            client.fetch_directory()

    @pytest.mark.parametrize("body", [
        {"members": []},
        {"ok": True},
        {"ok": True, "members": [{"id": "U1", "team_id": "T1", "profile": {}}]},
        {"ok": True, "members": [{"id": "U1", "profile": {"real_name": "Alice"}}]},
        ["not", "an", "object"],
    ])
    def test_schema_mismatch(self, client, slack, body):
        slack.responses["users.list"] = httpx.Response(200, json=body)
        with pytest.raises(RemoteProtocolFailure):
            client.fetch_directory()

    def test_non_json_body(self, client, slack):
        slack.responses["users.list"] = httpx.Response(200, text="<html>")
        with pytest.raises(RemoteProtocolFailure):
            client.fetch_directory()

    def test_connection_error(self, client, slack):
        slack.responses["users.list"] = httpx.ConnectError("connection refused")
        with pytest.raises(TransportError):
            client.fetch_directory()

    def test_undecodable_body(self, client, slack):
        slack.responses["users.list"] = lambda request: httpx.Response(
            200, headers={"Content-Encoding": "gzip"}, stream=httpx.ByteStream(b"not gzip")
        )
        with pytest.raises(TransportError):
            client.fetch_directory()

    def test_too_many_redirects(self, client, slack):
        slack.responses["users.list"] = httpx.TooManyRedirects("redirect loop")
        with pytest.raises(TransportError):
            client.fetch_directory()

    def test_missing_deleted_flag_means_active(self, client, slack):
        slack.responses["users.list"] = httpx.Response(200, json={
            "ok": True,
            "members": [{"id": "U9", "team_id": "T2", "profile": {"real_name": "Zed"}}],
        })
        assert client.fetch_directory() == [DirectoryEntry(id="U9", team="T2", name="Zed")]


class TestGetDirectory:
    def test_cached_directory_is_returned_without_fetching(self, client, slack):
        cached = [DirectoryEntry(id="U7", team="T1", name="Gina")]
        client.cache.save(cached)
        assert client.get_directory() == cached
        assert slack.calls("users.list") == []

    def test_missing_cache_fetches_and_saves(self, client, slack):
        assert client.get_directory() == [ALICE]
        assert len(slack.calls("users.list")) == 1
        assert client.cache.load() == [ALICE]

        # second call served from the cache
        assert client.get_directory() == [ALICE]
        assert len(slack.calls("users.list")) == 1

    def test_force_refresh_overwrites_cache(self, client, slack):
        client.cache.save([DirectoryEntry(id="U7", team="T1", name="Gina")])
        assert client.get_directory(force_refresh=True) == [ALICE]
        assert len(slack.calls("users.list")) == 1
        assert client.cache.load() == [ALICE]

    def test_corrupt_cache_falls_back_to_fetch(self, client, slack):
        client.cache.path.parent.mkdir(parents=True)
        client.cache.path.write_text("[{garbage")
        assert client.get_directory() == [ALICE]
        assert len(slack.calls("users.list")) == 1

    def test_empty_cache_falls_back_to_fetch(self, client, slack):
        client.cache.path.parent.mkdir(parents=True)
        client.cache.path.write_text("")
        assert client.get_directory() == [ALICE]
        assert len(slack.calls("users.list")) == 1

    def test_write_failure_does_not_lose_directory(self, client, slack, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        client.cache = DirectoryCache(blocker / "users.json")
        assert client.get_directory() == [ALICE]
        assert client.last_save_error is not None

    def test_fetch_failure_leaves_cache_alone(self, client, slack):
        cached = [DirectoryEntry(id="U7", team="T1", name="Gina")]
        client.cache.save(cached)
        slack.responses["users.list"] = httpx.Response(200, json={"ok": False, "error": "ratelimited"})
        with pytest.raises(RemoteApplicationFailure):
            client.get_directory(force_refresh=True)
        assert client.cache.load() == cached

    def test_map_view_last_name_wins(self, client, slack):
        first = DirectoryEntry(id="U1", team="T1", name="Sam")
        second = DirectoryEntry(id="U2", team="T1", name="Sam")
        client.cache.save([first, second])
        assert client.get_directory_map() == {"Sam": second}


class TestPostMessage:
    def test_payload(self, client, slack):
        client.post_message("print(1)", "C123")
        request = slack.calls("chat.postMessage")[0]
        assert request.method == "POST"
        assert request.headers["Authorization"] == "Bearer xoxb-test"
        assert slack.last_body("chat.postMessage") == {
            "channel": "C123",
            "blocks": [
                {"type": "section", "text": {"type": "mrkdwn", "text": "```\nprint(1)```"}},
                {"type": "context", "elements": [{"type": "mrkdwn", "text": "Shared with *IDEShare*"}]},
            ],
        }

    def test_non_200_is_delivery_failure(self, client, slack):
        slack.responses["chat.postMessage"] = httpx.Response(403, text="forbidden")
        with pytest.raises(DeliveryFailure) as exc:
            client.post_message("print(1)", "C123")
        assert exc.value.status_code == 403

    def test_ok_false_is_delivery_failure(self, client, slack):
        slack.responses["chat.postMessage"] = httpx.Response(
            200, json={"ok": False, "error": "channel_not_found"}
        )
        with pytest.raises(DeliveryFailure) as exc:
            client.post_message("print(1)", "C404")
        assert exc.value.error == "channel_not_found"

    def test_200_without_json_counts_as_sent(self, client, slack):
        slack.responses["chat.postMessage"] = httpx.Response(200, text="ok")
        client.post_message("print(1)", "C123")

    def test_connection_error(self, client, slack):
        slack.responses["chat.postMessage"] = httpx.ReadTimeout("timed out")
        with pytest.raises(TransportError):
            client.post_message("print(1)", "C123")
