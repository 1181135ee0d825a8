"""Tests for the GitHub REST client, with the HTTP session mocked."""

from dataclasses import FrozenInstanceError
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
import requests

from conftest import make_config, raw_event
from github_monitor.events import ActivityEvent, MalformedEventError, parse_timestamp
from github_monitor.github_client import GitHubAPIError, GitHubClient


def _response(status_code=200, body=None, headers=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body if body is not None else []
    response.headers = headers or {}
    return response


@pytest.fixture()
def session() -> MagicMock:
    session = MagicMock()
    session.headers = {}
    return session


def test_token_is_sent_when_configured(session):
    GitHubClient(make_config(GITHUB_TOKEN="ghp_secret"), session=session)

    assert session.headers["Authorization"] == "token ghp_secret"
    assert session.headers["Accept"] == "application/vnd.github.v3+json"


def test_no_authorization_header_without_token(session):
    GitHubClient(make_config(GITHUB_TOKEN=None), session=session)

    assert "Authorization" not in session.headers


def test_account_events_are_parsed(session):
    session.get.return_value = _response(body=[
        raw_event("101", "2026-10-01T12:00:00Z", "PushEvent"),
        raw_event("102", "2026-10-01T13:30:00Z"),
    ])
    client = GitHubClient(make_config(), session=session)

    events = client.get_account_events("openlabsdevs")

    session.get.assert_called_once_with(
        "https://api.github.com/users/openlabsdevs/events",
        params={"per_page": 100},
        timeout=30,
    )
    assert [event.id for event in events] == ["101", "102"]
    assert events[0].type == "PushEvent"
    assert events[0].actor == "octocat"
    assert events[0].repo == "openlabsdevs/site"
    assert events[1].created_at == datetime(2026, 10, 1, 13, 30, tzinfo=timezone.utc)


def test_repo_events_use_repo_path(session):
    session.get.return_value = _response(body=[])
    client = GitHubClient(make_config(), session=session)

    client.get_repo_events(" acme/api ")

    assert session.get.call_args.args[0] == "https://api.github.com/repos/acme/api/events"


def test_list_repos_returns_full_names(session):
    session.get.return_value = _response(body=[
        {"full_name": "acme/api", "private": False},
        {"full_name": "acme/web", "private": False},
    ])
    client = GitHubClient(make_config(), session=session)

    assert client.list_repos("acme") == ["acme/api", "acme/web"]
    assert session.get.call_args.kwargs["params"] == {"per_page": 100, "type": "all"}


def test_error_status_raises_with_rate_limit(session):
    session.get.return_value = _response(
        status_code=403, headers={"X-RateLimit-Remaining": "0"})
    client = GitHubClient(make_config(), session=session)

    with pytest.raises(GitHubAPIError) as excinfo:
        client.get_account_events("acme")

    assert excinfo.value.status_code == 403
    assert excinfo.value.rate_limit_remaining == "0"


def test_transport_error_is_wrapped(session):
    session.get.side_effect = requests.ConnectionError("connection refused")
    client = GitHubClient(make_config(), session=session)

    with pytest.raises(GitHubAPIError) as excinfo:
        client.get_repo_events("acme/api")

    assert excinfo.value.status_code is None
    assert "connection refused" in str(excinfo.value)


def test_malformed_items_are_skipped_not_fatal(session):
    missing_id = raw_event("", "2026-10-01T12:00:00Z")
    missing_time = raw_event("202", "2026-10-01T12:00:00Z")
    del missing_time["created_at"]
    bad_time = raw_event("203", "yesterday")
    session.get.return_value = _response(body=[
        missing_id,
        missing_time,
        bad_time,
        "not an event",
        raw_event("204", "2026-10-01T14:00:00Z"),
    ])
    client = GitHubClient(make_config(), session=session)

    events = client.get_account_events("acme")

    assert [event.id for event in events] == ["204"]


def test_non_list_body_raises(session):
    session.get.return_value = _response(body={"message": "Not Found"})
    client = GitHubClient(make_config(), session=session)

    with pytest.raises(GitHubAPIError):
        client.get_repo_events("acme/api")


def test_from_api_rejects_missing_created_at():
    raw = raw_event("1", "2026-10-01T12:00:00Z")
    del raw["created_at"]

    with pytest.raises(MalformedEventError):
        ActivityEvent.from_api(raw)


def test_from_api_tolerates_missing_actor_and_repo():
    event = ActivityEvent.from_api(
        {"id": 7, "type": "WatchEvent", "created_at": "2026-10-01T12:00:00Z"})

    assert event.id == "7"
    assert event.actor == ""
    assert event.repo == ""
    assert event.payload == {}


def test_parse_timestamp_handles_zulu_suffix():
    assert parse_timestamp("2026-10-01T12:00:00Z") == datetime(2026, 10, 1, 12, tzinfo=timezone.utc)


def test_event_is_immutable():
    event = ActivityEvent.from_api(raw_event("1", "2026-10-01T12:00:00Z"))

    with pytest.raises(FrozenInstanceError):
        event.id = "2"
