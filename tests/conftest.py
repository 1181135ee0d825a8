"""Shared fixtures and builders for the monitor tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from github_monitor.events import ActivityEvent

BASE_TIME = datetime(2026, 10, 1, 12, 0, 0, tzinfo=timezone.utc)


def at(minutes: int) -> datetime:
    """A timestamp the given number of minutes after BASE_TIME."""
    return BASE_TIME + timedelta(minutes=minutes)


def make_event(
    event_id: str,
    minutes: int = 0,
    event_type: str = "WatchEvent",
    payload: dict | None = None,
    actor: str = "octocat",
    repo: str = "openlabsdevs/site",
) -> ActivityEvent:
    """Build an ActivityEvent without going through the API parser."""
    return ActivityEvent(event_id, event_type, at(minutes), actor, repo, payload or {})


def raw_event(event_id: str, created_at: str, event_type: str = "WatchEvent") -> dict:
    """A GitHub events API item as returned over the wire."""
    return {
        "id": event_id,
        "type": event_type,
        "actor": {"id": 1, "login": "octocat", "display_login": "octocat"},
        "repo": {"id": 2, "name": "openlabsdevs/site"},
        "payload": {"action": "started"},
        "public": True,
        "created_at": created_at,
    }


def make_config(**overrides) -> SimpleNamespace:
    """A config namespace with the attributes the monitor reads."""
    values = {
        "TELEGRAM_BOT_TOKEN": "123:abc",
        "TELEGRAM_API_URL": "https://api.telegram.org",
        "TELEGRAM_PARSE_MODE": "Markdown",
        "TELEGRAM_CHAT_ID": "1001",
        "TELEGRAM_GROUP_ID": "-2002",
        "GITHUB_USERNAME": "openlabsdevs",
        "GITHUB_TOKEN": "ghp_test",
        "GITHUB_API_URL": "https://api.github.com",
        "GITHUB_PAGE_SIZE": 100,
        "GITHUB_REPOS": [],
        "POLLING_INTERVAL": 5 * 60 * 60,
        "REQUEST_TIMEOUT": 30,
        "MAX_MESSAGE_LENGTH": 4000,
        "MESSAGE_DELAY": 0,
        "SEND_EMPTY_SUMMARIES": False,
        "STATUS_ENABLED": False,
        "STATUS_HOST": "127.0.0.1",
        "STATUS_PORT": 5000,
        "LOG_DIR": "",
        "DEBUG": False,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.fixture()
def config() -> SimpleNamespace:
    return make_config()
