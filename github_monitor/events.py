"""Activity event records parsed from the GitHub events API."""
from dataclasses import dataclass, field
from datetime import datetime, timezone

GITHUB_URL = "https://github.com"


class MalformedEventError(ValueError):
    """A raw feed item lacks the fields every event must have."""


def parse_timestamp(value):
    """Parse a GitHub ISO-8601 timestamp into an aware UTC datetime."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@dataclass(frozen=True)
class ActivityEvent:
    """A single immutable unit of activity from a GitHub feed."""

    id: str
    type: str
    created_at: datetime
    actor: str = ""
    repo: str = ""
    payload: dict = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_api(cls, raw):
        """Build an event from one item of a GitHub events response.

        Raises MalformedEventError when the id or timestamp is missing or unreadable.
        """
        if not isinstance(raw, dict) or not raw.get("id") or not raw.get("created_at"):
            raise MalformedEventError(f"Event without id or created_at: {raw!r}")
        try:
            created_at = parse_timestamp(str(raw["created_at"]))
        except ValueError as e:
            raise MalformedEventError(
                f"Event {raw['id']} has invalid created_at {raw['created_at']!r}") from e

        actor = raw.get("actor") or {}
        repo = raw.get("repo") or {}
        return cls(
            str(raw["id"]),
            raw.get("type") or "",
            created_at,
            actor.get("login") or "",
            repo.get("name") or "",
            raw.get("payload") or {},
        )

    @property
    def actor_url(self):
        return f"{GITHUB_URL}/{self.actor}"

    @property
    def repo_url(self):
        return f"{GITHUB_URL}/{self.repo}"
