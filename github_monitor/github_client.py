"""Client for the GitHub REST API activity endpoints."""
import logging
import requests

from .events import ActivityEvent, MalformedEventError

logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """Error from the GitHub API or the transport beneath it."""

    def __init__(self, message, status_code=None, rate_limit_remaining=None):
        self.message = message
        self.status_code = status_code
        self.rate_limit_remaining = rate_limit_remaining
        super().__init__(message)


class GitHubClient:
    """Fetches events and repository listings for a GitHub account."""

    def __init__(self, config, session=None):
        """Initialize the client with configuration and an optional session."""
        self.base_url = config.GITHUB_API_URL.rstrip("/")
        self.page_size = config.GITHUB_PAGE_SIZE
        self.timeout = config.REQUEST_TIMEOUT
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/vnd.github.v3+json"})
        if config.GITHUB_TOKEN:
            self.session.headers["Authorization"] = f"token {config.GITHUB_TOKEN}"
            logger.debug("Using token authentication for GitHub requests")

    def _get(self, path, **params):
        """Issue a GET request and return the decoded JSON body."""
        url = f"{self.base_url}{path}"
        logger.info("Fetching %s", url)
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise GitHubAPIError(f"Request to {url} failed: {e}") from e

        if response.status_code != 200:
            raise GitHubAPIError(
                f"GitHub returned {response.status_code} for {url}",
                status_code=response.status_code,
                rate_limit_remaining=response.headers.get("X-RateLimit-Remaining"),
            )
        try:
            return response.json()
        except ValueError as e:
            raise GitHubAPIError(
                f"Invalid JSON from {url}", status_code=response.status_code) from e

    def _events(self, path):
        """Parse a feed, logging and skipping items that are not valid events."""
        body = self._get(path, per_page=self.page_size)
        if not isinstance(body, list):
            raise GitHubAPIError(f"Expected a list of events from {path}")

        events = []
        for raw in body:
            try:
                events.append(ActivityEvent.from_api(raw))
            except MalformedEventError as e:
                logger.warning("Skipping malformed event from %s: %s", path, e)
        return events

    def get_account_events(self, account):
        """Recent public events performed by a user or organization."""
        return self._events(f"/users/{account}/events")

    def get_repo_events(self, repo):
        """Recent events on a single repository given as owner/name."""
        return self._events(f"/repos/{repo.strip()}/events")

    def list_repos(self, account):
        """Full names of the repositories owned by the account."""
        repos = self._get(f"/users/{account}/repos",
                          per_page=self.page_size, type="all")
        return [repo["full_name"] for repo in repos]
