"""Merge activity feeds and select the events not yet delivered."""
import logging

logger = logging.getLogger(__name__)


class FetchResult:
    """Outcome of one aggregation pass."""

    def __init__(self, delivery, latest, total):
        # Events to deliver, oldest first
        self.delivery = delivery
        # Newest created_at seen in the merged batch, None when nothing was fetched
        self.latest = latest
        self.total = total

    def __repr__(self):
        return (f"FetchResult(delivery={len(self.delivery)}, "
                f"latest={self.latest}, total={self.total})")


def merge_events(batches):
    """Deduplicate events by id and sort them newest first."""
    unique = {}
    for batch in batches:
        for event in batch:
            unique[event.id] = event
    return sorted(unique.values(), key=lambda event: event.created_at, reverse=True)


def select_new(events, watermark, first_run):
    """Events to deliver from a newest-first list, returned oldest first."""
    if first_run:
        selected = list(events)
    else:
        selected = [event for event in events if event.created_at > watermark]
    selected.reverse()
    return selected


class ActivityAggregator:
    """Collects activity for an account and its repositories."""

    def __init__(self, client):
        """Initialize the aggregator with a GitHub client."""
        self.client = client

    def _fetch_repo(self, repo):
        """Fetch one repository feed, logging and skipping on failure."""
        try:
            return self.client.get_repo_events(repo)
        except Exception as e:
            logger.error("Error fetching events for repo %s: %s", repo, e)
            status_code = getattr(e, "status_code", None)
            if status_code is not None:
                logger.error("Response status: %s, rate limit remaining: %s",
                             status_code, getattr(e, "rate_limit_remaining", None))
            return []

    def fetch(self, account, repos, state):
        """Fetch, merge and filter activity against the state's watermark.

        A failure on the account feed propagates to the caller; failures on
        individual repository feeds only drop that repository's events.
        """
        batches = [self.client.get_account_events(account)]
        for repo in repos:
            batches.append(self._fetch_repo(repo))

        events = merge_events(batches)
        logger.info("Total events fetched: %d", len(events))
        if events:
            types = sorted({event.type for event in events})
            logger.debug("Event types: %s", ", ".join(types))

        delivery = select_new(events, state.watermark, state.first_run)
        if state.first_run:
            logger.info("Initial check - sending all %d events", len(delivery))
        else:
            logger.info("Found %d new activities", len(delivery))

        latest = events[0].created_at if events else None
        return FetchResult(delivery, latest, len(events))
