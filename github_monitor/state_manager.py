"""State manager for tracking the delivery watermark."""
import logging
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


class StateManager:
    """Holds the in-memory watermark, first-run flag and repository cache.

    Owned by the monitor and mutated only between or at the end of cycles.
    Nothing is persisted; a restart begins a new first run.
    """

    def __init__(self, now=None):
        """Initialize the state with the watermark at the current time."""
        self.watermark = now or datetime.now(timezone.utc)
        self.first_run = True
        self.repos = []
        self.cycles_run = 0
        self.last_cycle_at = None
        self.last_cycle_ok = None
        self.last_error = None
        self.last_delivered = 0

    def advance(self, latest):
        """Move the watermark to the newest fetched timestamp, if any.

        The first run replaces the start-time watermark outright; after that the
        watermark only moves forward, so a feed missing from one cycle cannot
        make its already delivered events look new again.
        """
        if latest is None:
            logger.debug("No events fetched, watermark stays at %s", self.watermark)
            return False
        if not self.first_run and latest <= self.watermark:
            logger.debug("Newest fetched event %s is not past watermark %s",
                         latest.isoformat(), self.watermark.isoformat())
            return False
        self.watermark = latest
        logger.info("Watermark advanced to %s", latest.isoformat())
        return True

    def complete_first_run(self):
        """Clear the first-run flag; it is never set again."""
        if self.first_run:
            self.first_run = False
            logger.info("Initial check completed")

    def update_repos(self, repos):
        """Replace the cached repository list."""
        self.repos = list(repos)

    def record_cycle(self, ok, delivered=0, error=None):
        """Record the outcome of a cycle for status reporting."""
        self.cycles_run += 1
        self.last_cycle_at = datetime.now(timezone.utc)
        self.last_cycle_ok = ok
        self.last_delivered = delivered
        self.last_error = str(error) if error is not None else None

    def snapshot(self):
        """A JSON-serializable view of the current state."""
        return {
            "watermark": self.watermark.isoformat(),
            "first_run": self.first_run,
            "repos": list(self.repos),
            "cycles_run": self.cycles_run,
            "last_cycle_at": self.last_cycle_at.isoformat() if self.last_cycle_at else None,
            "last_cycle_ok": self.last_cycle_ok,
            "last_delivered": self.last_delivered,
            "last_error": self.last_error,
        }
