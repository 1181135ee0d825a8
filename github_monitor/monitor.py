"""Main monitoring service for GitHub activity."""
import logging
import signal
import threading
import time
import traceback

from .aggregator import ActivityAggregator
from .chunker import build_blocks, describe_period
from .formatter import format_activity
from .github_client import GitHubClient
from .notifier import NotificationService
from .state_manager import StateManager
from .status_server import StatusServer

logger = logging.getLogger(__name__)


class GitHubMonitor:
    """Polls GitHub activity for an account and relays new events to Telegram."""

    def __init__(self, config, client=None, notifier=None, state_manager=None):
        """Initialize the monitor with configuration and optional collaborators."""
        self.config = config
        self._validate_config()

        self.running = False
        self._stop_event = threading.Event()
        self._cycle_lock = threading.Lock()

        self.state_manager = state_manager or StateManager()
        self.client = client or GitHubClient(config)
        self.aggregator = ActivityAggregator(self.client)
        self.notifier = notifier or NotificationService(config)

        self.status_server = None
        if config.STATUS_ENABLED:
            self.status_server = StatusServer(config, self.state_manager)

    def _validate_config(self):
        """Validate that all required configuration is present."""
        missing_vars = []

        if not self.config.TELEGRAM_BOT_TOKEN:
            missing_vars.append("TELEGRAM_BOT_TOKEN")
        if not self.config.GITHUB_USERNAME:
            missing_vars.append("GITHUB_USERNAME")

        if not self.config.TELEGRAM_CHAT_ID and not self.config.TELEGRAM_GROUP_ID:
            logger.warning("Neither TELEGRAM_CHAT_ID nor TELEGRAM_GROUP_ID is set - summaries will not be delivered")

        if not self.config.GITHUB_TOKEN:
            logger.warning("GITHUB_TOKEN is not set - unauthenticated requests are heavily rate limited")

        if missing_vars:
            error_msg = f"Missing required configuration variables: {', '.join(missing_vars)}"
            logger.error(error_msg)
            raise ValueError(error_msg)

    def setup_signal_handlers(self):
        """Set up signal handlers for graceful shutdown."""
        # pylint: disable=unused-argument
        def signal_handler(sig, frame):
            logger.info("Received signal %s, shutting down gracefully...", sig)
            self.stop()

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    @property
    def dynamic_repos(self):
        return not self.config.GITHUB_REPOS

    def refresh_repos(self):
        """Refresh the cached repository list, keeping the old one on failure."""
        account = self.config.GITHUB_USERNAME
        logger.info("Fetching all repositories for: %s", account)
        try:
            repos = self.client.list_repos(account)
        except Exception as e:
            logger.error("Error fetching repositories: %s", e)
            return self.state_manager.repos
        logger.info("Found %d repositories: %s", len(repos), ", ".join(repos))
        self.state_manager.update_repos(repos)
        return repos

    def deliver(self, events, first_run):
        """Format events into summary blocks and send them to every destination."""
        fragments = [format_activity(event) for event in events]
        period = describe_period(first_run, self.config.POLLING_INTERVAL)
        blocks = build_blocks(fragments, self.config.GITHUB_USERNAME, period,
                              self.config.MAX_MESSAGE_LENGTH)
        sent = self.notifier.send_blocks(blocks)
        logger.info("Sent %d message(s) with %d total activities",
                    len(blocks), len(events))
        return sent

    def _cycle(self):
        state = self.state_manager
        repos = self.refresh_repos() if self.dynamic_repos else self.config.GITHUB_REPOS

        result = self.aggregator.fetch(self.config.GITHUB_USERNAME, repos, state)

        send_unconditionally = state.first_run or self.config.SEND_EMPTY_SUMMARIES
        if result.delivery or send_unconditionally:
            self.deliver(result.delivery, state.first_run)
        else:
            logger.info("No new activities")

        # Keyed to the newest fetched event, even if it was not delivered
        state.advance(result.latest)
        state.complete_first_run()
        return len(result.delivery)

    def run_cycle(self):
        """Run one fetch, format and deliver cycle.

        Returns False without doing anything when another cycle is in flight.
        Errors are logged and leave the watermark where it was.
        """
        if not self._cycle_lock.acquire(blocking=False):
            logger.warning("Previous monitoring cycle still running, skipping this one")
            return False

        try:
            logger.info("Starting GitHub monitoring cycle...")
            delivered = self._cycle()
            self.state_manager.record_cycle(True, delivered)
            logger.info("Monitoring cycle completed")
        except Exception as e:
            logger.error("Error fetching GitHub activities: %s", e)
            status_code = getattr(e, "status_code", None)
            if status_code is not None:
                logger.error("Response status: %s", status_code)
                logger.error("Rate limit remaining: %s",
                             getattr(e, "rate_limit_remaining", None))
            logger.debug(traceback.format_exc())
            self.state_manager.record_cycle(False, error=e)
        finally:
            self._cycle_lock.release()
        return True

    def _log_startup(self):
        repos = ", ".join(self.config.GITHUB_REPOS) or "Will fetch all repos"
        logger.info("GitHub Activity Monitor")
        logger.info("Monitoring: %s", self.config.GITHUB_USERNAME)
        logger.info("Repositories: %s", repos)
        logger.info("Poll interval: %s seconds", self.config.POLLING_INTERVAL)
        logger.info("Chat ID: %s", self.config.TELEGRAM_CHAT_ID or "Not set")
        logger.info("Group ID: %s", self.config.TELEGRAM_GROUP_ID or "Not set")

    def stop(self):
        """Ask the monitoring loop to exit after the current cycle."""
        self.running = False
        self._stop_event.set()

    def run(self):
        """Start the monitoring loop."""
        self._log_startup()
        self.running = True
        self._stop_event.clear()

        if self.status_server:
            self.status_server.start()

        logger.info("Running initial check on startup...")
        while self.running:
            started = time.monotonic()
            try:
                self.run_cycle()
            except KeyboardInterrupt:
                logger.info("Received keyboard interrupt, shutting down...")
                self.running = False
                break
            # Intervals run start to start; wake early on shutdown
            elapsed = time.monotonic() - started
            if self._stop_event.wait(max(0, self.config.POLLING_INTERVAL - elapsed)):
                break

        self.running = False
        logger.info("GitHub monitor stopped")
