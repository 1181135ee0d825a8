"""Application entry point."""
import logging
import os
from github_monitor import config
from github_monitor.monitor import GitHubMonitor


def setup_logging():
    """Set up logging configuration."""
    log_level = logging.DEBUG if config.DEBUG else logging.INFO

    handlers = [logging.StreamHandler()]  # Log to console
    if config.LOG_DIR:
        if not os.path.exists(config.LOG_DIR):
            os.makedirs(config.LOG_DIR)
        handlers.append(logging.FileHandler(
            os.path.join(config.LOG_DIR, 'github_monitor.log')))  # Log to file

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def main():
    """Main entry point for the application."""
    setup_logging()
    logger = logging.getLogger(__name__)

    logger.info("Initializing GitHub Activity Monitor")

    try:
        monitor = GitHubMonitor(config)
        monitor.setup_signal_handlers()
        monitor.run()
    except Exception as e:
        logger.error("Failed to start monitor: %s", e)
        raise


if __name__ == "__main__":
    main()
