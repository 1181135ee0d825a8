"""Configuration settings module."""
import os
from dotenv import load_dotenv

# Load environment variables from .env file if present
load_dotenv()


def parse_repo_list(value):
    """Split a comma-separated owner/name list, dropping blank entries."""
    return [repo.strip() for repo in (value or "").split(",") if repo.strip()]


# Telegram Bot API credentials
TELEGRAM_BOT_TOKEN = os.environ.get("TELEGRAM_BOT_TOKEN")
TELEGRAM_API_URL = os.environ.get("TELEGRAM_API_URL", "https://api.telegram.org")
TELEGRAM_PARSE_MODE = os.environ.get("TELEGRAM_PARSE_MODE", "Markdown")
# Destinations; an unset id means that channel is not used
TELEGRAM_CHAT_ID = os.environ.get("TELEGRAM_CHAT_ID")
TELEGRAM_GROUP_ID = os.environ.get("TELEGRAM_GROUP_ID")

# GitHub account and repositories to monitor
GITHUB_USERNAME = os.environ.get("GITHUB_USERNAME", "openlabsdevs")
GITHUB_TOKEN = os.environ.get("GITHUB_TOKEN")
GITHUB_API_URL = os.environ.get("GITHUB_API_URL", "https://api.github.com")
GITHUB_PAGE_SIZE = int(os.environ.get("GITHUB_PAGE_SIZE", "100"))
# Empty list means every repository owned by the account is fetched each cycle
GITHUB_REPOS = parse_repo_list(os.environ.get("GITHUB_REPOS"))

# Polling interval in seconds (5 hours)
POLLING_INTERVAL = int(os.environ.get("POLLING_INTERVAL", str(5 * 60 * 60)))
REQUEST_TIMEOUT = float(os.environ.get("REQUEST_TIMEOUT", "30"))

# Message delivery
MAX_MESSAGE_LENGTH = int(os.environ.get("MAX_MESSAGE_LENGTH", "4000")
                         )  # Telegram limit is 4096
MESSAGE_DELAY = float(os.environ.get("MESSAGE_DELAY", "0.1"))
SEND_EMPTY_SUMMARIES = os.environ.get(
    "SEND_EMPTY_SUMMARIES", "false").lower() == "true"

# Status server
STATUS_ENABLED = os.environ.get("STATUS_ENABLED", "false").lower() == "true"
STATUS_HOST = os.environ.get("STATUS_HOST", "0.0.0.0")  # Listen on all interfaces by default
STATUS_PORT = int(os.environ.get("STATUS_PORT", "5000"))

# Logging
LOG_DIR = os.environ.get("LOG_DIR", "")
DEBUG = os.environ.get("DEBUG", "false").lower() == "true"
