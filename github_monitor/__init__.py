"""
A service that monitors GitHub account activity
and relays new events to Telegram chats.
"""

from . import config
from .monitor import GitHubMonitor
from .notifier import NotificationService
from .state_manager import StateManager
