"""Notification service for sending activity summaries to Telegram."""
import logging
import time
import requests

logger = logging.getLogger(__name__)


class NotificationService:
    """Delivers message blocks to the configured Telegram chats."""

    def __init__(self, config, session=None):
        """Initialize the notification service with configuration."""
        self.config = config
        self.session = session or requests.Session()
        self.api_url = (f"{config.TELEGRAM_API_URL.rstrip('/')}"
                        f"/bot{config.TELEGRAM_BOT_TOKEN}/sendMessage")
        self.destinations = [
            (name, chat_id)
            for name, chat_id in (("chat", config.TELEGRAM_CHAT_ID),
                                  ("group", config.TELEGRAM_GROUP_ID))
            if chat_id
        ]

    def send(self, chat_id, text, parse_mode=None):
        """Send one message to a chat, returning whether it was accepted.

        parse_mode defaults to the configured mode; an empty string sends plain text.
        """
        if not chat_id:
            return False

        payload = {"chat_id": chat_id, "text": text}
        if parse_mode is None:
            parse_mode = self.config.TELEGRAM_PARSE_MODE
        if parse_mode:
            payload["parse_mode"] = parse_mode

        try:
            response = self.session.post(
                self.api_url, json=payload, timeout=self.config.REQUEST_TIMEOUT)
            if response.status_code == 200:
                return True
            else:
                logger.error(
                    "Failed to send Telegram message to %s. Status code: %s, Response: %s",
                    chat_id, response.status_code, response.text)
                return False
        except Exception as e:
            logger.error("Error sending Telegram message to %s: %s", chat_id, e)
            return False

    def send_blocks(self, blocks):
        """Deliver each block to every destination, in order.

        A failure for one destination or block never stops the others.
        Returns the number of successful sends.
        """
        if not self.destinations:
            logger.warning("No Telegram destinations configured, nothing sent")
            return 0

        sent = 0
        for index, block in enumerate(blocks):
            for name, chat_id in self.destinations:
                if self.send(chat_id, block.text):
                    sent += 1
                    logger.debug("Sent message %d/%d to %s",
                                 index + 1, len(blocks), name)
            # Small delay between messages to avoid rate limiting
            if index < len(blocks) - 1 and self.config.MESSAGE_DELAY > 0:
                time.sleep(self.config.MESSAGE_DELAY)
        return sent
