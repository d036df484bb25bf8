"""Client for delivering private messages through the forum's HTTP API."""

import aiohttp
from fastapi import status

from src.api.core.exceptions.base import NotificationError
from src.api.core.messages import MessageCode
from src.utils.logger import get_logger
from src.utils.settings.messaging import MessagingSettings

logger = get_logger(__name__)


class PrivateMessageClient:
    """Posts private messages as the forum's system user."""

    def __init__(self, settings: MessagingSettings | None = None):
        self.settings = settings or MessagingSettings()
        self.url = f"{self.settings.FORUM_BASE_URL.rstrip('/')}/posts.json"
        self.timeout = self.settings.REQUEST_TIMEOUT

    @property
    def is_configured(self) -> bool:
        return bool(self.settings.FORUM_API_KEY)

    async def send(self, title: str, body: str, recipient_username: str) -> None:
        """Deliver one private message, raising ``NotificationError`` on failure."""
        if not self.is_configured:
            # Simulation mode for development
            logger.warning(
                "FORUM_API_KEY not configured, private message not delivered",
                title=title,
                recipient=recipient_username,
                body_length=len(body),
            )
            return

        payload = {
            "title": title,
            "raw": body,
            "archetype": "private_message",
            "target_recipients": recipient_username,
            "skip_validations": True,
        }
        headers = {
            "Api-Key": self.settings.FORUM_API_KEY,
            "Api-Username": self.settings.SYSTEM_USERNAME,
        }

        async with aiohttp.ClientSession() as session:
            try:
                async with session.post(
                    self.url,
                    json=payload,
                    headers=headers,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    response.raise_for_status()
                    data = await response.json()
            except aiohttp.ClientError as e:
                raise NotificationError(
                    MessageCode.NOTIFICATION_FAILED,
                    status.HTTP_502_BAD_GATEWAY,
                    {"recipient": recipient_username, "error": str(e)},
                ) from e

        logger.info(
            "Private message delivered",
            recipient=recipient_username,
            topic_id=data.get("topic_id"),
        )
