# checkout_relay/services/notifier.py
import logging
from typing import Optional

import httpx

from checkout_relay.core.config import Settings
from checkout_relay.models.notification import NotificationMessage

logger = logging.getLogger(__name__)


class DiscordNotifier:
    """Posts purchase notices to a Discord webhook. One attempt, no retry."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.webhook_url = settings.DISCORD_WEBHOOK_URL
        self.username = settings.DISCORD_USERNAME
        self.timeout = settings.DISCORD_TIMEOUT_SECONDS
        self._transport = transport

    async def send(self, message: NotificationMessage) -> bool:
        """Deliver ``message`` once. Failures are logged and reported as ``False``."""
        payload = message.to_discord_payload(self.username)
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.post(self.webhook_url, json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Failed to send Discord notification: HTTP {e.response.status_code} "
                f"for session {message.session_id}"
            )
            return False
        except httpx.HTTPError as e:
            logger.error(f"Failed to send Discord notification for session {message.session_id}: {e}")
            return False

        logger.info("Purchase receipt sent to Discord successfully.")
        return True
