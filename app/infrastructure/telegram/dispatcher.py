"""
Telegram dispatcher.

Posts composed alerts to the channel through the Bot API sendMessage method.
Single attempt, no retry.
"""

import logging
from typing import Optional

import httpx

from app.config import settings
from app.domain.errors import DispatchError, ValidationError

logger = logging.getLogger(__name__)


class TelegramDispatcher:
    API_URL = "https://api.telegram.org/bot{token}/sendMessage"

    def __init__(
        self,
        bot_token: Optional[str],
        chat_id: Optional[str],
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls) -> "TelegramDispatcher":
        return cls(
            bot_token=settings.TELEGRAM_BOT_TOKEN,
            chat_id=settings.TELEGRAM_CHAT_ID,
            timeout=settings.TELEGRAM_TIMEOUT_SECONDS,
        )

    @property
    def configured(self) -> bool:
        return bool(self.bot_token and self.chat_id)

    async def send(self, text: str) -> None:
        """
        Send text to the configured chat.

        Raises:
            ValidationError: text is empty
            DispatchError: not configured, unreachable, or rejected by Telegram
        """
        if not text or not text.strip():
            raise ValidationError("Message cannot be empty", field="message")
        if not self.configured:
            logger.error("Telegram dispatch skipped (missing TELEGRAM_BOT_TOKEN or TELEGRAM_CHAT_ID)")
            raise DispatchError("Telegram dispatch is not configured")

        url = self.API_URL.format(token=self.bot_token)
        payload = {"chat_id": self.chat_id, "text": text}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(url, json=payload)
        except httpx.HTTPError as exc:
            logger.error(f"Telegram request failed: {exc}")
            raise DispatchError("Failed to send message") from exc

        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if resp.status_code != 200 or not data.get("ok", False):
            description = data.get("description")
            logger.error(f"Telegram rejected message ({resp.status_code}): {description}")
            raise DispatchError(description or "Failed to send message")

        logger.info(f"Telegram message delivered to chat {self.chat_id}")
