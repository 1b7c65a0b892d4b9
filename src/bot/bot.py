import logging
from typing import Optional, Union

from telegram import Bot
from telegram.error import TelegramError

from ..domain.errors import DispatchError, RegistrationError

logger = logging.getLogger(__name__)

ChatId = Union[int, str]


class TelegramBot:
    """Telegram Bot API client shared by the startup sequence and handlers.

    Constructed once per process by the lifespan and passed explicitly to
    whoever needs it.
    """

    def __init__(self, token: str, bot: Optional[Bot] = None):
        if not token:
            raise ValueError("Telegram bot token is required")
        self.token = token
        self.bot = bot or Bot(token=token)

    async def shutdown(self) -> None:
        """Close the underlying HTTP session."""
        try:
            await self.bot.shutdown()
            logger.info("Bot client shutdown")
        except TelegramError as e:
            logger.error(f"Error shutting down bot: {e}")

    async def set_webhook(self, webhook_url: str) -> None:
        """Register *webhook_url* as the callback target.

        This is the first Bot API contact, so the session is opened here and
        a rejected token surfaces as a registration failure.

        Raises:
            RegistrationError: If Telegram rejects the token or the URL, or
                the call fails.
        """
        try:
            await self.bot.initialize()
            accepted = await self.bot.set_webhook(url=webhook_url)
        except TelegramError as e:
            raise RegistrationError(webhook_url, str(e)) from e
        if not accepted:
            raise RegistrationError(webhook_url, "Telegram did not accept the webhook")
        logger.info(f"Webhook set to: {webhook_url}")

    async def send_message(self, chat_id: ChatId, text: str) -> None:
        """Send *text* to *chat_id*.

        Raises:
            DispatchError: If the Bot API call fails. Not retried here.
        """
        try:
            await self.bot.send_message(chat_id=chat_id, text=text)
        except TelegramError as e:
            raise DispatchError(
                f"Error sending message to {chat_id}: {e}", chat_id=chat_id
            ) from e
