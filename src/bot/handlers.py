"""Reply handlers. Each one sends exactly one message through the client."""

import logging

from ..domain.errors import DispatchError
from ..models.update import TelegramMessage
from .bot import ChatId, TelegramBot

logger = logging.getLogger(__name__)

END_COMMAND = "/end"
FAREWELL_TEXT = "Ending conversation..."
ECHO_TEMPLATE = "Received your message: {text}"


def get_chat_id(message: TelegramMessage) -> ChatId:
    """Return the chat a reply should go to."""
    if message.chat is None:
        raise DispatchError("Message has no chat to reply to")
    return message.chat.id


async def handle_end(client: TelegramBot, message: TelegramMessage) -> None:
    """Handle /end. No session state exists, so this only says goodbye."""
    chat_id = get_chat_id(message)
    await client.send_message(chat_id, FAREWELL_TEXT)
    logger.info(f"Ended conversation in chat {chat_id}")


async def handle_echo(client: TelegramBot, message: TelegramMessage) -> None:
    chat_id = get_chat_id(message)
    await client.send_message(chat_id, ECHO_TEMPLATE.format(text=message.text))
