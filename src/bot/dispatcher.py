"""
Update dispatcher.

Maps one decoded webhook payload to at most one reply handler:

- no message, or a message without text -> ignored
  (a body or ``message`` that is not a JSON object counts as no message)
- ``/end``                               -> farewell
- any other ``/command``                 -> ignored (unknown commands are a no-op)
- plain text                             -> echo

Dispatch is stateless; concurrent calls do not interact.
"""

import logging
from typing import Any

from pydantic import ValidationError

from ..domain.errors import DispatchError
from ..models.update import InboundUpdate
from ..models.value_objects import HandlerOutcome
from .bot import TelegramBot
from .handlers import END_COMMAND, handle_echo, handle_end

logger = logging.getLogger(__name__)

COMMAND_PREFIX = "/"


class UpdateDispatcher:
    """Routes inbound updates to the reply handlers."""

    def __init__(self, client: TelegramBot):
        self.client = client

    @staticmethod
    def parse(payload: Any) -> InboundUpdate:
        """Validate a decoded JSON payload.

        Raises:
            DispatchError: If the payload does not have the update shape.
        """
        try:
            return InboundUpdate.model_validate(payload)
        except ValidationError as e:
            raise DispatchError(f"Malformed update: {e.error_count()} validation error(s)") from e

    async def dispatch(self, payload: Any) -> HandlerOutcome:
        """Handle one update and report what was done.

        Raises:
            DispatchError: Malformed payload or failed outbound send.
        """
        update = self.parse(payload)

        message = update.message
        if message is None:
            logger.debug(f"Ignoring update {update.update_id} without a message")
            return HandlerOutcome.IGNORED

        text = message.text
        if not text:
            return HandlerOutcome.IGNORED

        if text == END_COMMAND:
            await handle_end(self.client, message)
            return HandlerOutcome.ENDED

        if text.startswith(COMMAND_PREFIX):
            logger.debug(f"No handler for command {text.split()[0]!r}")
            return HandlerOutcome.UNHANDLED_COMMAND

        await handle_echo(self.client, message)
        return HandlerOutcome.ECHOED
