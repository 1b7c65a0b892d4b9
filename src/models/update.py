"""Pydantic models for the subset of Telegram update payloads the relay reads."""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class TelegramChat(BaseModel):
    """Conversation a message belongs to."""

    model_config = ConfigDict(extra="ignore")

    id: Union[int, str]


class TelegramMessage(BaseModel):
    """Incoming message. Non-text messages (photos, stickers, ...) have no text."""

    model_config = ConfigDict(extra="ignore")

    chat: Optional[TelegramChat] = None
    text: Optional[str] = None


class InboundUpdate(BaseModel):
    """Top-level update delivered to the webhook.

    Only ``message`` matters here; every other update type parses to an
    update without a message. A body that is not a JSON object, or a
    ``message`` that is not one, also counts as "no message".
    """

    model_config = ConfigDict(extra="ignore")

    update_id: Optional[int] = None
    message: Optional[TelegramMessage] = None

    @model_validator(mode="before")
    @classmethod
    def _non_object_is_empty(cls, data: Any) -> Any:
        return data if isinstance(data, dict) else {}

    @field_validator("message", mode="before")
    @classmethod
    def _non_object_message_is_absent(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else None
