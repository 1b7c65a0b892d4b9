"""Tests for the TelegramBot client wrapper."""

from unittest.mock import AsyncMock

import pytest
from telegram.error import BadRequest, InvalidToken, NetworkError

from src.bot.bot import TelegramBot
from src.domain.errors import DispatchError, RegistrationError


@pytest.fixture
def raw_bot():
    bot = AsyncMock()
    bot.set_webhook.return_value = True
    return bot


@pytest.fixture
def client(raw_bot):
    return TelegramBot("test:token", bot=raw_bot)


class TestTelegramBotInit:
    def test_requires_token(self):
        with pytest.raises(ValueError, match="token is required"):
            TelegramBot("")

    def test_uses_injected_bot(self, raw_bot):
        client = TelegramBot("test:token", bot=raw_bot)

        assert client.bot is raw_bot
        assert client.token == "test:token"

    @pytest.mark.asyncio
    async def test_construction_makes_no_api_call(self, client, raw_bot):
        raw_bot.initialize.assert_not_awaited()

        await client.shutdown()

        raw_bot.shutdown.assert_awaited_once()


class TestSendMessage:
    @pytest.mark.asyncio
    async def test_send_message(self, client, raw_bot):
        await client.send_message(42, "Received your message: hello")

        raw_bot.send_message.assert_awaited_once_with(
            chat_id=42, text="Received your message: hello"
        )

    @pytest.mark.asyncio
    async def test_network_error_becomes_dispatch_error(self, client, raw_bot):
        raw_bot.send_message.side_effect = NetworkError("connection reset")

        with pytest.raises(DispatchError) as exc_info:
            await client.send_message(42, "hi")

        assert exc_info.value.chat_id == 42
        assert isinstance(exc_info.value.__cause__, NetworkError)
        assert raw_bot.send_message.await_count == 1


class TestSetWebhook:
    @pytest.mark.asyncio
    async def test_set_webhook(self, client, raw_bot):
        await client.set_webhook("https://abc123.ngrok.io/telegram")

        raw_bot.initialize.assert_awaited_once()
        raw_bot.set_webhook.assert_awaited_once_with(
            url="https://abc123.ngrok.io/telegram"
        )

    @pytest.mark.asyncio
    async def test_invalid_token_raises_registration_error(self, client, raw_bot):
        raw_bot.initialize.side_effect = InvalidToken()

        with pytest.raises(RegistrationError) as exc_info:
            await client.set_webhook("https://abc123.ngrok.io/telegram")

        assert exc_info.value.webhook_url == "https://abc123.ngrok.io/telegram"
        assert isinstance(exc_info.value.__cause__, InvalidToken)
        raw_bot.set_webhook.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rejected_url_raises_registration_error(self, client, raw_bot):
        raw_bot.set_webhook.side_effect = BadRequest("Bad webhook: an https url must be provided")

        with pytest.raises(RegistrationError) as exc_info:
            await client.set_webhook("http://insecure.example/telegram")

        assert exc_info.value.webhook_url == "http://insecure.example/telegram"
        assert "https url" in exc_info.value.reason

    @pytest.mark.asyncio
    async def test_false_result_raises_registration_error(self, client, raw_bot):
        raw_bot.set_webhook.return_value = False

        with pytest.raises(RegistrationError):
            await client.set_webhook("https://abc123.ngrok.io/telegram")
