"""
Tests for UpdateDispatcher.

Tests cover:
- Updates without a message or without text are accepted silently
- /end sends the farewell, plain text is echoed
- Unknown commands pass through without a reply
- Malformed payloads and failed sends raise DispatchError
"""

import asyncio

import pytest

from src.bot.dispatcher import UpdateDispatcher
from src.domain.errors import DispatchError
from src.models.value_objects import HandlerOutcome


@pytest.fixture
def dispatcher(mock_client):
    return UpdateDispatcher(mock_client)


def text_update(text, chat_id=42):
    return {"update_id": 1, "message": {"chat": {"id": chat_id}, "text": text}}


# =============================================================================
# No-op updates
# =============================================================================


class TestIgnoredUpdates:
    """Updates that are accepted without any reply."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"update_id": 5},
            {"update_id": 5, "message": None},
            {"update_id": 5, "edited_message": {"chat": {"id": 1}, "text": "hi"}},
            {"update_id": 5, "callback_query": {"id": "abc", "data": "x"}},
            [],
            None,
            "not an update",
            {"message": "hello"},
            {"message": []},
        ],
    )
    async def test_update_without_message(self, dispatcher, mock_client, payload):
        outcome = await dispatcher.dispatch(payload)

        assert outcome is HandlerOutcome.IGNORED
        mock_client.send_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_message_without_text(self, dispatcher, mock_client):
        """Photos, stickers and other non-text messages get no reply."""
        payload = {"message": {"chat": {"id": 42}, "photo": [{"file_id": "x"}]}}

        outcome = await dispatcher.dispatch(payload)

        assert outcome is HandlerOutcome.IGNORED
        mock_client.send_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_text_is_treated_as_absent(self, dispatcher, mock_client):
        outcome = await dispatcher.dispatch(text_update(""))

        assert outcome is HandlerOutcome.IGNORED
        mock_client.send_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_message_without_text_needs_no_chat(self, dispatcher, mock_client):
        outcome = await dispatcher.dispatch({"message": {}})

        assert outcome is HandlerOutcome.IGNORED


# =============================================================================
# Commands
# =============================================================================


class TestCommands:
    """Tests for slash-command routing."""

    @pytest.mark.asyncio
    async def test_end_sends_farewell(self, dispatcher, mock_client):
        outcome = await dispatcher.dispatch(text_update("/end", chat_id=7))

        assert outcome is HandlerOutcome.ENDED
        mock_client.send_message.assert_awaited_once_with(7, "Ending conversation...")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["/start", "/help", "/END", "/end now", "/"])
    async def test_other_commands_pass_through(self, dispatcher, mock_client, text):
        outcome = await dispatcher.dispatch(text_update(text))

        assert outcome is HandlerOutcome.UNHANDLED_COMMAND
        mock_client.send_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_command_without_chat_is_not_an_error(
        self, dispatcher, mock_client
    ):
        outcome = await dispatcher.dispatch({"message": {"text": "/start"}})

        assert outcome is HandlerOutcome.UNHANDLED_COMMAND
        mock_client.send_message.assert_not_awaited()


# =============================================================================
# Echo
# =============================================================================


class TestEcho:
    """Tests for plain-text echo."""

    @pytest.mark.asyncio
    async def test_plain_text_is_echoed(self, dispatcher, mock_client):
        outcome = await dispatcher.dispatch(text_update("hello", chat_id=42))

        assert outcome is HandlerOutcome.ECHOED
        mock_client.send_message.assert_awaited_once_with(
            42, "Received your message: hello"
        )

    @pytest.mark.asyncio
    async def test_text_with_slash_inside_is_echoed(self, dispatcher, mock_client):
        await dispatcher.dispatch(text_update("and/or"))

        mock_client.send_message.assert_awaited_once_with(
            42, "Received your message: and/or"
        )

    @pytest.mark.asyncio
    async def test_string_chat_id_is_passed_through(self, dispatcher, mock_client):
        await dispatcher.dispatch(text_update("hi", chat_id="@some_channel"))

        mock_client.send_message.assert_awaited_once_with(
            "@some_channel", "Received your message: hi"
        )

    @pytest.mark.asyncio
    async def test_extra_fields_are_ignored(self, dispatcher, mock_client):
        payload = {
            "update_id": 10,
            "message": {
                "message_id": 3,
                "date": 1700000000,
                "from": {"id": 99, "is_bot": False, "first_name": "A"},
                "chat": {"id": 42, "type": "private"},
                "text": "hello",
            },
        }

        outcome = await dispatcher.dispatch(payload)

        assert outcome is HandlerOutcome.ECHOED
        mock_client.send_message.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_concurrent_dispatches_are_independent(self, dispatcher, mock_client):
        payloads = [text_update(f"msg {i}", chat_id=i) for i in range(10)]

        outcomes = await asyncio.gather(*(dispatcher.dispatch(p) for p in payloads))

        assert outcomes == [HandlerOutcome.ECHOED] * 10
        assert mock_client.send_message.await_count == 10
        sent = {call.args for call in mock_client.send_message.await_args_list}
        assert sent == {(i, f"Received your message: msg {i}") for i in range(10)}


# =============================================================================
# Errors
# =============================================================================


class TestDispatchErrors:
    """Failures surface as DispatchError for the HTTP layer."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"message": {"chat": "42", "text": "hi"}},
            {"message": {"chat": {"id": 1}, "text": 123}},
        ],
    )
    async def test_malformed_payload(self, dispatcher, mock_client, payload):
        with pytest.raises(DispatchError):
            await dispatcher.dispatch(payload)

        mock_client.send_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_text_without_chat(self, dispatcher, mock_client):
        with pytest.raises(DispatchError, match="no chat"):
            await dispatcher.dispatch({"message": {"text": "hello"}})

        mock_client.send_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_send_failure_propagates_without_retry(self, dispatcher, mock_client):
        mock_client.send_message.side_effect = DispatchError("network down", chat_id=42)

        with pytest.raises(DispatchError, match="network down"):
            await dispatcher.dispatch(text_update("hello"))

        assert mock_client.send_message.await_count == 1
