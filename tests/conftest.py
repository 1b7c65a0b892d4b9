import logging
import os
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set test environment variables
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["LOG_TO_FILE"] = "false"
os.environ["TELEGRAM_BOT_TOKEN"] = "test:token"
os.environ["TUNNEL_PROVIDER"] = "static"
os.environ["PUBLIC_URL"] = "https://relay.example.test"


@pytest.fixture(autouse=True)
def _strip_file_handlers():
    """Remove file handlers from root logger so tests never write to logs/."""
    root = logging.getLogger()
    saved = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
    for h in saved:
        root.removeHandler(h)
    yield
    # Restore any that were removed (and strip any new ones tests may have added)
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler):
            root.removeHandler(h)
    for h in saved:
        root.addHandler(h)


@pytest.fixture
def mock_client():
    """Stand-in for TelegramBot: every Bot API call is an AsyncMock."""
    client = MagicMock()
    client.shutdown = AsyncMock()
    client.set_webhook = AsyncMock()
    client.send_message = AsyncMock()
    return client


@pytest.fixture
def mock_provider():
    """Tunnel provider that hands out a fixed public URL."""
    provider = MagicMock()
    provider.name = "ngrok"
    provider.start = AsyncMock(return_value="https://abc123.ngrok.io")
    provider.stop = AsyncMock()
    return provider
