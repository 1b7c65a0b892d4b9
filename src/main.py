import logging
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv
from fastapi import FastAPI, Request, Response

# Explicitly load .env files at startup
# Load order (later files override earlier):
# 1. project .env (project defaults)
# 2. project .env.local (local overrides)
project_root = Path(__file__).parent.parent
env_file = project_root / ".env"
env_local = project_root / ".env.local"

if env_file.exists():
    load_dotenv(env_file, override=False)

if env_local.exists():
    load_dotenv(env_local, override=True)

from .core.config import get_settings
from .lifecycle import WEBHOOK_PATH, lifespan
from .utils.logging import setup_logging
from .version import __version__

settings = get_settings()
setup_logging(log_level=settings.log_level, log_to_file=settings.log_to_file)
logger = logging.getLogger(__name__)


app = FastAPI(
    title="Telegram Webhook Relay",
    description="Telegram webhook relay behind a public tunnel",
    version=__version__,
    lifespan=lifespan,
)


@app.get("/")
async def root() -> Dict[str, str]:
    return {"Hello": "World"}


@app.get("/wake-up")
async def wake_up() -> Dict[str, str]:
    """Target of the liveness probe."""
    return {"status": "awake"}


@app.post(WEBHOOK_PATH)
async def telegram_webhook(request: Request) -> Response:
    """Telegram webhook endpoint.

    The update is handled before responding; any failure is reported to
    Telegram as a 500 with an empty body.
    """
    try:
        update = await request.json()
        outcome = await request.app.state.dispatcher.dispatch(update)
        logger.debug(f"Update handled: {outcome.value}")
        return Response(status_code=200)
    except Exception as e:
        logger.error(f"Error processing webhook: {e}")
        return Response(status_code=500)


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    logger.info(f"Starting server on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level="info")


if __name__ == "__main__":
    run()
