import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

import structlog


def setup_logging(
    log_level: str = "INFO",
    log_to_file: bool = True,
    logs_dir: Optional[Path] = None,
) -> None:
    """Set up logging configuration for the relay.

    Console output always; with ``log_to_file`` also a rotating
    ``combined.log`` (everything from INFO up) and ``error.log`` (errors only).

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Whether to log to files in addition to console
        logs_dir: Directory for log files (defaults to ./logs)
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    # Configure structlog on top of the stdlib handlers below
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.set_exc_info,
            (
                structlog.processors.JSONRenderer()
                if log_to_file
                else structlog.dev.ConsoleRenderer(colors=False)
            ),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    if log_to_file:
        logs_dir = logs_dir or Path("logs")
        logs_dir.mkdir(parents=True, exist_ok=True)

        combined_handler = logging.handlers.RotatingFileHandler(
            logs_dir / "combined.log", maxBytes=10 * 1024 * 1024, backupCount=5  # 10MB
        )
        combined_handler.setLevel(logging.INFO)
        combined_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
            )
        )
        root_logger.addHandler(combined_handler)

        # Error-only log file
        error_handler = logging.handlers.RotatingFileHandler(
            logs_dir / "error.log", maxBytes=5 * 1024 * 1024, backupCount=10  # 5MB
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
            )
        )
        root_logger.addHandler(error_handler)

    # uvicorn's access log duplicates the route-level logging
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_event_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for lifecycle events.

    Args:
        name: Logger name (defaults to "relay.events")
    """
    return structlog.get_logger(name or "relay.events")
