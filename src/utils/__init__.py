"""Utility modules for the Telegram relay."""

from . import task_tracker

__all__ = ["task_tracker"]
