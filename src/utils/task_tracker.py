"""
Background task registry.

The lifespan starts the liveness monitor through ``create_tracked_task`` and
cancels whatever is still running on shutdown with ``cancel_all_tasks``.
"""

import asyncio
import logging
from typing import Coroutine, Optional, Set

logger = logging.getLogger(__name__)

_tasks: Set[asyncio.Task] = set()


def _on_task_done(task: asyncio.Task) -> None:
    _tasks.discard(task)
    if task.cancelled():
        logger.info(f"Task cancelled: {task.get_name()}")
        return
    exc = task.exception()
    if exc is not None:
        logger.error(
            f"Task failed: {task.get_name()}",
            exc_info=(type(exc), exc, exc.__traceback__),
        )
    else:
        logger.debug(f"Task completed: {task.get_name()}")


def create_tracked_task(coro: Coroutine, name: Optional[str] = None) -> asyncio.Task:
    """Start *coro* as a task that shutdown will cancel."""
    task = asyncio.create_task(coro, name=name)
    _tasks.add(task)
    task.add_done_callback(_on_task_done)
    return task


def get_active_task_count() -> int:
    return len(_tasks)


async def cancel_all_tasks(timeout: float = 5.0) -> int:
    """Cancel every tracked task and wait up to *timeout* seconds for them.

    Returns:
        Number of tasks that ended cancelled
    """
    pending = [t for t in _tasks if not t.done()]
    if not pending:
        return 0

    logger.info(f"Cancelling {len(pending)} background task(s)")
    for task in pending:
        task.cancel()

    done, still_running = await asyncio.wait(pending, timeout=timeout)
    if still_running:
        logger.warning(
            f"{len(still_running)} task(s) did not stop within {timeout:g}s"
        )
    return sum(1 for t in done if t.cancelled())
