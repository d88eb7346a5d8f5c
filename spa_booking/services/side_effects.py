"""Best-effort work that runs after the primary operation has committed."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from fastapi import BackgroundTasks

logger = logging.getLogger(__name__)


def fire_and_log(description: str, func: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
    """Run ``func`` and log any failure instead of raising it."""

    try:
        func(*args, **kwargs)
    except Exception:
        logger.exception("Best-effort task failed: %s", description)


def dispatch_after_commit(
    background_tasks: Optional[BackgroundTasks],
    description: str,
    func: Callable[..., Any],
    *args: Any,
    **kwargs: Any,
) -> None:
    """Queue ``func`` on ``background_tasks`` when available, else run it now.

    Either way failures are only logged.
    """

    if background_tasks is not None:
        background_tasks.add_task(fire_and_log, description, func, *args, **kwargs)
        return
    fire_and_log(description, func, *args, **kwargs)


__all__ = ["fire_and_log", "dispatch_after_commit"]
