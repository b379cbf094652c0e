# src/tasks/scheduler.py - v1
"""Task scheduler: run a unit of async work and report success or failure.

A scheduled unit never raises into the event loop. Its outcome is recorded
on the ScheduledTask and handed to the unit's response handler.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from swarmcache.logging.context import set_task_context

logger = logging.getLogger(__name__)


@dataclass
class ScheduledTask:
    """Outcome and metadata of one scheduled unit of work."""

    id: int
    name: str
    data: dict[str, Any] = field(default_factory=dict)
    success: bool | None = None
    result: Any = None
    error: str | None = None
    duration_ms: int = 0


TaskFunc = Callable[[ScheduledTask], Awaitable[Any]]
ResponseHandler = Callable[[Any, ScheduledTask], Any]


class TaskScheduler:
    """Run submitted work concurrently on the running event loop."""

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._pending: set[asyncio.Task[ScheduledTask]] = set()

    def add_task(
        self,
        func: TaskFunc,
        response_handler: ResponseHandler,
        data: dict[str, Any] | None = None,
        name: str = "task",
    ) -> asyncio.Task[ScheduledTask]:
        """Schedule func; response_handler(result, task) is called when it settles."""
        task = ScheduledTask(id=next(self._ids), name=name, data=data or {})
        runner = asyncio.ensure_future(self._run(task, func, response_handler))
        self._pending.add(runner)
        runner.add_done_callback(self._pending.discard)
        return runner

    async def drain(self) -> None:
        """Wait until every scheduled unit has settled."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def _run(
        self,
        task: ScheduledTask,
        func: TaskFunc,
        response_handler: ResponseHandler,
    ) -> ScheduledTask:
        set_task_context(task.name)
        start_ns = time.monotonic_ns()
        try:
            task.result = await func(task)
            task.success = True
        except Exception as exc:
            logger.error("Task %s #%d failed: %s", task.name, task.id, exc)
            task.success = False
            task.error = str(exc)
        task.duration_ms = (time.monotonic_ns() - start_ns) // 1_000_000

        logger.debug(
            "Task %s #%d settled: success=%s, %dms",
            task.name,
            task.id,
            task.success,
            task.duration_ms,
        )
        try:
            outcome = response_handler(task.result, task)
            if asyncio.iscoroutine(outcome):
                await outcome
        except Exception as exc:
            logger.error("Response handler of %s #%d failed: %s", task.name, task.id, exc)
        return task
