"""Background scheduler for one-time and recurring callables."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

Delay = Union[float, int, timedelta]


def _seconds(value: Delay) -> float:
    if isinstance(value, timedelta):
        return value.total_seconds()
    return float(value)


@dataclass(frozen=True)
class TaskSummary:
    """A snapshot of one scheduled task; ``next_run`` is a ``time.monotonic`` value."""

    name: str
    recurring: bool
    interval: Optional[float]
    next_run: float


@dataclass
class _Task:
    name: str
    func: Callable[[], object]
    recurring: bool
    interval: Optional[float]
    next_run: float


class TaskScheduler:
    """Runs named tasks on a background thread; each task runs in its own thread."""

    def __init__(self, poll_interval: float = 0.1) -> None:
        self._poll_interval = poll_interval
        self._tasks: Dict[str, _Task] = {}
        self._lock = threading.Lock()
        self._stop_event: Optional[threading.Event] = None

    def __enter__(self) -> TaskScheduler:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def start(self) -> None:
        """Start the background loop; does nothing if already running."""
        with self._lock:
            if self._stop_event is not None:
                logger.debug("Scheduler already running")
                return
            stop_event = threading.Event()
            self._stop_event = stop_event
        thread = threading.Thread(
            target=self._run, args=(stop_event,), name="task-scheduler", daemon=True
        )
        thread.start()

    def _run(self, stop_event: threading.Event) -> None:
        logger.info("Task scheduler started")
        while not stop_event.is_set():
            now = time.monotonic()
            with self._lock:
                ready = [task for task in self._tasks.values() if now >= task.next_run]
            for task in ready:
                with self._lock:
                    if self._tasks.get(task.name) is not task:
                        continue
                    if task.recurring and task.interval is not None:
                        task.next_run = time.monotonic() + task.interval
                    else:
                        del self._tasks[task.name]
                logger.debug("Executing task: %s", task.name)
                threading.Thread(target=task.func, daemon=True).start()
            stop_event.wait(self._poll_interval)
        logger.info("Task scheduler stopped")

    def stop(self) -> None:
        """Stop the loop and drop every pending task."""
        with self._lock:
            if self._stop_event is not None:
                self._stop_event.set()
                self._stop_event = None
            self._tasks.clear()
        logger.info("Task scheduler stopped")

    def schedule_once(
        self, name: str, func: Callable[[], object], delay: Delay
    ) -> bool:
        """Run ``func`` once after ``delay`` seconds; False if not running."""
        if not self.is_running():
            logger.warning("Scheduler not running, task not scheduled")
            return False
        seconds = _seconds(delay)
        with self._lock:
            self._tasks[name] = _Task(
                name, func, False, None, time.monotonic() + seconds
            )
        logger.debug("Scheduled one-time task: %s in %ss", name, seconds)
        return True

    def schedule_recurring(
        self,
        name: str,
        func: Callable[[], object],
        interval: Delay,
        run_immediately: bool = False,
    ) -> bool:
        """Run ``func`` every ``interval`` seconds; False if not running.

        With ``run_immediately`` the function is also called synchronously now.
        """
        if not self.is_running():
            logger.warning("Scheduler not running, task not scheduled")
            return False
        seconds = _seconds(interval)
        first_delay = 0.0 if run_immediately else seconds
        next_run = time.monotonic() + first_delay
        if run_immediately:
            func()
        with self._lock:
            self._tasks[name] = _Task(name, func, True, seconds, next_run)
        logger.debug("Scheduled recurring task: %s every %ss", name, seconds)
        return True

    def cancel(self, name: str) -> bool:
        """Remove a task; True if it was scheduled."""
        with self._lock:
            removed = self._tasks.pop(name, None) is not None
        if removed:
            logger.debug("Cancelled task: %s", name)
        return removed

    def is_scheduled(self, name: str) -> bool:
        """True if a task with this name is pending."""
        with self._lock:
            return name in self._tasks

    def next_run(self, name: str) -> Optional[float]:
        """Monotonic time of the task's next run, or None if not scheduled."""
        with self._lock:
            task = self._tasks.get(name)
            return task.next_run if task is not None else None

    def list_tasks(self) -> List[TaskSummary]:
        """Summaries of all pending tasks."""
        with self._lock:
            return [
                TaskSummary(t.name, t.recurring, t.interval, t.next_run)
                for t in self._tasks.values()
            ]

    def is_running(self) -> bool:
        """True between ``start`` and ``stop``."""
        with self._lock:
            return self._stop_event is not None