"""Cooperative scheduler for continuous and periodical tasks."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

TASK_LIST_MAX_LENGTH = 10

Available = Callable[[], bool]
Execute = Callable[[], None]


def _millis() -> int:
    return int(time.monotonic() * 1000)


@dataclass(frozen=True)
class ContinuousTask:
    duration: int
    available: Optional[Available]
    execute: Execute


@dataclass
class PeriodicalTask:
    period: int
    execute: Execute
    next_start_t: int


class TaskWrapper:
    """Runs one continuous task at a time, rotating through a queue, plus periodical tasks."""

    def __init__(self, min_update_period: int = 0, clock: Optional[Callable[[], int]] = None):
        self._min_update_period = min_update_period
        self._clock = clock or _millis
        self._task_index = 0
        self.reset()

    def reset(self) -> None:
        self._queue: list[ContinuousTask] = []
        self._task: Optional[ContinuousTask] = None
        self._task_start_t = 0
        self._periodical: list[PeriodicalTask] = []
        self._last_update_time = self._clock() - self._min_update_period
        self.update()

    def _switch_task(self, t: int) -> None:
        start = self._task_index
        while True:
            old = self._task_index
            self._task_index += 1
            if old >= len(self._queue):
                self._task_index = 0
            if self._task_index == start:
                self._task = None
                return
            if self._task_index < len(self._queue):
                candidate = self._queue[self._task_index]
                if candidate.available and candidate.available():
                    self._task = candidate
                    self._task_start_t = t
                    return

    def update(self) -> None:
        t = self._clock()
        if t - self._last_update_time < self._min_update_period:
            return
        self._last_update_time = t

        task = self._task
        if (
            task is None
            or (task.duration and t >= self._task_start_t + task.duration)
            or (task.available and not task.available())
        ):
            self._switch_task(t)

        task = self._task
        if task is not None and (task.available is None or task.available()):
            task.execute()

        for periodical in self._periodical:
            if t >= periodical.next_start_t:
                periodical.next_start_t = t + periodical.period
                periodical.execute()

    def call_continuous_task(
        self,
        execute: Execute,
        duration: int = 0,
        available: Optional[Available] = None,
    ) -> None:
        """Make the given task current immediately."""
        if execute is None:
            raise ValueError("execute is required")
        self._task = ContinuousTask(duration, available, execute)
        self._task_start_t = self._clock()

    def add_continuous_task(
        self, duration: int, available: Optional[Available], execute: Execute
    ) -> int:
        """Queue a task for rotation; returns its index."""
        if len(self._queue) >= TASK_LIST_MAX_LENGTH:
            raise ValueError("task queue is full")
        if not duration or execute is None:
            raise ValueError("duration and execute are required")
        self._queue.append(ContinuousTask(duration, available, execute))
        return len(self._queue) - 1

    def add_periodical_task(self, delay: int, period: int, execute: Execute) -> int:
        """Register a task run every period ms, first at time delay; returns its index."""
        if len(self._periodical) >= TASK_LIST_MAX_LENGTH:
            raise ValueError("task list is full")
        if not period or execute is None:
            raise ValueError("period and execute are required")
        self._periodical.append(PeriodicalTask(period, execute, delay))
        return len(self._periodical) - 1