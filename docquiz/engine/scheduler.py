"""Scheduler - Fonte de eventos temporizados injetada no Session Controller."""

from __future__ import annotations

import asyncio
import heapq
import itertools
from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class TimerHandle(Protocol):
    def cancel(self) -> None: ...


@runtime_checkable
class Scheduler(Protocol):
    """``after(seconds, callback)`` agenda uma chamada unica e devolve um handle."""

    def after(self, seconds: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
    """Scheduler de producao sobre o event loop do asyncio."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def after(self, seconds: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(seconds, callback)


class ManualTimer:
    """Handle do ManualScheduler."""

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Relogio virtual: o tempo so anda com ``advance``.

    Permite testar o countdown sem esperar tempo real.

    Example:
        >>> scheduler = ManualScheduler()
        >>> controller = SessionController(question_set, scheduler=scheduler)
        >>> controller.start()
        >>> scheduler.advance(300)  # dispara 300 ticks
    """

    def __init__(self):
        self.now = 0.0
        self._queue: list[tuple[float, int, ManualTimer]] = []
        self._counter = itertools.count()

    def after(self, seconds: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self.now + seconds, callback)
        heapq.heappush(self._queue, (timer.due, next(self._counter), timer))
        return timer

    @property
    def pending(self) -> int:
        """Timers ainda agendados e nao cancelados."""
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def advance(self, seconds: float) -> None:
        """Avanca o relogio disparando, em ordem, os timers vencidos."""
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target:
            due, _, timer = heapq.heappop(self._queue)
            self.now = due
            if not timer.cancelled:
                timer.callback()
        self.now = target
