"""
Virtual-time scheduling for CleanRush.

The host drives time by calling Scheduler.advance(dt) once per frame,
the same way games receive update(dt). Tasks fire in due-time order and
every scheduled task hands back a ScheduledTask that can be cancelled.

Usage:
    scheduler = Scheduler()
    clock = GameClock(scheduler, on_tick=handle_tick, interval=1.0)
    clock.start()

    refill = scheduler.schedule(0.5, spawn_refill)
    refill.cancel()   # never fires

    scheduler.advance(dt)  # each frame
"""
import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from cleanrush.logging import get_logger

log = get_logger('scheduling')


@dataclass(order=True)
class ScheduledTask:
    """A pending callback. Doubles as its own cancellation token."""
    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)
    fired: bool = field(default=False, compare=False)

    @property
    def pending(self) -> bool:
        """True until the task fires or is cancelled."""
        return not (self.cancelled or self.fired)

    def cancel(self) -> None:
        """Prevent the task from firing. Safe to call more than once."""
        self.cancelled = True


class Scheduler:
    """Min-heap of ScheduledTasks keyed by (due, insertion order)."""

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: List[ScheduledTask] = []
        self._counter = itertools.count()

    @property
    def now(self) -> float:
        """Current scheduler time in seconds."""
        return self._now

    @property
    def pending_count(self) -> int:
        """Number of tasks that can still fire."""
        return sum(1 for task in self._queue if task.pending)

    def schedule_at(self, due: float, callback: Callable[[], None]) -> ScheduledTask:
        """Schedule callback at an absolute scheduler time.

        Args:
            due: Scheduler time to fire at (clamped to now)
            callback: Zero-argument callable

        Returns:
            The task, which is also its cancellation token
        """
        task = ScheduledTask(max(due, self._now), next(self._counter), callback)
        heapq.heappush(self._queue, task)
        return task

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        """Schedule callback to run delay seconds from now."""
        return self.schedule_at(self._now + max(0.0, delay), callback)

    def advance(self, dt: float) -> int:
        """Move time forward, firing every task that falls due.

        Tasks scheduled by a firing callback also run in this call if
        they fall due inside the window. While a task runs, `now` reads
        as that task's due time.

        Args:
            dt: Seconds to advance (negative values are ignored)

        Returns:
            Number of tasks fired
        """
        target = self._now + max(0.0, dt)
        fired = 0
        while self._queue and self._queue[0].due <= target:
            task = heapq.heappop(self._queue)
            if task.cancelled:
                continue
            self._now = task.due
            task.fired = True
            task.callback()
            fired += 1
        self._now = target
        return fired

    def cancel_all(self) -> None:
        """Cancel and drop every pending task."""
        for task in self._queue:
            task.cancel()
        self._queue.clear()


class GameClock:
    """Fixed-interval ticker on top of a Scheduler.

    Each tick is rescheduled from the previous tick's due time, so ticks
    do not drift with frame timing. A generation counter guarantees a
    tick scheduled before stop() can never fire after it, even if the
    task was already popped.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        on_tick: Callable[[], None],
        interval: float = 1.0,
    ):
        """Initialize the clock.

        Args:
            scheduler: Scheduler providing time
            on_tick: Called once per interval while running
            interval: Seconds between ticks (must be positive)
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._scheduler = scheduler
        self._on_tick = on_tick
        self._interval = interval
        self._generation = 0
        self._pending: Optional[ScheduledTask] = None
        self._running = False
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def interval(self) -> float:
        return self._interval

    def start(self) -> None:
        """Start ticking one interval from now. Restarts if running."""
        self.stop()
        self._running = True
        self.ticks = 0
        self._generation += 1
        self._arm(self._scheduler.now + self._interval, self._generation)

    def stop(self) -> None:
        """Stop ticking. No tick fires after this returns."""
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        if self._running:
            log.debug("clock stopped after %d ticks", self.ticks)
        self._running = False
        self._generation += 1

    def _arm(self, due: float, generation: int) -> None:
        self._pending = self._scheduler.schedule_at(
            due, lambda: self._fire(due, generation)
        )

    def _fire(self, due: float, generation: int) -> None:
        if not self._running or generation != self._generation:
            return
        self.ticks += 1
        # Re-arm first so on_tick can stop() the clock cleanly
        self._arm(due + self._interval, generation)
        self._on_tick()
