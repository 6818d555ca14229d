"""Tests for the virtual-time scheduler and game clock."""

from typing import List

import pytest

from cleanrush.scheduling import GameClock, Scheduler


@pytest.fixture
def scheduler():
    return Scheduler()


class TestScheduler:
    """Tests for Scheduler."""

    def test_fires_when_due(self, scheduler):
        """A task fires only once time reaches its due time."""
        calls: List[float] = []
        scheduler.schedule(0.5, lambda: calls.append(scheduler.now))

        assert scheduler.advance(0.25) == 0
        assert calls == []
        assert scheduler.advance(0.25) == 1
        assert calls == [0.5]

    def test_cancelled_task_never_fires(self, scheduler):
        """cancel() before the due time suppresses the callback."""
        calls = []
        task = scheduler.schedule(0.5, lambda: calls.append('x'))

        task.cancel()
        task.cancel()
        scheduler.advance(2.0)

        assert calls == []
        assert not task.pending
        assert not task.fired

    def test_fired_task_not_pending(self, scheduler):
        """A fired task reports as no longer pending."""
        task = scheduler.schedule(0.0, lambda: None)

        scheduler.advance(0.0)

        assert task.fired
        assert not task.pending

    def test_order_by_due_then_insertion(self, scheduler):
        """Earlier due first; ties run in scheduling order."""
        order = []
        scheduler.schedule(1.0, lambda: order.append('a'))
        scheduler.schedule(0.5, lambda: order.append('b'))
        scheduler.schedule(0.5, lambda: order.append('c'))

        scheduler.advance(1.0)

        assert order == ['b', 'c', 'a']

    def test_callback_can_schedule_inside_window(self, scheduler):
        """Tasks scheduled by a callback fire in the same advance if due."""
        seen = []

        def first():
            seen.append(('first', scheduler.now))
            scheduler.schedule(0.25, lambda: seen.append(('second', scheduler.now)))

        scheduler.schedule(0.25, first)
        scheduler.advance(1.0)

        assert seen == [('first', 0.25), ('second', 0.5)]
        assert scheduler.now == 1.0

    def test_negative_advance_ignored(self, scheduler):
        """Time never runs backwards."""
        scheduler.advance(1.0)
        scheduler.advance(-5.0)

        assert scheduler.now == 1.0

    def test_cancel_all(self, scheduler):
        """cancel_all drops every pending task."""
        calls = []
        tasks = [scheduler.schedule(d, lambda: calls.append(1)) for d in (0.1, 0.2)]

        scheduler.cancel_all()
        scheduler.advance(1.0)

        assert calls == []
        assert scheduler.pending_count == 0
        assert all(task.cancelled for task in tasks)


class TestGameClock:
    """Tests for GameClock."""

    def test_ticks_once_per_interval(self, scheduler):
        """Ticks land on whole intervals regardless of frame size."""
        ticks = []
        clock = GameClock(scheduler, lambda: ticks.append(scheduler.now), interval=1.0)
        clock.start()

        scheduler.advance(0.5)
        assert ticks == []
        scheduler.advance(0.5)
        assert ticks == [1.0]
        scheduler.advance(3.0)
        assert ticks == [1.0, 2.0, 3.0, 4.0]
        assert clock.ticks == 4

    def test_stop_prevents_ticks(self, scheduler):
        """No tick fires after stop()."""
        ticks = []
        clock = GameClock(scheduler, lambda: ticks.append(1))
        clock.start()
        scheduler.advance(1.0)

        clock.stop()
        scheduler.advance(5.0)

        assert len(ticks) == 1
        assert not clock.running

    def test_stop_from_tick_callback(self, scheduler):
        """A tick handler can stop its own clock."""
        clock = None

        def on_tick():
            clock.stop()

        clock = GameClock(scheduler, on_tick)
        clock.start()
        scheduler.advance(5.0)

        assert clock.ticks == 1
        assert scheduler.pending_count == 0

    def test_restart_discards_old_schedule(self, scheduler):
        """start() after stop() ticks once per interval from the restart."""
        ticks = []
        clock = GameClock(scheduler, lambda: ticks.append(scheduler.now))
        clock.start()
        scheduler.advance(0.5)

        clock.stop()
        clock.start()
        scheduler.advance(1.0)

        assert ticks == [1.5]
        assert clock.ticks == 1

    def test_invalid_interval(self, scheduler):
        """Interval must be positive."""
        with pytest.raises(ValueError):
            GameClock(scheduler, lambda: None, interval=0)
