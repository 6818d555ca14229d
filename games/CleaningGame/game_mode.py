"""
CleaningGame Game Mode

Tap dirt off the field before the countdown runs out.

The mode owns the only mutable reference to the Session and feeds it
through the pure transitions in rules.py. Time comes from a Scheduler
that the host advances with update(dt):
    - the GameClock ticks once per second while PLAYING
    - a power-up schedules a one-shot refill 0.5s later

Both timers are cancelled the moment the session leaves PLAYING, on a
new start() and on dispose(). Progression is written only when a round
ends (level complete or game over).

Every public mutator runs under one re-entrant lock, so pointer events
delivered from another thread serialize with clock ticks.
"""
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from cleanrush.logging import emit_record, get_logger
from cleanrush.progression import MemoryProgressionStore, ProgressionStore
from cleanrush.scheduling import GameClock, ScheduledTask, Scheduler
from models import FieldBounds, Point2D, ProgressionRecord
from games.CleaningGame import config, rules
from games.CleaningGame.dirt import Dirt
from games.CleaningGame.rules import Session, SessionState, StepResult, Transition
from games.CleaningGame.spawner import DirtSpawner, RandomSource
from games.CleaningGame.tools import Tool

log = get_logger('cleaning_game')


class GameEventKind(Enum):
    """Moments the host may want to celebrate."""
    HIT = "hit"
    POWER_UP = "power_up"
    LEVEL_COMPLETE = "level_complete"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameEvent:
    """Notification sent to listeners after the session has been updated."""
    kind: GameEventKind
    session: Session
    points: int = 0
    cleaned: Tuple[Dirt, ...] = ()
    new_high_score: bool = False


GameListener = Callable[[GameEvent], None]


class CleaningGameMode:
    """Cleaning mini-game controller.

    Usage:
        game = CleaningGameMode(store=JsonProgressionStore(path))
        game.set_field_bounds(400, 640)
        game.start()

        # each frame
        game.update(dt)
        if clicked:
            game.handle_pointer(x, y)
    """

    def __init__(
        self,
        store: Optional[ProgressionStore] = None,
        bounds: Optional[FieldBounds] = None,
        rng: Optional[RandomSource] = None,
        scheduler: Optional[Scheduler] = None,
        spawner: Optional[DirtSpawner] = None,
    ):
        """Initialize the game and load progression.

        Args:
            store: Progression storage (default: in-memory)
            bounds: Field size if already known
            rng: Random source for the default spawner
            scheduler: Time source (default: a fresh Scheduler)
            spawner: Dirt spawner (default: DirtSpawner(rng))
        """
        self._lock = threading.RLock()
        self._store = store if store is not None else MemoryProgressionStore()
        self._progression = self._store.load()
        self._session = rules.new_session(self._progression.level)

        self._scheduler = scheduler if scheduler is not None else Scheduler()
        self._spawner = spawner if spawner is not None else DirtSpawner(rng=rng)
        self._clock = GameClock(self._scheduler, self._on_tick, config.TICK_INTERVAL)
        self._refills: List[ScheduledTask] = []

        self._bounds = bounds
        self._listeners: List[GameListener] = []
        self._disposed = False

        log.info("loaded progression: level %d, high score %d",
                 self._progression.level, self._progression.high_score)

    # =========================================================================
    # Read-only projections
    # =========================================================================

    @property
    def session(self) -> Session:
        return self._session

    @property
    def state(self) -> SessionState:
        return self._session.state

    @property
    def score(self) -> int:
        return self._session.score

    def get_score(self) -> int:
        """Get current score."""
        return self._session.score

    @property
    def energy(self) -> int:
        return self._session.energy

    @property
    def time_remaining(self) -> int:
        return self._session.time_remaining

    @property
    def level(self) -> int:
        return self._session.level

    @property
    def target_score(self) -> int:
        return self._session.target_score

    @property
    def tool(self) -> Tool:
        return self._session.tool

    @property
    def dirts(self) -> Tuple[Dirt, ...]:
        return self._session.dirts

    @property
    def progression(self) -> ProgressionRecord:
        return self._progression

    @property
    def field_bounds(self) -> Optional[FieldBounds]:
        return self._bounds

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def clock_running(self) -> bool:
        return self._clock.running

    @property
    def refill_pending(self) -> bool:
        return any(task.pending for task in self._refills)

    @property
    def disposed(self) -> bool:
        return self._disposed

    # =========================================================================
    # Host wiring
    # =========================================================================

    def set_field_bounds(self, width: float, height: float) -> None:
        """Record the field size measured by the host.

        Non-positive sizes clear the bounds; spawns are then dropped.
        """
        with self._lock:
            if self._disposed:
                return
            if width <= 0 or height <= 0:
                log.debug("ignoring field bounds %sx%s", width, height)
                self._bounds = None
                return
            self._bounds = FieldBounds(width=width, height=height)

    def add_listener(self, listener: GameListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: GameListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def update(self, dt: float) -> None:
        """Advance game time by dt seconds, firing due ticks and refills."""
        with self._lock:
            if self._disposed:
                return
            self._scheduler.advance(dt)

    # =========================================================================
    # Player operations
    # =========================================================================

    def start(self) -> bool:
        """Begin a round: IDLE -> PLAYING.

        Returns:
            True if a round was started
        """
        with self._lock:
            if self._disposed or self._session.state is not SessionState.IDLE:
                return False

            self._cancel_timers()
            initial = self._spawner.spawn_batch(config.INITIAL_SPAWN_COUNT, self._bounds)
            result = rules.start(self._session, initial)
            self._session = result.session
            self._clock.start()

            log.info("level %d started: target %d, tool %s, %d dirts",
                     self.level, self.target_score, self.tool.display_name, len(initial))
            emit_record('session', {
                'type': 'start',
                'level': self.level,
                'target_score': self.target_score,
            })
            return True

    def handle_pointer(self, x: float, y: float) -> bool:
        """Clean everything within reach of the tool at (x, y).

        Returns:
            True if at least one dirt was cleaned
        """
        with self._lock:
            if self._disposed:
                return False
            result = rules.apply_hit(self._session, Point2D(x=x, y=y))
            if not result.cleaned:
                return False
            log.debug("pointer (%.0f, %.0f) cleaned %d dirt(s) for %d",
                      x, y, len(result.cleaned), result.points)
            self._notify_all(self._commit(result, GameEventKind.HIT))
            return True

    def activate_power_up(self) -> bool:
        """Fire the burst if the meter is full.

        Returns:
            True if the burst fired
        """
        with self._lock:
            if self._disposed:
                return False
            result = rules.activate_power_up(self._session)
            if result.session is self._session:
                return False

            log.info("power-up cleaned %d dirt(s) for %d",
                     len(result.cleaned), result.points)
            emit_record('session', {
                'type': 'power_up',
                'level': result.session.level,
                'points': result.points,
            })
            events = self._commit(result, GameEventKind.POWER_UP)
            if result.session.is_playing:
                self._refills.append(self._scheduler.schedule(
                    config.POWER_UP_REFILL_DELAY, self._on_refill
                ))
            self._notify_all(events)
            return True

    def advance_level(self) -> bool:
        """LEVEL_COMPLETE -> IDLE at the next level.

        The next level was already persisted when the round was won.
        """
        with self._lock:
            if self._disposed:
                return False
            result = rules.advance_level(self._session)
            if result.transition is Transition.NONE:
                return False
            self._session = result.session
            log.info("advanced to level %d (target %d)", self.level, self.target_score)
            return True

    def retry(self) -> bool:
        """GAME_OVER -> IDLE at the same level."""
        with self._lock:
            if self._disposed:
                return False
            result = rules.retry(self._session)
            if result.transition is Transition.NONE:
                return False
            self._session = result.session
            log.info("retrying level %d", self.level)
            return True

    def dispose(self) -> None:
        """Cancel every pending timer and stop accepting input."""
        with self._lock:
            if self._disposed:
                return
            self._cancel_timers()
            self._disposed = True
            self._bounds = None
            log.debug("disposed in state %s", self.state.value)

    # =========================================================================
    # Timer callbacks
    # =========================================================================

    def _on_tick(self) -> None:
        with self._lock:
            if self._disposed or not self._session.is_playing:
                self._clock.stop()
                return
            result = rules.tick(self._session)
            events = self._commit(result)
            if result.session.is_playing:
                spawned = self._spawner.spawn_for_tick(self.level, self._bounds)
                self._session = rules.add_dirts(self._session, spawned).session
            self._notify_all(events)

    def _on_refill(self) -> None:
        with self._lock:
            self._refills = [task for task in self._refills if task.pending]
            if self._disposed or not self._session.is_playing:
                return
            count = config.POWER_UP_BASE_REFILL + self.level
            spawned = self._spawner.spawn_batch(count, self._bounds)
            self._session = rules.add_dirts(self._session, spawned).session
            log.debug("power-up refill added %d dirt(s)", len(spawned))

    def _cancel_timers(self) -> None:
        self._clock.stop()
        for task in self._refills:
            task.cancel()
        self._refills = []

    # =========================================================================
    # Transition handling
    # =========================================================================

    def _commit(
        self,
        result: StepResult,
        kind: Optional[GameEventKind] = None,
    ) -> List[GameEvent]:
        """Install the next session and handle its transition.

        Listeners are not called here. Callers finish their own follow-up
        work on this session first, then pass the events to _notify_all,
        since a listener may start the next round.
        """
        self._session = result.session
        events: List[GameEvent] = []
        if kind is not None:
            events.append(GameEvent(kind, result.session, result.points, result.cleaned))

        if result.transition is Transition.LEVEL_COMPLETE:
            events.append(self._finish_round(GameEventKind.LEVEL_COMPLETE))
        elif result.transition is Transition.GAME_OVER:
            events.append(self._finish_round(GameEventKind.GAME_OVER))
        return events

    def _finish_round(self, kind: GameEventKind) -> GameEvent:
        """Stop timers and persist the result of a finished round."""
        self._cancel_timers()
        session = self._session
        new_high = self._progression.is_new_high(session.score)

        record = self._progression.with_result(session.score)
        if kind is GameEventKind.LEVEL_COMPLETE:
            record = record.model_copy(update={'level': session.level + 1})
        self._progression = record
        self._store.save(record)

        log.info("%s at level %d: score %d/%d%s",
                 kind.value, session.level, session.score, session.target_score,
                 " (new high score)" if new_high else "")
        emit_record('session', {
            'type': kind.value,
            'level': session.level,
            'score': session.score,
            'target_score': session.target_score,
            'time_remaining': session.time_remaining,
            'new_high_score': new_high,
        })
        return GameEvent(kind, session, new_high_score=new_high)

    def _notify_all(self, events: List[GameEvent]) -> None:
        for event in events:
            for listener in list(self._listeners):
                listener(event)
