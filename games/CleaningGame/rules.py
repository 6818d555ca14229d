"""
CleaningGame - Session state and pure transition functions.

A Session is an immutable value. Every transition takes the current
session and returns a StepResult holding the next session plus what
happened. Scoring and the win check are one step: the win condition is
always evaluated against the score the step produced.

States:
    IDLE -> PLAYING            start()
    PLAYING -> LEVEL_COMPLETE  apply_hit() / activate_power_up() reach target
    PLAYING -> GAME_OVER       tick() runs the countdown to zero
    LEVEL_COMPLETE -> IDLE     advance_level()  (level + 1)
    GAME_OVER -> IDLE          retry()          (same level)

Any call that is not legal in the current state returns the session
unchanged with Transition.NONE.
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Sequence, Tuple

from models import Point2D
from games.CleaningGame import config
from games.CleaningGame.dirt import Dirt
from games.CleaningGame.energy import charge, is_full
from games.CleaningGame.hits import resolve_hits, total_points
from games.CleaningGame.tools import Tool, tool_for_level


class SessionState(Enum):
    """Lifecycle states of a cleaning session."""
    IDLE = "idle"
    PLAYING = "playing"
    LEVEL_COMPLETE = "level_complete"
    GAME_OVER = "game_over"


class Transition(Enum):
    """State change produced by a step, if any."""
    NONE = "none"
    STARTED = "started"
    LEVEL_COMPLETE = "level_complete"
    GAME_OVER = "game_over"
    RESET = "reset"            # back to IDLE from a terminal state


def target_score_for_level(level: int) -> int:
    """Score needed to clear a level (200, 350, 500, ...)."""
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")
    return config.BASE_TARGET_SCORE + (level - 1) * config.TARGET_SCORE_STEP


@dataclass(frozen=True)
class Session:
    """Complete in-memory state of one play-through.

    Attributes:
        level: Current level (>= 1)
        state: Lifecycle state
        score: Points this round
        energy: Power-up meter, 0..MAX_ENERGY
        time_remaining: Whole seconds left on the countdown
        dirts: Live dirt targets
    """
    level: int = 1
    state: SessionState = SessionState.IDLE
    score: int = 0
    energy: int = 0
    time_remaining: int = config.ROUND_SECONDS
    dirts: Tuple[Dirt, ...] = ()

    @property
    def target_score(self) -> int:
        return target_score_for_level(self.level)

    @property
    def tool(self) -> Tool:
        return tool_for_level(self.level)

    @property
    def is_playing(self) -> bool:
        return self.state is SessionState.PLAYING


@dataclass(frozen=True)
class StepResult:
    """Outcome of a transition.

    Attributes:
        session: Session after the step
        transition: State change caused by the step
        cleaned: Dirts removed by scoring
        points: Score gained
    """
    session: Session
    transition: Transition = Transition.NONE
    cleaned: Tuple[Dirt, ...] = ()
    points: int = 0


def new_session(level: int = 1) -> Session:
    """Idle session at `level`."""
    target_score_for_level(level)  # validates level
    return Session(level=level)


def _unchanged(session: Session) -> StepResult:
    return StepResult(session=session)


def _apply_score(
    session: Session,
    cleaned: Sequence[Dirt],
    remaining: Iterable[Dirt],
    energy: int,
) -> StepResult:
    """Add points for `cleaned` and check the win condition on the new score."""
    points = total_points(cleaned)
    score = session.score + points
    won = score >= session.target_score
    next_session = replace(
        session,
        score=score,
        energy=energy,
        dirts=tuple(remaining),
        state=SessionState.LEVEL_COMPLETE if won else session.state,
    )
    return StepResult(
        session=next_session,
        transition=Transition.LEVEL_COMPLETE if won else Transition.NONE,
        cleaned=tuple(cleaned),
        points=points,
    )


def start(session: Session, initial_dirts: Iterable[Dirt] = ()) -> StepResult:
    """IDLE -> PLAYING with a fresh round. Level carries over."""
    if session.state is not SessionState.IDLE:
        return _unchanged(session)
    playing = replace(
        session,
        state=SessionState.PLAYING,
        score=0,
        energy=0,
        time_remaining=config.ROUND_SECONDS,
        dirts=tuple(initial_dirts),
    )
    return StepResult(session=playing, transition=Transition.STARTED)


def tick(session: Session) -> StepResult:
    """One countdown second. Reaching zero ends the round in GAME_OVER."""
    if not session.is_playing:
        return _unchanged(session)
    remaining = session.time_remaining - 1
    if remaining <= 0:
        expired = replace(session, time_remaining=0, state=SessionState.GAME_OVER)
        return StepResult(session=expired, transition=Transition.GAME_OVER)
    return StepResult(session=replace(session, time_remaining=remaining))


def add_dirts(session: Session, dirts: Iterable[Dirt]) -> StepResult:
    """Append newly spawned dirts. Dropped unless PLAYING."""
    new_dirts = tuple(dirts)
    if not session.is_playing or not new_dirts:
        return _unchanged(session)
    return StepResult(session=replace(session, dirts=session.dirts + new_dirts))


def apply_hit(session: Session, point: Point2D) -> StepResult:
    """Resolve one pointer-down against the live dirts with the level's tool."""
    if not session.is_playing:
        return _unchanged(session)
    hit, remaining = resolve_hits(session.dirts, point, session.tool)
    if not hit:
        return _unchanged(session)
    return _apply_score(session, hit, remaining, charge(session.energy, len(hit)))


def activate_power_up(session: Session) -> StepResult:
    """Clean the whole field for points. Requires PLAYING and a full meter."""
    if not session.is_playing or not is_full(session.energy):
        return _unchanged(session)
    return _apply_score(session, session.dirts, (), energy=0)


def advance_level(session: Session) -> StepResult:
    """LEVEL_COMPLETE -> IDLE at the next level."""
    if session.state is not SessionState.LEVEL_COMPLETE:
        return _unchanged(session)
    idle = replace(session, state=SessionState.IDLE, level=session.level + 1)
    return StepResult(session=idle, transition=Transition.RESET)


def retry(session: Session) -> StepResult:
    """GAME_OVER -> IDLE at the same level."""
    if session.state is not SessionState.GAME_OVER:
        return _unchanged(session)
    return StepResult(session=replace(session, state=SessionState.IDLE),
                      transition=Transition.RESET)
