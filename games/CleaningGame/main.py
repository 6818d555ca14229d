#!/usr/bin/env python3
"""CleaningGame - Headless runner.

Plays the mini-game without a display: a simple bot taps live dirt and
fires the power-up whenever the meter is full. Useful for checking
pacing, progression files and structured session logs.

    python games/CleaningGame/main.py --seed 7 --rounds 5 --store /tmp/progress.json
"""

import argparse
import os
import random
import sys
import time
from typing import List, Optional

# Add project root to path
_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if _root not in sys.path:
    sys.path.insert(0, _root)

from cleanrush.logging import (
    close_all_sinks,
    configure_logging,
    create_sink_for_environment,
    register_sink,
)
from cleanrush.progression import JsonProgressionStore, MemoryProgressionStore, ProgressionStore
from games.CleaningGame import config, game_info
from games.CleaningGame.energy import is_full, percent
from games.CleaningGame.game_mode import CleaningGameMode, GameEvent
from games.CleaningGame.rules import SessionState
from games.CleaningGame.spawner import DirtSpawner


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI from game_info.ARGUMENTS."""
    parser = argparse.ArgumentParser(description=game_info.DESCRIPTION)
    for arg_def in game_info.ARGUMENTS:
        kwargs = {}
        if 'type' in arg_def:
            kwargs['type'] = arg_def['type']
        if 'default' in arg_def:
            kwargs['default'] = arg_def['default']
        if 'help' in arg_def:
            kwargs['help'] = arg_def['help']
        if 'action' in arg_def:
            kwargs['action'] = arg_def['action']
            kwargs.pop('type', None)  # action and type are mutually exclusive
        if 'choices' in arg_def:
            kwargs['choices'] = arg_def['choices']
        parser.add_argument(arg_def['name'], **kwargs)
    return parser


class AutoPlayer:
    """Bot that taps a live dirt with probability `accuracy` per frame.

    Big dirt is worth more, so it is picked first when any is on the field.
    """

    def __init__(self, rng: random.Random, accuracy: float):
        self.rng = rng
        self.accuracy = max(0.0, min(1.0, accuracy))
        self.taps = 0
        self.bursts = 0

    def act(self, game: CleaningGameMode) -> None:
        if is_full(game.energy):
            if game.activate_power_up():
                self.bursts += 1
            return

        dirts = [dirt for dirt in game.dirts if dirt.is_big] or list(game.dirts)
        if dirts and self.rng.random() < self.accuracy:
            dirt = self.rng.choice(dirts)
            game.handle_pointer(dirt.x, dirt.y)
            self.taps += 1


def play_round(
    game: CleaningGameMode,
    player: AutoPlayer,
    fps: int,
    realtime: bool,
) -> SessionState:
    """Play one round to its end and return the terminal state."""
    game.start()
    dt = 1.0 / max(1, fps)
    last = time.monotonic()

    while game.state is SessionState.PLAYING:
        player.act(game)
        if realtime:
            time.sleep(dt)
            now = time.monotonic()
            game.update(now - last)
            last = now
        else:
            game.update(dt)

    return game.state


def _make_store(args: argparse.Namespace) -> ProgressionStore:
    if args.no_persist or not config.PERSIST_PROGRESS:
        return MemoryProgressionStore()
    return JsonProgressionStore(args.store or config.PROGRESSION_FILE)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(level=args.log_level)
    register_sink('session', create_sink_for_environment('session'))

    rng = random.Random(args.seed)
    game = CleaningGameMode(store=_make_store(args), spawner=DirtSpawner(rng=rng))
    game.set_field_bounds(args.width or config.SCREEN_WIDTH,
                          args.height or config.SCREEN_HEIGHT)

    highlights: List[GameEvent] = []
    game.add_listener(
        lambda event: highlights.append(event) if event.new_high_score else None
    )

    player = AutoPlayer(rng, args.accuracy)
    print(f"{game_info.NAME} - starting at level {game.level}, "
          f"high score {game.progression.high_score}")

    try:
        for round_number in range(1, args.rounds + 1):
            level, target = game.level, game.target_score
            tool = game.tool.display_name
            outcome = play_round(game, player, args.fps, args.realtime)

            won = outcome is SessionState.LEVEL_COMPLETE
            print(f"Round {round_number}: level {level} ({tool}) "
                  f"{'CLEARED' if won else 'TIME UP'} "
                  f"{game.score}/{target} with {game.time_remaining}s left, "
                  f"energy {percent(game.energy):.0%}")

            if won:
                game.advance_level()
            else:
                game.retry()
    finally:
        game.dispose()
        close_all_sinks()

    record = game.progression
    print(f"Done: level {record.level}, last score {record.last_score}, "
          f"high score {record.high_score} ({len(highlights)} new high score(s)), "
          f"{player.taps} taps, {player.bursts} bursts")
    return 0


if __name__ == "__main__":
    sys.exit(main())
