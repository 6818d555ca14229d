"""CleaningGame - Game Info

Tap-to-clean arcade mini-game. Reach the level's target score before
the 30 second countdown ends; tools grow stronger as levels climb.
"""

NAME = "Cleaning Rush"
DESCRIPTION = "Clean dirt off the field before time runs out. Fill the energy meter for a full-field burst."
VERSION = "1.0.0"
AUTHOR = "CleanRush Team"

ARGUMENTS = [
    # Randomness and field
    {
        'name': '--seed',
        'type': int,
        'default': None,
        'help': 'Random seed for reproducible spawns'
    },
    {
        'name': '--width',
        'type': int,
        'default': None,
        'help': 'Field width (default: SCREEN_WIDTH)'
    },
    {
        'name': '--height',
        'type': int,
        'default': None,
        'help': 'Field height (default: SCREEN_HEIGHT)'
    },

    # Progression
    {
        'name': '--store',
        'type': str,
        'default': None,
        'help': 'Progression JSON file (default: PROGRESSION_FILE)'
    },
    {
        'name': '--no-persist',
        'action': 'store_true',
        'default': False,
        'help': 'Keep progression in memory only'
    },

    # Autoplay
    {
        'name': '--rounds',
        'type': int,
        'default': 3,
        'help': 'Rounds to play before exiting'
    },
    {
        'name': '--accuracy',
        'type': float,
        'default': 0.3,
        'help': 'Chance per frame that the bot taps a live dirt (0.0-1.0)'
    },
    {
        'name': '--fps',
        'type': int,
        'default': 30,
        'help': 'Simulated frames per second'
    },
    {
        'name': '--realtime',
        'action': 'store_true',
        'default': False,
        'help': 'Sleep between frames instead of simulating as fast as possible'
    },

    # Diagnostics
    {
        'name': '--log-level',
        'type': str,
        'default': 'INFO',
        'choices': ['TRACE', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'OFF'],
        'help': 'Console log level'
    },
]


def get_game_mode(**kwargs):
    """Factory function to create game instance."""
    from games.CleaningGame.game_mode import CleaningGameMode

    return CleaningGameMode(**kwargs)
