"""
CleaningGame - Configuration loaded from environment / .env.

Every gameplay constant can be overridden from a .env file placed next
to this module, or from the process environment.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from game directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_bool(key: str, default: bool) -> bool:
    """Get boolean from environment."""
    val = os.getenv(key, str(default)).lower()
    return val in ('true', '1', 'yes')


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


# Headless runner field (the host view supplies real bounds)
SCREEN_WIDTH = _get_int('SCREEN_WIDTH', 400)
SCREEN_HEIGHT = _get_int('SCREEN_HEIGHT', 640)

# Timing (seconds)
ROUND_SECONDS = _get_int('ROUND_SECONDS', 30)
TICK_INTERVAL = _get_float('TICK_INTERVAL', 1.0)
POWER_UP_REFILL_DELAY = _get_float('POWER_UP_REFILL_DELAY', 0.5)

# Spawning
FIELD_PADDING = _get_float('FIELD_PADDING', 40.0)
INITIAL_SPAWN_COUNT = _get_int('INITIAL_SPAWN_COUNT', 8)
BASE_SPAWN_CHANCE = _get_float('BASE_SPAWN_CHANCE', 0.5)
SPAWN_CHANCE_PER_LEVEL = _get_float('SPAWN_CHANCE_PER_LEVEL', 0.1)
SECOND_SPAWN_MIN_LEVEL = _get_int('SECOND_SPAWN_MIN_LEVEL', 2)   # level must exceed this
SECOND_SPAWN_CHANCE = _get_float('SECOND_SPAWN_CHANCE', 0.5)
THIRD_SPAWN_MIN_LEVEL = _get_int('THIRD_SPAWN_MIN_LEVEL', 5)
THIRD_SPAWN_CHANCE = _get_float('THIRD_SPAWN_CHANCE', 0.6)
GUARANTEED_EXTRA_MIN_LEVEL = _get_int('GUARANTEED_EXTRA_MIN_LEVEL', 8)
POWER_UP_BASE_REFILL = _get_int('POWER_UP_BASE_REFILL', 3)       # + level

# Dirt sizes and points
MIN_DIRT_SIZE = _get_float('MIN_DIRT_SIZE', 30.0)
DIRT_SIZE_RANGE = _get_float('DIRT_SIZE_RANGE', 40.0)
BIG_DIRT_THRESHOLD = _get_float('BIG_DIRT_THRESHOLD', 50.0)
BIG_DIRT_POINTS = _get_int('BIG_DIRT_POINTS', 25)
SMALL_DIRT_POINTS = _get_int('SMALL_DIRT_POINTS', 15)

# Category draw thresholds (single uniform draw r)
MUD_THRESHOLD = _get_float('MUD_THRESHOLD', 0.6)       # r > 0.6 -> mud
STAIN_THRESHOLD = _get_float('STAIN_THRESHOLD', 0.3)   # r > 0.3 -> stain, else dust

# Level targets
BASE_TARGET_SCORE = _get_int('BASE_TARGET_SCORE', 200)
TARGET_SCORE_STEP = _get_int('TARGET_SCORE_STEP', 150)

# Energy
ENERGY_PER_HIT = _get_int('ENERGY_PER_HIT', 5)
MAX_ENERGY = _get_int('MAX_ENERGY', 100)

# Persistence
PROGRESSION_FILE = os.getenv(
    'PROGRESSION_FILE',
    str(Path.home() / '.cleanrush' / 'progression.json'),
)
PERSIST_PROGRESS = _get_bool('PERSIST_PROGRESS', True)
