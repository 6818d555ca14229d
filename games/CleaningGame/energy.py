"""
CleaningGame - Energy meter for the power-up burst.

Each cleaned dirt charges the meter. A full meter allows one burst
that cleans the whole field and empties the meter.
"""
from games.CleaningGame import config


def clamp_energy(value: int) -> int:
    """Keep energy inside [0, MAX_ENERGY]."""
    return max(0, min(config.MAX_ENERGY, value))


def charge(energy: int, hit_count: int) -> int:
    """Energy after cleaning `hit_count` dirts."""
    return clamp_energy(energy + config.ENERGY_PER_HIT * hit_count)


def is_full(energy: int) -> bool:
    """True when the burst may fire."""
    return energy >= config.MAX_ENERGY


def percent(energy: int) -> float:
    """Fill level in [0.0, 1.0] for meters and HUDs."""
    return clamp_energy(energy) / config.MAX_ENERGY
