"""
CleanRush core

Shared runtime pieces for the CleanRush mini-game:
- logging: per-module console logging and structured record sinks
- scheduling: virtual-time scheduler, cancellable tasks and the game clock
- progression: persisted last score / high score / level
"""

__version__ = "1.0.0"

__all__ = ['__version__']
