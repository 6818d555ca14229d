"""
CleaningGame - Cleaning tools.

The active tool is derived from the level and never stored on its own.
Higher tools have a larger reach, so one tap cleans more dirt.
"""
from enum import Enum
from typing import Tuple


class Tool(Enum):
    """Cleaning tool: (key, effective radius, display name, colour)."""
    HAND = ('hand', 40, 'Gloves', '#cbd5e1')
    SPRAY = ('spray', 60, 'Spray Cleaner', '#0ea5e9')
    VACUUM = ('vacuum', 80, 'Super Vacuum', '#6366f1')
    LASER = ('laser', 100, 'Laser Zapper', '#ef4444')

    def __init__(self, key: str, effective_radius: int, display_name: str, color: str):
        self.key = key
        self.effective_radius = effective_radius
        self.display_name = display_name
        self.color = color


# (minimum level, tool), highest first
TOOL_UNLOCKS: Tuple[Tuple[int, Tool], ...] = (
    (20, Tool.LASER),
    (10, Tool.VACUUM),
    (5, Tool.SPRAY),
    (1, Tool.HAND),
)


def tool_for_level(level: int) -> Tool:
    """Tool available at a level.

    Examples:
        >>> tool_for_level(4)
        <Tool.HAND: ('hand', 40, 'Gloves', '#cbd5e1')>
        >>> tool_for_level(10).display_name
        'Super Vacuum'
    """
    for min_level, tool in TOOL_UNLOCKS:
        if level >= min_level:
            return tool
    return Tool.HAND
