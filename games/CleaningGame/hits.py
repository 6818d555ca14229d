"""
CleaningGame - Hit resolution.

One pointer-down cleans every dirt within reach of the active tool at
once. Reach is the dirt's own radius plus the tool's effective radius.
"""
from typing import Iterable, List, Tuple

from models import Point2D
from games.CleaningGame.dirt import Dirt
from games.CleaningGame.tools import Tool


def is_hit(dirt: Dirt, point: Point2D, tool: Tool) -> bool:
    """Check if a pointer at `point` cleans `dirt` with `tool`."""
    return point.distance_to(dirt.position) < dirt.radius + tool.effective_radius


def resolve_hits(
    dirts: Iterable[Dirt],
    point: Point2D,
    tool: Tool,
) -> Tuple[List[Dirt], List[Dirt]]:
    """Split dirts into (hit, remaining) for a single pointer event.

    Input order is kept in both lists.
    """
    hit: List[Dirt] = []
    remaining: List[Dirt] = []
    for dirt in dirts:
        (hit if is_hit(dirt, point, tool) else remaining).append(dirt)
    return hit, remaining


def total_points(dirts: Iterable[Dirt]) -> int:
    """Sum of score values."""
    return sum(dirt.score_value for dirt in dirts)
