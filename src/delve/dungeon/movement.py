from __future__ import annotations

from dataclasses import dataclass

from .grid import Grid
from .tiles import Location


@dataclass
class MoveResult:
    new_pos: Location
    moved: bool


def try_move(grid: Grid, pos: Location, dx: int, dy: int) -> MoveResult:
    """
    Attempt to move from pos by (dx, dy). Never performs out-of-bounds tile
    access; treats out-of-bounds as non-walkable. Only FLOOR and DEBUG tiles
    can be entered.
    """
    target = pos.offset(dx, dy)
    if not grid.is_walkable(target):
        return MoveResult(new_pos=pos, moved=False)
    return MoveResult(new_pos=target, moved=True)
