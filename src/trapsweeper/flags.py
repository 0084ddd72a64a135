"""
Flag management for the colored Minesweeper engine.

A hidden cell cycles through [hidden, flag of color 1, ..., flag of
color k] following the grid palette. Revealed cells never take a flag.
"""
from typing import List, Optional, Sequence

from .cell import Cell, TrapColor
from .grid import Grid


def flag_cycle(palette: Sequence[TrapColor]) -> List[Optional[TrapColor]]:
    """Ordered flag states for a palette, None standing for hidden."""
    return [None, *palette]


def _cycle_index(cell: Cell, cycle: List[Optional[TrapColor]]) -> int:
    if not cell.is_flagged or cell.flag_color not in cycle:
        return 0
    return cycle.index(cell.flag_color)


def flag_cell(grid: Grid, x: int, y: int, direction: int = 1) -> None:
    """
    Advance the flag of a cell one step through the palette cycle.

    Args:
        grid: Grid to mutate.
        x: Column index.
        y: Row index.
        direction: +1 to step forward, -1 to step backward.

    Raises:
        ValueError: If direction is neither +1 nor -1.
    """
    if direction not in (1, -1):
        raise ValueError(f"Flag direction must be +1 or -1, got {direction}")

    cell = grid.get(x, y)
    if cell is None or cell.is_revealed:
        return

    cycle = flag_cycle(grid.colors)
    color = cycle[(_cycle_index(cell, cycle) + direction) % len(cycle)]
    if color is None:
        cell.clear_flag()
    else:
        cell.set_flag(color)


def flag_or_toggle_cell(grid: Grid, x: int, y: int, color: TrapColor) -> None:
    """
    Place a flag of the given color, or remove it if already placed.

    Suited to input devices that select a flag color as a tool instead
    of cycling through the palette.

    Raises:
        ValueError: If the color is not part of the grid palette.
    """
    if color not in grid.colors:
        raise ValueError(f"{color} is not an enabled trap color")

    cell = grid.get(x, y)
    if cell is None or cell.is_revealed:
        return

    if cell.is_flagged and cell.flag_color == color:
        cell.clear_flag()
    else:
        cell.set_flag(color)
