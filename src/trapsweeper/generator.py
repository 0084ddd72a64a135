"""
Grid generation for the colored Minesweeper engine.

Places colored mines uniformly at random while keeping a chosen first
click safe, and discloses mines at the end of a game.
"""
import logging
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from .cell import CellState, TrapColor
from .grid import Grid, mine_count_for

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10_000


class GenerationError(ValueError):
    """Raised when no grid can satisfy the requested parameters."""


def create_grid(
    width: int,
    height: int,
    difficulty: float,
    colors: Sequence[TrapColor],
    safe_x: int,
    safe_y: int,
    rng: Optional[np.random.Generator] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Grid:
    """
    Generate a grid whose cell at (safe_x, safe_y) is not a mine.

    Mines are placed on distinct random coordinates, each with a color
    drawn uniformly from the palette. A layout that puts a mine on the
    safe cell is discarded as a whole and drawn again.

    Args:
        width: Number of columns.
        height: Number of rows.
        difficulty: Fraction of cells holding a mine, in (0, 1).
        colors: Palette of trap colors, non-empty.
        safe_x: Column of the cell that must stay mine-free.
        safe_y: Row of the cell that must stay mine-free.
        rng: Random generator, a fresh unseeded one if omitted.
        max_attempts: Number of layouts to draw before giving up.

    Returns:
        A fully hidden grid with exactly ceil(width*height*difficulty) mines.

    Raises:
        GenerationError: If the parameters admit no safe grid, or every
            attempt put a mine on the safe cell.
    """
    colors = tuple(colors)
    _check_feasible(width, height, difficulty, colors, safe_x, safe_y)
    rng = rng if rng is not None else np.random.default_rng()

    total = width * height
    num_mines = mine_count_for(width, height, difficulty)
    safe_index = safe_y * width + safe_x

    for attempt in range(1, max_attempts + 1):
        positions = rng.choice(total, size=num_mines, replace=False)
        if safe_index in positions:
            logger.debug("Attempt %d hit the safe cell, retrying", attempt)
            continue
        picks = rng.integers(len(colors), size=num_mines)
        mines: Dict[Tuple[int, int], TrapColor] = {
            (int(index) % width, int(index) // width): colors[int(pick)]
            for index, pick in zip(positions, picks)
        }
        logger.debug(
            "Generated %dx%d grid with %d mines after %d attempt(s)",
            width, height, num_mines, attempt,
        )
        return Grid.from_mines(width, height, mines, colors)

    raise GenerationError(
        f"No safe layout found for ({safe_x}, {safe_y}) "
        f"after {max_attempts} attempts"
    )


def _check_feasible(
    width: int,
    height: int,
    difficulty: float,
    colors: Tuple[TrapColor, ...],
    safe_x: int,
    safe_y: int,
) -> None:
    """Reject parameters for which generation cannot terminate."""
    if width < 1 or height < 1:
        raise GenerationError("Grid dimensions must be positive")
    if not 0 < difficulty < 1:
        raise GenerationError("Difficulty must be strictly between 0 and 1")
    if not colors:
        raise GenerationError("At least one trap color is required")
    if not (0 <= safe_x < width and 0 <= safe_y < height):
        raise GenerationError(f"Safe cell ({safe_x}, {safe_y}) is outside the grid")
    num_mines = mine_count_for(width, height, difficulty)
    if num_mines >= width * height:
        raise GenerationError(
            f"Too many mines ({num_mines}) for {width * height} cells"
        )


def reveal_all_mines(grid: Grid) -> None:
    """Make every mine visible, leaving empty cells untouched."""
    for cell in grid.mines():
        cell.state = CellState.REVEALED
        cell.flag_color = None
