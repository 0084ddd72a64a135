"""
Grid module for the colored Minesweeper engine.

Implements coordinate-keyed addressing over a fixed rectangular grid,
proximity computation, and the board configuration used at the
presentation boundary.
"""
import math
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .cell import DEFAULT_PALETTE, HIDDEN_CODE, Cell, TrapColor


# ============================================================================
# Constants
# ============================================================================

NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dx, dy)
    for dx in (-1, 0, 1)
    for dy in (-1, 0, 1)
    if (dx, dy) != (0, 0)
)

MIN_WIDTH, MAX_WIDTH = 10, 50
MIN_HEIGHT, MAX_HEIGHT = 5, 30


def mine_count_for(width: int, height: int, difficulty: float) -> int:
    """Number of mines a grid of this size and difficulty holds."""
    return math.ceil(width * height * difficulty)


@dataclass
class GridConfig:
    """
    Configuration for a game grid, as chosen in a menu.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        difficulty: Fraction of cells holding a mine.
        colors: Ordered palette of enabled trap colors.
    """

    width: int = 30
    height: int = 15
    difficulty: float = 0.1
    colors: Tuple[TrapColor, ...] = (
        TrapColor.RED,
        TrapColor.YELLOW,
        TrapColor.GREEN,
    )

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self.colors = tuple(self.colors)
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if not MIN_WIDTH <= self.width <= MAX_WIDTH:
            raise ValueError(
                f"Width must be between {MIN_WIDTH} and {MAX_WIDTH}"
            )
        if not MIN_HEIGHT <= self.height <= MAX_HEIGHT:
            raise ValueError(
                f"Height must be between {MIN_HEIGHT} and {MAX_HEIGHT}"
            )
        if not 0 < self.difficulty < 1:
            raise ValueError("Difficulty must be strictly between 0 and 1")
        if not self.colors:
            raise ValueError("At least one trap color must be enabled")
        if len(set(self.colors)) != len(self.colors):
            raise ValueError("Trap colors must not repeat")

    @property
    def mine_count(self) -> int:
        return mine_count_for(self.width, self.height, self.difficulty)


# Preset difficulty levels
EASY = GridConfig(30, 15, 0.1)
MEDIUM = GridConfig(30, 15, 0.2)
HARD = GridConfig(30, 15, 0.3)


# ============================================================================
# Grid Class
# ============================================================================

class Grid:
    """
    Fixed-size rectangular grid of cells addressed by (x, y).

    The shape never changes after construction; only the visibility of
    individual cells mutates during a game.
    """

    def __init__(
        self,
        width: int,
        height: int,
        cells: Sequence[Sequence[Cell]],
        colors: Sequence[TrapColor] = DEFAULT_PALETTE,
    ) -> None:
        if len(cells) != height or any(len(row) != width for row in cells):
            raise ValueError("Cell rows do not match grid dimensions")
        self.width = width
        self.height = height
        self.colors: Tuple[TrapColor, ...] = tuple(colors)
        self._cells: List[List[Cell]] = [list(row) for row in cells]

    @classmethod
    def from_mines(
        cls,
        width: int,
        height: int,
        mines: Mapping[Tuple[int, int], TrapColor],
        colors: Sequence[TrapColor] = DEFAULT_PALETTE,
    ) -> "Grid":
        """
        Build a grid from a mine layout.

        Every empty cell gets its proximity computed from scratch.

        Args:
            width: Number of columns.
            height: Number of rows.
            mines: Mapping of (x, y) to the color of the mine there.
            colors: Palette the grid is played with.

        Returns:
            A fully hidden grid.
        """
        for x, y in mines:
            if not (0 <= x < width and 0 <= y < height):
                raise ValueError(f"Mine ({x}, {y}) is outside the grid")

        cells = [
            [Cell(x, y, mine_color=mines.get((x, y))) for x in range(width)]
            for y in range(height)
        ]
        grid = cls(width, height, cells, colors)
        grid._calculate_proximity()
        return grid

    # ========================================================================
    # Proximity (Low-level)
    # ========================================================================

    def _calculate_proximity(self) -> None:
        """Calculate per-color adjacent mine counts for all empty cells."""
        for cell in self:
            if cell.is_mine:
                cell.proximity = {}
            else:
                cell.proximity = self.count_adjacent_mines(cell.x, cell.y)

    def count_adjacent_mines(self, x: int, y: int) -> Dict[TrapColor, int]:
        """Count mines adjacent to a position, partitioned by color."""
        counts = Counter(
            neighbor.mine_color
            for neighbor in self.neighbors(x, y)
            if neighbor.is_mine
        )
        return dict(counts)

    # ========================================================================
    # Addressing
    # ========================================================================

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if position is within grid bounds."""
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Optional[Cell]:
        """Get cell at position, or None if out of bounds."""
        if not self.in_bounds(x, y):
            return None
        return self._cells[y][x]

    def neighbors(self, x: int, y: int) -> List[Cell]:
        """
        Get the cells of the 8-neighborhood of a position.

        Offsets that fall outside the grid are skipped.
        """
        found = []
        for dx, dy in NEIGHBOR_OFFSETS:
            cell = self.get(x + dx, y + dy)
            if cell is not None:
                found.append(cell)
        return found

    def __iter__(self) -> Iterator[Cell]:
        for row in self._cells:
            yield from row

    def __len__(self) -> int:
        return self.width * self.height

    def __repr__(self) -> str:
        return (
            f"Grid(width={self.width}, height={self.height}, "
            f"mines={len(self.mines())})"
        )

    # ========================================================================
    # State Accessors
    # ========================================================================

    def mines(self) -> List[Cell]:
        """List all mine cells."""
        return [cell for cell in self if cell.is_mine]

    def flagged(self) -> List[Cell]:
        """List all flagged cells."""
        return [cell for cell in self if cell.is_flagged]

    def get_observation(self) -> np.ndarray:
        """
        Get grid state as numpy arrays.

        Returns:
            int8 array of shape (1 + k, height, width), k being the palette
            size. Channel 0 holds each cell's observation code; channel
            1 + i holds the revealed proximity count of palette color i,
            -1 where the cell is not a revealed empty cell.
        """
        obs = np.full(
            (1 + len(self.colors), self.height, self.width),
            HIDDEN_CODE,
            dtype=np.int8,
        )
        for cell in self:
            obs[0, cell.y, cell.x] = cell.to_observation(self.colors)
            if cell.is_revealed and not cell.is_mine:
                for i, color in enumerate(self.colors):
                    obs[1 + i, cell.y, cell.x] = cell.proximity.get(color, 0)
        return obs
