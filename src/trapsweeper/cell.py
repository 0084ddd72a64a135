"""
Cell module for the colored Minesweeper engine.

Represents individual grid positions with their content (a colored
mine or an empty cell carrying per-color proximity counts) and their
visibility (hidden/revealed/flagged with a color).
"""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Optional, Sequence, Tuple


# ============================================================================
# Constants
# ============================================================================

class TrapColor(Enum):
    """Colors a mine can carry. Values are display color names."""

    RED = "red"
    YELLOW = "goldenrod"
    BLUE = "royalblue"
    GREEN = "limegreen"


DEFAULT_PALETTE: Tuple[TrapColor, ...] = (
    TrapColor.RED,
    TrapColor.YELLOW,
    TrapColor.BLUE,
    TrapColor.GREEN,
)


class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# Observation codes shared by the grid and the agent environment
HIDDEN_CODE = -1
FLAGGED_CODE = -2
MINE_CODE = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass(eq=False)
class Cell:
    """
    A single cell of a colored Minesweeper grid.

    Attributes:
        x: Column index.
        y: Row index.
        mine_color: Color of the mine in this cell, None for empty cells.
        proximity: Count of adjacent mines per color. Only colors with at
            least one adjacent mine appear. Always empty for mines.
        state: Current visual state.
        flag_color: Color of the placed flag, set only while flagged.
    """

    x: int
    y: int
    mine_color: Optional[TrapColor] = None
    proximity: Dict[TrapColor, int] = field(default_factory=dict)
    state: CellState = CellState.HIDDEN
    flag_color: Optional[TrapColor] = None

    @property
    def is_mine(self) -> bool:
        """Check if cell contains a mine."""
        return self.mine_color is not None

    @property
    def adjacent_mines(self) -> int:
        """Total adjacent mine count over every color."""
        return sum(self.proximity.values())

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged with any color."""
        return self.state == CellState.FLAGGED

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if the cell went from hidden to revealed, False if it was
            already revealed or is flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def set_flag(self, color: TrapColor) -> bool:
        """
        Flag this cell with a color.

        Returns:
            True if the flag was placed, False if the cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        self.state = CellState.FLAGGED
        self.flag_color = color
        return True

    def clear_flag(self) -> bool:
        """
        Remove any flag from this cell.

        Returns:
            True if the cell is hidden afterwards, False if it is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        self.state = CellState.HIDDEN
        self.flag_color = None
        return True

    def to_observation(self, palette: Sequence[TrapColor] = DEFAULT_PALETTE) -> int:
        """
        Convert cell to observation value for an agent or renderer.

        Args:
            palette: Ordered palette used to number flag colors.

        Returns:
            -1: Hidden cell
            -2 - i: Cell flagged with palette color i (-2 for a color
                outside the palette)
            0-8: Revealed cell with total adjacent mine count
            9: Revealed mine
        """
        if self.state == CellState.HIDDEN:
            return HIDDEN_CODE
        if self.state == CellState.FLAGGED:
            if self.flag_color not in palette:
                return FLAGGED_CODE
            return FLAGGED_CODE - palette.index(self.flag_color)
        if self.is_mine:
            return MINE_CODE
        return self.adjacent_mines
