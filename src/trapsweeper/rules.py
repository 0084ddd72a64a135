"""
Win detection for the colored Minesweeper engine.
"""
from .grid import Grid


def is_game_won(grid: Grid) -> bool:
    """
    Check whether a grid is solved.

    A grid is solved when every empty cell is revealed and every mine
    carries a flag of its own color. A flag of the wrong color does not
    count.
    """
    for cell in grid:
        if cell.is_mine:
            if not cell.is_flagged or cell.flag_color != cell.mine_color:
                return False
        elif not cell.is_revealed:
            return False
    return True
