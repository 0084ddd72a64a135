"""
Unit tests for win detection.
"""
import numpy as np
from trapsweeper import (
    DEFAULT_PALETTE,
    Grid,
    TrapColor,
    create_grid,
    discover_cell,
    flag_cell,
    is_game_won,
)

RED = TrapColor.RED


def solve(grid: Grid) -> None:
    """Reveal every empty cell and flag every mine with its color."""
    for cell in grid:
        if cell.is_mine:
            cell.set_flag(cell.mine_color)
        else:
            cell.reveal()


class TestIsGameWon:
    """Test the win predicate."""

    def test_fresh_grid_is_not_won(self) -> None:
        """A generated grid starts unsolved."""
        grid = create_grid(
            10, 10, 0.1, DEFAULT_PALETTE, 0, 0, rng=np.random.default_rng(5)
        )
        assert is_game_won(grid) is False

    def test_corner_scenario(self, corner_mine_grid: Grid) -> None:
        """Clearing the grid is not enough until the mine is flagged red."""
        discover_cell(corner_mine_grid, 0, 0)
        assert is_game_won(corner_mine_grid) is False

        flag_cell(corner_mine_grid, 3, 3, 1)
        assert is_game_won(corner_mine_grid) is True

    def test_solved_grid_is_won(self, two_color_grid: Grid) -> None:
        """All empties revealed and all mines rightly flagged."""
        solve(two_color_grid)
        assert is_game_won(two_color_grid) is True

    def test_wrong_flag_color_is_not_won(self, two_color_grid: Grid) -> None:
        """A mine flagged with another color does not count."""
        solve(two_color_grid)
        two_color_grid.get(3, 1).set_flag(RED)
        assert is_game_won(two_color_grid) is False

    def test_unflagged_mine_is_not_won(self, two_color_grid: Grid) -> None:
        """Every mine needs its flag."""
        solve(two_color_grid)
        two_color_grid.get(1, 1).clear_flag()
        assert is_game_won(two_color_grid) is False

    def test_hidden_empty_cell_is_not_won(self, two_color_grid: Grid) -> None:
        """Every empty cell must be revealed."""
        for cell in two_color_grid:
            if cell.is_mine:
                cell.set_flag(cell.mine_color)
            elif cell.position != (4, 4):
                cell.reveal()
        assert is_game_won(two_color_grid) is False

    def test_flagged_empty_cell_is_not_won(self, two_color_grid: Grid) -> None:
        """A flag on an empty cell leaves it unrevealed."""
        for cell in two_color_grid:
            if cell.is_mine:
                cell.set_flag(cell.mine_color)
            elif cell.position == (0, 4):
                cell.set_flag(RED)
            else:
                cell.reveal()
        assert is_game_won(two_color_grid) is False

    def test_revealed_mine_is_not_won(self, corner_mine_grid: Grid) -> None:
        """A detonated mine never counts as solved."""
        discover_cell(corner_mine_grid, 0, 0)
        discover_cell(corner_mine_grid, 3, 3)
        assert is_game_won(corner_mine_grid) is False
