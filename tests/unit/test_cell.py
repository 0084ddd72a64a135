"""
Unit tests for Cell class.

Tests cell content, reveal/flag behavior, and observation conversion.
"""
import pytest
from trapsweeper import Cell, CellState, TrapColor

RED = TrapColor.RED
YELLOW = TrapColor.YELLOW


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_is_not_mine(self) -> None:
        """New cell should not be a mine by default."""
        cell = Cell(0, 0)
        assert cell.is_mine is False

    def test_default_cell_is_hidden(self) -> None:
        """New cell should be hidden by default."""
        cell = Cell(0, 0)
        assert cell.state == CellState.HIDDEN
        assert cell.is_hidden is True
        assert cell.flag_color is None

    def test_mine_cell_creation(self, mine_cell: Cell) -> None:
        """A cell with a mine color is a mine."""
        assert mine_cell.is_mine is True
        assert mine_cell.mine_color == RED

    def test_adjacent_mines_sums_all_colors(self) -> None:
        """Total adjacent count adds up every color."""
        cell = Cell(0, 0, proximity={RED: 2, YELLOW: 3})
        assert cell.adjacent_mines == 5

    def test_position(self) -> None:
        """Position is the (x, y) pair."""
        assert Cell(3, 7).position == (3, 7)


# ============================================================================
# Cell Reveal Tests
# ============================================================================

class TestCellReveal:
    """Test cell reveal behavior."""

    def test_reveal_hidden_cell_returns_true(self, hidden_cell: Cell) -> None:
        """Revealing a hidden cell should succeed."""
        assert hidden_cell.reveal() is True
        assert hidden_cell.is_revealed is True

    def test_reveal_already_revealed_returns_false(
        self, hidden_cell: Cell
    ) -> None:
        """Revealing an already revealed cell should fail."""
        hidden_cell.reveal()
        assert hidden_cell.reveal() is False

    def test_reveal_flagged_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Cannot reveal a flagged cell."""
        hidden_cell.set_flag(RED)
        assert hidden_cell.reveal() is False
        assert hidden_cell.is_flagged is True


# ============================================================================
# Cell Flag Tests
# ============================================================================

class TestCellFlag:
    """Test cell flagging behavior."""

    def test_set_flag_records_color(self, hidden_cell: Cell) -> None:
        """Flagging a cell should store the flag color."""
        assert hidden_cell.set_flag(YELLOW) is True
        assert hidden_cell.state == CellState.FLAGGED
        assert hidden_cell.flag_color == YELLOW

    def test_set_flag_replaces_color(self, hidden_cell: Cell) -> None:
        """A second flag replaces the first color."""
        hidden_cell.set_flag(RED)
        hidden_cell.set_flag(YELLOW)
        assert hidden_cell.flag_color == YELLOW

    def test_clear_flag_returns_to_hidden(self, hidden_cell: Cell) -> None:
        """Clearing a flag should return the cell to hidden."""
        hidden_cell.set_flag(RED)
        assert hidden_cell.clear_flag() is True
        assert hidden_cell.is_hidden is True
        assert hidden_cell.flag_color is None

    def test_flag_revealed_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Cannot flag or unflag a revealed cell."""
        hidden_cell.reveal()
        assert hidden_cell.set_flag(RED) is False
        assert hidden_cell.clear_flag() is False
        assert hidden_cell.is_revealed is True


# ============================================================================
# Cell Observation Tests
# ============================================================================

class TestCellObservation:
    """Test cell observation codes."""

    def test_hidden_cell_observation_is_negative_one(
        self, hidden_cell: Cell
    ) -> None:
        """Hidden cell should return -1."""
        assert hidden_cell.to_observation() == -1

    def test_flag_observation_encodes_palette_index(
        self, hidden_cell: Cell
    ) -> None:
        """Flag of palette color i returns -2 - i."""
        palette = (RED, YELLOW)
        hidden_cell.set_flag(RED)
        assert hidden_cell.to_observation(palette) == -2
        hidden_cell.set_flag(YELLOW)
        assert hidden_cell.to_observation(palette) == -3

    def test_flag_outside_palette_uses_plain_flag_code(
        self, hidden_cell: Cell
    ) -> None:
        """A flag color the palette lacks maps to -2."""
        hidden_cell.set_flag(TrapColor.GREEN)
        assert hidden_cell.to_observation((RED, YELLOW)) == -2

    @pytest.mark.parametrize("count", range(0, 9))
    def test_revealed_cell_observation_matches_adjacent_count(
        self, count: int
    ) -> None:
        """Revealed cell returns its total adjacent mine count."""
        cell = Cell(0, 0, proximity={RED: count} if count else {})
        cell.reveal()
        assert cell.to_observation() == count

    def test_revealed_mine_observation_is_nine(self, mine_cell: Cell) -> None:
        """Revealed mine should return 9."""
        mine_cell.reveal()
        assert mine_cell.to_observation() == 9
