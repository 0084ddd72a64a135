"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

import numpy as np

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from trapsweeper import Cell, Grid, GridConfig, GameSession, TrapColor


RED = TrapColor.RED
YELLOW = TrapColor.YELLOW
BLUE = TrapColor.BLUE
GREEN = TrapColor.GREEN


# ============================================================================
# Grid Fixtures
# ============================================================================

@pytest.fixture
def corner_mine_grid() -> Grid:
    """4x4 grid with a single red mine at (3, 3), red-only palette."""
    return Grid.from_mines(4, 4, {(3, 3): RED}, colors=(RED,))


@pytest.fixture
def two_color_grid() -> Grid:
    """
    5x5 grid with a red mine at (1, 1) and a yellow mine at (3, 1).

    Row 3 and row 4 are free of adjacent mines.
    """
    return Grid.from_mines(
        5, 5, {(1, 1): RED, (3, 1): YELLOW}, colors=(RED, YELLOW)
    )


@pytest.fixture
def walled_grid() -> Grid:
    """
    6x4 grid split by a column of blue mines at x = 2.

    Cells left of the wall are unreachable from a cascade started on
    the right side.
    """
    mines = {(2, y): BLUE for y in range(4)}
    return Grid.from_mines(6, 4, mines, colors=(RED, BLUE))


@pytest.fixture
def empty_grid() -> Grid:
    """5x5 grid without mines for cascade testing."""
    return Grid.from_mines(5, 5, {}, colors=(RED,))


@pytest.fixture
def full_palette_grid() -> Grid:
    """3x3 grid with a green mine in the center and all four colors enabled."""
    return Grid.from_mines(3, 3, {(1, 1): GREEN})


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden empty cell."""
    return Cell(0, 0)


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a red mine."""
    return Cell(0, 0, mine_color=RED)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def small_config() -> GridConfig:
    """Smallest grid a menu allows, two colors."""
    return GridConfig(10, 5, 0.1, (RED, YELLOW))


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random generator."""
    return np.random.default_rng(1234)


@pytest.fixture
def session(small_config: GridConfig, rng: np.random.Generator) -> GameSession:
    """Session that has not started yet."""
    return GameSession(small_config, rng=rng)
