"""
Reveal engine for the colored Minesweeper engine.

A click on a hidden cell starts a flood fill that spreads through cells
with no adjacent mine and stops at their numbered border. A click on a
revealed cell chords: once as many neighbors are flagged as the cell
has adjacent mines, every other neighbor is flood filled.

Both are produced in waves. A wave is a batch of cells revealed
together; each wave is committed before it is handed out, so state
read between waves is always consistent.
"""
from typing import Callable, Dict, Iterator, List, Optional, Set, Tuple

from .cell import Cell
from .grid import Grid

Wave = List[Cell]
WaveCallback = Callable[[Wave], None]


# ============================================================================
# Flood Fill
# ============================================================================

def flood_fill(grid: Grid, x: int, y: int) -> Iterator[Wave]:
    """
    Reveal outward from (x, y), one wave per step.

    Each step reveals the hidden cells of the current frontier and
    schedules the neighbors of frontier cells that have no adjacent mine.
    Flagged cells stay flagged but still pass the cascade on when they
    have no adjacent mine. Iteration ends with the first step that
    reveals nothing and crosses no flag.

    Yields:
        The cells revealed by each wave, already marked revealed.
    """
    start = grid.get(x, y)
    if start is None:
        return

    visited: Set[Tuple[int, int]] = set()
    frontier: List[Cell] = [start]

    while frontier:
        uncovered: Wave = []
        scheduled: Dict[Tuple[int, int], Cell] = {}
        crossed_flag = False

        for cell in frontier:
            if cell.position in visited:
                continue
            visited.add(cell.position)
            if cell.is_hidden:
                uncovered.append(cell)
            if cell.is_mine or cell.adjacent_mines > 0:
                continue
            if cell.is_flagged:
                crossed_flag = True
            for neighbor in grid.neighbors(cell.x, cell.y):
                if neighbor.position not in visited:
                    scheduled.setdefault(neighbor.position, neighbor)

        if not uncovered:
            if not crossed_flag:
                return
        else:
            for cell in uncovered:
                cell.reveal()
            yield uncovered

        frontier = list(scheduled.values())


# ============================================================================
# Chord
# ============================================================================

def chord_targets(grid: Grid, x: int, y: int) -> List[Cell]:
    """
    Get the neighbors a chord at (x, y) would flood fill.

    Returns:
        Unflagged neighbors if the number of flagged neighbors equals
        the cell's adjacent mine count, otherwise an empty list.
    """
    cell = grid.get(x, y)
    if cell is None or not cell.is_revealed or cell.is_mine:
        return []

    neighbors = grid.neighbors(x, y)
    flags = sum(1 for neighbor in neighbors if neighbor.is_flagged)
    if flags != cell.adjacent_mines:
        return []
    return [neighbor for neighbor in neighbors if not neighbor.is_flagged]


def chord(grid: Grid, x: int, y: int) -> Iterator[Wave]:
    """Flood fill every chord target of (x, y) in turn."""
    return _flood_each(grid, chord_targets(grid, x, y))


def _flood_each(grid: Grid, targets: List[Cell]) -> Iterator[Wave]:
    for target in targets:
        yield from flood_fill(grid, target.x, target.y)


# ============================================================================
# Cascade
# ============================================================================

class Cascade:
    """
    The reveal triggered by clicking one cell.

    Iterating a cascade yields its waves; it can be suspended between
    waves and resumed later. Whether the click hit a mine is decided
    when the cascade is created, before anything is revealed.

    Attributes:
        hit_mine: True if the click uncovers a mine.
    """

    def __init__(self, grid: Grid, x: int, y: int) -> None:
        self.grid = grid
        self.x = x
        self.y = y

        cell = grid.get(x, y)
        if cell is None or cell.is_flagged:
            self.hit_mine = False
            self._waves: Iterator[Wave] = iter(())
        elif cell.is_hidden:
            self.hit_mine = cell.is_mine
            self._waves = flood_fill(grid, x, y)
        else:
            targets = chord_targets(grid, x, y)
            if targets:
                self.hit_mine = any(
                    target.is_mine and target.is_hidden for target in targets
                )
            else:
                self.hit_mine = cell.is_mine
            self._waves = _flood_each(grid, targets)

    def __iter__(self) -> "Cascade":
        return self

    def __next__(self) -> Wave:
        return next(self._waves)

    def run(self, on_wave: Optional[WaveCallback] = None) -> bool:
        """
        Apply every remaining wave.

        Args:
            on_wave: Called with each wave right after it is committed.

        Returns:
            True if the click hit a mine.
        """
        for wave in self:
            if on_wave is not None:
                on_wave(wave)
        return self.hit_mine


def discover_cell(
    grid: Grid,
    x: int,
    y: int,
    on_wave: Optional[WaveCallback] = None,
) -> bool:
    """
    Click a cell: flood fill if hidden, chord if revealed, nothing if
    flagged or out of bounds.

    Returns:
        True if a mine was uncovered.
    """
    return Cascade(grid, x, y).run(on_wave)
