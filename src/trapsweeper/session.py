"""
Game session for the colored Minesweeper engine.

Owns one grid and the lifecycle of a single game: lazy generation on
the first action, serialized mutations, terminal state tracking and
disclosure of the mines once the game ends.
"""
import logging
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Iterator, Optional

import numpy as np

from .cell import TrapColor
from .flags import flag_cell, flag_or_toggle_cell
from .generator import create_grid, reveal_all_mines
from .grid import Grid, GridConfig
from .reveal import Cascade, Wave, WaveCallback
from .rules import is_game_won

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of a game."""

    READY = auto()
    PLAYING = auto()
    WON = auto()
    LOST = auto()


@dataclass
class InputPolicy:
    """
    How player input maps onto engine operations.

    Attributes:
        chord_on_flag: A flag action on a revealed cell chords it.
        flag_direction: Default step through the flag cycle, +1 or -1.
    """

    chord_on_flag: bool = False
    flag_direction: int = 1

    def __post_init__(self) -> None:
        if self.flag_direction not in (1, -1):
            raise ValueError("Flag direction must be +1 or -1")


# ============================================================================
# Session Class
# ============================================================================

class GameSession:
    """
    A single game played on one grid.

    The grid does not exist until the first reveal or flag, which also
    picks the cell guaranteed to be safe.
    """

    def __init__(
        self,
        config: Optional[GridConfig] = None,
        rng: Optional[np.random.Generator] = None,
        policy: Optional[InputPolicy] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize a session waiting for its first action.

        Args:
            config: Grid configuration (default: 30x15, difficulty 0.1).
            rng: Random generator used to lay out mines.
            policy: Input policy (default: no chord on flag, forward flags).
            clock: Monotonic time source in seconds.
        """
        self.config = config or GridConfig()
        self.rng = rng
        self.policy = policy or InputPolicy()
        self.clock = clock
        self._grid: Optional[Grid] = None
        self._state = GameState.READY
        self._active: Optional[Iterator[Wave]] = None
        self._started_at: Optional[float] = None
        self._ended_at: Optional[float] = None

    def __repr__(self) -> str:
        return f"GameSession(config={self.config!r}, state={self._state.name})"

    # ========================================================================
    # Lifecycle (Low-level)
    # ========================================================================

    def _accepts(self, x: int, y: int) -> bool:
        """Check an action can apply, generating the grid on first use."""
        if self._state in (GameState.WON, GameState.LOST):
            return False
        if not (0 <= x < self.config.width and 0 <= y < self.config.height):
            return False
        if self._state == GameState.READY:
            self._start(x, y)
        return True

    def _start(self, x: int, y: int) -> None:
        self._grid = create_grid(
            self.config.width,
            self.config.height,
            self.config.difficulty,
            self.config.colors,
            x,
            y,
            rng=self.rng,
        )
        self._state = GameState.PLAYING
        self._started_at = self.clock()
        logger.info(
            "Game started: %dx%d, %d mines, safe cell (%d, %d)",
            self.config.width, self.config.height,
            self.config.mine_count, x, y,
        )

    def _drain(self) -> None:
        """Finish a staged cascade before anything else mutates the grid."""
        if self._active is not None:
            for _ in self._active:
                pass

    def _settle(self, hit_mine: bool) -> None:
        """Move to a terminal state if the last action decided the game."""
        if self._state != GameState.PLAYING:
            return
        if hit_mine:
            self._finish(GameState.LOST)
        elif is_game_won(self._grid):
            self._finish(GameState.WON)

    def _finish(self, state: GameState) -> None:
        self._state = state
        self._ended_at = self.clock()
        if state == GameState.LOST:
            reveal_all_mines(self._grid)
        logger.info("Game %s after %.1fs", state.name.lower(), self.duration)

    def _follow(self, cascade: Cascade) -> Iterator[Wave]:
        yield from cascade
        if self._grid is cascade.grid:
            self._active = None
            self._settle(cascade.hit_mine)

    # ========================================================================
    # Game Actions
    # ========================================================================

    def reveal(
        self, x: int, y: int, on_wave: Optional[WaveCallback] = None
    ) -> bool:
        """
        Click a cell and apply the whole resulting cascade.

        Args:
            x: Column index.
            y: Row index.
            on_wave: Called with each wave as it is committed.

        Returns:
            True if a mine was hit.
        """
        self._drain()
        if not self._accepts(x, y):
            return False
        hit_mine = Cascade(self._grid, x, y).run(on_wave)
        self._settle(hit_mine)
        return hit_mine

    def stage_reveal(self, x: int, y: int) -> Iterator[Wave]:
        """
        Click a cell and get its cascade one wave at a time.

        The game state is updated once the cascade is exhausted. Any
        other action taken before then completes the cascade first.
        """
        self._drain()
        if not self._accepts(x, y):
            return iter(())
        self._active = self._follow(Cascade(self._grid, x, y))
        return self._active

    def flag(self, x: int, y: int, direction: Optional[int] = None) -> bool:
        """
        Cycle the flag of a cell.

        With the chord_on_flag policy, flagging a revealed cell chords it.

        Args:
            x: Column index.
            y: Row index.
            direction: +1 or -1, the policy default if omitted.

        Returns:
            True if the grid changed.
        """
        self._drain()
        if not self._accepts(x, y):
            return False

        cell = self._grid.get(x, y)
        if cell.is_revealed:
            if not self.policy.chord_on_flag:
                return False
            waves = []
            cascade = Cascade(self._grid, x, y)
            cascade.run(waves.append)
            self._settle(cascade.hit_mine)
            return bool(waves)

        flag_cell(self._grid, x, y, direction or self.policy.flag_direction)
        self._settle(False)
        return True

    def flag_or_toggle(self, x: int, y: int, color: TrapColor) -> bool:
        """
        Toggle a flag of one color on a cell.

        Returns:
            True if the grid changed.
        """
        self._drain()
        if not self._accepts(x, y):
            return False
        if self._grid.get(x, y).is_revealed:
            return False
        flag_or_toggle_cell(self._grid, x, y, color)
        self._settle(False)
        return True

    def reset(self) -> None:
        """Discard the grid and wait for a new first action."""
        self._grid = None
        self._state = GameState.READY
        self._active = None
        self._started_at = None
        self._ended_at = None

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def grid(self) -> Optional[Grid]:
        """Current grid, None until the first action."""
        return self._grid

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def is_playing(self) -> bool:
        """Check if game has started and not ended."""
        return self._state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        return self._state == GameState.WON

    @property
    def is_lost(self) -> bool:
        return self._state == GameState.LOST

    @property
    def remaining_flags(self) -> int:
        """Mines left once every placed flag is counted as one."""
        if self._grid is None:
            return self.config.mine_count
        return self.config.mine_count - len(self._grid.flagged())

    @property
    def duration(self) -> float:
        """Seconds since the first action, frozen once the game ends."""
        if self._started_at is None:
            return 0.0
        end = self._ended_at if self._ended_at is not None else self.clock()
        return end - self._started_at
