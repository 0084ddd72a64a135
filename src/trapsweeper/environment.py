"""
Gymnasium environment wrapper for colored Minesweeper.

Provides a standard RL interface over a game session.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .cell import FLAGGED_CODE, MINE_CODE
from .grid import Grid, GridConfig
from .session import GameSession


# ============================================================================
# Text Rendering
# ============================================================================

def render_ansi(grid: Optional[Grid], config: Optional[GridConfig] = None) -> str:
    """
    Render a grid as text, one line per row.

    Hidden cells are ".", flags the lowercase initial of their color,
    revealed mines the uppercase initial, revealed empty cells their
    total adjacent mine count (blank for zero). Without a grid, the
    configured size is drawn fully hidden.
    """
    if grid is None:
        config = config or GridConfig()
        return "\n".join(
            " ".join("." for _ in range(config.width))
            for _ in range(config.height)
        )

    lines = []
    for y in range(grid.height):
        symbols = []
        for x in range(grid.width):
            cell = grid.get(x, y)
            if cell.is_flagged:
                symbols.append(cell.flag_color.name[0].lower())
            elif cell.is_hidden:
                symbols.append(".")
            elif cell.is_mine:
                symbols.append(cell.mine_color.name[0])
            elif cell.adjacent_mines == 0:
                symbols.append(" ")
            else:
                symbols.append(str(cell.adjacent_mines))
        lines.append(" ".join(symbols))
    return "\n".join(lines)


# ============================================================================
# Colored Minesweeper Environment
# ============================================================================

class TrapsweeperEnv(gym.Env):
    """
    Gymnasium environment for colored Minesweeper.

    Observation:
        int8 array of shape (1 + k, height, width), k being the palette size.
        Channel 0:
        - -1 = hidden cell
        - -2 - i = cell flagged with palette color i
        - 0-8 = revealed cell with total adjacent mine count
        - 9 = revealed mine
        Channel 1 + i: revealed adjacent count of palette color i, -1 elsewhere.

    Actions:
        Discrete action space of size (1 + k) * height * width.
        Action a has kind a // (height * width) and targets the cell
        (x, y) = (a % width, (a // width) % height). Kind 0 reveals the
        cell, kind 1 + i toggles a flag of palette color i.

    Rewards:
        - +1 per safe cell revealed
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an action with no effect
        - 0 for a flag toggle
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[GridConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Grid configuration (default: 30x15, difficulty 0.1).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or GridConfig()
        self.render_mode = render_mode
        self.session = GameSession(self.config)

        self._cells = self.config.width * self.config.height
        self._palette_size = len(self.config.colors)

        self.observation_space = spaces.Box(
            low=FLAGGED_CODE - (self._palette_size - 1),
            high=MINE_CODE,
            shape=(1 + self._palette_size, self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete((1 + self._palette_size) * self._cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.session = GameSession(self.config, rng=self.np_random)
        self._steps = 0
        return self._get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Encoded (kind, x, y) action.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        kind, x, y = self.decode_action(action)
        self._steps += 1

        reward = self._apply(kind, x, y)
        observation = self._get_observation()
        terminated = self.session.is_won or self.session.is_lost

        return observation, reward, terminated, False, self._get_info()

    def decode_action(self, action: int) -> Tuple[int, int, int]:
        """Convert flat action index to (kind, x, y)."""
        kind, index = divmod(int(action), self._cells)
        y, x = divmod(index, self.config.width)
        return kind, x, y

    def encode_action(self, kind: int, x: int, y: int) -> int:
        """Convert (kind, x, y) to a flat action index."""
        return kind * self._cells + y * self.config.width + x

    def _apply(self, kind: int, x: int, y: int) -> float:
        """Apply a decoded action and compute its reward."""
        if self.session.is_won or self.session.is_lost:
            return -0.1

        grid = self.session.grid
        cell = grid.get(x, y) if grid is not None else None

        if kind == 0:
            if cell is not None and not cell.is_hidden:
                return -0.1
            revealed = []
            hit_mine = self.session.reveal(x, y, revealed.extend)
            if hit_mine:
                return -10.0
            if self.session.is_won:
                return 10.0
            return float(len(revealed))

        if cell is not None and cell.is_revealed:
            return -0.1
        color = self.config.colors[kind - 1]
        self.session.flag_or_toggle(x, y, color)
        if self.session.is_won:
            return 10.0
        return 0.0

    def _get_observation(self) -> np.ndarray:
        if self.session.grid is None:
            return np.full(self.observation_space.shape, -1, dtype=np.int8)
        return self.session.grid.get_observation()

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        grid = self.session.grid
        revealed = 0
        if grid is not None:
            revealed = sum(
                1 for cell in grid if cell.is_revealed and not cell.is_mine
            )
        return {
            "steps": self._steps,
            "revealed": revealed,
            "total_safe": self._cells - self.config.mine_count,
            "remaining_flags": self.session.remaining_flags,
            "game_state": self.session.state.name,
        }

    def render(self) -> Optional[str]:
        """Render the current grid state."""
        text = render_ansi(self.session.grid, self.config)
        if self.render_mode == "ansi":
            return text
        if self.render_mode == "human":
            print(text)
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that would change the grid.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.ones(self.action_space.n, dtype=bool)
        grid = self.session.grid
        if grid is None:
            return mask
        for cell in grid:
            if cell.is_revealed:
                for kind in range(1 + self._palette_size):
                    mask[self.encode_action(kind, cell.x, cell.y)] = False
            elif cell.is_flagged:
                mask[self.encode_action(0, cell.x, cell.y)] = False
        return mask

    def sample_valid_action(self) -> int:
        """
        Sample a random action among those that would change the grid.

        Reveal and flag kinds are drawn alike, so random play can win.
        """
        mask = self.get_action_mask().astype(np.int8)
        return int(self.action_space.sample(mask=mask))


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    config: Optional[GridConfig] = None,
) -> gym.vector.VectorEnv:
    """
    Create vectorized environment for parallel episodes.

    Args:
        n_envs: Number of parallel environments.
        config: Grid configuration.

    Returns:
        Vectorized environment.
    """
    def make_env() -> TrapsweeperEnv:
        return TrapsweeperEnv(config=config)

    return gym.vector.AsyncVectorEnv([make_env for _ in range(n_envs)])
