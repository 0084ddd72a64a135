"""
Colored Minesweeper engine.

Provides grid generation with a safe first click, cascading and chord
reveals, color-coded flags, win detection, a game session and a
Gymnasium environment.
"""
from .cell import Cell, CellState, TrapColor, DEFAULT_PALETTE
from .grid import Grid, GridConfig, EASY, MEDIUM, HARD, mine_count_for
from .generator import GenerationError, create_grid, reveal_all_mines
from .reveal import Cascade, chord, discover_cell, flood_fill
from .flags import flag_cell, flag_or_toggle_cell
from .rules import is_game_won
from .session import GameSession, GameState, InputPolicy
from .environment import TrapsweeperEnv, make_vec_env, render_ansi

__all__ = [
    "Cell",
    "CellState",
    "TrapColor",
    "DEFAULT_PALETTE",
    "Grid",
    "GridConfig",
    "EASY",
    "MEDIUM",
    "HARD",
    "mine_count_for",
    "GenerationError",
    "create_grid",
    "reveal_all_mines",
    "Cascade",
    "chord",
    "discover_cell",
    "flood_fill",
    "flag_cell",
    "flag_or_toggle_cell",
    "is_game_won",
    "GameSession",
    "GameState",
    "InputPolicy",
    "TrapsweeperEnv",
    "make_vec_env",
    "render_ansi",
]
