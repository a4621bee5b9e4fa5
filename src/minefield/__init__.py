"""
Minesweeper rule engine.

Provides board generation, reveal and chord rules, the game state
machine, best-time tracking and a Gymnasium environment.
"""
from .board import MINE, Board, generate
from .clock import Clock, ManualClock, SystemClock
from .controller import Game
from .environment import MinesweeperEnv, make_vec_env
from .geometry import Cell, Dims, check_cell, in_bounds, neighbors
from .levels import BEGINNER, EXPERT, INTERMEDIATE, LEVELS, Level, get_level
from .region import can_chord, chord_targets, reveal_multiple, reveal_region
from .scores import JsonScoreStore, MemoryScoreStore, ScoreKeeper, ScoreStore, elapsed
from .session import GamePhase, GameSession, new_session

__all__ = [
    "MINE",
    "Board",
    "generate",
    "Clock",
    "ManualClock",
    "SystemClock",
    "Game",
    "MinesweeperEnv",
    "make_vec_env",
    "Cell",
    "Dims",
    "check_cell",
    "in_bounds",
    "neighbors",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "LEVELS",
    "Level",
    "get_level",
    "can_chord",
    "chord_targets",
    "reveal_multiple",
    "reveal_region",
    "JsonScoreStore",
    "MemoryScoreStore",
    "ScoreKeeper",
    "ScoreStore",
    "elapsed",
    "GamePhase",
    "GameSession",
    "new_session",
]
