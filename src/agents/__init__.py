"""
Minesweeper agents.

Agents pick cells to reveal from a MinesweeperEnv observation:
- RandomAgent: uniform choice among hidden cells
- FrontierAgent: prefers hidden cells next to revealed numbers
"""
from .base_agent import BaseAgent
from .random_agent import FrontierAgent, RandomAgent

__all__ = [
    "BaseAgent",
    "FrontierAgent",
    "RandomAgent",
]
