"""Conway's Game of Life on a bounded grid."""

__version__ = "0.1.0"

from .core.grid import Cell, Grid
from .core.game import GameOfLife, next_state
from .core.patterns import Pattern, PatternLibrary

__all__ = ["Cell", "Grid", "GameOfLife", "next_state", "Pattern", "PatternLibrary"]
