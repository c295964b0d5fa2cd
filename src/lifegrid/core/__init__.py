"""Core Game of Life logic."""

from .grid import Cell, Grid
from .game import GameOfLife, next_state
from .patterns import Pattern, PatternLibrary

__all__ = ["Cell", "Grid", "GameOfLife", "next_state", "Pattern", "PatternLibrary"]
