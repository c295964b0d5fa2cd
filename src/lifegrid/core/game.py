"""Conway's Game of Life implementation."""

from typing import Deque, Dict, Iterable, Optional, Tuple
from collections import deque
import numpy as np

from .grid import Grid


def next_state(alive: bool, neighbors: int) -> bool:
    """Apply the B3/S23 rule to a single cell.

    Args:
        alive: Whether the cell is currently alive
        neighbors: Number of live neighbors

    Returns:
        Whether the cell is alive in the next generation
    """
    if not alive:
        return neighbors == 3
    return neighbors in (2, 3)


class GameOfLife:
    """Conway's Game of Life simulation engine.

    Implements the classic rules:
    - Live cell with 2-3 neighbors survives
    - Dead cell with exactly 3 neighbors becomes alive
    - All other cells die or stay dead

    Each step runs in two passes. The first pass computes every cell's next
    state from the current generation only, the second commits the result.
    """

    def __init__(self, grid: Grid, vectorized: bool = True) -> None:
        """Initialize the game with a grid.

        Args:
            grid: The cellular grid to simulate
            vectorized: Compute neighbor counts with a single convolution
                instead of visiting cells one by one
        """
        self.grid = grid
        self.vectorized = vectorized
        self._generation = 0
        self._population_history: Deque[int] = deque(maxlen=100)

        self._update_population_history()

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.grid.population

    @property
    def population_history(self) -> list:
        """History of population counts."""
        return list(self._population_history)

    def step(self, order: Optional[Iterable[Tuple[int, int]]] = None) -> None:
        """Advance the simulation by one generation.

        Args:
            order: Optional sequence of (x, y) coordinates giving the order in
                which cells are visited during the first pass. Must cover
                every cell. The result does not depend on it.

        Raises:
            ValueError: If order leaves out any cell of the grid
            IndexError: If order contains coordinates outside the grid
        """
        if self.vectorized and order is None:
            self._compute_next_vectorized()
        else:
            self._compute_next_cellwise(order)

        self.grid.commit()

        self._generation += 1
        self._update_population_history()

    def _compute_next_vectorized(self) -> None:
        """Compute the next generation for all cells from one snapshot."""
        neighbor_counts = self.grid.count_all_neighbors()
        cells = self.grid.cells

        # Birth: dead cell with exactly 3 neighbors
        birth_mask = (cells == 0) & (neighbor_counts == 3)

        # Survival: live cell with 2 or 3 neighbors
        survive_mask = (cells > 0) & ((neighbor_counts == 2) | (neighbor_counts == 3))

        self.grid.set_next_all((birth_mask | survive_mask).astype(np.int8))

    def _compute_next_cellwise(self, order: Optional[Iterable[Tuple[int, int]]]) -> None:
        """Compute the next generation one cell at a time."""
        grid = self.grid
        if order is None:
            order = ((x, y) for y in range(grid.rows) for x in range(grid.columns))

        visited = set()
        for x, y in order:
            neighbors = grid.count_live_neighbors(x, y)
            grid.set_next(x, y, next_state(grid.get_cell(x, y), neighbors))
            visited.add((x, y))

        # Unvisited cells would commit a stale next state
        missing = grid.rows * grid.columns - len(visited)
        if missing:
            raise ValueError(f"Processing order skips {missing} of {grid.rows * grid.columns} cells")

    def run(self, generations: int) -> None:
        """Advance the simulation by a number of generations.

        Raises:
            ValueError: If generations is negative
        """
        if generations < 0:
            raise ValueError(f"Generations must be non-negative, got {generations}")

        for _ in range(generations):
            self.step()

    def _update_population_history(self) -> None:
        self._population_history.append(self.population)

    def reset(self, clear_grid: bool = True) -> None:
        """Reset the simulation.

        Args:
            clear_grid: Whether to clear the grid as well
        """
        if clear_grid:
            self.grid.clear()

        self._generation = 0
        self._population_history.clear()
        self._update_population_history()

    def get_population_change_rate(self, window_size: int = 10) -> float:
        """Calculate recent population change rate.

        Args:
            window_size: Number of recent generations to consider

        Returns:
            Average population change per generation
        """
        recent_history = list(self._population_history)[-window_size:]
        if len(recent_history) < 2:
            return 0.0

        return float(np.mean(np.diff(recent_history)))

    def get_statistics(self) -> Dict:
        """Get simulation statistics.

        Returns:
            Dictionary with various statistics
        """
        bbox = self.grid.get_bounding_box()

        stats = {
            "generation": self._generation,
            "population": self.population,
            "population_change_rate": self.get_population_change_rate(),
            "grid_size": self.grid.shape,
            "population_density": self.population / (self.grid.rows * self.grid.columns),
            "bounding_box": bbox,
        }

        if bbox:
            stats["bounding_box_size"] = (bbox[2] - bbox[0] + 1, bbox[3] - bbox[1] + 1)
        else:
            stats["bounding_box_size"] = (0, 0)

        return stats
