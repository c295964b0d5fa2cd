"""Grid data structure for the Game of Life."""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union
import numpy as np
import torch
import torch.nn.functional as F


RandomSource = Union[np.random.Generator, int, None]


@dataclass(frozen=True)
class Cell:
    """Read-only view of a single cell for renderers."""

    x: int
    y: int
    alive: bool


class Grid:
    """A bounded 2D grid of binary cells.

    Cell state is double-buffered: ``alive`` holds the current generation and
    ``alive_next`` is scratch space for the generation being computed. Only
    ``alive`` is visible through the query methods. Edges do not wrap; cells
    outside the grid are treated as dead.

    Grids compare equal by shape and current generation. They are mutable,
    so they are deliberately unhashable.
    """

    def __init__(self, rows: int, columns: int) -> None:
        """Initialize an all-dead grid.

        Args:
            rows: Number of rows (height)
            columns: Number of columns (width)

        Raises:
            ValueError: If either dimension is not positive
        """
        if rows <= 0 or columns <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{columns}")

        self.rows = rows
        self.columns = columns
        self._alive = np.zeros((rows, columns), dtype=np.int8)
        self._alive_next = np.zeros((rows, columns), dtype=np.int8)

        # Reused for whole-grid neighbor counts
        self._torch_input = torch.zeros(1, 1, rows, columns, dtype=torch.float32)
        self._torch_kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )

    @classmethod
    def initialize(cls, rows: int, columns: int, rng: RandomSource = None) -> "Grid":
        """Create a grid where each cell is alive with probability 0.5.

        Args:
            rows: Number of rows
            columns: Number of columns
            rng: numpy Generator, integer seed, or None for fresh entropy

        Returns:
            Randomly seeded grid
        """
        grid = cls(rows, columns)
        grid.randomize(0.5, rng)
        return grid

    @property
    def width(self) -> int:
        """Number of columns."""
        return self.columns

    @property
    def height(self) -> int:
        """Number of rows."""
        return self.rows

    @property
    def shape(self) -> Tuple[int, int]:
        """Get grid dimensions as (rows, columns)."""
        return (self.rows, self.columns)

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the current generation, indexed [y, x]."""
        view = self._alive.view()
        view.flags.writeable = False
        return view

    def in_bounds(self, x: int, y: int) -> bool:
        """Whether (x, y) lies inside the grid."""
        return 0 <= x < self.columns and 0 <= y < self.rows

    def _check_bounds(self, x: int, y: int) -> None:
        """Raise IndexError if (x, y) lies outside the grid."""
        if not self.in_bounds(x, y):
            raise IndexError(f"Coordinates ({x}, {y}) out of bounds for {self.rows}x{self.columns} grid")

    def get_cell(self, x: int, y: int) -> bool:
        """Get the state of a cell.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            True if cell is alive, False if dead

        Raises:
            IndexError: If coordinates are out of bounds
        """
        self._check_bounds(x, y)
        return bool(self._alive[y, x])

    def set_cell(self, x: int, y: int, alive: bool) -> None:
        """Set the state of a cell.

        Args:
            x: Column coordinate
            y: Row coordinate
            alive: Whether the cell should be alive

        Raises:
            IndexError: If coordinates are out of bounds
        """
        self._check_bounds(x, y)
        self._alive[y, x] = 1 if alive else 0

    def toggle_cell(self, x: int, y: int) -> bool:
        """Toggle the state of a cell and return its new state."""
        new_state = not self.get_cell(x, y)
        self.set_cell(x, y, new_state)
        return new_state

    def clear(self) -> None:
        """Clear all cells (set all to dead)."""
        self._alive.fill(0)

    def randomize(self, probability: float = 0.5, rng: RandomSource = None) -> None:
        """Randomly populate the grid.

        Args:
            probability: Chance each cell will be alive (0.0 to 1.0)
            rng: numpy Generator, integer seed, or None for fresh entropy

        Raises:
            ValueError: If probability is outside [0, 1]
        """
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"Probability must be between 0.0 and 1.0, got {probability}")

        generator = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)
        mask = generator.random((self.rows, self.columns)) < probability
        self._alive[:] = mask

    def iter_cells(self) -> Iterator[Cell]:
        """Yield every cell in row-major order."""
        for y in range(self.rows):
            for x in range(self.columns):
                yield Cell(x, y, bool(self._alive[y, x]))

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return int(np.count_nonzero(self._alive))

    def count_live_neighbors(self, x: int, y: int) -> int:
        """Count living neighbors of a cell.

        Neighbors that fall outside the grid are skipped, so corner cells
        have at most 3 candidates and edge cells at most 5.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            Number of living neighbors (0-8)

        Raises:
            IndexError: If (x, y) is outside the grid
        """
        self._check_bounds(x, y)

        count = 0
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue

                nx, ny = x + dx, y + dy
                if 0 <= nx < self.columns and 0 <= ny < self.rows:
                    count += int(self._alive[ny, nx])

        return count

    def count_all_neighbors(self) -> np.ndarray:
        """Count neighbors for all cells with a PyTorch convolution.

        Zero padding gives the same bounded edge policy as
        :meth:`count_live_neighbors`.

        Returns:
            Array of shape (rows, columns) with neighbor counts
        """
        self._torch_input[0, 0] = torch.from_numpy(self._alive.astype(np.float32))
        neighbors = F.conv2d(self._torch_input, self._torch_kernel, padding=1)
        return neighbors[0, 0].numpy().astype(np.int8)

    def set_next(self, x: int, y: int, alive: bool) -> None:
        """Write a cell's next-generation state without touching the current one."""
        self._check_bounds(x, y)
        self._alive_next[y, x] = 1 if alive else 0

    def set_next_all(self, next_cells: np.ndarray) -> None:
        """Write the whole next generation at once.

        Raises:
            ValueError: If the array shape doesn't match the grid
        """
        if next_cells.shape != self.shape:
            raise ValueError(f"Next generation shape {next_cells.shape} doesn't match grid {self.shape}")

        self._alive_next[:] = next_cells

    def commit(self) -> None:
        """Copy every cell's next-generation state into its current state."""
        self._alive[:] = self._alive_next

    def copy(self) -> "Grid":
        """Return an independent grid with the same current generation."""
        other = Grid(self.rows, self.columns)
        other._alive[:] = self._alive
        return other

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y) or None if no living cells
        """
        ys, xs = np.nonzero(self._alive)
        if len(xs) == 0:
            return None

        return (int(xs.min()), int(ys.min()), int(xs.max()), int(ys.max()))

    __hash__ = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return False
        return self.shape == other.shape and np.array_equal(self._alive, other._alive)

    def __str__(self) -> str:
        """String representation showing living cells as '*' and dead as '.'."""
        return "\n".join("".join("*" if cell else "." for cell in row) for row in self._alive)
