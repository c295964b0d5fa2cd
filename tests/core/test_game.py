"""Tests for the GameOfLife class."""

import random

import numpy as np
import pytest
from lifegrid.core.grid import Grid
from lifegrid.core.game import GameOfLife, next_state


def make_grid(rows, columns, live_cells):
    grid = Grid(rows, columns)
    for x, y in live_cells:
        grid.set_cell(x, y, True)
    return grid


class TestNextState:
    """Test cases for the single-cell rule."""

    @pytest.mark.parametrize("neighbors", range(9))
    def test_dead_cell(self, neighbors):
        """Test that a dead cell is born only with exactly 3 neighbors."""
        assert next_state(False, neighbors) is (neighbors == 3)

    @pytest.mark.parametrize("neighbors", range(9))
    def test_live_cell(self, neighbors):
        """Test that a live cell survives only with 2 or 3 neighbors."""
        assert next_state(True, neighbors) is (neighbors in (2, 3))


@pytest.fixture(params=[True, False], ids=["vectorized", "cellwise"])
def vectorized(request):
    return request.param


class TestGameOfLife:
    """Test cases for the GameOfLife class."""

    def test_initialization(self):
        """Test game initialization."""
        grid = Grid(10, 10)
        game = GameOfLife(grid)

        assert game.grid is grid
        assert game.vectorized is True
        assert game.generation == 0
        assert game.population == 0
        assert game.population_history == [0]

    def test_birth(self, vectorized):
        """Test that a dead cell with 3 live neighbors comes alive."""
        grid = make_grid(3, 3, [(0, 0), (0, 1), (1, 0)])
        game = GameOfLife(grid, vectorized=vectorized)

        game.step()

        assert grid.get_cell(1, 1)

    def test_survival(self, vectorized):
        """Test that the center of a horizontal line survives with 2 neighbors."""
        grid = make_grid(5, 5, [(1, 2), (2, 2), (3, 2)])
        game = GameOfLife(grid, vectorized=vectorized)

        assert grid.count_live_neighbors(2, 2) == 2
        game.step()

        assert grid.get_cell(2, 2)

    def test_underpopulation(self, vectorized):
        """Test that an isolated live cell dies."""
        grid = make_grid(5, 5, [(2, 2)])
        game = GameOfLife(grid, vectorized=vectorized)

        game.step()

        assert game.population == 0
        assert game.generation == 1

    def test_overpopulation(self, vectorized):
        """Test that a live cell with 4 live neighbors dies."""
        grid = make_grid(5, 5, [(2, 2), (1, 1), (3, 1), (1, 3), (3, 3)])
        game = GameOfLife(grid, vectorized=vectorized)

        assert grid.count_live_neighbors(2, 2) == 4
        game.step()

        assert not grid.get_cell(2, 2)

    def test_still_life_block(self, vectorized):
        """Test that a block pattern is stable."""
        block = [(4, 4), (4, 5), (5, 4), (5, 5)]
        grid = make_grid(10, 10, block)
        game = GameOfLife(grid, vectorized=vectorized)

        game.run(5)

        assert game.generation == 5
        assert game.population == 4
        assert all(grid.get_cell(x, y) for x, y in block)

    def test_oscillator_blinker(self, vectorized):
        """Test blinker oscillator (period 2)."""
        grid = make_grid(10, 10, [(5, 4), (5, 5), (5, 6)])
        game = GameOfLife(grid, vectorized=vectorized)

        game.step()
        assert game.population == 3
        assert grid.get_cell(4, 5)
        assert grid.get_cell(5, 5)
        assert grid.get_cell(6, 5)
        assert not grid.get_cell(5, 4)
        assert not grid.get_cell(5, 6)

        game.step()
        assert grid.get_cell(5, 4)
        assert grid.get_cell(5, 5)
        assert grid.get_cell(5, 6)
        assert not grid.get_cell(4, 5)

    def test_block_in_corner_is_stable(self, vectorized):
        """Test that a block touching the corner is unaffected by the edges."""
        grid = make_grid(4, 4, [(0, 0), (1, 0), (0, 1), (1, 1)])
        game = GameOfLife(grid, vectorized=vectorized)

        game.step()

        assert game.population == 4

    def test_edges_do_not_wrap(self, vectorized):
        """Test that cells on opposite edges never interact."""
        # Vertical blinker split across the top and bottom edges of a
        # toroidal grid would survive; on a bounded grid both pieces die.
        grid = make_grid(5, 5, [(2, 0), (2, 4), (2, 3)])
        game = GameOfLife(grid, vectorized=vectorized)

        game.step()

        assert not grid.get_cell(2, 0)
        assert not grid.get_cell(2, 4)
        assert game.population == 0

    def test_corner_ignores_far_corner(self, vectorized):
        """Test that (0, 0) never counts (C-1, R-1)."""
        grid = make_grid(3, 3, [(0, 0), (2, 2), (1, 0)])
        game = GameOfLife(grid, vectorized=vectorized)

        game.step()

        # (0, 0) has one live neighbor, (1, 0), so it dies
        assert not grid.get_cell(0, 0)

    def test_all_dead_is_fixed_point(self, vectorized):
        """Test that an empty grid stays empty."""
        grid = Grid(8, 12)
        game = GameOfLife(grid, vectorized=vectorized)

        game.run(3)

        assert game.population == 0
        assert grid == Grid(8, 12)

    def test_deterministic(self):
        """Test that identical grids advance identically."""
        grid1 = Grid.initialize(20, 20, rng=11)
        grid2 = Grid.initialize(20, 20, rng=11)

        GameOfLife(grid1).run(10)
        GameOfLife(grid2).run(10)

        assert grid1 == grid2

    def test_vectorized_matches_cellwise(self):
        """Test that both first-pass strategies give identical generations."""
        grid1 = Grid.initialize(17, 23, rng=3)
        grid2 = grid1.copy()
        fast = GameOfLife(grid1, vectorized=True)
        slow = GameOfLife(grid2, vectorized=False)

        for _ in range(10):
            fast.step()
            slow.step()
            assert grid1 == grid2

    def test_processing_order_does_not_matter(self):
        """Test that shuffling the visiting order leaves the result unchanged."""
        rng = random.Random(99)
        start = Grid.initialize(12, 15, rng=21)

        expected = start.copy()
        GameOfLife(expected).step()

        coords = [(x, y) for y in range(start.rows) for x in range(start.columns)]
        for _ in range(5):
            rng.shuffle(coords)
            grid = start.copy()
            GameOfLife(grid).step(order=list(coords))
            assert grid == expected

        grid = start.copy()
        GameOfLife(grid).step(order=reversed(coords))
        assert grid == expected

    def test_partial_order_is_rejected(self):
        """Test that an order skipping cells raises and leaves the grid untouched."""
        block = [(1, 1), (2, 1), (1, 2), (2, 2)]
        grid = make_grid(4, 4, block)
        game = GameOfLife(grid, vectorized=False)

        with pytest.raises(ValueError):
            game.step(order=[(0, 0)])

        assert grid.population == 4
        assert all(grid.get_cell(x, y) for x, y in block)
        assert game.generation == 0

    def test_duplicate_only_order_is_rejected(self):
        """Test that repeating cells does not make up for missing ones."""
        grid = make_grid(2, 2, [(0, 0), (1, 0), (0, 1)])
        game = GameOfLife(grid)

        with pytest.raises(ValueError):
            game.step(order=[(0, 0)] * 4)

        assert grid.population == 3

    def test_out_of_bounds_order_is_rejected(self):
        """Test that coordinates outside the grid are not wrapped."""
        grid = Grid(3, 3)
        coords = [(x, y) for y in range(3) for x in range(3)]

        with pytest.raises(IndexError):
            GameOfLife(grid).step(order=coords + [(-1, 0)])

    def test_reads_previous_generation_snapshot(self):
        """Test that updates made earlier in a pass are not seen by later cells."""
        # (1, 1) is born this step and is visited first. If (0, 1) saw it as
        # alive it would count 3 neighbors and be born too.
        grid = make_grid(4, 3, [(0, 0), (1, 0), (2, 0)])
        game = GameOfLife(grid, vectorized=False)

        rest = [(x, y) for y in range(4) for x in range(3) if (x, y) != (1, 1)]
        game.step(order=[(1, 1)] + rest)

        assert grid.get_cell(1, 1)
        assert not grid.get_cell(0, 1)
        assert not grid.get_cell(2, 1)
        assert game.population == 2  # (1, 0) and (1, 1)

    def test_population_history(self):
        """Test population history tracking."""
        grid = make_grid(10, 10, [(5, 5), (5, 6), (6, 5)])
        game = GameOfLife(grid)
        assert game.population_history == [3]

        for i in range(3):
            game.step()
            history = game.population_history
            assert len(history) == i + 2
            assert history[-1] == game.population

    def test_population_history_is_bounded(self):
        """Test that only the last 100 population counts are kept."""
        game = GameOfLife(Grid(5, 5))

        game.run(150)

        assert len(game.population_history) == 100

    def test_run_rejects_negative(self):
        """Test that a negative generation count is rejected."""
        game = GameOfLife(Grid(3, 3))

        with pytest.raises(ValueError):
            game.run(-1)

    def test_reset(self):
        """Test game reset functionality."""
        grid = make_grid(5, 5, [(1, 2), (2, 2), (3, 2)])
        game = GameOfLife(grid)
        game.run(2)

        game.reset(clear_grid=False)
        assert game.generation == 0
        assert game.population_history == [3]

        game.reset()
        assert game.population == 0

    def test_population_change_rate(self):
        """Test population change rate over the recent window."""
        grid = make_grid(5, 5, [(2, 2)])
        game = GameOfLife(grid)

        assert game.get_population_change_rate() == 0.0

        game.step()
        assert game.get_population_change_rate() == -1.0

    def test_get_statistics(self):
        """Test statistics gathering."""
        grid = make_grid(10, 20, [(3, 4), (4, 4), (5, 4)])
        game = GameOfLife(grid)

        stats = game.get_statistics()

        assert stats["generation"] == 0
        assert stats["population"] == 3
        assert stats["grid_size"] == (10, 20)
        assert stats["population_density"] == pytest.approx(3 / 200)
        assert stats["bounding_box"] == (3, 4, 5, 4)
        assert stats["bounding_box_size"] == (3, 1)

    def test_get_statistics_empty(self):
        """Test statistics for an empty grid."""
        stats = GameOfLife(Grid(4, 4)).get_statistics()

        assert stats["bounding_box"] is None
        assert stats["bounding_box_size"] == (0, 0)

    def test_step_does_not_expose_scratch_state(self):
        """Test that the scratch buffer doesn't alter the next step's reads."""
        grid = make_grid(5, 5, [(1, 2), (2, 2), (3, 2)])
        game = GameOfLife(grid)

        game.step()
        snapshot = np.array(grid.cells)
        game.step()
        game.step()

        assert np.array_equal(grid.cells, snapshot)
