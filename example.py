#!/usr/bin/env python3
"""
Example usage of the lifegrid package.
"""

from lifegrid import Grid, GameOfLife, PatternLibrary


def main():
    """Demonstrate programmatic usage of the lifegrid package."""
    # Random 10x20 grid, seeded so the run is reproducible
    grid = Grid.initialize(10, 20, rng=42)
    game = GameOfLife(grid)

    print("Random start:")
    print(grid)
    print(f"Population: {game.population}")
    print()

    game.run(5)
    print(f"Generation {game.generation}:")
    print(grid)
    print()

    # Start over from a glider in the top-left corner
    glider = PatternLibrary().get_pattern("Glider")
    glider.apply_to_grid(grid, offset_x=1, offset_y=1)
    game.reset(clear_grid=False)

    for _ in range(4):
        game.step()
        print(f"Generation {game.generation}:")
        for cell in grid.iter_cells():
            if cell.alive:
                print(f"  alive at ({cell.x}, {cell.y})")

    stats = game.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
