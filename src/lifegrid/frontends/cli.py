"""Command-line interface for Conway's Game of Life."""

import argparse
import sys
import time
from typing import Dict, Optional

from ..core.grid import Grid
from ..core.game import GameOfLife
from ..core.patterns import PatternLibrary


DEFAULT_ROWS = 30
DEFAULT_COLUMNS = 30
DEFAULT_FPS = 2.0

CLEAR_SCREEN = "\033[H\033[2J"


class CLIGameOfLife:
    """Runs a Game of Life simulation and draws it in the terminal."""

    def __init__(self):
        """Initialize CLI interface."""
        self.pattern_library = PatternLibrary()

    def build_grid(
        self,
        rows: int,
        columns: int,
        seed: Optional[int] = None,
        pattern: Optional[str] = None,
        pattern_x: Optional[int] = None,
        pattern_y: Optional[int] = None,
    ) -> Grid:
        """Create the starting grid.

        Args:
            rows: Grid rows
            columns: Grid columns
            seed: Random seed for reproducible initial states
            pattern: Optional pattern name to place instead of random cells
            pattern_x: X offset for pattern placement (centered if None)
            pattern_y: Y offset for pattern placement (centered if None)

        Returns:
            Seeded grid

        Raises:
            ValueError: If the pattern name is unknown
        """
        if not pattern:
            return Grid.initialize(rows, columns, seed)

        loaded = self.pattern_library.get_pattern(pattern)
        if loaded is None:
            raise ValueError(f"Pattern '{pattern}' not found")

        loaded = loaded.normalize()
        width, height = loaded.get_size()
        if pattern_x is None:
            pattern_x = max(0, (columns - width) // 2)
        if pattern_y is None:
            pattern_y = max(0, (rows - height) // 2)

        grid = Grid(rows, columns)
        loaded.apply_to_grid(grid, pattern_x, pattern_y)
        return grid

    def render_frame(self, game: GameOfLife, clear_screen: bool = True) -> str:
        """Format the current generation for display.

        Args:
            game: Game whose grid is drawn
            clear_screen: Prefix the frame with an ANSI clear sequence

        Returns:
            Frame text
        """
        header = f"Generation {game.generation}  Population {game.population}"
        frame = f"{header}\n{game.grid}\n"
        return CLEAR_SCREEN + frame if clear_screen else frame

    def run(
        self,
        rows: int = DEFAULT_ROWS,
        columns: int = DEFAULT_COLUMNS,
        fps: float = DEFAULT_FPS,
        generations: int = 0,
        seed: Optional[int] = None,
        pattern: Optional[str] = None,
        pattern_x: Optional[int] = None,
        pattern_y: Optional[int] = None,
        clear_screen: bool = True,
        verbose: bool = False,
    ) -> Dict:
        """Draw and advance the simulation once per tick.

        The grid is drawn only between steps. Each tick sleeps for whatever
        is left of ``1 / fps`` after drawing and stepping.

        Args:
            rows: Grid rows
            columns: Grid columns
            fps: Ticks per second
            generations: Number of generations to run (0 runs until interrupted)
            seed: Random seed for the initial state
            pattern: Optional pattern name to start from
            pattern_x: X offset for pattern placement
            pattern_y: Y offset for pattern placement
            clear_screen: Redraw in place instead of appending frames
            verbose: Print population after every generation

        Returns:
            Final simulation statistics
        """
        grid = self.build_grid(rows, columns, seed, pattern, pattern_x, pattern_y)
        game = GameOfLife(grid)
        frame_time = 1.0 / fps

        if verbose:
            print(f"Initializing {rows}x{columns} grid ({grid.population} live cells)")

        try:
            while generations == 0 or game.generation < generations:
                started = time.monotonic()

                sys.stdout.write(self.render_frame(game, clear_screen))
                sys.stdout.flush()
                game.step()

                if verbose:
                    print(f"Generation {game.generation}: population {game.population}")

                remaining = frame_time - (time.monotonic() - started)
                if remaining > 0:
                    time.sleep(remaining)
        except KeyboardInterrupt:
            print("\nSimulation interrupted by user")

        sys.stdout.write(self.render_frame(game, clear_screen))
        return game.get_statistics()

    def list_patterns(self) -> None:
        """List available patterns by category."""
        categories = self.pattern_library.get_patterns_by_category()

        print("Available patterns:")
        for category, patterns in categories.items():
            print(f"\n{category}:")
            for pattern_name in patterns:
                pattern = self.pattern_library.get_pattern(pattern_name)
                size = pattern.get_size()
                print(f"  {pattern_name}: {size[0]}x{size[1]}, {len(pattern.cells)} cells")
                if pattern.description:
                    print(f"    {pattern.description}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Run Conway's Game of Life in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Random 30x30 grid at 2 frames per second until Ctrl-C
  lifegrid

  # Reproducible 20x40 run for 100 generations
  lifegrid -r 20 -c 40 --seed 42 -n 100 --fps 10

  # Glider centered on the default grid
  lifegrid --pattern Glider

  # List available patterns
  lifegrid --list-patterns
        """,
    )

    # Grid configuration
    parser.add_argument(
        "-r", "--rows", type=int, default=DEFAULT_ROWS, help=f"Grid rows (default: {DEFAULT_ROWS})"
    )

    parser.add_argument(
        "-c",
        "--columns",
        type=int,
        default=DEFAULT_COLUMNS,
        help=f"Grid columns (default: {DEFAULT_COLUMNS})",
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for a reproducible initial state",
    )

    # Pattern configuration
    parser.add_argument(
        "--pattern",
        type=str,
        help="Start from a named pattern instead of random cells",
    )

    parser.add_argument("--pattern-x", type=int, help="X offset for pattern placement (default: centered)")

    parser.add_argument("--pattern-y", type=int, help="Y offset for pattern placement (default: centered)")

    # Simulation configuration
    parser.add_argument(
        "--fps",
        type=float,
        default=DEFAULT_FPS,
        help=f"Generations per second (default: {DEFAULT_FPS:g})",
    )

    parser.add_argument(
        "-n",
        "--generations",
        type=int,
        default=0,
        help="Number of generations to run, 0 runs until interrupted (default: 0)",
    )

    # Output configuration
    parser.add_argument(
        "--no-clear",
        action="store_true",
        help="Print frames one after another instead of redrawing in place",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print population after every generation",
    )

    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List all available patterns and exit",
    )

    return parser


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.rows <= 0:
        errors.append("Rows must be positive")

    if args.columns <= 0:
        errors.append("Columns must be positive")

    if args.fps <= 0:
        errors.append("FPS must be positive")

    if args.generations < 0:
        errors.append("Generations must be non-negative")

    if args.pattern_x is not None and args.pattern_x < 0:
        errors.append("Pattern X offset must be non-negative")

    if args.pattern_y is not None and args.pattern_y < 0:
        errors.append("Pattern Y offset must be non-negative")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def print_summary(stats: Dict) -> None:
    """Print a one-line summary of a finished run."""
    rows, columns = stats["grid_size"]
    print(
        f"Ran {stats['generation']} generations on a {rows}x{columns} grid, "
        f"final population {stats['population']} ({stats['population_density']:.2%})"
    )


def main(argv=None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    cli = CLIGameOfLife()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args):
        return 1

    if args.pattern and cli.pattern_library.get_pattern(args.pattern) is None:
        available = cli.pattern_library.list_patterns()
        print(f"Error: Pattern '{args.pattern}' not found")
        print(f"Available patterns: {', '.join(available)}")
        return 1

    try:
        stats = cli.run(
            rows=args.rows,
            columns=args.columns,
            fps=args.fps,
            generations=args.generations,
            seed=args.seed,
            pattern=args.pattern,
            pattern_x=args.pattern_x,
            pattern_y=args.pattern_y,
            clear_screen=not args.no_clear,
            verbose=args.verbose,
        )
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1

    print_summary(stats)
    return 0


if __name__ == "__main__":
    sys.exit(main())
