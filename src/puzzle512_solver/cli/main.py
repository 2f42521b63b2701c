"""
Main CLI for the 3x3 merge puzzle solver.
"""

import argparse
import logging
import sys
import time
from typing import List, Optional

from ..solver import optimal_strategy
from ..storage import load_strategy, save_strategy
from ..strategy import DEFAULT_GAMMA, describe_board
from ..utils.memory import MemoryMonitor, ResourceCheckError
from ..utils.rich_display import SolverDisplay


class UsageParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors without a failing exit status."""

    def error(self, message: str):
        self.print_usage(sys.stdout)
        self.exit(0, f"{self.prog}: {message}\n")


def setup_logging(level: str = "INFO") -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def solve_command(args) -> None:
    """Solve the puzzle and write the strategy file."""
    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    memory_monitor = MemoryMonitor(max_ram_percent=args.max_ram_percent)
    display = SolverDisplay(memory_monitor=memory_monitor)
    display.show_header("Puzzle 512 Solver", args.output, args.gamma)

    stats = memory_monitor.get_stats()
    if stats.system_available_gb < memory_monitor.warning_threshold_gb:
        display.log_warning(
            f"Low memory: {stats.system_available_gb:.1f}GB available, "
            "a full solve needs about 2GB"
        )

    start = time.time()
    try:
        strategy = optimal_strategy(
            gamma=args.gamma,
            memory_monitor=memory_monitor,
            show_progress=not args.no_progress,
        )
    except ResourceCheckError as e:
        display.log_error(str(e))
        sys.exit(str(e))

    try:
        with open(args.output, "wb") as f:
            size = save_strategy(strategy, f)
    except OSError as e:
        logger.error(f"Could not create file {args.output}: {e}")
        sys.exit(f"Could not create file {args.output}: {e}")

    display.log_success(f"Strategy written to {args.output}")
    display.show_summary(
        {
            "Boards": f"{len(strategy):,}",
            "File size": f"{size:,} bytes",
            "Elapsed": f"{time.time() - start:.1f}s",
        }
    )
    display.show_memory_table()


def query_command(args) -> None:
    """Print expected win rates for one board."""
    setup_logging(args.log_level)

    try:
        strategy = load_strategy(args.strategy)
    except (OSError, ValueError) as e:
        sys.exit(f"Could not read strategy file {args.strategy}: {e}")

    try:
        message = describe_board(strategy, args.cells)
    except ValueError as e:
        sys.exit(f"Invalid board: {e}")

    print(message)


def build_parser() -> argparse.ArgumentParser:
    parser = UsageParser(prog="puzzle512", description="3x3 merge puzzle exact solver")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run", parser_class=UsageParser)

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve the puzzle and save the strategy")
    solve_parser.add_argument("output", help="Path of the strategy file to write")
    solve_parser.add_argument(
        "--gamma", type=float, default=DEFAULT_GAMMA, help="Perfect hash load factor (>= 1.0)"
    )
    solve_parser.add_argument(
        "--max-ram-percent", type=float, default=90.0, help="Abort if system RAM usage exceeds this"
    )
    solve_parser.add_argument(
        "--no-progress", action="store_true", help="Disable progress bars"
    )
    solve_parser.set_defaults(func=solve_command)

    # Query command
    query_parser = subparsers.add_parser("query", help="Show expected win rates for a board")
    query_parser.add_argument("strategy", help="Path of a saved strategy file")
    query_parser.add_argument(
        "cells", type=int, nargs=9, metavar="CELL", help="Row-major cell exponents (0 = empty)"
    )
    query_parser.set_defaults(func=query_command)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    args.func(args)


if __name__ == "__main__":
    main()
