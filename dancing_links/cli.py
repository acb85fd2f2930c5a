"""Command-line interface for dancing_links."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, List, Optional

from dancing_links.config import CFG
from dancing_links.errors import DancingLinksError
from dancing_links.log import get_logger, set_global_log_level
from dancing_links.solver import SolveOptions, solve, trace

logger = get_logger(__name__)

EXIT_INVALID_INPUT = 2


def _load_matrix(source: str) -> Any:
    """Read a JSON array of rows from a file path, or stdin for ``-``."""
    if source == "-":
        text = sys.stdin.read()
    else:
        text = Path(source).read_text(encoding="utf-8")
    return json.loads(text)


def _run_solve(source: str, max_solutions: int, first: bool, show_trace: bool) -> None:
    """Solve one matrix and print the result as JSON on stdout.

    Args:
        source: Path to a JSON file, or ``-`` for stdin.
        max_solutions: Solution cap; 0 finds every solution.
        first: Stop at the first solution (overrides ``max_solutions``).
        show_trace: Print one JSON line per search event instead.
    """
    try:
        matrix = _load_matrix(source)
        if show_trace:
            for event in trace(matrix):
                print(json.dumps(asdict(event)))
            return
        opts = SolveOptions(max_solutions=1 if first else max_solutions)
        solutions = solve(matrix, opts)
    except FileNotFoundError:
        logger.error(f"Matrix file not found: {source}")
        sys.exit(EXIT_INVALID_INPUT)
    except OSError as e:
        logger.error(f"Cannot read matrix file {source}: {e}")
        sys.exit(EXIT_INVALID_INPUT)
    except UnicodeDecodeError as e:
        logger.error(f"Matrix file is not valid UTF-8: {e}")
        sys.exit(EXIT_INVALID_INPUT)
    except json.JSONDecodeError as e:
        logger.error(f"Matrix is not valid JSON: {e}")
        sys.exit(EXIT_INVALID_INPUT)
    except DancingLinksError as e:
        logger.error(f"{type(e).__name__}: {e}")
        sys.exit(EXIT_INVALID_INPUT)

    logger.info(f"Found {len(solutions)} solution(s)")
    print(json.dumps({"count": len(solutions), "solutions": solutions}))


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``dancing-links`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="dancing-links",
        description="Solve exact cover problems with Dancing Links (Algorithm X).",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{solve}",
        help="Available commands",
    )

    solve_parser = subparsers.add_parser("solve", help="Solve a 0/1 matrix")
    solve_parser.add_argument(
        "matrix",
        nargs="?",
        default="-",
        help="JSON file holding an array of rows (default: stdin)",
    )
    solve_parser.add_argument(
        "--max-solutions",
        "-n",
        type=int,
        default=CFG.MAX_SOLUTIONS,
        help="Stop after this many solutions; 0 finds all (default: %(default)s)",
    )
    mode = solve_parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--first", action="store_true", help="Stop at the first solution"
    )
    mode.add_argument(
        "--trace",
        action="store_true",
        help="Print every search step as a JSON line instead of the solutions",
    )

    effective_args = sys.argv[1:] if argv is None else argv

    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")

    if args.command == "solve":
        _run_solve(args.matrix, args.max_solutions, args.first, args.trace)


if __name__ == "__main__":
    main()
