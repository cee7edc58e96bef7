"""exphist-lite CLI entry point.

Usage: exphist-lite [-v] [command]
"""
from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable, Iterator
from typing import TextIO

from exphist_lite.config import Config
from exphist_lite.histogram import ExpHist


def _add_window_args(p: argparse.ArgumentParser, default_window: int) -> None:
    p.add_argument(
        "--epsilon", type=float, default=0.1,
        help="Maximum relative error of the estimate (default: 0.1)",
    )
    p.add_argument(
        "--window", type=int, default=default_window,
        help=f"Window length in timestamp units (default: {default_window})",
    )


def _add_simulate_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "simulate",
        help="Run a synthetic stream through the sketch and an exact counter.",
    )
    _add_window_args(p, default_window=1000)
    p.add_argument(
        "--events", type=int, default=10_000,
        help="Number of events to generate (default: 10000)",
    )
    p.add_argument(
        "--max-gap", type=int, default=3,
        help="Largest gap between consecutive timestamps (default: 3)",
    )
    p.add_argument(
        "--max-weight", type=int, default=1,
        help="Largest weight of a single event (default: 1)",
    )
    p.add_argument(
        "--seed", type=int, default=42,
        help="RNG seed for reproducible runs (default: 42)",
    )


def _add_replay_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "replay",
        help="Feed 'timestamp [weight]' lines from a file (or - for stdin).",
    )
    p.add_argument("path", help="Input file, or - to read stdin")
    _add_window_args(p, default_window=100)


def parse_events(lines: Iterable[str]) -> Iterator[tuple[int, int]]:
    """Yield (weight, timestamp) pairs from 'timestamp [weight]' lines.

    Blank lines and lines starting with # are skipped.
    """
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        fields = line.split()
        if len(fields) > 2:
            raise ValueError(f"line {lineno}: expected 'timestamp [weight]', got {line!r}")
        try:
            ts = int(fields[0])
            weight = int(fields[1]) if len(fields) == 2 else 1
        except ValueError:
            raise ValueError(f"line {lineno}: not an integer in {line!r}") from None
        yield weight, ts


def _run_simulate(args: argparse.Namespace) -> None:
    from exphist_lite.simulation.harness import run_simulation
    from exphist_lite.simulation.report import format_report

    result = run_simulation(
        epsilon=args.epsilon,
        window_size=args.window,
        total_events=args.events,
        max_gap=args.max_gap,
        max_weight=args.max_weight,
        seed=args.seed,
    )
    print(format_report(result))


def _replay(stream: TextIO, conf: Config) -> ExpHist:
    return ExpHist.empty(conf).add_all(parse_events(stream))


def _run_replay(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    from exphist_lite.simulation.report import format_histogram

    try:
        conf = Config(epsilon=args.epsilon, window_size=args.window)
        if args.path == "-":
            hist = _replay(sys.stdin, conf)
        else:
            with open(args.path, encoding="utf-8") as f:
                hist = _replay(f, conf)
    except (OSError, ValueError) as exc:
        parser.error(str(exc))
    print(format_histogram(hist, label=f"Replay of {args.path}"))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="exphist-lite",
        description="Sliding-window approximate counting with exponential histograms.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log bucket evictions at DEBUG level.",
    )
    subparsers = parser.add_subparsers(dest="command")

    _add_simulate_parser(subparsers)
    _add_replay_parser(subparsers)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.verbose:
        # basicConfig is a no-op once the root logger has handlers
        logging.getLogger("exphist_lite").setLevel(logging.DEBUG)
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "simulate":
        try:
            _run_simulate(args)
        except ValueError as exc:
            parser.error(str(exc))
    elif args.command == "replay":
        _run_replay(args, parser)


if __name__ == "__main__":
    main()
