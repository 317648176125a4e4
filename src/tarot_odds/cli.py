"""
Command-line interface for the petit sec / main imparable estimator.

Usage examples (after installing in editable mode):

    python -m tarot_odds.cli count --n 78 --k 18
    python -m tarot_odds.cli estimate --iterations 1000000 --seed 42 --workers 4
    python -m tarot_odds.cli enumerate --limit 10000 --output runs/enum.json
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .combinatorics import count_combinations
from .errors import TarotOddsError
from .report import build_summary, format_big_integer, format_summary, summary_to_json
from .simulation import RunConfig, RunResult, run_exhaustive, run_sampling


def _add_common_run_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--fixed-width",
        action="store_true",
        help="Count the population with 64-bit integers (falls back on overflow).",
    )
    parser.add_argument(
        "--progress-every",
        type=int,
        default=1_000_000,
        help="Log running counters every N hands (visible with -v).",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Optional path of a JSON file receiving the summary.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )


def _add_count_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "count",
        help="Print the exact number of k-card hands from an n-card deck.",
    )
    parser.add_argument("--n", type=int, default=78, help="Deck size.")
    parser.add_argument("--k", type=int, default=18, help="Hand size.")
    parser.add_argument(
        "--fixed-width",
        action="store_true",
        help="Use 64-bit checked arithmetic (fails on overflow).",
    )
    parser.set_defaults(func=_cmd_count)


def _cmd_count(args: argparse.Namespace) -> None:
    n = count_combinations(args.n, args.k, arbitrary_precision=not args.fixed_width)
    print(f"C({args.n}, {args.k}) = {format_big_integer(n)}")


def _add_estimate_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "estimate",
        help="Monte Carlo estimate over random 18-card hands.",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=1_000_000,
        help="Number of hands to sample.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (default: OS entropy).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of worker threads, each with its own RNG stream.",
    )
    _add_common_run_arguments(parser)
    parser.set_defaults(func=_cmd_estimate)


def _cmd_estimate(args: argparse.Namespace) -> None:
    cfg = RunConfig(
        iterations=args.iterations,
        seed=args.seed,
        workers=args.workers,
        arbitrary_precision=not args.fixed_width,
        progress_every=args.progress_every,
    )
    result = run_sampling(cfg)
    _emit(result, args, mode="estimate", cfg=cfg)


def _add_enumerate_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "enumerate",
        help="Classify the first hands of the exhaustive mask enumeration.",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=10_000,
        help="Number of hands to classify (the full 78-card walk never ends).",
    )
    _add_common_run_arguments(parser)
    parser.set_defaults(func=_cmd_enumerate)


def _cmd_enumerate(args: argparse.Namespace) -> None:
    cfg = RunConfig(
        arbitrary_precision=not args.fixed_width,
        progress_every=args.progress_every,
    )
    result = run_exhaustive(cfg, limit=args.limit)
    _emit(result, args, mode="enumerate", cfg=cfg)


def _emit(result: RunResult, args: argparse.Namespace, *, mode: str, cfg: RunConfig) -> None:
    summary = build_summary(result)
    print(format_summary(summary))

    if args.output:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        metadata = {
            "mode": mode,
            "iterations": cfg.iterations if mode == "estimate" else args.limit,
            "seed": cfg.seed,
            "workers": cfg.workers,
        }
        with out_path.open("w", encoding="utf-8") as f:
            f.write(summary_to_json(summary, metadata=metadata))
        print(f"Saved summary to {out_path.resolve()}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tarot-odds",
        description="Petit sec and main imparable odds for 18-card Tarot hands.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_count_parser(subparsers)
    _add_estimate_parser(subparsers)
    _add_enumerate_parser(subparsers)
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        args.func(args)
    except TarotOddsError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
