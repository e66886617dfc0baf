"""`python -m epidraw` のエントリポイント。"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from epidraw.common.logging import setup_default_logging


def _parse_size(text: str) -> tuple[int, int]:
    try:
        w, h = text.lower().split("x", 1)
        return int(w), int(h)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"size must look like 800x600, got {text!r}") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="epidraw",
        description="Sketch a closed curve and watch it redrawn by Fourier epicycles.",
    )
    parser.add_argument("--degree", type=int, default=None, help="Fourier degree N (frequencies -N..N)")
    parser.add_argument("--max-points", type=int, default=None, help="maximum number of sketch points")
    parser.add_argument(
        "--min-distance",
        type=float,
        default=None,
        help="drop points closer than this to the previous one (normalized units)",
    )
    parser.add_argument("--time-scale", type=float, default=None, help="animation speed multiplier")
    parser.add_argument("--fps", type=int, default=None)
    parser.add_argument("--size", type=_parse_size, default=None, help="window size, e.g. 800x600")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument(
        "--init-only",
        action="store_true",
        help="resolve configuration and exit without opening a window",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_default_logging(args.log_level)

    from epidraw.api.runner import run_epicycles

    try:
        run_epicycles(
            degree=args.degree,
            max_points=args.max_points,
            min_distance=args.min_distance,
            time_scale=args.time_scale,
            window_size=args.size,
            fps=args.fps,
            init_only=args.init_only,
        )
    except ValueError as e:
        print(f"epidraw: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
