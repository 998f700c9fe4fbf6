"""Soak a board with random swap requests and print what the resolver did.

Useful when tuning palette size or board dimensions: a small palette on a big
board cascades a lot, a large palette on a small board deadlocks a lot.

Run with: ``python cascade_soak.py --width 8 --height 8 --types 5 --swaps 2000``
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure src/ is on the import path so the tool runs from a plain checkout.
SRC_PATH = Path(__file__).parent / "src"
if SRC_PATH.exists() and str(SRC_PATH) not in sys.path:
    sys.path.append(str(SRC_PATH))

from match3.constants import DEFAULT_PALETTE, GRID_HEIGHT, GRID_WIDTH  # type: ignore
from match3.diagnostics import run_soak  # type: ignore


def palette_of(count: int) -> list[str]:
    names = list(DEFAULT_PALETTE)
    while len(names) < count:
        names.append(f"type{len(names)}")
    return names[:count]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Random swap soak test for a match-3 board")
    parser.add_argument("--width", type=int, default=GRID_WIDTH)
    parser.add_argument("--height", type=int, default=GRID_HEIGHT)
    parser.add_argument("--types", type=int, default=len(DEFAULT_PALETTE), help="number of token types")
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--swaps", type=int, default=1000)
    parser.add_argument("-v", "--verbose", action="store_true", help="log shuffles and board resets")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.types < 1:
        parser.error("--types must be at least 1")

    report = run_soak(args.width, args.height, palette_of(args.types), args.seed, args.swaps)
    print(f"{args.width}x{args.height} board, {args.types} types, seed {args.seed}")
    for line in report.summary_lines():
        print(line)
    return 1 if report.final_matches else 0


if __name__ == "__main__":
    sys.exit(main())
