from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from .api import combine_stacking, solve_stacking
from .errors import StackingError
from .solution_io import save_solution

logger = logging.getLogger("stack_solver")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stack_solver",
        description="Tile and stack boxes on a pallet.",
    )
    parser.add_argument("command", choices=("solve", "combine"))
    parser.add_argument("request", help="JSON request file, '-' for stdin")
    parser.add_argument("--indent", type=int, default=2)
    parser.add_argument("--save", metavar="NAME", help="store the result as NAME.json")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
    )
    return parser


def _read_request(path: str):
    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        payload = _read_request(args.request)
        if args.command == "solve":
            result = solve_stacking(payload)
        else:
            result = combine_stacking(payload)
    except StackingError as exc:
        logger.error("%s failed: %s", args.command, exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except Exception:
        logger.exception("Unexpected failure while running %s", args.command)
        return 2

    if args.save:
        logger.info("Saved result to %s", save_solution(args.save, result))
    print(json.dumps(result, ensure_ascii=False, indent=args.indent or None))
    return 0


if __name__ == "__main__":
    sys.exit(main())
