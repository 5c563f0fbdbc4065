import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Final, Sequence

# ---------------------------------------------------------------------------
# Shared rotation utilities
# ---------------------------------------------------------------------------
from rotator_core import DEFAULT_CHUNK_SIZE, LogLevel, rotate_file, setup_logging

from bitrotate.bit_rotator import Direction
from bitrotate.errors import InvalidDirectionError, RotateError

PROG: Final[str] = "rotate"
USAGE: Final[str] = f"{PROG} <left|right> <in-file> <out-file>"

logger = logging.getLogger(PROG)


# ---------------------------------------------------------------------------
# CLI argument parsing
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CliArgs:
    direction: str
    input_path: str
    output_path: str
    log_level: LogLevel
    chunk_size: int


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {text}")
    return value


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog=PROG,
        usage=USAGE,
        description="Rotate the contents of a file one bit left or right.",
    )
    p.add_argument(
        "direction",
        help="Rotation direction (left or right)",
    )
    p.add_argument("input_path", help="File to read")
    p.add_argument("output_path", help="File to write, must differ from the input")
    p.add_argument(
        "-l",
        "--log-level",
        default=LogLevel.INFO.value,
        choices=[lvl.value for lvl in LogLevel],
        help="Logging level",
    )
    p.add_argument(
        "--chunk-size",
        type=_positive_int,
        default=DEFAULT_CHUNK_SIZE,
        help=f"Read buffer size in bytes (default: {DEFAULT_CHUNK_SIZE})",
    )
    return p


def parse_args(argv: Sequence[str] | None = None) -> CliArgs:
    ns = build_parser().parse_args(argv)
    return CliArgs(
        ns.direction,
        ns.input_path,
        ns.output_path,
        LogLevel(ns.log_level),
        ns.chunk_size,
    )


# ---------------------------------------------------------------------------
# Rotation runner
# ---------------------------------------------------------------------------


def run_rotator(args: CliArgs) -> int:
    """Rotate the input file into the output file and return an exit code."""
    setup_logging(args.log_level)

    try:
        direction = Direction.parse(args.direction)
    except InvalidDirectionError as exc:
        logger.error("%s", exc)
        print(f"Usage:\n  {USAGE}", file=sys.stderr)
        return 1

    try:
        rotate_file(args.input_path, args.output_path, direction, args.chunk_size)
        return 0

    except RotateError as exc:
        logger.error("%s", exc)
        return 1

    except Exception as exc:  # noqa: BLE001 - report as fatal
        logger.exception("Fatal error: %s", exc)
        return 1


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: Sequence[str] | None = None) -> None:  # pragma: no cover
    sys.exit(run_rotator(parse_args(argv)))


if __name__ == "__main__":
    main()
