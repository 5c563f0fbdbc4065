"""File-level bit rotation - streaming I/O around :mod:`bitrotate`."""

from __future__ import annotations
import logging
import os
from enum import Enum, unique
from itertools import chain
from pathlib import Path
from typing import BinaryIO, Final, Iterable, Iterator

# --- bitrotate lib imports
from bitrotate.bit_rotator import BitRotator, Direction
from bitrotate.errors import (
    InputFileError,
    OutputFileError,
    SamePathError,
    SizeMismatchError,
)

DEFAULT_CHUNK_SIZE: Final[int] = 64 * 1024

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Logging
# ------------------------------------------------------------------
@unique
class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_int(self) -> int:
        return getattr(logging, self.value)


def setup_logging(level: LogLevel) -> None:
    logging.basicConfig(
        level=level.to_int(),
        format="%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s",
    )


# ------------------------------------------------------------------
# IO helpers
# ------------------------------------------------------------------
def chunk_stream(f: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
    """Yield consecutive chunks of at most *chunk_size* bytes from *f*."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    yield from iter(lambda: f.read(chunk_size), b"")


def peek_last_byte(f: BinaryIO) -> int | None:
    """Return the last byte of seekable *f*, or *None* when nothing is left.

    The stream position is restored afterwards.
    """
    start = f.tell()
    end = f.seek(0, os.SEEK_END)
    if end <= start:
        f.seek(start)
        return None
    f.seek(-1, os.SEEK_END)
    last = f.read(1)[0]
    f.seek(start)
    return last


def peek_input(f: BinaryIO) -> int | None:
    """Like :func:`peek_last_byte`, reporting seek failures as input errors."""
    try:
        return peek_last_byte(f)
    except OSError as err:
        raise InputFileError(f"Input file is not seekable: {err}") from err


def read_chunks(f: BinaryIO, chunk_size: int) -> Iterator[bytes]:
    """Like :func:`chunk_stream`, reporting read failures as input errors."""
    try:
        yield from chunk_stream(f, chunk_size)
    except OSError as err:
        raise InputFileError(f"Input file could not be read: {err}") from err


def write_bytes(f: BinaryIO, data: bytes) -> None:
    try:
        f.write(data)
    except OSError as err:
        raise OutputFileError(f"Output file could not be written: {err}") from err


def is_same_file(input_path: str | Path, output_path: str | Path) -> bool:
    """Check whether both paths name the same file."""
    if str(input_path) == str(output_path):
        return True
    src, dst = Path(input_path), Path(output_path)
    if src.exists() and dst.exists():
        return os.path.samefile(src, dst)
    return src.resolve() == dst.resolve()


def _file_size(path: str | Path, streamed: int) -> int:
    # Pipes and devices have no meaningful size, count what went through
    p = Path(path)
    return p.stat().st_size if p.is_file() else streamed


# ------------------------------------------------------------------
# Rotation pipeline
# ------------------------------------------------------------------
def rotate_chunks(
    chunks: Iterable[bytes],
    dst: BinaryIO,
    direction: Direction,
    carry: int | None = None,
) -> tuple[int, int]:
    """Rotate the concatenation of *chunks* and write it to *dst*.

    Args:
        chunks: Input bytes in stream order
        dst: Output stream
        direction: Rotation direction
        carry: Last input byte, required for right rotation

    Returns:
        Tuple of bytes read and bytes written
    """
    rotator = BitRotator(direction, carry=carry)
    for chunk in chunks:
        write_bytes(dst, rotator.push(chunk))
    write_bytes(dst, rotator.finish())
    return rotator.bytes_in, rotator.bytes_out


def rotate_stream(
    src: BinaryIO,
    dst: BinaryIO,
    direction: Direction,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """Rotate the bytes remaining in *src* by one bit in *direction*.

    Right rotation seeks to the end of *src* once, left rotation only reads
    forward.

    Returns:
        Number of bytes written to *dst*
    """
    carry = None
    if direction is Direction.RIGHT:
        carry = peek_input(src)
        if carry is None:
            return 0

    _, written = rotate_chunks(read_chunks(src, chunk_size), dst, direction, carry)
    return written


def rotate_file(
    input_path: str | Path,
    output_path: str | Path,
    direction: Direction,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """Write *input_path* rotated one bit in *direction* to *output_path*.

    Returns:
        Number of bytes written

    Raises:
        SamePathError: If both paths name the same file
        InputFileError: If the input cannot be read
        OutputFileError: If the output cannot be written
        SizeMismatchError: If the sizes differ after processing
    """
    if is_same_file(input_path, output_path):
        raise SamePathError(
            "There is no support to reading and writing to the same file"
        )

    try:
        src = Path(input_path).open("rb")
    except OSError as err:
        raise InputFileError(f"Input file could not be opened: {err}") from err

    with src:
        try:
            dst = Path(output_path).open("wb")
        except OSError as err:
            raise OutputFileError(f"Output file could not be opened: {err}") from err

        try:
            with dst:
                chunks = read_chunks(src, chunk_size)
                first = next(chunks, b"")
                if not first:
                    logger.info("Input file is empty. input=%s", input_path)
                    return 0

                carry = peek_input(src) if direction is Direction.RIGHT else None

                logger.debug(
                    "Rotating. input=%s output=%s direction=%s chunk_size=%d",
                    input_path,
                    output_path,
                    direction.value,
                    chunk_size,
                )
                read, written = rotate_chunks(
                    chain((first,), chunks), dst, direction, carry
                )
        except OSError as err:
            # Input failures are already mapped, this is dst flushing on close
            raise OutputFileError(f"Output file could not be written: {err}") from err

    expected = _file_size(input_path, read)
    actual = _file_size(output_path, written)
    if expected != actual:
        raise SizeMismatchError(expected, actual)

    logger.info(
        "Rotated %d bytes %s. input=%s output=%s",
        written,
        direction.value,
        input_path,
        output_path,
    )
    return written
