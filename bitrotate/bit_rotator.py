from enum import Enum, unique
from logging import getLogger
from typing import Self, TypeAlias

from bitstring import BitArray

from .bit_operations import lsb, msb, shift_in_left, shift_in_right
from .errors import InvalidDirectionError

Bit: TypeAlias = int
Chunk: TypeAlias = bytes | bytearray


@unique
class Direction(str, Enum):
    """Rotation direction, valued by its command-line token."""

    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, token: str) -> Self:
        """Return the direction named by *token*.

        Raises:
            InvalidDirectionError: If *token* is not exactly ``left`` or ``right``
        """
        try:
            return cls(token)
        except ValueError as err:
            raise InvalidDirectionError(token) from err


class BitRotator:
    """Streaming one-bit rotation of a byte sequence.

    Bytes are pushed in order and come back rotated as soon as they are
    final. Right rotation needs the wrap bit up front, i.e. the least
    significant bit of the last byte of the stream, passed as *carry*. Left
    rotation takes its wrap bit from the first pushed byte and holds back one
    byte of lookahead until :meth:`finish`.

    Attributes:
        direction (Direction): Rotation direction
        bytes_in (int): Number of bytes pushed so far
        bytes_out (int): Number of bytes returned so far
    """

    __logger = getLogger(__name__)

    def __init__(self, direction: Direction, *, carry: int | None = None) -> None:
        if direction is Direction.RIGHT and carry is None:
            raise ValueError("right rotation requires the last byte as carry")
        self.direction = direction
        self.__initial_carry: Bit = lsb(carry) if carry is not None else 0
        self.reset()

    def reset(self) -> None:
        """Reset the rotator to process a new stream."""
        self.__carry: Bit = self.__initial_carry
        self.__wrap_bit: Bit | None = None
        self.__pending: int | None = None
        self.__finished = False
        self.bytes_in = 0
        self.bytes_out = 0

    def __push_left(self, chunk: Chunk) -> bytes:
        result = bytearray()
        pending = self.__pending

        for value in chunk:
            if pending is None:
                self.__wrap_bit = msb(value)
            else:
                result.append(shift_in_left(pending, value))
            pending = value

        self.__pending = pending
        return bytes(result)

    def __push_right(self, chunk: Chunk) -> bytes:
        # Pre-allocate, every input byte is final immediately
        result = bytearray(len(chunk))
        carry = self.__carry

        for i, value in enumerate(chunk):
            result[i] = shift_in_right(value, carry)
            carry = lsb(value)

        self.__carry = carry
        return bytes(result)

    def push(self, chunk: Chunk) -> bytes:
        """Consume *chunk* and return the output bytes that are now final.

        Args:
            chunk: Next input bytes, may be empty

        Returns:
            Rotated bytes, in stream order

        Raises:
            RuntimeError: If called after :meth:`finish`
        """
        if self.__finished:
            raise RuntimeError("rotator already finished")

        if self.direction is Direction.LEFT:
            out = self.__push_left(chunk)
        else:
            out = self.__push_right(chunk)

        self.bytes_in += len(chunk)
        self.bytes_out += len(out)
        return out

    def finish(self) -> bytes:
        """Flush the held-back byte and close the stream.

        Returns:
            The last output byte for left rotation, otherwise ``b""``
        """
        self.__finished = True
        out = b""

        if self.__pending is not None and self.__wrap_bit is not None:
            # The lookahead byte wraps around to the first byte of the stream
            out = bytes([shift_in_left(self.__pending, self.__wrap_bit << 7)])
            self.__pending = None
            self.bytes_out += 1

        self.__logger.debug(
            "Rotation finished. direction=%s bytes_in=%d bytes_out=%d",
            self.direction.value,
            self.bytes_in,
            self.bytes_out,
        )
        return out


def rotate(data: Chunk, direction: Direction) -> bytes:
    """Rotate the whole bit sequence of *data* by one bit.

    Example:
        >>> rotate(bytes([0b10000000, 0b00000001]), Direction.LEFT)
        b'\\x00\\x03'
        >>> rotate(bytes([0b00000001, 0b10000000]), Direction.RIGHT)
        b'\\x00\\xc0'
    """
    if not data:
        return b""

    rotator = BitRotator(direction, carry=data[-1])
    return rotator.push(data) + rotator.finish()


def rotate_bits(data: Chunk, direction: Direction) -> bytes:
    """Rotate *data* by one bit using :class:`bitstring.BitArray`.

    Holds the whole buffer in memory; :func:`rotate` is the streaming
    equivalent.
    """
    if not data:
        return b""

    bits = BitArray(bytes(data))
    if direction is Direction.LEFT:
        bits.rol(1)
    else:
        bits.ror(1)
    return bits.bytes
