from typing import Final

BYTE_MASK: Final[int] = 0xFF
MSB_MASK: Final[int] = 0x80
LSB_MASK: Final[int] = 0x01
HIGH_SEVEN: Final[int] = 0xFE
LOW_SEVEN: Final[int] = 0x7F


def rotl8(value: int) -> int:
    """Rotate an 8-bit value one bit to the left.

    Example:
        >>> rotl8(0b10000001)
        3
    """
    return ((value << 1) | (value >> 7)) & BYTE_MASK


def rotr8(value: int) -> int:
    """Rotate an 8-bit value one bit to the right.

    Example:
        >>> rotr8(0b10000001)
        192
    """
    return ((value >> 1) | (value << 7)) & BYTE_MASK


def msb(value: int) -> int:
    """Return bit 7 of *value* placed into bit 0."""
    return (value & MSB_MASK) >> 7


def lsb(value: int) -> int:
    """Return bit 0 of *value*."""
    return value & LSB_MASK


def shift_in_left(current: int, following: int) -> int:
    """Build a left-rotated output byte.

    The seven low bits of *current* move up by one position and the vacated
    bit 0 is filled with the most significant bit of *following*.

    Args:
        current: Input byte at position ``i``
        following: Input byte at position ``i + 1`` (wrapping to the first byte)

    Returns:
        Output byte at position ``i``
    """
    return (rotl8(current) & HIGH_SEVEN) | msb(following)


def shift_in_right(current: int, preceding: int) -> int:
    """Build a right-rotated output byte.

    The seven high bits of *current* move down by one position and the vacated
    bit 7 is filled with the least significant bit of *preceding*.

    Args:
        current: Input byte at position ``i``
        preceding: Input byte at position ``i - 1`` (wrapping to the last byte)

    Returns:
        Output byte at position ``i``
    """
    return (rotr8(current) & LOW_SEVEN) | (lsb(preceding) << 7)
