import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from bitrotate.bit_rotator import BitRotator, Direction, rotate, rotate_bits
from bitrotate.errors import InvalidDirectionError

LEFT = Direction.LEFT
RIGHT = Direction.RIGHT

directions = st.sampled_from(list(Direction))


def test_single_byte():
    assert rotate(bytes([0b10000001]), LEFT) == bytes([0b00000011])
    assert rotate(bytes([0b10000001]), RIGHT) == bytes([0b11000000])


def test_multi_byte_left_wraps_leading_bit_to_tail():
    assert rotate(bytes([0b10000000, 0b00000001]), LEFT) == bytes(
        [0b00000000, 0b00000011]
    )


def test_multi_byte_right_wraps_trailing_bit_to_head():
    # Trailing bit of 0x80 is 0, so nothing wraps into the head
    assert rotate(bytes([0b00000001, 0b10000000]), RIGHT) == bytes(
        [0b00000000, 0b11000000]
    )
    assert rotate(bytes([0b00000001, 0b10000001]), RIGHT) == bytes(
        [0b10000000, 0b11000000]
    )


@pytest.mark.parametrize("direction", list(Direction))
def test_empty_input(direction):
    assert rotate(b"", direction) == b""
    assert rotate_bits(b"", direction) == b""


@pytest.mark.parametrize("direction", list(Direction))
@pytest.mark.parametrize("fill", [0x00, 0xFF])
def test_uniform_bytes_are_fixed_points(direction, fill):
    data = bytes([fill]) * 17
    assert rotate(data, direction) == data


def test_left_lookahead_uses_only_the_top_bit():
    # Next byte 0x20 must not leak into the low bit
    assert rotate(bytes([0x00, 0x20]), LEFT) == bytes([0x00, 0x40])


def test_accepts_bytearray():
    assert rotate(bytearray(b"\x80\x01"), LEFT) == b"\x00\x03"


@given(st.binary(), directions)
def test_length_is_preserved(data, direction):
    assert len(rotate(data, direction)) == len(data)


@given(st.binary(min_size=1))
def test_left_and_right_are_inverse(data):
    assert rotate(rotate(data, LEFT), RIGHT) == data
    assert rotate(rotate(data, RIGHT), LEFT) == data


@settings(max_examples=25)
@given(st.binary(min_size=1, max_size=8), directions)
def test_full_bit_cycle_is_identity(data, direction):
    out = data
    for _ in range(8 * len(data)):
        out = rotate(out, direction)
    assert out == data


def test_bitstring_reference_known_values():
    assert rotate_bits(b"\x80\x01", LEFT) == b"\x00\x03"
    assert rotate_bits(bytearray(b"\x01\x80"), RIGHT) == b"\x00\xc0"
    assert rotate_bits(b"\x81", RIGHT) == b"\xc0"


@given(st.binary(), directions)
def test_matches_bitstring_reference(data, direction):
    assert rotate(data, direction) == rotate_bits(data, direction)


@given(st.binary(min_size=1, max_size=64), directions, st.data())
def test_streaming_matches_in_memory_for_any_split(data, direction, draw):
    cuts = sorted(
        draw.draw(st.lists(st.integers(0, len(data)), max_size=6), label="cuts")
    )
    bounds = [0, *cuts, len(data)]
    chunks = [data[a:b] for a, b in zip(bounds, bounds[1:])]

    rotator = BitRotator(direction, carry=data[-1])
    out = b"".join(rotator.push(chunk) for chunk in chunks) + rotator.finish()

    assert out == rotate(data, direction)
    assert rotator.bytes_in == rotator.bytes_out == len(data)


def test_right_push_returns_every_byte_immediately():
    rotator = BitRotator(RIGHT, carry=0x01)
    assert rotator.push(b"\x02\x04") == b"\x81\x02"
    assert rotator.finish() == b""


def test_left_push_holds_back_one_byte():
    rotator = BitRotator(LEFT)
    assert rotator.push(b"\x80") == b""
    assert rotator.push(b"\x01") == b"\x00"
    assert rotator.finish() == b"\x03"


def test_right_requires_carry():
    with pytest.raises(ValueError):
        BitRotator(RIGHT)


def test_push_after_finish_fails():
    rotator = BitRotator(LEFT)
    rotator.finish()
    with pytest.raises(RuntimeError):
        rotator.push(b"\x00")


def test_reset_allows_reuse():
    rotator = BitRotator(RIGHT, carry=0x01)
    first = rotator.push(b"\x01") + rotator.finish()
    rotator.reset()
    assert rotator.push(b"\x01") + rotator.finish() == first == b"\x80"


@pytest.mark.parametrize("token, expected", [("left", LEFT), ("right", RIGHT)])
def test_direction_parse(token, expected):
    assert Direction.parse(token) is expected


@pytest.mark.parametrize("token", ["", "Left", "up", "leftt", "rightward"])
def test_direction_parse_rejects_unknown_tokens(token):
    with pytest.raises(InvalidDirectionError) as excinfo:
        Direction.parse(token)
    assert excinfo.value.token == token
    assert isinstance(excinfo.value, ValueError)
