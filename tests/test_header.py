"""
Header interpreter: IHDR parsing and bit depth / colour type validation.
"""

import pytest

from png_chunks import Chunk
from png_errors import (InvalidBitDepthColourCombination, TruncatedChunk,
                        UnexpectedChunkType, UnknownBitDepth, UnknownColourType,
                        UnknownCompressionMethod, UnknownFilterMethod,
                        UnknownInterlaceMethod, UnsupportedBitDepth)
from png_header import ColourType, Header, InterlaceMethod, LEGAL_BIT_DEPTHS, interpret
from pngdata import ihdr_payload


def ihdr(**kwargs):
    data = ihdr_payload(**kwargs)
    return Chunk(b'IHDR', data, len(data), 8, 0)


def test_interpret_valid_header():
    """Fields are read big-endian and mapped onto the enums."""
    h = interpret(ihdr(width=640, height=480, bit_depth=8, colour_type=6))
    assert h == Header(640, 480, 8, ColourType.TRUECOLOUR_ALPHA, InterlaceMethod.NONE)
    assert h.channel_count == 4
    assert h.bytes_per_pixel == 4
    assert h.scanline_length == 2560


def test_large_dimensions_are_unsigned():
    """Width uses all 32 bits."""
    h = interpret(ihdr(width=0xFFFFFFFF, height=1))
    assert h.width == 0xFFFFFFFF


def test_interpret_is_idempotent():
    chunk = ihdr(width=3, height=2, colour_type=2)
    assert interpret(chunk) == interpret(chunk)


def test_wrong_chunk_type():
    """Only an IHDR chunk can be interpreted as the header."""
    chunk = Chunk(b'IDAT', b'\x00' * 13, 13, 8, 0)
    with pytest.raises(UnexpectedChunkType) as exc:
        interpret(chunk)
    assert exc.value.expected == b'IHDR'
    assert exc.value.actual == b'IDAT'


def test_short_payload():
    chunk = Chunk(b'IHDR', b'\x00' * 10, 10, 8, 0)
    with pytest.raises(TruncatedChunk):
        interpret(chunk)


def test_truecolour_bit_depth_4_is_illegal():
    """Bit depth 4 with Truecolour is not a legal pair."""
    with pytest.raises(InvalidBitDepthColourCombination) as exc:
        interpret(ihdr(width=1, height=1, bit_depth=4, colour_type=2))
    assert exc.value.bit_depth == 4
    assert exc.value.colour_type == ColourType.TRUECOLOUR


@pytest.mark.parametrize("colour_type,bit_depth", [
    (ct, bd) for ct in ColourType for bd in (1, 2, 4, 8, 16)
])
def test_legal_pair_table(colour_type, bit_depth):
    """Every pair is accepted exactly when the table lists it."""
    chunk = ihdr(width=1, height=1, bit_depth=bit_depth, colour_type=int(colour_type))
    if bit_depth in LEGAL_BIT_DEPTHS[colour_type]:
        assert interpret(chunk).bit_depth == bit_depth
    else:
        with pytest.raises(InvalidBitDepthColourCombination):
            interpret(chunk)


def test_unknown_colour_type():
    with pytest.raises(UnknownColourType) as exc:
        interpret(ihdr(width=1, height=1, colour_type=5))
    assert exc.value.value == 5
    assert str(exc.value) == 'invalid colour type 5'


@pytest.mark.parametrize("bit_depth", [0, 3, 7, 12, 32])
def test_unknown_bit_depth(bit_depth):
    with pytest.raises(UnknownBitDepth):
        interpret(ihdr(width=1, height=1, bit_depth=bit_depth))


def test_unknown_compression_method():
    with pytest.raises(UnknownCompressionMethod):
        interpret(ihdr(width=1, height=1, compression=1))


def test_unknown_filter_method():
    with pytest.raises(UnknownFilterMethod):
        interpret(ihdr(width=1, height=1, filter_method=2))


def test_interlace_methods():
    """0 and 1 map onto the enum, anything else is rejected."""
    assert interpret(ihdr(width=1, height=1, interlace=1)).interlace == InterlaceMethod.ADAM7
    with pytest.raises(UnknownInterlaceMethod) as exc:
        interpret(ihdr(width=1, height=1, interlace=10))
    assert exc.value.value == 10


def test_channel_counts():
    """Grey-alpha carries two samples, indexed one palette index."""
    assert [ct.channel_count for ct in ColourType] == [1, 3, 1, 2, 4]


def test_sub_byte_depth_has_no_byte_geometry():
    """Sub-byte depths parse fine but have no byte-per-sample geometry."""
    h = interpret(ihdr(width=8, height=1, bit_depth=1, colour_type=0))
    with pytest.raises(UnsupportedBitDepth):
        h.bytes_per_pixel
