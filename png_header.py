import struct
from collections import namedtuple
from enum import IntEnum

from png_chunks import Chunk, ChunkType
from png_errors import (InvalidBitDepthColourCombination, TruncatedChunk,
                        UnexpectedChunkType, UnknownBitDepth, UnknownColourType,
                        UnknownCompressionMethod, UnknownFilterMethod,
                        UnknownInterlaceMethod, UnsupportedBitDepth)

IHDR_LENGTH = 13   #width, height, bit_depth, colour_type, compression, filter, interlace
BIT_DEPTHS = (1, 2, 4, 8, 16)


class ColourType(IntEnum):
    GREYSCALE = 0
    TRUECOLOUR = 2
    INDEXED = 3
    GREYSCALE_ALPHA = 4
    TRUECOLOUR_ALPHA = 6

    @property
    def channel_count(self) -> int:
        return _CHANNELS[self]

    def __str__(self):
        return self.name


class InterlaceMethod(IntEnum):
    NONE = 0
    ADAM7 = 1

    def __str__(self):
        return self.name


#paleta to jeden bajt indeksu na piksel, rozwijanie przez PLTE robi png_file.apply_palette
_CHANNELS = {
    ColourType.GREYSCALE: 1,
    ColourType.TRUECOLOUR: 3,
    ColourType.INDEXED: 1,
    ColourType.GREYSCALE_ALPHA: 2,
    ColourType.TRUECOLOUR_ALPHA: 4,
}

#dozwolone głębie bitowe dla każdego typu koloru (tabela 11.1 normy PNG, W3C)
LEGAL_BIT_DEPTHS = {
    ColourType.GREYSCALE: (1, 2, 4, 8, 16),
    ColourType.TRUECOLOUR: (8, 16),
    ColourType.INDEXED: (1, 2, 4, 8),
    ColourType.GREYSCALE_ALPHA: (8, 16),
    ColourType.TRUECOLOUR_ALPHA: (8, 16),
}


class Header(namedtuple('Header', 'width height bit_depth colour_type interlace')):
    __slots__ = ()

    @property
    def channel_count(self) -> int:
        return self.colour_type.channel_count

    @property
    def bytes_per_sample(self) -> int:
        if self.bit_depth == 8:
            return 1
        if self.bit_depth == 16:
            return 2
        raise UnsupportedBitDepth(self.bit_depth)

    @property
    def bytes_per_pixel(self) -> int:
        return self.channel_count * self.bytes_per_sample

    @property
    def scanline_length(self) -> int:
        return self.width * self.bytes_per_pixel


def interpret(chunk: Chunk) -> Header:
    if chunk.kind is not ChunkType.IHDR:
        raise UnexpectedChunkType(ChunkType.IHDR.value, chunk.type)

    d = chunk.data
    if len(d) < IHDR_LENGTH:
        raise TruncatedChunk('IHDR payload', IHDR_LENGTH, len(d))

    #nadmiarowe bajty za 13 bajtem sa ignorowane
    w, h, bitd, colort, compm, filterm, interlacem = struct.unpack('>IIBBBBB', d[:IHDR_LENGTH])

    try:
        colour_type = ColourType(colort)
    except ValueError:
        raise UnknownColourType(colort) from None

    if bitd not in BIT_DEPTHS:
        raise UnknownBitDepth(bitd)

    if bitd not in LEGAL_BIT_DEPTHS[colour_type]:
        raise InvalidBitDepthColourCombination(bitd, colour_type)

    #PNG używa tylko jednej metody kompresji (0 = DEFLATE) i filtra (0)
    if compm != 0:
        raise UnknownCompressionMethod(compm)
    if filterm != 0:
        raise UnknownFilterMethod(filterm)

    try:
        interlace = InterlaceMethod(interlacem)
    except ValueError:
        raise UnknownInterlaceMethod(interlacem) from None

    return Header(w, h, bitd, colour_type, interlace)
