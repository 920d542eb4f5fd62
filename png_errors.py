# wyjątki rzucane przez parser chunków, interpreter IHDR i dekoder scanline
# każdy błąd jest "odzyskiwalny": wywołujący dostaje wyjątek, nigdy częściowy bufor


class PngError(ValueError):
    """Base class for every PNG parse or decode failure."""


#1 błędy strukturalne
class InvalidMagic(PngError):
    def __init__(self, found: bytes):
        super().__init__('invalid png header magic')
        self.found = found


class TruncatedChunk(PngError, EOFError):
    """Raised on any short read: the stream ended inside a signature or chunk."""

    def __init__(self, what: str, expected: int, got: int):
        super().__init__(f'unexpected end of stream while reading {what}: '
                         f'expected {expected} bytes, got {got}')
        self.what = what
        self.expected = expected
        self.got = got


class ChecksumMismatch(PngError):
    def __init__(self, chunk_type: bytes, expected: int, actual: int):
        super().__init__(f'chunk checksum failed for {chunk_type!r}: '
                         f'stored {expected:#010x}, computed {actual:#010x}')
        self.chunk_type = chunk_type
        self.expected = expected
        self.actual = actual


class UnexpectedChunkType(PngError):
    def __init__(self, expected: bytes, actual: bytes):
        super().__init__(f'expected chunk type {expected!r}, was {actual!r}')
        self.expected = expected
        self.actual = actual


class MalformedChunk(PngError):
    pass


#2 błędy walidacji IHDR
class UnknownBitDepth(PngError):
    def __init__(self, value: int):
        super().__init__(f'invalid bit depth {value}')
        self.value = value


class UnknownColourType(PngError):
    def __init__(self, value: int):
        super().__init__(f'invalid colour type {value}')
        self.value = value


class InvalidBitDepthColourCombination(PngError):
    def __init__(self, bit_depth: int, colour_type):
        super().__init__(f'invalid combination of bit depth and colour: '
                         f'{bit_depth}, {colour_type!s}')
        self.bit_depth = bit_depth
        self.colour_type = colour_type


class UnknownCompressionMethod(PngError):
    def __init__(self, value: int):
        super().__init__(f'invalid compression method {value}')
        self.value = value


class UnknownFilterMethod(PngError):
    def __init__(self, value: int):
        super().__init__(f'invalid filter method {value}')
        self.value = value


class UnknownInterlaceMethod(PngError):
    def __init__(self, value: int):
        super().__init__(f'invalid interlace method {value}')
        self.value = value


#3 błędy dekodowania
class InflateError(PngError):
    def __init__(self, reason: str):
        super().__init__(f'inflate error: {reason}')
        self.reason = reason


class MalformedStream(PngError):
    def __init__(self, expected: int, actual: int):
        super().__init__(f'decompressed stream is {actual} bytes, expected {expected}')
        self.expected = expected
        self.actual = actual


class InvalidFilterType(PngError):
    def __init__(self, value: int, row: int = None):
        where = '' if row is None else f' at scanline {row}'
        super().__init__(f'invalid filter type {value}{where}')
        self.value = value
        self.row = row


#4 poprawne, ale nieobsługiwane
class UnsupportedFormat(PngError):
    """Valid PNG that this decoder refuses rather than mis-decodes."""


class UnsupportedBitDepth(UnsupportedFormat):
    def __init__(self, bit_depth: int):
        super().__init__(f'unsupported bit depth {bit_depth}, only 8 is decoded')
        self.bit_depth = bit_depth


class UnsupportedInterlaceMethod(UnsupportedFormat):
    def __init__(self, interlace):
        super().__init__(f'unsupported interlace method {interlace!s}')
        self.interlace = interlace
