import numpy as np

from decompress_IDAT import decodeIDAT, decodeIDAT_to
from png_chunks import ChunkType, read_chunks
from png_errors import MalformedChunk
from png_header import Header, interpret


class PngFile:
    """Ordered chunk sequence of one PNG stream plus the decode entry points.

    The chunks are kept for the lifetime of the object; the header is
    re-interpreted from the first chunk on every call.
    """

    def __init__(self, chunks):
        self.chunks = list(chunks)

    @classmethod
    def from_reader(cls, stream, verify_crc=True) -> 'PngFile':
        return cls(read_chunks(stream, verify_crc))

    @classmethod
    def open(cls, file_path, verify_crc=True) -> 'PngFile':
        with open(file_path, 'rb') as f:
            return cls.from_reader(f, verify_crc)

    def header_chunk(self):
        if not self.chunks:
            raise MalformedChunk('no chunks to interpret as IHDR')
        return self.chunks[0]

    def header(self) -> Header:
        return interpret(self.header_chunk())

    def image_data_chunks(self):
        return [c for c in self.chunks if c.kind is ChunkType.IDAT]

    def palette(self):
        for c in self.chunks:
            if c.kind is ChunkType.PLTE:
                return parse_palette(c.data)
        return None

    def decode(self) -> bytes:
        return decodeIDAT(self.header(), (c.data for c in self.image_data_chunks()))

    def decode_to(self, out: bytearray) -> None:
        decodeIDAT_to(self.header(), (c.data for c in self.image_data_chunks()), out)

    def __repr__(self):
        return f'PngFile(chunks={self.chunks!r})'


#PLTE to paleta kolorów: lista 3-bajtowych kolorów RGB
def parse_palette(d: bytes):
    if len(d) % 3:
        raise MalformedChunk(f'PLTE length {len(d)} is not a multiple of 3')
    return [tuple(d[i*3:i*3+3]) for i in range(len(d) // 3)]


def to_array(header: Header, raster: bytes) -> np.ndarray:
    #kształt (height, width, channels), próbki 16-bit jako big-endian uint16
    dtype = np.uint8 if header.bit_depth == 8 else np.dtype('>u2')
    return np.frombuffer(raster, dtype=dtype).reshape(
        (header.height, header.width, header.channel_count))


def apply_palette(indices, palette) -> np.ndarray:
    # rozwija obraz paletowy (indeksy uint8) do RGB
    indices = np.asarray(indices, dtype=np.uint8)
    if indices.ndim == 3:
        indices = indices[..., 0]
    lut = np.array(palette, dtype=np.uint8).reshape(-1, 3)
    if indices.size and int(indices.max()) >= len(lut):
        raise MalformedChunk(f'palette index {int(indices.max())} out of range '
                             f'for {len(lut)} entries')
    return lut[indices]
