import struct
import zlib
from collections import namedtuple
from enum import Enum

from png_errors import ChecksumMismatch, InvalidMagic, TruncatedChunk

#1 stałe specyficzne dla formatu PNG
PNG_SIGNATURE: bytes = b'\x89PNG\r\n\x1a\n'   #8 bajtowy nagłówek PNG


class ChunkType(Enum):
    IHDR = b'IHDR'
    PLTE = b'PLTE'
    IDAT = b'IDAT'
    IEND = b'IEND'
    UNRECOGNIZED = None

    @classmethod
    def from_tag(cls, tag: bytes) -> 'ChunkType':
        try:
            return cls(tag)
        except ValueError:
            return cls.UNRECOGNIZED


#chunk = [4B length][4B type][payload][4B CRC], offset wskazuje na pole length
class Chunk(namedtuple('Chunk', 'type data length offset crc')):
    __slots__ = ()

    @property
    def kind(self) -> ChunkType:
        return ChunkType.from_tag(self.type)

    def __repr__(self):
        return (f'Chunk(type={self.type!r}, length={self.length}, '
                f'offset={self.offset}, crc={self.crc:#010x})')


def chunk_crc(chunk_type: bytes, data: bytes) -> int:
    # CRC liczymy po typie i danych, bez pola length
    return zlib.crc32(data, zlib.crc32(chunk_type)) & 0xFFFFFFFF


def _read_exact(stream, size, what):
    data = stream.read(size)
    if len(data) != size:
        raise TruncatedChunk(what, size, len(data))
    return data


#odczyt jednego chunka
def read_chunk(stream, offset=0, verify_crc=True) -> Chunk:
    chunk_length, chunk_type = struct.unpack('>I4s', _read_exact(stream, 8, 'chunk header'))
    chunk_data = _read_exact(stream, chunk_length, f'{chunk_type!r} payload')
    chunk_crc_stored, = struct.unpack('>I', _read_exact(stream, 4, f'{chunk_type!r} crc'))

    if verify_crc:
        calc_crc = chunk_crc(chunk_type, chunk_data)
        if chunk_crc_stored != calc_crc:
            raise ChecksumMismatch(chunk_type, chunk_crc_stored, calc_crc)

    return Chunk(chunk_type, chunk_data, chunk_length, offset, chunk_crc_stored)


#2 parser strumienia PNG - czyta podpis i chunki aż do IEND włącznie
def read_chunks(stream, verify_crc=True) -> list:
    signature = _read_exact(stream, len(PNG_SIGNATURE), 'signature')
    if signature != PNG_SIGNATURE:
        raise InvalidMagic(signature)

    chunks = []
    offset = len(PNG_SIGNATURE)
    while True:
        chunk = read_chunk(stream, offset, verify_crc)
        chunks.append(chunk)

        offset += 4 + 4 + chunk.length + 4
        if chunk.kind is ChunkType.IEND:
            break  #za IEND nic już nie czytamy

    return chunks


def readPNG(file_path, verify_crc=True) -> list:
    with open(file_path, 'rb') as f:
        return read_chunks(f, verify_crc)
