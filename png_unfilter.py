from enum import IntEnum

import numpy as np

from png_errors import (InvalidFilterType, MalformedStream, UnsupportedBitDepth,
                        UnsupportedInterlaceMethod)
from png_header import InterlaceMethod

# odwracanie filtrów scanline (norma PNG W3C, rozdział 9)
#   kazda linia w zdekompresowanym strumieniu = [1B typ filtra][scanline_length bajtów]
#   a = bajt po lewej (bpp pozycji wcześniej), b = bajt powyżej, c = lewy górny
#   poza obrazem (pierwsza linia / pierwsze bpp bajtów) sąsiad ma wartość 0


class FilterType(IntEnum):
    NONE = 0
    SUB = 1
    UP = 2
    AVERAGE = 3
    PAETH = 4


#predyktor PaethPredictor RFC 2083 (filtr nr 4), remisy: a, potem b, potem c
def paeth_predictor(a: int, b: int, c: int) -> int:
    p  = a + b - c
    pa = abs(p - a)
    pb = abs(p - b)
    pc = abs(p - c)
    if pa <= pb and pa <= pc:
        return a
    elif pb <= pc:
        return b
    else:
        return c


def unfilter_scanline(filter_type, scanline, previous, bpp: int) -> bytearray:
    """Reverse one scanline's filter.

    `scanline` holds the filtered bytes without the leading tag, `previous`
    the already reconstructed row above (all zeros for the first row).
    The filter is chosen once here; the inner loops only do the byte math.
    """
    if filter_type == FilterType.NONE:
        return bytearray(scanline)

    if filter_type == FilterType.UP:
        #uint8 zawija się modulo 256
        row = np.frombuffer(scanline, dtype=np.uint8) + np.frombuffer(previous, dtype=np.uint8)
        return bytearray(row.tobytes())

    recon = bytearray(scanline)
    n = len(recon)

    if filter_type == FilterType.SUB:
        for i in range(bpp, n):
            recon[i] = (recon[i] + recon[i - bpp]) & 0xFF

    elif filter_type == FilterType.AVERAGE:
        for i in range(n):
            left = recon[i - bpp] if i >= bpp else 0
            #suma a + b moze przekroczyć 255, dzielimy zanim obetniemy do bajtu
            recon[i] = (recon[i] + ((left + previous[i]) >> 1)) & 0xFF

    elif filter_type == FilterType.PAETH:
        for i in range(n):
            if i >= bpp:
                pred = paeth_predictor(recon[i - bpp], previous[i], previous[i - bpp])
            else:
                pred = previous[i]   #a = c = 0, Paeth wybiera b
            recon[i] = (recon[i] + pred) & 0xFF

    else:
        raise InvalidFilterType(filter_type)

    return recon


#dekoder obsługuje tylko 8 bit bez przeplotu, reszta to błąd "unsupported"
def check_supported(header) -> None:
    if header.bit_depth != 8:
        raise UnsupportedBitDepth(header.bit_depth)
    if header.interlace != InterlaceMethod.NONE:
        raise UnsupportedInterlaceMethod(header.interlace)


def expected_stream_length(header) -> int:
    return header.height * (1 + header.scanline_length)


def reconstruct_into(header, data: bytes, out: bytearray) -> None:
    # dopisuje zrekonstruowany raster na koniec `out`; przy błędzie `out` zostaje nietknięty
    check_supported(header)

    stride = header.scanline_length      #liczba bajtów jednej linii bez bajtu filtra
    bpp = header.bytes_per_pixel
    expected = expected_stream_length(header)
    if len(data) != expected:
        raise MalformedStream(expected, len(data))

    recon = bytearray(stride * header.height)
    previous = bytes(stride)
    view = memoryview(data)

    i = 0  #indeks w zdekompresowanym strumieniu
    for r in range(header.height):
        #pierwszy bajt każdej linii = kod zastosowanego filtra
        ftype = data[i]
        try:
            ftype = FilterType(ftype)
        except ValueError:
            raise InvalidFilterType(ftype, r) from None

        # linia r jest w całości zapisana zanim stanie się `previous` dla r + 1
        row = unfilter_scanline(ftype, view[i + 1:i + 1 + stride], previous, bpp)
        recon[r * stride:(r + 1) * stride] = row
        previous = row
        i += 1 + stride

    out += recon


def reconstruct(header, data: bytes) -> bytes:
    out = bytearray()
    reconstruct_into(header, data, out)
    return bytes(out)
