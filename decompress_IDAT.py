import zlib

from png_errors import InflateError
from png_header import Header
from png_unfilter import check_supported, reconstruct_into

# dekompresuje obraz PNG ze skompresowanego strumienia IDAT
#   1 sprawdza czy dekoder obsługuje tę konfigurację (8 bit, bez przeplotu)
#   2 skleja dane IDAT w kolejności chunków i rozpakowuje je (zlib / DEFLATE)
#   3 odwraca filtry scanline i zwraca surowe bajty pikseli (row-major)


def decompress(data: bytes) -> bytes:
    try:
        return zlib.decompress(data)
    except zlib.error as e:
        raise InflateError(str(e)) from e


def decodeIDAT_to(header: Header, idat_payloads, out: bytearray) -> None:
    check_supported(header)

    IDAT_data = decompress(b''.join(idat_payloads))
    reconstruct_into(header, IDAT_data, out)


def decodeIDAT(header: Header, idat_payloads) -> bytes:
    out = bytearray()
    decodeIDAT_to(header, idat_payloads, out)
    return bytes(out)
