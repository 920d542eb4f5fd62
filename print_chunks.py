import struct
import zlib

from png_chunks import Chunk
from png_file import parse_palette
from png_header import interpret
from png_errors import PngError

# opis metadanych pojedynczego chunka jako lista linii tekstu
#   pierwsza linia: typ, długość, offset; dalej szczegóły dla znanych typów


def _describe_ihdr(chunk):
    try:
        h = interpret(chunk)
    except PngError as e:
        return [f'  invalid IHDR: {e}']
    return [f'  width={h.width}, height={h.height}, bit_depth={h.bit_depth}, '
            f'colour_type={h.colour_type.name}, interlace={h.interlace.name}']


def _describe_plte(d):
    try:
        colours = parse_palette(d)
    except PngError as e:
        return [f'  invalid PLTE: {e}']
    return [f'    Color {i}: R={r} G={g} B={b}' for i, (r, g, b) in enumerate(colours)]


def _describe_text(d):
    #niekompresowany tekst: key\0value
    try:
        key, val = d.split(b'\x00', 1)
    except ValueError:
        return ['  [Malformed tEXt] - raw dump suppressed']
    return [f"  key='{key.decode('latin-1')}', text='{val.decode('latin-1')}'"]


def _describe_ztxt(d):
    #tekst skompresowany zlib i trzeba rozpakować, pierwszy bajt za \0 to metoda kompresji
    try:
        key, rest = d.split(b'\x00', 1)
        text = zlib.decompress(rest[1:]).decode('latin-1')
    except (ValueError, zlib.error):
        return ['  zTXt raw data (parse error)']
    return [f"  key='{key.decode('latin-1')}', text='{text}'"]


def describe_chunk(chunk: Chunk):
    typ = chunk.type.decode('latin-1')   #4 znakowy identyfikator (IHDR, IDAT, …)
    d = chunk.data
    lines = [f'{typ} length: {chunk.length}, offset: {chunk.offset}']

    #obowiązkowe critical chunks
    if typ == 'IHDR':
        lines += _describe_ihdr(chunk)
    elif typ == 'PLTE':
        lines += _describe_plte(d)
    elif typ in ('IDAT', 'IEND'):
        pass

    #wybrane ancillary chunks
    elif typ == 'gAMA' and len(d) == 4:
        gamma, = struct.unpack('>I', d)
        lines.append(f'  gamma={gamma/100000.0}')
    elif typ == 'sBIT':
        lines.append(f'  significant bits per channel = {list(d)}')
    elif typ == 'tIME' and len(d) == 7:
        y, mo, day, h, mi, s = struct.unpack('>HBBBBB', d)
        lines.append(f'  {y:04}-{mo:02}-{day:02} {h:02}:{mi:02}:{s:02}')
    elif typ == 'pHYs' and len(d) == 9:
        x_ppu, y_ppu, unit = struct.unpack('>IIB', d)
        unit_descr = 'meter' if unit == 1 else 'unknown'
        lines.append(f'  x_ppu={x_ppu}, y_ppu={y_ppu}, unit={unit} ({unit_descr})')
    elif typ == 'tEXt':
        lines += _describe_text(d)
    elif typ == 'zTXt':
        lines += _describe_ztxt(d)
    elif typ in ('gAMA', 'tIME', 'pHYs'):
        lines.append(f'  malformed {typ}, raw data length {chunk.length}')
    else:
        lines.append(f'  Unknown chunk type {typ}, raw data length {chunk.length}')

    return lines


def printChunks(chunks):
    for chunk in chunks:
        print('\n'.join(describe_chunk(chunk)))
