import argparse
import sys

import matplotlib.pyplot as plt
import numpy as np
from PIL import Image

from png_errors import PngError
from png_file import PngFile, apply_palette, to_array
from png_header import ColourType
from print_chunks import printChunks


def image_array(png: PngFile, header, raster: bytes) -> np.ndarray:
    # tablica gotowa dla PIL / matplotlib: paleta rozwinięta, szary jako 2D
    img = to_array(header, raster)
    if header.colour_type == ColourType.INDEXED:
        palette = png.palette()
        if palette is not None:
            return apply_palette(img, palette)
    if img.shape[2] == 1:
        return img[..., 0]
    return img


def save_image(img: np.ndarray, out_path) -> None:
    Image.fromarray(img).save(out_path)
    print(f'Saved decoded image → {out_path}')


def show_image(img: np.ndarray, title='Decoded PNG') -> None:
    plt.imshow(img, cmap='gray' if img.ndim == 2 else None)
    plt.title(title)
    plt.axis('off')
    plt.show()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Decode the raster data of an 8-bit, non-interlaced PNG')
    parser.add_argument('input', help='Path to input PNG')
    parser.add_argument('--raw', help='Write the reconstructed scanline bytes to this file')
    parser.add_argument('--save', help='Write the decoded pixels as an image (format from extension)')
    parser.add_argument('--show', action='store_true', help='Display the decoded image')
    parser.add_argument('--no-crc', action='store_true', help='Do not verify chunk CRCs')
    parser.add_argument('--quiet', '-q', action='store_true', help='Do not print the chunk listing')
    args = parser.parse_args(argv)

    try:
        png = PngFile.open(args.input, verify_crc=not args.no_crc)
        if not args.quiet:
            printChunks(png.chunks)

        header = png.header()
        raster = png.decode()

        if not args.quiet:
            print(f'{header.width}x{header.height}, {header.colour_type.name}, '
                  f'bit depth {header.bit_depth}: {len(raster)} bytes decoded')
            print(f'first pixel: {list(raster[:header.bytes_per_pixel])}')

        if args.raw:
            with open(args.raw, 'wb') as o:
                o.write(raster)
            print(f'Saved raw scanlines → {args.raw}')

        if args.save or args.show:
            img = image_array(png, header, raster)
            if args.save:
                save_image(img, args.save)
            if args.show:
                show_image(img)
    except OSError as e:
        print(f'error: {e}', file=sys.stderr)
        return 2
    except (PngError, ValueError) as e:
        #ValueError rzuca też PIL, np. nieznane rozszerzenie przy --save
        print(f'error: {e}', file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    raise SystemExit(main(sys.argv[1:]))
