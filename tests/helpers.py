import struct
from io import BytesIO

import numpy as np
import pytest

from PIL import Image, features

EOL = '000000000001'
EOFB = EOL + EOL

needs_libtiff = pytest.mark.skipif(not features.check('libtiff'), reason='Pillow is built without libtiff')

# ========================================================================== bit strings

def pack(bits:str):
    '''
    Packs a string of '0' and '1' chars into bytes, MSB-first, zero-padding the last byte.
    '''
    bits += '0' * (-len(bits) % 8)
    return bytes(int(bits[i:i+8], 2) for i in range(0, len(bits), 8))

def unpack(data:bytes):
    '''
    The inverse of pack(), padding included.
    '''
    return ''.join(f'{d:08b}' for d in data)

def flip(b:int):
    return int(f'{b:08b}'[::-1], 2)

# ========================================================================== images

def noise(height:int, width:int, p:float = 0.5, seed:int = 0):
    '''
    A random bi-level image: each pixel is black with probability p.
    '''
    return np.random.default_rng(seed).random((height, width)) < p

def blocks(height:int, width:int, count:int = 40, seed:int = 0):
    '''
    A random bi-level image made of black rectangles, which looks more like a scanned page than noise.
    '''
    rng = np.random.default_rng(seed)
    array = np.zeros((height, width), dtype=bool)
    for _ in range(count):
        y, x = rng.integers(0, height), rng.integers(0, width)
        h, w = rng.integers(1, max(2, height // 4)), rng.integers(1, max(2, width // 4))
        array[y:y+h, x:x+w] ^= True
    return array

# ========================================================================== reference decoder

def tiff(stream:bytes, width:int, height:int, compression:int, t4options:int = 0):
    '''
    Wraps a CCITT-encoded stream into a single-strip TIFF file.

    Compression is 2 (Modified Huffman), 3 (Group 3) or 4 (Group 4); for Group 3, t4options bits are:
    1 - 2D coding is used, 4 - EOLs are byte-aligned. PhotometricInterpretation is BlackIsZero,
    so that the pixels of the black runs read back as 1s.
    '''
    tags = [
        (256, 4, 1, width),         # ImageWidth
        (257, 4, 1, height),        # ImageLength
        (258, 3, 1, 1),             # BitsPerSample
        (259, 3, 1, compression),   # Compression
        (262, 3, 1, 1),             # PhotometricInterpretation
        (273, 4, 1, 0),             # StripOffsets, set below
        (277, 3, 1, 1),             # SamplesPerPixel
        (278, 4, 1, height),        # RowsPerStrip
        (279, 4, 1, len(stream)),   # StripByteCounts
    ]
    if compression == 3:
        tags.append((292, 4, 1, t4options))   # T4Options

    header_struct = '<' + '2s' + 'H' + 'L' + 'H' + 'HHLL' * len(tags) + 'L'
    tags[5] = (273, 4, 1, struct.calcsize(header_struct))
    header = struct.pack(header_struct, b'II', 42, 8, len(tags), *[v for tag in tags for v in tag], 0)
    return header + stream

def decode(stream:bytes, width:int, height:int, compression:int, t4options:int = 0):
    '''
    Decodes a CCITT-encoded stream with libtiff (via Pillow); returns a boolean array, True for black.
    '''
    pil = Image.open(BytesIO(tiff(stream, width, height, compression, t4options)))
    pil.load()
    assert pil.mode == '1' and pil.size == (width, height)
    return np.asarray(pil, dtype=bool)
