import numpy as np
import pytest

from pdffax.faxencoder import CCITTFaxEncoder

from helpers import needs_libtiff, decode, noise, blocks

pytestmark = needs_libtiff


def makeups():
    '''One row per make-up multiple: a run of 64 * q + 5 pixels, q = 1..41, of each color'''
    runs = 64 * np.arange(1, 42) + 5
    whiteFirst = np.arange(2700)[None, :] >= runs[:, None]
    return np.vstack([whiteFirst, ~whiteFirst])


IMAGES = {
    'white': lambda: np.zeros((10, 64), dtype=bool),
    'black': lambda: np.ones((10, 64), dtype=bool),
    'noise': lambda: noise(40, 61, seed=1),
    'sparse': lambda: noise(40, 200, p=0.03, seed=2),
    'blocks': lambda: blocks(120, 173, seed=3),
    'stripes': lambda: np.indices((24, 50))[1] % 7 < 3,
    'checker': lambda: np.indices((16, 33)).sum(axis=0) % 2 == 1,
    'wide': lambda: blocks(6, 6000, count=10, seed=4),
    'makeups': makeups,
}


def encode(array:np.ndarray, encoder, *args):
    height, width = array.shape
    data = np.packbits(array, axis=1).tobytes()
    stride = (width + 7) // 8 * 8
    out = bytearray(CCITTFaxEncoder.maxEncodedSize(width, height))
    n = encoder(*args, data, stride, 0, width, height, out)
    return bytes(out[:n])


@pytest.mark.parametrize('name', IMAGES)
def test_group4(name):
    array = IMAGES[name]()
    stream = encode(array, CCITTFaxEncoder.encodeGroup4)
    assert np.array_equal(decode(stream, array.shape[1], array.shape[0], 4), array)


@pytest.mark.parametrize('name', IMAGES)
@pytest.mark.parametrize('aligned', [False, True])
def test_group3_1D(name, aligned):
    array = IMAGES[name]()
    stream = encode(array, CCITTFaxEncoder.encodeGroup3, True, aligned)
    t4options = 4 if aligned else 0
    assert np.array_equal(decode(stream, array.shape[1], array.shape[0], 3, t4options), array)


@pytest.mark.parametrize('name', IMAGES)
@pytest.mark.parametrize('aligned', [False, True])
def test_group3_2D(name, aligned):
    array = IMAGES[name]()
    stream = encode(array, CCITTFaxEncoder.encodeGroup3, False, aligned)
    t4options = 1 | (4 if aligned else 0)
    assert np.array_equal(decode(stream, array.shape[1], array.shape[0], 3, t4options), array)


@pytest.mark.parametrize('name', ['noise', 'blocks', 'wide', 'makeups'])
def test_modified_huffman(name):
    # Modified Huffman rows are byte-aligned: encode them one at a time and concatenate
    array = IMAGES[name]()
    height, width = array.shape
    data = np.packbits(array, axis=1).tobytes()
    rowBytes = (width + 7) // 8
    stream = b''
    for r in range(height):
        out = bytearray(CCITTFaxEncoder.maxEncodedSize(width))
        n = CCITTFaxEncoder.encodeModifiedHuffman(data, r * rowBytes, 0, width, out)
        stream += out[:n]
    assert np.array_equal(decode(stream, width, height, 2), array)
