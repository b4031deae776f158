#!/usr/bin/env python3

from typing import Union

import numpy as np

from PIL import Image
Image.MAX_IMAGE_PIXELS = None

from pdfrw import PdfObject, PdfName, PdfDict, IndirectPdfDict, py23_diffs

from .common import msg, warn
from .faxencoder import CCITTFaxEncoder

# ========================================================================== class PdfFaxImage

class PdfFaxImage:
    '''
    Encodes bi-level images with the CCITT fax codes and wraps them in PDF image XObjects
    with the /CCITTFaxDecode filter.

    The encoding is selected the way the /K entry of the filter's /DecodeParms selects it:

    * K < 0: Group 4 (T.6);
    * K = 0: Group 3 (T.4), 1D-coded;
    * K > 0: Group 3 (T.4), mixed 1D/2D-coded, with every K-th row 1D-coded.

    If EncodedByteAlign is True, each Group 3 EOL is padded to end on a byte boundary.
    '''

    def __init__(self, K:int = -1, EncodedByteAlign:bool = False, debug:bool = False):
        if K < 0 and EncodedByteAlign:
            raise ValueError('EncodedByteAlign == True is not supported for Group4 (T6) compression')
        self.K = K
        self.EncodedByteAlign = EncodedByteAlign
        self.debug = debug

    # -------------------------------------------------------------------- fromPil()

    @staticmethod
    def fromPil(pil:Image.Image):
        '''
        Returns a boolean numpy array of the pixels of a PIL image: True for black, False for white.
        Images with modes other than '1' are converted to mode '1' first.
        '''
        if pil.mode != '1':
            warn(f'converting a mode {pil.mode} image to bilevel')
            pil = pil.convert('1')
        # In mode '1', Pillow has True for white
        return ~np.asarray(pil, dtype=bool)

    # -------------------------------------------------------------------- packRows()

    @staticmethod
    def packRows(array:np.ndarray):
        '''
        Packs a numpy array of shape (height, width), with nonzero elements for black pixels, into rows of bits:
        MSB-first, 1 for black, each row padded with 0-bits to a whole byte. Returns (stream, strideBits),
        where strideBits is the number of bits per row, padding included.
        '''
        packed = np.packbits(np.asarray(array).astype(bool), axis=1)
        return packed.tobytes(), packed.shape[1] * 8

    # -------------------------------------------------------------------- toArray()

    @staticmethod
    def toArray(image:Union[np.ndarray, Image.Image]):
        '''
        Returns image as a 2-dimensional numpy array, black being nonzero.
        '''
        array = PdfFaxImage.fromPil(image) if isinstance(image, Image.Image) else np.asarray(image)
        if array.ndim != 2:
            raise ValueError(f'expected a 2-dimensional array of pixels, got shape: {array.shape}')
        if array.shape[0] == 0 or array.shape[1] == 0:
            raise ValueError(f'empty image: {array.shape[1]}x{array.shape[0]}')
        return array

    # -------------------------------------------------------------------- encode()

    def encode(self, image:Union[np.ndarray, Image.Image]):
        '''
        Encodes image, which is either a PIL image or a numpy array with nonzero elements for black pixels.
        Returns the encoded bytes.
        '''
        array = PdfFaxImage.toArray(image)
        height, width = array.shape
        stream, strideBits = PdfFaxImage.packRows(array)

        out = bytearray(CCITTFaxEncoder.maxEncodedSize(width, height))
        if self.K < 0:
            n = CCITTFaxEncoder.encodeGroup4(stream, strideBits, 0, width, height, out)
        else:
            n = CCITTFaxEncoder.encodeGroup3(self.K == 0, self.EncodedByteAlign,
                                             stream, strideBits, 0, width, height, out,
                                             kFactor = max(self.K, 1))

        if self.debug:
            mode = 'Group4' if self.K < 0 else f'Group3, K = {self.K}'
            msg(f'{width}x{height} ({mode}): {len(stream)} --> {n} bytes')

        return bytes(out[:n])

    # -------------------------------------------------------------------- xobject()

    def xobject(self, image:Union[np.ndarray, Image.Image]):
        '''
        Returns a PDF image XObject with the /CCITTFaxDecode -encoded image. Black pixels decode to 0s,
        which is black in /DeviceGray, so /BlackIs1 is left at its default (false).
        '''
        array = PdfFaxImage.toArray(image)
        height, width = array.shape

        DecodeParms = PdfDict(K = self.K, Columns = width, Rows = height)
        if self.EncodedByteAlign:
            DecodeParms.EncodedByteAlign = PdfObject('true')

        obj = IndirectPdfDict(
            Type = PdfName.XObject,
            Subtype = PdfName.Image,
            Width = width,
            Height = height,
            BitsPerComponent = 1,
            ColorSpace = PdfName.DeviceGray,
            Filter = PdfName.CCITTFaxDecode,
            DecodeParms = DecodeParms
        )
        obj.stream = py23_diffs.convert_load(self.encode(array))
        obj.Length = len(obj.stream)

        return obj
