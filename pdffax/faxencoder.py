#!/usr/bin/env python3

# CCITT Group 3 / Group 4 Encoder

from typing import Union

from .ccitt import CCITTCodes, WHITE
from .bitrow import BitRow, nextTransition
from .bitpacker import BitAccumulator, addEOL, addRTC, addEOFB, invertFillOrder

# The Group 3 K-factor: every K-th row is 1D-coded, the rest are 2D-coded
K_DEFAULT = 2

# ========================================================================== encodeRow1D()

def encodeRow1D(acc:BitAccumulator, row:BitRow):
    '''
    Run-length encodes a row of pixels with the modified Huffman (1D) code.

    Runs alternate white, black, white, ..; so a row that starts with a black pixel is coded
    as a zero-length white run followed by the black run.
    '''
    if row.pixel(0):
        acc.emitRun(0, WHITE)

    for _, length, color in row.runs():
        acc.emitRun(length, color)

    return acc

# ========================================================================== encodeRow2D()

def encodeRow2D(acc:BitAccumulator, row:BitRow, ref:BitRow, width:int):
    '''
    Encodes a row of pixels with the two-dimensional code of ITU-T T.4 Sec. 4.2.1 relative
    to the reference row ref (the row above), or to a virtual all-white row if ref is None.

    Here, a0 is the current position in the row; a1, a2 are the next two changing pixels in the row
    after a0; b1 is the first changing pixel in the reference row after a0 that has the color opposite
    to that of a0, and b2 is the next changing pixel in the reference row after b1.
    At the start of the row, a0 is an imaginary white pixel just before the first pixel.
    '''
    a0 = 0
    a1 = 0 if row.pixel(0) else row.nextTransition(0, width)
    b1 = 0 if ref is not None and ref.pixel(0) else nextTransition(ref, 0, width)
    color = WHITE

    while True:

        b2 = nextTransition(ref, b1, width)

        if b2 < a1:
            # Pass mode
            acc.emit(CCITTCodes.PASS)
            a0 = b2
        elif -3 <= a1 - b1 <= 3:
            # Vertical mode
            acc.emit(CCITTCodes.VERTICAL[a1 - b1 + 3])
            a0 = a1
        else:
            # Horizontal mode
            a2 = row.nextTransition(a1, width)
            acc.emit(CCITTCodes.HORIZONTAL)
            acc.emitRun(a1 - a0, color)
            acc.emitRun(a2 - a1, color ^ 1)
            a0 = a2

        if a0 >= width:
            break

        color = row.pixel(a0)
        a1 = row.nextTransition(a0, width)
        b1 = nextTransition(ref, a0, width)
        if b1 < width and ref is not None and ref.pixel(b1) == color:
            b1 = nextTransition(ref, b1, width)

    return acc

# ========================================================================== class CCITTFaxEncoder

class CCITTFaxEncoder:
    '''
    An implementation of the CCITT Group 3 (T.4) and Group 4 (T.6) encoders. See:

    ITU-T Recommendation T.4: STANDARDIZATION OF GROUP 3 FACSIMILE TERMINALS FOR DOCUMENT TRANSMISSION

    ITU-T Recommendation T.6: FACSIMILE CODING SCHEMES AND CODING
    CONTROL FUNCTIONS FOR GROUP 4 FACSIMILE APPARATUS

    The input is a buffer of bi-level pixel rows, packed MSB-first, 0 = white, 1 = black; row r starts
    at bit r * rowStrideBits + colOffset of the buffer. The output goes into outBuffer, which the caller
    allocates; maxEncodedSize() gives a size that is always sufficient. The encoders return the number
    of bytes written. Writing past the end of outBuffer raises IndexError.
    '''

    # -------------------------------------------------------------------- maxEncodedSize()

    @staticmethod
    def maxEncodedSize(width:int, height:int = 1):
        '''
        Returns a safe size of the output buffer for encoding height rows of width pixels.

        The worst-case code is under 8 bits per pixel plus under 128 bits per row for the EOLs,
        fill bits and zero-length runs; the stream trailer (RTC or EOFB) is under 512 bits.
        '''
        return height * (width + 16) + 64

    # -------------------------------------------------------------------- encodeModifiedHuffman()

    @staticmethod
    def encodeModifiedHuffman(row:Union[bytes, bytearray, memoryview],
                              rowOffset:int,
                              colOffset:int,
                              width:int,
                              outBuffer:Union[bytearray, memoryview],
                              inverseFill:bool = False):
        '''
        Encodes a single row with the Modified Huffman code (CCITT RLE, TIFF Compression = 2).
        The row starts at bit colOffset of row[rowOffset]. The code is zero-padded to a whole byte.
        '''
        assert width > 0

        acc = BitAccumulator(outBuffer)
        encodeRow1D(acc, BitRow(row, rowOffset * 8 + colOffset, width))
        n = acc.flush()

        if inverseFill: invertFillOrder(outBuffer, n)
        return n

    # -------------------------------------------------------------------- encodeGroup3()

    @staticmethod
    def encodeGroup3(is1DMode:bool,
                     isEOLAligned:bool,
                     rows:Union[bytes, bytearray, memoryview],
                     rowStrideBits:int,
                     colOffset:int,
                     width:int,
                     height:int,
                     outBuffer:Union[bytearray, memoryview],
                     inverseFill:bool = False,
                     kFactor:int = K_DEFAULT):
        '''
        Encodes height rows with the CCITT Group 3 (T.4) code.

        If is1DMode, all rows are 1D-coded and preceded by plain EOLs. Otherwise, the rows with indices
        that are multiples of kFactor are 1D-coded, and the rest are 2D-coded relative to the previous row;
        each row is preceded by an EOL tagged with 1 (1D) or 0 (2D). If isEOLAligned, fill bits are inserted
        so that each EOL ends on a byte boundary. The stream ends with the RTC (6 x EOL).
        '''
        assert width > 0 and height >= 0 and kFactor > 0
        assert height <= 1 or rowStrideBits >= width + colOffset

        acc = BitAccumulator(outBuffer)

        ref = None
        for r in range(height):

            row = BitRow(rows, r * rowStrideBits + colOffset, width)

            if is1DMode or r % kFactor == 0:
                addEOL(acc, is1DMode, isEOLAligned, 1)
                encodeRow1D(acc, row)
            else:
                addEOL(acc, is1DMode, isEOLAligned, 0)
                encodeRow2D(acc, row, ref, width)

            ref = row

        addRTC(acc, is1DMode, isEOLAligned)
        n = acc.flush()

        if inverseFill: invertFillOrder(outBuffer, n)
        return n

    # -------------------------------------------------------------------- encodeGroup4()

    @staticmethod
    def encodeGroup4(rows:Union[bytes, bytearray, memoryview],
                     rowStrideBits:int,
                     colOffset:int,
                     width:int,
                     height:int,
                     outBuffer:Union[bytearray, memoryview],
                     inverseFill:bool = False):
        '''
        Encodes height rows with the CCITT Group 4 (T.6) code: every row is 2D-coded relative to the previous row,
        the first one relative to a virtual all-white row. There are no EOLs; the stream ends with the EOFB.
        '''
        assert width > 0 and height >= 0
        assert height <= 1 or rowStrideBits >= width + colOffset

        acc = BitAccumulator(outBuffer)

        ref = None
        for r in range(height):
            row = BitRow(rows, r * rowStrideBits + colOffset, width)
            encodeRow2D(acc, row, ref, width)
            ref = row

        n = addEOFB(acc).pos

        if inverseFill: invertFillOrder(outBuffer, n)
        return n
