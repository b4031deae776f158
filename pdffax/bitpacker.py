#!/usr/bin/env python3

from typing import Union

from .ccitt import CCITTCodes, Codeword

# Bit-reversed bytes, for the TIFF FillOrder = 2 (LSB-first) output
FLIP_TABLE = bytes(int(f'{i:08b}'[::-1], 2) for i in range(256))

# The number of EOLs in the return-to-control (RTC) sequence that ends a Group 3 stream
RTC_EOL_COUNT = 6

EOL = Codeword.fromString(CCITTCodes.EOL)
EOL_1 = Codeword.fromString(CCITTCodes.EOL + '1')
EOL_0 = Codeword.fromString(CCITTCodes.EOL + '0')
EOFB = Codeword.fromString(CCITTCodes.EOFB)

# ========================================================================== class BitAccumulator

class BitAccumulator:
    '''
    Packs variable-length codewords MSB-first into a caller-supplied output buffer.

    The accumulator holds the pending bits that do not yet make a whole byte: after every call
    to emit() there are fewer than 8 of them, whole bytes having been written to `buffer` at `pos`.
    The buffer is never resized: writing past its end raises IndexError.

    An accumulator lives for the duration of a single encode call and is passed explicitly to the row
    encoders and the marker functions below, which return it.
    '''

    __slots__ = ('buffer', 'pos', 'bits', 'count')

    def __init__(self, buffer:Union[bytearray, memoryview], pos:int = 0):
        self.buffer = buffer
        self.pos = pos
        self.bits = 0
        self.count = 0

    def __repr__(self):
        return f'BitAccumulator(pos={self.pos}, pending={self.bits:0{self.count}b})' if self.count \
            else f'BitAccumulator(pos={self.pos})'

    # -------------------------------------------------------------------- emit()

    def emit(self, code:Codeword):
        '''
        Appends code's bits and drains whole bytes to the buffer.
        '''
        self.bits = (self.bits << code.length) | code.bits
        self.count += code.length
        while self.count >= 8:
            self.count -= 8
            self.buffer[self.pos] = (self.bits >> self.count) & 0xff
            self.pos += 1
        self.bits &= (1 << self.count) - 1
        return self

    def emitRun(self, runLength:int, color:int):
        '''
        Appends the make-up and terminating codes for a run of runLength pixels of the given color.
        '''
        for code in CCITTCodes.lookup(color, runLength):
            self.emit(code)
        return self

    # -------------------------------------------------------------------- pad()

    def pad(self, nBits:int):
        '''
        Appends nBits zero bits.
        '''
        if nBits > 0:
            self.emit(Codeword(0, nBits))
        return self

    def flush(self):
        '''
        Zero-pads the pending bits to a byte boundary and writes them out. Returns the number of bytes written so far.
        '''
        if self.count:
            self.pad(8 - self.count)
        return self.pos

# ========================================================================== markers

def addEOL(acc:BitAccumulator, is1DMode:bool, addFill:bool, tag:int = 1):
    '''
    Appends an end-of-line code: the 12-bit EOL if is1DMode, or else the 13-bit EOL+tag, where
    tag = 1 if the next row is 1D-coded and 0 if it is 2D-coded.

    If addFill, zero fill bits are added first so that the 12-bit EOL itself ends on a byte boundary:

        xxxx 0000 0000 0001
    '''
    if addFill:
        acc.pad((4 - acc.count) % 8)
    return acc.emit(EOL if is1DMode else EOL_1 if tag else EOL_0)

def addRTC(acc:BitAccumulator, is1DMode:bool, addFill:bool):
    '''
    Appends the return-to-control sequence (6 x EOL, tagged with 1 in the mixed 1D/2D mode) that ends a Group 3 stream.
    '''
    for _ in range(RTC_EOL_COUNT):
        addEOL(acc, is1DMode, addFill, 1)
    return acc

def addEOFB(acc:BitAccumulator):
    '''
    Appends the end-of-facsimile-block code (EOL + EOL = 0x001001) that ends a Group 4 stream, and flushes.
    '''
    acc.emit(EOFB)
    acc.flush()
    return acc

# ========================================================================== invertFillOrder()

def invertFillOrder(buffer:Union[bytearray, memoryview], length:int):
    '''
    Reverses the order of bits in each of the first length bytes of buffer, in place.
    '''
    buffer[:length] = bytes(buffer[:length]).translate(FLIP_TABLE)
    return buffer
