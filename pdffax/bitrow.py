#!/usr/bin/env python3

from typing import Union

# The position of the most significant set bit in a byte, counting from the MSB; 8 for a zero byte
FIRST_SET_BIT = tuple(8 - b.bit_length() for b in range(256))

# ========================================================================== class BitRow

class BitRow:
    '''
    A zero-copy view of a row of bi-level pixels: `width` bits, packed MSB-first, that start at
    bit `start` of `data` (bit 0 is the MSB of data[0]). A 0 bit is white, a 1 bit is black.

    The row never copies `data`: it can be bytes, a bytearray or a memoryview, owned by the caller.
    Pixel indices passed to the methods are relative to the start of the row.
    '''

    __slots__ = ('data', 'start', 'width')

    def __init__(self, data:Union[bytes, bytearray, memoryview], start:int, width:int):
        self.data = data
        self.start = start
        self.width = width

    def __repr__(self):
        return f'BitRow(start={self.start}, width={self.width})'

    def pixel(self, i:int):
        '''Returns the color of the pixel i: 0 (white) or 1 (black)'''
        p = self.start + i
        return (self.data[p >> 3] >> (7 - (p & 7))) & 1

    def nextTransition(self, fromBit:int, limitBit:int):
        '''See nextTransition()'''
        return nextTransition(self, fromBit, limitBit)

    def runs(self):
        '''
        A generator of (start, length, color) tuples, one for each run of same-colored pixels in the row.
        '''
        i = 0
        while i < self.width:
            j = nextTransition(self, i, self.width)
            yield i, j - i, self.pixel(i)
            i = j

# ========================================================================== nextTransition()

def nextTransition(row:BitRow, fromBit:int, limitBit:int):
    '''
    Returns the index of the first pixel after the pixel fromBit whose color differs from that of the pixel fromBit,
    or limitBit if there is no such pixel before limitBit. If row is None, it is treated as a virtual all-white row,
    and limitBit is returned.

    The row is scanned a byte at a time: the bytes are inverted while looking for a white pixel, and the position
    of the first set bit within a byte is found with the FIRST_SET_BIT table.
    '''
    if row is None or fromBit >= limitBit: return limitBit

    data, start = row.data, row.start
    p = start + fromBit
    n = p >> 3
    last = (start + limitBit - 1) >> 3
    extra = p & 7

    if (data[n] >> (7 - extra)) & 1:
        # Looking for a white pixel
        test = ~data[n] & (0xff >> extra)
        while test == 0 and n < last:
            n += 1
            test = ~data[n] & 0xff
    else:
        # Looking for a black pixel
        test = data[n] & (0xff >> extra)
        while test == 0 and n < last:
            n += 1
            test = data[n]

    result = n * 8 + FIRST_SET_BIT[test] - start
    return result if result < limitBit else limitBit
