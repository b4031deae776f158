#!/usr/bin/env python3

# CCITT T.4 / T.6 code tables

from typing import NamedTuple

WHITE, BLACK = 0, 1

# ========================================================================== class Codeword

class Codeword(NamedTuple):
    '''
    A variable-length code: the bit pattern, right-aligned in an int, and the number of bits in it.
    '''
    bits: int
    length: int

    @staticmethod
    def fromString(s:str):
        '''
        Makes a Codeword from a string of '0' and '1' chars, e.g. '0001' --> Codeword(1, 4)
        '''
        assert 0 < len(s) <= 24 and set(s) <= {'0','1'}
        return Codeword(int(s, 2), len(s))

    def __str__(self):
        return f'{self.bits:0{self.length}b}'

# ========================================================================== class CCITTCodes

class CCITTCodes:
    '''
    The code tables of the CCITT Group 3 (T.4) and Group 4 (T.6) facsimile coding schemes. See:

    ITU-T Recommendation T.4: STANDARDIZATION OF GROUP 3 FACSIMILE TERMINALS
    FOR DOCUMENT TRANSMISSION, Tables 2/T.4 and 3/T.4

    The tables are class-level constants; nothing in them is ever modified after import.
    '''

    EOL = '000000000001'
    EOFB = EOL + EOL

    MODES_ENCODE = {
        'PASS' : '0001',
        'HOR' : '001',
        0   : '1',
        1   : '011',
        2   : '000011',
        3   : '0000011',
        -1  : '010',
        -2  : '000010',
        -3  : '0000010',
    }

    TERMINALS_WHITE_ENCODE = [
        '00110101', '000111', '0111', '1000', '1011', '1100','1110','1111',
        '10011','10100','00111','01000','001000','000011','110100','110101',
        '101010','101011','0100111','0001100','0001000','0010111','0000011','0000100',
        '0101000','0101011','0010011','0100100','0011000','00000010','00000011','00011010',
        '00011011','00010010','00010011','00010100','00010101','00010110','00010111','00101000',
        '00101001','00101010','00101011','00101100','00101101','00000100','00000101','00001010',
        '00001011','01010010','01010011','01010100','01010101','00100100','00100101','01011000',
        '01011001','01011010','01011011','01001010','01001011','00110010','00110011','00110100'
    ]

    TERMINALS_BLACK_ENCODE = [
        '0000110111','010','11','10','011','0011','0010','00011',
        '000101','000100','0000100','0000101','0000111','00000100','00000111','000011000',
        '0000010111','0000011000','0000001000','00001100111','00001101000','00001101100','00000110111','00000101000',
        '00000010111','00000011000','000011001010','000011001011','000011001100','000011001101','000001101000','000001101001',
        '000001101010','000001101011','000011010010','000011010011','000011010100','000011010101','000011010110','000011010111',
        '000001101100','000001101101','000011011010','000011011011','000001010100','000001010101','000001010110','000001010111',
        '000001100100','000001100101','000001010010','000001010011','000000100100','000000110111','000000111000','000000100111',
        '000000101000','000001011000','000001011001','000000101011','000000101100','000001011010','000001100110','000001100111'
    ]

    # Make-up codes for 64, 128, .., 1728
    MAKEUP_LOW_WHITE_ENCODE = [
        '11011','10010','010111','0110111','00110110','00110111','01100100','01100101',
        '01101000','01100111','011001100','011001101','011010010','011010011','011010100','011010101',
        '011010110','011010111','011011000','011011001','011011010','011011011','010011000','010011001',
        '010011010','011000','010011011'
    ]

    MAKEUP_LOW_BLACK_ENCODE = [
        '0000001111','000011001000','000011001001','000001011011','000000110011','000000110100','000000110101','0000001101100',
        '0000001101101','0000001001010','0000001001011','0000001001100','0000001001101','0000001110010','0000001110011','0000001110100',
        '0000001110101','0000001110110','0000001110111','0000001010010','0000001010011','0000001010100','0000001010101','0000001011010',
        '0000001011011','0000001100100','0000001100101'
    ]

    # Extended make-up codes for 1792, 1856, .., 2560, common to both colors
    MAKEUP_HIGH_ENCODE = [
        '00000001000','00000001100','00000001101','000000010010','000000010011','000000010100','000000010101','000000010110',
        '000000010111','000000011100','000000011101','000000011110','000000011111'
    ]

    # The largest make-up code is for 40 * 64 = 2560 pixels
    MAKEUP_MAX = len(MAKEUP_LOW_WHITE_ENCODE) + len(MAKEUP_HIGH_ENCODE)

    # Codeword tables indexed by [color][runLength] and [color][runLength // 64];
    # entry 0 of the make-up tables is unused
    TERMINALS = tuple(tuple(Codeword.fromString(s) for s in table)
                    for table in (TERMINALS_WHITE_ENCODE, TERMINALS_BLACK_ENCODE))
    MAKEUPS = tuple((None,) + tuple(Codeword.fromString(s) for s in table)
                    for table in (MAKEUP_LOW_WHITE_ENCODE + MAKEUP_HIGH_ENCODE,
                                  MAKEUP_LOW_BLACK_ENCODE + MAKEUP_HIGH_ENCODE))

    MODES = {k:Codeword.fromString(v) for k,v in MODES_ENCODE.items()}
    PASS = MODES['PASS']
    HORIZONTAL = MODES['HOR']

    # Vertical mode codes indexed by a1 - b1 + 3, i.e. VL3 .. VR3
    VERTICAL = (MODES[-3], MODES[-2], MODES[-1], MODES[0], MODES[1], MODES[2], MODES[3])

    # ---------------------------------------------------------------------------------------- lookup()

    @staticmethod
    def lookup(color:int, runLength:int):
        '''
        Returns the tuple of codewords that encode a run of runLength pixels of the given color (WHITE or BLACK).

        With runLength = 64 * q + r, this is: the make-up code for 2560 repeated while q > 40, then the make-up
        code for the remaining multiple of 64 (if any), then the terminating code for r. This is how
        T.4 Sec. 4.1.2 codes runs of 2624 pixels and longer.
        '''
        assert runLength >= 0
        q, r = divmod(runLength, 64)
        makeups = CCITTCodes.MAKEUPS[color]
        codes = []
        while q > CCITTCodes.MAKEUP_MAX:
            codes.append(makeups[CCITTCodes.MAKEUP_MAX])
            q -= CCITTCodes.MAKEUP_MAX
        if q:
            codes.append(makeups[q])
        codes.append(CCITTCodes.TERMINALS[color][r])
        return tuple(codes)
