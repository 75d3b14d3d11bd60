"""
Fixed QR code tables for versions 1-40 at the four error correction levels.

Covers symbol size, data/EC codeword capacity, the block structure used for
Reed-Solomon coding, alignment pattern centres and character count widths,
following ISO/IEC 18004.
"""

from dataclasses import dataclass
from enum import Enum

MIN_VERSION = 1
MAX_VERSION = 40


class ErrorCorrectionLevel(Enum):
    """
    Error correction level of a symbol.

    Each member carries its table column, its 2-bit format indicator and the
    approximate share of codewords it can recover.
    """

    LOW = (0, 0b01, 7)
    MEDIUM = (1, 0b00, 15)
    HIGH = (2, 0b11, 25)
    HIGHEST = (3, 0b10, 30)

    def __init__(self, ordinal, format_bits, recovery_percent):
        self.ordinal = ordinal
        self.format_bits = format_bits
        self.recovery_percent = recovery_percent

    @property
    def letter(self) -> str:
        return "LMQH"[self.ordinal]


class Mode(Enum):
    """
    Data encoding mode, selected once per payload.

    Each member carries its 4-bit mode indicator and the character count
    indicator width for versions 1-9, 10-26 and 27-40.
    """

    NUMERIC = (0b0001, (10, 12, 14))
    ALPHANUMERIC = (0b0010, (9, 11, 13))
    BYTE = (0b0100, (8, 16, 16))

    def __init__(self, indicator, count_bits):
        self.indicator = indicator
        self.count_bits = count_bits

    def char_count_bits(self, version: int) -> int:
        """
        Width of the character count indicator for this mode.

        @param version: Symbol version (1-40)
        @return: Number of bits in the count field
        """
        if version <= 9:
            return self.count_bits[0]
        if version <= 26:
            return self.count_bits[1]
        return self.count_bits[2]


ALPHANUMERIC_CHARSET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"

ALPHANUMERIC_VALUES = {ch: i for i, ch in enumerate(ALPHANUMERIC_CHARSET)}

PAD_CODEWORDS = (0xEC, 0x11)

# EC codewords per block, indexed [version - 1][level ordinal]
EC_CODEWORDS_PER_BLOCK = (
    (7, 10, 13, 17), (10, 16, 22, 28), (15, 26, 18, 22), (20, 18, 26, 16),
    (26, 24, 18, 22), (18, 16, 24, 28), (20, 18, 18, 26), (24, 22, 22, 26),
    (30, 22, 20, 24), (18, 26, 24, 28), (20, 30, 28, 24), (24, 22, 26, 28),
    (26, 22, 24, 22), (30, 24, 20, 24), (22, 24, 30, 24), (24, 28, 24, 30),
    (28, 28, 28, 28), (30, 26, 28, 28), (28, 26, 26, 26), (28, 26, 30, 28),
    (28, 26, 28, 30), (28, 28, 30, 24), (30, 28, 30, 30), (30, 28, 30, 30),
    (26, 28, 30, 30), (28, 28, 28, 30), (30, 28, 30, 30), (30, 28, 30, 30),
    (30, 28, 30, 30), (30, 28, 30, 30), (30, 28, 30, 30), (30, 28, 30, 30),
    (30, 28, 30, 30), (30, 28, 30, 30), (30, 28, 30, 30), (30, 28, 30, 30),
    (30, 28, 30, 30), (30, 28, 30, 30), (30, 28, 30, 30), (30, 28, 30, 30),
)

# Number of Reed-Solomon blocks, indexed [version - 1][level ordinal]
NUM_BLOCKS = (
    (1, 1, 1, 1), (1, 1, 1, 1), (1, 1, 2, 2), (1, 2, 2, 4), (1, 2, 4, 4),
    (2, 4, 4, 4), (2, 4, 6, 5), (2, 4, 6, 6), (2, 5, 8, 8), (4, 5, 8, 8),
    (4, 5, 8, 11), (4, 8, 10, 11), (4, 9, 12, 16), (4, 9, 16, 16), (6, 10, 12, 18),
    (6, 10, 17, 16), (6, 11, 16, 19), (6, 13, 18, 21), (7, 14, 21, 25), (8, 16, 20, 25),
    (8, 17, 23, 25), (9, 17, 23, 34), (9, 18, 25, 30), (10, 20, 27, 32), (12, 21, 29, 35),
    (12, 23, 34, 37), (12, 25, 34, 40), (13, 26, 35, 42), (14, 28, 38, 45), (15, 29, 40, 48),
    (16, 31, 43, 51), (17, 33, 45, 54), (18, 35, 48, 57), (19, 37, 51, 60), (19, 38, 53, 63),
    (20, 40, 56, 66), (21, 43, 59, 70), (22, 45, 62, 74), (24, 47, 65, 77), (25, 49, 68, 81),
)

# Alignment pattern centre coordinates (rows and columns) per version
ALIGNMENT_POSITIONS = {
    1: [],
    2: [6, 18],
    3: [6, 22],
    4: [6, 26],
    5: [6, 30],
    6: [6, 34],
    7: [6, 22, 38],
    8: [6, 24, 42],
    9: [6, 26, 46],
    10: [6, 28, 50],
    11: [6, 30, 54],
    12: [6, 32, 58],
    13: [6, 34, 62],
    14: [6, 26, 46, 66],
    15: [6, 26, 48, 70],
    16: [6, 26, 50, 74],
    17: [6, 30, 54, 78],
    18: [6, 30, 56, 82],
    19: [6, 30, 58, 86],
    20: [6, 34, 62, 90],
    21: [6, 28, 50, 72, 94],
    22: [6, 26, 50, 74, 98],
    23: [6, 30, 54, 78, 102],
    24: [6, 28, 54, 80, 106],
    25: [6, 32, 58, 84, 110],
    26: [6, 30, 58, 86, 114],
    27: [6, 34, 62, 90, 118],
    28: [6, 26, 50, 74, 98, 122],
    29: [6, 30, 54, 78, 102, 126],
    30: [6, 26, 52, 78, 104, 130],
    31: [6, 30, 56, 82, 108, 134],
    32: [6, 34, 60, 86, 112, 138],
    33: [6, 30, 58, 86, 114, 142],
    34: [6, 34, 62, 90, 118, 146],
    35: [6, 30, 54, 78, 102, 126, 150],
    36: [6, 24, 50, 76, 102, 128, 154],
    37: [6, 28, 54, 80, 106, 132, 158],
    38: [6, 32, 58, 84, 110, 136, 162],
    39: [6, 26, 54, 82, 110, 138, 166],
    40: [6, 30, 58, 86, 114, 142, 170],
}


@dataclass(frozen=True)
class BlockStructure:
    """Reed-Solomon block layout for one version/level combination."""

    ec_per_block: int
    short_blocks: int
    short_data: int
    long_blocks: int
    long_data: int

    @property
    def num_blocks(self) -> int:
        return self.short_blocks + self.long_blocks

    @property
    def data_codewords(self) -> int:
        return self.short_blocks * self.short_data + self.long_blocks * self.long_data

    @property
    def ec_codewords(self) -> int:
        return self.num_blocks * self.ec_per_block

    def data_lengths(self) -> list[int]:
        """Data codewords in each block, in block order (short blocks first)."""
        return [self.short_data] * self.short_blocks + [self.long_data] * self.long_blocks


def symbol_size(version: int) -> int:
    """
    Side length of the module grid for a version.

    @param version: Symbol version (1-40)
    @return: Number of modules per side
    """
    return 4 * version + 17


def raw_data_modules(version: int) -> int:
    """
    Count the modules left for codewords once every function pattern,
    format area and version area is reserved.

    @param version: Symbol version (1-40)
    @return: Number of data modules, remainder bits included
    """
    result = (16 * version + 128) * version + 64
    if version >= 2:
        num_align = version // 7 + 2
        result -= (25 * num_align - 10) * num_align - 55
        if version >= 7:
            result -= 36
    return result


def total_codewords(version: int) -> int:
    return raw_data_modules(version) // 8


def remainder_bits(version: int) -> int:
    """Zero bits appended after the interleaved codewords (0-7)."""
    return raw_data_modules(version) % 8


def block_structure(version: int, level: ErrorCorrectionLevel) -> BlockStructure:
    """
    Split a version's codewords into Reed-Solomon blocks.

    When the codewords do not divide evenly, the trailing blocks each
    carry one extra data codeword.

    @param version: Symbol version (1-40)
    @param level: Error correction level
    @return: BlockStructure for the combination
    """
    ec_per_block = EC_CODEWORDS_PER_BLOCK[version - 1][level.ordinal]
    num_blocks = NUM_BLOCKS[version - 1][level.ordinal]
    total = total_codewords(version)
    long_blocks = total % num_blocks
    short_blocks = num_blocks - long_blocks
    short_data = total // num_blocks - ec_per_block
    return BlockStructure(ec_per_block, short_blocks, short_data, long_blocks, short_data + 1)


def data_codewords(version: int, level: ErrorCorrectionLevel) -> int:
    """
    Data codeword capacity of a version at a level.

    @param version: Symbol version (1-40)
    @param level: Error correction level
    @return: Number of data codewords
    """
    return (total_codewords(version)
            - EC_CODEWORDS_PER_BLOCK[version - 1][level.ordinal] * NUM_BLOCKS[version - 1][level.ordinal])
