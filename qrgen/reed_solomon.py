"""
Reed-Solomon error correction over GF(256).

Uses the QR primitive polynomial x^8 + x^4 + x^3 + x^2 + 1 (0x11D) with
generator alpha = 2. Data codewords are split into the blocks of the
version/level, each block gets its EC codewords, and the result is
interleaved into the final codeword stream.
"""

import logging

from .tables import ErrorCorrectionLevel, block_structure

logger = logging.getLogger(__name__)

PRIMITIVE_POLY = 0x11D


def _build_tables():
    exp = [0] * 512
    log = [0] * 256
    x = 1
    for i in range(255):
        exp[i] = x
        log[x] = i
        x <<= 1
        if x & 0x100:
            x ^= PRIMITIVE_POLY
    # Duplicate so exp[log a + log b] never needs a modulo
    for i in range(255, 512):
        exp[i] = exp[i - 255]
    return tuple(exp), tuple(log)


EXP_TABLE, LOG_TABLE = _build_tables()


def gf_multiply(a: int, b: int) -> int:
    """
    Multiply two GF(256) elements using log tables.

    @param a: Field element (0-255)
    @param b: Field element (0-255)
    @return: Product in GF(256)
    """
    if a == 0 or b == 0:
        return 0
    return EXP_TABLE[LOG_TABLE[a] + LOG_TABLE[b]]


def generator_polynomial(degree: int) -> list[int]:
    """
    Build g(x) = (x - a^0)(x - a^1)...(x - a^(degree-1)).

    @param degree: Number of EC codewords
    @return: Coefficients, highest power first, leading 1 included
    """
    gen = [1]
    for i in range(degree):
        factor = EXP_TABLE[i]
        product = gen + [0]
        for j, coeff in enumerate(gen):
            product[j + 1] ^= gf_multiply(coeff, factor)
        gen = product
    return gen


def ec_codewords(data: list[int], num_ec: int) -> list[int]:
    """
    Compute the remainder of data(x) * x^num_ec divided by g(x).

    @param data: Data codewords of one block
    @param num_ec: Number of EC codewords to generate
    @return: List of num_ec EC codewords
    """
    gen = generator_polynomial(num_ec)
    result = list(data) + [0] * num_ec
    for i in range(len(data)):
        coeff = result[i]
        if coeff:
            for j in range(1, len(gen)):
                result[i + j] ^= gf_multiply(gen[j], coeff)
    return result[len(data):]


def split_blocks(data: list[int], version: int, level: ErrorCorrectionLevel) -> list[list[int]]:
    """
    Split data codewords into the blocks of a version/level.

    @param data: All data codewords of the symbol
    @param version: Symbol version (1-40)
    @param level: Error correction level
    @return: Data codewords per block, in block order
    """
    structure = block_structure(version, level)
    if len(data) != structure.data_codewords:
        raise ValueError(f"expected {structure.data_codewords} data codewords, got {len(data)}")
    blocks = []
    offset = 0
    for length in structure.data_lengths():
        blocks.append(list(data[offset:offset + length]))
        offset += length
    return blocks


def interleave(blocks: list[list[int]]) -> list[int]:
    """
    Take the i-th codeword of each block in block order, for every i.
    Blocks shorter than the longest are skipped once exhausted.

    @param blocks: Codeword lists
    @return: Interleaved codewords
    """
    result = []
    for i in range(max(len(block) for block in blocks)):
        for block in blocks:
            if i < len(block):
                result.append(block[i])
    return result


def add_error_correction(data: list[int], version: int, level: ErrorCorrectionLevel) -> list[int]:
    """
    Generate EC codewords per block and interleave data and EC codewords.

    @param data: Data codewords from the encoder
    @param version: Symbol version (1-40)
    @param level: Error correction level
    @return: Final codeword stream (all data codewords, then all EC codewords)
    """
    structure = block_structure(version, level)
    data_blocks = split_blocks(data, version, level)
    ec_blocks = [ec_codewords(block, structure.ec_per_block) for block in data_blocks]
    logger.debug("Split into %d blocks with %d EC codewords each",
                 structure.num_blocks, structure.ec_per_block)
    return interleave(data_blocks) + interleave(ec_blocks)
