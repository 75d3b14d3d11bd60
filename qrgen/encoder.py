"""
Codeword encoding.

Packs a payload into the data codeword sequence of its planned symbol:
mode indicator, character count, packed data, terminator and padding.
"""

import logging

from .planner import Plan
from .tables import ALPHANUMERIC_VALUES, PAD_CODEWORDS, Mode
from .utils import bits_to_codewords, int_to_bits, to_bitstring

logger = logging.getLogger(__name__)


def pack_numeric(text: str) -> str:
    """
    Pack digits in groups of three (10 bits), a trailing pair into 7 bits
    and a trailing single digit into 4 bits.

    @param text: String of decimal digits
    @return: Packed bit string
    """
    bits = []
    for i in range(0, len(text), 3):
        group = text[i:i+3]
        bits.append(int_to_bits(int(group), (0, 4, 7, 10)[len(group)]))
    return ''.join(bits)


def pack_alphanumeric(text: str) -> str:
    """
    Pack character pairs as 45*a+b in 11 bits, a trailing single in 6 bits.

    @param text: String drawn from the alphanumeric character set
    @return: Packed bit string
    """
    bits = []
    for i in range(0, len(text) - 1, 2):
        value = 45 * ALPHANUMERIC_VALUES[text[i]] + ALPHANUMERIC_VALUES[text[i + 1]]
        bits.append(int_to_bits(value, 11))
    if len(text) % 2:
        bits.append(int_to_bits(ALPHANUMERIC_VALUES[text[-1]], 6))
    return ''.join(bits)


def pack_bytes(text: str) -> str:
    return to_bitstring(text.encode('utf-8'))


_PACKERS = {
    Mode.NUMERIC: pack_numeric,
    Mode.ALPHANUMERIC: pack_alphanumeric,
    Mode.BYTE: pack_bytes,
}


def make_data_bitstream(text: str, plan: Plan) -> str:
    """
    Construct the complete data bitstream for the planned symbol.

    Includes mode indicator, count indicator, data payload, terminator and
    padding bits.

    @param text: Input text to encode
    @param plan: Mode/version/level chosen by the planner
    @return: Bit string of exactly plan.data_codewords * 8 bits
    """
    mode = plan.mode
    bitstream = (int_to_bits(mode.indicator, 4)
                 + int_to_bits(plan.char_count, mode.char_count_bits(plan.version))
                 + _PACKERS[mode](text))

    max_bits = plan.data_codewords * 8
    if len(bitstream) > max_bits:
        raise ValueError(f"bitstream of {len(bitstream)} bits exceeds {max_bits} bit capacity")

    # Terminator
    term = min(4, max_bits - len(bitstream))
    bitstream += '0' * term
    while len(bitstream) % 8:
        bitstream += '0'

    pads = [int_to_bits(cw, 8) for cw in PAD_CODEWORDS]
    i = 0
    while len(bitstream) // 8 < plan.data_codewords:
        bitstream += pads[i % 2]
        i += 1
    return bitstream


def make_data_codewords(text: str, plan: Plan) -> list[int]:
    """
    Encode a payload into its data codewords.

    @param text: Input text to encode
    @param plan: Mode/version/level chosen by the planner
    @return: List of plan.data_codewords byte values
    """
    bitstream = make_data_bitstream(text, plan)
    logger.debug("Data bitstream: %s", bitstream)
    return bits_to_codewords(bitstream)
