"""
Mode classification and capacity planning.

Picks the most compact mode able to represent the whole payload, then the
smallest version whose data capacity at the requested level holds it.
"""

import logging
from dataclasses import dataclass

from .errors import InvalidInput, PayloadTooLarge
from .tables import (
    ALPHANUMERIC_VALUES, MAX_VERSION, MIN_VERSION, ErrorCorrectionLevel, Mode, data_codewords,
)

logger = logging.getLogger(__name__)

TERMINATOR_BITS = 4


@dataclass(frozen=True)
class Plan:
    """Outcome of planning: how and into which symbol a payload is encoded."""

    mode: Mode
    version: int
    level: ErrorCorrectionLevel
    char_count: int
    bit_length: int
    data_codewords: int


def classify(payload: str) -> Mode:
    """
    Choose the most compact mode that can represent every character.

    @param payload: Text to encode
    @return: Mode.NUMERIC, Mode.ALPHANUMERIC or Mode.BYTE
    """
    if all('0' <= ch <= '9' for ch in payload):
        return Mode.NUMERIC
    if all(ch in ALPHANUMERIC_VALUES for ch in payload):
        return Mode.ALPHANUMERIC
    return Mode.BYTE


def char_count(payload: str, mode: Mode) -> int:
    """Length of the payload in mode-native units (bytes for byte mode)."""
    if mode is Mode.BYTE:
        return len(payload.encode('utf-8'))
    return len(payload)


def data_bit_length(count: int, mode: Mode) -> int:
    """
    Number of packed data bits for count characters in a mode.

    @param count: Characters (or bytes) to pack
    @param mode: Encoding mode
    @return: Bit length of the packed data, headers excluded
    """
    if mode is Mode.NUMERIC:
        return 10 * (count // 3) + (0, 4, 7)[count % 3]
    if mode is Mode.ALPHANUMERIC:
        return 11 * (count // 2) + 6 * (count % 2)
    return 8 * count


def required_bits(payload: str, mode: Mode, version: int) -> int:
    """
    Bits needed for mode indicator, count indicator and data at a version.

    The terminator is not included: it is truncated when the symbol
    has fewer than four bits left.

    @param payload: Text to encode
    @param mode: Encoding mode
    @param version: Symbol version (1-40)
    @return: Required bit length
    """
    count = char_count(payload, mode)
    return 4 + mode.char_count_bits(version) + data_bit_length(count, mode)


def fits(payload: str, mode: Mode, version: int, level: ErrorCorrectionLevel) -> bool:
    count = char_count(payload, mode)
    if count >= 1 << mode.char_count_bits(version):
        return False
    return required_bits(payload, mode, version) <= data_codewords(version, level) * 8


def plan(payload: str, level: ErrorCorrectionLevel) -> Plan:
    """
    Select mode and the smallest version that holds the payload.

    @param payload: Text to encode
    @param level: Error correction level
    @return: Plan describing mode, version and capacity
    """
    if not payload:
        raise InvalidInput("No input provided: payload is empty")

    mode = classify(payload)
    for version in range(MIN_VERSION, MAX_VERSION + 1):
        if fits(payload, mode, version, level):
            result = Plan(
                mode=mode,
                version=version,
                level=level,
                char_count=char_count(payload, mode),
                bit_length=required_bits(payload, mode, version),
                data_codewords=data_codewords(version, level),
            )
            logger.debug("Planned version %d, mode %s, level %s (%d of %d data bits)",
                         version, mode.name, level.name, result.bit_length,
                         result.data_codewords * 8)
            return result

    raise PayloadTooLarge(
        f"payload of {char_count(payload, mode)} {mode.name.lower()} units exceeds "
        f"version {MAX_VERSION} capacity at level {level.name.lower()}"
    )
