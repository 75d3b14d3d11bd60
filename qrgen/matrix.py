"""
QR matrix construction.

Places the function patterns, lays the codeword stream into the data
modules, picks the mask with the lowest penalty and writes the format and
version information.

Internally a matrix is a list of rows of ints (-1 unassigned, 0 light,
1 dark) plus a set of (row, col) coordinates holding function modules.
"""

import logging

from .tables import ALIGNMENT_POSITIONS, ErrorCorrectionLevel, symbol_size

logger = logging.getLogger(__name__)

FORMAT_GENERATOR = 0x537
FORMAT_MASK = 0x5412
VERSION_GENERATOR = 0x1F25

FINDER_PATTERN = [
    [1, 1, 1, 1, 1, 1, 1],
    [1, 0, 0, 0, 0, 0, 1],
    [1, 0, 1, 1, 1, 0, 1],
    [1, 0, 1, 1, 1, 0, 1],
    [1, 0, 1, 1, 1, 0, 1],
    [1, 0, 0, 0, 0, 0, 1],
    [1, 1, 1, 1, 1, 1, 1],
]

ALIGNMENT_PATTERN = [
    [1, 1, 1, 1, 1],
    [1, 0, 0, 0, 1],
    [1, 0, 1, 0, 1],
    [1, 0, 0, 0, 1],
    [1, 1, 1, 1, 1],
]

MASK_CONDITIONS = (
    lambda r, c: (r + c) % 2 == 0,
    lambda r, c: r % 2 == 0,
    lambda r, c: c % 3 == 0,
    lambda r, c: (r + c) % 3 == 0,
    lambda r, c: (r // 2 + c // 3) % 2 == 0,
    lambda r, c: (r * c) % 2 + (r * c) % 3 == 0,
    lambda r, c: ((r * c) % 2 + (r * c) % 3) % 2 == 0,
    lambda r, c: ((r + c) % 2 + (r * c) % 3) % 2 == 0,
)

# Finder look-alikes: 1:1:3:1:1 with four light modules on one side
FINDER_LIKE_PATTERNS = ('10111010000', '00001011101')


def initialise_matrix(size: int) -> list[list[int]]:
    """
    Create an empty QR code matrix with all positions initialised to -1.

    @param size: Dimension of square matrix (size x size)
    @return: 2D list representing empty QR code grid
    """
    return [[-1] * size for _ in range(size)]


def set_function(m, functions, r: int, c: int, value: int):
    """
    Write a function module and mark it so data placement and masking skip it.

    @param m: QR code matrix
    @param functions: Set of function module coordinates
    @param r: Row index
    @param c: Column index
    @param value: 0 (light) or 1 (dark)
    """
    m[r][c] = value
    functions.add((r, c))


def place_finder_pattern(m, functions, r, c):
    """
    Insert a 7x7 finder pattern with its top-left corner at (r, c).

    @param m: QR code matrix
    @param functions: Set of function module coordinates
    @param r: Top-left row coordinate
    @param c: Top-left column coordinate
    """
    for dr in range(7):
        for dc in range(7):
            set_function(m, functions, r + dr, c + dc, FINDER_PATTERN[dr][dc])


def place_separators(m, functions):
    """Surround the three finder patterns with a light one-module border."""
    size = len(m)
    sep_coords = [
        *((i, 7) for i in range(8)), *((7, i) for i in range(8)),
        *((i, size - 8) for i in range(8)), *((7, size - 1 - i) for i in range(8)),
        *((size - 8, i) for i in range(8)), *((size - 1 - i, 7) for i in range(8)),
    ]
    for (r, c) in sep_coords:
        set_function(m, functions, r, c, 0)


def place_timing_patterns(m, functions):
    """Alternate dark/light along row 6 and column 6, dark on even indices."""
    size = len(m)
    for i in range(8, size - 8):
        value = 1 if i % 2 == 0 else 0
        set_function(m, functions, 6, i, value)
        set_function(m, functions, i, 6, value)


def place_alignment_pattern(m, functions, r, c):
    """
    Insert a 5x5 alignment pattern centred at (r, c).

    @param m: QR code matrix
    @param functions: Set of function module coordinates
    @param r: Centre row coordinate
    @param c: Centre column coordinate
    """
    for dr in range(-2, 3):
        for dc in range(-2, 3):
            set_function(m, functions, r + dr, c + dc, ALIGNMENT_PATTERN[dr + 2][dc + 2])


def place_alignment_patterns(m, functions, version: int):
    """
    Place every alignment pattern of a version, skipping the three centres
    that would overlap a finder pattern.

    @param m: QR code matrix
    @param functions: Set of function module coordinates
    @param version: Symbol version (1-40)
    """
    positions = ALIGNMENT_POSITIONS[version]
    if not positions:
        return
    first, last = positions[0], positions[-1]
    finder_corners = {(first, first), (first, last), (last, first)}
    for r in positions:
        for c in positions:
            if (r, c) not in finder_corners:
                place_alignment_pattern(m, functions, r, c)


def format_positions(size: int):
    """
    Coordinates of the two format information copies, MSB first.

    @param size: Symbol side length
    @return: Tuple of two 15-entry coordinate lists
    """
    pos1 = [*((8, i) for i in range(0, 6)), (8, 7), (8, 8), (7, 8), *((i, 8) for i in range(5, -1, -1))]
    pos2 = [*((size - 1 - i, 8) for i in range(0, 7)), *((8, size - 8 + i) for i in range(0, 8))]
    return pos1, pos2


def reserve_format_area(m, functions):
    """Claim the format information cells so data placement skips them."""
    for positions in format_positions(len(m)):
        for (r, c) in positions:
            set_function(m, functions, r, c, 0)


def format_bits(level: ErrorCorrectionLevel, mask_id: int) -> str:
    """
    BCH(15,5)-encode the level and mask, then apply the format XOR mask.

    @param level: Error correction level
    @param mask_id: Mask pattern (0-7)
    @return: 15-character bit string, MSB first
    """
    data = (level.format_bits << 3) | mask_id
    rem = data
    for _ in range(10):
        rem = (rem << 1) ^ ((rem >> 9) * FORMAT_GENERATOR)
    return format(((data << 10) | rem) ^ FORMAT_MASK, '015b')


def version_bits(version: int) -> str:
    """
    BCH(18,6)-encode a version number.

    @param version: Symbol version (7-40)
    @return: 18-character bit string, MSB first
    """
    rem = version
    for _ in range(12):
        rem = (rem << 1) ^ ((rem >> 11) * VERSION_GENERATOR)
    return format((version << 12) | rem, '018b')


def place_format_info(m, level: ErrorCorrectionLevel, mask_id: int):
    """
    Write format information (level and mask) into both reserved copies.

    @param m: QR code matrix
    @param level: Error correction level
    @param mask_id: Numeric identifier for mask pattern (0-7)
    """
    fmt = format_bits(level, mask_id)
    for positions in format_positions(len(m)):
        for idx, (r, c) in enumerate(positions):
            m[r][c] = int(fmt[idx])


def place_version_info(m, functions, version: int):
    """
    Write the two 6x3 version information blocks (versions 7 and up).

    @param m: QR code matrix
    @param functions: Set of function module coordinates
    @param version: Symbol version (1-40)
    """
    if version < 7:
        return
    size = len(m)
    bits = version_bits(version)
    for i in range(18):
        bit = int(bits[17 - i])
        a = size - 11 + i % 3
        b = i // 3
        set_function(m, functions, b, a, bit)
        set_function(m, functions, a, b, bit)


def build_function_template(version: int):
    """
    Lay out every function module of a version:
    - Finder patterns and separators
    - Timing patterns
    - Alignment patterns (version 2+)
    - Dark module
    - Reserved format area and version information (version 7+)

    @param version: Symbol version (1-40)
    @return: Tuple of (matrix, function module coordinate set)
    """
    size = symbol_size(version)
    m = initialise_matrix(size)
    functions = set()

    for (r, c) in [(0, 0), (0, size - 7), (size - 7, 0)]:
        place_finder_pattern(m, functions, r, c)
    place_separators(m, functions)
    place_timing_patterns(m, functions)
    place_alignment_patterns(m, functions, version)
    set_function(m, functions, size - 8, 8, 1)
    reserve_format_area(m, functions)
    place_version_info(m, functions, version)
    return m, functions


def map_data(m, functions, full_cw):
    """
    Map data and error correction codewords into the matrix using the
    zig-zag column-pair sweep from the bottom-right corner.

    Cells left over after the last codeword are the remainder bits and
    are set to 0.

    @param m: QR code matrix
    @param functions: Set of function module coordinates
    @param full_cw: Interleaved data and error correction codewords
    """
    bits = ''.join(f'{cw:08b}' for cw in full_cw)
    bit_idx = 0
    up = True
    col = len(m) - 1
    while col > 0:
        if col == 6:
            col -= 1
            continue
        rows = range(len(m) - 1, -1, -1) if up else range(len(m))
        for r in rows:
            for c in (col, col - 1):
                if (r, c) in functions:
                    continue
                if bit_idx < len(bits):
                    m[r][c] = int(bits[bit_idx])
                    bit_idx += 1
                else:
                    m[r][c] = 0
        up = not up
        col -= 2

    if bit_idx < len(bits):
        raise ValueError(f"{len(bits) - bit_idx} codeword bits did not fit in the matrix")


def apply_mask(m, functions, mask_id):
    """
    Return a copy of the matrix with a mask pattern XORed onto its data modules.

    @param m: QR code matrix
    @param functions: Set of function module coordinates
    @param mask_id: Numeric identifier for mask pattern (0-7)
    @return: Masked copy of the matrix
    """
    condition = MASK_CONDITIONS[mask_id]
    masked = [row[:] for row in m]
    size = len(m)
    for r in range(size):
        for c in range(size):
            if (r, c) not in functions and condition(r, c):
                masked[r][c] ^= 1
    return masked


def _count_overlapping(line: str, pattern: str) -> int:
    count = 0
    start = line.find(pattern)
    while start != -1:
        count += 1
        start = line.find(pattern, start + 1)
    return count


def score_penalty(m) -> int:
    """
    Calculate penalty score for QR code matrix based on ISO/IEC 18004 evaluation criteria.

    Evaluation rules:
    1. Runs of five or more same-colour modules in a row/column
    2. 2x2 blocks of same colour
    3. Finder-like patterns
    4. Dark/light module balance

    @param m: QR code matrix to evaluate
    @return: Calculated penalty score (lower is better)
    """
    size = len(m)
    score = 0
    lines = [list(row) for row in m] + [list(col) for col in zip(*m)]

    for line in lines:
        run_len = 1
        for i in range(1, size + 1):
            if i < size and line[i] == line[i - 1]:
                run_len += 1
                continue
            if run_len >= 5:
                score += 3 + (run_len - 5)
            run_len = 1

    for r in range(size - 1):
        row, below = m[r], m[r + 1]
        for c in range(size - 1):
            if row[c] == row[c + 1] == below[c] == below[c + 1]:
                score += 3

    for line in lines:
        text = ''.join('1' if cell else '0' for cell in line)
        for pattern in FINDER_LIKE_PATTERNS:
            score += 40 * _count_overlapping(text, pattern)

    dark = sum(1 for row in m for cell in row if cell)
    total = size * size
    k = abs(dark * 20 - total * 10) // total
    score += k * 10
    return score


def mask_penalties(m, functions, level: ErrorCorrectionLevel) -> list[int]:
    """
    Penalty of each of the 8 masks on a data-filled matrix, with the
    format information for that mask in place.

    @param m: QR code matrix with data mapped, unmasked
    @param functions: Set of function module coordinates
    @param level: Error correction level
    @return: List of 8 penalty scores indexed by mask
    """
    scores = []
    for mask_id in range(8):
        candidate = apply_mask(m, functions, mask_id)
        place_format_info(candidate, level, mask_id)
        scores.append(score_penalty(candidate))
    return scores


def build_matrix(full_cw, version: int, level: ErrorCorrectionLevel):
    """
    Build the finished symbol from the interleaved codeword stream.

    @param full_cw: Interleaved data and error correction codewords
    @param version: Symbol version (1-40)
    @param level: Error correction level
    @return: Tuple of (modules as tuple of bool tuples, chosen mask)
    """
    m, functions = build_function_template(version)
    map_data(m, functions, full_cw)

    # Try all 8 mask patterns and keep the lowest penalty; ties go to the lower index.
    scores = mask_penalties(m, functions, level)
    best_mask = min(range(8), key=lambda mask_id: scores[mask_id])
    logger.debug("Mask penalties %s, best mask %d", scores, best_mask)

    best_matrix = apply_mask(m, functions, best_mask)
    place_format_info(best_matrix, level, best_mask)
    return tuple(tuple(cell == 1 for cell in row) for row in best_matrix), best_mask
