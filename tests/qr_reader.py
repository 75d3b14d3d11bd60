"""
Minimal reader for clean, axis-aligned symbols produced by qrgen.

Used by the tests as a round-trip oracle: reads the format information,
removes the mask, collects the codewords in placement order, splits them
back into blocks, runs them through reedsolo and parses the data segment.
"""

from reedsolo import RSCodec

from qrgen.matrix import build_function_template
from qrgen.tables import ErrorCorrectionLevel, block_structure, total_codewords

LEVELS_BY_BITS = {
    0b01: ErrorCorrectionLevel.LOW,
    0b00: ErrorCorrectionLevel.MEDIUM,
    0b11: ErrorCorrectionLevel.HIGH,
    0b10: ErrorCorrectionLevel.HIGHEST,
}

ALNUM = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"

MASKS = (
    lambda i, j: (i + j) % 2 == 0,
    lambda i, j: i % 2 == 0,
    lambda i, j: j % 3 == 0,
    lambda i, j: (i + j) % 3 == 0,
    lambda i, j: (i // 2 + j // 3) % 2 == 0,
    lambda i, j: (i * j) % 2 + (i * j) % 3 == 0,
    lambda i, j: ((i * j) % 2 + (i * j) % 3) % 2 == 0,
    lambda i, j: ((i + j) % 2 + (i * j) % 3) % 2 == 0,
)


def read_format(modules):
    """Return (level, mask) from the copy of the format bits next to the top-left finder."""
    cells = [(8, 0), (8, 1), (8, 2), (8, 3), (8, 4), (8, 5), (8, 7), (8, 8),
             (7, 8), (5, 8), (4, 8), (3, 8), (2, 8), (1, 8), (0, 8)]
    value = 0
    for r, c in cells:
        value = (value << 1) | (1 if modules[r][c] else 0)
    data = (value ^ 0x5412) >> 10
    return LEVELS_BY_BITS[data >> 3], data & 7


def read_codewords(modules, version, mask):
    size = len(modules)
    _, functions = build_function_template(version)
    bits = []
    for right in range(size - 1, 0, -2):
        if right <= 6:
            right -= 1
        upward = ((right + 1) & 2) == 0
        for vert in range(size):
            row = size - 1 - vert if upward else vert
            for col in (right, right - 1):
                if (row, col) in functions:
                    continue
                bit = 1 if modules[row][col] else 0
                if MASKS[mask](row, col):
                    bit ^= 1
                bits.append(bit)

    codewords = []
    for i in range(total_codewords(version)):
        value = 0
        for bit in bits[i * 8:(i + 1) * 8]:
            value = (value << 1) | bit
        codewords.append(value)
    return codewords


def deinterleave(codewords, version, level):
    structure = block_structure(version, level)
    lengths = structure.data_lengths()
    data = [[] for _ in lengths]
    pos = 0
    for i in range(max(lengths)):
        for b, length in enumerate(lengths):
            if i < length:
                data[b].append(codewords[pos])
                pos += 1
    ec = [[] for _ in lengths]
    for _ in range(structure.ec_per_block):
        for b in range(len(lengths)):
            ec[b].append(codewords[pos])
            pos += 1
    return data, ec, structure.ec_per_block


def parse_segment(data, version):
    bits = ''.join(f'{b:08b}' for b in data)
    pos = 0

    def take(n):
        nonlocal pos
        value = int(bits[pos:pos + n], 2)
        pos += n
        return value

    mode = take(4)
    tier = 0 if version <= 9 else (1 if version <= 26 else 2)
    if mode == 0b0001:
        count = take((10, 12, 14)[tier])
        digits = []
        while count >= 3:
            digits.append(f'{take(10):03d}')
            count -= 3
        if count == 2:
            digits.append(f'{take(7):02d}')
        elif count == 1:
            digits.append(f'{take(4):d}')
        return ''.join(digits)
    if mode == 0b0010:
        count = take((9, 11, 13)[tier])
        chars = []
        while count >= 2:
            value = take(11)
            chars.append(ALNUM[value // 45] + ALNUM[value % 45])
            count -= 2
        if count:
            chars.append(ALNUM[take(6)])
        return ''.join(chars)
    if mode == 0b0100:
        count = take((8, 16, 16)[tier])
        return bytes(take(8) for _ in range(count)).decode('utf-8')
    raise ValueError(f"unsupported mode indicator {mode:04b}")


def read_symbol(modules):
    """
    Decode a symbol back to its payload.

    @param modules: Rows of modules (truthy = dark)
    @return: Tuple of (payload, level, mask, version)
    """
    version = (len(modules) - 17) // 4
    level, mask = read_format(modules)
    codewords = read_codewords(modules, version, mask)
    data_blocks, ec_blocks, num_ec = deinterleave(codewords, version, level)

    rs = RSCodec(num_ec)
    data = []
    for block, ec in zip(data_blocks, ec_blocks):
        corrected = rs.decode(bytes(block + ec))[0]
        data.extend(corrected)
    return parse_segment(data, version), level, mask, version
