"""
The encode pipeline: payload -> plan -> data codewords -> error correction
-> finished symbol matrix.

Every call builds its own state; nothing is shared between calls.
"""

import logging
from dataclasses import dataclass

from .encoder import make_data_codewords
from .matrix import build_matrix
from .planner import plan
from .reed_solomon import add_error_correction
from .tables import ErrorCorrectionLevel, Mode, symbol_size

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Symbol:
    """
    A finished QR symbol.

    Iterating or indexing a Symbol yields its rows of modules
    (True = dark), so it can be used wherever a matrix is expected.
    """

    modules: tuple
    version: int
    level: ErrorCorrectionLevel
    mode: Mode
    mask: int

    @property
    def size(self) -> int:
        return symbol_size(self.version)

    def __len__(self):
        return len(self.modules)

    def __iter__(self):
        return iter(self.modules)

    def __getitem__(self, index):
        return self.modules[index]


def encode(payload: str, level: ErrorCorrectionLevel = ErrorCorrectionLevel.MEDIUM) -> Symbol:
    """
    Encode a payload into a QR symbol.

    @param payload: Text to encode (non-empty)
    @param level: Error correction level
    @return: The finished Symbol
    """
    # Step 1. Choose mode and the smallest version that fits.
    chosen = plan(payload, level)

    # Step 2. Pack the payload into data codewords.
    data_cw = make_data_codewords(payload, chosen)
    logger.debug("Data codewords (%d): %s", len(data_cw), data_cw)

    # Step 3. Generate error correction codewords and interleave.
    full_cw = add_error_correction(data_cw, chosen.version, level)
    logger.debug("Final codewords (%d): %s", len(full_cw), full_cw)

    # Step 4. Lay out the matrix and pick the best mask.
    modules, mask = build_matrix(full_cw, chosen.version, level)
    logger.debug("Built version %d symbol (%dx%d), mask %d",
                 chosen.version, len(modules), len(modules), mask)

    return Symbol(modules=modules, version=chosen.version, level=level, mode=chosen.mode, mask=mask)
