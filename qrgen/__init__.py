"""
qrgen: QR code generation from scratch.

Encodes text payloads into QR symbols (mode selection, Reed-Solomon error
correction, matrix construction and masking per ISO/IEC 18004) and renders
them as PNG images or terminal previews.
"""

from .errors import (
    InvalidInput, OperationCancelled, PayloadTooLarge, QRGenError, RasterError, SizeTooSmall,
)
from .generator import Symbol, encode
from .payload import PayloadKind, normalize
from .raster import preview_text, rasterize, save_png, to_png_bytes
from .tables import ErrorCorrectionLevel, Mode

__version__ = "1.0.0"
