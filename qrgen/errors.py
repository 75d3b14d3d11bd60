"""
Exceptions raised by the QR code pipeline.

Every failure is terminal for the encode call that raised it.
"""


class QRGenError(Exception):
    """Base class for all QR generation errors."""


class InvalidInput(QRGenError):
    """Raised when a payload is empty or malformed (WiFi tuple, URL, file)."""


class PayloadTooLarge(QRGenError):
    """Raised when the payload exceeds the version 40 capacity at the requested level."""


class SizeTooSmall(QRGenError):
    """Raised when the requested image size leaves no pixels for a module."""


class RasterError(QRGenError):
    """Raised when the image buffer cannot be built or written."""


class OperationCancelled(QRGenError):
    """Raised when the user declines to overwrite an existing output file."""
