"""
Defaults and run configuration for the qrgen command line.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .tables import ErrorCorrectionLevel

logger = logging.getLogger(__name__)

VERSION = "1.0.0"

DEFAULT_SIZE = 256
DEFAULT_OUTPUT = "qr.png"
DEFAULT_QUALITY = "medium"
MIN_SIZE = 1
MAX_SIZE = 2048

QUALITY_LEVELS = {
    "low": ErrorCorrectionLevel.LOW,
    "l": ErrorCorrectionLevel.LOW,
    "medium": ErrorCorrectionLevel.MEDIUM,
    "m": ErrorCorrectionLevel.MEDIUM,
    "high": ErrorCorrectionLevel.HIGH,
    "h": ErrorCorrectionLevel.HIGH,
    "highest": ErrorCorrectionLevel.HIGHEST,
    "hh": ErrorCorrectionLevel.HIGHEST,
}


def parse_level(quality: str) -> ErrorCorrectionLevel:
    """
    Map a quality name to an error correction level.
    Unknown names fall back to medium.

    @param quality: low/l, medium/m, high/h or highest/hh (any case)
    @return: ErrorCorrectionLevel
    """
    level = QUALITY_LEVELS.get((quality or "").strip().lower())
    if level is None:
        logger.warning("Unknown quality %r, using medium", quality)
        return ErrorCorrectionLevel.MEDIUM
    return level


@dataclass
class Config:
    text: Optional[str] = None
    url: Optional[str] = None
    file: Optional[str] = None
    image: Optional[str] = None
    wifi: Optional[str] = None
    vcard: Optional[str] = None
    output: str = DEFAULT_OUTPUT
    size: int = DEFAULT_SIZE
    quality: str = DEFAULT_QUALITY
    batch: bool = False
    preview: bool = False
    quiet: bool = False
    force: bool = False
    wifi_escape: bool = False
    log_level: str = "INFO"

    @property
    def level(self) -> ErrorCorrectionLevel:
        return parse_level(self.quality)

    def size_is_valid(self) -> bool:
        return MIN_SIZE <= self.size <= MAX_SIZE
