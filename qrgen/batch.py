"""
Batch mode: one QR code per line of an input file.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import DEFAULT_SIZE
from .errors import InvalidInput, QRGenError
from .generator import encode
from .raster import save_png
from .tables import ErrorCorrectionLevel
from .utils import confirm_overwrite

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchResult:
    line_number: int
    payload: str
    output: Path
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def iter_batch_lines(lines):
    """
    Yield the payload lines of a batch file, skipping blanks and '#' comments.

    @param lines: Iterable of raw lines
    @return: Generator of stripped payload strings
    """
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        yield line


def process_batch(path, output_dir=".", size: int = DEFAULT_SIZE,
                  level: ErrorCorrectionLevel = ErrorCorrectionLevel.MEDIUM,
                  force: bool = False) -> list[BatchResult]:
    """
    Encode every payload line of a batch file into batch_<n>.png.

    A failing line is logged and recorded; the remaining lines still run.
    Existing files are only replaced after confirmation unless force is set.

    @param path: Batch file path
    @param output_dir: Directory receiving the PNG files
    @param size: Image size in pixels
    @param level: Error correction level
    @param force: Overwrite existing batch_<n>.png files without asking
    @return: One BatchResult per processed line
    """
    try:
        with open(path, encoding="utf-8") as f:
            lines = list(iter_batch_lines(f))
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidInput(f"cannot open batch file {path}: {exc}") from exc

    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    results = []
    for line_number, payload in enumerate(lines, start=1):
        output = out_dir / f"batch_{line_number}.png"
        try:
            symbol = encode(payload, level)
            confirm_overwrite(output, force)
            save_png(symbol, output, size)
        except QRGenError as exc:
            logger.error("Error processing line %d: %s", line_number, exc)
            results.append(BatchResult(line_number, payload, output, str(exc)))
            continue
        logger.info("Generated: %s", output)
        results.append(BatchResult(line_number, payload, output))

    logger.info("Batch processing completed. Generated %d QR codes.",
                sum(1 for result in results if result.ok))
    return results
