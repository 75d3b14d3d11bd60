"""
Rendering of finished symbols: square PNG images via Pillow and a
reduced block-character preview for terminals.
"""

import io
import logging

from PIL import Image, ImageDraw

from .errors import RasterError, SizeTooSmall

logger = logging.getLogger(__name__)

QUIET_ZONE = 4
PREVIEW_CELLS = 15

DARK = 0
LIGHT = 255


def module_pixels(side: int, size: int, quiet_zone: int = QUIET_ZONE) -> int:
    """
    Pixel width of one module when a symbol plus quiet zone fills size pixels.

    @param side: Symbol side length in modules
    @param size: Target image width in pixels
    @param quiet_zone: Light border width in modules
    @return: Pixels per module (at least 1)
    """
    scale = size // (side + 2 * quiet_zone)
    if scale < 1:
        raise SizeTooSmall(
            f"{size}px is too small for a {side}-module symbol with a "
            f"{quiet_zone}-module quiet zone (needs at least {side + 2 * quiet_zone}px)"
        )
    return scale


def rasterize(matrix, size: int, quiet_zone: int = QUIET_ZONE) -> Image.Image:
    """
    Draw the symbol into a size x size greyscale image.

    The symbol and its quiet zone are centred; leftover pixels from the
    integer module scale stay light.

    @param matrix: Rows of modules (truthy = dark)
    @param size: Image width and height in pixels
    @param quiet_zone: Light border width in modules
    @return: Pillow image in mode "L"
    """
    side = len(matrix)
    scale = module_pixels(side, size, quiet_zone)
    offset = (size - (side + 2 * quiet_zone) * scale) // 2 + quiet_zone * scale

    try:
        img = Image.new("L", (size, size), LIGHT)
        draw = ImageDraw.Draw(img)
        for r, row in enumerate(matrix):
            for c, dark in enumerate(row):
                if dark:
                    x = offset + c * scale
                    y = offset + r * scale
                    draw.rectangle([x, y, x + scale - 1, y + scale - 1], fill=DARK)
    except (ValueError, MemoryError) as exc:
        raise RasterError(f"cannot build {size}x{size} image: {exc}") from exc

    logger.debug("Rasterized %d modules at %dpx per module into %dx%d image", side, scale, size, size)
    return img


def to_png_bytes(matrix, size: int, quiet_zone: int = QUIET_ZONE) -> bytes:
    """
    Render the symbol and return PNG-encoded bytes.

    @param matrix: Rows of modules (truthy = dark)
    @param size: Image width and height in pixels
    @param quiet_zone: Light border width in modules
    @return: PNG file contents
    """
    img = rasterize(matrix, size, quiet_zone)
    buffer = io.BytesIO()
    try:
        img.save(buffer, format="PNG")
    except (OSError, ValueError) as exc:
        raise RasterError(f"cannot encode PNG: {exc}") from exc
    return buffer.getvalue()


def save_png(matrix, filename, size: int, quiet_zone: int = QUIET_ZONE):
    """
    Save the symbol as a PNG image using Pillow.

    @param matrix: Rows of modules (truthy = dark)
    @param filename: Path or binary file object
    @param size: Image width and height in pixels
    @param quiet_zone: Light border width in modules
    """
    img = rasterize(matrix, size, quiet_zone)
    try:
        img.save(filename, format="PNG")
    except (OSError, ValueError) as exc:
        raise RasterError(f"cannot write QR code to {filename}: {exc}") from exc


def preview_text(matrix, max_cells: int = PREVIEW_CELLS, fg_char: str = '██', bg_char: str = '  ',
                 quiet_zone: int = QUIET_ZONE) -> str:
    """
    Nearest-neighbour downsample of the symbol and its quiet zone for
    terminal display.

    @param matrix: Rows of modules (truthy = dark)
    @param max_cells: Approximate number of cells per side
    @param fg_char: Text for a dark module
    @param bg_char: Text for a light module
    @param quiet_zone: Light border width in modules
    @return: Newline-separated preview lines
    """
    side = len(matrix)
    full = side + 2 * quiet_zone
    step = max(1, full // max_cells) if max_cells > 0 else 1

    def is_dark(r, c):
        r -= quiet_zone
        c -= quiet_zone
        return 0 <= r < side and 0 <= c < side and matrix[r][c]

    lines = []
    for r in range(0, full, step):
        lines.append(''.join(fg_char if is_dark(r, c) else bg_char for c in range(0, full, step)))
    return '\n'.join(lines)
