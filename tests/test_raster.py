import io

import pytest
from PIL import Image

from qrgen import RasterError, SizeTooSmall, encode, preview_text, rasterize, save_png, to_png_bytes
from qrgen.raster import module_pixels


@pytest.fixture
def hello():
    return encode("HELLO")


def test_pixel_size_one_is_too_small(hello):
    with pytest.raises(SizeTooSmall):
        rasterize(hello, 1)


def test_module_pixels():
    assert module_pixels(21, 290) == 10
    assert module_pixels(21, 29) == 1
    assert module_pixels(21, 256) == 8
    with pytest.raises(SizeTooSmall):
        module_pixels(21, 28)


def test_image_is_requested_size(hello):
    for size in (29, 100, 256, 1000):
        img = rasterize(hello, size)
        assert img.size == (size, size)


def test_modules_are_drawn_at_scale(hello):
    img = rasterize(hello, 290)
    # 10px per module, 40px quiet zone
    assert img.getpixel((39, 39)) == 255
    assert img.getpixel((40, 40)) == 0
    for r in range(21):
        for c in range(21):
            expected = 0 if hello[r][c] else 255
            assert img.getpixel((40 + c * 10 + 5, 40 + r * 10 + 5)) == expected


def test_leftover_pixels_are_split_around_the_symbol(hello):
    img = rasterize(hello, 256)
    # 8px per module, 232px used, 12px spare on each side plus a 32px quiet zone
    assert img.getpixel((43, 43)) == 255
    assert img.getpixel((44, 44)) == 0


def test_custom_quiet_zone(hello):
    img = rasterize(hello, 21, quiet_zone=0)
    assert img.getpixel((0, 0)) == 0


def test_png_bytes(hello):
    data = to_png_bytes(hello, 128)
    assert data[:8] == b'\x89PNG\r\n\x1a\n'
    with Image.open(io.BytesIO(data)) as img:
        assert img.size == (128, 128)


def test_save_png(tmp_path, hello):
    path = tmp_path / "qr.png"
    save_png(hello, path, 256)
    with Image.open(path) as img:
        assert img.format == "PNG"
        assert img.size == (256, 256)


def test_save_png_to_missing_directory_raises_raster_error(tmp_path, hello):
    with pytest.raises(RasterError):
        save_png(hello, tmp_path / "missing" / "qr.png", 256)


def test_preview_small_symbol_keeps_every_module(hello):
    lines = preview_text(hello).split('\n')
    # 21 modules plus a 4-module border on each side
    assert len(lines) == 29
    assert all(len(line) == 58 for line in lines)
    assert lines[0] == '  ' * 29
    assert lines[4].startswith('  ' * 4 + '██' * 7 + '  ')


def test_preview_without_quiet_zone(hello):
    lines = preview_text(hello, quiet_zone=0).split('\n')
    assert len(lines) == 21
    assert all(len(line) == 42 for line in lines)
    assert lines[0].startswith('██' * 7 + '  ')


def test_preview_downsamples_large_symbol():
    symbol = encode("x" * 100)
    full = len(symbol) + 8
    step = full // 15
    lines = preview_text(symbol, 15).split('\n')
    assert len(lines) == len(range(0, full, step))
    assert len(lines) <= 2 * 15
    assert lines[0].strip() == ''
