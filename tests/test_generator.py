import pytest

from qr_reader import read_format, read_symbol
from qrgen import ErrorCorrectionLevel, InvalidInput, Mode, PayloadTooLarge, Symbol, encode
from qrgen.tables import symbol_size

LEVELS = list(ErrorCorrectionLevel)


def test_hello_medium_scenario():
    symbol = encode("HELLO", ErrorCorrectionLevel.MEDIUM)
    assert isinstance(symbol, Symbol)
    assert symbol.version == 1
    assert symbol.mode is Mode.ALPHANUMERIC
    assert symbol.size == 21
    assert len(symbol) == 21
    assert all(len(row) == 21 for row in symbol)
    assert all(isinstance(cell, bool) for row in symbol for cell in row)


def test_default_level_is_medium():
    assert encode("HELLO").level is ErrorCorrectionLevel.MEDIUM


def test_encode_is_deterministic():
    first = encode("https://example.com/path?q=1", ErrorCorrectionLevel.HIGH)
    second = encode("https://example.com/path?q=1", ErrorCorrectionLevel.HIGH)
    assert first.modules == second.modules
    assert first.mask == second.mask


def test_empty_payload_is_invalid():
    with pytest.raises(InvalidInput):
        encode("")


def test_whitespace_payload_round_trips():
    symbol = encode("   ")
    assert symbol.mode is Mode.ALPHANUMERIC
    assert read_symbol(symbol)[0] == "   "


def test_oversized_payload():
    with pytest.raises(PayloadTooLarge):
        encode("x" * 3000, ErrorCorrectionLevel.LOW)


@pytest.mark.parametrize("level", LEVELS)
@pytest.mark.parametrize("payload", [
    "HELLO",
    "HELLO WORLD",
    "0123456789",
    "https://github.com/yourusername",
    "WIFI:T:WPA;S:MyWiFi;P:pass123;H:false;",
    "Grüße aus Köln ✓",
])
def test_round_trip(payload, level):
    symbol = encode(payload, level)
    decoded, read_level, read_mask, version = read_symbol(symbol)
    assert decoded == payload
    assert read_level is level
    assert read_mask == symbol.mask
    assert version == symbol.version
    assert len(symbol) == symbol_size(symbol.version)


@pytest.mark.parametrize("payload, level", [
    ("7" * 300, ErrorCorrectionLevel.MEDIUM),
    ("THE QUICK BROWN FOX JUMPS OVER THE LAZY DOG " * 6, ErrorCorrectionLevel.HIGH),
    ("BEGIN:VCARD\nVERSION:3.0\nFN:Jane Doe\nTEL:+1234567890\nEND:VCARD\n" * 4, ErrorCorrectionLevel.HIGHEST),
])
def test_round_trip_larger_versions(payload, level):
    symbol = encode(payload, level)
    assert symbol.version >= 7
    assert read_symbol(symbol)[0] == payload


def test_largest_low_byte_payload_encodes_at_version_40():
    payload = "a" * 2953
    symbol = encode(payload, ErrorCorrectionLevel.LOW)
    assert symbol.version == 40
    assert len(symbol) == 177
    assert read_symbol(symbol)[0] == payload


def test_format_information_copies_agree():
    symbol = encode("HELLO", ErrorCorrectionLevel.MEDIUM)
    size = len(symbol)
    first = [symbol[8][i] for i in (0, 1, 2, 3, 4, 5, 7, 8)] + [symbol[i][8] for i in (7, 5, 4, 3, 2, 1, 0)]
    second = [symbol[size - 1 - i][8] for i in range(7)] + [symbol[8][size - 8 + i] for i in range(8)]
    assert first == second
    assert read_format(symbol) == (ErrorCorrectionLevel.MEDIUM, symbol.mask)


def test_symbol_rows_are_immutable():
    symbol = encode("HELLO")
    with pytest.raises(TypeError):
        symbol[0][0] = False
