"""
Utility functions for QR code generation.

Includes bit string conversion, human-readable formatting helpers and the
overwrite confirmation shared by single and batch output.
"""

from pathlib import Path

from .errors import OperationCancelled


def to_bitstring(data: bytes) -> str:
    """
    Convert a bytes object to a continuous bit string representation.

    @param data: Binary data to convert
    @return: String of binary digits representing the input data
    """
    return ''.join(f'{b:08b}' for b in data)


def int_to_bits(value: int, length: int) -> str:
    """
    Render an integer as a fixed-width, MSB-first bit string.

    @param value: Non-negative integer that fits in length bits
    @param length: Number of bits to emit
    @return: String of binary digits
    """
    return format(value, f'0{length}b') if length else ''


def bits_to_codewords(bitstream: str) -> list[int]:
    """
    Split a bit string whose length is a multiple of 8 into byte values.

    @param bitstream: String of binary digits
    @return: List of codewords (0-255)
    """
    return [int(bitstream[i:i+8], 2) for i in range(0, len(bitstream), 8)]


def format_file_size(size: int) -> str:
    if size < 1024:
        return f"{size} bytes"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def truncate(text: str, max_len: int) -> str:
    """Shorten text to max_len characters, marking the cut with '...'."""
    if len(text) <= max_len:
        return text
    return text[:max_len] + "..."


def confirm_overwrite(path: Path, force: bool = False):
    """
    Ask before replacing an existing output file.

    @param path: Output path
    @param force: Skip the question
    """
    path = Path(path)
    if force or not path.exists():
        return
    response = input(f"File {path} already exists. Overwrite? (y/N): ").strip().lower()
    if response not in ("y", "yes"):
        raise OperationCancelled(f"operation cancelled, kept {path}")
