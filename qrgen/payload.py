"""
Payload normalization.

Turns each supported input kind (plain text, URL, WiFi credentials, vCard
text, image bytes) into the single string that gets encoded.
"""

import base64
import logging
from enum import Enum
from pathlib import Path
from urllib.parse import urlsplit

from .errors import InvalidInput

logger = logging.getLogger(__name__)

DEFAULT_WIFI_SECURITY = "WPA"

IMAGE_MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
}

# Characters reserved by the WIFI: field syntax
WIFI_SPECIAL_CHARS = '\\;,:"'


class PayloadKind(Enum):
    TEXT = "text"
    URL = "url"
    WIFI = "wifi"
    VCARD = "vcard"


def normalize_text(text: str) -> str:
    """
    Accept plain text as-is. Whitespace is encoded like any other text.

    @param text: Text to encode
    @return: The unchanged text
    """
    if not text:
        raise InvalidInput("No input provided: payload is empty")
    return text


def is_valid_url(url: str) -> bool:
    """
    Structural URL check: a scheme and a host must both be present.

    @param url: URL string
    @return: True when the URL has a scheme and host
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return bool(parts.scheme and parts.hostname)


def normalize_url(url: str) -> str:
    """
    Validate a URL string. Only http(s) URLs are checked structurally,
    anything else is encoded literally.

    @param url: URL string to encode
    @return: The unchanged URL
    """
    url = normalize_text(url)
    if url.startswith(("http://", "https://")) and not is_valid_url(url):
        raise InvalidInput(f"invalid URL format: {url}")
    return url


def escape_wifi_field(value: str) -> str:
    """Backslash-escape the characters reserved by the WIFI: syntax."""
    return ''.join('\\' + ch if ch in WIFI_SPECIAL_CHARS else ch for ch in value)


def normalize_wifi(credentials: str, escape: bool = False) -> str:
    """
    Build a WiFi network join string from 'SSID:PASSWORD[:SECURITY]'.

    SSID and password are inserted verbatim unless escape is set, in which
    case reserved characters are backslash-escaped.

    @param credentials: Colon-separated SSID, password and optional security type
    @param escape: Escape reserved characters in SSID and password
    @return: String of the form WIFI:T:<SECURITY>;S:<SSID>;P:<PASSWORD>;H:false;
    """
    parts = credentials.split(":")
    if len(parts) < 2:
        raise InvalidInput("WiFi format should be 'SSID:PASSWORD' or 'SSID:PASSWORD:SECURITY'")

    ssid, password = parts[0], parts[1]
    security = parts[2].upper() if len(parts) >= 3 else DEFAULT_WIFI_SECURITY
    if len(parts) > 3:
        logger.warning("Ignoring extra WiFi fields after security type: %s", parts[3:])

    if escape:
        ssid = escape_wifi_field(ssid)
        password = escape_wifi_field(password)
    return f"WIFI:T:{security};S:{ssid};P:{password};H:false;"


def normalize_vcard(text: str) -> str:
    """
    Trim a vCard record read from a .vcf file.

    @param text: Raw vCard text
    @return: vCard text without surrounding whitespace
    """
    text = text.strip()
    if not text:
        raise InvalidInput("vCard is empty")
    if not text.upper().startswith("BEGIN:VCARD"):
        logger.warning("vCard text does not start with BEGIN:VCARD")
    return text


def image_data_uri(data: bytes, filename: str) -> str:
    """
    Wrap image bytes in a base64 data URI.

    @param data: Raw image file contents
    @param filename: File name, used only for its extension
    @return: String of the form data:<mime>;base64,<payload>
    """
    mime_type = IMAGE_MIME_TYPES.get(Path(filename).suffix.lower(), "image/png")
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def read_text_file(path) -> str:
    """
    Read a UTF-8 text file and strip surrounding whitespace.

    @param path: File to read
    @return: File contents
    """
    try:
        return Path(path).read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidInput(f"cannot read file {path}: {exc}") from exc


def read_image_file(path) -> str:
    """
    Read an image file and return it as a base64 data URI.

    @param path: Image file to read
    @return: data: URI string
    """
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise InvalidInput(f"cannot open image file {path}: {exc}") from exc
    return image_data_uri(data, str(path))


_NORMALIZERS = {
    PayloadKind.TEXT: normalize_text,
    PayloadKind.URL: normalize_url,
    PayloadKind.WIFI: normalize_wifi,
    PayloadKind.VCARD: normalize_vcard,
}


def normalize(kind: PayloadKind, value: str) -> str:
    """
    Normalize a payload of the given kind into the string to encode.

    @param kind: Input kind
    @param value: Raw input value
    @return: Non-empty payload string
    """
    payload = _NORMALIZERS[kind](value)
    return normalize_text(payload)
