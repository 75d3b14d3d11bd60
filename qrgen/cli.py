"""
Command line entry point for the qrgen QR code generator.

Handles argument parsing, input selection, overwrite confirmation and
reporting; the encoding itself lives in qrgen.generator.
"""

import argparse
import logging
import sys
from pathlib import Path

from .batch import process_batch
from .config import DEFAULT_OUTPUT, DEFAULT_QUALITY, DEFAULT_SIZE, MAX_SIZE, MIN_SIZE, VERSION, Config
from .errors import InvalidInput, QRGenError
from .generator import encode
from .payload import normalize_url, normalize_vcard, normalize_wifi, read_image_file, read_text_file
from .raster import PREVIEW_CELLS, preview_text, save_png
from .utils import confirm_overwrite, format_file_size, truncate

logger = logging.getLogger(__name__)

EPILOG = """\
examples:
  qrgen -t "Hello World!"
  qrgen -u "https://github.com/yourusername" -s 512 -o github.png
  qrgen -w "MyWiFi:password123:WPA" -o wifi.png
  qrgen -i logo.png -o image_qr.png
  qrgen --vcard contact.vcf -o contact.png
  qrgen -f urls.txt --batch
  qrgen -t "Preview Test" --preview

batch file format:
  one payload per line; blank lines and lines starting with # are skipped
"""


def parse_arguments(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="qrgen",
        description="Generate a QR code PNG from text, URLs, files, images, WiFi credentials or vCards.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    inputs = parser.add_argument_group("input options")
    inputs.add_argument("-t", "--text", help="Text to encode in QR code")
    inputs.add_argument("-u", "--url", help="URL to encode in QR code")
    inputs.add_argument("-f", "--file", help="File containing text to encode")
    inputs.add_argument("-i", "--image", help="Image file to encode as base64 data URI")
    inputs.add_argument("-w", "--wifi", help="WiFi credentials: 'SSID:PASSWORD[:SECURITY]'")
    inputs.add_argument("--vcard", help="vCard file (.vcf) to encode")
    inputs.add_argument("--batch", action="store_true",
                        help="Batch mode - one QR code per line of --file")

    outputs = parser.add_argument_group("output options")
    outputs.add_argument("-o", "--output", default=DEFAULT_OUTPUT,
                         help=f"Output file name (default: {DEFAULT_OUTPUT})")
    outputs.add_argument("-s", "--size", type=int, default=DEFAULT_SIZE,
                         help=f"QR code size in pixels (default: {DEFAULT_SIZE})")
    outputs.add_argument("-q", "--quality", default=DEFAULT_QUALITY,
                         help="Error correction: low/medium/high/highest (default: medium)")
    outputs.add_argument("--preview", action="store_true", help="Show QR preview in terminal")
    outputs.add_argument("--quiet", action="store_true", help="Quiet mode - no output messages")
    outputs.add_argument("--force", action="store_true", help="Overwrite existing output files without asking")
    outputs.add_argument("--wifi-escape", action="store_true",
                         help="Backslash-escape \\ ; , : \" in WiFi SSID and password")
    outputs.add_argument("--log-level", default="INFO",
                         choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
                         help="Logging verbosity (default: INFO)")

    parser.add_argument("-v", "--version", action="version", version=f"qrgen version {VERSION}")
    return parser.parse_args(argv)


def make_log_handlers():
    """
    Progress messages go to stdout, warnings and errors to stderr.

    @return: List of [stdout handler, stderr handler]
    """
    out_handler = logging.StreamHandler(sys.stdout)
    out_handler.addFilter(lambda record: record.levelno < logging.WARNING)
    err_handler = logging.StreamHandler(sys.stderr)
    err_handler.setLevel(logging.WARNING)
    return [out_handler, err_handler]


def get_input_content(config: Config) -> str:
    """
    Pick the payload from the configured inputs.

    Priority: vcard -> wifi -> image -> file -> url -> text.

    @param config: Parsed run configuration
    @return: Payload string to encode
    """
    if config.vcard:
        return normalize_vcard(read_text_file(config.vcard))
    if config.wifi:
        return normalize_wifi(config.wifi, escape=config.wifi_escape)
    if config.image:
        return read_image_file(config.image)
    if config.file:
        return read_text_file(config.file)
    if config.url:
        return normalize_url(config.url)
    if config.text:
        return config.text
    raise InvalidInput("No input provided. Use -t, -u, or -f flag.")


def show_preview(symbol, content: str):
    """
    Print a framed, reduced preview of the symbol and the content it holds.

    @param symbol: Encoded symbol
    @param content: Encoded payload, shown truncated under the preview
    """
    lines = preview_text(symbol, PREVIEW_CELLS).split('\n')
    width = max(len(line) for line in lines) + 2
    print("\nQR Preview:")
    print('╭' + '─' * width + '╮')
    for line in lines:
        print('│ ' + line + ' │')
    print('╰' + '─' * width + '╯')
    print(f"Content: {truncate(content, 50)}\n")


def generate(config: Config, content: str, level) -> Path:
    """
    Encode the content and write the PNG named in the configuration.

    @param config: Run configuration
    @param content: Payload string
    @param level: Error correction level
    @return: Path of the written file
    """
    symbol = encode(content, level)
    if config.preview:
        show_preview(symbol, content)

    output = Path(config.output)
    confirm_overwrite(output, config.force)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise QRGenError(f"cannot create directory {output.parent}: {exc}") from exc

    save_png(symbol, output, config.size)
    logger.debug("Wrote version %d symbol with mask %d to %s", symbol.version, symbol.mask, output)
    return output


def main(argv=None) -> int:
    args = parse_arguments(argv)
    config = Config(**vars(args))

    level_name = "WARNING" if config.quiet else config.log_level
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.INFO),
        format="%(message)s",
        handlers=make_log_handlers(),
    )
    level = config.level

    if not config.size_is_valid():
        logger.error("Error: Size must be between %d and %d pixels", MIN_SIZE, MAX_SIZE)
        return 1

    try:
        if config.batch:
            if not config.file:
                raise InvalidInput("Batch mode needs an input file (-f/--file)")
            results = process_batch(config.file, ".", config.size, level, force=config.force)
            failed = [result for result in results if not result.ok]
            if failed:
                logger.warning("%d of %d lines failed", len(failed), len(results))
            return 0

        content = get_input_content(config)
        output = generate(config, content, level)
    except QRGenError as exc:
        logger.error("Error: %s", exc)
        return 1

    logger.info("QR code successfully generated!")
    logger.info("Output: %s", output)
    logger.info("Size: %dx%d pixels", config.size, config.size)
    logger.info("Quality: %s", config.quality)
    logger.info("File size: %s", format_file_size(output.stat().st_size))
    return 0


if __name__ == '__main__':
    sys.exit(main())
