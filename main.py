"""
OCR Overlay — CLI Entry Point

Usage:
    python main.py -i page.xml --width 1248 --height 1925 -o page.json
    python main.py -i page.hocr --thumbnail page.jpg -v
    python main.py -i annotations.json --iiif
"""

import argparse
import json
import logging
import os
import sys
import time

from ocr_overlay.color_detector import get_page_colors
from ocr_overlay.dispatcher import parse_ocr
from ocr_overlay.iiif_parser import parse_iiif_annotations
from ocr_overlay.models import Size
from ocr_overlay.thumbnail import DEFAULT_THUMBNAIL_SIZE, load_thumbnail_pixels


def setup_logging(verbose: bool = False):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s", datefmt="%H:%M:%S")


def _load_annotations(path: str) -> list[dict]:
    with open(path, encoding="utf-8") as fp:
        data = json.load(fp)
    if isinstance(data, list):
        return data
    # IIIF v2 AnnotationList or W3C AnnotationPage
    return data.get("resources") or data.get("items") or []


def run(input_path: str, output_path: str | None = None, reference_size: Size | None = None,
        iiif: bool = False, thumbnail: str | None = None, thumbnail_size: int = DEFAULT_THUMBNAIL_SIZE) -> int:
    logger = logging.getLogger("ocr_overlay")
    start = time.time()

    if iiif:
        page = parse_iiif_annotations(_load_annotations(input_path), reference_size)
    else:
        with open(input_path, "rb") as fp:
            page = parse_ocr(fp.read(), reference_size)
    if page is None:
        logger.error(f"Could not parse OCR from {input_path}")
        return 1
    logger.info(f"Parsed {page.line_count} lines, page size {page.width:.1f}x{page.height:.1f}")
    result = page.to_dict()

    if thumbnail:
        colors = get_page_colors(load_thumbnail_pixels(thumbnail, thumbnail_size))
        logger.info(f"Page colors: text={colors.text_color}, background={colors.bg_color}")
        result["colors"] = colors.to_dict()

    out = json.dumps(result, ensure_ascii=False, indent=2)
    if output_path:
        out_dir = os.path.dirname(output_path)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as fp:
            fp.write(out)
        logger.info(f"Output saved to: {output_path}")
    else:
        print(out)
    logger.debug(f"Completed in {time.time() - start:.2f}s")
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Convert ALTO, hOCR or IIIF annotation OCR into a unified page/line/span JSON model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Examples:\n  python main.py -i page.xml --width 1248 --height 1925\n"
               "  python main.py -i annotations.json --iiif --thumbnail page.jpg")
    parser.add_argument("-i", "--input", required=True, help="Path to ALTO/hOCR markup or IIIF annotation JSON")
    parser.add_argument("-o", "--output", help="Path for the JSON output (default: stdout)")
    parser.add_argument("--width", type=float, help="Reference image width in pixels")
    parser.add_argument("--height", type=float, help="Reference image height in pixels")
    parser.add_argument("--iiif", action="store_true", help="Input is a IIIF annotation list")
    parser.add_argument("--thumbnail", help="Page image to detect text/background colors from")
    parser.add_argument("--thumbnail-size", type=int, default=DEFAULT_THUMBNAIL_SIZE,
                        help=f"Longest side of the rendered thumbnail (default: {DEFAULT_THUMBNAIL_SIZE})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    args = parser.parse_args()
    setup_logging(args.verbose)
    for path in (args.input, args.thumbnail):
        if path and not os.path.isfile(path):
            print(f"Error: Input file not found: {path}", file=sys.stderr)
            sys.exit(1)
    if (args.width is None) != (args.height is None):
        parser.error("--width and --height must be given together")
    reference_size = Size(args.width, args.height) if args.width is not None else None
    sys.exit(run(args.input, args.output, reference_size=reference_size, iiif=args.iiif,
                 thumbnail=args.thumbnail, thumbnail_size=args.thumbnail_size))


if __name__ == "__main__":
    main()
