"""Contact Sheet: printable 120 x 120 mm index sheets for film scans.

Scans a directory for JPEGs, asks for the roll details and writes a
6 x 6 contact sheet next to the scans.

Usage:
    contact-sheet ./my-scans
    contact-sheet ./my-scans --roll CS-001 --date 2024 --no-prompt
"""

import argparse
import logging
import os
import sys
import time

from compositor import SheetCompositor
from models import (
    SheetConfig, SourceImage, MetadataRecord, ContactSheetError, MAX_IMAGES, JPEG_EXTENSIONS,
)

logger = logging.getLogger(__name__)

OUTPUT_PREFIX = "contact-sheet-"

PROMPTS = (
    ('serial_number', "Film roll number: "),
    ('laboratory', "Scanned by: "),
    ('date', "Approximate date of photos: "),
    ('notes', "Notes: "),
)


# === Collaborators ===

def discover_images(directory, sort: bool = False) -> list[SourceImage]:
    """List the JPEG files directly inside *directory*.

    Subdirectories are not searched, and sheets written by earlier runs
    (contact-sheet-*.jpg) are skipped. Files come back in the order the
    filesystem yields them unless *sort* is set.
    """
    names = os.listdir(directory)
    if sort:
        names.sort()
    found = []
    for name in names:
        path = os.path.join(directory, name)
        if name.startswith(OUTPUT_PREFIX):
            logger.debug("Skipping earlier contact sheet %s", name)
            continue
        if os.path.splitext(name)[1].lower() in JPEG_EXTENSIONS and os.path.isfile(path):
            found.append(SourceImage.from_path(path))
    return found


def cap_images(images: list[SourceImage], limit: int = MAX_IMAGES) -> list[SourceImage]:
    """Keep only the first *limit* images, warning about the rest."""
    if len(images) > limit:
        print(f"Only the first {limit} images will be processed "
              f"({len(images) - limit} ignored)")
    return images[:limit]


def prompt_metadata(ask=None) -> MetadataRecord:
    """Ask for the four footer fields; blank answers are left out."""
    ask = ask or input
    print("Please provide the following information")
    print("(press Enter to skip any field):\n")
    answers = {name: ask(question) for name, question in PROMPTS}
    return MetadataRecord(**answers)


def default_output_path(directory) -> str:
    return os.path.join(directory, f"{OUTPUT_PREFIX}{int(time.time() * 1000)}.jpg")


# === Entry Point ===

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Printable contact sheet generator for photographic film scans")
    parser.add_argument("directory", help="Directory containing the JPEG scans")
    parser.add_argument("-o", "--output", default=None,
                        help="Output file (default: contact-sheet-<timestamp>.jpg in the directory)")
    parser.add_argument("--roll", default=None, help="Film roll number")
    parser.add_argument("--lab", default=None, help="Who scanned the roll")
    parser.add_argument("--date", default=None, help="Approximate date of the photos")
    parser.add_argument("--notes", default=None, help="Free-form notes")
    parser.add_argument("--no-prompt", action="store_true",
                        help="Do not ask for missing details interactively")
    parser.add_argument("--sort", action="store_true",
                        help="Order images by filename instead of directory order")
    parser.add_argument("--workers", type=int, default=1,
                        help="Threads used to decode thumbnails (default: 1)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING,
                        format="%(levelname)s: %(message)s")

    config = SheetConfig()
    directory = os.path.abspath(args.directory)
    if not os.path.isdir(directory):
        print(f"Error: {args.directory} is not an accessible directory", file=sys.stderr)
        return 1

    print(f"Scanning directory: {directory}")
    images = discover_images(directory, sort=args.sort)
    if not images:
        print("Error: No JPEG images found in directory", file=sys.stderr)
        return 1
    print(f"Found {len(images)} image(s)")
    images = cap_images(images, config.grid.capacity)

    given = (args.roll, args.lab, args.date, args.notes)
    if args.no_prompt or any(v is not None for v in given):
        metadata = MetadataRecord(*given)
    else:
        metadata = prompt_metadata()
    logger.debug("Footer fields: %s", metadata.fields())

    compositor = SheetCompositor(config, workers=args.workers)
    output = args.output or default_output_path(directory)
    try:
        sheet = compositor.compose(images, metadata)
        compositor.save(sheet, output)
    except ContactSheetError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    size = config.canvas_px
    print("Contact sheet created successfully!")
    print(f"File: {output}")
    print(f"Dimensions: {size}x{size} pixels "
          f"({config.sheet.size_mm:g}x{config.sheet.size_mm:g}mm @ {config.sheet.dpi} DPI)")
    if sheet.skipped:
        print(f"{len(sheet.skipped)} image(s) could not be read and were left blank")
    return 0


if __name__ == "__main__":
    sys.exit(main())
