from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from iconsmith.errors import IconError
from iconsmith.generate import DEFAULT_INPUT, DEFAULT_IOS_COLOR, IconOptions, generate

log = logging.getLogger("iconsmith")


def _png_sizes(value: str) -> List[int]:
    sizes = []
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            size = int(part)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid PNG size {part!r}")
        if size <= 0:
            raise argparse.ArgumentTypeError(f"PNG size must be positive, got {size}")
        sizes.append(size)
    return sizes


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="iconsmith",
        description="Generates various icons for all major platforms",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default=DEFAULT_INPUT,
        help="Path to the source icon (png, 1240x1240px with transparency). Default: %(default)s",
    )
    parser.add_argument(
        "-o", "--output",
        help="Output directory. Default: 'icons' in the current directory",
    )
    parser.add_argument(
        "-p", "--png",
        type=_png_sizes,
        action="append",
        help="Custom PNG icon sizes, comma separated. When set, the default icons are not generated.",
    )
    parser.add_argument(
        "--ios-color",
        default=DEFAULT_IOS_COLOR,
        help="Background color of the iOS icon, as a CSS color string. Default: %(default)s",
    )
    parser.add_argument(
        "--android-app-name",
        help="App name of a generated Android project (gen/android/<name>) to write icons into",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every written file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    png_sizes = [size for group in args.png for size in group] if args.png else None
    options = IconOptions(
        input=args.input,
        output=args.output,
        png_sizes=png_sizes,
        ios_color=args.ios_color,
        android_app_name=args.android_app_name,
    )
    try:
        generate(options)
    except IconError as e:
        log.error("Failed to %s: %s", e.stage or "generate icons", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
