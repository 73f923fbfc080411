from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, TypeVar

from .catalogs import (
    IconTargetSpec,
    android_targets,
    appx_targets,
    custom_targets,
    desktop_targets,
    ios_targets,
)
from .composite import over_background
from .errors import ConfigLookupError, IconError
from .icns import encode_icns
from .ico import encode_ico, ico_frames
from .loader import load_source
from .utils import CanonicalImage, RGBA, parse_color
from .writer import android_output_dir, ensure_dir, ios_output_dir, save_png, write_bytes

log = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_INPUT = "./app-icon.png"
DEFAULT_OUTPUT = "icons"
DEFAULT_IOS_COLOR = "#fff"


@dataclass
class IconOptions:
    input: str = DEFAULT_INPUT
    output: Optional[str] = None
    png_sizes: Optional[List[int]] = None
    ios_color: str = DEFAULT_IOS_COLOR
    android_app_name: Optional[str] = None

    @property
    def out_dir(self) -> str:
        return self.output or DEFAULT_OUTPUT

    @property
    def custom_mode(self) -> bool:
        return bool(self.png_sizes)

    def validate(self) -> RGBA:
        """Check PNG sizes and parse the iOS colour; returns the parsed colour."""
        for size in self.png_sizes or []:
            if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
                raise ConfigLookupError(f"PNG icon sizes must be positive integers, got {size!r}")
        return parse_color(self.ios_color)


def _stage(stage: str, fn: Callable[..., T], *args) -> T:
    try:
        return fn(*args)
    except IconError as e:
        if e.stage is None:
            e.stage = stage
        raise


def _write_targets(source: CanonicalImage, targets: Sequence[IconTargetSpec], action: str) -> List[str]:
    written = []
    for target in targets:
        log.info("%s: Creating %s", action, target.name)
        written.append(save_png(source, target.size, target.output_path))
    return written


def appx(source: CanonicalImage, out_dir: str) -> List[str]:
    return _write_targets(source, appx_targets(out_dir), "Appx")


def icns(source: CanonicalImage, out_dir: str) -> List[str]:
    log.info("ICNS: Creating icon.icns")
    return [write_bytes(os.path.join(out_dir, "icon.icns"), encode_icns(source))]


def ico(source: CanonicalImage, out_dir: str) -> List[str]:
    log.info("ICO: Creating icon.ico")
    return [write_bytes(os.path.join(out_dir, "icon.ico"), encode_ico(ico_frames(source)))]


def png(source: CanonicalImage, out_dir: str, ios_color: RGBA, android_app_name: Optional[str] = None) -> List[str]:
    """Desktop and Android PNGs keep transparency, iOS icons get an opaque background."""
    targets = desktop_targets(out_dir)
    targets.extend(android_targets(android_output_dir(out_dir, android_app_name)))
    ios_dir = ios_output_dir(out_dir)

    written = _write_targets(source, targets, "PNG")
    written.extend(_write_targets(over_background(source, ios_color), ios_targets(ios_dir), "iOS"))
    return written


def custom_png(source: CanonicalImage, out_dir: str, sizes: Sequence[int]) -> List[str]:
    return _write_targets(source, custom_targets(out_dir, sizes), "PNG")


def generate(options: IconOptions) -> List[str]:
    """Run a full or custom-size icon generation; returns the written paths."""
    ios_color = _stage("parse options", options.validate)
    # Nothing is written until the source has been decoded and checked
    source = _stage("read source image", load_source, options.input)
    out_dir = _stage("create output directory", ensure_dir, options.out_dir)

    if options.custom_mode:
        return _stage("generate png icons", custom_png, source, out_dir, options.png_sizes)

    written: List[str] = []
    written += _stage("generate appx icons", appx, source, out_dir)
    written += _stage("generate .icns file", icns, source, out_dir)
    written += _stage("generate .ico file", ico, source, out_dir)
    written += _stage("generate png icons", png, source, out_dir, ios_color, options.android_app_name)
    log.info("Generated %d icon files in %s", len(written), out_dir)
    return written
