from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, NamedTuple, Sequence, Tuple

from .writer import ensure_dir


@dataclass(frozen=True)
class IconTargetSpec:
    name: str
    size: int
    output_path: str


class AndroidDensity(NamedTuple):
    name: str
    size: int
    foreground_size: int


class IosIcon(NamedTuple):
    points: float
    multipliers: Tuple[int, ...]
    has_extra: bool


DESKTOP_SIZES = (32, 128, 256, 512)

APPX_STORE_LOGO_SIZE = 50
APPX_SQUARE_SIZES = (30, 44, 71, 89, 107, 142, 150, 284, 310)

# Adaptive icons: foreground art is larger than the legacy icon so the launcher can mask it
ANDROID_DENSITIES = (
    AndroidDensity("hdpi", 49, 162),
    AndroidDensity("mdpi", 48, 108),
    AndroidDensity("xhdpi", 96, 216),
    AndroidDensity("xxhdpi", 144, 324),
    AndroidDensity("xxxhdpi", 192, 432),
)
ANDROID_FILES = ("ic_launcher_foreground.png", "ic_launcher_round.png", "ic_launcher.png")

IOS_ICONS = (
    IosIcon(20, (1, 2, 3), True),
    IosIcon(29, (1, 2, 3), True),
    IosIcon(40, (1, 2, 3), True),
    IosIcon(60, (2, 3), False),
    IosIcon(76, (1, 2), False),
    IosIcon(83.5, (2,), False),
    IosIcon(512, (2,), False),
)


def _target(root_dir: str, name: str, size: int) -> IconTargetSpec:
    return IconTargetSpec(name=name, size=size, output_path=os.path.join(root_dir, name))


def desktop_file_name(size: int) -> str:
    if size == 256:
        return "128x128@2x.png"
    if size == 512:
        return "icon.png"
    return f"{size}x{size}.png"


def desktop_targets(root_dir: str) -> List[IconTargetSpec]:
    return [_target(root_dir, desktop_file_name(size), size) for size in DESKTOP_SIZES]


def appx_targets(root_dir: str) -> List[IconTargetSpec]:
    targets = [_target(root_dir, "StoreLogo.png", APPX_STORE_LOGO_SIZE)]
    for size in APPX_SQUARE_SIZES:
        targets.append(_target(root_dir, f"Square{size}x{size}Logo.png", size))
    return targets


def android_targets(root_dir: str) -> List[IconTargetSpec]:
    """Three launcher files per density bucket, each bucket in its own mipmap dir."""
    targets: List[IconTargetSpec] = []
    for density in ANDROID_DENSITIES:
        folder = f"mipmap-{density.name}"
        out_folder = os.path.join(root_dir, folder)
        ensure_dir(out_folder, what="Android mipmap output directory")
        for file_name in ANDROID_FILES:
            size = density.foreground_size if file_name == "ic_launcher_foreground.png" else density.size
            targets.append(IconTargetSpec(
                name=f"{folder}/{file_name}",
                size=size,
                output_path=os.path.join(out_folder, file_name),
            ))
    return targets


def ios_pixel_size(points: float, multiplier: int) -> int:
    # Truncates: 83.5pt @2x is 167px
    return int(points * multiplier)


def _ios_size_label(points: float) -> str:
    if points == 512:
        return "512"
    label = f"{points:g}"
    return f"{label}x{label}"


def ios_targets(root_dir: str) -> List[IconTargetSpec]:
    targets: List[IconTargetSpec] = []
    for icon in IOS_ICONS:
        label = _ios_size_label(icon.points)
        if icon.has_extra:
            targets.append(_target(root_dir, f"AppIcon-{label}@2x-1.png", ios_pixel_size(icon.points, 2)))
        for multiplier in icon.multipliers:
            targets.append(_target(
                root_dir, f"AppIcon-{label}@{multiplier}x.png", ios_pixel_size(icon.points, multiplier)
            ))
    return targets


def custom_targets(root_dir: str, sizes: Sequence[int]) -> List[IconTargetSpec]:
    return [_target(root_dir, f"{size}x{size}.png", size) for size in sizes]
