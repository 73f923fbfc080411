from __future__ import annotations

import logging
import os
from typing import Optional, Tuple

from .errors import DirectoryCreationError, WriteError
from .png import encode_image
from .resample import resize
from .utils import CanonicalImage

log = logging.getLogger(__name__)

WRITE_BUFFER_SIZE = 64 * 1024


def choose_output_dir(preferred: str, fallback: str) -> Tuple[str, bool]:
    """Pick the generated native project dir when it exists, else the fallback.

    Returns the chosen directory and whether it was the preferred one.
    """
    if os.path.isdir(preferred):
        return preferred, True
    return fallback, False


def ensure_dir(path: str, what: str = "output directory") -> str:
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise DirectoryCreationError(f"Can't create {what} {path!r}: {e}") from e
    return path


def _gen_dir(out_dir: str) -> str:
    # Generated native projects live next to the icons directory
    return os.path.join(os.path.dirname(os.path.abspath(out_dir)), "gen")


def android_project_res_dir(out_dir: str, app_name: Optional[str] = None) -> str:
    parts = ["android", app_name] if app_name else ["android"]
    return os.path.join(_gen_dir(out_dir), *parts, "app", "src", "main", "res")


def ios_project_icon_dir(out_dir: str) -> str:
    return os.path.join(_gen_dir(out_dir), "apple", "Assets.xcassets", "AppIcon.appiconset")


def _resolve(preferred: str, fallback: str, what: str) -> str:
    path, used_preferred = choose_output_dir(preferred, fallback)
    if used_preferred:
        log.debug("Using generated project %s at %s", what, path)
        return path
    log.debug("No generated project %s, writing to %s", what, path)
    return ensure_dir(path, what=f"{what} output directory")


def android_output_dir(out_dir: str, app_name: Optional[str] = None) -> str:
    return _resolve(android_project_res_dir(out_dir, app_name), os.path.join(out_dir, "android"), "Android")


def ios_output_dir(out_dir: str) -> str:
    return _resolve(ios_project_icon_dir(out_dir), os.path.join(out_dir, "ios"), "iOS")


def write_bytes(path: str, data: bytes) -> str:
    """Buffered write, flushed and synced before the handle is closed."""
    try:
        with open(path, "wb", buffering=WRITE_BUFFER_SIZE) as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
    except OSError as e:
        raise WriteError(f"Can't write {path!r}: {e}") from e
    log.debug("Wrote %s (%d bytes)", path, len(data))
    return path


def save_png(source: CanonicalImage, size: int, path: str) -> str:
    return write_bytes(path, encode_image(resize(source, size)))
