"""Default button icons, rendered with Pillow when none are configured."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from .config import APP_NAME, ICON_PIXEL_SIZE

logger = logging.getLogger(__name__)

# name -> (background, indicator color, label)
DEFAULT_ICONS: dict[str, tuple[str, str, str]] = {
    "recording-on": ("#200000", "#FF2442", "REC"),
    "recording-off": ("#101010", "#505050", "REC"),
    "streaming-on": ("#100020", "#A040FF", "LIVE"),
    "streaming-off": ("#101010", "#505050", "LIVE"),
    "error": ("#302000", "#FFB000", "ERR"),
}


def get_icon_dir() -> Path:
    """Return the generated icon directory (XDG Base Directory compliant)."""
    xdg = os.environ.get("XDG_CACHE_HOME", "")
    base = Path(xdg) if xdg else Path.home() / ".cache"
    return base / APP_NAME / "icons"


def create_icon(background: str, indicator: str, label: str) -> Image.Image:
    """Draw a dot over a short label on a solid key-sized tile."""
    width, height = ICON_PIXEL_SIZE
    img = Image.new("RGB", ICON_PIXEL_SIZE, background)
    draw = ImageDraw.Draw(img)

    radius = width // 6
    cx, cy = width // 2, height // 3
    draw.ellipse((cx - radius, cy - radius, cx + radius, cy + radius), fill=indicator)

    font = ImageFont.load_default(size=16)
    left, top, right, bottom = draw.textbbox((0, 0), label, font=font)
    x = (width - (right - left)) // 2 - left
    y = height * 2 // 3 - (bottom - top) // 2 - top
    draw.text((x, y), label, font=font, fill="white")
    return img


def ensure_default_icons(directory: Path | None = None) -> dict[str, str]:
    """Render any missing default icons and return {name: path}.

    Existing files are left untouched so users may replace them in place.
    """
    directory = directory or get_icon_dir()
    directory.mkdir(parents=True, exist_ok=True)

    paths: dict[str, str] = {}
    for name, (background, indicator, label) in DEFAULT_ICONS.items():
        path = directory / f"{name}.png"
        if not path.exists():
            create_icon(background, indicator, label).save(path)
            logger.debug("Rendered default icon %s", path)
        paths[name] = str(path)
    return paths
