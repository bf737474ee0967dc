from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from PIL import ImageFont


DEFAULT_FONT_FAMILY = "Comic Mono"
# tried in order after the requested family
MONO_FONT_FALLBACK_PATTERNS = (
    "comicmono",
    "menlo",
    "monaco",
    "couriernew",
    "courier",
    "dejavusansmono",
)
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)
FONT_SUFFIXES = (".ttf", ".otf", ".ttc")

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont


def text_size(text: str, *, font_family: str = DEFAULT_FONT_FAMILY, font_size_px: float = 16.0) -> tuple[int, int]:
    font = _font_for(font_family, max(1, int(round(font_size_px))))
    if not text:
        ascent, descent = font.getmetrics()
        return (0, max(1, int(ascent + descent)))
    left, top, right, bottom = font.getbbox(text)
    return (max(0, int(right - left)), max(1, int(bottom - top)))


@lru_cache(maxsize=64)
def _font_for(font_family: str, size: int) -> Font:
    path = _match_font(font_family.strip() or DEFAULT_FONT_FAMILY)
    if path is not None:
        try:
            return ImageFont.truetype(str(path), size=size)
        except OSError:
            pass
    return ImageFont.load_default()


@lru_cache(maxsize=16)
def _match_font(font_family: str) -> Path | None:
    installed = _installed_fonts()
    for pattern in (_squash(font_family), *MONO_FONT_FALLBACK_PATTERNS):
        for key, path in installed:
            if pattern in key:
                return path
    return None


@lru_cache(maxsize=1)
def _installed_fonts() -> tuple[tuple[str, Path], ...]:
    found: list[tuple[str, Path]] = []
    for base in FONT_DIRS:
        if not base.is_dir():
            continue
        for path in sorted(base.rglob("*")):
            if path.suffix.lower() in FONT_SUFFIXES:
                found.append((_squash(path.name), path))
    return tuple(found)


def _squash(name: str) -> str:
    return name.lower().replace(" ", "")
