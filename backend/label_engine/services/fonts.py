"""Font registry, text measurement and auto-fit sizing."""
from __future__ import annotations
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from PIL import ImageFont

from .label_types import POINTS_PER_INCH, RENDER_DPI

log = logging.getLogger(__name__)

# Pillow ships this family with its FreeType build
DEFAULT_FONT_NAME = "Aileron"
FONT_SUFFIXES = (".ttf", ".otf", ".ttc")
_PREFERRED_STYLES = ("regular", "book", "roman", "normal")

MIN_FONT_SIZE = 1.0
AUTOSIZE_STEP = 0.5


def _font_key(name: str) -> str:
    return " ".join(name.strip().lower().split())


@dataclass(frozen=True)
class FontFamily:
    name: str
    path: str | None = None     # None = Pillow's bundled default font

    def load(self, pixel_size: int) -> ImageFont.FreeTypeFont:
        if self.path is None:
            return ImageFont.load_default(size=pixel_size)
        return ImageFont.truetype(self.path, pixel_size)


@dataclass(frozen=True)
class FontHandle:
    family: FontFamily
    size: float     # points

    def pixel_size(self, dpi: int = RENDER_DPI) -> int:
        return max(1, round(self.size * dpi / POINTS_PER_INCH))


@dataclass(frozen=True)
class TextSize:
    width: float
    height: float


class FontRegistry:
    """Process-wide font families, populated once on first use.

    The default family is always present. Font files found in ``font_folder``
    are registered under their family name.
    """

    def __init__(self, font_folder: str | None = None):
        self._font_folder = font_folder
        self._lock = threading.Lock()
        self._families: dict[str, FontFamily] | None = None
        self._default: FontFamily | None = None
        self._fonts: dict[tuple[FontFamily, int], ImageFont.FreeTypeFont] = {}

    def _ensure_loaded(self) -> dict[str, FontFamily]:
        families = self._families
        if families is not None:
            return families
        with self._lock:
            if self._families is None:
                default = FontFamily(DEFAULT_FONT_NAME)
                families = {_font_key(default.name): default}
                for key, family in self._scan_font_folder().items():
                    families.setdefault(key, family)
                log.debug("Font registry ready: %s", ", ".join(f.name for f in families.values()))
                self._default = default
                self._families = families
            return self._families

    def _scan_font_folder(self) -> dict[str, FontFamily]:
        found: dict[str, FontFamily] = {}
        if not self._font_folder:
            return found
        folder = Path(self._font_folder)
        if not folder.is_dir():
            log.warning("Font folder %s does not exist", folder)
            return found
        for path in sorted(folder.iterdir()):
            if path.suffix.lower() not in FONT_SUFFIXES:
                continue
            try:
                family_name, style = ImageFont.truetype(str(path), 12).getname()
            except (OSError, ValueError) as e:
                log.warning("Skipping unreadable font %s: %s", path.name, e)
                continue
            if not family_name:
                continue
            key = _font_key(family_name)
            if key not in found or (style or "").lower() in _PREFERRED_STYLES:
                found[key] = FontFamily(family_name, str(path))
        return found

    def install_default(self) -> FontFamily:
        self._ensure_loaded()
        return self._default

    def try_find(self, name: str) -> FontFamily | None:
        return self._ensure_loaded().get(_font_key(name))

    def resolve(self, name: str | None) -> FontFamily:
        """Return the family registered as ``name``, or the default family."""
        family = self.try_find(name) if name else None
        if family is None:
            if name:
                log.debug("Font %r not installed, falling back to %s", name, DEFAULT_FONT_NAME)
            family = self.install_default()
        return family

    def family_names(self) -> list[str]:
        return sorted(f.name for f in self._ensure_loaded().values())

    def get_font(self, font: FontHandle, dpi: int = RENDER_DPI) -> ImageFont.FreeTypeFont:
        key = (font.family, font.pixel_size(dpi))
        cached = self._fonts.get(key)
        if cached is not None:
            return cached
        with self._lock:
            cached = self._fonts.get(key)
            if cached is None:
                cached = font.family.load(key[1])
                self._fonts[key] = cached
            return cached


class TextMeasurer(ABC):
    @abstractmethod
    def measure(self, text: str, font: FontHandle, dpi: int = RENDER_DPI) -> TextSize: ...


class PillowTextMeasurer(TextMeasurer):
    """Advance width and line height of ``text`` as Pillow lays it out."""

    def __init__(self, registry: FontRegistry):
        self._registry = registry

    def measure(self, text: str, font: FontHandle, dpi: int = RENDER_DPI) -> TextSize:
        if not text:
            return TextSize(0, 0)
        pil_font = self._registry.get_font(font, dpi)
        ascent, descent = pil_font.getmetrics()
        return TextSize(pil_font.getlength(text), ascent + descent)


def fit_font(
    family: FontFamily,
    starting_size: float,
    text: str,
    max_width: float,
    measurer: TextMeasurer,
    dpi: int = RENDER_DPI,
) -> FontHandle:
    """Shrink from ``starting_size`` in half-point steps until ``text`` fits ``max_width``.

    Never grows past the starting size; stops at MIN_FONT_SIZE.
    """
    size = starting_size
    while size > MIN_FONT_SIZE:
        if measurer.measure(text, FontHandle(family, size), dpi).width <= max_width:
            break
        size = max(size - AUTOSIZE_STEP, MIN_FONT_SIZE)
    if size != starting_size:
        log.debug("Auto-sized %r from %.1fpt to %.1fpt", text, starting_size, size)
    return FontHandle(family, size)


_DEFAULT_REGISTRY: FontRegistry | None = None
_DEFAULT_REGISTRY_LOCK = threading.Lock()


def default_registry(font_folder: str | None = None) -> FontRegistry:
    """Shared registry for the service; ``font_folder`` only applies on first call."""
    global _DEFAULT_REGISTRY
    with _DEFAULT_REGISTRY_LOCK:
        if _DEFAULT_REGISTRY is None:
            _DEFAULT_REGISTRY = FontRegistry(font_folder)
        return _DEFAULT_REGISTRY
