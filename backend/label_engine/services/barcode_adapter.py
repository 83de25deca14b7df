"""Barcode bitmaps (python-barcode) and their placement on the label image."""
from __future__ import annotations
import io
import logging
from abc import ABC, abstractmethod

import barcode as python_barcode
from barcode.errors import BarcodeError
from barcode.writer import ImageWriter
from PIL import Image

from ..errors import BarcodeEncodingError
from .label_types import RENDER_DPI, Rect

log = logging.getLogger(__name__)

BARCODE_HEIGHT = 25


class BarcodeEncoder(ABC):
    @abstractmethod
    def encode(self, payload: str, width: int, height: int) -> Image.Image: ...


class PythonBarcodeEncoder(BarcodeEncoder):
    """Render ``payload`` with python-barcode and scale it to the target box."""

    def __init__(self, symbology: str = "code128"):
        self.symbology = symbology

    def encode(self, payload: str, width: int, height: int) -> Image.Image:
        if not payload:
            raise BarcodeEncodingError(f"Cannot encode an empty payload as {self.symbology}")
        bc_class = python_barcode.get_barcode_class(self.symbology)
        buf = io.BytesIO()
        try:
            bc = bc_class(payload, writer=ImageWriter())
            bc.write(buf, options={"module_height": 5.0, "quiet_zone": 1, "write_text": False})
        except (BarcodeError, IndexError, KeyError, ValueError) as e:
            raise BarcodeEncodingError(
                f"Cannot encode {payload!r} as {self.symbology}: {e}"
            ) from e
        buf.seek(0)
        img = Image.open(buf).convert("RGB")
        return img.resize((max(width, 1), max(height, 1)), Image.NEAREST)


def place_barcode(image: Image.Image, payload: str, rect: Rect, encoder: BarcodeEncoder) -> None:
    """Blit the barcode for ``payload`` at the left edge of ``rect``."""
    bitmap = encoder.encode(payload, rect.width, BARCODE_HEIGHT)
    log.debug("Placing %dx%d barcode for %r at y=%d", bitmap.width, bitmap.height, payload, rect.y)
    image.paste(bitmap, (0, rect.y))
    # paste() leaves the DPI tag to the caller
    image.info["dpi"] = (RENDER_DPI, RENDER_DPI)
