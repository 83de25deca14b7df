import pytest
from PIL import Image

from label_engine.errors import BarcodeEncodingError
from label_engine.services.barcode_adapter import BARCODE_HEIGHT, PythonBarcodeEncoder, place_barcode
from label_engine.services.label_types import Rect


def test_code128_bitmap_is_scaled_to_target(has_ink):
    bitmap = PythonBarcodeEncoder().encode("PART-001", 475, BARCODE_HEIGHT)
    assert bitmap.size == (475, BARCODE_HEIGHT)
    assert has_ink(bitmap, (0, 0, 475, BARCODE_HEIGHT))


def test_encoding_failure_is_wrapped():
    with pytest.raises(BarcodeEncodingError) as excinfo:
        PythonBarcodeEncoder("ean13").encode("PART-001", 475, BARCODE_HEIGHT)
    assert excinfo.value.__cause__ is not None


def test_place_barcode_blits_at_rect_origin(encoder):
    image = Image.new("RGBA", (475, 350), "white")
    image.info.pop("dpi", None)
    place_barcode(image, "PART-001", Rect(40, 187, 475, 175), encoder)
    assert encoder.calls == [("PART-001", 475, BARCODE_HEIGHT)]
    # always drawn from the left edge
    assert image.getpixel((0, 187)) == (0, 0, 0, 255)
    assert image.getpixel((0, 187 + BARCODE_HEIGHT - 1)) == (0, 0, 0, 255)
    assert image.getpixel((0, 186)) == (255, 255, 255, 255)
    assert image.getpixel((0, 187 + BARCODE_HEIGHT)) == (255, 255, 255, 255)
    assert image.info["dpi"] == (300, 300)


def test_empty_payload_is_an_encoding_error():
    with pytest.raises(BarcodeEncodingError):
        PythonBarcodeEncoder().encode("", 475, BARCODE_HEIGHT)
