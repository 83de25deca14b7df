"""
Shared fixtures: a private font registry, a barcode encoder that records its
calls and a simulation print sink.
"""

import pytest
from PIL import Image

from label_engine.printer.sink import SimulationSink
from label_engine.services.barcode_adapter import BarcodeEncoder
from label_engine.services.fonts import FontRegistry, PillowTextMeasurer
from label_engine.services.label_renderer import LabelRenderer


class RecordingEncoder(BarcodeEncoder):
    """Returns solid black bitmaps so placement is easy to check."""

    def __init__(self):
        self.calls = []

    def encode(self, payload, width, height):
        self.calls.append((payload, width, height))
        return Image.new("RGB", (width, height), "black")


@pytest.fixture
def registry():
    return FontRegistry()


@pytest.fixture
def measurer(registry):
    return PillowTextMeasurer(registry)


@pytest.fixture
def encoder():
    return RecordingEncoder()


@pytest.fixture
def sink():
    return SimulationSink()


@pytest.fixture
def renderer(registry, measurer, encoder, sink):
    return LabelRenderer(registry=registry, measurer=measurer, barcode_encoder=encoder, print_sink=sink)


@pytest.fixture
def has_ink():
    def _has_ink(image, box):
        """True when any pixel inside ``box`` is dark."""
        return image.convert("L").crop(box).getextrema()[0] < 128
    return _has_ink
