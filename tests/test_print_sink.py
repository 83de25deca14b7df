import pytest
from PIL import Image

from label_engine.printer.raster import to_monochrome
from label_engine.printer.sink import SimulationSink, SpoolDirectorySink, dispatch
from label_engine.services.label_types import PrinterOptions
from label_engine.services.stocks import resolve_label_properties


def _label_image():
    image = Image.new("RGBA", (475, 350), "white")
    image.paste((0, 0, 0, 255), (10, 10, 60, 40))
    image.info["dpi"] = (300, 300)
    return image


def test_to_monochrome_thresholds_and_keeps_dpi():
    mono = to_monochrome(_label_image())
    assert mono.mode == "1"
    assert mono.getpixel((20, 20)) == 0
    assert mono.getpixel((200, 200)) == 255
    assert mono.info["dpi"] == (300, 300)


def test_to_monochrome_transparent_is_white():
    image = Image.new("RGBA", (4, 4), (0, 0, 0, 0))
    assert to_monochrome(image).getpixel((1, 1)) == 255


def test_spool_directory_sink_writes_png(tmp_path):
    sink = SpoolDirectorySink(tmp_path / "spool", label_source="left")
    sink.send(_label_image(), resolve_label_properties("30346"), PrinterOptions())
    assert sink.last_path.parent == tmp_path / "spool"
    assert sink.last_path.name.startswith("30346-left-")
    with Image.open(sink.last_path) as written:
        assert written.mode == "1"
        assert written.size == (475, 350)
        assert written.info["dpi"] == pytest.approx((300, 300), abs=0.01)


def test_dispatch_respects_preview_only():
    sink = SimulationSink()
    image = _label_image()
    props = resolve_label_properties("30346")
    assert dispatch(image, props, PrinterOptions(generate_image_only=True), sink) is image
    assert not sink.jobs
    dispatch(image, props, PrinterOptions(), sink)
    assert len(sink.jobs) == 1


def test_simulation_sink_keeps_bounded_history():
    sink = SimulationSink(history=3)
    image = _label_image()
    props = resolve_label_properties("30346")
    for _ in range(50):
        sink.send(image, props, PrinterOptions())
    assert sink.sent == 50
    assert len(sink.jobs) == 3
