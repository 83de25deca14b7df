"""Print sinks — where a finished label image goes when it is not a preview."""
from __future__ import annotations
import logging
import uuid
from collections import deque
from abc import ABC, abstractmethod
from pathlib import Path

from PIL import Image

from ..services.label_types import LabelProperties, PrinterOptions, RENDER_DPI
from .raster import to_monochrome

log = logging.getLogger(__name__)

JOB_HISTORY = 10


class PrintSink(ABC):
    """Receives finished label images; transport and retries are its own business."""

    @abstractmethod
    def send(self, image: Image.Image, properties: LabelProperties, options: PrinterOptions) -> None: ...


class SimulationSink(PrintSink):
    """Pretends to print; keeps the most recent jobs and a count of all of them."""

    def __init__(self, printer_name: str = "simulation", history: int = JOB_HISTORY):
        self.printer_name = printer_name
        self.jobs: deque[tuple[Image.Image, LabelProperties, PrinterOptions]] = deque(maxlen=history)
        self.sent = 0

    def send(self, image, properties, options) -> None:
        self.jobs.append((image, properties, options))
        self.sent += 1
        log.info("Simulated sending %dx%d label (%s) to %s",
                 image.width, image.height, properties.label_name, self.printer_name)


class SpoolDirectorySink(PrintSink):
    """Write 1-bit PNGs into a directory watched by an external spooler."""

    def __init__(self, directory: str | Path, label_source: str = "auto"):
        self.directory = Path(directory)
        self.label_source = label_source
        self.last_path: Path | None = None

    def send(self, image, properties, options) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / f"{properties.label_name}-{self.label_source}-{uuid.uuid4().hex}.png"
        mono = to_monochrome(image)
        mono.save(path, format="PNG", dpi=mono.info.get("dpi", (RENDER_DPI, RENDER_DPI)))
        log.info("Spooled label %s to %s", properties.label_name, path)
        self.last_path = path


def dispatch(
    image: Image.Image,
    properties: LabelProperties,
    options: PrinterOptions,
    sink: PrintSink,
) -> Image.Image:
    """Send ``image`` to ``sink`` unless only a preview was requested."""
    if not options.generate_image_only:
        sink.send(image, properties, options)
    return image
