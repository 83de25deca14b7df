"""Printer service — builds the renderer and maps API schemas to label types."""
from __future__ import annotations
import base64
import logging
from functools import lru_cache

from PIL import Image

from ..config import get_config
from ..models.schemas import (
    LineConfigurationSchema, PartLabelRequest, PartLabelTemplateSchema, PrinterOptionsSchema,
)
from ..printer.sink import PrintSink, SimulationSink, SpoolDirectorySink
from .fonts import default_registry
from .label_renderer import LabelRenderer, render_to_png_bytes
from .label_types import (
    LabelContent, LabelSource, LineConfiguration, Margin, PartLabelTemplate,
    PrinterOptions, PrinterSettings,
)

log = logging.getLogger(__name__)


def build_line_configuration(schema: LineConfigurationSchema) -> LineConfiguration:
    return LineConfiguration(
        content=schema.content,
        label=schema.label,
        position=schema.position,
        margin=Margin(**schema.margin.model_dump()),
        font_name=schema.font_name,
        font_size=schema.font_size,
        auto_size=schema.auto_size,
        rotate=schema.rotate,
        barcode=schema.barcode,
        upper_case=schema.upper_case,
        lower_case=schema.lower_case,
    )


def build_template(schema: PartLabelTemplateSchema) -> PartLabelTemplate:
    return PartLabelTemplate(
        line1=build_line_configuration(schema.line1),
        line2=build_line_configuration(schema.line2),
        line3=build_line_configuration(schema.line3),
        line4=build_line_configuration(schema.line4),
        identifier=build_line_configuration(schema.identifier),
    )


def build_printer_options(schema: PrinterOptionsSchema, image_only: bool = False) -> PrinterOptions:
    return PrinterOptions(
        label_name=schema.label_name,
        show_diagnostic=schema.show_diagnostic,
        generate_image_only=image_only or schema.generate_image_only,
    )


def build_label_content(req: PartLabelRequest) -> LabelContent:
    return LabelContent(
        part=req.part,
        line1=req.line1,
        line2=req.line2,
        line3=req.line3,
        line4=req.line4,
        identifier=req.identifier,
    )


def _build_sink(config, settings: PrinterSettings) -> PrintSink:
    if config.PRINT_SINK == "spool":
        return SpoolDirectorySink(config.PRINT_SPOOL_DIR, settings.label_source.value)
    if config.PRINT_SINK != "simulation":
        log.warning("Unknown print sink %r, using simulation", config.PRINT_SINK)
    return SimulationSink(settings.printer_name)


def _label_source(value: str) -> LabelSource:
    try:
        return LabelSource(value)
    except ValueError:
        log.warning("Unknown label source %r, using %s", value, LabelSource.AUTO.value)
        return LabelSource.AUTO


@lru_cache(maxsize=1)
def get_renderer() -> LabelRenderer:
    """Renderer shared by all requests, configured from the environment."""
    config = get_config()
    settings = PrinterSettings(
        printer_name=config.PRINTER_NAME,
        label_name=config.LABEL_DEFAULT_NAME,
        label_source=_label_source(config.LABEL_SOURCE),
    )
    registry = default_registry(config.FONT_FOLDER or None)
    log.info("Label renderer for %s (default label %s)", settings.printer_name, settings.label_name)
    return LabelRenderer(settings, registry=registry, print_sink=_build_sink(config, settings))


def image_to_data_url(image: Image.Image) -> str:
    b64 = base64.b64encode(render_to_png_bytes(image)).decode()
    return f"data:image/png;base64,{b64}"
