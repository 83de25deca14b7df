"""Label renderer — template slots / line lists → PIL Image for printing."""
from __future__ import annotations
import io
import logging
import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from PIL import Image, ImageDraw

from ..errors import InvalidArgumentError, OutOfRangeLabelIndexError
from ..printer.sink import PrintSink, SimulationSink, dispatch
from .barcode_adapter import BarcodeEncoder, PythonBarcodeEncoder, place_barcode
from .fonts import FontHandle, FontRegistry, PillowTextMeasurer, TextMeasurer, default_registry, fit_font
from .label_types import (
    LabelContent, LabelPosition, LabelProperties, LineConfiguration, Margin,
    PartLabelTemplate, Point, PrinterOptions, PrinterSettings, Rect, RENDER_DPI, SLOT_NAMES,
)
from .line_merge import merge_adjacent_lines
from .stocks import resolve_label_properties
from .template import apply_case, fill_template_slots

log = logging.getLogger(__name__)

BARCODE_OFFSET_Y = 12
IDENTIFIER_MARGIN = 25


@dataclass
class LabelCanvas:
    """Raster for one render call plus the top-left start of every physical label."""
    image: Image.Image
    properties: LabelProperties
    paper_rect: Rect
    label_starts: list[Point]

    def label_index(self, label: int) -> int:
        """Zero-based index for a 1-based label number, bounds-checked."""
        if not 1 <= label <= len(self.label_starts):
            raise OutOfRangeLabelIndexError(label, self.properties.label_count)
        return label - 1

    def label_start(self, label: int) -> Point:
        return self.label_starts[self.label_index(label)]

    @property
    def slot_height(self) -> int:
        return self.paper_rect.height // self.properties.label_count


def seed_label_starts(properties: LabelProperties, paper_height: int) -> list[Point]:
    # Label i starts at top_margin + H - H // i
    return [
        Point(0, properties.top_margin + paper_height - paper_height // i)
        for i in range(1, properties.label_count + 1)
    ]


def identifier_margins(template: PartLabelTemplate) -> Margin:
    """Reserve a strip on the side the identifier is printed on."""
    identifier = template.identifier
    if not identifier.content:
        return Margin()
    if identifier.position == LabelPosition.RIGHT:
        return Margin(right=IDENTIFIER_MARGIN)
    if identifier.position == LabelPosition.LEFT:
        return Margin(left=IDENTIFIER_MARGIN)
    return Margin()


def render_to_png_bytes(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG", dpi=image.info.get("dpi", (RENDER_DPI, RENDER_DPI)))
    return buf.getvalue()


class LabelRenderer:
    """Composes label images for one printer configuration.

    Every render call works on its own image, properties and cursors; only the
    font registry is shared between calls.
    """

    def __init__(
        self,
        settings: PrinterSettings | None = None,
        registry: FontRegistry | None = None,
        measurer: TextMeasurer | None = None,
        barcode_encoder: BarcodeEncoder | None = None,
        print_sink: PrintSink | None = None,
        dpi: int = RENDER_DPI,
    ):
        self.settings = settings or PrinterSettings()
        self.registry = registry or default_registry()
        self.measurer = measurer or PillowTextMeasurer(self.registry)
        self.barcode_encoder = barcode_encoder or PythonBarcodeEncoder()
        self.print_sink = print_sink or SimulationSink(self.settings.printer_name)
        self.dpi = dpi

    # ── Entry points ───────────────────────────────────────────────────

    def render_from_template(
        self,
        content: LabelContent,
        options: PrinterOptions,
        template: PartLabelTemplate | None = None,
    ) -> Image.Image:
        """Render a part label; empty slots are filled from the part template."""
        if content is None or content.is_empty():
            raise InvalidArgumentError("content is required")
        if options is None:
            raise InvalidArgumentError("options are required")
        template = template or self.settings.part_label_template
        properties = self.resolve_properties(options)
        self._check_labels(properties, (line for _, line in template.slots()))

        margins = identifier_margins(template)
        content = self.prepare_content(content, template, properties, margins)

        canvas = self.create_canvas(properties)
        cursor = canvas.label_start(template.line1.label)
        for name in SLOT_NAMES:
            cursor = self.draw_line(canvas, cursor, getattr(content, name), getattr(template, name), margins)
        return self._finish(canvas, options)

    def render_from_lines(self, lines: Sequence[LineConfiguration], options: PrinterOptions) -> Image.Image:
        """Render free lines; each line continues below the previous line of its label."""
        if not lines:
            raise InvalidArgumentError("at least one line is required")
        if options is None:
            raise InvalidArgumentError("options are required")
        properties = self.resolve_properties(options)
        self._check_labels(properties, lines)

        canvas = self.create_canvas(properties)
        margins = Margin()
        cursors = list(canvas.label_starts)
        for line in lines:
            index = canvas.label_index(line.label)
            text = apply_case(line.content or "", line)
            cursors[index] = self.draw_line(canvas, cursors[index], text, line, margins)
        return self._finish(canvas, options)

    # ── Layout steps ───────────────────────────────────────────────────

    def resolve_properties(self, options: PrinterOptions) -> LabelProperties:
        properties = resolve_label_properties(options.label_name or self.settings.label_name)
        log.debug("Label %s: %dx%d px, %d per sheet", properties.label_name,
                  properties.dimensions.width, properties.dimensions.height, properties.label_count)
        return properties

    def prepare_content(
        self,
        content: LabelContent,
        template: PartLabelTemplate,
        properties: LabelProperties,
        margins: Margin | None = None,
    ) -> LabelContent:
        """Substitute template values, then spill over lines sharing a template."""
        if margins is None:
            margins = identifier_margins(template)
        paper_width = properties.dimensions.width
        content = fill_template_slots(content, template)
        return merge_adjacent_lines(
            template,
            content,
            paper_width,
            margins,
            lambda line, text: self.create_font(line, text, paper_width),
            self.measurer,
            self.dpi,
        )

    def create_canvas(self, properties: LabelProperties) -> LabelCanvas:
        paper_rect = Rect(0, 0, properties.dimensions.width,
                          properties.dimensions.height * properties.label_count)
        image = Image.new("RGBA", (paper_rect.width, paper_rect.height), "white")
        image.info["dpi"] = (self.dpi, self.dpi)
        return LabelCanvas(image, properties, paper_rect, seed_label_starts(properties, paper_rect.height))

    def create_font(self, line: LineConfiguration, text: str, max_width: int) -> FontHandle:
        family = self.registry.resolve(line.font_name)
        if line.auto_size:
            return fit_font(family, line.font_size, text, max_width, self.measurer, self.dpi)
        return FontHandle(family, line.font_size)

    def draw_line(
        self,
        canvas: LabelCanvas,
        cursor: Point,
        text: str | None,
        line: LineConfiguration,
        margins: Margin,
    ) -> Point:
        """Draw one line at ``cursor`` and return the cursor for the next line."""
        text = text or ""
        paper = canvas.paper_rect
        font = self.create_font(line, text, paper.width)
        bounds = self.measurer.measure(text, font, self.dpi)
        x = float(line.margin.left)
        y = cursor.y + line.margin.top

        if line.barcode:
            y += BARCODE_OFFSET_Y
            rect = Rect(0, int(y), paper.width, canvas.slot_height)
            place_barcode(canvas.image, text, rect, self.barcode_encoder)
        elif line.rotate > 0:
            # rotated lines start at the top of their own label and align
            # against the whole paper width, reserved side strips included
            y = canvas.label_start(line.label).y + line.margin.top
            block = self._rotated_text(text, font, line.rotate)
            if block is not None:
                x += self._align(line.position, block.width, canvas.properties, paper, Margin())
                canvas.image.paste(block, (int(round(x)), int(round(y))), block)
        else:
            x += self._align(line.position, bounds.width, canvas.properties, paper, margins)
            draw = ImageDraw.Draw(canvas.image)
            draw.text((x, y), text, font=self.registry.get_font(font, self.dpi), fill="black")

        return Point(0, y + bounds.height)

    def draw_debug(self, canvas: LabelCanvas) -> None:
        """Outline the sheet and mark the boundary between stacked labels."""
        paper = canvas.paper_rect
        draw = ImageDraw.Draw(canvas.image)
        draw.rectangle((0, 0, paper.width - 1, paper.height - 1), outline="lightgray", width=1)
        every_y = canvas.slot_height
        for i in range(1, canvas.properties.label_count):
            draw.line([(0, every_y * i), (paper.width, every_y * i)], fill="black", width=2)

    # ── Helpers ─────────────────────────────────────────────────────────

    @staticmethod
    def _align(position: LabelPosition, width: float, properties: LabelProperties,
               paper: Rect, margins: Margin) -> float:
        if position == LabelPosition.RIGHT:
            return (margins.left + paper.width - margins.right) - width + properties.left_margin
        if position == LabelPosition.CENTER:
            return (margins.left + paper.width - margins.right) // 2 - width / 2 + properties.left_margin
        return margins.left + properties.left_margin

    def _rotated_text(self, text: str, font: FontHandle, degrees: int) -> Image.Image | None:
        if not text:
            return None
        pil_font = self.registry.get_font(font, self.dpi)
        ascent, descent = pil_font.getmetrics()
        tile = Image.new("RGBA", (max(1, math.ceil(pil_font.getlength(text))), ascent + descent),
                         (255, 255, 255, 0))
        ImageDraw.Draw(tile).text((0, 0), text, font=pil_font, fill="black")
        # PIL rotates counter-clockwise
        return tile.rotate(-degrees, expand=True, resample=Image.BICUBIC)

    @staticmethod
    def _check_labels(properties: LabelProperties, lines: Iterable[LineConfiguration]) -> None:
        for line in lines:
            if not 1 <= line.label <= properties.label_count:
                raise OutOfRangeLabelIndexError(line.label, properties.label_count)

    def _finish(self, canvas: LabelCanvas, options: PrinterOptions) -> Image.Image:
        if options.show_diagnostic:
            self.draw_debug(canvas)
        return dispatch(canvas.image, canvas.properties, options, self.print_sink)
